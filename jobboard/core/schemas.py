"""Core Pydantic models for data exchanged with the job-board backend.

This module defines the models used throughout the application for:
1. Parsing backend responses into typed objects
2. The ephemeral filter criteria of the jobs page

The backend speaks camelCase JSON with Mongo-style ``_id`` identifiers. The
models expose snake_case attributes and keep the wire names as aliases, so
``Job.model_validate(payload)`` accepts backend JSON directly and
``job.model_dump(by_alias=True)`` produces it again.

Example:
    ```python
    from jobboard.core.schemas import Job

    job = Job.model_validate({"_id": "1", "title": "Engineer",
                              "companyName": "Acme", "location": "Delhi"})
    job.company_name  # "Acme"
    ```
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

ALL = "All"


class HiringMultiple(str, Enum):
    """Whether a posting hires more than one candidate."""
    YES = "Yes"
    NO = "No"


class UserRole(str, Enum):
    """Account roles known to the backend.

    Attributes:
        JOB_SEEKER: Browses jobs and applies
        EMPLOYER: Posts and manages jobs
    """
    JOB_SEEKER = "Job Seeker"
    EMPLOYER = "Employer"


class WireModel(BaseModel):
    """Base for models that mirror backend JSON."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Job(WireModel):
    """A job posting as returned by the backend.

    Attributes:
        id: Backend identifier (``_id`` on the wire)
        title: Job title
        company_name: Hiring company
        location: City of the position
        salary: Compensation as provided by the employer
        job_posted_on: When the posting was created
        hiring_multiple_candidates: "Yes" or "No"
    """
    id: Optional[str] = Field(None, alias="_id")
    title: str
    company_name: str = Field(..., alias="companyName")
    location: str
    salary: Optional[Union[str, int, float]] = None
    job_posted_on: Optional[datetime] = Field(None, alias="jobPostedOn")
    hiring_multiple_candidates: Optional[HiringMultiple] = Field(
        None, alias="hiringMultipleCandidates"
    )
    job_type: Optional[str] = Field(None, alias="jobType")
    job_niche: Optional[str] = Field(None, alias="jobNiche")
    introduction: Optional[str] = None
    responsibilities: Optional[str] = None
    qualifications: Optional[str] = None
    offers: Optional[str] = None
    personal_website: Optional[dict] = Field(None, alias="personalWebsite")
    posted_by: Optional[str] = Field(None, alias="postedBy")


class Niches(WireModel):
    first_niche: Optional[str] = Field(None, alias="firstNiche")
    second_niche: Optional[str] = Field(None, alias="secondNiche")
    third_niche: Optional[str] = Field(None, alias="thirdNiche")


class User(WireModel):
    """An authenticated account. Every field is optional; the backend owns the shape."""
    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Optional[UserRole] = None
    niches: Optional[Niches] = None
    cover_letter: Optional[str] = Field(None, alias="coverLetter")
    resume: Optional[dict] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class FilterCriteria(BaseModel):
    """Ephemeral filters of the jobs page.

    Each dimension is independently optional. ``"All"`` means "no filter on
    this dimension", exactly like an empty value.
    """
    city: Optional[str] = None
    niche: Optional[str] = None
    search_keyword: Optional[str] = None

    def query_params(self) -> List[Tuple[str, str]]:
        """Return the active filters as (name, value) pairs in wire order.

        Returns:
            Pairs for searchKeyword (trimmed), city and niche, skipping any
            dimension that is empty, whitespace-only or the "All" sentinel
        """
        params = []
        if not _is_blank(self.search_keyword):
            params.append(("searchKeyword", self.search_keyword.strip()))
        if not _is_blank(self.city) and self.city.strip() != ALL:
            params.append(("city", self.city))
        if not _is_blank(self.niche) and self.niche.strip() != ALL:
            params.append(("niche", self.niche))
        return params

    @property
    def is_empty(self) -> bool:
        return not self.query_params()

