"""Job-related request models."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from jobboard.core.schemas import HiringMultiple


class JobCreate(BaseModel):
    """Body of POST /api/v1/job/post."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    job_type: str = Field(..., alias="jobType")
    location: str
    company_name: str = Field(..., alias="companyName")
    introduction: Optional[str] = None
    responsibilities: str
    qualifications: str
    offers: Optional[str] = None
    salary: str
    hiring_multiple_candidates: HiringMultiple = Field(
        HiringMultiple.NO, alias="hiringMultipleCandidates"
    )
    personal_website_title: Optional[str] = Field(None, alias="personalWebsiteTitle")
    personal_website_url: Optional[str] = Field(None, alias="personalWebsiteUrl")
    job_niche: str = Field(..., alias="jobNiche")
