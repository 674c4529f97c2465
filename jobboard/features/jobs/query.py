"""Job listing URL construction."""
from typing import Optional
from urllib.parse import quote

from jobboard.core.schemas import FilterCriteria

JOB_API = "/api/v1/job"
LISTING_PATH = f"{JOB_API}/getall"

# Characters encodeURIComponent leaves alone besides the unreserved set.
_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_SAFE)


def build_query_string(criteria: FilterCriteria) -> str:
    """Join the active filters as ``name=value`` pairs separated by ``&``."""
    return "&".join(
        f"{name}={encode_component(value)}" for name, value in criteria.query_params()
    )


def build_job_query(
    city: Optional[str] = None,
    niche: Optional[str] = None,
    search_keyword: Optional[str] = None,
) -> str:
    """Build the job listing path for a set of filters.

    Args:
        city: City filter; blank or "All" means unfiltered
        niche: Niche filter; blank or "All" means unfiltered
        search_keyword: Free-text keyword; trimmed, blank means unfiltered

    Returns:
        ``/api/v1/job/getall`` with a query string only when a filter is active
    """
    criteria = FilterCriteria(city=city, niche=niche, search_keyword=search_keyword)
    query = build_query_string(criteria)
    return f"{LISTING_PATH}?{query}" if query else LISTING_PATH
