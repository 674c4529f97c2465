"""Orchestrated job actions.

Each action drives one resource of the store through request -> success or
failure. Actions never raise: failures end up in the resource's ``error``.

Resources used:
    jobs        job listing (``fetch_jobs``)
    single_job  job details (``fetch_single_job``)
    my_jobs     the employer's own postings (``get_my_jobs``)
    job_action  confirmation messages of ``post_job`` and ``delete_job``
"""
from typing import Any, Dict, List, Optional

from jobboard.core.api_client import ApiClient
from jobboard.core.errors import BackendUnavailableError, InvalidResponseError
from jobboard.core.logging import setup_logging
from jobboard.core.monitoring import setup_monitoring
from jobboard.core.orchestrator import run_action
from jobboard.core.schemas import Job
from jobboard.core.state import (
    JOB_ACTION,
    JOBS,
    MY_JOBS,
    SINGLE_JOB,
    ResourceSnapshot,
    ResourceStore,
)
from jobboard.features.jobs.query import JOB_API, build_job_query

logger = setup_logging('job_actions')
monitoring = setup_monitoring('jobs')


def parse_jobs(items: Any) -> List[Job]:
    if not isinstance(items, list):
        raise InvalidResponseError("Expected a list of jobs")
    return [Job.model_validate(item) for item in items]


def _require(payload: Dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise InvalidResponseError(f"Response is missing '{key}'")
    return payload[key]


async def fetch_jobs(
    store: ResourceStore,
    client: ApiClient,
    city: Optional[str] = None,
    niche: Optional[str] = None,
    search_keyword: str = "",
    fence: bool = True,
    probe: bool = True,
) -> ResourceSnapshot:
    """Fetch the job listing matching the given filters.

    Args:
        store: Resource store holding the ``jobs`` resource
        client: Shared API client
        city: City filter ("All" or blank for none)
        niche: Niche filter ("All" or blank for none)
        search_keyword: Free-text search, trimmed
        fence: Keep only the result of the most recently issued fetch
        probe: Check /health first so an unreachable backend fails fast

    Returns:
        The ``jobs`` snapshot after the fetch settled
    """
    url = build_job_query(city, niche, search_keyword)

    async def call():
        if probe and not await client.health():
            raise BackendUnavailableError(
                "Backend server is not responding. Please check if the server "
                "is running on the correct port."
            )
        logger.info(f"Fetching jobs from: {url}")
        return await client.get(url)

    return await run_action(
        store.resource(JOBS),
        call,
        operation='fetch_jobs',
        fallback="Failed to fetch jobs",
        monitoring=monitoring,
        # A 2xx answer without a jobs field is an empty listing.
        parse=lambda payload: parse_jobs(payload.get("jobs") or []),
        fence=fence,
    )


async def fetch_single_job(store: ResourceStore, client: ApiClient, job_id: str) -> ResourceSnapshot:
    """Fetch one job's details into ``single_job``."""
    return await run_action(
        store.resource(SINGLE_JOB),
        lambda: client.get(f"{JOB_API}/get/{job_id}"),
        operation='fetch_single_job',
        fallback="Failed to fetch job details",
        monitoring=monitoring,
        parse=lambda payload: Job.model_validate(_require(payload, "job")),
    )


async def post_job(
    store: ResourceStore,
    client: ApiClient,
    data: Dict[str, Any],
    files: Optional[Dict[str, Any]] = None,
) -> ResourceSnapshot:
    """Create a job posting; the confirmation lands in ``job_action.message``.

    Args:
        store: Resource store
        client: Shared API client
        data: Job fields in wire (camelCase) form
        files: Optional attachments; switches the body to multipart
    """
    body = {"data": data, "files": files} if files else {"json": data}

    return await run_action(
        store.resource(JOB_ACTION),
        lambda: client.post(f"{JOB_API}/post", **body),
        operation='post_job',
        fallback="Failed to post job",
        monitoring=monitoring,
        parse=lambda payload: _require(payload, "message"),
    )


async def get_my_jobs(store: ResourceStore, client: ApiClient) -> ResourceSnapshot:
    """Fetch the postings owned by the logged-in employer into ``my_jobs``."""
    return await run_action(
        store.resource(MY_JOBS),
        lambda: client.get(f"{JOB_API}/getmyjobs"),
        operation='get_my_jobs',
        fallback="Failed to fetch your jobs",
        monitoring=monitoring,
        parse=lambda payload: parse_jobs(_require(payload, "myJobs")),
    )


async def delete_job(store: ResourceStore, client: ApiClient, job_id: str) -> ResourceSnapshot:
    """Delete a posting; the confirmation lands in ``job_action.message``."""
    return await run_action(
        store.resource(JOB_ACTION),
        lambda: client.delete(f"{JOB_API}/delete/{job_id}"),
        operation='delete_job',
        fallback="Failed to delete job",
        monitoring=monitoring,
        parse=lambda payload: _require(payload, "message"),
    )


def clear_job_errors(store: ResourceStore) -> None:
    for name in (JOBS, SINGLE_JOB, MY_JOBS, JOB_ACTION):
        store.resource(name).clear_errors()


def reset_job_state(store: ResourceStore) -> None:
    """Return job details and pending confirmations to their blank state.

    The listing and the employer's postings are kept so navigating back does
    not flash an empty page.
    """
    store.resource(SINGLE_JOB).reset()
    store.resource(JOB_ACTION).reset()
