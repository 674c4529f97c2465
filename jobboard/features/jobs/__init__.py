"""Jobs feature package."""

from .actions import (
    clear_job_errors,
    delete_job,
    fetch_jobs,
    fetch_single_job,
    get_my_jobs,
    post_job,
    reset_job_state,
)
from .page import JobsPage, Notifier
from .query import build_job_query

__all__ = [
    'clear_job_errors',
    'delete_job',
    'fetch_jobs',
    'fetch_single_job',
    'get_my_jobs',
    'post_job',
    'reset_job_state',
    'JobsPage',
    'Notifier',
    'build_job_query',
]
