"""Shared fixtures for the client-side tests."""
import httpx
import pytest

from jobboard.app.main import create_app
from jobboard.core.api_client import ApiClient
from jobboard.core.config import ClientConfig
from jobboard.core.monitoring import setup_monitoring
from jobboard.core.state import create_store

TEST_BASE_URL = "http://testserver"

SAMPLE_JOB = {
    "_id": "665f1c2a9b1e8a0012345678",
    "title": "Backend Engineer",
    "companyName": "Acme",
    "location": "Pune",
    "salary": "12 LPA",
    "jobPostedOn": "2024-06-04T10:15:00.000Z",
    "hiringMultipleCandidates": "Yes",
    "jobType": "Full-time",
    "jobNiche": "DevOps",
}

EMPLOYER = {
    "name": "Asha Employer",
    "email": "asha@example.com",
    "phone": "9876543210",
    "address": "Pune",
    "password": "supersecret",
    "role": "Employer",
}

JOB_SEEKER = {
    "name": "Ravi Seeker",
    "email": "ravi@example.com",
    "phone": "9123456780",
    "address": "Delhi",
    "password": "anothersecret",
    "role": "Job Seeker",
    "firstNiche": "DevOps",
    "secondNiche": "Data Science",
    "thirdNiche": "Cloud Computing",
}

NEW_JOB = {
    "title": "Site Reliability Engineer",
    "jobType": "Full-time",
    "location": "Pune",
    "companyName": "Acme",
    "introduction": "Keep production healthy",
    "responsibilities": "On-call, automation",
    "qualifications": "Linux, Kubernetes",
    "salary": "20 LPA",
    "jobNiche": "DevOps",
}


@pytest.fixture(autouse=True)
def reset_monitoring():
    """Start every test with zeroed operation counters."""
    for name in ('jobs', 'users', 'profile'):
        setup_monitoring(name).reset()
    yield


@pytest.fixture
def store():
    """Fresh resource store."""
    return create_store()


@pytest.fixture
def make_client():
    """Build an ApiClient whose requests are answered by ``handler``."""
    def _make(handler, **config):
        return ApiClient(
            ClientConfig(base_url=TEST_BASE_URL, **config),
            transport=httpx.MockTransport(handler),
        )
    return _make


@pytest.fixture
def backend_client():
    """Build an ApiClient wired to a fresh in-memory development backend."""
    def _make(app=None):
        return ApiClient(
            ClientConfig(base_url=TEST_BASE_URL),
            transport=httpx.ASGITransport(app=app or create_app()),
        )
    return _make


@pytest.fixture
def sample_job():
    return dict(SAMPLE_JOB)


@pytest.fixture
def employer():
    return dict(EMPLOYER)


@pytest.fixture
def job_seeker():
    return dict(JOB_SEEKER)


@pytest.fixture
def new_job():
    return dict(NEW_JOB)
