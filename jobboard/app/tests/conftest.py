"""Test configuration and fixtures."""
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from jobboard.app.database import InMemoryDatabase
from jobboard.app.main import create_app
from jobboard.core.config import ServerSettings


@pytest.fixture
def test_db():
    """Fresh in-memory database for each test."""
    return InMemoryDatabase()


@pytest.fixture
def settings():
    return ServerSettings(jwt_secret="test-secret", port=4000)


@pytest.fixture
def client(test_db, settings):
    """Create test client over an application bound to the test database."""
    app = create_app(settings=settings, db=test_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_data_path():
    """Get path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def employer_payload():
    return {
        "name": "Asha Employer",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "Pune",
        "password": "supersecret",
        "role": "Employer",
    }


@pytest.fixture
def seeker_payload():
    return {
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


@pytest.fixture
def employer(client, employer_payload):
    """Register an employer; the client keeps its session cookie."""
    response = client.post("/api/v1/user/register", json=employer_payload)
    assert response.status_code == 201
    return response.json()["user"]


@pytest.fixture
def test_jobs(test_data_path, test_db, employer):
    """Insert test jobs owned by the registered employer."""
    with open(test_data_path / "jobs.json") as f:
        data = json.load(f)
    return [test_db.add_job(job, posted_by=employer["_id"]) for job in data["jobs"]]
