"""Tests for Logfire-backed operation metrics."""
import asyncio
from unittest.mock import Mock

import httpx
import pytest

from jobboard.core import monitoring as monitoring_module
from jobboard.core.monitoring import Monitoring, setup_monitoring
from jobboard.features.jobs.actions import fetch_jobs


@pytest.fixture
def instruments(monkeypatch):
    """Replace the Logfire counters and error records with mocks."""
    mocks = {
        "calls": Mock(),
        "successes": Mock(),
        "errors": Mock(),
        "error": Mock(),
    }
    monkeypatch.setattr(monitoring_module, "calls_counter", mocks["calls"])
    monkeypatch.setattr(monitoring_module, "successes_counter", mocks["successes"])
    monkeypatch.setattr(monitoring_module, "errors_counter", mocks["errors"])
    monkeypatch.setattr(monitoring_module.logfire, "error", mocks["error"])
    return mocks


def test_setup_monitoring_is_shared():
    """Test one instance is kept per component."""
    assert setup_monitoring('jobs') is setup_monitoring('jobs')
    assert setup_monitoring('jobs') is not setup_monitoring('users')
    assert repr(setup_monitoring('users')) == "Monitoring(name='users')"


def test_events_reach_logfire(instruments):
    """Test each lifecycle event adds to the matching Logfire counter."""
    monitoring = Monitoring('jobs')
    monitoring.increment('fetch_jobs')
    monitoring.track_success('fetch_jobs')
    monitoring.increment('delete_job')
    monitoring.track_error('delete_job', "Job not found")

    attributes = {"component": "jobs", "operation": "delete_job"}
    assert instruments["calls"].add.call_count == 2
    instruments["successes"].add.assert_called_once_with(
        1, {"component": "jobs", "operation": "fetch_jobs"}
    )
    instruments["errors"].add.assert_called_once_with(1, attributes)
    instruments["error"].assert_called_once()
    assert instruments["error"].call_args.kwargs == {**attributes, "error": "Job not found"}

    assert monitoring.stats() == {
        'delete_job': {'calls': 1, 'successes': 0, 'errors': 1},
        'fetch_jobs': {'calls': 1, 'successes': 1, 'errors': 0},
    }


def test_failed_action_records_error(instruments, store, make_client):
    """Test an action that fails is reported as an error, not a success."""
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async def scenario():
        async with make_client(handler) as client:
            await fetch_jobs(store, client)

    asyncio.run(scenario())
    instruments["calls"].add.assert_called_once_with(
        1, {"component": "jobs", "operation": "fetch_jobs"}
    )
    instruments["successes"].add.assert_not_called()
    instruments["errors"].add.assert_called_once()
