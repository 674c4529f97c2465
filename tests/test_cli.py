"""Tests for the job board command-line interface."""
import httpx
import pytest

from jobboard.core.api_client import ApiClient
from jobboard.features.jobs import cli


@pytest.fixture
def route(monkeypatch):
    """Send every CLI request to ``handler`` instead of the network."""
    def _route(handler):
        seen = []

        def recording(request):
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(
            cli, "ApiClient",
            lambda config: ApiClient(config, transport=httpx.MockTransport(recording)),
        )
        return seen
    return _route


def test_list_jobs(route, capsys, sample_job):
    """Test listing jobs prints the filters and job cards."""
    def handler(request):
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "OK"})
        return httpx.Response(200, json={"jobs": [sample_job]})

    seen = route(handler)
    exit_code = cli.main([
        "--api-url", "http://testserver", "jobs", "--city", "Pune", "--niche", "DevOps", "--search", "backend",
    ])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "City: Pune" in out
    assert "[Hiring Multiple Candidates] Backend Engineer" in out
    assert seen[-1].url.query == b"searchKeyword=backend&city=Pune&niche=DevOps"


def test_list_jobs_unreachable(route, capsys):
    """Test an unreachable backend prints the error and exits non-zero."""
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    route(handler)
    exit_code = cli.main(["--api-url", "http://testserver", "jobs"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Cannot connect to server" in captured.err
    assert "No jobs found." in captured.out


def test_show_job(route, capsys, sample_job):
    """Test showing one job prints its details."""
    def handler(request):
        return httpx.Response(200, json={"success": True, "job": sample_job})

    route(handler)
    assert cli.main(["--api-url", "http://testserver", "job", sample_job["_id"]]) == 0
    out = capsys.readouterr().out
    assert "Backend Engineer" in out
    assert "Niche: DevOps" in out


def test_show_missing_job(route, capsys):
    """Test a missing job prints the backend's message."""
    def handler(request):
        return httpx.Response(404, json={"success": False, "message": "Job not found"})

    route(handler)
    assert cli.main(["--api-url", "http://testserver", "job", "nope"]) == 1
    assert "Error: Job not found" in capsys.readouterr().err


def test_health(route, capsys):
    """Test the health command reports reachability."""
    route(lambda request: httpx.Response(200, json={"status": "OK"}))
    assert cli.main(["--api-url", "http://testserver", "health"]) == 0
    assert "Server is running" in capsys.readouterr().out


def test_rejects_unknown_city():
    """Test only known cities are accepted."""
    with pytest.raises(SystemExit):
        cli.main(["jobs", "--city", "Atlantis"])
