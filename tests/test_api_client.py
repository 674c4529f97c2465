"""Tests for the async API client."""
import asyncio
import json

import httpx
import pytest

from jobboard.core.api_client import ApiClient
from jobboard.core.config import (
    DEVELOPMENT_API_URL,
    PRODUCTION_API_URL,
    ClientConfig,
    resolve_base_url,
)
from jobboard.core.errors import CONNECTION_ERROR_MESSAGE, InvalidResponseError
from jobboard.core.state import ResourceStatus
from jobboard.features.jobs.actions import fetch_jobs


def test_request_sends_json_with_credentials(make_client):
    """Test JSON requests carry the content type and stored cookies."""
    seen = []

    def handler(request):
        seen.append(request)
        if request.url.path == "/login":
            return httpx.Response(200, json={"ok": True}, headers={"set-cookie": "token=abc; Path=/"})
        return httpx.Response(200, json={"ok": True})

    async def scenario():
        async with make_client(handler) as client:
            await client.post("/login", json={"email": "a@b.c"})
            await client.get("/me")

    asyncio.run(scenario())

    assert seen[0].headers["content-type"] == "application/json"
    assert json.loads(seen[0].content) == {"email": "a@b.c"}
    assert seen[1].headers["cookie"] == "token=abc"


def test_cookies_dropped_without_credentials(make_client):
    """Test with_credentials=False never sends the session cookie."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={}, headers={"set-cookie": "token=abc; Path=/"})

    async def scenario():
        async with make_client(handler, with_credentials=False) as client:
            await client.get("/a")
            await client.get("/b")

    asyncio.run(scenario())
    assert "cookie" not in seen[1].headers


def test_multipart_content_type(make_client):
    """Test file uploads use httpx's multipart content type."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"message": "ok"})

    async def scenario():
        async with make_client(handler) as client:
            await client.post(
                "/upload",
                data={"name": "Asha"},
                files={"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
            )

    asyncio.run(scenario())
    assert seen[0].headers["content-type"].startswith("multipart/form-data; boundary=")


def test_error_status_raises(make_client):
    """Test non-2xx responses raise HTTPStatusError."""
    def handler(request):
        return httpx.Response(404, json={"success": False, "message": "Job not found"})

    async def scenario():
        async with make_client(handler) as client:
            await client.delete("/api/v1/job/delete/1")

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        asyncio.run(scenario())
    assert exc_info.value.response.status_code == 404


def test_non_object_body_raises(make_client):
    """Test bodies that are not JSON objects are rejected."""
    def handler(request):
        if request.url.path == "/list":
            return httpx.Response(200, json=[1, 2])
        return httpx.Response(200, text="<html></html>")

    async def call(path):
        async with make_client(handler) as client:
            await client.get(path)

    with pytest.raises(InvalidResponseError):
        asyncio.run(call("/list"))
    with pytest.raises(InvalidResponseError):
        asyncio.run(call("/page"))


def test_transport_errors_propagate(make_client):
    """Test connection failures surface as httpx.TransportError."""
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async def scenario():
        async with make_client(handler) as client:
            await client.get("/api/v1/job/getall")

    with pytest.raises(httpx.ConnectError):
        asyncio.run(scenario())


def test_health(make_client):
    """Test the liveness probe reports reachability as a bool."""
    def healthy(request):
        assert request.url.path == "/health"
        return httpx.Response(200, json={"status": "OK"})

    def unhealthy(request):
        return httpx.Response(503, json={"message": "down"})

    def unreachable(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async def probe(handler):
        async with make_client(handler) as client:
            return await client.health()

    assert asyncio.run(probe(healthy)) is True
    assert asyncio.run(probe(unhealthy)) is False
    assert asyncio.run(probe(unreachable)) is False


def test_request_logging(make_client, caplog):
    """Test each request and response is logged."""
    def handler(request):
        return httpx.Response(200, json={})

    async def scenario():
        async with make_client(handler) as client:
            await client.get("/health")

    with caplog.at_level("INFO", logger="jobboard.api_client"):
        asyncio.run(scenario())
    assert "Making GET request to: http://testserver/health" in caplog.text
    assert "Response received: 200" in caplog.text


def test_base_url_resolution(monkeypatch):
    """Test the base address follows the environment and the override."""
    monkeypatch.delenv("JOBBOARD_API_URL", raising=False)
    assert resolve_base_url("development") == DEVELOPMENT_API_URL
    assert resolve_base_url("production") == PRODUCTION_API_URL

    monkeypatch.setenv("ENVIRONMENT", "production")
    assert ClientConfig.from_env().base_url == PRODUCTION_API_URL

    monkeypatch.setenv("JOBBOARD_API_URL", "http://example.test:9000/")
    assert resolve_base_url() == "http://example.test:9000"


def test_client_repr():
    """Test the client describes its base address."""
    client = ApiClient(ClientConfig(base_url="http://testserver"))
    assert repr(client) == "ApiClient(base_url='http://testserver')"
    assert client.base_url.rstrip("/") == "http://testserver"


class TrickleStream(httpx.AsyncByteStream):
    """Response body that arrives one byte at a time."""

    def __init__(self, body, delay):
        self.body = body
        self.delay = delay

    async def __aiter__(self):
        for byte in self.body:
            await asyncio.sleep(self.delay)
            yield bytes([byte])


def trickle_handler(request):
    return httpx.Response(200, stream=TrickleStream(b'{"jobs": []}', delay=0.05))


def test_timeout_defaults(monkeypatch):
    """Test calls are bounded by ten seconds unless configured otherwise."""
    monkeypatch.delenv("JOBBOARD_TIMEOUT", raising=False)
    assert ClientConfig().timeout == 10.0
    assert ClientConfig.from_env().timeout == 10.0

    monkeypatch.setenv("JOBBOARD_TIMEOUT", "2.5")
    assert ClientConfig.from_env().timeout == 2.5


def test_timeout_bounds_whole_call(make_client):
    """Test a response trickling in past the timeout is abandoned."""
    async def scenario():
        async with make_client(trickle_handler, timeout=0.2) as client:
            loop = asyncio.get_running_loop()
            started = loop.time()
            with pytest.raises(httpx.TimeoutException):
                await client.get("/api/v1/job/getall")
            return loop.time() - started

    elapsed = asyncio.run(scenario())
    assert elapsed < 0.5


def test_slow_response_fails_as_network_error(store, make_client):
    """Test an action whose call times out shows the connection message."""
    async def scenario():
        async with make_client(trickle_handler, timeout=0.2) as client:
            return await fetch_jobs(store, client, probe=False)

    snapshot = asyncio.run(scenario())
    assert snapshot.error == CONNECTION_ERROR_MESSAGE
    assert snapshot.status is ResourceStatus.FAILED
    assert snapshot.loading is False
