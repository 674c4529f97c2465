"""Async HTTP client for the job-board backend.

One ``ApiClient`` is shared by every orchestrated action. It owns the
transport configuration (base address, cookie credentials, timeout, default
content type) and logs each outbound request and inbound response.

Example:
    ```python
    from jobboard.core.api_client import ApiClient

    async with ApiClient() as client:
        if await client.health():
            payload = await client.get("/api/v1/job/getall")
    ```
"""
import asyncio
from typing import Any, Dict, Optional

import httpx

from jobboard.core.config import ClientConfig
from jobboard.core.errors import InvalidResponseError
from jobboard.core.logging import setup_logging

logger = setup_logging('api_client')

HEALTH_PATH = "/health"


class ApiClient:
    """Configured async HTTP client with request/response logging.

    Non-2xx responses raise ``httpx.HTTPStatusError``; transport failures
    (connection refused, timeout) raise ``httpx.TransportError``; a 2xx
    response whose body is not a JSON object raises ``InvalidResponseError``.
    Callers at the action boundary turn these into user-facing messages.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            config: Transport settings; read from the environment when omitted
            transport: Optional httpx transport (tests inject mock or ASGI transports)
        """
        self.config = config or ClientConfig.from_env()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=httpx.Timeout(self.config.timeout),
            transport=transport,
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _log_request(self, request: httpx.Request) -> None:
        logger.info(f"Making {request.method} request to: {request.url}")

    async def _log_response(self, response: httpx.Response) -> None:
        logger.info(f"Response received: {response.status_code}")

    def _headers(self, form: bool) -> Dict[str, str]:
        headers = dict(self.config.headers)
        if form:
            # httpx sets the form or multipart content type itself
            headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
        return headers

    async def request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Args:
            method: HTTP method
            url: Path relative to the base address
            **kwargs: Passed to ``httpx.AsyncClient.request`` (json, data, files, params)

        Returns:
            The response body as a dict
        """
        form = kwargs.get("files") is not None or kwargs.get("data") is not None
        headers = self._headers(form)
        headers.update(kwargs.pop("headers", None) or {})

        # httpx.Timeout bounds each phase; the whole call is bounded here
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, headers=headers, **kwargs),
                self.config.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Request timed out after {self.config.timeout}s: {method} {url}")
            raise httpx.TimeoutException(
                f"{method} {url} exceeded {self.config.timeout}s"
            ) from None
        except httpx.TransportError as e:
            logger.error(f"Request error for {method} {url}: {e!r}")
            logger.error("Network error - check if backend server is running")
            raise

        if not self.config.with_credentials:
            self._client.cookies.clear()

        if response.is_error:
            logger.error(f"Response error: {response.status_code} for {method} {url}")
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Response from {url} is not valid JSON") from e
        if not isinstance(body, dict):
            raise InvalidResponseError(f"Response from {url} is not a JSON object")
        return body

    async def get(self, url: str, **kwargs) -> Dict[str, Any]:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> Dict[str, Any]:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs) -> Dict[str, Any]:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> Dict[str, Any]:
        return await self.request("DELETE", url, **kwargs)

    async def health(self) -> bool:
        """Probe the backend's liveness endpoint.

        Returns:
            True when /health answers 2xx, False on any failure
        """
        logger.info("Checking server connection...")
        try:
            await self.get(HEALTH_PATH)
        except (httpx.HTTPError, InvalidResponseError) as e:
            logger.error(f"Server connection failed: {e}")
            return False
        logger.info("Server is running")
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __repr__(self):
        return f"{self.__class__.__name__}(base_url='{self.config.base_url}')"
