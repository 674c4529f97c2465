"""Error taxonomy for orchestrated actions.

Failures reach the presentation layer as plain strings. Which string depends on
where the failure came from:

* NETWORK: no response was received (connection refused, DNS, timeout).
* SERVER: the backend answered with an error status.
* AUTH_REQUIRED: the user fetch was rejected with 400/401.
* UNEXPECTED: anything else, e.g. a response body with the wrong shape.
"""
from enum import Enum
from typing import Optional

import httpx

CONNECTION_ERROR_MESSAGE = (
    "Cannot connect to server. Please check if the backend server is running."
)
AUTH_REQUIRED_MESSAGE = "Please log in to continue"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class JobBoardError(Exception):
    """Base class for errors raised inside the jobboard client."""


class InvalidResponseError(JobBoardError):
    """The backend answered successfully but the body has the wrong shape."""


class BackendUnavailableError(JobBoardError):
    """The liveness probe did not get a healthy answer from the backend."""


class ErrorKind(str, Enum):
    NETWORK = "network"
    SERVER = "server"
    AUTH_REQUIRED = "auth_required"
    UNEXPECTED = "unexpected"


def classify_error(exc: BaseException, auth_required: bool = False) -> ErrorKind:
    """Work out where a failure originated.

    Args:
        exc: The exception caught at the action boundary
        auth_required: True for calls where 400/401 means "not logged in"

    Returns:
        The matching ErrorKind
    """
    if isinstance(exc, (httpx.TransportError, BackendUnavailableError)):
        return ErrorKind.NETWORK
    if isinstance(exc, httpx.HTTPStatusError):
        if auth_required and exc.response.status_code in (400, 401):
            return ErrorKind.AUTH_REQUIRED
        return ErrorKind.SERVER
    return ErrorKind.UNEXPECTED


def server_message(response: httpx.Response) -> Optional[str]:
    """Extract the ``message`` field from an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def describe_error(
    exc: BaseException,
    fallback: Optional[str] = None,
    auth_required: bool = False,
) -> str:
    """Turn a caught exception into the message shown to the user.

    Args:
        exc: The exception caught at the action boundary
        fallback: Message used for unexpected failures
        auth_required: True for the authenticated-user fetch

    Returns:
        A user-facing error message, never empty
    """
    kind = classify_error(exc, auth_required=auth_required)

    if kind is ErrorKind.NETWORK:
        return CONNECTION_ERROR_MESSAGE
    if kind is ErrorKind.AUTH_REQUIRED:
        return AUTH_REQUIRED_MESSAGE
    if kind is ErrorKind.SERVER:
        status = exc.response.status_code
        if auth_required and status == 403:
            return "Access forbidden"
        if auth_required and status == 404:
            return "User not found"
        return server_message(exc.response) or f"Server error: {status}"
    return fallback or UNEXPECTED_ERROR_MESSAGE
