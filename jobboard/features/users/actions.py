"""Orchestrated user actions: register, log in, fetch the current user, log out.

All of them drive the ``user`` resource. A failed register, login or user
fetch drops the user back to the blank ``{}``; a failed logout keeps the user
logged in on the client.
"""
from typing import Any, Dict, Optional

from jobboard.core.api_client import ApiClient
from jobboard.core.errors import InvalidResponseError
from jobboard.core.monitoring import setup_monitoring
from jobboard.core.orchestrator import run_action
from jobboard.core.schemas import User
from jobboard.core.state import USER, ResourceSnapshot, ResourceStatus, ResourceStore

USER_API = "/api/v1/user"

monitoring = setup_monitoring('users')


def parse_user(payload: Dict[str, Any]) -> User:
    user = payload.get("user")
    if not user:
        raise InvalidResponseError("Invalid response format")
    return User.model_validate(user)


def _message(payload: Dict[str, Any]) -> Optional[str]:
    return payload.get("message")


def is_authenticated(store: ResourceStore) -> bool:
    snapshot = store[USER]
    return snapshot.status is ResourceStatus.READY and bool(snapshot.data)


async def register(
    store: ResourceStore,
    client: ApiClient,
    data: Dict[str, Any],
    files: Optional[Dict[str, Any]] = None,
) -> ResourceSnapshot:
    """Create an account and log it in.

    Args:
        store: Resource store
        client: Shared API client
        data: Registration fields (name, email, phone, address, password, role, niches...)
        files: Optional resume upload; sent as multipart form data
    """
    body = {"data": data, "files": files} if files else {"json": data}
    return await run_action(
        store.resource(USER),
        lambda: client.post(f"{USER_API}/register", **body),
        operation='register',
        fallback="Registration failed",
        monitoring=monitoring,
        parse=parse_user,
        message=_message,
    )


async def login(store: ResourceStore, client: ApiClient, data: Dict[str, Any]) -> ResourceSnapshot:
    """Log in with role, email and password; the session cookie is kept by the client."""
    return await run_action(
        store.resource(USER),
        lambda: client.post(f"{USER_API}/login", json=data),
        operation='login',
        fallback="Login failed",
        monitoring=monitoring,
        parse=parse_user,
        message=_message,
    )


async def get_user(store: ResourceStore, client: ApiClient) -> ResourceSnapshot:
    """Fetch the authenticated user; 400/401 reads as "Please log in to continue"."""
    return await run_action(
        store.resource(USER),
        lambda: client.get(f"{USER_API}/getuser"),
        operation='get_user',
        fallback="Failed to fetch user data",
        monitoring=monitoring,
        parse=parse_user,
        auth_required=True,
    )


async def logout(store: ResourceStore, client: ApiClient) -> ResourceSnapshot:
    return await run_action(
        store.resource(USER),
        lambda: client.get(f"{USER_API}/logout"),
        operation='logout',
        fallback="Logout failed",
        monitoring=monitoring,
        parse=lambda payload: {},
        message=_message,
        reset_data_on_failure=False,
    )


def clear_user_errors(store: ResourceStore) -> None:
    store.resource(USER).clear_errors()
