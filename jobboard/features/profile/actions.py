"""Profile and password updates.

Both drive the action-style ``profile_update`` resource: a successful update
stores the backend's confirmation in ``message`` and marks the resource Ready.
``reset_profile_update`` is dispatched once the caller has navigated away.
"""
from typing import Any, Dict, Optional

from jobboard.core.api_client import ApiClient
from jobboard.core.monitoring import setup_monitoring
from jobboard.core.orchestrator import run_action
from jobboard.core.state import PROFILE_UPDATE, ResourceSnapshot, ResourceStatus, ResourceStore
from jobboard.features.users.actions import USER_API

monitoring = setup_monitoring('profile')


def is_updated(store: ResourceStore) -> bool:
    return store[PROFILE_UPDATE].status is ResourceStatus.READY


async def update_profile(
    store: ResourceStore,
    client: ApiClient,
    data: Dict[str, Any],
    files: Optional[Dict[str, Any]] = None,
) -> ResourceSnapshot:
    """Update profile fields, optionally replacing the resume (multipart)."""
    body = {"data": data, "files": files} if files else {"json": data}
    return await run_action(
        store.resource(PROFILE_UPDATE),
        lambda: client.put(f"{USER_API}/update/profile", **body),
        operation='update_profile',
        fallback="Failed to update profile.",
        monitoring=monitoring,
        parse=lambda payload: payload.get("message") or "Profile updated.",
        clear_errors_on_success=False,
    )


async def update_password(store: ResourceStore, client: ApiClient, data: Dict[str, Any]) -> ResourceSnapshot:
    """Change the password; ``data`` holds oldPassword, newPassword and confirmPassword."""
    return await run_action(
        store.resource(PROFILE_UPDATE),
        lambda: client.put(f"{USER_API}/update/password", json=data),
        operation='update_password',
        fallback="Failed to update password.",
        monitoring=monitoring,
        parse=lambda payload: payload.get("message") or "Password updated.",
        clear_errors_on_success=False,
    )


def reset_profile_update(store: ResourceStore) -> None:
    store.resource(PROFILE_UPDATE).reset()
