"""Shared request/terminal sequencing for orchestrated actions.

Every action in ``jobboard.features`` follows the same shape: start the
resource, await one call, parse the body, then apply exactly one terminal
transition. ``run_action`` implements that shape once. Any exception raised by
the call or the parser is converted into a failure transition; nothing
escapes to the caller.
"""
from typing import Any, Awaitable, Callable, Dict, Optional

from jobboard.core.errors import describe_error
from jobboard.core.logging import setup_logging
from jobboard.core.monitoring import Monitoring
from jobboard.core.state import AsyncResource, ResourceSnapshot, UNSET

logger = setup_logging('orchestrator')

Payload = Dict[str, Any]


async def run_action(
    resource: AsyncResource,
    call: Callable[[], Awaitable[Payload]],
    *,
    operation: str,
    fallback: str,
    monitoring: Monitoring,
    parse: Optional[Callable[[Payload], Any]] = None,
    message: Optional[Callable[[Payload], Optional[str]]] = None,
    fence: bool = False,
    auth_required: bool = False,
    reset_data_on_failure: Optional[bool] = None,
    clear_errors_on_success: bool = True,
) -> ResourceSnapshot:
    """Run one orchestrated action against a resource.

    Args:
        resource: The resource whose state the action drives
        call: Coroutine function performing the network call(s)
        operation: Name used in logs and monitoring
        fallback: Message for unexpected (non-network, non-HTTP) failures
        monitoring: Counters of the owning feature
        parse: Maps the response body to the success payload
        message: Maps the response body to a message stored next to data
        fence: Apply the terminal transition only if no newer call was issued
        auth_required: Treat 400/401 as "please log in"
        reset_data_on_failure: Override the resource's failure policy
        clear_errors_on_success: Dispatch clear_errors after an applied success

    Returns:
        The resource snapshot once the action has settled
    """
    token = resource.start()
    monitoring.increment(operation)

    try:
        payload = await call()
        data = parse(payload) if parse else payload
        note = message(payload) if message else UNSET
    except Exception as e:
        error = describe_error(e, fallback, auth_required=auth_required)
        logger.error(f"Error in {operation}: {error} ({e!r})")
        monitoring.track_error(operation, error)
        resource.fail(error, token=token if fence else None, reset_data=reset_data_on_failure)
        return resource.snapshot

    applied = resource.succeed(data, token=token if fence else None, message=note)
    if not applied:
        logger.info(f"Discarding superseded {operation} result (token {token})")
    elif clear_errors_on_success:
        resource.clear_errors()
    monitoring.track_success(operation)
    return resource.snapshot
