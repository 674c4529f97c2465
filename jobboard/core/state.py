"""Resource state container.

Each async resource (jobs list, single job, current user, profile update...)
is a small finite state machine with the states Idle, Loading, Ready and
Failed. Its current value is an immutable ``ResourceSnapshot``; the only way to
move it is through the named transitions below:

* ``request``      loading=True, error cleared, stale message optionally cleared
* ``success``      loading=False, error cleared, payload stored as data or message
* ``failure``      loading=False, error set, data kept unless the resource resets it
* ``clear_errors`` error cleared, nothing else touched
* ``reset``        back to the initial snapshot

The transitions are pure functions. ``AsyncResource`` wraps one snapshot,
applies transitions to it and hands out request tokens so that a caller can
choose last-issued-wins (pass the token back) over last-completed-wins (don't).
``ResourceStore`` owns the resources of one presentation root and notifies
subscribers after every applied transition.

Example:
    ```python
    from jobboard.core.state import create_store, JOBS

    store = create_store()
    jobs = store.resource(JOBS)
    token = jobs.start()
    jobs.succeed([...], token=token)
    store[JOBS].loading  # False
    ```
"""
import copy
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from jobboard.core.logging import setup_logging

logger = setup_logging('state')

T = TypeVar('T')

JOBS = "jobs"
SINGLE_JOB = "single_job"
MY_JOBS = "my_jobs"
JOB_ACTION = "job_action"
USER = "user"
PROFILE_UPDATE = "profile_update"

UNSET: Any = object()


class ResourceStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ResourceSnapshot(BaseModel):
    """The value of one resource at a point in time."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: ResourceStatus = ResourceStatus.IDLE
    loading: bool = False
    error: Optional[str] = None
    message: Optional[str] = None
    data: Any = None


# Transitions

def request(snapshot: ResourceSnapshot, clear_message: bool = True) -> ResourceSnapshot:
    update = {"status": ResourceStatus.LOADING, "loading": True, "error": None}
    if clear_message:
        update["message"] = None
    return snapshot.model_copy(update=update)


def success(
    snapshot: ResourceSnapshot,
    payload: Any = None,
    as_message: bool = False,
    message: Optional[str] = UNSET,
) -> ResourceSnapshot:
    """Apply a successful outcome.

    Args:
        snapshot: Current snapshot
        payload: Data returned by the call
        as_message: Store the payload in ``message`` instead of ``data``
            (action-style resources answer with a confirmation string)
        message: Explicit message to store alongside data; left alone if unset

    Returns:
        The next snapshot
    """
    update = {"status": ResourceStatus.READY, "loading": False, "error": None}
    if as_message:
        update["message"] = payload
    else:
        update["data"] = payload
        if message is not UNSET:
            update["message"] = message
    return snapshot.model_copy(update=update)


def failure(
    snapshot: ResourceSnapshot,
    error: str,
    data: Any = UNSET,
) -> ResourceSnapshot:
    """Apply a failed outcome; ``data`` replaces the payload only when given."""
    update = {
        "status": ResourceStatus.FAILED,
        "loading": False,
        "error": error,
        "message": None,
    }
    if data is not UNSET:
        update["data"] = data
    return snapshot.model_copy(update=update)


def clear_errors(snapshot: ResourceSnapshot) -> ResourceSnapshot:
    update = {"error": None}
    if snapshot.status is ResourceStatus.FAILED:
        update["status"] = ResourceStatus.IDLE
    return snapshot.model_copy(update=update)


def reset(initial: ResourceSnapshot) -> ResourceSnapshot:
    return initial.model_copy(update={"data": copy.deepcopy(initial.data)})


class AsyncResource(Generic[T]):
    """One async resource: its snapshot, its options and its request tokens.

    Args:
        name: Resource name used in logs and store notifications
        initial_data: Payload of the blank snapshot
        action_style: Successful payloads are confirmation messages, not data
        clear_message_on_request: Drop a stale message when a request starts
        reset_data_on_failure: Put ``initial_data`` back when a call fails
        on_change: Called with (name, snapshot) after every applied transition
    """

    def __init__(
        self,
        name: str,
        initial_data: Optional[T] = None,
        action_style: bool = False,
        clear_message_on_request: bool = True,
        reset_data_on_failure: bool = False,
        on_change: Optional[Callable[[str, ResourceSnapshot], None]] = None,
    ):
        self.name = name
        self.action_style = action_style
        self.clear_message_on_request = clear_message_on_request
        self.reset_data_on_failure = reset_data_on_failure
        self._initial = ResourceSnapshot(data=copy.deepcopy(initial_data))
        self._snapshot = reset(self._initial)
        self._latest_token = 0
        self._on_change = on_change

    @property
    def snapshot(self) -> ResourceSnapshot:
        return self._snapshot

    @property
    def initial(self) -> ResourceSnapshot:
        return reset(self._initial)

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def is_current(self, token: Optional[int]) -> bool:
        return token is None or token == self._latest_token

    def _apply(self, snapshot: ResourceSnapshot) -> None:
        self._snapshot = snapshot
        if self._on_change is not None:
            self._on_change(self.name, snapshot)

    def start(self) -> int:
        """Enter Loading and issue a new request token."""
        self._latest_token += 1
        self._apply(request(self._snapshot, clear_message=self.clear_message_on_request))
        return self._latest_token

    def succeed(self, payload: Optional[T] = None, token: Optional[int] = None,
                message: Optional[str] = UNSET) -> bool:
        """Apply a success unless ``token`` has been superseded.

        Returns:
            True if the transition was applied
        """
        if not self.is_current(token):
            logger.debug(f"Discarding stale success for {self.name} (token {token} < {self._latest_token})")
            return False
        self._apply(success(self._snapshot, payload, as_message=self.action_style, message=message))
        return True

    def fail(self, error: str, token: Optional[int] = None,
             reset_data: Optional[bool] = None) -> bool:
        """Apply a failure unless ``token`` has been superseded.

        Args:
            error: User-facing error message
            token: Token returned by ``start``; None always applies
            reset_data: Override the resource's reset-on-failure policy for this call

        Returns:
            True if the transition was applied
        """
        if not self.is_current(token):
            logger.debug(f"Discarding stale failure for {self.name} (token {token} < {self._latest_token})")
            return False
        if reset_data is None:
            reset_data = self.reset_data_on_failure
        data = copy.deepcopy(self._initial.data) if reset_data else UNSET
        self._apply(failure(self._snapshot, error, data=data))
        return True

    def clear_errors(self) -> None:
        self._apply(clear_errors(self._snapshot))

    def reset(self) -> None:
        # Results of calls issued before the reset are no longer current.
        self._latest_token += 1
        self._apply(reset(self._initial))

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}', status='{self._snapshot.status.value}')"


Listener = Callable[[str, ResourceSnapshot], None]


class ResourceStore:
    """The resources of one presentation root.

    Pass the store to orchestrators and views explicitly; there is no global
    instance. Subscribers are called synchronously after every applied
    transition with the resource name and its new snapshot.
    """

    def __init__(self):
        self._resources: Dict[str, AsyncResource] = {}
        self._listeners: List[Listener] = []

    def register(self, name: str, **options) -> AsyncResource:
        if name in self._resources:
            raise ValueError(f"Resource already registered: {name}")
        resource = AsyncResource(name, on_change=self._notify, **options)
        self._resources[name] = resource
        return resource

    def resource(self, name: str) -> AsyncResource:
        try:
            return self._resources[name]
        except KeyError:
            raise KeyError(f"Unknown resource: {name}") from None

    def snapshot(self, name: str) -> ResourceSnapshot:
        return self.resource(name).snapshot

    def __getitem__(self, name: str) -> ResourceSnapshot:
        return self.snapshot(name)

    def __contains__(self, name: str) -> bool:
        return name in self._resources

    @property
    def names(self) -> List[str]:
        return list(self._resources)

    def state(self) -> Dict[str, ResourceSnapshot]:
        return {name: resource.snapshot for name, resource in self._resources.items()}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset_all(self) -> None:
        for resource in self._resources.values():
            resource.reset()

    def _notify(self, name: str, snapshot: ResourceSnapshot) -> None:
        # A failing listener must not interrupt the transition or other listeners
        for listener in list(self._listeners):
            try:
                listener(name, snapshot)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on {name}: {e!r}")


def create_store() -> ResourceStore:
    """Build a store with every resource the job board tracks."""
    store = ResourceStore()
    store.register(JOBS, initial_data=[])
    store.register(SINGLE_JOB, initial_data={})
    store.register(MY_JOBS, initial_data=[])
    store.register(JOB_ACTION, action_style=True)
    store.register(USER, initial_data={}, reset_data_on_failure=True)
    store.register(PROFILE_UPDATE, action_style=True)
    return store
