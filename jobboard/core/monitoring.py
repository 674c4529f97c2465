"""Operation metrics backed by Logfire.

Every orchestrated action reports its lifecycle here: ``increment`` when a
request is issued, then exactly one of ``track_success`` or ``track_error``.
Each event is added to a Logfire counter tagged with the component and
operation, and failures are also emitted as Logfire error records. Data is
only exported when ``LOGFIRE_TOKEN`` is set. A per-process tally is kept
alongside so callers can read back what a component has recorded.

Example:
    ```python
    from jobboard.core.monitoring import setup_monitoring

    monitoring = setup_monitoring('jobs')
    monitoring.increment('fetch_jobs')
    monitoring.track_success('fetch_jobs')
    monitoring.stats()['fetch_jobs']  # {'calls': 1, 'successes': 1, 'errors': 0}
    ```
"""
import os
from collections import Counter, defaultdict
from typing import Dict, List

import logfire
from dotenv import load_dotenv

from jobboard.core.logging import setup_logging

# Load environment variables
load_dotenv()

logger = setup_logging('monitoring')

SERVICE_NAME = "jobboard"

_configured = False


def configure_logfire() -> None:
    """Configure Logfire once per process."""
    global _configured
    if _configured:
        return
    logfire.configure(
        service_name=SERVICE_NAME,
        environment=os.getenv("ENVIRONMENT", "development"),
        send_to_logfire="if-token-present",
        console=False,
    )
    _configured = True
    logger.debug("Logfire monitoring configured")


calls_counter = logfire.metric_counter(
    "jobboard.operation.calls", unit="1", description="Requests issued per operation"
)
successes_counter = logfire.metric_counter(
    "jobboard.operation.successes", unit="1", description="Operations that settled successfully"
)
errors_counter = logfire.metric_counter(
    "jobboard.operation.errors", unit="1", description="Operations that settled with an error"
)


class Monitoring:
    """Reports calls, successes and errors per operation for one component."""

    def __init__(self, name: str):
        self.name = name
        self.calls: Counter = Counter()
        self.successes: Counter = Counter()
        self.errors: Dict[str, List[str]] = defaultdict(list)

    def _attributes(self, operation: str) -> Dict[str, str]:
        return {"component": self.name, "operation": operation}

    def increment(self, operation: str, value: int = 1) -> None:
        self.calls[operation] += value
        calls_counter.add(value, self._attributes(operation))

    def track_success(self, operation: str) -> None:
        self.successes[operation] += 1
        successes_counter.add(1, self._attributes(operation))

    def track_error(self, operation: str, error: str) -> None:
        self.errors[operation].append(error)
        errors_counter.add(1, self._attributes(operation))
        logfire.error(
            "{component}.{operation} failed: {error}",
            component=self.name,
            operation=operation,
            error=error,
        )

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Summarize what this process recorded per operation.

        Returns:
            Mapping of operation name to its calls, successes and errors
        """
        operations = set(self.calls) | set(self.successes) | set(self.errors)
        return {
            op: {
                'calls': self.calls[op],
                'successes': self.successes[op],
                'errors': len(self.errors.get(op, [])),
            }
            for op in sorted(operations)
        }

    def reset(self) -> None:
        self.calls.clear()
        self.successes.clear()
        self.errors.clear()

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}')"


_registry: Dict[str, Monitoring] = {}


def setup_monitoring(name: str) -> Monitoring:
    """Get the monitoring instance for a component, creating it on first use.

    Args:
        name: Component name, e.g. 'jobs' or 'users'

    Returns:
        The shared Monitoring instance for that name
    """
    configure_logfire()
    if name not in _registry:
        _registry[name] = Monitoring(name)
    return _registry[name]
