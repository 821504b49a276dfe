"""Business metrics: in-process counters.

Learn: These are fire-and-forget observers. Routes, services and the auth
gate bump a counter after a decision has been made; nothing ever reads a
counter to decide anything. Each increment is also emitted as a
structlog event so the numbers can be rebuilt from logs.
"""

import threading
from collections import Counter

import structlog

logger = structlog.get_logger()

# ─── Counter names ───────────────────────────────────────

USERS_REGISTERED = "taskify.users.registered"
LOGIN_ATTEMPTS = "taskify.users.login.attempts"
LOGIN_SUCCESS = "taskify.users.login.success"
AUTH_REJECTED = "taskify.auth.rejected"
TASKS_CREATED = "taskify.tasks.created"
TASKS_COMPLETED = "taskify.tasks.completed"
APPOINTMENTS_CREATED = "taskify.appointments.created"

ALL_COUNTERS = (
    USERS_REGISTERED,
    LOGIN_ATTEMPTS,
    LOGIN_SUCCESS,
    AUTH_REJECTED,
    TASKS_CREATED,
    TASKS_COMPLETED,
    APPOINTMENTS_CREATED,
)


class MetricsRegistry:
    """Thread-safe named counters."""

    def __init__(self):
        self._counts: Counter[str] = Counter({name: 0 for name in ALL_COUNTERS})
        self._lock = threading.Lock()

    def increment(self, name: str, amount: int = 1, **context) -> None:
        with self._lock:
            self._counts[name] += amount
        logger.debug("metrics.increment", metric=name, amount=amount, **context)

    def get(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts = Counter({name: 0 for name in ALL_COUNTERS})


# Process-wide registry
metrics = MetricsRegistry()
