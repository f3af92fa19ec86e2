"""
Clock -- Injectable time source for the ledger aggregate.

Responsibility:
    Lets ``ExpenseGroup`` stamp ``created_at`` and expense dates without
    calling ``datetime.now()`` directly, so tests and replays are
    deterministic.

Architecture position:
    Kernel > Domain. Engines never read a clock; expense dates are
    informational and play no part in settlement.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Abstract clock interface returning timezone-aware datetimes."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...


class SystemClock(Clock):
    """Production clock backed by the system time (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    ``now()`` returns the same value until ``advance()`` or ``set_time()``
    is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> datetime:
        """Advance the clock and return the new time."""
        self._advance_seconds += seconds
        return self.now()
