"""
Clock -- Deterministic evaluation-date abstraction.

Responsibility:
    Provides an injectable clock so that engine and service code never
    call ``date.today()`` directly. Prescription expiry is evaluated
    against ``Clock.today()``, supplied by the service layer.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).

Failure modes:
    None. ``DeterministicClock`` always returns its configured date.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        Services that need the current date receive a Clock instance via
        constructor injection. Engines receive the date as an explicit
        input field.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def today(self) -> date:
        """Get the current calendar date."""
        return self.now().date()


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    Non-goals:
        Not suitable for deterministic tests.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until
          ``advance_days()`` or ``set_date()`` is called.
    """

    def __init__(self, fixed_date: date | None = None):
        """
        Initialize with optional fixed date.

        Args:
            fixed_date: If provided, clock always returns this date.
                        If None, uses 2024-01-01.
        """
        self._fixed_date = fixed_date or date(2024, 1, 1)
        self._advance_days = 0

    def now(self) -> datetime:
        current = self._fixed_date + timedelta(days=self._advance_days)
        return datetime(
            current.year, current.month, current.day, 12, 0, 0,
            tzinfo=timezone.utc,
        )

    def set_date(self, value: date) -> None:
        """Set the clock to a specific date."""
        self._fixed_date = value
        self._advance_days = 0

    def advance_days(self, days: int = 1) -> None:
        """Advance the clock by the specified number of days."""
        self._advance_days += days
