"""
Clock abstraction for deterministic timestamps.

Code that stamps health payloads or measures uptime asks an injected Clock
for "now" instead of calling datetime.now() directly. Production passes a
RealClock; tests pass a FrozenClock and get byte-for-byte stable output.
"""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything with a now() returning a timezone-aware datetime."""

    def now(self) -> datetime:
        ...


class RealClock:
    """Clock backed by the system clock, always in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Clock stuck at a fixed instant.

    **Usage**:
        clock = FrozenClock(datetime(2025, 8, 21, 12, 0, tzinfo=timezone.utc))
        clock.now()  # always 2025-08-21T12:00:00+00:00
    """

    def __init__(self, fixed_now: datetime):
        self._fixed_now = fixed_now

    def now(self) -> datetime:
        return self._fixed_now


def to_utc_isoformat(moment: datetime) -> str:
    """
    Render moment as an ISO-8601 UTC string with a trailing "Z".

    Naive datetimes are assumed to already be in UTC.

    Usage example:
        >>> to_utc_isoformat(datetime(2025, 8, 21, 12, 0, tzinfo=timezone.utc))
        '2025-08-21T12:00:00Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def seconds_since(started_at: datetime, clock: Clock) -> int:
    """Whole seconds elapsed between started_at and clock.now(), never negative."""
    elapsed = (clock.now() - started_at).total_seconds()
    return max(int(elapsed), 0)
