"""
Clock abstraction so that "now" can be injected in filters and comparisons.
"""

from abc import ABC, abstractmethod
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve an IANA timezone name. ``None`` or an empty name means local time.
    """
    if not name:
        return None
    return ZoneInfo(name)


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    """Reads the wall clock, naive local time unless a timezone is given."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock(Clock):
    """Always returns the same moment. Used for deterministic runs and tests."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment
