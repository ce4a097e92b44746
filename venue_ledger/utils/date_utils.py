"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo


def local_clock(timezone: str) -> Callable[[], date]:
    """Build a zero-argument clock returning the current date in the venue's timezone"""
    zone = ZoneInfo(timezone)
    return lambda: datetime.now(zone).date()
