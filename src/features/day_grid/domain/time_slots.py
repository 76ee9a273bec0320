"""
Time slots

A day is SLOTS_PER_DAY one-second slots; slot index == seconds since midnight.
"""
from datetime import datetime
from typing import Callable, Optional


SLOTS_PER_DAY = 86_400


def seconds_since_midnight(now: datetime) -> int:
    """Slot index of the wall-clock second containing now."""
    return now.hour * 3600 + now.minute * 60 + now.second


def format_hms(index: int) -> str:
    """
    Format a slot index as HH:MM:SS.

    Indices outside the day wrap modulo SLOTS_PER_DAY.
    """
    s = index % SLOTS_PER_DAY
    hh, rem = divmod(s, 3600)
    mm, ss = divmod(rem, 60)
    return f"{hh:02d}:{mm:02d}:{ss:02d}"


def parse_hms(text: str) -> int:
    """
    Parse HH:MM:SS into a slot index.

    Raises:
        ValueError: If text is not a valid 24h time of day
    """
    parts = text.strip().split(":")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected HH:MM:SS, got {text!r}")

    hh, mm, ss = (int(p) for p in parts)
    if not (0 <= hh < 24 and 0 <= mm < 60 and 0 <= ss < 60):
        raise ValueError(f"Time of day out of range: {text!r}")
    return hh * 3600 + mm * 60 + ss


class TimeSource:
    """
    Wall-clock reads.

    Tests pass a fixed or stepping callable instead of datetime.now.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        return self._clock()
