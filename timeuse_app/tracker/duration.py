"""Duration calculation between two times of day."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time

from .errors import ValidationError

LOGGER = logging.getLogger(__name__)

TIME_FORMATS = ("%H:%M", "%H:%M:%S")


@dataclass(frozen=True)
class Duration:
    hours: int
    minutes: int
    total_minutes: int

    @property
    def formatted(self) -> str:
        return f"{self.hours}h {self.minutes}m"


def parse_time(value: str) -> time:
    """Parse a 24-hour ``HH:MM`` (optionally ``HH:MM:SS``) string."""

    text = (value or "").strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r}; expected HH:MM")


def compute_duration(start_time: str, end_time: str) -> Duration:
    """Return the whole minutes elapsed from ``start_time`` to ``end_time``.

    Both times are placed on the same reference day. An end earlier than the
    start is rejected instead of producing a negative duration; entries that
    cross midnight must be split by the caller.
    """

    start = parse_time(start_time)
    end = parse_time(end_time)
    reference = datetime(1970, 1, 1)
    delta = datetime.combine(reference, end) - datetime.combine(reference, start)
    seconds = delta.total_seconds()
    if seconds < 0:
        LOGGER.warning("Rejected interval %s-%s: end before start", start_time, end_time)
        raise ValidationError(f"End time {end_time} is earlier than start time {start_time}")
    total_minutes = int(seconds // 60)
    hours, minutes = divmod(total_minutes, 60)
    return Duration(hours=hours, minutes=minutes, total_minutes=total_minutes)


def format_minutes(total_minutes: int) -> str:
    hours, minutes = divmod(int(total_minutes), 60)
    return f"{hours}h {minutes}m"
