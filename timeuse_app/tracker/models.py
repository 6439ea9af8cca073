"""Data models for the time-use tracker."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple, Union

from .duration import compute_duration
from .errors import ValidationError

DateInput = Union[date, str]


def parse_date(value: DateInput) -> date:
    if isinstance(value, date):
        return value
    text = (value or "").strip()
    if not text:
        raise ValidationError("Date is required")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD") from exc


@dataclass(frozen=True)
class TimeEntry:
    """One logged activity interval. Never edited after creation."""

    date: date
    start_time: str
    end_time: str
    category: str
    duration_minutes: int
    duration: str
    description: str = ""
    has_phone: bool = False
    has_tv_on: bool = False

    @classmethod
    def create(
        cls,
        entry_date: DateInput,
        start_time: str,
        end_time: str,
        category: str,
        description: str = "",
        has_phone: bool = False,
        has_tv_on: bool = False,
    ) -> "TimeEntry":
        """Validate raw form fields and derive the duration."""

        missing = [
            name
            for name, value in (("start time", start_time), ("end time", end_time), ("category", category))
            if not (value or "").strip()
        ]
        if missing:
            raise ValidationError("Missing required field(s): " + ", ".join(missing))
        parsed_date = parse_date(entry_date)
        span = compute_duration(start_time, end_time)
        return cls(
            date=parsed_date,
            start_time=start_time.strip(),
            end_time=end_time.strip(),
            category=category,
            duration_minutes=span.total_minutes,
            duration=span.formatted,
            description=description or "",
            has_phone=bool(has_phone),
            has_tv_on=bool(has_tv_on),
        )

    def context_flags(self) -> List[str]:
        flags = []
        if self.has_phone:
            flags.append("Had phone")
        if self.has_tv_on:
            flags.append("TV was on")
        return flags


@dataclass(frozen=True)
class CategoryAggregate:
    """Total time and share of a 24h day for one category label."""

    category: str
    total_minutes: int
    percentage_of_day: str


@dataclass(frozen=True)
class AnalysisResult:
    analysis: Tuple[CategoryAggregate, ...] = field(default_factory=tuple)
    insights: Tuple[str, ...] = field(default_factory=tuple)
