"""Category totals and rule-based insights over logged entries."""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

from .duration import format_minutes
from .errors import ValidationError
from .models import AnalysisResult, CategoryAggregate, TimeEntry

LOGGER = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440
WORK_LIMIT_MINUTES = 600
FAMILY_MINIMUM_MINUTES = 120
CHORES_LIMIT_MINUTES = 180


def group_by_category(entries: Iterable[TimeEntry]) -> Dict[str, List[TimeEntry]]:
    """Group entries on the exact category string, keeping first-seen order."""

    groups: Dict[str, List[TimeEntry]] = {}
    for entry in entries:
        if not (entry.category or "").strip():
            raise ValidationError(f"Entry on {entry.date} {entry.start_time} has no category")
        groups.setdefault(entry.category, []).append(entry)
    return groups


def percentage_of_day(total_minutes: int) -> str:
    # halves round up, applied to the exact value of the float share
    share = Decimal(total_minutes / MINUTES_PER_DAY * 100)
    return str(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize_categories(entries: Iterable[TimeEntry]) -> List[CategoryAggregate]:
    summaries = []
    for category, members in group_by_category(entries).items():
        total = sum(entry.duration_minutes for entry in members)
        summaries.append(
            CategoryAggregate(
                category=category,
                total_minutes=total,
                percentage_of_day=percentage_of_day(total),
            )
        )
    return summaries


def generate_insights(analysis: Sequence[CategoryAggregate]) -> List[str]:
    """Apply the advisory rules to each aggregate in list order.

    Rules are independent; one category may produce several messages.
    """

    insights: List[str] = []
    for item in analysis:
        label = item.category.lower()
        if "work" in label and item.total_minutes > WORK_LIMIT_MINUTES:
            insights.append(
                f"Consider reducing work time ({item.total_minutes // 60}h) for better work-life balance"
            )
        if "family" in label and item.total_minutes < FAMILY_MINIMUM_MINUTES:
            insights.append("Try to increase family time to at least 2 hours per day")
        if ("chores" in label or "hygiene" in label) and item.total_minutes > CHORES_LIMIT_MINUTES:
            insights.append(f"Look for ways to optimize {label} routine")
    return insights


def aggregate(entries: Iterable[TimeEntry]) -> AnalysisResult:
    """Summarise the full entry history, regardless of date."""

    entries = tuple(entries)
    analysis = summarize_categories(entries)
    insights = generate_insights(analysis)
    LOGGER.debug(
        "Aggregated %s entries into %s categories (%s insights)", len(entries), len(analysis), len(insights)
    )
    return AnalysisResult(analysis=tuple(analysis), insights=tuple(insights))


def format_aggregate(item: CategoryAggregate) -> str:
    return f"{item.category}: {format_minutes(item.total_minutes)} ({item.percentage_of_day}% of day)"
