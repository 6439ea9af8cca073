"""Chart rendering for the analytics view."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .models import CategoryAggregate

LOGGER = logging.getLogger(__name__)


def render_distribution_chart(analysis: Sequence[CategoryAggregate], path: Path) -> Optional[Path]:
    """Save a bar chart of hours per category; returns None when there is nothing to draw."""

    if not analysis:
        LOGGER.info("No categories to chart")
        return None
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    categories = [item.category for item in analysis]
    hours = [item.total_minutes / 60.0 for item in analysis]
    fig, ax = plt.subplots(figsize=(6, 4))
    bars = ax.bar(categories, hours, color="#4A90E2")
    for bar, item in zip(bars, analysis):
        ax.annotate(
            f"{item.percentage_of_day}%",
            (bar.get_x() + bar.get_width() / 2, bar.get_height()),
            ha="center",
            va="bottom",
            fontsize=8,
        )
    ax.set_ylabel("Hours")
    ax.set_title("Time distribution")
    ax.tick_params(axis="x", rotation=30)
    fig.tight_layout()
    fig.savefig(path, format="png")
    plt.close(fig)
    LOGGER.info("Rendered distribution chart to %s", path)
    return path
