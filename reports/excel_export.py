"""Excel export utilities for logged entries and analytics."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

import pandas as pd

from timeuse_app.tracker.models import AnalysisResult, TimeEntry

LOGGER = logging.getLogger(__name__)


class ExcelExporter:
    def __init__(self, export_path: Path):
        self.export_path = Path(export_path)
        self.export_path.parent.mkdir(parents=True, exist_ok=True)

    def export(self, entries: Iterable[TimeEntry], result: AnalysisResult) -> Path:
        """Write entries, category totals and insights to a fresh workbook."""
        rows = [
            (
                entry.date,
                entry.start_time,
                entry.end_time,
                entry.category,
                entry.description,
                entry.duration,
                entry.duration_minutes,
                entry.has_phone,
                entry.has_tv_on,
            )
            for entry in entries
        ]
        entries_df = pd.DataFrame(
            rows,
            columns=[
                "Date",
                "StartTime",
                "EndTime",
                "Category",
                "Description",
                "Duration",
                "DurationMinutes",
                "HasPhone",
                "HasTvOn",
            ],
        )
        analysis_df = pd.DataFrame(
            [(item.category, item.total_minutes, item.percentage_of_day) for item in result.analysis],
            columns=["Category", "TotalMinutes", "PercentageOfDay"],
        )
        insights_df = pd.DataFrame(list(result.insights), columns=["Insight"])

        with pd.ExcelWriter(self.export_path, engine="openpyxl", mode="w") as writer:
            entries_df.to_excel(writer, sheet_name="Entries", index=False)
            analysis_df.to_excel(writer, sheet_name="Analysis", index=False)
            insights_df.to_excel(writer, sheet_name="Insights", index=False)
            meta_df = pd.DataFrame(
                [[datetime.now(), len(entries_df)]], columns=["ExportedAt", "RowCount"]
            )
            meta_df.to_excel(writer, sheet_name="Meta", index=False)
        LOGGER.info("Exported %s entries to %s", len(entries_df), self.export_path)
        return self.export_path
