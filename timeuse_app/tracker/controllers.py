"""Controllers tying shell state, the entry store, and reports together."""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from . import __version__
from .aggregation import aggregate, format_aggregate
from .charts import render_distribution_chart
from .errors import ValidationError
from .models import AnalysisResult, DateInput, TimeEntry, parse_date
from .store import EntryStore

if TYPE_CHECKING:
    from reports.excel_export import ExcelExporter

LOGGER = logging.getLogger(__name__)


CONFIG_DIR = Path.home() / ".time_tracker"
CONFIG_FILE_NAME = "config.toml"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "default_config.toml"

TABS = ("input", "daily", "analytics")


def _toml_string(value: str) -> str:
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class AppConfig:
    export_path: str
    chart_path: str
    default_tab: str = "input"
    show_insights: bool = True

    @classmethod
    def from_toml(cls, data: dict) -> "AppConfig":
        default_tab = str(data.get("default_tab", "input") or "input")
        if default_tab not in TABS:
            LOGGER.warning("Unknown default_tab %r in config; using 'input'", default_tab)
            default_tab = "input"
        return cls(
            export_path=data.get("export_path", "time_report.xlsx"),
            chart_path=data.get("chart_path", "time_distribution.png"),
            default_tab=default_tab,
            show_insights=bool(data.get("show_insights", True)),
        )

    def to_toml(self) -> str:
        lines = [
            f"export_path = {_toml_string(self.export_path)}",
            f"chart_path = {_toml_string(self.chart_path)}",
            f"default_tab = {_toml_string(self.default_tab)}",
            f"show_insights = {str(bool(self.show_insights)).lower()}",
        ]
        return "\n".join(lines) + "\n"


class ConfigManager:
    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self.config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config = self._load()

    def _load(self) -> AppConfig:
        if self.config_file.exists():
            with open(self.config_file, "rb") as fh:
                data = tomllib.load(fh)
                return AppConfig.from_toml(data)
        with open(DEFAULT_CONFIG_PATH, "rb") as fh:
            data = tomllib.load(fh)
            config = AppConfig.from_toml(data)
            self.save(config)
            return config

    def save(self, config: Optional[AppConfig] = None) -> None:
        cfg = config or self.config
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(cfg.to_toml(), encoding="utf-8")
        LOGGER.info("Saved configuration to %s", self.config_file)


@dataclass
class EntryDraft:
    """Form fields as currently typed by the user."""

    date: str = field(default_factory=lambda: date.today().isoformat())
    start_time: str = ""
    end_time: str = ""
    category: str = ""
    description: str = ""
    has_phone: bool = False
    has_tv_on: bool = False


@dataclass
class ShellState:
    active_tab: str = "input"
    selected_date: date = field(default_factory=date.today)
    draft: EntryDraft = field(default_factory=EntryDraft)


class AppController:
    def __init__(
        self,
        store: EntryStore,
        exporter: Optional[ExcelExporter],
        config_manager: ConfigManager,
        state: Optional[ShellState] = None,
    ) -> None:
        self.store = store
        self.exporter = exporter
        self.config_manager = config_manager
        self.state = state or ShellState(active_tab=config_manager.config.default_tab)
        LOGGER.debug("Controller ready (v%s)", __version__)

    # View state
    def set_tab(self, tab: str) -> str:
        if tab not in TABS:
            raise ValidationError(f"Unknown view {tab!r}; expected one of {', '.join(TABS)}")
        self.state.active_tab = tab
        return tab

    def select_date(self, value: DateInput) -> date:
        self.state.selected_date = parse_date(value)
        return self.state.selected_date

    def update_draft(self, **fields) -> EntryDraft:
        unknown = [name for name in fields if not hasattr(self.state.draft, name)]
        if unknown:
            raise ValidationError("Unknown form field(s): " + ", ".join(sorted(unknown)))
        self.state.draft = replace(self.state.draft, **fields)
        return self.state.draft

    # Entry submission
    def submit_entry(self) -> TimeEntry:
        """Turn the current draft into a stored entry and clear the form.

        The draft date is kept so consecutive entries land on the same day.
        """
        draft = self.state.draft
        entry = TimeEntry.create(
            draft.date,
            draft.start_time,
            draft.end_time,
            draft.category,
            description=draft.description,
            has_phone=draft.has_phone,
            has_tv_on=draft.has_tv_on,
        )
        self.store.add(entry)
        self.state.draft = EntryDraft(date=draft.date)
        LOGGER.info("Logged %s on %s (%s)", entry.category, entry.date, entry.duration)
        return entry

    def add_entry(self, **fields) -> TimeEntry:
        self.update_draft(**fields)
        return self.submit_entry()

    # Data retrieval
    def daily_entries(self, selected_date: Optional[DateInput] = None) -> List[TimeEntry]:
        day = parse_date(selected_date) if selected_date is not None else self.state.selected_date
        return self.store.entries_for_date(day)

    def analytics(self) -> AnalysisResult:
        return aggregate(self.store.snapshot())

    def analytics_lines(self) -> List[str]:
        result = self.analytics()
        lines = [format_aggregate(item) for item in result.analysis]
        if self.config_manager.config.show_insights:
            lines.extend(result.insights)
        return lines

    # Reports
    def export_to_excel(self) -> Path:
        if self.exporter is None:
            raise RuntimeError("No Excel exporter configured")
        return self.exporter.export(self.store.snapshot(), self.analytics())

    def render_chart(self, path: Optional[Path] = None) -> Optional[Path]:
        target = Path(path) if path else Path(self.config_manager.config.chart_path)
        return render_distribution_chart(self.analytics().analysis, target)

    def save_config(self, default_tab: Optional[str] = None) -> None:
        cfg = self.config_manager.config
        if default_tab is not None:
            if default_tab not in TABS:
                raise ValidationError(f"Unknown view {default_tab!r}; expected one of {', '.join(TABS)}")
            cfg.default_tab = default_tab
        self.config_manager.save(cfg)
