"""Application entry point for the time-use tracker."""
from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from reports.excel_export import ExcelExporter  # noqa: E402
from timeuse_app.tracker import __version__  # noqa: E402
from timeuse_app.tracker.controllers import CONFIG_DIR, AppController, ConfigManager  # noqa: E402
from timeuse_app.tracker.errors import ValidationError  # noqa: E402
from timeuse_app.tracker.store import EntryStore  # noqa: E402

LOG_DIR = CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "app.log"

ENTRY_FIELDS = ("date", "start_time", "end_time", "category", "description", "has_phone", "has_tv_on")
TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def configure_logging(log_file: Path = LOG_FILE) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=3)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[handler, logging.StreamHandler()],
    )
    logging.info("Time Tracker v%s starting", __version__)


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUE_VALUES


def load_entries(controller: AppController, path: Path) -> int:
    """Submit each row of a CSV or JSON file through the entry form."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            rows = data.get("entries", [])
        else:
            rows = data
        if not isinstance(rows, list):
            raise ValidationError(f"{path.name}: expected a list of entries")
    else:
        # utf-8-sig drops the byte-order mark spreadsheet exports start with
        with path.open("r", newline="", encoding="utf-8-sig") as fh:
            rows = list(csv.DictReader(fh))
    loaded = 0
    for index, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise ValidationError(f"{path.name} row {index}: expected an object")
        fields = {name: row.get(name, "") for name in ENTRY_FIELDS if name in row}
        for flag in ("has_phone", "has_tv_on"):
            fields[flag] = _as_bool(fields.get(flag))
        try:
            controller.add_entry(**fields)
        except ValidationError as exc:
            raise ValidationError(f"{path.name} row {index}: {exc}") from exc
        loaded += 1
    logging.getLogger(__name__).info("Loaded %s entries from %s", loaded, path)
    return loaded


def build_controller(config_manager: ConfigManager) -> AppController:
    exporter = ExcelExporter(Path(config_manager.config.export_path))
    return AppController(EntryStore(), exporter, config_manager)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="timeuse_app")
    parser.add_argument("--entries", type=Path, help="CSV or JSON file of entries to log")
    parser.add_argument("--excel", action="store_true", help="Write the Excel report")
    parser.add_argument("--chart", action="store_true", help="Render the distribution chart")
    parser.add_argument("--version", action="store_true", help="Print app version and exit")
    return parser.parse_args(argv)


def run(controller: AppController, args: argparse.Namespace) -> List[str]:
    if args.entries:
        load_entries(controller, args.entries)
    controller.set_tab("analytics")
    lines = controller.analytics_lines()
    if args.excel:
        lines.append(f"Excel report: {controller.export_to_excel()}")
    if args.chart:
        chart = controller.render_chart()
        lines.append(f"Chart: {chart}" if chart else "Chart: no data")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.version:
        print(__version__)
        return 0
    configure_logging()
    config_manager = ConfigManager()
    controller = build_controller(config_manager)
    try:
        lines = run(controller, args)
    except (ValidationError, FileNotFoundError) as exc:
        logging.error("%s", exc)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
