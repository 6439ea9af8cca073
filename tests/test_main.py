import json

import pytest

from timeuse_app import main as app_main
from timeuse_app.tracker.controllers import AppController, ConfigManager
from timeuse_app.tracker.errors import ValidationError
from timeuse_app.tracker.store import EntryStore


@pytest.fixture
def controller(tmp_path):
    return AppController(EntryStore(), None, ConfigManager(config_dir=tmp_path / "config"))


def test_load_entries_from_csv(tmp_path, controller):
    source = tmp_path / "entries.csv"
    source.write_text(
        "date,start_time,end_time,category,description,has_phone,has_tv_on\n"
        "2024-04-01,07:00,07:20,Hygiene,Shower,no,no\n"
        "2024-04-01,09:00,12:00,Work,,yes,false\n",
        encoding="utf-8",
    )
    assert app_main.load_entries(controller, source) == 2
    entries = controller.store.snapshot()
    assert entries[0].duration == "0h 20m"
    assert entries[1].has_phone is True
    assert entries[1].has_tv_on is False


def test_load_entries_from_json(tmp_path, controller):
    source = tmp_path / "entries.json"
    source.write_text(
        json.dumps({"entries": [{"date": "2024-04-02", "start_time": "18:00", "end_time": "19:00", "category": "Family"}]}),
        encoding="utf-8",
    )
    assert app_main.load_entries(controller, source) == 1
    assert controller.analytics().insights == ("Try to increase family time to at least 2 hours per day",)


def test_load_entries_reports_bad_row(tmp_path, controller):
    source = tmp_path / "entries.json"
    source.write_text(
        json.dumps([
            {"date": "2024-04-02", "start_time": "18:00", "end_time": "19:00", "category": "Family"},
            {"date": "2024-04-02", "start_time": "23:00", "end_time": "01:00", "category": "Sleep"},
        ]),
        encoding="utf-8",
    )
    with pytest.raises(ValidationError, match="row 2"):
        app_main.load_entries(controller, source)
    assert len(controller.store) == 1


def test_load_entries_missing_file(tmp_path, controller):
    with pytest.raises(FileNotFoundError):
        app_main.load_entries(controller, tmp_path / "nope.csv")


def test_run_prints_analytics_and_chart(tmp_path, controller):
    source = tmp_path / "entries.csv"
    source.write_text(
        "date,start_time,end_time,category\n2024-04-01,06:00,17:00,Work\n",
        encoding="utf-8",
    )
    args = app_main.parse_args(["--entries", str(source), "--chart"])
    controller.config_manager.config.chart_path = str(tmp_path / "chart.png")
    lines = app_main.run(controller, args)
    assert lines[0] == "Work: 11h 0m (45.8% of day)"
    assert lines[1] == "Consider reducing work time (11h) for better work-life balance"
    assert lines[-1] == f"Chart: {tmp_path / 'chart.png'}"
    assert controller.state.active_tab == "analytics"


def test_version_flag(capsys):
    assert app_main.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == app_main.__version__


def test_load_entries_from_csv_with_byte_order_mark(tmp_path, controller):
    source = tmp_path / "excel.csv"
    source.write_text(
        "date,start_time,end_time,category\n2024-04-03,08:00,09:30,Chores\n",
        encoding="utf-8-sig",
    )
    assert app_main.load_entries(controller, source) == 1
    assert controller.store.snapshot()[0].duration_minutes == 90


@pytest.mark.parametrize("payload", [[1, {"category": "x"}], ["not an entry"]])
def test_load_entries_rejects_non_object_rows(tmp_path, controller, payload):
    source = tmp_path / "entries.json"
    source.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValidationError, match="row 1: expected an object"):
        app_main.load_entries(controller, source)


@pytest.mark.parametrize("payload", ["just text", 42, {"entries": "nope"}])
def test_load_entries_rejects_non_list_documents(tmp_path, controller, payload):
    source = tmp_path / "entries.json"
    source.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValidationError, match="expected a list of entries"):
        app_main.load_entries(controller, source)


def test_main_reports_bad_json_without_traceback(tmp_path, monkeypatch):
    source = tmp_path / "entries.json"
    source.write_text(json.dumps(["not an entry"]), encoding="utf-8")
    monkeypatch.setattr(app_main, "configure_logging", lambda: None)
    monkeypatch.setattr(app_main, "ConfigManager", lambda: ConfigManager(config_dir=tmp_path / "config"))
    assert app_main.main(["--entries", str(source)]) == 1
