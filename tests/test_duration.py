import pytest

from timeuse_app.tracker.duration import compute_duration, format_minutes, parse_time
from timeuse_app.tracker.errors import ValidationError


def test_compute_duration_working_day():
    span = compute_duration("09:00", "17:30")
    assert (span.hours, span.minutes, span.total_minutes) == (8, 30, 510)
    assert span.formatted == "8h 30m"


def test_compute_duration_same_time_is_zero():
    span = compute_duration("12:15", "12:15")
    assert span.total_minutes == 0
    assert span.formatted == "0h 0m"


@pytest.mark.parametrize(
    "start,end",
    [("00:00", "23:59"), ("06:07", "06:59"), ("13:45", "15:05"), ("08:00", "08:01")],
)
def test_total_minutes_matches_hours_and_minutes(start, end):
    span = compute_duration(start, end)
    assert span.total_minutes >= 0
    assert span.total_minutes == 60 * span.hours + span.minutes


def test_seconds_are_floored_to_whole_minutes():
    assert compute_duration("10:00:00", "10:01:59").total_minutes == 1


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationError):
        compute_duration("23:00", "01:00")


@pytest.mark.parametrize("value", ["", "9am", "25:00", "12:60", None])
def test_parse_time_rejects_malformed(value):
    with pytest.raises(ValidationError):
        parse_time(value)


def test_format_minutes():
    assert format_minutes(650) == "10h 50m"
    assert format_minutes(59) == "0h 59m"
