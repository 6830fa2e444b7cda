"""Tests for clock parsing and the SchedulingDay boundary.

Test data loaded from: data/fixtures/scenarios/clock.json
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import DAY, load_scenarios, make_day

_data = load_scenarios("clock")


class TestParseClock:
    """parse_clock: 'H:MM AM/PM' -> minutes since midnight."""

    @pytest.mark.parametrize("spec", _data["parse_clock"], ids=lambda s: s["id"])
    def test_parse_clock(self, spec):
        from field_scheduler.resolution import parse_clock

        assert parse_clock(spec["input"]) == spec["expected"]

    @pytest.mark.parametrize("spec", _data["invalid_clock"], ids=lambda s: s["id"])
    def test_invalid_clock_raises(self, spec):
        from field_scheduler.resolution import parse_clock

        with pytest.raises(ValueError):
            parse_clock(spec["input"])

    def test_non_string_raises(self):
        from field_scheduler.resolution import parse_clock

        with pytest.raises(ValueError):
            parse_clock(800)  # type: ignore[arg-type]


class TestFormatClock:

    def test_rounds_to_minute(self):
        from field_scheduler.resolution import format_clock

        assert format_clock(646.79) == "10:47"
        assert format_clock(480) == "08:00"

    def test_past_midnight(self):
        from field_scheduler.resolution import format_clock

        assert format_clock(1500) == "25:00"


class TestRoundMinutes:

    def test_half_rounds_up(self):
        from field_scheduler.resolution import round_minutes

        assert round_minutes(480.5) == 481
        assert round_minutes(481.5) == 482
        assert round_minutes(480.49) == 480


class TestParseIso:

    def test_zulu_suffix(self):
        from field_scheduler.resolution import parse_iso

        parsed = parse_iso("2025-01-06T09:00:00Z")
        assert parsed == datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)

    def test_naive(self):
        from field_scheduler.resolution import parse_iso

        assert parse_iso("2025-01-06T09:00:00") == datetime(2025, 1, 6, 9, 0)

    @pytest.mark.parametrize("value", [None, "", "  ", "tomorrow", 42, "2025-13-01"])
    def test_unparseable_returns_none(self, value):
        from field_scheduler.resolution import parse_iso

        assert parse_iso(value) is None


class TestSchedulingDay:
    """SchedulingDay converts minutes from local midnight to datetimes and back."""

    def test_to_datetime(self):
        day = make_day()
        assert day.to_datetime(510) == day.midnight + timedelta(minutes=510)
        assert day.to_datetime(510).date() == DAY

    def test_to_datetime_rolls_past_midnight(self):
        day = make_day()
        assert day.to_datetime(1500).date() == date(2025, 1, 7)

    def test_naive_datetime_is_taken_as_local(self):
        day = make_day()
        local = day.localize(datetime(2025, 1, 6, 9, 0))
        assert local.tzinfo is not None
        assert day.minutes_of_day(local) == 540

    def test_aware_datetime_converted(self):
        from field_scheduler.resolution import SchedulingDay, resolve_tz

        day = SchedulingDay(DAY, resolve_tz("Europe/Paris"))
        utc_nine = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)
        # Paris is UTC+1 in January
        assert day.minutes_of_day(utc_nine) == 600

    def test_is_same_day(self):
        day = make_day()
        assert day.is_same_day(datetime(2025, 1, 6, 23, 59))
        assert not day.is_same_day(datetime(2025, 1, 7, 0, 1))

    def test_unknown_timezone(self):
        from field_scheduler.resolution import resolve_tz

        with pytest.raises(ValueError):
            resolve_tz("Mars/Olympus_Mons")
