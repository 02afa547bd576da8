"""Tests for the input parser."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from timerpie.core.modes import Mode
from timerpie.core.parser import TimeSpec, end_clock_label, parse

TEN_AM = datetime(2024, 3, 14, 10, 0, 0)
NEW_YORK = ZoneInfo("America/New_York")


# ---------------------------------------------------------------------------
# CCW / CW durations
# ---------------------------------------------------------------------------


class TestDurationModes:
    """CCW and CW take a plain number of minutes."""

    @pytest.mark.parametrize("mode", [Mode.CCW, Mode.CW])
    @pytest.mark.parametrize("text, minutes", [("1", 1.0), ("25", 25.0), ("2.5", 2.5), ("180", 180.0)])
    def test_plain_minutes(self, mode: Mode, text: str, minutes: float) -> None:
        assert parse(text, mode, TEN_AM, 180) == TimeSpec(minutes, None)

    def test_values_above_max_are_capped(self) -> None:
        assert parse("200", Mode.CCW, TEN_AM, 180).total_minutes == 180
        assert parse("999", Mode.CCW, TEN_AM, 180).total_minutes == 180

    def test_custom_max(self) -> None:
        assert parse("90", Mode.CW, TEN_AM, 60).total_minutes == 60

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse(" 15 ", Mode.CCW, TEN_AM, 180) == TimeSpec(15.0)

    @pytest.mark.parametrize(
        "text",
        ["0", "-5", "abc", "", "   ", "nan", "inf", "12abc", "1:30", "1_5", "1e2", "+5"],
    )
    def test_rejections(self, text: str) -> None:
        assert parse(text, Mode.CCW, TEN_AM, 180) is None

    @pytest.mark.parametrize("text, minutes", [(".5", 0.5), ("5.", 5.0), ("007", 7.0)])
    def test_decimal_edge_forms(self, text: str, minutes: float) -> None:
        assert parse(text, Mode.CCW, TEN_AM, 180) == TimeSpec(minutes)

    def test_rejects_input_longer_than_twenty_characters(self) -> None:
        assert parse("1" + "0" * 20, Mode.CCW, TEN_AM, 180) is None


# ---------------------------------------------------------------------------
# END: h:m
# ---------------------------------------------------------------------------


class TestEndClockFormat:
    """``h:m`` targets the next matching wall-clock instant."""

    def test_later_today(self) -> None:
        assert parse("10:30", Mode.END, TEN_AM, 180) == TimeSpec(30, 30)

    def test_single_digit_fields(self) -> None:
        assert parse("11:5", Mode.END, TEN_AM, 180) == TimeSpec(65, 5)

    def test_past_time_wraps_to_tomorrow_and_is_capped(self) -> None:
        assert parse("9:30", Mode.END, TEN_AM, 180).total_minutes == 180

    def test_now_itself_wraps_to_tomorrow(self) -> None:
        assert parse("10:00", Mode.END, TEN_AM, 180).total_minutes == 180

    def test_rounds_partial_minutes_up(self) -> None:
        now = datetime(2024, 3, 14, 10, 0, 20)
        assert parse("10:30", Mode.END, now, 180) == TimeSpec(30, 30)

    def test_wrap_is_used_when_max_allows(self) -> None:
        now = datetime(2024, 3, 14, 23, 50, 0)
        assert parse("0:10", Mode.END, now, 180) == TimeSpec(20, 10)

    @pytest.mark.parametrize("text", [":", ":5", "10:", "::", "1:2:3", "24:00", "10:60", "a:10", "123:00"])
    def test_malformed_clock_times(self, text: str) -> None:
        assert parse(text, Mode.END, TEN_AM, 180) is None


# ---------------------------------------------------------------------------
# END: hhmm
# ---------------------------------------------------------------------------


class TestEndCompactFormat:
    """3-4 bare digits are read as ``hhmm``."""

    def test_afternoon_hour_is_unambiguous(self) -> None:
        assert parse("1230", Mode.END, TEN_AM, 180) == TimeSpec(150, 30)

    def test_three_digits(self) -> None:
        assert parse("1045", Mode.END, TEN_AM, 180) == TimeSpec(45, 45)
        assert parse("945", Mode.END, datetime(2024, 3, 14, 9, 0), 180) == TimeSpec(45, 45)

    def test_morning_hour_prefers_the_pm_candidate_in_range(self) -> None:
        # 1:15 at 11:00 is far away as AM but 135 minutes away as PM.
        now = datetime(2024, 3, 14, 11, 0)
        assert parse("115", Mode.END, now, 180) == TimeSpec(135, 15)

    def test_morning_hour_prefers_the_am_candidate_in_range(self) -> None:
        now = datetime(2024, 3, 14, 8, 0)
        assert parse("0930", Mode.END, now, 180) == TimeSpec(90, 30)

    def test_neither_candidate_in_range_picks_nearer_and_caps(self) -> None:
        # 9:30 at 10:00: AM is 23.5 h away, PM 11.5 h away; PM wins, capped.
        assert parse("930", Mode.END, TEN_AM, 180) == TimeSpec(180, 30)

    def test_both_in_range_picks_nearer(self) -> None:
        now = datetime(2024, 3, 14, 11, 30)
        assert parse("1145", Mode.END, now, 1440) == TimeSpec(15, 45)

    @pytest.mark.parametrize("text", ["2400", "1060", "9999", "12345"])
    def test_out_of_range(self, text: str) -> None:
        assert parse(text, Mode.END, TEN_AM, 180) is None


# ---------------------------------------------------------------------------
# END: minute of hour
# ---------------------------------------------------------------------------


class TestEndMinuteFormat:
    """1-2 bare digits name a minute in the current or next hour."""

    def test_later_this_hour(self) -> None:
        now = datetime(2024, 3, 14, 10, 20)
        assert parse("45", Mode.END, now, 180) == TimeSpec(25, 45)

    def test_earlier_minute_rolls_into_next_hour(self) -> None:
        now = datetime(2024, 3, 14, 10, 20)
        assert parse("5", Mode.END, now, 180) == TimeSpec(45, 5)

    def test_current_minute_rolls_into_next_hour(self) -> None:
        assert parse("0", Mode.END, TEN_AM, 180) == TimeSpec(60, 0)

    @pytest.mark.parametrize("text", ["60", "99", "-5", "4a", "5.5"])
    def test_invalid_minutes(self, text: str) -> None:
        assert parse(text, Mode.END, TEN_AM, 180) is None


# ---------------------------------------------------------------------------
# end_clock_label()
# ---------------------------------------------------------------------------


class TestEndClockLabel:
    def test_formats_hours_and_padded_minutes(self) -> None:
        assert end_clock_label(65, TEN_AM) == "11:05"

    def test_crosses_midnight(self) -> None:
        assert end_clock_label(30, datetime(2024, 3, 14, 23, 45)) == "0:15"

    def test_uses_the_zone_of_now(self) -> None:
        now = datetime(2024, 3, 14, 10, 0, tzinfo=NEW_YORK)
        assert end_clock_label(90, now) == "11:30"


# ---------------------------------------------------------------------------
# Daylight-saving transitions
# ---------------------------------------------------------------------------


class TestDaylightSaving:
    """END targets are read on the wall clock but measured in real minutes."""

    def test_spring_forward_hour_is_not_counted(self) -> None:
        # 01:30 EST to 03:30 EDT is one real hour.
        now = datetime(2024, 3, 10, 1, 30, tzinfo=NEW_YORK)
        assert parse("3:30", Mode.END, now, 180) == TimeSpec(60, 30)

    def test_fall_back_hour_is_counted(self) -> None:
        # 00:30 EDT to 02:30 EST is three real hours.
        now = datetime(2024, 11, 3, 0, 30, tzinfo=NEW_YORK)
        assert parse("2:30", Mode.END, now, 240) == TimeSpec(180, 30)

    def test_compact_form_across_spring_forward(self) -> None:
        now = datetime(2024, 3, 10, 1, 30, tzinfo=NEW_YORK)
        assert parse("1530", Mode.END, now, 780) == TimeSpec(780, 30)

    def test_end_label_across_spring_forward(self) -> None:
        now = datetime(2024, 3, 10, 1, 30, tzinfo=NEW_YORK)
        assert end_clock_label(60, now) == "3:30"
