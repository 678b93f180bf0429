"""Tests für Tageskürzel, Tagesnamen und Uhrzeit-Umrechnung."""

import pytest

from data.day_codes import normalize_day_names, resolve_day_code
from models.clock import (
    format_clock_12h,
    format_hhmm,
    parse_clock,
    parse_clock_12h,
    parse_hhmm,
    twelve_to_minutes,
)
from models.weekday import Weekday

MON, TUE, WED, THU, FRI, SAT, SUN = (
    Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY,
    Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY,
)


# ─── KÜRZEL ───────────────────────────────────────────────────────────────────

class TestResolveDayCode:
    @pytest.mark.parametrize("code,expected", [
        ("M", [MON]),
        ("T", [TUE]),
        ("W", [WED]),
        ("TH", [THU]),
        ("F", [FRI]),
        ("S", [SAT]),
        ("SU", [SUN]),
        ("MTH", [MON, THU]),
        ("TTh", [TUE, THU]),
        ("MWF", [MON, WED, FRI]),
        ("MW", [MON, WED]),
    ])
    def test_known_codes(self, code, expected):
        assert resolve_day_code(code) == expected

    def test_single_t_is_always_tuesday(self):
        """Ein alleinstehendes T wird nie als Donnerstag gelesen."""
        assert resolve_day_code("T") == [TUE]
        assert resolve_day_code("TF") == [TUE, FRI]

    def test_case_insensitive(self):
        assert resolve_day_code("tth") == [TUE, THU]
        assert resolve_day_code("mwf") == [MON, WED, FRI]

    def test_separators_skipped(self):
        assert resolve_day_code("M-W-F") == [MON, WED, FRI]

    def test_duplicates_removed(self):
        assert resolve_day_code("MM") == [MON]

    def test_unknown_returns_empty_list(self):
        """Unbekannte Kürzel ergeben eine leere Liste, nie None."""
        assert resolve_day_code("XYZ") == []
        assert resolve_day_code("") == []
        assert resolve_day_code(None) == []


class TestNormalizeDayNames:
    def test_single_name(self):
        assert normalize_day_names("Monday") == [MON]

    def test_comma_list(self):
        assert normalize_day_names("Monday, Thursday") == [MON, THU]

    def test_and_list_with_short_names(self):
        assert normalize_day_names("Mon and Thu") == [MON, THU]

    def test_variant_spellings(self):
        assert normalize_day_names("Tues/Thurs") == [TUE, THU]
        assert normalize_day_names("Mondays") == [MON]

    def test_code_fallback(self):
        """Liefert die KI ein Kürzel statt Namen, wird es trotzdem aufgelöst."""
        assert normalize_day_names("MTH") == [MON, THU]

    def test_unknown(self):
        assert normalize_day_names("xyz") == []
        assert normalize_day_names("") == []


class TestWeekday:
    def test_from_name_variants(self):
        assert Weekday.from_name("wednesday") == WED
        assert Weekday.from_name("Wed") == WED
        assert Weekday.from_name(WED) == WED

    def test_from_name_unknown_raises(self):
        with pytest.raises(ValueError):
            Weekday.from_name("Funday")

    def test_index_and_short(self):
        assert MON.index == 0
        assert SUN.index == 6
        assert THU.short == "Thu"


# ─── UHRZEITEN ────────────────────────────────────────────────────────────────

class TestClock:
    def test_hhmm_roundtrip(self):
        assert parse_hhmm("08:30") == 510
        assert format_hhmm(510) == "08:30"

    def test_hhmm_invalid(self):
        with pytest.raises(ValueError):
            parse_hhmm("25:00")
        with pytest.raises(ValueError):
            parse_hhmm("8.30")

    def test_end_of_day(self):
        assert parse_hhmm("24:00") == 24 * 60
        assert parse_hhmm(format_hhmm(24 * 60)) == 24 * 60
        with pytest.raises(ValueError):
            parse_hhmm("24:30")

    def test_midnight_and_noon(self):
        """12:00AM → 00:00, 12:00PM → 12:00."""
        assert twelve_to_minutes(12, 0, "AM") == 0
        assert twelve_to_minutes(12, 0, "PM") == 12 * 60
        assert format_hhmm(parse_clock_12h("12:00AM")) == "00:00"
        assert format_hhmm(parse_clock_12h("12:00PM")) == "12:00"

    def test_pm_adds_twelve(self):
        assert parse_clock_12h("1:15PM") == 13 * 60 + 15
        assert parse_clock_12h("8:30 am") == 8 * 60 + 30

    def test_12h_roundtrip_all_quarter_hours(self):
        """Jede Viertelstunde übersteht 24h → 12h → 24h unverändert."""
        for minutes in range(0, 24 * 60, 15):
            assert parse_clock_12h(format_clock_12h(minutes)) == minutes

    def test_format_12h(self):
        assert format_clock_12h(0) == "12:00AM"
        assert format_clock_12h(13 * 60 + 5) == "1:05PM"

    def test_invalid_12h_hour(self):
        with pytest.raises(ValueError):
            twelve_to_minutes(13, 0, "PM")
        with pytest.raises(ValueError):
            twelve_to_minutes(0, 0, "AM")

    def test_parse_clock_accepts_both(self):
        assert parse_clock("14:00") == 840
        assert parse_clock("2:00PM") == 840
