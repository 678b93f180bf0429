"""Tests für TimeGrid und GridPlacementEngine."""

import pytest

from config.schema import GridConfig
from grid.placement import GridPlacementEngine, PlacementKind, span_slots
from grid.time_grid import TimeGrid
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday


def _entry(start: str, end: str, subject: str = "Mathe", day: str = "Monday") -> ScheduleEntry:
    return ScheduleEntry(subject=subject, day=day, start=start, end=end)


# ─── ZEITRASTER ───────────────────────────────────────────────────────────────

class TestTimeGrid:
    def test_default_has_25_boundaries(self):
        grid = TimeGrid()
        assert len(grid) == 25
        assert grid.slot_times[0] == "07:00"
        assert grid.slot_times[-1] == "19:00"
        assert grid.last_index == 24

    def test_custom_slot_width(self):
        grid = TimeGrid(GridConfig(day_start="08:00", day_end="12:00", slot_minutes=15))
        assert len(grid) == 17
        assert grid.time_at(1) == "08:15"

    def test_minutes_at_out_of_range(self):
        grid = TimeGrid()
        assert grid.minutes_at(4) == 9 * 60
        with pytest.raises(IndexError):
            grid.minutes_at(25)
        with pytest.raises(IndexError):
            grid.minutes_at(-1)

    def test_boundary_at_clamps(self):
        grid = TimeGrid()
        assert grid.boundary_at(30) == 19 * 60

    def test_index_of(self):
        grid = TimeGrid()
        assert grid.index_of("09:00") == 4
        assert grid.index_of(19 * 60) == 24
        with pytest.raises(ValueError):
            grid.index_of("09:15")
        with pytest.raises(ValueError):
            grid.index_of("06:30")

    def test_bucket_arithmetic(self):
        grid = TimeGrid()
        assert grid.bucket_start(9 * 60 + 15) == 9 * 60
        assert grid.bucket_end(10 * 60 + 5) == 10 * 60 + 30
        assert grid.bucket_end(10 * 60) == 10 * 60

    def test_crop(self):
        grid = TimeGrid()
        assert grid.crop(9 * 60 + 15, 10 * 60 + 5) == [540, 570, 600, 630]
        assert grid.crop(5 * 60, 8 * 60) == [420, 450, 480]


# ─── PLATZIERUNG ──────────────────────────────────────────────────────────────

class TestSpan:
    def test_ceiling(self):
        assert span_slots(_entry("09:15", "10:05")) == 2
        assert span_slots(_entry("09:00", "10:00")) == 2
        assert span_slots(_entry("09:00", "09:10")) == 1
        assert span_slots(_entry("08:00", "09:45")) == 4


class TestPlacement:
    def test_unaligned_entry(self):
        """09:15–10:05: START um 09:00 mit Spannweite 2, 09:30 ist Fortsetzung."""
        e = _entry("09:15", "10:05")
        engine = GridPlacementEngine([e])

        p = engine.placement(Weekday.MONDAY, "09:00")
        assert p.kind == PlacementKind.START
        assert p.span == 2
        assert p.entry.id == e.id

        cont = engine.placement(Weekday.MONDAY, "09:30")
        assert cont.kind == PlacementKind.CONTINUATION
        assert cont.entry.id == e.id

        assert engine.placement(Weekday.MONDAY, "10:00").is_empty
        assert engine.placement(Weekday.MONDAY, "08:30").is_empty

    def test_exactly_one_start_per_entry(self):
        entries = [
            _entry("07:45", "09:10", "A"),
            _entry("10:00", "10:20", "B"),
            _entry("13:05", "16:55", "C"),
        ]
        engine = GridPlacementEngine(entries)
        column = engine.column(Weekday.MONDAY)
        for e in entries:
            starts = [p for p in column if p.is_start and p.entry.id == e.id]
            conts = [p for p in column
                     if p.kind == PlacementKind.CONTINUATION and p.entry.id == e.id]
            assert len(starts) == 1
            assert len(conts) == starts[0].span - 1

    def test_other_day_is_empty(self):
        engine = GridPlacementEngine([_entry("09:00", "10:00")])
        assert engine.placement("Tuesday", "09:00").is_empty

    def test_overlap_last_added_wins(self):
        """Überlappende Einträge: der zuletzt hinzugefügte gewinnt die Zelle."""
        a = _entry("09:00", "10:00", "A")
        b = _entry("09:30", "10:30", "B")
        engine = GridPlacementEngine([a, b])

        p0900 = engine.placement(Weekday.MONDAY, "09:00")
        assert p0900.is_start and p0900.entry.id == a.id and p0900.span == 2

        p0930 = engine.placement(Weekday.MONDAY, "09:30")
        assert p0930.is_start and p0930.entry.id == b.id and p0930.span == 2

        p1000 = engine.placement(Weekday.MONDAY, "10:00")
        assert p1000.kind == PlacementKind.CONTINUATION
        assert p1000.entry.id == b.id

    def test_overlap_deterministic(self):
        a = _entry("09:00", "10:00", "A")
        b = _entry("09:30", "10:30", "B")
        first = GridPlacementEngine([a, b]).column(Weekday.MONDAY)
        second = GridPlacementEngine([a, b]).column(Weekday.MONDAY)
        assert first == second

    def test_entry_starting_before_grid_is_clamped(self):
        engine = GridPlacementEngine([_entry("06:00", "08:00")])
        p = engine.placement(Weekday.MONDAY, "07:00")
        assert p.is_start
        assert p.span == 2
        assert engine.placement(Weekday.MONDAY, "07:30").kind == PlacementKind.CONTINUATION
        assert engine.placement(Weekday.MONDAY, "08:00").is_empty

    def test_entry_entirely_before_grid_invisible(self):
        engine = GridPlacementEngine([_entry("05:00", "06:30")])
        assert all(p.is_empty for p in engine.column(Weekday.MONDAY))

    def test_matrix_keys(self):
        engine = GridPlacementEngine([_entry("09:00", "10:00")])
        matrix = engine.matrix(["Monday", "Tuesday"])
        assert len(matrix) == 2 * 25
        assert matrix[(Weekday.MONDAY, 540)].is_start
        assert matrix[(Weekday.TUESDAY, 540)].is_empty
