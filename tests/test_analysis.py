"""Tests für die Raster-Prüfung (Überlappungen, Einträge außerhalb des Rasters)."""

from analysis.overlap_report import check_schedule, find_overlaps
from grid.time_grid import TimeGrid
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday


def _entry(start: str, end: str, subject: str, day: str = "Monday") -> ScheduleEntry:
    return ScheduleEntry(subject=subject, day=day, start=start, end=end)


class TestFindOverlaps:
    def test_pairs_in_insertion_order(self):
        a = _entry("09:00", "10:00", "A")
        b = _entry("09:30", "10:30", "B")
        c = _entry("10:30", "11:00", "C")
        pairs = find_overlaps([a, b, c])
        assert [(x.subject, y.subject) for x, y in pairs] == [("A", "B")]

    def test_touching_entries_do_not_overlap(self):
        assert find_overlaps([_entry("09:00", "10:00", "A"),
                              _entry("10:00", "11:00", "B")]) == []

    def test_different_days(self):
        assert find_overlaps([_entry("09:00", "10:00", "A"),
                              _entry("09:00", "10:00", "B", day="Tuesday")]) == []


class TestCheckSchedule:
    def test_clean(self):
        report = check_schedule([_entry("09:00", "10:00", "A")], TimeGrid())
        assert report.is_clean

    def test_overlap_names_winner(self):
        a = _entry("09:00", "10:00", "A")
        b = _entry("09:30", "10:30", "B")
        report = check_schedule([a, b], TimeGrid())
        assert len(report.issues) == 1
        issue = report.issues[0]
        assert issue.check == "overlap"
        assert issue.day == Weekday.MONDAY
        assert issue.entry_ids == [a.id, b.id]
        assert "Vorrang im Raster: B" in issue.description

    def test_outside_grid(self):
        report = check_schedule([_entry("06:00", "08:00", "Früh"),
                                 _entry("18:30", "20:00", "Spät")], TimeGrid())
        assert [i.check for i in report.issues] == ["outside_grid", "outside_grid"]
        assert all(i.severity == "warning" for i in report.issues)
