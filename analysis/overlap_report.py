"""Prüfung der Einträge auf Darstellungsprobleme im Raster.

Überlappungen werden bei der Eingabe nicht verhindert. Im Raster gewinnt
dann der zuletzt hinzugefügte Eintrag die gemeinsame Zelle; dieser Bericht
macht solche Fälle sichtbar.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from grid.time_grid import TimeGrid
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday


class ScheduleIssue(BaseModel):
    """Ein einzelnes Problem."""

    severity: Literal["error", "warning"]
    check: str           # "overlap" / "outside_grid"
    day: Weekday
    description: str
    entry_ids: list[str]


class OverlapReport(BaseModel):
    """Ergebnis der Prüfung."""

    issues: list[ScheduleIssue]

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KEINE KONFLIKTE[/bold green]"
            if self.is_clean
            else f"[bold yellow]! {len(self.issues)} HINWEISE[/bold yellow]"
        )
        console.print(Panel(status, title="Raster-Prüfung", border_style="cyan"))
        if self.is_clean:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=14)
        table.add_column("Tag", width=10)
        table.add_column("Beschreibung")
        for issue in self.issues:
            color = "red" if issue.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{issue.severity.upper()}[/{color}]",
                issue.check,
                issue.day.value,
                issue.description,
            )
        console.print(table)


def find_overlaps(entries: list[ScheduleEntry]) -> list[tuple[ScheduleEntry, ScheduleEntry]]:
    """Alle Paare mit überlappendem [start, end) am selben Tag, in Einfügereihenfolge."""
    by_day: dict[Weekday, list[ScheduleEntry]] = defaultdict(list)
    for e in entries:
        by_day[e.day].append(e)
    pairs = []
    for day_entries in by_day.values():
        for i, a in enumerate(day_entries):
            for b in day_entries[i + 1:]:
                if a.overlaps(b):
                    pairs.append((a, b))
    return pairs


def check_schedule(entries: list[ScheduleEntry], grid: TimeGrid) -> OverlapReport:
    """Findet Überlappungen und Einträge außerhalb des Rasterfensters."""
    issues: list[ScheduleIssue] = []

    for a, b in find_overlaps(entries):
        issues.append(ScheduleIssue(
            severity="warning",
            check="overlap",
            day=a.day,
            description=(
                f"{a.subject} {a.start_time}–{a.end_time} überlappt "
                f"{b.subject} {b.start_time}–{b.end_time} "
                f"(Vorrang im Raster: {b.subject}, zuletzt hinzugefügt)"
            ),
            entry_ids=[a.id, b.id],
        ))

    for e in entries:
        if e.start < grid.start or e.end > grid.end:
            issues.append(ScheduleIssue(
                severity="warning",
                check="outside_grid",
                day=e.day,
                description=(
                    f"{e.subject} {e.start_time}–{e.end_time} liegt teilweise "
                    f"außerhalb des Rasters"
                ),
                entry_ids=[e.id],
            ))

    return OverlapReport(issues=issues)
