"""Import-Pipeline: Rohdaten (KI-Ausgabe oder Stundenplan-Text) → Store.

Ablauf pro Stapel:
  1. Tage normalisieren (Namenslisten oder Kürzel) und Zeiten lesen
  2. Duplikate verwerfen – gleiche (Tag, Beginn, Ende) im Store oder im Stapel
  3. Farben vergeben (bestehende Fächer behalten ihre Farbe)
  4. Einträge in den Store schreiben

Null erkannte Einträge sind kein Fehler, sondern ein eigenes Ergebnis
("keine Stundenplan-Einträge gefunden").
"""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel

from data.ai_output import ScheduleImportError, parse_raw_schedule_entries
from data.day_codes import normalize_day_names
from data.schedule_parser import parse_schedule
from data.store import ScheduleEntryStore
from grid.colors import assign_colors
from models.clock import format_hhmm, parse_clock
from models.raw_items import RawScheduleEntry
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday

logger = logging.getLogger(__name__)

__all__ = ["ImportReport", "ScheduleImporter", "ScheduleImportError"]


class _Candidate(BaseModel):
    subject: str
    room: Optional[str] = None
    day: Weekday
    start: int
    end: int

    @property
    def key(self) -> tuple[Weekday, int, int]:
        return (self.day, self.start, self.end)


class ImportReport(BaseModel):
    """Ergebnis eines Import-Stapels."""

    added: list[ScheduleEntry] = []
    duplicates: int = 0
    skipped: list[str] = []     # Hinweise zu unlesbaren Zeilen

    @property
    def is_empty(self) -> bool:
        """Nichts erkannt (weder neu noch Duplikat)."""
        return not self.added and self.duplicates == 0

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_empty:
            lines = ["[yellow]Keine Stundenplan-Einträge gefunden.[/yellow]"]
        else:
            lines = [f"[bold green]✓ {len(self.added)} Einträge importiert[/bold green]"]
            if self.duplicates:
                lines.append(f"[dim]{self.duplicates} Duplikate übersprungen[/dim]")
        if self.skipped:
            lines.append("\n[yellow bold]Übersprungen:[/yellow bold]")
            for s in self.skipped:
                lines.append(f"  [yellow]• {s}[/yellow]")
        console.print(Panel("\n".join(lines), title="Import", border_style="cyan"))


class ScheduleImporter:
    """Schreibt importierte Stundenplan-Daten in einen ScheduleEntryStore."""

    def __init__(self, store: ScheduleEntryStore,
                 palette: Optional[list[str]] = None) -> None:
        self.store = store
        self.palette = palette

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def import_raw_entries(self, raw_entries: Iterable[RawScheduleEntry]) -> ImportReport:
        """Importiert die Ausgabe der Stundenplan-Bilderkennung."""
        candidates: list[_Candidate] = []
        skipped: list[str] = []

        for n, raw in enumerate(raw_entries, 1):
            subject = raw.subject
            if not subject:
                skipped.append(f"Zeile {n}: kein Fachkürzel/-name")
                continue
            days = normalize_day_names(raw.day)
            if not days:
                skipped.append(f"Zeile {n} ({subject}): Tag '{raw.day}' nicht erkannt")
                continue
            try:
                start = parse_clock(raw.start_time)
                end = parse_clock(raw.end_time)
            except ValueError as e:
                skipped.append(f"Zeile {n} ({subject}): {e}")
                continue
            if end <= start:
                skipped.append(
                    f"Zeile {n} ({subject}): Ende {format_hhmm(end)} "
                    f"nicht nach Beginn {format_hhmm(start)}"
                )
                continue
            room = (raw.room or "").strip() or None
            for day in days:
                candidates.append(_Candidate(subject=subject, room=room,
                                             day=day, start=start, end=end))

        report = self._commit(candidates)
        report.skipped = skipped
        return report

    def import_ai_response(self, text: str) -> ImportReport:
        """KI-Rohantwort (JSON, ggf. in Codeblock) → Import.

        Wirft ScheduleImportError, wenn die Antwort nicht lesbar ist.
        """
        return self.import_raw_entries(parse_raw_schedule_entries(text))

    def import_schedule_text(self, raw: str, subject: str,
                             room: Optional[str] = None) -> ImportReport:
        """Importiert eine Stundenplan-Angabe wie "MTH 8:30AM-10:00AM" für ein Fach."""
        subject = subject.strip()
        ranges = parse_schedule(raw)
        if not subject:
            return ImportReport(skipped=["Kein Fach angegeben"]) if ranges else ImportReport()
        candidates = [
            _Candidate(subject=subject, room=room or None,
                       day=r.day, start=r.start, end=r.end)
            for r in ranges
        ]
        return self._commit(candidates)

    # ─── Intern ───────────────────────────────────────────────────────────────

    def _commit(self, candidates: list[_Candidate]) -> ImportReport:
        fresh: list[_Candidate] = []
        seen: set[tuple[Weekday, int, int]] = set()
        duplicates = 0
        for c in candidates:
            if c.key in seen or self.store.find_by_time(*c.key) is not None:
                duplicates += 1
                continue
            seen.add(c.key)
            fresh.append(c)

        colors = assign_colors(
            self.store.list(), [c.subject for c in fresh], self.palette
        )

        added: list[ScheduleEntry] = []
        for c in fresh:
            entry = ScheduleEntry(
                subject=c.subject, room=c.room, day=c.day,
                start=c.start, end=c.end, color=colors[c.subject],
            )
            if self.store.add(entry) is not None:
                added.append(entry)

        logger.info(
            f"Import: {len(added)} neu, {duplicates} Duplikate "
            f"({len(candidates)} Kandidaten)"
        )
        return ImportReport(added=added, duplicates=duplicates)
