"""Gemeinsame Hilfsfunktionen für Terminal-Anzeige und Excel-Export."""

from datetime import date
from typing import Iterable, Optional

from grid.time_grid import TimeGrid
from models.clock import format_hhmm
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday

# ─── Farben (RRGGBB, ohne #) ──────────────────────────────────────────────────

COLORS: dict[str, str] = {
    "free":   "F5F5F5",
    "header": "4472C4",
    "time":   "EEEEEE",
}


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def text_color_for(bg_hex: str) -> str:
    """Schwarz oder Weiß, je nach Helligkeit des Hintergrunds."""
    r, g, b = hex_to_rgb(bg_hex)
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "000000" if luminance > 150 else "FFFFFF"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Tage + Zeitbereich ───────────────────────────────────────────────────────

def select_days(
    days: Optional[Iterable[str]], fallback: Iterable[str]
) -> list[Weekday]:
    """Tagesfilter für den Export; ohne Angabe die sichtbaren Tage."""
    source = list(days) if days else list(fallback)
    result: list[Weekday] = []
    for d in source:
        day = Weekday.from_name(d)
        if day not in result:
            result.append(day)
    return sorted(result, key=lambda d: d.index)


def export_slots(
    grid: TimeGrid,
    entries: list[ScheduleEntry],
    days: Optional[list[Weekday]] = None,
    auto_fit: bool = False,
) -> list[int]:
    """Slot-Grenzen für den Export.

    Ohne auto_fit: alle Grenzen des Rasters. Mit auto_fit: vom frühesten
    Beginn bis zum spätesten Ende aller (gefilterten) Einträge zugeschnitten.
    Ohne Einträge bleibt das volle Raster.
    """
    if not auto_fit:
        return list(grid.slots)
    relevant = [e for e in entries if days is None or e.day in days]
    if not relevant:
        return list(grid.slots)
    cropped = grid.crop(min(e.start for e in relevant), max(e.end for e in relevant))
    return cropped or list(grid.slots)


def visible_span(span: int, row_index: int, total_rows: int) -> int:
    """Begrenzt eine Spannweite auf die verbleibenden Zeilen der Tabelle."""
    return max(1, min(span, total_rows - row_index))


def time_label(slots: list[int], row_index: int) -> str:
    """Zeilenbeschriftung "HH:MM"."""
    return format_hhmm(slots[row_index])


def row_starts(slots: list[int]) -> list[int]:
    """Zeilen der Tabelle: jede Zeile ist der Slot [t, t+Schritt).

    Die letzte Grenze markiert nur das Ende und bekommt keine eigene Zeile.
    """
    return slots[:-1]
