"""Zeitangaben aus Stundenplan-Text extrahieren.

Beispiel:  "MTH 8:30AM-10:00AM (lab) F 1:00PM – 4:00PM"
        →  Monday 08:30–10:00, Thursday 08:30–10:00, Friday 13:00–16:00

Grammatik (je Vorkommen):
  <tageskürzel> <h>:<mm>[ ]<AM|PM> (-|–) <h>:<mm>[ ]<AM|PM>

Klammerzusätze werden vorher entfernt. Nicht erkennbare Teile werden
übersprungen – der Parser wirft nie, schlimmstenfalls ist das Ergebnis leer.
"""

import logging
import re

from pydantic import BaseModel

from data.day_codes import resolve_day_code
from models.clock import format_hhmm, twelve_to_minutes
from models.weekday import Weekday

logger = logging.getLogger(__name__)

_PAREN_RE = re.compile(r"\([^)]*\)")

_DAY_CODE = r"(?P<days>\b[A-Za-z](?:[A-Za-z\-]*[A-Za-z])?)"
_CLOCK = r"(?P<h{n}>\d{{1,2}}):(?P<m{n}>\d{{2}})\s?(?P<p{n}>[AaPp][Mm])"
_RANGE_RE = re.compile(
    _DAY_CODE + r"\s*"
    + _CLOCK.format(n=1)
    + r"\s*[-–]\s*"
    + _CLOCK.format(n=2)
)


class TimeRange(BaseModel):
    """Ein Wochentag mit Zeitraum (Minuten seit Mitternacht)."""

    day: Weekday
    start: int
    end: int

    @property
    def start_time(self) -> str:
        return format_hhmm(self.start)

    @property
    def end_time(self) -> str:
        return format_hhmm(self.end)

    @property
    def key(self) -> tuple[Weekday, int, int]:
        return (self.day, self.start, self.end)


def strip_annotations(raw: str) -> str:
    """Entfernt Klammerzusätze wie "(lab)" oder "(ab)"."""
    return _PAREN_RE.sub(" ", raw or "")


def parse_schedule(raw: str) -> list[TimeRange]:
    """Zerlegt eine Stundenplan-Angabe in (Tag, Beginn, Ende)-Tupel.

    Pro Treffer wird das Tageskürzel aufgelöst und für jeden Tag ein Tupel
    mit denselben Zeiten erzeugt. Identische Tupel werden zusammengefasst.
    """
    text = strip_annotations(raw)
    ranges: list[TimeRange] = []
    seen: set[tuple[Weekday, int, int]] = set()

    for m in _RANGE_RE.finditer(text):
        try:
            start = twelve_to_minutes(int(m["h1"]), int(m["m1"]), m["p1"])
            end = twelve_to_minutes(int(m["h2"]), int(m["m2"]), m["p2"])
        except ValueError as e:
            logger.debug(f"Zeitangabe übersprungen '{m.group(0)}': {e}")
            continue
        if end <= start:
            logger.debug(f"Zeitraum ohne Dauer übersprungen: '{m.group(0)}'")
            continue

        days = resolve_day_code(m["days"])
        if not days:
            logger.debug(f"Unbekanntes Tageskürzel übersprungen: '{m['days']}'")
            continue

        for day in days:
            key = (day, start, end)
            if key in seen:
                continue
            seen.add(key)
            ranges.append(TimeRange(day=day, start=start, end=end))

    return ranges


def dedupe_ranges(ranges: list[TimeRange]) -> list[TimeRange]:
    """Fasst identische (Tag, Beginn, Ende) zusammen, Reihenfolge bleibt."""
    seen: set[tuple[Weekday, int, int]] = set()
    out: list[TimeRange] = []
    for r in ranges:
        if r.key not in seen:
            seen.add(r.key)
            out.append(r)
    return out
