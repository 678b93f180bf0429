"""GridPlacementEngine – welcher Eintrag belegt welche Zelle (Tag × Slot)?

Für jede Zelle gibt es genau drei Fälle:
  EMPTY         – nichts zu zeichnen
  START         – hier beginnt ein Eintrag; er überspannt `span` Slots
  CONTINUATION  – Zelle wird von einem START weiter oben überdeckt,
                  der Renderer zeichnet hier nichts

Ein Eintrag beginnt im Slot [b, b+30), der seine Startzeit enthält, und
belegt ceil((ende - beginn) / 30) Slots. Dadurch meldet pro Eintrag genau
eine Zelle START und die folgenden span-1 Zellen desselben Tages
CONTINUATION – auch wenn Beginn oder Ende nicht auf Slot-Grenzen liegen.

Überlappende Einträge werden nicht abgewiesen. Konkurrieren mehrere
Einträge um dieselbe Zelle, gewinnt der zuletzt hinzugefügte.
"""

import math
from collections import defaultdict
from enum import Enum
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from grid.time_grid import TimeGrid, TimeLike, to_minutes
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday


class PlacementKind(str, Enum):
    EMPTY = "empty"
    START = "start"
    CONTINUATION = "continuation"


class Placement(BaseModel):
    """Ergebnis für eine einzelne Rasterzelle."""

    kind: PlacementKind
    entry: Optional[ScheduleEntry] = None   # bei START und CONTINUATION gesetzt
    span: int = 0                           # nur bei START > 0

    @property
    def is_start(self) -> bool:
        return self.kind == PlacementKind.START

    @property
    def is_empty(self) -> bool:
        return self.kind == PlacementKind.EMPTY


_EMPTY = Placement(kind=PlacementKind.EMPTY)


def span_slots(entry: ScheduleEntry, slot_minutes: int = 30) -> int:
    """Anzahl belegter Slots: aufgerundet, damit z.B. ein Ende um :45 den
    ganzen überdeckenden Slot reserviert."""
    return max(1, math.ceil((entry.end - entry.start) / slot_minutes))


class GridPlacementEngine:
    """Berechnet die Belegung des Rasters aus einer Momentaufnahme der Einträge."""

    def __init__(
        self,
        entries: Iterable[ScheduleEntry],
        grid: Optional[TimeGrid] = None,
    ) -> None:
        self.grid = grid or TimeGrid()
        # Einfügereihenfolge je Tag bleibt erhalten (für "zuletzt hinzugefügt gewinnt")
        self._by_day: dict[Weekday, list[ScheduleEntry]] = defaultdict(list)
        for e in entries:
            self._by_day[e.day].append(e)

    # ─── Ankerslot + Spannweite ───

    def anchor(self, entry: ScheduleEntry) -> int:
        """Slot-Beginn, in dem der Eintrag gezeichnet wird.

        Beginnt der Eintrag vor dem Raster, wird er am ersten Slot verankert.
        """
        if entry.start < self.grid.start:
            return self.grid.start
        return self.grid.bucket_start(entry.start)

    def span(self, entry: ScheduleEntry) -> int:
        if entry.start < self.grid.start:
            if entry.end <= self.grid.start:
                return 0
            return math.ceil((entry.end - self.grid.start) / self.grid.slot_minutes)
        return span_slots(entry, self.grid.slot_minutes)

    # ─── Abfrage ───

    def placement(self, day: Union[Weekday, str], slot_time: TimeLike) -> Placement:
        """Belegung der Zelle (day, slot_time)."""
        if isinstance(day, str):
            day = Weekday.from_name(day)
        t = to_minutes(slot_time)
        step = self.grid.slot_minutes

        for entry in reversed(self._by_day.get(day, [])):
            span = self.span(entry)
            if span == 0:
                continue
            first = self.anchor(entry)
            if not first <= t < first + span * step:
                continue
            if t < first + step:
                return Placement(kind=PlacementKind.START, entry=entry, span=span)
            return Placement(kind=PlacementKind.CONTINUATION, entry=entry)
        return _EMPTY

    def column(
        self, day: Union[Weekday, str], slots: Optional[list[int]] = None
    ) -> list[Placement]:
        """Belegung einer ganzen Tagesspalte (Standard: alle Rastergrenzen)."""
        slots = self.grid.slots if slots is None else slots
        return [self.placement(day, t) for t in slots]

    def matrix(
        self,
        days: Iterable[Union[Weekday, str]],
        slots: Optional[list[int]] = None,
    ) -> dict[tuple[Weekday, int], Placement]:
        """{(Tag, Slot-Minuten): Placement} für alle Zellen."""
        slots = self.grid.slots if slots is None else slots
        result: dict[tuple[Weekday, int], Placement] = {}
        for d in days:
            day = Weekday.from_name(d) if isinstance(d, str) else d
            for t, p in zip(slots, self.column(day, slots)):
                result[(day, t)] = p
        return result

    def entries_on(self, day: Weekday) -> list[ScheduleEntry]:
        return list(self._by_day.get(day, []))
