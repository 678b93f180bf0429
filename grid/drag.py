"""DragRangeSelector – Zustandsautomat für die Bereichsauswahl per Ziehen.

Zustände:
  IDLE
  DRAGGING(day, start_index, current_index)

  IDLE     --start(day, i)-->  DRAGGING(day, i, i)
  DRAGGING --move(day, j)-->   DRAGGING(day, start, j)   (nur gleicher Tag)
  DRAGGING --end()-->          IDLE + DragSelection
  *        --cancel()-->       IDLE, nichts wird ausgegeben

Ereignisse, die zum aktuellen Zustand nicht passen, sind No-ops (z.B.
move nach end).
"""

import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from grid.time_grid import TimeGrid
from models.clock import format_hhmm
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragSelection(BaseModel):
    """Vorschlag für einen neuen Eintrag aus einer abgeschlossenen Auswahl."""

    day: Weekday
    start: int    # Minuten
    end: int      # Minuten

    @property
    def start_time(self) -> str:
        return format_hhmm(self.start)

    @property
    def end_time(self) -> str:
        return format_hhmm(self.end)

    def to_draft(self, subject: str = "", room: Optional[str] = None,
                 color: Optional[str] = None) -> ScheduleEntry:
        """Füllt das Erstellformular vor (Fach bleibt standardmäßig leer)."""
        fields = dict(subject=subject, room=room, day=self.day,
                      start=self.start, end=self.end)
        if color:
            fields["color"] = color
        return ScheduleEntry(**fields)


class DragRangeSelector:
    """Expliziter Zustand einer Zieh-Geste über Zellen (Tag, Slot-Index)."""

    def __init__(self, grid: Optional[TimeGrid] = None) -> None:
        self.grid = grid or TimeGrid()
        self.state = DragState.IDLE
        self.day: Optional[Weekday] = None
        self.start_index: Optional[int] = None
        self.current_index: Optional[int] = None

    def __repr__(self) -> str:
        if self.state == DragState.IDLE:
            return "DragRangeSelector(IDLE)"
        return (f"DragRangeSelector(DRAGGING {self.day.value} "
                f"{self.start_index}→{self.current_index})")

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    # ─── Übergänge ───

    def start(self, day: Union[Weekday, str], index: int) -> None:
        """Beginnt eine Auswahl. Nur aus IDLE; ungültige Indizes werden ignoriert."""
        if self.state != DragState.IDLE:
            return
        if not self.grid.contains_index(index):
            logger.debug(f"Zieh-Start außerhalb des Rasters ignoriert: Index {index}")
            return
        self.state = DragState.DRAGGING
        self.day = Weekday.from_name(day)
        self.start_index = index
        self.current_index = index

    def move(self, day: Union[Weekday, str], index: int) -> None:
        """Erweitert die Auswahl. Tageswechsel werden ignoriert."""
        if self.state != DragState.DRAGGING:
            return
        if Weekday.from_name(day) != self.day:
            return
        if not self.grid.contains_index(index):
            return
        self.current_index = index

    def end(self) -> Optional[DragSelection]:
        """Schließt die Auswahl ab und gibt den Eintragsvorschlag zurück.

        Das Ende liegt einen Slot hinter der letzten markierten Zelle, so dass
        eine einzelne Zelle 30 Minuten ergibt; über das Raster hinaus wird auf
        die letzte Grenze begrenzt.
        """
        if self.state != DragState.DRAGGING:
            return None
        lo = min(self.start_index, self.current_index)
        hi = max(self.start_index, self.current_index)
        selection = DragSelection(
            day=self.day,
            start=self.grid.minutes_at(lo),
            end=self.grid.boundary_at(hi + 1),
        )
        self._reset()
        return selection

    def cancel(self) -> None:
        """Bricht ab (z.B. Zeiger verlässt das Raster), ohne etwas auszugeben."""
        self._reset()

    # ─── Hervorhebung ───

    def is_highlighted(self, day: Union[Weekday, str], index: int) -> bool:
        """Liegt die Zelle im aktuell gezogenen Bereich?"""
        if self.state != DragState.DRAGGING:
            return False
        if Weekday.from_name(day) != self.day:
            return False
        lo = min(self.start_index, self.current_index)
        hi = max(self.start_index, self.current_index)
        return lo <= index <= hi

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.day = None
        self.start_index = None
        self.current_index = None
