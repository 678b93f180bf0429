"""Raster-Modul: Zeitraster, Belegung, Zieh-Auswahl und Farbvergabe."""

from .time_grid import TimeGrid
from .placement import GridPlacementEngine, Placement, PlacementKind, span_slots
from .drag import DragRangeSelector, DragSelection, DragState
from .colors import assign_colors

__all__ = [
    "TimeGrid",
    "GridPlacementEngine",
    "Placement",
    "PlacementKind",
    "span_slots",
    "DragRangeSelector",
    "DragSelection",
    "DragState",
    "assign_colors",
]
