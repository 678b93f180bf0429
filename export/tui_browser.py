"""Textual-Browser für das Wochenraster.

Startet mit: python main.py browse
Navigation: Pfeiltasten, Leertaste=Auswahl beginnen/abschließen,
Esc=Auswahl abbrechen, x=Eintrag unter dem Cursor löschen, q=Beenden

Die Auswahl mit der Tastatur entspricht dem Ziehen mit der Maus:
Leertaste = Zeiger drücken, Cursor bewegen = ziehen, Leertaste = loslassen.
Danach wird das Fach im Eingabefeld abgefragt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.schema import AppConfig
    from data.store import ScheduleEntryStore


class GridBrowserApp:
    """Textual TUI App für das Wochenraster.

    Lazy-importiert textual um Startzeit zu minimieren.
    """

    def __init__(self, store: "ScheduleEntryStore", config: "AppConfig") -> None:
        self.store = store
        self.config = config

    def run(self) -> None:
        """Startet die TUI Anwendung."""
        try:
            from textual.app import App, ComposeResult
            from textual.binding import Binding
            from textual.coordinate import Coordinate
            from textual.widgets import DataTable, Footer, Header, Input
        except ImportError:
            raise ImportError(
                "textual nicht installiert. Bitte: pip install textual>=0.60"
            )

        from export.helpers import select_days
        from export.tui_renderer import render_week_cells
        from grid.colors import assign_colors
        from grid.drag import DragRangeSelector
        from grid.placement import GridPlacementEngine
        from grid.time_grid import TimeGrid

        store = self.store
        config = self.config
        grid = TimeGrid(config.grid)
        days = select_days(None, config.grid.visible_days)

        class _App(App):
            CSS = """
            DataTable { border: solid $secondary; height: 1fr; }
            Input { dock: bottom; }
            """
            BINDINGS = [
                Binding("q", "quit", "Beenden"),
                Binding("space", "toggle_select", "Auswahl"),
                Binding("escape", "cancel_select", "Abbrechen"),
                Binding("x", "delete_entry", "Löschen"),
            ]

            def compose(self) -> ComposeResult:
                yield Header()
                yield DataTable(id="grid_table")
                yield Input(placeholder="Fach für die Auswahl…", id="subject")
                yield Footer()

            def on_mount(self) -> None:
                self.title = config.export.title
                self.selector = DragRangeSelector(grid)
                self.pending = None
                table = self.query_one("#grid_table", DataTable)
                table.cursor_type = "cell"
                table.add_columns("Zeit", *[d.short for d in days])
                table.add_rows(self._cells())
                table.focus()

            # ─── Darstellung ───

            def _cells(self):
                engine = GridPlacementEngine(store.list(), grid)
                return render_week_cells(engine, days, selector=self.selector)

            def _redraw(self) -> None:
                table = self.query_one("#grid_table", DataTable)
                for r, row in enumerate(self._cells()):
                    for c, cell in enumerate(row):
                        table.update_cell_at(Coordinate(r, c), cell)

            def _cursor_cell(self):
                """(Tag, Slot-Index) unter dem Cursor oder None in der Zeitspalte."""
                coord = self.query_one("#grid_table", DataTable).cursor_coordinate
                if coord.column == 0:
                    return None
                return days[coord.column - 1], coord.row

            # ─── Auswahl ───

            def action_toggle_select(self) -> None:
                cell = self._cursor_cell()
                if cell is None:
                    return
                if not self.selector.is_dragging:
                    self.selector.start(*cell)
                    self._redraw()
                    return
                self.pending = self.selector.end()
                self._redraw()
                if self.pending is not None:
                    self.sub_title = (
                        f"{self.pending.day.value} "
                        f"{self.pending.start_time}–{self.pending.end_time}"
                    )
                    self.query_one("#subject", Input).focus()

            def action_cancel_select(self) -> None:
                self.selector.cancel()
                self.pending = None
                self.sub_title = ""
                self._redraw()
                self.query_one("#grid_table", DataTable).focus()

            def on_data_table_cell_highlighted(self, event: DataTable.CellHighlighted) -> None:
                if not self.selector.is_dragging or event.coordinate.column == 0:
                    return
                self.selector.move(days[event.coordinate.column - 1], event.coordinate.row)
                self._redraw()

            def on_input_submitted(self, event: Input.Submitted) -> None:
                if self.pending is None:
                    self.notify("Erst einen Bereich auswählen (Leertaste).")
                    return
                subject = event.value.strip()
                color = assign_colors(store.list(), [subject], config.palette.colors)[subject]
                entry_id = store.add(self.pending.to_draft(subject=subject, color=color))
                if entry_id is None:
                    self.notify("Fach darf nicht leer sein.", severity="error")
                    return
                event.input.value = ""
                self.pending = None
                self.sub_title = ""
                self._redraw()
                self.query_one("#grid_table", DataTable).focus()

            # ─── Löschen ───

            def action_delete_entry(self) -> None:
                cell = self._cursor_cell()
                if cell is None:
                    return
                day, index = cell
                engine = GridPlacementEngine(store.list(), grid)
                placement = engine.placement(day, grid.minutes_at(index))
                if placement.entry is None:
                    return
                store.delete(placement.entry.id)
                self.notify(f"{placement.entry.subject} gelöscht.")
                self._redraw()

        _App().run()
