"""Terminal-Darstellung des Wochenrasters.

Wird von `show` und `select` (Rich-Tabelle) sowie vom Raster-Browser verwendet.
"""

from typing import TYPE_CHECKING, Optional

from export.helpers import row_starts, time_label, visible_span

if TYPE_CHECKING:
    from grid.drag import DragRangeSelector
    from grid.placement import GridPlacementEngine
    from models.weekday import Weekday
    from rich.text import Text

CONTINUATION_MARK = "│"
HIGHLIGHT_MARK = "░░"


def render_week_rows(
    engine: "GridPlacementEngine",
    days: list["Weekday"],
    slots: Optional[list[int]] = None,
    selector: Optional["DragRangeSelector"] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen zurück: [Zeit, Tag1, Tag2, …].

    START-Zellen zeigen "Fach (Raum)" und die Dauer in Slots, Fortsetzungen
    einen senkrechten Strich, freie Zellen bleiben leer. Zellen im aktuell
    gezogenen Bereich werden markiert.
    `slots` sind Slot-Grenzen; die letzte Grenze ergibt keine eigene Zeile.
    """
    slots = row_starts(engine.grid.slots if slots is None else slots)
    columns = {day: engine.column(day, slots) for day in days}
    rows: list[list[str]] = []

    for i in range(len(slots)):
        cells = [time_label(slots, i)]
        for day in days:
            p = columns[day][i]
            if p.is_start:
                span = visible_span(p.span, i, len(slots))
                text = p.entry.subject
                if p.entry.room:
                    text += f" ({p.entry.room})"
                cells.append(f"{text} ×{span}" if span > 1 else text)
            elif p.is_empty:
                highlighted = (
                    selector is not None
                    and slots[i] in engine.grid.slots
                    and selector.is_highlighted(day, engine.grid.index_of(slots[i]))
                )
                cells.append(HIGHLIGHT_MARK if highlighted else "")
            else:
                cells.append(CONTINUATION_MARK)
        rows.append(cells)
    return rows


def render_week_cells(
    engine: "GridPlacementEngine",
    days: list["Weekday"],
    slots: Optional[list[int]] = None,
    selector: Optional["DragRangeSelector"] = None,
) -> list[list["Text"]]:
    """Wie render_week_rows, aber als Rich-Text mit Fach-Farbe als Hintergrund."""
    from rich.text import Text

    from export.helpers import text_color_for

    slots = engine.grid.slots if slots is None else slots
    rows = render_week_rows(engine, days, slots, selector)
    columns = {day: engine.column(day, row_starts(slots)) for day in days}

    styled: list[list[Text]] = []
    for i, row in enumerate(rows):
        cells = [Text(row[0], style="bold")]
        for col, day in enumerate(days, 1):
            p = columns[day][i]
            if p.entry is not None:
                bg = p.entry.color
                cells.append(Text(row[col], style=f"#{text_color_for(bg)} on #{bg}"))
            elif row[col] == HIGHLIGHT_MARK:
                cells.append(Text(row[col], style="reverse"))
            else:
                cells.append(Text(row[col], style="dim"))
        styled.append(cells)
    return styled


def render_week_table(
    engine: "GridPlacementEngine",
    days: list["Weekday"],
    slots: Optional[list[int]] = None,
    title: str = "Wochenplan",
    selector: Optional["DragRangeSelector"] = None,
):
    """Baut eine Rich-Tabelle mit Fach-Farben als Zellhintergrund."""
    from rich.table import Table
    from rich import box

    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("Zeit", no_wrap=True)
    for day in days:
        table.add_column(day.short, min_width=10)

    for cells in render_week_cells(engine, days, slots, selector):
        table.add_row(*cells)
    return table
