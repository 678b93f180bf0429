"""Excel-Export des Wochenrasters (openpyxl)."""

from pathlib import Path
from typing import Optional

from config.schema import AppConfig
from grid.placement import GridPlacementEngine, Placement
from grid.time_grid import TimeGrid
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday

from export.helpers import (
    COLORS, export_slots, row_starts, select_days, text_color_for,
    time_label, today_str, visible_span,
)


def clipped_spans(column: list[Placement]) -> dict[int, int]:
    """{Zeilenindex: Spannweite} für alle START-Zellen einer Spalte.

    Die Spannweite endet spätestens vor dem nächsten START derselben Spalte
    (bei überlappenden Einträgen) und am Tabellenende.
    """
    starts = [i for i, p in enumerate(column) if p.is_start]
    spans: dict[int, int] = {}
    for n, i in enumerate(starts):
        limit = starts[n + 1] - i if n + 1 < len(starts) else len(column) - i
        spans[i] = max(1, min(visible_span(column[i].span, i, len(column)), limit))
    return spans


class ExcelExporter:
    """Exportiert die Einträge als Wochenraster + Eintragsliste in eine Excel-Datei."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 8
    COL_DAY_W  = 20

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_SLOT_H   = 18

    def __init__(self, entries: list[ScheduleEntry], config: AppConfig,
                 grid: Optional[TimeGrid] = None):
        self.entries = entries
        self.config = config
        self.grid = grid or TimeGrid(config.grid)
        self.engine = GridPlacementEngine(entries, self.grid)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path, days: Optional[list[str]] = None,
               auto_fit: Optional[bool] = None) -> None:
        """Erstellt die Excel-Datei.

        days: Tagesfilter (Standard: export.days bzw. sichtbare Tage).
        auto_fit: Zeitbereich zuschneiden (Standard: export.auto_fit).
        """
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        ex = self.config.export
        day_list = select_days(days or ex.days, self.config.grid.visible_days)
        fit = ex.auto_fit if auto_fit is None else auto_fit
        slots = export_slots(self.grid, self.entries, day_list, fit)

        self._sheet_wochenplan(wb, day_list, slots)
        self._sheet_eintraege(wb, day_list)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Wochenplan ────────────────────────────────────────────────────

    def _sheet_wochenplan(self, wb, days: list[Weekday], slots: list[int]) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Wochenplan")
        ws.cell(row=1, column=1, value=self.config.export.title).font = Font(bold=True, size=14)
        ws.cell(row=1, column=3, value=f"Erstellt: {today_str()}")

        header_row = 3
        self._write_header_row(ws, header_row, ["Zeit"] + [d.value for d in days])
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        border = self._thin_border()
        first_row = header_row + 1
        slots = row_starts(slots)

        for i in range(len(slots)):
            r = first_row + i
            c = ws.cell(row=r, column=1, value=time_label(slots, i))
            c.fill = self._fill(COLORS["time"])
            c.alignment = self._center_align(wrap=False)
            c.font = Font(bold=True, size=9)
            c.border = border
            ws.row_dimensions[r].height = self.ROW_SLOT_H

        for col, day in enumerate(days, 2):
            column = self.engine.column(day, slots)
            spans = clipped_spans(column)

            # Erst alle Zellen beschriften, dann zusammenführen
            for i, p in enumerate(column):
                c = ws.cell(row=first_row + i, column=col)
                c.border = border
                if p.is_start:
                    c.value = p.entry.label()
                    c.fill = self._fill(p.entry.color)
                    c.font = Font(size=9, bold=True, color=text_color_for(p.entry.color))
                    c.alignment = self._center_align()
                elif p.is_empty:
                    c.fill = self._fill(COLORS["free"])
                else:
                    # Fortsetzung, auch unterhalb einer gekürzten Spanne
                    c.fill = self._fill(p.entry.color)

            for i, span in spans.items():
                if span > 1:
                    ws.merge_cells(
                        start_row=first_row + i, start_column=col,
                        end_row=first_row + i + span - 1, end_column=col,
                    )

        ws.freeze_panes = ws.cell(row=first_row, column=2)

    # ─── Sheet: Einträge ──────────────────────────────────────────────────────

    def _sheet_eintraege(self, wb, days: list[Weekday]) -> None:
        ws = wb.create_sheet(title="Einträge")
        headers = ["Tag", "Beginn", "Ende", "Fach", "Raum", "Farbe"]
        self._write_header_row(ws, 1, headers)
        border = self._thin_border()

        rows = sorted(
            (e for e in self.entries if e.day in days),
            key=lambda e: (e.day.index, e.start, e.end),
        )
        for r, e in enumerate(rows, 2):
            values = [e.day.value, e.start_time, e.end_time, e.subject, e.room or "", e.color]
            for col, v in enumerate(values, 1):
                ws.cell(row=r, column=col, value=v).border = border
            ws.cell(row=r, column=6).fill = self._fill(e.color)

        for letter, width in zip("ABCDEF", (12, 8, 8, 24, 20, 10)):
            ws.column_dimensions[letter].width = width
