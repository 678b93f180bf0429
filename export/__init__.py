"""Export-Modul: Excel (openpyxl), Terminal (Rich) und Kalender-Ressourcen."""

from export.excel_export import ExcelExporter
from export.tui_renderer import render_week_cells, render_week_rows, render_week_table

__all__ = ["ExcelExporter", "render_week_cells", "render_week_rows", "render_week_table"]
