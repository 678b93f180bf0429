"""Wochenraster — Haupt-CLI.

Verwendung:
  python main.py init                                 Konfiguration anlegen
  python main.py config show                          Konfiguration anzeigen
  python main.py add -s Mathe -d Monday 08:00 09:30   Eintrag hinzufügen
  python main.py edit <id> --end 10:00                Eintrag ändern
  python main.py delete <id>                          Eintrag löschen
  python main.py clear                                Alle Einträge löschen
  python main.py list                                 Einträge auflisten
  python main.py show                                 Wochenraster anzeigen
  python main.py browse                               Interaktives Raster (Textual)
  python main.py import-text "MTH 8:30AM-10:00AM" -s CCS05
  python main.py import-json antwort.json             KI-Ausgabe importieren
  python main.py check                                Überlappungen prüfen
  python main.py export                               Excel exportieren
  python main.py select Wednesday 4 6 -s Lab          Zieh-Auswahl → Eintrag
  python main.py push-preview --week-of 2026-10-19    Kalender-Ressourcen (JSON)
"""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _config_manager():
    from config.manager import ConfigManager
    ctx = click.get_current_context()
    path = ctx.find_root().obj.get("config_path") if ctx.find_root().obj else None
    return ConfigManager(Path(path) if path else None)


def _load_config():
    """Lädt die Konfiguration (Defaults beim Erstaufruf) oder bricht ab."""
    mgr = _config_manager()
    try:
        return mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration ungültig:[/red bold]\n{escape(str(e))}")
        sys.exit(1)


def _open_store(config):
    from data.store import JsonFileBackend, ScheduleEntryStore
    backend = JsonFileBackend(Path(config.storage.entries_path), config.storage.store_key)
    try:
        return ScheduleEntryStore(backend)
    except ValueError as e:
        console.print(f"[red bold]Speicherdatei nicht lesbar:[/red bold]\n{escape(str(e))}")
        sys.exit(1)


def _entries_table(entries, title: str = "Einträge") -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Tag")
    table.add_column("Beginn")
    table.add_column("Ende")
    table.add_column("Fach", style="bold")
    table.add_column("Raum")
    table.add_column("Farbe")
    for e in sorted(entries, key=lambda e: (e.day.index, e.start, e.end)):
        table.add_row(
            e.id[:8], e.day.value, e.start_time, e.end_time,
            e.subject, e.room or "", f"[on #{e.color}]      [/]",
        )
    return table


def _resolve_id(store, prefix: str) -> str:
    """Erlaubt abgekürzte IDs (wie in `list` angezeigt)."""
    matches = [e.id for e in store.list() if e.id.startswith(prefix)]
    if len(matches) != 1:
        console.print(
            f"[red]ID '{prefix}' ist {'unbekannt' if not matches else 'nicht eindeutig'}.[/red]"
        )
        sys.exit(1)
    return matches[0]


# ─── INIT / CONFIG ────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def cmd_init(force: bool):
    """Legt die Konfigurationsdatei mit Standardwerten an."""
    from config.defaults import default_app_config
    mgr = _config_manager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_app_config())


@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    from grid.time_grid import TimeGrid
    config = _load_config()
    grid = TimeGrid(config.grid)

    console.print(Panel(
        f"[bold]Raster[/bold] {config.grid.day_start}–{config.grid.day_end}  |  "
        f"{config.grid.slot_minutes} Min.  |  {len(grid)} Slot-Grenzen\n"
        f"[bold]Tage[/bold] {', '.join(config.grid.visible_days)}\n"
        f"[bold]Speicher[/bold] {config.storage.entries_path} "
        f"(Schlüssel: {config.storage.store_key})",
        title="Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Farbpalette", box=box.ROUNDED)
    table.add_column("#")
    table.add_column("Farbe")
    table.add_column("")
    for i, c in enumerate(config.palette.colors):
        table.add_row(str(i), c, f"[on #{c}]      [/]")
    console.print(table)


# ─── EINTRÄGE ─────────────────────────────────────────────────────────────────

@click.command("add")
@click.option("--subject", "-s", required=True, help="Fach / Titel.")
@click.option("--day", "-d", required=True, help="Wochentag (z.B. Monday).")
@click.option("--room", "-r", default=None, help="Raum.")
@click.option("--color", "-c", default=None, help="Farbe RRGGBB (Standard: Palette).")
@click.argument("start")
@click.argument("end")
def cmd_add(subject: str, day: str, room, color, start: str, end: str):
    """Fügt einen Eintrag hinzu (START/END als HH:MM)."""
    from grid.colors import assign_colors
    from models.schedule_entry import ScheduleEntry
    from pydantic import ValidationError

    config = _load_config()
    store = _open_store(config)
    if color is None:
        color = assign_colors(store.list(), [subject], config.palette.colors)[subject]
    try:
        entry = ScheduleEntry(subject=subject, day=day, room=room,
                              start=start, end=end, color=color)
    except ValidationError as e:
        console.print(f"[red bold]Ungültige Eingabe:[/red bold]\n{escape(str(e))}")
        sys.exit(1)

    entry_id = store.add(entry)
    if entry_id is None:
        console.print("[red]Eintrag abgewiesen: Fach leer oder Ende nicht nach Beginn.[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Eintrag {entry_id[:8]} hinzugefügt.")


@click.command("edit")
@click.argument("entry_id")
@click.option("--subject", "-s", default=None)
@click.option("--day", "-d", default=None)
@click.option("--room", "-r", default=None)
@click.option("--start", default=None, help="Beginn HH:MM.")
@click.option("--end", default=None, help="Ende HH:MM.")
@click.option("--color", "-c", default=None)
def cmd_edit(entry_id: str, **fields):
    """Ändert Felder eines Eintrags (ID darf abgekürzt sein)."""
    config = _load_config()
    store = _open_store(config)
    full_id = _resolve_id(store, entry_id)
    changes = {k: v for k, v in fields.items() if v is not None}
    if not changes:
        console.print("[yellow]Keine Änderungen angegeben.[/yellow]")
        return
    if not store.update(full_id, **changes):
        console.print("[red]Änderung abgewiesen: ungültiger Eintrag.[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Eintrag {full_id[:8]} geändert.")


@click.command("delete")
@click.argument("entry_id")
def cmd_delete(entry_id: str):
    """Löscht einen Eintrag."""
    config = _load_config()
    store = _open_store(config)
    full_id = _resolve_id(store, entry_id)
    store.delete(full_id)
    console.print(f"[green]✓[/green] Eintrag {full_id[:8]} gelöscht.")


@click.command("clear")
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage löschen.")
def cmd_clear(yes: bool):
    """Löscht alle Einträge."""
    config = _load_config()
    store = _open_store(config)
    if not yes and not click.confirm(f"{len(store)} Einträge löschen?", default=False):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return
    store.clear()
    console.print("[green]✓[/green] Alle Einträge gelöscht.")


@click.command("list")
def cmd_list():
    """Listet alle Einträge auf."""
    config = _load_config()
    entries = _open_store(config).list()
    if not entries:
        console.print("[dim]Keine Einträge vorhanden.[/dim]")
        return
    console.print(_entries_table(entries))


# ─── ANZEIGE ──────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--day", "days", multiple=True, help="Nur diese Tage (mehrfach möglich).")
@click.option("--fit", is_flag=True, default=False,
              help="Zeitbereich auf belegte Slots zuschneiden.")
def cmd_show(days, fit: bool):
    """Zeigt das Wochenraster im Terminal."""
    from export.helpers import export_slots, select_days
    from export.tui_renderer import render_week_table
    from grid.placement import GridPlacementEngine
    from grid.time_grid import TimeGrid

    config = _load_config()
    entries = _open_store(config).list()
    grid = TimeGrid(config.grid)
    day_list = select_days(days, config.grid.visible_days)
    slots = export_slots(grid, entries, day_list, fit)
    engine = GridPlacementEngine(entries, grid)
    console.print(render_week_table(engine, day_list, slots, title=config.export.title))


@click.command("check")
def cmd_check():
    """Prüft auf überlappende Einträge und Einträge außerhalb des Rasters."""
    from analysis.overlap_report import check_schedule
    from grid.time_grid import TimeGrid

    config = _load_config()
    entries = _open_store(config).list()
    report = check_schedule(entries, TimeGrid(config.grid))
    report.print_rich()
    sys.exit(0 if report.is_clean else 1)


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import-text")
@click.argument("schedule")
@click.option("--subject", "-s", required=True, help="Fach für alle erkannten Zeiten.")
@click.option("--room", "-r", default=None, help="Raum.")
def cmd_import_text(schedule: str, subject: str, room):
    """Importiert eine Stundenplan-Angabe wie "MTH 8:30AM-10:00AM"."""
    from data.importer import ScheduleImporter

    config = _load_config()
    importer = ScheduleImporter(_open_store(config), config.palette.colors)
    report = importer.import_schedule_text(schedule, subject, room)
    report.print_rich()


@click.command("import-json")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
def cmd_import_json(datei: Path):
    """Importiert die JSON-Ausgabe der Stundenplan-Bilderkennung."""
    from data.importer import ScheduleImporter, ScheduleImportError

    config = _load_config()
    importer = ScheduleImporter(_open_store(config), config.palette.colors)
    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        report = importer.import_ai_response(datei.read_text(encoding="utf-8"))
    except ScheduleImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{escape(str(e))}")
        sys.exit(1)
    report.print_rich()


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.option("--output", "-o", default="output/wochenplan.xlsx",
              help="Ausgabepfad der Excel-Datei.")
@click.option("--day", "days", multiple=True, help="Nur diese Tage (mehrfach möglich).")
@click.option("--fit/--no-fit", default=None,
              help="Zeitbereich zuschneiden (Standard aus Config).")
def cmd_export(output: str, days, fit):
    """Exportiert das Wochenraster als Excel-Datei."""
    from export.excel_export import ExcelExporter

    config = _load_config()
    entries = _open_store(config).list()
    out_path = Path(output)
    ExcelExporter(entries, config).export(out_path, days=list(days) or None, auto_fit=fit)
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── BROWSER ───────────────────────────────────────────────────────────────────

@click.command("browse")
def cmd_browse():
    """Öffnet das interaktive Wochenraster (Textual)."""
    from export.tui_browser import GridBrowserApp

    config = _load_config()
    GridBrowserApp(_open_store(config), config).run()


# ─── ZIEH-AUSWAHL ─────────────────────────────────────────────────────────────

@click.command("select")
@click.argument("day")
@click.argument("from_index", type=int)
@click.argument("to_index", type=int)
@click.option("--subject", "-s", default="", help="Fach; ohne Angabe nur Vorschau.")
@click.option("--room", "-r", default=None)
def cmd_select(day: str, from_index: int, to_index: int, subject: str, room):
    """Wählt die Slots FROM_INDEX..TO_INDEX an DAY aus (wie Ziehen im Raster)."""
    from export.tui_renderer import render_week_table
    from grid.colors import assign_colors
    from grid.drag import DragRangeSelector
    from grid.placement import GridPlacementEngine
    from export.helpers import select_days
    from grid.time_grid import TimeGrid
    from models.weekday import Weekday

    config = _load_config()
    store = _open_store(config)
    grid = TimeGrid(config.grid)
    try:
        day = Weekday.from_name(day)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    selector = DragRangeSelector(grid)
    selector.start(day, from_index)
    selector.move(day, to_index)

    engine = GridPlacementEngine(store.list(), grid)
    console.print(render_week_table(
        engine, select_days(None, config.grid.visible_days),
        title="Auswahl", selector=selector,
    ))

    selection = selector.end()
    if selection is None:
        console.print(f"[red]Ungültiger Slot-Index (0–{grid.last_index}).[/red]")
        sys.exit(1)

    console.print(
        f"Auswahl: [bold]{selection.day.value}[/bold] "
        f"{selection.start_time}–{selection.end_time}"
    )
    if not subject:
        return
    color = assign_colors(store.list(), [subject], config.palette.colors)[subject]
    draft = selection.to_draft(subject=subject, room=room, color=color)
    entry_id = store.add(draft)
    if entry_id is None:
        console.print("[red]Eintrag abgewiesen: Fach leer oder Ende nicht nach Beginn.[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Eintrag {entry_id[:8]} hinzugefügt.")


# ─── KALENDER ─────────────────────────────────────────────────────────────────

@click.command("push-preview")
@click.option("--week-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Woche des ersten Termins (Standard: diese Woche).")
@click.option("--weeks", default=1, show_default=True, help="Wöchentliche Wiederholungen.")
@click.option("--tz", "time_zone", default=None, help="Zeitzone (z.B. Europe/Berlin).")
@click.option("--items", "items_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="Freitext-KI-Ausgabe (Termine/Aufgaben) statt Raster.")
def cmd_push_preview(week_of, weeks: int, time_zone, items_file):
    """Gibt die Ressourcen für den Kalenderdienst als JSON aus."""
    from export.calendar_payload import (
        entry_to_event_resource, event_to_resource, task_to_resource,
    )
    from models.raw_items import CalendarTask

    config = _load_config()
    if items_file is not None:
        from data.ai_output import ScheduleImportError, parse_calendar_items
        try:
            items = parse_calendar_items(items_file.read_text(encoding="utf-8"))
        except ScheduleImportError as e:
            console.print(f"[red bold]Eingabe unlesbar:[/red bold]\n{escape(str(e))}")
            sys.exit(1)
        resources = [
            task_to_resource(i) if isinstance(i, CalendarTask)
            else event_to_resource(i, time_zone)
            for i in items
        ]
    else:
        start_week = week_of.date() if week_of else date.today()
        resources = [
            entry_to_event_resource(e, start_week, weeks, time_zone, config.palette.colors)
            for e in _open_store(config).list()
        ]
    click.echo(json.dumps(resources, indent=2, ensure_ascii=False))


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", default=None,
              help="Pfad der Konfigurationsdatei.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Logs.")
@click.pass_context
def cli(ctx, config_path, verbose: bool):
    """Wochenraster: Stundenplan-Einträge importieren, anzeigen und exportieren."""
    ctx.obj = {"config_path": config_path}
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_add)
cli.add_command(cmd_edit)
cli.add_command(cmd_delete)
cli.add_command(cmd_clear)
cli.add_command(cmd_list)
cli.add_command(cmd_show)
cli.add_command(cmd_browse)
cli.add_command(cmd_check)
cli.add_command(cmd_import_text)
cli.add_command(cmd_import_json)
cli.add_command(cmd_export)
cli.add_command(cmd_select)
cli.add_command(cmd_push_preview)

if __name__ == "__main__":
    main()
