"""Ressourcen für den externen Kalenderdienst (nur Aufbau, kein HTTP).

Die erzeugten Dicts entsprechen dem Event-Format der Kalender-API
(summary, start/end, recurrence, …) und werden von der umgebenden
Anwendung versendet.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from models.raw_items import CalendarEvent, CalendarTask
from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday


def date_in_week(day: Weekday, week_of: date) -> date:
    """Datum des Wochentags in der (Montag-basierten) Woche von `week_of`."""
    monday = week_of - timedelta(days=week_of.weekday())
    return monday + timedelta(days=day.index)


def _at(d: date, minutes: int) -> str:
    return datetime(d.year, d.month, d.day, minutes // 60, minutes % 60).isoformat()


def entry_to_event_resource(
    entry: ScheduleEntry,
    week_of: date,
    weeks: Optional[int] = None,
    time_zone: Optional[str] = None,
    palette: Optional[list[str]] = None,
) -> dict:
    """Wöchentlich wiederkehrender Termin für einen Raster-Eintrag.

    weeks: Anzahl Wiederholungen (None = einmalig).
    palette: Ist die Farbe des Eintrags darin enthalten, wird ihre Position
    (1-basiert) als colorId übergeben.
    """
    d = date_in_week(entry.day, week_of)
    start = {"dateTime": _at(d, entry.start)}
    end = {"dateTime": _at(d, entry.end)}
    if time_zone:
        start["timeZone"] = time_zone
        end["timeZone"] = time_zone

    resource: dict = {
        "summary": entry.subject,
        "start": start,
        "end": end,
        "reminders": {"useDefault": True},
    }
    if entry.room:
        resource["location"] = entry.room
    if weeks and weeks > 1:
        resource["recurrence"] = [f"RRULE:FREQ=WEEKLY;COUNT={weeks}"]
    if palette and entry.color in palette:
        resource["colorId"] = str(palette.index(entry.color) + 1)
    return resource


def event_to_resource(event: CalendarEvent, time_zone: Optional[str] = None) -> dict:
    """Termin aus der Freitext-Erkennung → Event-Ressource."""
    start = {"dateTime": event.start_date_time}
    end = {"dateTime": event.end_date_time}
    if time_zone:
        start["timeZone"] = time_zone
        end["timeZone"] = time_zone
    resource: dict = {
        "summary": event.title,
        "description": event.description,
        "location": event.location,
        "start": start,
        "end": end,
        "reminders": (
            event.reminders.model_dump(by_alias=True, exclude_none=True)
            if event.reminders else {"useDefault": True}
        ),
    }
    if event.attendees:
        resource["attendees"] = [{"email": a} for a in event.attendees]
    if event.color_id:
        resource["colorId"] = event.color_id
    return {k: v for k, v in resource.items() if v is not None}


def task_to_resource(task: CalendarTask, attendees: Optional[list[str]] = None) -> dict:
    """Aufgaben werden als ganztägige, nicht blockierende Termine angelegt."""
    due = task.due_date.split("T")[0]
    resource: dict = {
        "summary": f"📋 {task.title}",
        "description": f"{task.description or ''}\n\nPriority: {task.priority}",
        "start": {"date": due},
        "end": {"date": due},
        "transparency": "transparent",
    }
    if attendees:
        resource["attendees"] = [{"email": a} for a in attendees]
    return resource
