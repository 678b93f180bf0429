"""Aufbereitung der Antworten externer KI-Parser.

Die Dienste liefern JSON, oft in Markdown-Codeblöcken (```json … ```).
Hier wird nur der Ausgabe-Vertrag geprüft; der Netzwerkaufruf selbst
liegt außerhalb dieses Pakets.
"""

import json
import logging
from typing import Annotated, Union

from pydantic import Field, TypeAdapter, ValidationError

from models.raw_items import (
    CalendarEvent,
    CalendarTask,
    RawCalendarItem,
    RawScheduleEntry,
)

logger = logging.getLogger(__name__)


class ScheduleImportError(Exception):
    """Fehler beim Import: KI-Antwort unlesbar oder im falschen Format."""


_ITEM_ADAPTER = TypeAdapter(
    list[Annotated[Union[CalendarEvent, CalendarTask], Field(discriminator="type")]]
)
_RAW_ENTRY_ADAPTER = TypeAdapter(list[RawScheduleEntry])


def clean_ai_response(text: str) -> str:
    """Entfernt umschließende ```json / ``` Zäune und Leerraum."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _load_json_array(text: str) -> list:
    cleaned = clean_ai_response(text)
    if not cleaned:
        raise ScheduleImportError("Leere Antwort des KI-Dienstes")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ScheduleImportError(
            f"Antwort ist kein gültiges JSON (Zeile {e.lineno}, Spalte {e.colno}): {e.msg}"
        ) from e
    # Einzelnes Objekt → Liste mit einem Element
    if isinstance(parsed, dict):
        parsed = [parsed]
    if not isinstance(parsed, list):
        raise ScheduleImportError(
            f"Erwartet wurde eine JSON-Liste, erhalten: {type(parsed).__name__}"
        )
    return parsed


def parse_raw_schedule_entries(text: str) -> list[RawScheduleEntry]:
    """KI-Antwort der Stundenplan-Bilderkennung → RawScheduleEntry-Liste."""
    items = _load_json_array(text)
    try:
        entries = _RAW_ENTRY_ADAPTER.validate_python(items)
    except ValidationError as e:
        raise ScheduleImportError(
            f"Stundenplan-Einträge im falschen Format ({e.error_count()} Fehler):\n{e}"
        ) from e
    logger.info(f"{len(entries)} Roh-Einträge aus KI-Antwort gelesen")
    return entries


def parse_calendar_items(text: str) -> list[RawCalendarItem]:
    """KI-Antwort der Freitext-Erkennung → Termine und Aufgaben.

    Fehlt das Feld "type", wird es geraten: mit "dueDate" → Aufgabe,
    sonst Termin.
    """
    items = _load_json_array(text)
    for item in items:
        if isinstance(item, dict) and "type" not in item:
            item["type"] = "task" if "dueDate" in item else "event"
    try:
        return _ITEM_ADAPTER.validate_python(items)
    except ValidationError as e:
        raise ScheduleImportError(
            f"Kalender-Einträge im falschen Format ({e.error_count()} Fehler):\n{e}"
        ) from e
