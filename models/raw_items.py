"""Ausgabe-Verträge der externen KI-Parser (Pydantic v2).

Die Felder folgen den JSON-Schlüsseln, die die KI-Dienste liefern
(camelCase), sind in Python aber auch unter snake_case ansprechbar.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RawScheduleEntry(BaseModel):
    """Eine Zeile aus der Stundenplan-Bilderkennung.

    `day` ist Freitext: "Monday", "Monday, Thursday", "Mon and Thu" oder
    ein Tageskürzel wie "MTH". Zeiten sind laut Vertrag "HH:MM" (24h),
    12h-Angaben werden beim Import trotzdem toleriert.
    """

    model_config = ConfigDict(populate_by_name=True)

    subject_code: str = Field("", alias="subjectCode")
    subject_name: Optional[str] = Field(None, alias="subjectName")
    day: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    room: Optional[str] = None

    @property
    def subject(self) -> str:
        """Fachkürzel, ersatzweise der Fachname."""
        code = (self.subject_code or "").strip()
        if code:
            return code
        return (self.subject_name or "").strip()


class Reminder(BaseModel):
    method: Literal["email", "popup"]
    minutes: int


class Reminders(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    use_default: bool = Field(True, alias="useDefault")
    overrides: Optional[list[Reminder]] = None


class CalendarEvent(BaseModel):
    """Termin mit Uhrzeit aus der Freitext-Erkennung."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["event"] = "event"
    title: str
    description: Optional[str] = None
    start_date_time: str = Field(alias="startDateTime")   # ISO 8601
    end_date_time: str = Field(alias="endDateTime")       # ISO 8601
    location: Optional[str] = None
    reminders: Optional[Reminders] = None
    attendees: Optional[list[str]] = None
    color_id: Optional[str] = Field(None, alias="colorId")


class CalendarTask(BaseModel):
    """Aufgabe/Abgabe (ganztägig) aus der Freitext-Erkennung."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["task"] = "task"
    title: str
    description: Optional[str] = None
    due_date: str = Field(alias="dueDate")                # ISO 8601 (Datum)
    priority: Literal["low", "medium", "high"] = "medium"
    status: Optional[Literal["needsAction", "completed"]] = None


RawCalendarItem = Union[CalendarEvent, CalendarTask]
