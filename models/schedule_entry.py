"""Datenmodell für einen Eintrag im Wochenraster (Pydantic v2)."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from models.clock import format_hhmm, parse_clock
from models.weekday import Weekday


def new_entry_id() -> str:
    return uuid.uuid4().hex


class ScheduleEntry(BaseModel):
    """Ein Termin an genau einem Wochentag mit zusammenhängendem Zeitraum.

    Zeiten werden als Minuten seit Mitternacht gehalten und nur beim
    Serialisieren als "HH:MM" ausgegeben. Eingaben dürfen "HH:MM",
    "h:mmAM/PM" oder bereits Minuten sein.
    """

    id: str = Field(default_factory=new_entry_id)   # unveränderlich
    subject: str = ""                  # darf als Entwurf leer sein
    room: Optional[str] = None
    day: Weekday
    start: int                         # Minuten seit Mitternacht
    end: int                           # Minuten seit Mitternacht, > start
    color: str = "3B82F6"              # RRGGBB aus der Palette

    @field_validator("day", mode="before")
    @classmethod
    def _parse_day(cls, v):
        if isinstance(v, str):
            return Weekday.from_name(v)
        return v

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_time(cls, v):
        if isinstance(v, str):
            return parse_clock(v)
        return v

    @field_validator("start", "end")
    @classmethod
    def _within_day(cls, v: int) -> int:
        if not 0 <= v <= 24 * 60:
            raise ValueError(f"Uhrzeit außerhalb des Tages: {v} Minuten")
        return v

    @field_validator("color", mode="before")
    @classmethod
    def _normalize_color(cls, v):
        if isinstance(v, str):
            return v.lstrip("#").upper()
        return v

    @field_serializer("start", "end")
    def _serialize_time(self, v: int) -> str:
        return format_hhmm(v)

    # ─── Abgeleitete Werte ───

    @property
    def start_time(self) -> str:
        return format_hhmm(self.start)

    @property
    def end_time(self) -> str:
        return format_hhmm(self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    @property
    def time_key(self) -> tuple[Weekday, int, int]:
        """(Tag, Beginn, Ende) – Schlüssel für die Duplikat-Erkennung beim Import."""
        return (self.day, self.start, self.end)

    def is_valid(self) -> bool:
        """Fach nicht leer und Ende strikt nach Beginn (kein Übergang über Mitternacht)."""
        return bool(self.subject.strip()) and self.end > self.start

    def overlaps(self, other: "ScheduleEntry") -> bool:
        """Gleicher Tag und überlappende [start, end)-Intervalle."""
        return (
            self.day == other.day
            and self.start < other.end
            and other.start < self.end
        )

    def label(self) -> str:
        """Zelleninhalt: "Fach\\nRaum" bzw. nur "Fach"."""
        if self.room:
            return f"{self.subject}\n{self.room}"
        return self.subject
