"""Kanonische Wochentage."""

from enum import Enum


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def index(self) -> int:
        """0-basiert (0=Montag, 6=Sonntag), wie date.weekday()."""
        return _ORDER.index(self)

    @property
    def short(self) -> str:
        """Dreibuchstabiges Kürzel für Tabellenköpfe ("Mon", "Tue", …)."""
        return self.value[:3]

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Voller Name oder Dreibuchstaben-Kürzel, Groß-/Kleinschreibung egal.

        Wirft ValueError bei unbekannten Namen.
        """
        if isinstance(name, cls):
            return name
        key = name.strip().lower()
        for day in cls:
            if key == day.value.lower() or key == day.value[:3].lower():
                return day
        raise ValueError(f"Unbekannter Wochentag: '{name}'")


_ORDER = list(Weekday)
