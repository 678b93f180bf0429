from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional


def _hhmm_to_minutes(value: str) -> int:
    hh, mm = value.split(":")
    return int(hh) * 60 + int(mm)


# ─── ZEITRASTER ───

class GridConfig(BaseModel):
    """Sichtbares Wochenraster.

    Das Raster definiert:
    - Beginn und Ende des Betriebsfensters (z.B. 07:00–19:00)
    - Die Breite eines Slots in Minuten (Standard: 30)
    - Welche Wochentage angezeigt werden
    """
    # Beginn des Rasters im Format "HH:MM"
    day_start: str = Field("07:00",
        description="Beginn des Rasters (HH:MM)")
    # Ende des Rasters im Format "HH:MM" (letzte Slot-Grenze)
    day_end: str = Field("19:00",
        description="Ende des Rasters (HH:MM)")
    # Slot-Breite in Minuten
    slot_minutes: int = Field(30, ge=5, le=120,
        description="Slot-Breite in Minuten")
    # Angezeigte Wochentage (kanonische englische Namen)
    visible_days: list[str] = Field(
        default=["Monday", "Tuesday", "Wednesday", "Thursday",
                 "Friday", "Saturday"],
        description="Angezeigte Wochentage")

    @field_validator("day_start", "day_end")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        """Prüft das Format HH:MM (24h)."""
        parts = v.split(":")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Ungültige Uhrzeit '{v}' (erwartet HH:MM)")
        hh, mm = int(parts[0]), int(parts[1])
        if not (0 <= hh <= 24 and 0 <= mm < 60) or (hh == 24 and mm != 0):
            raise ValueError(f"Ungültige Uhrzeit '{v}'")
        return f"{hh:02d}:{mm:02d}"

    @field_validator("visible_days")
    @classmethod
    def validate_days(cls, v: list[str]) -> list[str]:
        from models.weekday import Weekday
        return [Weekday.from_name(d).value for d in v]

    @model_validator(mode='after')
    def validate_window(self):
        """Prüfe dass das Fenster nicht leer ist und glatt in Slots aufgeht."""
        start = _hhmm_to_minutes(self.day_start)
        end = _hhmm_to_minutes(self.day_end)
        if end <= start:
            raise ValueError(
                f"Rasterende {self.day_end} liegt nicht nach Rasterbeginn {self.day_start}")
        if (end - start) % self.slot_minutes != 0:
            raise ValueError(
                f"Fenster {self.day_start}–{self.day_end} ist kein Vielfaches "
                f"von {self.slot_minutes} Minuten")
        return self


# ─── FARBPALETTE ───

class PaletteConfig(BaseModel):
    """Feste, geordnete Farbpalette für Fächer (RRGGBB, ohne #)."""
    colors: list[str] = Field(
        min_length=1,
        description="Fach-Farben in Vergabereihenfolge")

    @field_validator("colors")
    @classmethod
    def validate_hex(cls, v: list[str]) -> list[str]:
        out = []
        for c in v:
            h = c.lstrip("#").upper()
            if len(h) != 6 or any(ch not in "0123456789ABCDEF" for ch in h):
                raise ValueError(f"Ungültige Farbe '{c}' (erwartet RRGGBB)")
            out.append(h)
        if len(set(out)) != len(out):
            raise ValueError("Farbpalette enthält doppelte Farben")
        return out


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablage der Stundenplan-Einträge (prozesslokaler Speicher)."""
    # Pfad der JSON-Datei mit allen Einträgen
    entries_path: str = Field("output/schedule_entries.json",
        description="JSON-Datei mit allen Einträgen")
    # Schlüssel, unter dem die Liste gespeichert wird
    store_key: str = Field("scheduleEntries",
        description="Speicher-Schlüssel der Eintragsliste")


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Einstellungen für den statischen Export."""
    # Titel über dem exportierten Raster
    title: str = Field("Wochenplan")
    # Zeitbereich auf belegte Slots zuschneiden
    auto_fit: bool = Field(False,
        description="Zeitbereich auf min. Beginn / max. Ende zuschneiden")
    # Optional: nur diese Tage exportieren (None = alle sichtbaren Tage)
    days: Optional[list[str]] = None


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration."""
    grid: GridConfig = Field(default_factory=GridConfig)
    palette: PaletteConfig
    storage: StorageConfig = Field(default_factory=StorageConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
