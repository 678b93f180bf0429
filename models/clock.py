"""Uhrzeit-Umrechnung: "HH:MM" (24h) bzw. "h:mmAM" (12h) ↔ Minuten seit Mitternacht.

Intern wird überall mit Minuten gerechnet; Strings entstehen nur an den
Rändern (Eingabe, Anzeige, Speicherung).
"""

import re

_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")
_CLOCK_12H_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s?([AaPp][Mm])\s*$")


def parse_hhmm(value: str) -> int:
    """ "08:30" → 510. Wirft ValueError bei ungültiger Eingabe.

    "24:00" ist als Tagesende erlaubt (→ 1440), damit ein Eintrag bis
    Mitternacht wieder eingelesen werden kann.
    """
    m = _HHMM_RE.match(value)
    if not m:
        raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM)")
    hh, mm = int(m.group(1)), int(m.group(2))
    if mm > 59 or hh > 24 or (hh == 24 and mm):
        raise ValueError(f"Ungültige Uhrzeit '{value}'")
    return hh * 60 + mm


def format_hhmm(minutes: int) -> str:
    """510 → "08:30"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def twelve_to_minutes(hour: int, minute: int, period: str) -> int:
    """12-Stunden-Komponenten → Minuten.

    12 AM → 00, 12 PM bleibt 12, sonst PM +12.
    """
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise ValueError(f"Ungültige 12h-Uhrzeit {hour}:{minute:02d}{period}")
    period = period.upper()
    if period == "AM":
        hour = 0 if hour == 12 else hour
    elif period == "PM":
        hour = 12 if hour == 12 else hour + 12
    else:
        raise ValueError(f"Ungültiger Tagesabschnitt '{period}'")
    return hour * 60 + minute


def parse_clock_12h(value: str) -> int:
    """ "8:30AM" / "8:30 pm" → Minuten. Wirft ValueError."""
    m = _CLOCK_12H_RE.match(value)
    if not m:
        raise ValueError(f"Ungültige 12h-Uhrzeit '{value}'")
    return twelve_to_minutes(int(m.group(1)), int(m.group(2)), m.group(3))


def format_clock_12h(minutes: int) -> str:
    """Minuten → "8:30AM" (ohne führende Null, ohne Leerzeichen)."""
    hh, mm = divmod(minutes, 60)
    period = "AM" if hh < 12 else "PM"
    hour = hh % 12 or 12
    return f"{hour}:{mm:02d}{period}"


def parse_clock(value: str) -> int:
    """Akzeptiert "HH:MM" (24h) und "h:mmAM/PM"."""
    if _CLOCK_12H_RE.match(value):
        return parse_clock_12h(value)
    return parse_hhmm(value)
