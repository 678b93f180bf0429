"""Tageskürzel-Auflösung: "MTH" → [Montag, Donnerstag].

Zwei Stufen:
  resolve_day_code()     Kompakte Kürzel aus Stundenplan-Tabellen
                         ("M", "TTh", "MWF", "M-W-F", "SU")
  normalize_day_names()  Ausgeschriebene Tageslisten aus der KI-Ausgabe
                         ("Monday, Thursday", "Mon and Thu")
"""

import re

from models.weekday import Weekday

# ─── Kürzel-Tabellen ──────────────────────────────────────────────────────────

# Zweibuchstabige Kürzel haben Vorrang und verbrauchen zwei Zeichen.
_DIGRAPHS = {
    "th": Weekday.THURSDAY,
    "su": Weekday.SUNDAY,
}

_SINGLE = {
    "m": Weekday.MONDAY,
    "t": Weekday.TUESDAY,     # ein einzelnes T ist IMMER Dienstag
    "w": Weekday.WEDNESDAY,
    "f": Weekday.FRIDAY,
    "s": Weekday.SATURDAY,
}

_LIST_SPLIT_RE = re.compile(r"\s*(?:,|;|/|&|\band\b)\s*", re.IGNORECASE)


def resolve_day_code(token: str) -> list[Weekday]:
    """Zerlegt ein Tageskürzel von links nach rechts in Wochentage.

    "TH"/"Th"/"th" → Donnerstag, "SU" → Sonntag (je zwei Zeichen);
    sonst M, T, W, F, S einzeln. Unbekannte Zeichen (z.B. "-") werden
    übersprungen. Reihenfolge bleibt erhalten, Duplikate entfallen.
    Unbekannte Eingabe ergibt eine leere Liste, nie None.
    """
    days: list[Weekday] = []
    i = 0
    text = token or ""
    while i < len(text):
        pair = text[i:i + 2].lower()
        if pair in _DIGRAPHS:
            day = _DIGRAPHS[pair]
            i += 2
        else:
            day = _SINGLE.get(text[i].lower())
            i += 1
            if day is None:
                continue
        if day not in days:
            days.append(day)
    return days


def _match_day_name(part: str):
    """ "Mon", "Tues", "Thurs", "Mondays" → Wochentag; None bei Kürzeln/Unbekanntem."""
    key = part.lower().rstrip(".")
    if len(key) < 3:
        return None
    for day in Weekday:
        name = day.value.lower()
        if name.startswith(key) or (key.endswith("s") and name.startswith(key[:-1])):
            return day
    return None


def normalize_day_names(text: str) -> list[Weekday]:
    """Ausgeschriebene Tagesliste → Wochentage.

    Trennt an Komma, Semikolon, "/", "&" und "and". Jeder Teil wird zuerst
    als Tagesname ("Monday", "mon") gelesen; gelingt das nicht, wird er als
    Kürzel aufgelöst (die KI liefert gelegentlich "MTH" statt Namen).
    """
    days: list[Weekday] = []
    for part in _LIST_SPLIT_RE.split(text or ""):
        part = part.strip()
        if not part:
            continue
        named = _match_day_name(part)
        found = [named] if named is not None else resolve_day_code(part)
        for d in found:
            if d not in days:
                days.append(d)
    return days
