"""ColorAssigner – deterministische Fach → Farbe Zuordnung für Import-Stapel."""

from typing import Iterable, Optional

from config.defaults import DEFAULT_PALETTE
from models.schedule_entry import ScheduleEntry


def assign_colors(
    existing_entries: Iterable[ScheduleEntry],
    new_subjects: Iterable[str],
    palette: Optional[list[str]] = None,
) -> dict[str, str]:
    """Baut {Fach: Farbe} für einen Import-Stapel.

    - Vorbelegung aus bestehenden Einträgen (exakter Fachname, erste Farbe gewinnt),
      damit ein erneuter Import die Farbe eines Fachs beibehält.
    - Neue Fächer erhalten palette[zähler % len(palette)]; der Zähler läuft nur
      bei Neuvergaben weiter und beginnt je Stapel bei 0. Farben bestehender
      Einträge spielen für den Zähler keine Rolle.
    - Sind alle Farben vergeben, wird zyklisch wiederholt (das 9. neue Fach
      eines leeren Plans erhält palette[0]).
    """
    palette = list(palette or DEFAULT_PALETTE)
    size = len(palette)

    colors: dict[str, str] = {}
    for e in existing_entries:
        if e.subject not in colors:
            colors[e.subject] = e.color

    counter = 0
    for subject in new_subjects:
        if subject in colors:
            continue
        colors[subject] = palette[counter % size]
        counter += 1
    return colors
