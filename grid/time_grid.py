"""TimeGrid – feste Slot-Grenzen des Wochenrasters.

Standard: 07:00 bis 19:00 in 30-Minuten-Schritten = 25 Grenzen
(07:00, 07:30, …, 19:00). Die letzte Grenze markiert nur das Ende.
"""

from typing import Optional, Union

from config.schema import GridConfig
from models.clock import format_hhmm, parse_clock, parse_hhmm

TimeLike = Union[int, str]


def to_minutes(value: TimeLike) -> int:
    """ "09:30" → 570; Minuten werden unverändert durchgereicht."""
    if isinstance(value, str):
        return parse_clock(value)
    return int(value)


class TimeGrid:
    """Geordnete, gleichabständige Slot-Grenzen plus Index ↔ Uhrzeit-Umrechnung."""

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        config = config or GridConfig()
        self.start = parse_hhmm(config.day_start)
        self.end = parse_hhmm(config.day_end)
        self.slot_minutes = config.slot_minutes
        self.slots: list[int] = list(
            range(self.start, self.end + 1, self.slot_minutes)
        )

    def __len__(self) -> int:
        return len(self.slots)

    def __repr__(self) -> str:
        return (f"TimeGrid({format_hhmm(self.start)}–{format_hhmm(self.end)}, "
                f"{self.slot_minutes} min, {len(self.slots)} Grenzen)")

    # ─── Index ↔ Uhrzeit ───

    @property
    def slot_times(self) -> list[str]:
        return [format_hhmm(m) for m in self.slots]

    @property
    def last_index(self) -> int:
        return len(self.slots) - 1

    def minutes_at(self, index: int) -> int:
        """Slot-Grenze zu einem Index. Wirft IndexError außerhalb des Rasters."""
        if not 0 <= index < len(self.slots):
            raise IndexError(f"Slot-Index {index} außerhalb des Rasters (0–{self.last_index})")
        return self.slots[index]

    def time_at(self, index: int) -> str:
        return format_hhmm(self.minutes_at(index))

    def boundary_at(self, index: int) -> int:
        """Wie minutes_at, aber auf die letzte Rastergrenze begrenzt."""
        return self.slots[max(0, min(index, self.last_index))]

    def index_of(self, value: TimeLike) -> int:
        """Index einer exakten Slot-Grenze. Wirft ValueError sonst."""
        minutes = to_minutes(value)
        if minutes < self.start or minutes > self.end or \
                (minutes - self.start) % self.slot_minutes:
            raise ValueError(f"{format_hhmm(minutes)} ist keine Slot-Grenze")
        return (minutes - self.start) // self.slot_minutes

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self.slots)

    # ─── Bucket-Arithmetik ───

    def bucket_start(self, minutes: int) -> int:
        """Beginn des Slots [b, b+slot) der `minutes` enthält."""
        offset = (minutes - self.start) // self.slot_minutes
        return self.start + offset * self.slot_minutes

    def bucket_end(self, minutes: int) -> int:
        """Kleinste Slot-Grenze ≥ `minutes`."""
        offset = -((self.start - minutes) // self.slot_minutes)
        return self.start + offset * self.slot_minutes

    def crop(self, first: int, last: int) -> list[int]:
        """Slot-Grenzen, die [first, last] abdecken (für Auto-Fit beim Export).

        first wird auf den Slot-Beginn abgerundet, last auf die nächste
        Grenze aufgerundet; beides bleibt innerhalb des Rasters.
        """
        lo = max(self.start, self.bucket_start(first))
        hi = min(self.end, self.bucket_end(last))
        if hi <= lo:
            return []
        return [m for m in self.slots if lo <= m <= hi]
