"""ScheduleEntryStore – kanonische Sammlung aller Einträge.

Jede Änderung schreibt die komplette Liste sofort über den
Persistenz-Port (load/save) zurück. Ungültige Eingaben (leeres Fach,
Ende ≤ Beginn) werden abgewiesen, ohne Ausnahme: sie sind ein
erwarteter, häufiger Fall im Eingabeformular.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from models.schedule_entry import ScheduleEntry
from models.weekday import Weekday

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


# ─── Persistenz-Port ──────────────────────────────────────────────────────────

class EntryBackend(Protocol):
    def load(self) -> list[ScheduleEntry]: ...

    def save(self, entries: list[ScheduleEntry]) -> None: ...


class MemoryBackend:
    """Hält die serialisierte Liste nur im Prozess (Tests, Vorschau)."""

    def __init__(self, entries: Optional[list[ScheduleEntry]] = None) -> None:
        self.payload: str = "[]"
        self.save_count = 0
        if entries:
            self.save(entries)
            self.save_count = 0

    def load(self) -> list[ScheduleEntry]:
        return [ScheduleEntry.model_validate(item) for item in json.loads(self.payload)]

    def save(self, entries: list[ScheduleEntry]) -> None:
        self.payload = json.dumps([e.model_dump(mode="json") for e in entries])
        self.save_count += 1


class JsonFileBackend:
    """Schlüssel-Wert-Datei: die Eintragsliste liegt unter einem Schlüssel.

    Dateiformat:
        {"schema_version": 1, "<store_key>": [ {...}, ... ]}

    Dateien ohne Versionsangabe (reine Liste) werden als Version 1 gelesen.
    """

    def __init__(self, path: Path, store_key: str = "scheduleEntries") -> None:
        self.path = Path(path)
        self.store_key = store_key

    def load(self) -> list[ScheduleEntry]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if isinstance(raw, list):
            items = raw
        else:
            version = raw.get("schema_version", SCHEMA_VERSION)
            if version > SCHEMA_VERSION:
                raise ValueError(
                    f"Speicherdatei {self.path} hat Schema-Version {version}, "
                    f"unterstützt wird bis {SCHEMA_VERSION}"
                )
            items = raw.get(self.store_key, [])
        return [ScheduleEntry.model_validate(item) for item in items]

    def save(self, entries: list[ScheduleEntry]) -> None:
        data = {
            "schema_version": SCHEMA_VERSION,
            self.store_key: [e.model_dump(mode="json") for e in entries],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Einträge konnten nicht gespeichert werden ({self.path}): {e}")


# ─── Store ────────────────────────────────────────────────────────────────────

class ScheduleEntryStore:
    """Einträge hinzufügen, ändern, löschen – jeweils mit sofortigem Speichern."""

    def __init__(self, backend: Optional[EntryBackend] = None) -> None:
        self._backend = backend if backend is not None else MemoryBackend()
        self._entries: list[ScheduleEntry] = self._backend.load()

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ScheduleEntryStore({len(self._entries)} Einträge)"

    def _flush(self) -> None:
        self._backend.save(self._entries)

    def add(self, entry: ScheduleEntry) -> Optional[str]:
        """Fügt einen Eintrag hinzu und gibt seine ID zurück.

        None (keine Änderung), wenn das Fach leer ist, Ende ≤ Beginn oder die
        ID bereits vergeben ist.
        """
        if not entry.is_valid():
            logger.info(
                f"Eintrag abgewiesen: Fach='{entry.subject}' "
                f"{entry.start_time}–{entry.end_time}"
            )
            return None
        if self.get(entry.id) is not None:
            logger.info(f"Eintrag abgewiesen: ID {entry.id} existiert bereits")
            return None
        self._entries.append(entry.model_copy())
        self._flush()
        return entry.id

    def update(self, entry_id: str, **fields) -> bool:
        """Ersetzt Felder eines Eintrags (alle außer `id`).

        Unbekannte ID → No-op (False). Ergibt sich ein ungültiger Eintrag,
        bleibt der alte unverändert (False).
        """
        for i, old in enumerate(self._entries):
            if old.id != entry_id:
                continue
            merged = {**old.model_dump(), **fields, "id": old.id}
            try:
                new = ScheduleEntry.model_validate(merged)
            except ValidationError as e:
                logger.info(f"Änderung an {entry_id} abgewiesen: {e.error_count()} Fehler")
                return False
            if not new.is_valid():
                logger.info(f"Änderung an {entry_id} abgewiesen: ungültiger Eintrag")
                return False
            self._entries[i] = new
            self._flush()
            return True
        return False

    def delete(self, entry_id: str) -> bool:
        """Entfernt einen Eintrag. Gibt True zurück wenn einer entfernt wurde."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        if len(self._entries) == before:
            return False
        self._flush()
        return True

    def get(self, entry_id: str) -> Optional[ScheduleEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def find_by_time(self, day: Weekday, start: int, end: int) -> Optional[ScheduleEntry]:
        """Erster Eintrag mit identischem (Tag, Beginn, Ende)."""
        return next(
            (e for e in self._entries if e.time_key == (day, start, end)), None
        )

    def clear(self) -> None:
        """Entfernt alle Einträge."""
        self._entries = []
        self._flush()

    def list(self) -> list[ScheduleEntry]:
        """Momentaufnahme aller Einträge in Einfügereihenfolge."""
        return [e.model_copy() for e in self._entries]
