from config.schema import (
    AppConfig,
    ExportConfig,
    GridConfig,
    PaletteConfig,
    StorageConfig,
)


# ─── FARBPALETTE ───
# Reihenfolge = Vergabereihenfolge für neue Fächer beim Import.
# Nach 8 unterschiedlichen Fächern beginnt die Palette wieder von vorn.

DEFAULT_PALETTE: list[str] = [
    "3B82F6",   # Blau
    "10B981",   # Grün
    "F59E0B",   # Bernstein
    "EF4444",   # Rot
    "8B5CF6",   # Violett
    "EC4899",   # Pink
    "14B8A6",   # Türkis
    "F97316",   # Orange
]


def default_grid() -> GridConfig:
    """Standard-Raster: 07:00–19:00 in 30-Minuten-Slots, Montag bis Samstag.

    Ergibt 25 Slot-Grenzen (07:00, 07:30, …, 19:00). Die letzte Grenze
    markiert nur das Ende und beginnt selbst keinen Slot.
    """
    return GridConfig(
        day_start="07:00",
        day_end="19:00",
        slot_minutes=30,
        visible_days=["Monday", "Tuesday", "Wednesday", "Thursday",
                      "Friday", "Saturday"],
    )


def default_palette() -> PaletteConfig:
    """Die feste 8-Farben-Palette."""
    return PaletteConfig(colors=list(DEFAULT_PALETTE))


def default_app_config() -> AppConfig:
    """Komplette Default-Konfiguration."""
    return AppConfig(
        grid=default_grid(),
        palette=default_palette(),
        storage=StorageConfig(),
        export=ExportConfig(),
    )
