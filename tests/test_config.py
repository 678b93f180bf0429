"""Tests für das Konfigurationssystem."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import DEFAULT_PALETTE, default_app_config, default_grid
from config.manager import ConfigManager
from config.schema import AppConfig, GridConfig, PaletteConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_grid(self):
        """Standardraster 07:00–19:00 in 30-Minuten-Slots, Montag bis Samstag."""
        grid = default_grid()
        assert grid.day_start == "07:00"
        assert grid.day_end == "19:00"
        assert grid.slot_minutes == 30
        assert grid.visible_days[0] == "Monday"
        assert grid.visible_days[-1] == "Saturday"

    def test_default_palette(self):
        config = default_app_config()
        assert config.palette.colors == DEFAULT_PALETTE
        assert len(config.palette.colors) == 8

    def test_storage_defaults(self):
        config = default_app_config()
        assert config.storage.store_key == "scheduleEntries"


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestGridConfigValidation:
    def test_time_format_normalized(self):
        assert GridConfig(day_start="7:00").day_start == "07:00"

    def test_invalid_time(self):
        with pytest.raises(ValidationError):
            GridConfig(day_start="7 Uhr")
        with pytest.raises(ValidationError):
            GridConfig(day_end="24:30")

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            GridConfig(day_start="19:00", day_end="07:00")

    def test_window_must_fit_slots(self):
        with pytest.raises(ValidationError):
            GridConfig(day_start="07:00", day_end="19:10", slot_minutes=30)

    def test_midnight_end_allowed(self):
        assert GridConfig(day_start="00:00", day_end="24:00").day_end == "24:00"

    def test_visible_days_normalized(self):
        grid = GridConfig(visible_days=["mon", "Wednesday", "fri"])
        assert grid.visible_days == ["Monday", "Wednesday", "Friday"]

    def test_unknown_day_rejected(self):
        with pytest.raises(ValidationError):
            GridConfig(visible_days=["Funday"])


class TestPaletteValidation:
    def test_hex_normalized(self):
        assert PaletteConfig(colors=["#3b82f6"]).colors == ["3B82F6"]

    def test_invalid_hex(self):
        with pytest.raises(ValidationError):
            PaletteConfig(colors=["blau"])

    def test_empty_palette(self):
        with pytest.raises(ValidationError):
            PaletteConfig(colors=[])

    def test_duplicates_rejected(self):
        with pytest.raises(ValidationError):
            PaletteConfig(colors=["111111", "#111111"])


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Speichern und Laden ergibt dieselbe Config."""
        mgr = ConfigManager(tmp_path / "wochenraster.yaml")
        config = default_app_config()
        mgr.save(config)
        loaded = mgr.load()
        assert loaded == config

    def test_saved_file_has_comments(self, tmp_path: Path):
        path = tmp_path / "wochenraster.yaml"
        ConfigManager(path).save(default_app_config())
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "Zeitraster" in text
        assert "slot_minutes: 30" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "nicht_da.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(tmp_path / "not_there.yaml")

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager(tmp_path / "nicht_da.yaml").load_or_default()
        assert isinstance(config, AppConfig)
        assert config.grid.slot_minutes == 30

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "kaputt.yaml"
        path.write_text("grid:\n  slot_minutes: 7\npalette:\n  colors: []\n",
                        encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()
