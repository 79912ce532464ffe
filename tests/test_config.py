"""Tests for settings."""

from __future__ import annotations

from pathlib import Path

from src.core.config import Settings


class TestSettings:
    """Tests for Settings defaults and persistence."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.ppc.high_acos_pct == 30
        assert settings.ppc.low_click_volume == 100
        assert settings.fba.low_margin_pct == 15
        assert settings.validation.fba_bulk.allow_zero_cost is True
        assert settings.validation.fba_manual.allow_zero_cost is False
        assert settings.max_upload_bytes == 10 * 1024 * 1024

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("SELLER_TOOLS_PPC__HIGH_ACOS_PCT", "45")
        monkeypatch.setenv("SELLER_TOOLS_LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.ppc.high_acos_pct == 45
        assert settings.log_level == "DEBUG"

    def test_save_and_load(self, tmp_path: Path) -> None:
        settings = Settings()
        settings.sales.default_base_sales = 80
        path = settings.save(tmp_path / "settings.json")

        loaded = Settings.load(path)

        assert loaded.sales.default_base_sales == 80
        assert loaded.sales.price_bands == settings.sales.price_bands

    def test_load_missing_file(self, tmp_path: Path) -> None:
        assert Settings.load(tmp_path / "missing.json").ppc.high_acos_pct == 30

    def test_load_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert Settings.load(path).fba.low_roi_pct == 30
