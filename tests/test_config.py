"""Tests for engine settings."""

from pathlib import Path

import pytest

from path_engine.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PATH_ENGINE_HIT_TOLERANCE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.hit_tolerance == 10.0
        assert settings.context_menu_tolerance == 15.0
        assert settings.curve_samples == 50
        assert settings.refine_iterations == 10
        assert settings.arc_bounds_samples == 16
        assert settings.smooth_factor == pytest.approx(0.33)
        assert settings.log_json is False

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH_ENGINE_HIT_TOLERANCE", "4.5")
        monkeypatch.setenv("PATH_ENGINE_CURVE_SAMPLES", "100")
        monkeypatch.setenv("PATH_ENGINE_LOG_JSON", "true")
        settings = Settings(_env_file=None)
        assert settings.hit_tolerance == 4.5
        assert settings.curve_samples == 100
        assert settings.log_json is True

    def test_unprefixed_variables_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIT_TOLERANCE", "1")
        monkeypatch.delenv("PATH_ENGINE_HIT_TOLERANCE", raising=False)
        assert Settings(_env_file=None).hit_tolerance == 10.0

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PATH_ENGINE_FILL_SAMPLES", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PATH_ENGINE_FILL_SAMPLES=24\n")
        assert Settings(_env_file=env_file).fill_samples == 24

    def test_log_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH_ENGINE_LOG_FILE", str(tmp_path / "engine.log"))
        monkeypatch.delenv("PATH_ENGINE_ERROR_LOG_FILE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_file == tmp_path / "engine.log"
        assert settings.error_log_file is None
