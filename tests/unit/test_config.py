import pytest
from pydantic import ValidationError

from bonus_tax.config import Settings, get_settings


def test_defaults(monkeypatch):
    for key in ("MIN_GRID_STEP", "GRID_SAMPLES", "SEARCH_MODE", "FEATURE_FILE_LOG"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings()
    assert settings.min_grid_step == 100
    assert settings.grid_samples == 50
    assert settings.search_mode == "grid"
    assert settings.feature_file_log is False


def test_env_parsing(monkeypatch):
    monkeypatch.setenv("SEARCH_MODE", "EXACT")
    monkeypatch.setenv("FEATURE_FILE_LOG", "yes")
    monkeypatch.setenv("GRID_SAMPLES", "0")
    monkeypatch.setenv("MIN_GRID_STEP", "-3")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.search_mode == "exact"
    assert settings.feature_file_log is True
    assert settings.grid_samples == 1
    assert settings.min_grid_step == 1


def test_unknown_search_mode_rejected(monkeypatch):
    monkeypatch.setenv("SEARCH_MODE", "annealing")
    with pytest.raises(ValidationError):
        Settings()
