from pathlib import Path

import pytest
from pydantic import ValidationError

from fuel_directory.config import Settings
from fuel_directory.models.query import SortOption


def test_settings_defaults():
    settings = Settings()
    assert settings.api_prefix == "/api"
    assert settings.default_page_size == 24
    assert settings.stations_file.is_absolute()


def test_settings_read_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("FUELDIR_STATIONS_FILE", str(tmp_path / "stations.json"))
    monkeypatch.setenv("FUELDIR_DEFAULT_PAGE_SIZE", "12")
    monkeypatch.setenv("FUELDIR_LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.stations_file == (tmp_path / "stations.json").resolve()
    assert settings.default_page_size == 12
    assert settings.log_level == "DEBUG"


def test_allowed_origins_accepts_list_and_tuple():
    assert Settings(frontend_allowed_origins=["http://a", "http://b"]).frontend_allowed_origins == ("http://a", "http://b")
    assert Settings(frontend_allowed_origins="http://a,http://b").frontend_allowed_origins == ("http://a", "http://b")


def test_default_sort_is_validated_at_startup(monkeypatch):
    monkeypatch.setenv("FUELDIR_DEFAULT_SORT", "cheapest")
    with pytest.raises(ValidationError):
        Settings()


def test_default_sort_accepts_known_option(monkeypatch):
    monkeypatch.setenv("FUELDIR_DEFAULT_SORT", " Price-Low ")
    assert Settings().default_sort is SortOption.PRICE_LOW
