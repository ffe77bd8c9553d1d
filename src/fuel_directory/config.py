"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.query import SortOption


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FUELDIR_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Fuel Price Directory API"
    api_prefix: str = "/api"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    stations_file: Path = Field(
        default=Path("data/stations.json"),
        description="Station snapshot with addresses, coordinates and fuel prices.",
    )
    default_page_size: int = Field(default=24, ge=1)
    max_page_size: int = Field(default=200, ge=1)
    default_sort: SortOption = Field(
        default=SortOption.NAME,
        description="Sort option used when the caller gives none.",
    )
    default_latitude: float = Field(
        default=-37.8136,
        ge=-90.0,
        le=90.0,
        description="Fallback reference latitude (Melbourne CBD) when the viewer location is unknown.",
    )
    default_longitude: float = Field(default=144.9631, ge=-180.0, le=180.0)
    nearby_suburb_radius_km: float = Field(default=10.0, gt=0.0)
    nearby_suburb_limit: int = Field(default=6, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "stations_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("default_sort", mode="before")
    @classmethod
    def _normalize_default_sort(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


settings = Settings()
