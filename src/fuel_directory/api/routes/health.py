"""Health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from ...config import settings
from ...data.stations_repository import load_stations

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/data", status_code=status.HTTP_200_OK)
def health_data() -> dict:
    """Report whether the station snapshot can be loaded."""
    try:
        stations = load_stations()
    except (FileNotFoundError, ValueError) as exc:
        logging.warning(f"Station data health check failed: {exc}")
        return {
            "service": "stations",
            "healthy": False,
            "source": str(settings.stations_file),
            "error": str(exc),
        }
    return {
        "service": "stations",
        "healthy": True,
        "source": str(settings.stations_file),
        "stations": len(stations),
        "with_coordinates": sum(1 for station in stations if station.has_coordinates),
    }
