"""Route group exports."""

from . import health, stations, suburbs

__all__ = ["health", "stations", "suburbs"]
