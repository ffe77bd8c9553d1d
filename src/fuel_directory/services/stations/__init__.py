"""Station service helpers."""

from .stats import (
    compute_station_metadata,
    compute_suburb_price_stats,
    find_nearby_suburbs,
    get_station,
    list_regions,
    list_stations_for_suburb,
    list_suburbs,
    resolve_suburb_name,
    slugify_suburb,
)

__all__ = [
    "compute_station_metadata",
    "compute_suburb_price_stats",
    "find_nearby_suburbs",
    "get_station",
    "list_regions",
    "list_stations_for_suburb",
    "list_suburbs",
    "resolve_suburb_name",
    "slugify_suburb",
]
