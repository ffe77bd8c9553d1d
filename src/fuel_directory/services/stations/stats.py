"""Station aggregations used to populate filters and suburb pages."""

from __future__ import annotations

import re
from collections import Counter, defaultdict
from typing import Iterable, Optional, Sequence

from ...models.domain import Coordinate, FuelType, Listing
from ..geospatial import centroid, distance_km

_WHITESPACE = re.compile(r"\s+")


def slugify_suburb(name: str) -> str:
    return _WHITESPACE.sub("-", name.strip().lower())


def _matches_suburb(listing: Listing, suburb: str) -> bool:
    wanted = slugify_suburb(suburb)
    return bool(listing.suburb) and slugify_suburb(listing.suburb) == wanted


def _price_summary(prices: Sequence[float]) -> dict:
    return {
        "min": min(prices),
        "max": max(prices),
        "average": round(sum(prices) / len(prices), 1),
    }


def compute_station_metadata(listings: Iterable[Listing]) -> dict:
    """Counts and price ranges across the whole snapshot."""

    stations = list(listings)
    by_suburb: Counter[str] = Counter(s.suburb for s in stations if s.suburb)
    by_brand: Counter[str] = Counter(s.brand for s in stations if s.brand)
    regions = {s.region for s in stations if s.region}

    prices: dict[FuelType, list[float]] = defaultdict(list)
    for station in stations:
        for fuel_type, price in station.fuel_prices.available().items():
            prices[fuel_type].append(price)

    price_range = {
        fuel_type.value: _price_summary(prices[fuel_type])
        for fuel_type in FuelType
        if prices.get(fuel_type)
    }

    return {
        "totalStations": len(stations),
        "suburbs": sorted(by_suburb),
        "brands": sorted(by_brand),
        "regions": sorted(regions),
        "bySuburb": dict(sorted(by_suburb.items())),
        "byBrand": dict(sorted(by_brand.items())),
        "priceRange": price_range,
    }


def list_suburbs(listings: Iterable[Listing], limit: Optional[int] = None) -> list[dict]:
    """Return suburbs ranked by station count, then name."""

    counts: Counter[str] = Counter(s.suburb for s in listings if s.suburb)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0].lower()))
    items = [{"name": name, "slug": slugify_suburb(name), "stationCount": count} for name, count in ranked]
    if limit is not None:
        return items[: max(limit, 0)]
    return items


def list_regions(listings: Iterable[Listing]) -> list[str]:
    return sorted({s.region for s in listings if s.region})


def get_station(listings: Iterable[Listing], station_id: str) -> Optional[Listing]:
    for listing in listings:
        if listing.id == station_id:
            return listing
    return None


def list_stations_for_suburb(listings: Iterable[Listing], suburb: str) -> list[Listing]:
    """Stations in ``suburb``, matched case-insensitively by name or slug."""

    return [listing for listing in listings if _matches_suburb(listing, suburb)]


def resolve_suburb_name(listings: Iterable[Listing], suburb: str) -> Optional[str]:
    """Map a slug or loosely-cased name back to the suburb's display name."""

    for listing in listings:
        if _matches_suburb(listing, suburb):
            return listing.suburb
    return None


def compute_suburb_price_stats(
    listings: Iterable[Listing],
    suburb: str,
    fuel_type: FuelType = FuelType.UNLEADED,
) -> dict:
    """Average/min/max price of ``fuel_type`` in a suburb, for display only."""

    stations = list_stations_for_suburb(listings, suburb)
    prices = [p for s in stations if (p := s.fuel_prices.get(fuel_type)) is not None]

    stats: dict = {"average": None, "min": None, "max": None}
    if prices:
        stats = _price_summary(prices)

    return {
        "suburb": stations[0].suburb if stations else suburb,
        "fuelType": fuel_type.value,
        "stations": len(stations),
        "pricedStations": len(prices),
        **stats,
    }


def _suburb_centroids(listings: Iterable[Listing]) -> dict[str, tuple[Coordinate, int]]:
    points: dict[str, list[Coordinate]] = defaultdict(list)
    counts: Counter[str] = Counter()
    for listing in listings:
        if not listing.suburb:
            continue
        counts[listing.suburb] += 1
        coordinate = listing.coordinate
        if coordinate is not None:
            points[listing.suburb].append(coordinate)

    centroids: dict[str, tuple[Coordinate, int]] = {}
    for name, coordinates in points.items():
        center = centroid(coordinates)
        if center is not None:
            centroids[name] = (center, counts[name])
    return centroids


def find_nearby_suburbs(
    listings: Iterable[Listing],
    suburb: str,
    *,
    radius_km: float = 10.0,
    limit: int = 6,
) -> list[dict]:
    """Suburbs whose station centroid lies within ``radius_km`` of ``suburb``'s.

    Returns an empty list when the suburb has no mappable stations.
    """

    centroids = _suburb_centroids(listings)
    wanted = slugify_suburb(suburb)
    origin = next((center for name, (center, _) in centroids.items() if slugify_suburb(name) == wanted), None)
    if origin is None:
        return []

    nearby: list[dict] = []
    for name, (center, count) in centroids.items():
        if slugify_suburb(name) == wanted:
            continue
        distance = distance_km(origin, center)
        if distance <= radius_km:
            nearby.append(
                {
                    "name": name,
                    "slug": slugify_suburb(name),
                    "stationCount": count,
                    "distanceKm": round(distance, 2),
                }
            )

    nearby.sort(key=lambda item: (item["distanceKm"], item["name"]))
    return nearby[: max(limit, 0)]
