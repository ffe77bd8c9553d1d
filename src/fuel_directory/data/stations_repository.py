"""Data access helpers for loading the station snapshot."""

from __future__ import annotations

import functools
import json
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Amenities, FuelPrices, FuelType, Listing

# Original site exports use ``hasCarWash``-style flags.
_AMENITY_ALIASES = {
    "hasCarWash": "car_wash",
    "hasShop": "shop",
    "hasRestroom": "restroom",
    "hasATM": "atm",
    "hasAirPump": "air_pump",
    "hasElectricCharging": "ev_charging",
    "hasCafe": "cafe",
    "hasParking": "parking",
    "isOpen24Hours": "open_24_hours",
}


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text == "":
        return None
    try:
        return float(text.replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_str(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _parse_coordinates(station_id: str, row: dict) -> tuple[Optional[float], Optional[float]]:
    try:
        lat = _coerce_float(row.get("latitude", row.get("Latitude")))
        lon = _coerce_float(row.get("longitude", row.get("Longitude")))
    except ValueError as exc:
        raise ValueError(f"Station '{station_id}' has malformed coordinates: {exc}") from exc

    # Exports use 0 as "unknown"; a lone coordinate is equally unusable.
    if not lat or not lon:
        return None, None
    if not (math.isfinite(lat) and math.isfinite(lon)) or not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise ValueError(f"Station '{station_id}' has out-of-range coordinates ({lat}, {lon})")
    return lat, lon


def _parse_prices(station_id: str, raw: Any) -> FuelPrices:
    if not isinstance(raw, dict):
        return FuelPrices()
    values: dict[str, Optional[float]] = {}
    for fuel_type in FuelType:
        try:
            price = _coerce_float(raw.get(fuel_type.value))
        except ValueError:
            logging.warning(f"Ignoring unparsable {fuel_type.value} price for station '{station_id}'")
            price = None
        values[fuel_type.value] = price if price is not None and price > 0 else None
    return FuelPrices(**values)


def _parse_amenities(raw: Any) -> Optional[Amenities]:
    if not isinstance(raw, dict):
        return None
    known = set(Amenities.names())
    flags: dict[str, bool] = {}
    for key, value in raw.items():
        name = _AMENITY_ALIASES.get(key, key)
        if name in known:
            flags[name] = bool(value)
    return Amenities(**flags)


def _parse_timestamp(station_id: str, value: Any) -> Optional[datetime]:
    text = _coerce_str(value)
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logging.warning(f"Ignoring unparsable lastUpdated '{value}' for station '{station_id}'")
        return None


def _parse_rating(station_id: str, value: Any) -> Optional[float]:
    try:
        rating = _coerce_float(value)
    except ValueError:
        logging.warning(f"Ignoring unparsable rating '{value}' for station '{station_id}'")
        return None
    if rating is not None and not math.isfinite(rating):
        logging.warning(f"Ignoring non-finite rating '{value}' for station '{station_id}'")
        return None
    return rating


def _parse_review_count(station_id: str, value: Any) -> Optional[int]:
    try:
        count = _coerce_float(value)
    except ValueError:
        logging.warning(f"Ignoring unparsable reviewCount '{value}' for station '{station_id}'")
        return None
    if count is None:
        return None
    if not math.isfinite(count) or count < 0:
        logging.warning(f"Ignoring invalid reviewCount '{value}' for station '{station_id}'")
        return None
    return int(count)


def parse_station(row: Any) -> Listing:
    """Build a sanitized :class:`Listing` from one raw station record."""

    if not isinstance(row, dict):
        raise ValueError(f"Station record must be an object, got {type(row).__name__}")

    station_id = _coerce_str(row.get("id") or row.get("stationCode"))
    if not station_id:
        raise ValueError("Station record is missing an id")
    lat, lon = _parse_coordinates(station_id, row)
    rating = _parse_rating(station_id, row.get("rating"))
    review_count = _parse_review_count(station_id, row.get("reviewCount"))

    return Listing(
        id=station_id,
        name=_coerce_str(row.get("name") or row.get("stationName") or row.get("Station Name")),
        brand=_coerce_str(row.get("brand")) or "Independent",
        address=_coerce_str(row.get("address") or row.get("Address")),
        suburb=_coerce_str(row.get("suburb") or row.get("City")),
        postcode=_coerce_str(row.get("postcode") or row.get("Postal Code")),
        region=_coerce_str(row.get("region") or row.get("Region")),
        latitude=lat,
        longitude=lon,
        fuel_prices=_parse_prices(station_id, row.get("fuelPrices")),
        amenities=_parse_amenities(row.get("amenities")),
        last_updated=_parse_timestamp(station_id, row.get("lastUpdated")),
        verified=bool(row.get("verified", False)),
        rating=rating,
        review_count=review_count,
    )


@functools.lru_cache(maxsize=1)
def load_stations(source: Optional[Path] = None) -> tuple[Listing, ...]:
    """Load stations from the configured JSON snapshot."""

    json_path = source or settings.stations_file
    if not json_path.exists():
        raise FileNotFoundError(f"Station file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8-sig") as handle:
        payload = json.load(handle)

    records = payload.get("stations") if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ValueError(f"Station file '{json_path}' must contain a list of stations.")

    stations = tuple(parse_station(row) for row in records)
    located = sum(1 for station in stations if station.has_coordinates)
    logging.info(f"Loaded {len(stations)} stations ({located} with coordinates) from {json_path}")
    return stations
