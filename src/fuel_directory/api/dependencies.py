"""Shared request parsing for station listing endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from fastapi import HTTPException, Query, status

from ..config import settings
from ..data.stations_repository import load_stations
from ..models.domain import Amenities, Coordinate, FuelType, Listing
from ..models.query import FilterRequest, PageWindow, SortOption

ALL = "all"


@dataclass(frozen=True)
class ListingQuery:
    filters: FilterRequest
    page: PageWindow
    ref_location: Optional[Coordinate]


def current_stations() -> tuple[Listing, ...]:
    """Return the cached snapshot, translating load failures into a 503."""

    try:
        return load_stations()
    except (FileNotFoundError, ValueError) as exc:
        logging.error(f"Failed to load station data: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Station data unavailable: {exc}",
        ) from exc


def optional_choice(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned or cleaned.lower() == ALL:
        return None
    return cleaned


def parse_fuel_type(value: str | None) -> FuelType | None:
    choice = optional_choice(value)
    if choice is None:
        return None
    try:
        return FuelType(choice.lower())
    except ValueError as exc:
        choices = ", ".join([ALL, *(fuel.value for fuel in FuelType)])
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown fuel type '{value}'. Expected one of: {choices}.",
        ) from exc


def parse_sort(value: str | None) -> SortOption:
    if value is None or not value.strip():
        return settings.default_sort
    raw = value.strip().lower()
    try:
        return SortOption(raw)
    except ValueError as exc:
        choices = ", ".join(option.value for option in SortOption)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown sort option '{value}'. Expected one of: {choices}.",
        ) from exc


def parse_amenities(values: List[str] | None) -> tuple[str, ...]:
    if not values:
        return ()
    known = set(Amenities.names())
    unknown = sorted(set(values) - known)
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown amenities: {', '.join(unknown)}.",
        )
    return tuple(dict.fromkeys(values))


def resolve_reference(lat: float | None, lon: float | None, use_default_location: bool) -> Coordinate | None:
    if (lat is None) != (lon is None):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Both lat and lon are required when a location is supplied.",
        )
    if lat is not None and lon is not None:
        return Coordinate(lat, lon)
    if use_default_location:
        return Coordinate(settings.default_latitude, settings.default_longitude)
    return None


def listing_query(
    search: str = Query(default="", description="Free-text match on name, address, suburb and brand"),
    fuel_type: str | None = Query(default=ALL, description="Fuel type key or 'all'"),
    brand: str | None = Query(default=ALL, description="Exact brand or 'all'"),
    region: str | None = Query(default=ALL, description="Exact region or 'all'"),
    sort_by: str | None = Query(default=None, description="Sort option"),
    price_max: float | None = Query(default=None, gt=0, description="Price ceiling for the selected fuel type"),
    max_distance_km: float | None = Query(default=None, gt=0, description="Radius around the reference location"),
    amenities: List[str] | None = Query(default=None, description="Amenities every station must offer"),
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
    use_default_location: bool = Query(default=False, description="Fall back to the city-centre location"),
    page: int = Query(default=1, ge=1, description="1-based page index for pagination"),
    page_size: int | None = Query(default=None, ge=1, description="Number of stations per page"),
) -> ListingQuery:
    effective_page_size = min(page_size or settings.default_page_size, settings.max_page_size)
    filters = FilterRequest(
        search=search,
        fuel_type=parse_fuel_type(fuel_type),
        brand=optional_choice(brand),
        region=optional_choice(region),
        sort_by=parse_sort(sort_by),
        price_max=price_max,
        max_distance_km=max_distance_km,
        amenities=parse_amenities(amenities),
    )
    return ListingQuery(
        filters=filters,
        page=PageWindow(page=page, page_size=effective_page_size),
        ref_location=resolve_reference(lat, lon, use_default_location),
    )
