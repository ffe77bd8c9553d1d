"""Suburb-scoped listing and price endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...config import settings
from ...models.domain import Listing
from ...schemas.stations import (
    NearbySuburbModel,
    StationListResponse,
    SuburbPriceStatsResponse,
    SuburbSummaryModel,
)
from ...services.listings import run_query
from ...services.stations import (
    compute_suburb_price_stats,
    find_nearby_suburbs,
    list_stations_for_suburb,
    list_suburbs,
    resolve_suburb_name,
)
from ..dependencies import ListingQuery, current_stations, listing_query, parse_fuel_type
from .stations import listing_response

router = APIRouter(prefix="/suburbs", tags=["suburbs"])


def _require_suburb(stations: tuple[Listing, ...], suburb: str) -> str:
    name = resolve_suburb_name(stations, suburb)
    if name is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Suburb '{suburb}' not found.")
    return name


@router.get("", response_model=List[SuburbSummaryModel], status_code=status.HTTP_200_OK)
def get_suburbs(limit: int | None = Query(default=None, ge=1, le=1000)) -> List[SuburbSummaryModel]:
    return [SuburbSummaryModel(**entry) for entry in list_suburbs(current_stations(), limit=limit)]


@router.get("/{suburb}/stations", response_model=StationListResponse, status_code=status.HTTP_200_OK)
def get_suburb_stations(suburb: str, query: ListingQuery = Depends(listing_query)) -> StationListResponse:
    stations = current_stations()
    name = _require_suburb(stations, suburb)
    result = run_query(list_stations_for_suburb(stations, name), query.filters, query.page, query.ref_location)
    return listing_response(result)


@router.get("/{suburb}/stats", response_model=SuburbPriceStatsResponse, status_code=status.HTTP_200_OK)
def get_suburb_price_stats(
    suburb: str,
    fuel_type: str = Query(default="unleaded", description="Fuel type to summarise"),
) -> SuburbPriceStatsResponse:
    stations = current_stations()
    _require_suburb(stations, suburb)
    selected = parse_fuel_type(fuel_type)
    if selected is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Price statistics need a specific fuel type.",
        )
    return SuburbPriceStatsResponse(**compute_suburb_price_stats(stations, suburb, selected))


@router.get("/{suburb}/nearby", response_model=List[NearbySuburbModel], status_code=status.HTTP_200_OK)
def get_nearby_suburbs(
    suburb: str,
    radius_km: float | None = Query(default=None, gt=0, le=200),
    limit: int | None = Query(default=None, ge=1, le=50),
) -> List[NearbySuburbModel]:
    stations = current_stations()
    _require_suburb(stations, suburb)
    nearby = find_nearby_suburbs(
        stations,
        suburb,
        radius_km=radius_km or settings.nearby_suburb_radius_km,
        limit=limit or settings.nearby_suburb_limit,
    )
    return [NearbySuburbModel(**entry) for entry in nearby]
