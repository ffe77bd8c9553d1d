"""Station listing endpoints."""

from __future__ import annotations

from dataclasses import asdict, replace

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...models.domain import Listing
from ...models.query import QueryResult
from ...schemas.stations import StationListResponse, StationMetadataResponse, StationModel
from ...services.listings import run_query
from ...services.stations import compute_station_metadata, get_station
from ..dependencies import ListingQuery, current_stations, listing_query, optional_choice

router = APIRouter(prefix="/stations", tags=["stations"])


def station_model(listing: Listing) -> StationModel:
    payload = asdict(listing)
    distance = payload.pop("distance")
    payload["distance_km"] = round(distance, 3) if distance is not None else None
    return StationModel(**payload)


def listing_response(result: QueryResult) -> StationListResponse:
    return StationListResponse(
        items=[station_model(listing) for listing in result.items],
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
        has_next_page=result.has_next_page,
        valid_coordinate_count=result.valid_coordinate_count,
    )


@router.get("", response_model=StationListResponse, status_code=status.HTTP_200_OK)
def list_stations(
    query: ListingQuery = Depends(listing_query),
    suburb: str | None = Query(default="all", description="Exact suburb or 'all'"),
) -> StationListResponse:
    filters = replace(query.filters, suburb=optional_choice(suburb))
    result = run_query(current_stations(), filters, query.page, query.ref_location)
    return listing_response(result)


@router.get("/metadata", response_model=StationMetadataResponse, status_code=status.HTTP_200_OK)
def get_station_metadata() -> StationMetadataResponse:
    return StationMetadataResponse(**compute_station_metadata(current_stations()))


@router.get("/{station_id}", response_model=StationModel, status_code=status.HTTP_200_OK)
def get_station_detail(station_id: str) -> StationModel:
    station = get_station(current_stations(), station_id)
    if station is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Station '{station_id}' not found.")
    return station_model(station)
