"""Station-facing API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class FuelPricesModel(BaseModel):
    unleaded: float | None = None
    diesel: float | None = None
    premium95: float | None = None
    premium98: float | None = None
    lpg: float | None = None
    e10: float | None = None
    e85: float | None = None


class AmenitiesModel(BaseModel):
    car_wash: bool = False
    shop: bool = False
    restroom: bool = False
    atm: bool = False
    air_pump: bool = False
    ev_charging: bool = False
    cafe: bool = False
    parking: bool = False
    open_24_hours: bool = False


class StationModel(BaseModel):
    id: str
    name: str
    brand: str
    address: str
    suburb: str
    postcode: str
    region: str
    latitude: float | None = None
    longitude: float | None = None
    fuel_prices: FuelPricesModel
    amenities: AmenitiesModel | None = None
    last_updated: datetime | None = None
    verified: bool = False
    rating: float | None = None
    review_count: int | None = None
    distance_km: float | None = None


class StationListResponse(BaseModel):
    items: List[StationModel]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool
    valid_coordinate_count: int


class PriceRangeModel(BaseModel):
    min: float
    max: float
    average: float


class StationMetadataResponse(BaseModel):
    totalStations: int
    suburbs: list[str]
    brands: list[str]
    regions: list[str]
    bySuburb: dict[str, int]
    byBrand: dict[str, int]
    priceRange: dict[str, PriceRangeModel]


class SuburbSummaryModel(BaseModel):
    name: str
    slug: str
    stationCount: int


class SuburbPriceStatsResponse(BaseModel):
    suburb: str
    fuelType: str
    stations: int
    pricedStations: int
    average: float | None = None
    min: float | None = None
    max: float | None = None


class NearbySuburbModel(SuburbSummaryModel):
    distanceKm: float
