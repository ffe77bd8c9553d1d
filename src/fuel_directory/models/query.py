"""Value objects passed into and returned by the listing query engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .domain import FuelType, Listing


class SortOption(str, Enum):
    NAME = "name"
    SUBURB = "suburb"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NEAREST = "nearest"
    DISTANCE = "distance"
    TOP_RATED = "top-rated"
    RECENTLY_UPDATED = "recently-updated"

    @property
    def is_price_sort(self) -> bool:
        return self in (SortOption.PRICE_LOW, SortOption.PRICE_HIGH)

    @property
    def is_distance_sort(self) -> bool:
        return self in (SortOption.NEAREST, SortOption.DISTANCE)


@dataclass(frozen=True, slots=True)
class FilterRequest:
    """User-selected filters for a listing query.

    ``None`` on ``fuel_type``, ``brand``, ``suburb`` and ``region`` means "all":
    the dimension is not restricted. ``price_max`` only applies together with a
    specific ``fuel_type``.
    """

    search: str = ""
    fuel_type: Optional[FuelType] = None
    brand: Optional[str] = None
    suburb: Optional[str] = None
    region: Optional[str] = None
    sort_by: SortOption = SortOption.NAME
    price_max: Optional[float] = None
    max_distance_km: Optional[float] = None
    amenities: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PageWindow:
    page: int = 1
    page_size: int = 24

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True, slots=True)
class QueryResult:
    items: tuple[Listing, ...]
    total: int
    valid_coordinate_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages
