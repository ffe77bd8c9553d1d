"""Domain models for petrol stations and their fuel prices."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Optional


class FuelType(str, Enum):
    """Fuel slots a station can advertise a price for."""

    UNLEADED = "unleaded"
    DIESEL = "diesel"
    PREMIUM95 = "premium95"
    PREMIUM98 = "premium98"
    LPG = "lpg"
    E10 = "e10"
    E85 = "e85"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class FuelPrices:
    """Prices in cents per litre; ``None`` means not sold or not reported."""

    unleaded: Optional[float] = None
    diesel: Optional[float] = None
    premium95: Optional[float] = None
    premium98: Optional[float] = None
    lpg: Optional[float] = None
    e10: Optional[float] = None
    e85: Optional[float] = None

    def get(self, fuel_type: FuelType) -> Optional[float]:
        return getattr(self, fuel_type.value)

    def available(self) -> dict[FuelType, float]:
        """Return only the fuel types that carry a price."""

        return {
            fuel_type: price
            for fuel_type in FuelType
            if (price := self.get(fuel_type)) is not None
        }

    def cheapest(self) -> Optional[float]:
        prices = self.available().values()
        return min(prices) if prices else None


@dataclass(frozen=True, slots=True)
class Amenities:
    """On-site facilities advertised by a station."""

    car_wash: bool = False
    shop: bool = False
    restroom: bool = False
    atm: bool = False
    air_pump: bool = False
    ev_charging: bool = False
    cafe: bool = False
    parking: bool = False
    open_24_hours: bool = False

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))

    def has(self, name: str) -> bool:
        return bool(getattr(self, name, False))


@dataclass(frozen=True, slots=True)
class Listing:
    """A petrol station as shown in directory, suburb and map views.

    ``latitude`` and ``longitude`` are either both set or both ``None``.
    ``distance`` (km) is only populated on copies produced by the query engine.
    """

    id: str
    name: str
    brand: str
    address: str
    suburb: str
    postcode: str
    region: str
    fuel_prices: FuelPrices
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    amenities: Optional[Amenities] = None
    last_updated: Optional[datetime] = None
    verified: bool = False
    rating: Optional[float] = None
    review_count: Optional[int] = None
    distance: Optional[float] = None

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
