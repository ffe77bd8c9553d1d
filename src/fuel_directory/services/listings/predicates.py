"""Inclusion tests applied to each listing before sorting.

Every predicate is pure and independent of the others, so the chain built by
:func:`active_predicates` can run in any order without changing the result
set. The order used favours the cheapest checks first.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ...models.domain import Listing
from ...models.query import FilterRequest

Predicate = Callable[[Listing, FilterRequest], bool]


def matches_text(listing: Listing, filters: FilterRequest) -> bool:
    query = filters.search.strip().lower()
    if not query:
        return True
    return any(
        query in (value or "").lower()
        for value in (listing.name, listing.address, listing.suburb, listing.brand)
    )


def matches_brand(listing: Listing, filters: FilterRequest) -> bool:
    return filters.brand is None or listing.brand == filters.brand


def matches_suburb(listing: Listing, filters: FilterRequest) -> bool:
    return filters.suburb is None or listing.suburb == filters.suburb


def matches_region(listing: Listing, filters: FilterRequest) -> bool:
    return filters.region is None or listing.region == filters.region


def has_fuel_available(listing: Listing, filters: FilterRequest) -> bool:
    if filters.fuel_type is None:
        return True
    return listing.fuel_prices.get(filters.fuel_type) is not None


def under_price_ceiling(listing: Listing, filters: FilterRequest) -> bool:
    # A ceiling without a specific fuel slot has nothing to compare against.
    if filters.price_max is None or filters.fuel_type is None:
        return True
    price = listing.fuel_prices.get(filters.fuel_type)
    return price is not None and price <= filters.price_max


def has_amenities(listing: Listing, filters: FilterRequest) -> bool:
    if not filters.amenities:
        return True
    if listing.amenities is None:
        return False
    return all(listing.amenities.has(name) for name in filters.amenities)


def within_distance(listing: Listing, filters: FilterRequest) -> bool:
    """Radius check against the engine-computed ``distance``."""

    if filters.max_distance_km is None:
        return True
    return listing.distance is not None and listing.distance <= filters.max_distance_km


def requires_fuel_availability(filters: FilterRequest) -> bool:
    """Only price intent hides stations lacking the selected fuel.

    Browsing with a fuel type selected still surfaces every station; the
    availability check kicks in when sorting by price or capping the price.
    """

    if filters.fuel_type is None:
        return False
    return filters.sort_by.is_price_sort or filters.price_max is not None


def active_predicates(filters: FilterRequest, *, has_reference: bool = False) -> list[Predicate]:
    """Build the predicate chain for a request, leaving out bypassed checks."""

    chain: list[Predicate] = []
    if filters.search.strip():
        chain.append(matches_text)
    if filters.brand is not None:
        chain.append(matches_brand)
    if filters.suburb is not None:
        chain.append(matches_suburb)
    if filters.region is not None:
        chain.append(matches_region)
    if requires_fuel_availability(filters):
        chain.append(has_fuel_available)
    if filters.price_max is not None and filters.fuel_type is not None:
        chain.append(under_price_ceiling)
    if filters.amenities:
        chain.append(has_amenities)
    # Without a reference location there is no distance to test against.
    if filters.max_distance_km is not None and has_reference:
        chain.append(within_distance)
    return chain


def matches_all(listing: Listing, filters: FilterRequest, chain: Sequence[Predicate]) -> bool:
    return all(predicate(listing, filters) for predicate in chain)
