"""Sort-key selection for listing queries.

Keys are tuples so that Python's stable sort yields a strict total order:
the primary key first, then ``(name, id)`` as the tie-break. Missing values
(no price, no distance, no timestamp) are encoded as a leading ``True`` flag
so they sink to the end of the list in either direction instead of being
mistaken for a real zero.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from ...models.domain import Coordinate, FuelType, Listing
from ...models.query import SortOption

SortKey = Callable[[Listing], Any]
Comparator = Callable[[Listing, Listing], int]


def _tie_break(listing: Listing) -> tuple[str, str]:
    return listing.name, str(listing.id)


def price_for(listing: Listing, fuel_type: Optional[FuelType]) -> Optional[float]:
    """Price used for ranking: the selected slot, or the cheapest slot for "all"."""

    if fuel_type is None:
        return listing.fuel_prices.cheapest()
    return listing.fuel_prices.get(fuel_type)


def _by_name(listing: Listing) -> tuple:
    return _tie_break(listing)


def _by_suburb(listing: Listing) -> tuple:
    return (listing.suburb, *_tie_break(listing))


def _by_price_low(fuel_type: Optional[FuelType]) -> SortKey:
    def key(listing: Listing) -> tuple:
        price = price_for(listing, fuel_type)
        return (price is None, price if price is not None else 0.0, *_tie_break(listing))

    return key


def _by_price_high(fuel_type: Optional[FuelType]) -> SortKey:
    # Same price signal as price-low (cheapest for "all"), only the direction flips.
    def key(listing: Listing) -> tuple:
        price = price_for(listing, fuel_type)
        return (price is None, -price if price is not None else 0.0, *_tie_break(listing))

    return key


def _by_distance(listing: Listing) -> tuple:
    distance = listing.distance
    return (distance is None, distance if distance is not None else 0.0, *_tie_break(listing))


def _by_rating(listing: Listing) -> tuple:
    return (-(listing.rating or 0.0), *_tie_break(listing))


def _by_last_updated(listing: Listing) -> tuple:
    updated = listing.last_updated
    stamp = updated.timestamp() if updated is not None else 0.0
    return (updated is None, -stamp, *_tie_break(listing))


def _keep_input_order(listing: Listing) -> int:
    return 0


def resolve_sort_key(
    sort_by: SortOption,
    fuel_type: Optional[FuelType] = None,
    ref_location: Optional[Coordinate] = None,
) -> SortKey:
    """Return the key function that orders listings for ``sort_by``.

    Distance sorts without a reference location return a constant key, which
    leaves the input order untouched under a stable sort.
    """

    match sort_by:
        case SortOption.SUBURB:
            return _by_suburb
        case SortOption.PRICE_LOW:
            return _by_price_low(fuel_type)
        case SortOption.PRICE_HIGH:
            return _by_price_high(fuel_type)
        case SortOption.NEAREST | SortOption.DISTANCE:
            return _by_distance if ref_location is not None else _keep_input_order
        case SortOption.TOP_RATED:
            return _by_rating
        case SortOption.RECENTLY_UPDATED:
            return _by_last_updated
        case _:
            return _by_name


def resolve_comparator(
    sort_by: SortOption,
    fuel_type: Optional[FuelType] = None,
    ref_location: Optional[Coordinate] = None,
) -> Comparator:
    """Two-argument comparator equivalent to :func:`resolve_sort_key`."""

    key = resolve_sort_key(sort_by, fuel_type, ref_location)

    def compare(a: Listing, b: Listing) -> int:
        key_a, key_b = key(a), key(b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0

    return compare


def sort_listings(
    listings: list[Listing],
    sort_by: SortOption,
    fuel_type: Optional[FuelType] = None,
    ref_location: Optional[Coordinate] = None,
) -> list[Listing]:
    return sorted(listings, key=resolve_sort_key(sort_by, fuel_type, ref_location))
