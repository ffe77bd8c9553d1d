"""Listing query engine: filter, annotate, sort and paginate a station snapshot."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ...models.domain import Coordinate, Listing
from ...models.query import FilterRequest, PageWindow, QueryResult
from ..geospatial import distance_km
from .predicates import active_predicates, matches_all
from .sorting import resolve_sort_key


def annotate_distances(listings: Iterable[Listing], ref_location: Coordinate) -> list[Listing]:
    """Return copies of ``listings`` carrying their distance from ``ref_location``.

    Listings without coordinates get ``distance=None``. Inputs are not mutated.
    """

    annotated: list[Listing] = []
    for listing in listings:
        coordinate = listing.coordinate
        distance = distance_km(ref_location, coordinate) if coordinate is not None else None
        annotated.append(replace(listing, distance=distance))
    return annotated


def run_query(
    listings: Sequence[Listing],
    filters: FilterRequest,
    page: PageWindow,
    ref_location: Optional[Coordinate] = None,
) -> QueryResult:
    """Produce the page of listings to render for ``filters``.

    Never raises for empty input, empty filters or pages past the end; those
    yield an empty window with the correct ``total``.
    """

    candidates: Iterable[Listing] = listings
    if ref_location is not None:
        candidates = annotate_distances(listings, ref_location)

    chain = active_predicates(filters, has_reference=ref_location is not None)
    survivors = [listing for listing in candidates if matches_all(listing, filters, chain)]
    survivors.sort(key=resolve_sort_key(filters.sort_by, filters.fuel_type, ref_location))

    total = len(survivors)
    valid_coordinate_count = sum(1 for listing in survivors if listing.has_coordinates)
    window = survivors[page.offset : page.offset + page.page_size]

    logging.debug(
        f"Listing query sort={filters.sort_by.value} fuel={filters.fuel_type.value if filters.fuel_type else 'all'} "
        f"predicates={len(chain)} input={len(listings)} total={total} page={page.page} returned={len(window)}"
    )
    return QueryResult(
        items=tuple(window),
        total=total,
        valid_coordinate_count=valid_coordinate_count,
        page=page.page,
        page_size=page.page_size,
    )
