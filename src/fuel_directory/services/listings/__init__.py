"""Listing query engine helpers."""

from .engine import annotate_distances, run_query
from .predicates import active_predicates, matches_all
from .sorting import price_for, resolve_comparator, resolve_sort_key, sort_listings

__all__ = [
    "run_query",
    "annotate_distances",
    "active_predicates",
    "matches_all",
    "resolve_sort_key",
    "resolve_comparator",
    "sort_listings",
    "price_for",
]
