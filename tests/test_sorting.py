from datetime import datetime, timezone

from fuel_directory.models.domain import Coordinate, FuelPrices, FuelType, Listing
from fuel_directory.models.query import SortOption
from fuel_directory.services.listings.sorting import price_for, resolve_comparator, sort_listings


def _listing(sid: str, name: str, **overrides) -> Listing:
    values = dict(
        id=sid,
        name=name,
        brand="BP",
        address="1 Main Street",
        suburb="Carlton",
        postcode="3053",
        region="Inner North",
        fuel_prices=FuelPrices(),
    )
    values.update(overrides)
    return Listing(**values)


def _ids(listings):
    return [listing.id for listing in listings]


def test_name_sort_is_case_sensitive_lexical():
    listings = [_listing("1", "bp"), _listing("2", "Shell"), _listing("3", "BP")]
    assert _ids(sort_listings(listings, SortOption.NAME)) == ["3", "2", "1"]


def test_duplicate_names_break_ties_by_id():
    listings = [_listing("b", "Same"), _listing("a", "Same")]
    assert _ids(sort_listings(listings, SortOption.NAME)) == ["a", "b"]


def test_suburb_sort_uses_name_as_tie_break():
    listings = [
        _listing("1", "Zed", suburb="Carlton"),
        _listing("2", "Alpha", suburb="Richmond"),
        _listing("3", "Alpha", suburb="Carlton"),
    ]
    assert _ids(sort_listings(listings, SortOption.SUBURB)) == ["3", "1", "2"]


def test_price_low_for_specific_fuel_sinks_missing():
    listings = [
        _listing("1", "A", fuel_prices=FuelPrices(diesel=None, unleaded=150.0)),
        _listing("2", "B", fuel_prices=FuelPrices(diesel=199.0)),
        _listing("3", "C", fuel_prices=FuelPrices(diesel=179.0)),
    ]
    ordered = sort_listings(listings, SortOption.PRICE_LOW, FuelType.DIESEL)
    assert _ids(ordered) == ["3", "2", "1"]


def test_price_low_all_fuel_types_uses_cheapest_slot():
    a = _listing("A", "Station A", fuel_prices=FuelPrices(unleaded=180.0, diesel=None))
    b = _listing("B", "Station B", fuel_prices=FuelPrices(unleaded=None, diesel=170.0))
    assert _ids(sort_listings([a, b], SortOption.PRICE_LOW, None)) == ["B", "A"]


def test_price_high_descends_and_sinks_missing():
    listings = [
        _listing("1", "None", fuel_prices=FuelPrices()),
        _listing("2", "Low", fuel_prices=FuelPrices(unleaded=170.0)),
        _listing("3", "High", fuel_prices=FuelPrices(unleaded=210.0)),
    ]
    assert _ids(sort_listings(listings, SortOption.PRICE_HIGH, FuelType.UNLEADED)) == ["3", "2", "1"]
    assert _ids(sort_listings(listings, SortOption.PRICE_HIGH, None)) == ["3", "2", "1"]


def test_price_high_all_fuel_types_ranks_by_cheapest_not_dearest():
    # A's dearest fuel beats B's, but B's cheapest fuel is higher.
    a = _listing("A", "A", fuel_prices=FuelPrices(unleaded=170.0, premium98=230.0))
    b = _listing("B", "B", fuel_prices=FuelPrices(unleaded=190.0, premium98=200.0))
    assert _ids(sort_listings([a, b], SortOption.PRICE_HIGH, None)) == ["B", "A"]


def test_zero_price_is_not_treated_as_missing():
    free = _listing("1", "Free", fuel_prices=FuelPrices(unleaded=0.0))
    missing = _listing("2", "Missing", fuel_prices=FuelPrices())
    assert _ids(sort_listings([missing, free], SortOption.PRICE_LOW, FuelType.UNLEADED)) == ["1", "2"]
    assert price_for(free, FuelType.UNLEADED) == 0.0
    assert price_for(missing, None) is None


def test_nearest_without_reference_keeps_input_order():
    listings = [_listing("3", "C", distance=1.0), _listing("1", "A"), _listing("2", "B", distance=0.5)]
    assert _ids(sort_listings(listings, SortOption.NEAREST, None, None)) == ["3", "1", "2"]


def test_nearest_with_reference_sinks_unlocated():
    ref = Coordinate(-37.81, 144.96)
    listings = [
        _listing("1", "Unlocated", distance=None),
        _listing("2", "Far", distance=8.0),
        _listing("3", "Near", distance=1.5),
    ]
    assert _ids(sort_listings(listings, SortOption.DISTANCE, None, ref)) == ["3", "2", "1"]


def test_top_rated_treats_missing_rating_as_zero():
    listings = [
        _listing("1", "Unrated"),
        _listing("2", "Good", rating=4.5),
        _listing("3", "Poor", rating=1.0),
    ]
    assert _ids(sort_listings(listings, SortOption.TOP_RATED)) == ["2", "3", "1"]


def test_recently_updated_descends():
    listings = [
        _listing("1", "Old", last_updated=datetime(2025, 1, 1, tzinfo=timezone.utc)),
        _listing("2", "Never"),
        _listing("3", "New", last_updated=datetime(2025, 6, 1, tzinfo=timezone.utc)),
    ]
    assert _ids(sort_listings(listings, SortOption.RECENTLY_UPDATED)) == ["3", "1", "2"]


def test_comparator_agrees_with_sort_key():
    compare = resolve_comparator(SortOption.PRICE_LOW, FuelType.UNLEADED)
    cheap = _listing("1", "Cheap", fuel_prices=FuelPrices(unleaded=170.0))
    dear = _listing("2", "Dear", fuel_prices=FuelPrices(unleaded=190.0))

    assert compare(cheap, dear) == -1
    assert compare(dear, cheap) == 1
    assert compare(cheap, cheap) == 0


def test_comparator_is_noop_for_nearest_without_reference():
    compare = resolve_comparator(SortOption.NEAREST)
    assert compare(_listing("1", "A", distance=5.0), _listing("2", "B", distance=1.0)) == 0


def test_top_rated_orders_cleanly_with_unparsable_ratings():
    from fuel_directory.data.stations_repository import parse_station

    rows = [
        {"id": "1", "name": "Three", "rating": 3.0},
        {"id": "2", "name": "Broken", "rating": "NaN"},
        {"id": "3", "name": "Five", "rating": 5.0},
        {"id": "4", "name": "Four", "rating": "4.0 stars"},
        {"id": "5", "name": "FourAgain", "rating": 4.0},
    ]
    listings = [parse_station(row) for row in rows]

    assert _ids(sort_listings(listings, SortOption.TOP_RATED)) == ["3", "5", "1", "2", "4"]
