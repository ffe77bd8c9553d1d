from fuel_directory.models.domain import Amenities, FuelPrices, FuelType, Listing
from fuel_directory.models.query import FilterRequest, SortOption
from fuel_directory.services.listings.predicates import (
    active_predicates,
    has_amenities,
    has_fuel_available,
    matches_all,
    matches_brand,
    matches_suburb,
    matches_text,
    under_price_ceiling,
    within_distance,
)


def _listing(sid: str, name: str, **overrides) -> Listing:
    values = dict(
        id=sid,
        name=name,
        brand="BP",
        address="1 Main Street",
        suburb="Carlton",
        postcode="3053",
        region="Inner North",
        fuel_prices=FuelPrices(unleaded=180.0),
    )
    values.update(overrides)
    return Listing(**values)


def test_text_match_is_case_insensitive_across_fields():
    listing = _listing("1", "BP Carlton", address="120 Lygon Street")
    assert matches_text(listing, FilterRequest(search="carlton"))
    assert matches_text(listing, FilterRequest(search="LYGON"))
    assert matches_text(listing, FilterRequest(search="bp"))
    assert not matches_text(listing, FilterRequest(search="richmond"))


def test_empty_search_matches_everything():
    listing = _listing("1", "Anything")
    assert matches_text(listing, FilterRequest(search=""))
    assert matches_text(listing, FilterRequest(search="   "))


def test_brand_and_suburb_are_exact_and_case_sensitive():
    listing = _listing("1", "Shell Richmond", brand="Shell", suburb="Richmond")
    assert matches_brand(listing, FilterRequest(brand="Shell"))
    assert not matches_brand(listing, FilterRequest(brand="shell"))
    assert matches_brand(listing, FilterRequest(brand=None))
    assert matches_suburb(listing, FilterRequest(suburb="Richmond"))
    assert not matches_suburb(listing, FilterRequest(suburb="Richmond North"))


def test_fuel_availability_requires_priced_slot():
    listing = _listing("1", "No diesel", fuel_prices=FuelPrices(unleaded=180.0))
    assert not has_fuel_available(listing, FilterRequest(fuel_type=FuelType.DIESEL))
    assert has_fuel_available(listing, FilterRequest(fuel_type=FuelType.UNLEADED))


def test_price_ceiling_rejects_missing_price():
    cheap = _listing("1", "Cheap", fuel_prices=FuelPrices(unleaded=175.0))
    pricey = _listing("2", "Pricey", fuel_prices=FuelPrices(unleaded=199.0))
    missing = _listing("3", "Missing", fuel_prices=FuelPrices(diesel=170.0))
    filters = FilterRequest(fuel_type=FuelType.UNLEADED, price_max=180.0)

    assert under_price_ceiling(cheap, filters)
    assert not under_price_ceiling(pricey, filters)
    assert not under_price_ceiling(missing, filters)


def test_price_ceiling_ignored_for_all_fuel_types():
    pricey = _listing("2", "Pricey", fuel_prices=FuelPrices(unleaded=250.0))
    filters = FilterRequest(fuel_type=None, price_max=100.0)
    assert under_price_ceiling(pricey, filters)
    assert under_price_ceiling not in active_predicates(filters)


def test_fuel_availability_only_applied_with_price_intent():
    browsing = FilterRequest(fuel_type=FuelType.DIESEL, sort_by=SortOption.NAME)
    sorting = FilterRequest(fuel_type=FuelType.DIESEL, sort_by=SortOption.PRICE_LOW)
    capped = FilterRequest(fuel_type=FuelType.DIESEL, price_max=200.0)

    assert has_fuel_available not in active_predicates(browsing)
    assert has_fuel_available in active_predicates(sorting)
    assert has_fuel_available in active_predicates(capped)


def test_amenities_must_all_be_present():
    listing = _listing("1", "Shop", amenities=Amenities(shop=True, atm=True))
    bare = _listing("2", "Bare")
    assert has_amenities(listing, FilterRequest(amenities=("shop", "atm")))
    assert not has_amenities(listing, FilterRequest(amenities=("shop", "car_wash")))
    assert not has_amenities(bare, FilterRequest(amenities=("shop",)))


def test_distance_radius_needs_reference_location():
    near = _listing("1", "Near", distance=2.0)
    unknown = _listing("2", "Unknown", distance=None)
    filters = FilterRequest(max_distance_km=5.0)

    assert within_distance(near, filters)
    assert not within_distance(unknown, filters)
    assert within_distance not in active_predicates(filters, has_reference=False)
    assert within_distance in active_predicates(filters, has_reference=True)


def test_no_filters_builds_empty_chain():
    chain = active_predicates(FilterRequest())
    assert chain == []
    assert matches_all(_listing("1", "Any"), FilterRequest(), chain)


def test_chain_order_does_not_change_outcome():
    listings = [
        _listing("1", "BP Carlton", fuel_prices=FuelPrices(unleaded=170.0)),
        _listing("2", "BP Carlton North", fuel_prices=FuelPrices(unleaded=190.0)),
        _listing("3", "Shell Carlton", brand="Shell", fuel_prices=FuelPrices(unleaded=160.0)),
    ]
    filters = FilterRequest(search="carlton", brand="BP", fuel_type=FuelType.UNLEADED, price_max=180.0)
    chain = active_predicates(filters)

    forward = [item.id for item in listings if matches_all(item, filters, chain)]
    backward = [item.id for item in listings if matches_all(item, filters, list(reversed(chain)))]
    assert forward == backward == ["1"]
