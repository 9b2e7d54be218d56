"""
Market analytics over in-memory store and product collections.

Everything in this module is a pure reduction: no I/O, no shared state and the
inputs are never mutated. The service layer loads stores and products, then
hands them over here; the results are rebuilt on every request.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from app.schemas.analytics.market_density import (
    CategoryGap,
    CityCategory,
    CityReport,
    CityTypeCategory,
    CityTypeReport,
    LocationPattern,
    MarketDensity,
    Opportunity,
)
from app.schemas.analytics.store_analytics import CategoryStat, PriceBucket, ProductStats
from app.schemas.base import EntityId, canonical_id
from app.schemas.product import Product
from app.schemas.store import Store

ProductsByStore = Dict[EntityId, List[Product]]

# (inclusive lower bound, exclusive upper bound, label)
PRICE_BUCKETS = [
    (0, 25, "$0-$25"),
    (25, 50, "$25-$50"),
    (50, 100, "$50-$100"),
    (100, 500, "$100-$500"),
    (500, math.inf, "$500+"),
]

SATURATED_THRESHOLD = 60
COMPETITIVE_THRESHOLD = 30

UNKNOWN_CITY = "Unknown"
UNKNOWN_CITY_TYPE = "unknown"

# Larger markets first; any city type not listed sorts last
CITY_TYPE_PRIORITY = {"big": 0, "small": 1, UNKNOWN_CITY_TYPE: 2}
FALLBACK_CITY_TYPE_PRIORITY = 3


@dataclass
class _LocalityTally:
    store_count: int = 0
    # Insertion-ordered: category -> number of stores carrying it
    category_stores: Dict[str, int] = field(default_factory=dict)
    cities: Dict[str, None] = field(default_factory=dict)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _saturation(store_count: int, total_stores: int) -> float:
    return store_count / total_stores * 100


def _competition_status(saturation: float) -> str:
    if saturation >= SATURATED_THRESHOLD:
        return "SATURATED"
    if saturation >= COMPETITIVE_THRESHOLD:
        return "COMPETITIVE"
    return "EMERGING"


def _store_products(store: Store, products_by_store: ProductsByStore) -> List[Product]:
    return products_by_store.get(canonical_id(store.id), [])


def _store_category_labels(store: Store, products_by_store: ProductsByStore) -> Iterable[str]:
    """Distinct category labels of one store, each counted once however many products share it."""
    return dict.fromkeys(p.category_label for p in _store_products(store, products_by_store))


def _tally(stores: Sequence[Store], products_by_store: ProductsByStore, key) -> Dict[str, _LocalityTally]:
    tallies: Dict[str, _LocalityTally] = {}
    for store in stores:
        tally = tallies.setdefault(key(store), _LocalityTally())
        tally.store_count += 1
        if store.city:
            tally.cities[store.city] = None
        for category in _store_category_labels(store, products_by_store):
            tally.category_stores[category] = tally.category_stores.get(category, 0) + 1
    return tallies


def group_products_by_store(products: Iterable[Product]) -> ProductsByStore:
    """
    Partition products by owning store.

    Keys are canonical store ids; stores without products get no entry.
    Products keep their input order inside each bucket.
    """
    products_by_store: ProductsByStore = {}
    for product in products:
        products_by_store.setdefault(canonical_id(product.store), []).append(product)
    return products_by_store


def get_product_stats(products: Sequence[Product]) -> ProductStats:
    """
    Aggregate inventory metrics, category breakdown and price histogram
    for a set of products. An empty set yields zeros and five empty buckets.
    """
    total_products = len(products)
    total_price = sum(p.price for p in products)

    return ProductStats(
        total_products=total_products,
        total_value=sum(p.price * p.stock for p in products),
        average_price=total_price / total_products if total_products else 0,
        total_stock=sum(p.stock for p in products),
        category_stats=_category_stats(products),
        price_ranges=_price_ranges(products),
    )


def _category_stats(products: Sequence[Product]) -> List[CategoryStat]:
    stats: Dict[str, CategoryStat] = {}
    for product in products:
        label = product.category_label
        stat = stats.get(label)
        if stat is None:
            stat = stats[label] = CategoryStat(category=label, product_count=0, total_value=0)
        stat.product_count += 1
        stat.total_value += product.price * product.stock
    return list(stats.values())


def _price_ranges(products: Sequence[Product]) -> List[PriceBucket]:
    return [
        PriceBucket(range=label, count=sum(1 for p in products if low <= p.price < high))
        for low, high, label in PRICE_BUCKETS
    ]


def analyze_by_cities(stores: Sequence[Store], products_by_store: ProductsByStore) -> List[CityReport]:
    """
    Per-city competition report, cities with the most stores first.

    Saturation is the share of the city's stores carrying a category; the
    status is classified on the unrounded share.
    """
    tallies = _tally(stores, products_by_store, key=lambda s: s.city or UNKNOWN_CITY)

    reports = []
    for city, tally in tallies.items():
        categories = []
        for category, store_count in tally.category_stores.items():
            saturation = _saturation(store_count, tally.store_count)
            categories.append(CityCategory(
                category=category,
                store_count=store_count,
                saturation=_round_half_up(saturation),
                status=_competition_status(saturation),
            ))
        reports.append(CityReport(
            city=city,
            store_count=tally.store_count,
            category_count=len(tally.category_stores),
            categories=sorted(categories, key=lambda c: -c.store_count),
        ))

    return sorted(reports, key=lambda r: -r.store_count)


def analyze_by_city_types(stores: Sequence[Store], products_by_store: ProductsByStore) -> List[CityTypeReport]:
    """Per-city-type presence report, in the order city types are first seen."""
    tallies = _tally(stores, products_by_store, key=lambda s: s.city_type or UNKNOWN_CITY_TYPE)

    return [
        CityTypeReport(
            city_type=city_type,
            store_count=tally.store_count,
            city_count=len(tally.cities),
            categories=[
                CityTypeCategory(
                    category=category,
                    store_count=store_count,
                    saturation=_round_half_up(_saturation(store_count, tally.store_count)),
                )
                for category, store_count in tally.category_stores.items()
            ],
        )
        for city_type, tally in tallies.items()
    ]


def _categories_by_city_type(stores: Sequence[Store], products_by_store: ProductsByStore) -> Dict[str, Dict[str, None]]:
    by_type: Dict[str, Dict[str, None]] = {}
    for store in stores:
        present = by_type.setdefault(store.city_type or UNKNOWN_CITY_TYPE, {})
        for product in _store_products(store, products_by_store):
            if product.category:
                present[product.category] = None
    return by_type


def find_category_gaps(stores: Sequence[Store], products_by_store: ProductsByStore) -> List[CategoryGap]:
    """
    Categories offered somewhere but missing from a whole city type.

    Uncategorized products are ignored. `present_in` lists the other city
    types offering any of the missing categories. City types lacking nothing
    are left out.
    """
    all_categories = dict.fromkeys(
        product.category
        for products in products_by_store.values()
        for product in products
        if product.category
    )
    by_type = _categories_by_city_type(stores, products_by_store)

    gaps = []
    for city_type, present in by_type.items():
        missing = [category for category in all_categories if category not in present]
        if not missing:
            continue
        present_in = [
            other
            for other, other_present in by_type.items()
            if other != city_type and any(category in other_present for category in missing)
        ]
        gaps.append(CategoryGap(city_type=city_type, missing_categories=missing, present_in=present_in))
    return gaps


def find_location_patterns(stores: Sequence[Store], products_by_store: ProductsByStore) -> List[LocationPattern]:
    """Categories that are not offered in every city type, with their coverage."""
    presence: Dict[str, Dict[str, None]] = {}
    for store in stores:
        city_type = store.city_type or UNKNOWN_CITY_TYPE
        for product in _store_products(store, products_by_store):
            if product.category:
                presence.setdefault(product.category, {})[city_type] = None

    all_city_types = list(dict.fromkeys(s.city_type or UNKNOWN_CITY_TYPE for s in stores))

    patterns = []
    for category, city_types in presence.items():
        absent_from = [ct for ct in all_city_types if ct not in city_types]
        if absent_from:
            patterns.append(LocationPattern(
                category=category,
                present_in=list(city_types),
                absent_from=absent_from,
                coverage=f"{len(city_types)}/{len(all_city_types)} location types",
            ))
    return patterns


def calculate_opportunities(category_gaps: Sequence[CategoryGap]) -> List[Opportunity]:
    """
    One opportunity per missing category, bigger markets first.

    The sort is stable, so within a city type the gap order is kept.
    """
    opportunities = [
        Opportunity(
            city_type=gap.city_type,
            category=category,
            reason=f"No stores offering {category} in {gap.city_type} locations",
            competition_level="NONE",
            recommendation=f"Consider opening a {category} store in {gap.city_type} area",
        )
        for gap in category_gaps
        for category in gap.missing_categories
    ]
    return sorted(
        opportunities,
        key=lambda o: CITY_TYPE_PRIORITY.get(o.city_type, FALLBACK_CITY_TYPE_PRIORITY),
    )


def analyze_market(stores: Sequence[Store], products: Iterable[Product]) -> MarketDensity:
    """Run the full market density pipeline over a loaded snapshot."""
    products_by_store = group_products_by_store(products)
    category_gaps = find_category_gaps(stores, products_by_store)

    return MarketDensity(
        by_cities=analyze_by_cities(stores, products_by_store),
        by_city_types=analyze_by_city_types(stores, products_by_store),
        category_gaps=category_gaps,
        patterns=find_location_patterns(stores, products_by_store),
        opportunities=calculate_opportunities(category_gaps),
    )
