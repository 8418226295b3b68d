"""
Aggregation helpers
Pure transformations over rows that were already fetched
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, List, Sequence

from storefront.models.analytics_models import ClickEvent, TopClicked
from storefront.models.catalog_models import ALL_CATEGORIES, FALLBACK_CATEGORY, Product


def top_clicked(
    events: Iterable[ClickEvent],
    window_start: datetime,
    limit: int
) -> List[TopClicked]:
    """
    Rank products by click count inside a time window

    Ties keep the order in which the product was first seen.
    """
    if limit <= 0:
        return []

    counts = Counter(
        event.product_id
        for event in events
        if event.occurred_at >= window_start
    )

    # most_common sorts stably, so equal counts stay in first-seen order
    return [
        TopClicked(product_id=product_id, count=count)
        for product_id, count in counts.most_common(limit)
    ]


def filter_products(
    products: Sequence[Product],
    query: str = "",
    category: str = ALL_CATEGORIES
) -> List[Product]:
    """
    Filter products by category and free-text query

    Args:
        products: Products in display order
        query: Matched case-insensitively against name, type and description
        category: Category value, or "ALL" for every category

    Returns:
        Matching products in their original order
    """
    needle = (query or "").strip().casefold()
    category = category or ALL_CATEGORIES

    result = []
    for product in products:
        if category != ALL_CATEGORIES and (product.category or FALLBACK_CATEGORY) != category:
            continue

        if needle:
            haystack = f"{product.name} {product.type or ''} {product.description or ''}".casefold()
            if needle not in haystack:
                continue

        result.append(product)

    return result
