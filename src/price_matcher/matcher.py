"""
Resolve products to price rows.

A product matches the first price row, in sheet order, that shares its
category verbatim, has the same normalized model and (for
capacity-sensitive families) does not disagree on storage size.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .models import Price, Product
from .normalizer import compact, contains_color, extract_capacity, normalize_model
from .rules import DEFAULT_RULES, MatchingRules

logger = logging.getLogger(__name__)


def needs_capacity_match(description: str, rules: MatchingRules = DEFAULT_RULES) -> bool:
    upper = (description or "").upper()
    return any(family in upper for family in rules.capacity_families)


def needs_color_match(category: str, price_model: str, rules: MatchingRules = DEFAULT_RULES) -> bool:
    """
    Whether color must agree when comparing against this particular price row.

    Only rows that name a color can be compared by color. Unlocked
    categories then always compare it; locked categories only when the
    category is flagged with an activation variant.
    """
    upper = (category or "").upper()
    if not contains_color(price_model, rules):
        return False
    if any(marker in upper for marker in rules.unlocked_markers):
        return True
    if any(marker in upper for marker in rules.locked_markers):
        return any(flag in upper for flag in rules.activation_markers)
    return False


def models_match(product_model: str, price_model: str) -> bool:
    """Normalized keys are equal once whitespace is ignored ("IPHONE16PRO" == "IPHONE 16 PRO")."""
    return bool(product_model) and compact(product_model) == compact(price_model)


def capacities_agree(product_capacity: str, price: Price) -> bool:
    price_capacity = (price.capacity or extract_capacity(price.model)).upper()
    if not price_capacity or not product_capacity:
        return True
    return price_capacity == product_capacity


def resolve(product: Product, prices: Iterable[Price], rules: MatchingRules = DEFAULT_RULES) -> Optional[Price]:
    """First price row that qualifies for ``product``, or None."""
    product_capacity = extract_capacity(product.description)
    requires_capacity = needs_capacity_match(product.description, rules)

    for price in prices:
        if price.category != product.category:
            continue

        requires_color = needs_color_match(product.category, price.model, rules)
        product_model = normalize_model(product.description, not requires_color, rules)
        price_model = normalize_model(price.model, not requires_color, rules)

        if not models_match(product_model, price_model):
            continue

        if requires_capacity and not capacities_agree(product_capacity, price):
            logger.debug(
                f"Capacity mismatch for line {product.line_number}: "
                f"{product_capacity} vs {price.capacity or price.model}"
            )
            continue

        return price

    return None


def resolve_all(products: Sequence[Product], prices: Sequence[Price],
                rules: MatchingRules = DEFAULT_RULES) -> List[Optional[Price]]:
    """Resolve every product independently, preserving product order."""
    return [resolve(product, prices, rules) for product in products]
