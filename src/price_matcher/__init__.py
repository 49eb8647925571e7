"""
Catalog Price Matcher

Matches pasted catalog line-items against a pasted price sheet and renders a
per-line price listing, optionally after condition deductions.
"""

__version__ = "1.0.0"

from .deductions import apply_deductions
from .engine import PriceMatcher, match, match_text
from .models import MatchReport, MatchResult, MatchStats, Price, Product
from .normalizer import extract_capacity, normalize_model
from .parser import CatalogParser, parse_prices, parse_products
from .rules import DEFAULT_RULES, MatchingRules, RulesError, load_rules

__all__ = [
    "CatalogParser",
    "PriceMatcher",
    "parse_prices",
    "parse_products",
    "match",
    "match_text",
    "apply_deductions",
    "normalize_model",
    "extract_capacity",
    "MatchingRules",
    "DEFAULT_RULES",
    "RulesError",
    "load_rules",
    "Price",
    "Product",
    "MatchResult",
    "MatchStats",
    "MatchReport",
]
