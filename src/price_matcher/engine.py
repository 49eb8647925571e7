#!/usr/bin/env python3
"""
Matching orchestrator.
Drives parsing, resolution and deductions for one pass and renders the
copy-pasteable ``lineNumber<TAB>price`` listing plus statistics.
"""

import logging
from typing import List, Optional, Sequence

from .deductions import apply_deductions
from .matcher import resolve_all
from .models import MatchReport, MatchResult, MatchStats, Price, Product, format_price
from .parser import CatalogParser
from .rules import DEFAULT_RULES, MatchingRules

logger = logging.getLogger(__name__)


class PriceMatcher:
    """Runs matching passes under one set of rules. Holds no per-pass state."""

    def __init__(self, rules: MatchingRules = DEFAULT_RULES):
        self.rules = rules
        self.parser = CatalogParser(rules)

    def match(self, prices: Sequence[Price], products: Sequence[Product], locked: bool = False) -> MatchReport:
        """
        Match ``products`` against ``prices``.

        Plain mode renders the matched unit price, locked mode the price
        after deductions. Unmatched products only show up in the stats.
        """
        if not products:
            logger.info("Nothing to match: product list is empty")
            return MatchReport(locked=locked)

        matched_prices = resolve_all(products, prices, self.rules)
        results = [
            self._build_result(product, price, locked)
            for product, price in zip(products, matched_prices)
        ]
        lines = self._render(results)

        matched = sum(1 for result in results if result.matched)
        stats = MatchStats(matched=matched, unmatched=len(results) - matched)

        logger.info(
            f"{'Locked' if locked else 'Plain'} pass: "
            f"matched={stats.matched} unmatched={stats.unmatched} total={stats.total}"
        )
        return MatchReport(lines=tuple(lines), stats=stats, results=tuple(results), locked=locked)

    def match_text(self, price_text: str, product_text: str, locked: bool = False) -> MatchReport:
        """Parse both pasted blocks and match them."""
        if not (price_text or "").strip() or not (product_text or "").strip():
            return MatchReport(locked=locked)

        prices = self.parser.parse_prices(price_text)
        products = self.parser.parse_products(product_text)
        return self.match(prices, products, locked)

    def _build_result(self, product: Product, price: Optional[Price], locked: bool) -> MatchResult:
        if price is None:
            logger.debug(f"No price for line {product.line_number}: {product.description}")
            return MatchResult(product=product)

        if locked:
            final_price = apply_deductions(price.unit_price, product.remarks, self.rules)
        else:
            final_price = price.unit_price
        return MatchResult(product=product, price=price, final_price=final_price)

    @staticmethod
    def _render(results: Sequence[MatchResult]) -> List[str]:
        lines = []
        last_category: Optional[str] = None

        for result in results:
            if not result.matched:
                continue
            category = result.product.category
            if last_category is not None and category != last_category:
                lines.append("")
            lines.append(f"{result.product.line_number}\t{format_price(result.final_price)}")
            last_category = category

        return lines


def match(prices: Sequence[Price], products: Sequence[Product], locked: bool = False,
          rules: MatchingRules = DEFAULT_RULES) -> MatchReport:
    """Convenience function to match parsed records."""
    return PriceMatcher(rules).match(prices, products, locked)


def match_text(price_text: str, product_text: str, locked: bool = False,
               rules: MatchingRules = DEFAULT_RULES) -> MatchReport:
    """Convenience function to parse and match two pasted text blocks."""
    return PriceMatcher(rules).match_text(price_text, product_text, locked)
