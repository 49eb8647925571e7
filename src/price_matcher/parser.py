#!/usr/bin/env python3
"""
Catalog Price Matcher parsers
Turn pasted price sheets and product lists into Price and Product records.
"""

import re
import logging
from typing import List
from decimal import Decimal, InvalidOperation

from .classifier import iter_data_rows
from .models import Price, Product
from .rules import DEFAULT_RULES, MatchingRules

logger = logging.getLogger(__name__)


class CatalogParser:
    """Parser for the two tab-delimited text blocks an operator pastes."""

    def __init__(self, rules: MatchingRules = DEFAULT_RULES):
        self.rules = rules

        # Opaque SKU in the second column, e.g. MTP03ZA/A without the suffix
        self.part_number_pattern = re.compile(r'^[A-Z0-9]{6,10}$', re.IGNORECASE)
        self.capacity_suffix_pattern = re.compile(r'\d+(?:GB|TB)$', re.IGNORECASE)
        self.bare_integer_pattern = re.compile(r'^\d+$', re.ASCII)

        self.price_pattern = re.compile(r'^[-+]?(?:\d+(?:\.\d*)?|\.\d+)')
        self.quantity_pattern = re.compile(r'^[-+]?\d+')

    def normalize_price(self, price_str: str) -> Decimal:
        """Leading numeric value of a price cell, 0 when there is none."""
        if not price_str:
            return Decimal('0')

        # Remove currency symbols and thousands separators
        price_str = re.sub(r'[\$\€\£\¥,\s]', '', price_str)

        match = self.price_pattern.match(price_str)
        if match:
            try:
                return Decimal(match.group(0))
            except InvalidOperation:
                logger.debug(f"Invalid price format: {price_str}")
        return Decimal('0')

    def normalize_quantity(self, quantity_str: str) -> int:
        """Leading integer value of a quantity cell, 0 when there is none."""
        match = self.quantity_pattern.match((quantity_str or "").replace(',', '').strip())
        return int(match.group(0)) if match else 0

    def is_part_number(self, column: str) -> bool:
        return bool(self.part_number_pattern.match(column)) and not self.capacity_suffix_pattern.search(column)

    def parse_prices(self, text: str) -> List[Price]:
        """Parse a price sheet into Price records, in sheet order."""
        prices = []

        for category, columns in iter_data_rows(text, self.rules):
            if len(columns) < 3:
                logger.debug(f"Skipping price row with {len(columns)} column(s): {columns}")
                continue

            model = columns[0]
            second = columns[1]

            if len(columns) == 3 and self.bare_integer_pattern.match(second):
                # MODEL<TAB>QTY<TAB>PRICE
                capacity = ""
                quantity = self.normalize_quantity(second)
                unit_price = self.normalize_price(columns[2])
            else:
                capacity = "" if self.is_part_number(second) else second
                quantity = self.normalize_quantity(columns[2])
                unit_price = self.normalize_price(columns[3] if len(columns) > 3 else "")

            prices.append(Price(
                category=category,
                model=model,
                capacity=capacity,
                quantity=quantity,
                unit_price=unit_price
            ))

        logger.debug(f"Parsed {len(prices)} price rows")
        return prices

    def parse_products(self, text: str) -> List[Product]:
        """Parse a product list into Product records, in list order."""
        products = []

        for category, columns in iter_data_rows(text, self.rules):
            if len(columns) < 2:
                logger.debug(f"Skipping product row without columns: {columns}")
                continue

            line_number = columns[0]
            if len(columns) == 2:
                remarks, description = "", columns[1]
            else:
                remarks, description = columns[1], columns[2]

            if not line_number or not description:
                logger.debug(f"Skipping product row without line number or description: {columns}")
                continue

            products.append(Product(
                line_number=line_number,
                remarks=remarks,
                description=description,
                category=category
            ))

        logger.debug(f"Parsed {len(products)} products")
        return products


def parse_prices(text: str, rules: MatchingRules = DEFAULT_RULES) -> List[Price]:
    """Convenience function to parse a price sheet."""
    return CatalogParser(rules).parse_prices(text)


def parse_products(text: str, rules: MatchingRules = DEFAULT_RULES) -> List[Product]:
    """Convenience function to parse a product list."""
    return CatalogParser(rules).parse_products(text)
