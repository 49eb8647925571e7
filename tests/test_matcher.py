#!/usr/bin/env python3
"""
Tests for the matching gates and the first-fit resolver.
"""

import unittest
from decimal import Decimal

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from price_matcher.matcher import (
    models_match,
    needs_capacity_match,
    needs_color_match,
    resolve,
    resolve_all,
)
from price_matcher.models import Price, Product
from price_matcher.rules import MatchingRules


def price(category, model, capacity="", unit_price="5000"):
    return Price(category=category, model=model, capacity=capacity, quantity=1, unit_price=Decimal(unit_price))


def product(category, description, line_number="1", remarks=""):
    return Product(line_number=line_number, remarks=remarks, description=description, category=category)


class TestMatchingGates(unittest.TestCase):

    def test_needs_capacity_match(self):
        self.assertTrue(needs_capacity_match("iPhone 15 128GB"))
        self.assertTrue(needs_capacity_match("IPAD AIR 256GB"))
        self.assertFalse(needs_capacity_match("GALAXY S24 256GB"))

        rules = MatchingRules(capacity_families=("GALAXY",))
        self.assertTrue(needs_capacity_match("GALAXY S24 256GB", rules))
        self.assertFalse(needs_capacity_match("IPHONE 15 128GB", rules))

    def test_needs_color_match(self):
        test_cases = [
            ("UNLOCKED", "IPHONE 15 BLUE", True),
            ("UNLOCKED", "IPHONE 15", False),
            ("LOCKED", "IPHONE 15 BLUE", False),
            ("LOCKED N/A", "IPHONE 15 BLUE", True),
            ("LOCKED N/A", "IPHONE 15", False),
            ("HK", "IPHONE 15 BLUE", False),
            ("DEFAULT", "IPHONE 15 BLUE", False),
        ]
        for category, model, expected in test_cases:
            with self.subTest(category=category, model=model):
                self.assertEqual(needs_color_match(category, model), expected)

    def test_models_match(self):
        self.assertTrue(models_match("IPHONE 15", "IPHONE 15"))
        self.assertTrue(models_match("IPHONE16PRO", "IPHONE 16 PRO"))
        self.assertFalse(models_match("IPHONE 15", "IPHONE 15 PRO"))
        self.assertFalse(models_match("IPHONE 15 PRO MAX", "IPHONE 15 PRO"))
        self.assertFalse(models_match("", ""))


class TestResolver(unittest.TestCase):

    def test_capacity_insensitive_match(self):
        prices = [price("UNLOCKED", "IPHONE 14 BLACK")]
        self.assertEqual(resolve(product("UNLOCKED", "IPHONE 14 BLACK"), prices), prices[0])

    def test_capacity_mismatch_is_rejected(self):
        prices = [price("UNLOCKED", "IPHONE 15 256GB BLUE")]
        self.assertIsNone(resolve(product("UNLOCKED", "IPHONE 15 128GB BLUE"), prices))

        prices.append(price("UNLOCKED", "IPHONE 15 128GB BLUE", unit_price="4800"))
        self.assertEqual(resolve(product("UNLOCKED", "IPHONE 15 128GB BLUE"), prices), prices[1])

    def test_capacity_column_is_preferred(self):
        prices = [
            price("HK", "IPHONE 15", capacity="256GB", unit_price="5800"),
            price("HK", "IPHONE 15", capacity="128gb", unit_price="5000"),
        ]
        self.assertEqual(resolve(product("HK", "IPHONE 15 128GB"), prices), prices[1])

    def test_missing_capacity_does_not_reject(self):
        prices = [price("HK", "IPHONE 15")]
        self.assertEqual(resolve(product("HK", "IPHONE 15 128GB"), prices), prices[0])

    def test_capacity_ignored_outside_families(self):
        prices = [price("HK", "GALAXY S24", capacity="128GB")]
        self.assertEqual(resolve(product("HK", "GALAXY S24 256GB"), prices), prices[0])

    def test_first_fit(self):
        prices = [
            price("HK", "IPHONE 15", unit_price="5000"),
            price("HK", "IPHONE 15", unit_price="4000"),
        ]
        self.assertIs(resolve(product("HK", "IPHONE 15"), prices), prices[0])

    def test_category_must_match_exactly(self):
        prices = [price("UNLOCKED", "IPHONE 15")]
        self.assertIsNone(resolve(product("unlocked", "IPHONE 15"), prices))
        self.assertIsNone(resolve(product("LOCKED", "IPHONE 15"), prices))

    def test_default_category_only_matches_default_prices(self):
        prices = [price("LOCKED", "IPHONE 15", unit_price="4000"), price("DEFAULT", "IPHONE 15")]
        self.assertEqual(resolve(product("DEFAULT", "IPHONE 15"), prices), prices[1])
        self.assertIsNone(resolve(product("DEFAULT", "IPHONE 15"), prices[:1]))

    def test_color_gate_is_per_price_row(self):
        prices = [
            price("UNLOCKED", "IPHONE 15 PINK", capacity="128GB", unit_price="5100"),
            price("UNLOCKED", "IPHONE 15", capacity="128GB", unit_price="5000"),
        ]
        self.assertEqual(resolve(product("UNLOCKED", "IPHONE 15 128GB BLUE"), prices), prices[1])
        self.assertEqual(resolve(product("UNLOCKED", "IPHONE 15 128GB PINK"), prices), prices[0])

    def test_locked_category_ignores_color(self):
        prices = [price("LOCKED", "IPHONE 15 PINK", capacity="128GB")]
        self.assertEqual(resolve(product("LOCKED", "IPHONE 15 128GB BLUE"), prices), prices[0])

    def test_spacing_variants_match(self):
        prices = [price("HK", "IPHONE 16 PRO", capacity="256GB")]
        self.assertEqual(resolve(product("HK", "IPHONE16PRO 256GB"), prices), prices[0])

    def test_resolve_all_keeps_order(self):
        prices = [price("HK", "IPHONE 15"), price("HK", "IPHONE 14", unit_price="3000")]
        products = [product("HK", "IPHONE 14"), product("HK", "IPHONE 13"), product("HK", "IPHONE 15")]
        self.assertEqual(resolve_all(products, prices), [prices[1], None, prices[0]])


if __name__ == '__main__':
    unittest.main()
