#!/usr/bin/env python3
"""
Tests for the price-matcher command line interface.
"""

import json
import unittest

from click.testing import CliRunner

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from price_matcher.cli import cli


PRICE_SHEET = "UNLOCKED\tCAP\tQTY\tHKD\nIPHONE 15\t128GB\t1\t5000\n"
PRODUCT_LIST = "UNLOCKED\n1\t小花\tIPHONE 15 128GB BLUE\n2\tIPHONE 99\n"


class TestCli(unittest.TestCase):
    """Test cases for the click commands."""

    def setUp(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def _write_inputs(self):
        Path("prices.txt").write_text(PRICE_SHEET, encoding="utf-8")
        Path("products.txt").write_text(PRODUCT_LIST, encoding="utf-8")

    def test_match_plain(self):
        with self.runner.isolated_filesystem():
            self._write_inputs()
            result = self.runner.invoke(cli, ["match", "prices.txt", "products.txt"])

            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn("1\t5000", result.output)

    def test_match_locked_to_file(self):
        with self.runner.isolated_filesystem():
            self._write_inputs()
            result = self.runner.invoke(cli, ["match", "prices.txt", "products.txt", "--locked", "-o", "out.txt"])

            self.assertEqual(result.exit_code, 0, result.output)
            self.assertEqual(Path("out.txt").read_text(encoding="utf-8"), "1\t4885\n")

    def test_match_json(self):
        with self.runner.isolated_filesystem():
            self._write_inputs()
            result = self.runner.invoke(
                cli, ["match", "prices.txt", "products.txt", "--json", "--output", "report.json"]
            )

            self.assertEqual(result.exit_code, 0, result.output)
            report = json.loads(Path("report.json").read_text(encoding="utf-8"))
            self.assertEqual(report["stats"], {"matched": 1, "unmatched": 1, "total": 2})
            self.assertEqual(report["lines"], ["1\t5000"])

    def test_match_with_rules(self):
        with self.runner.isolated_filesystem():
            self._write_inputs()
            Path("rules.json").write_text(json.dumps({"handling_fee": 0}), encoding="utf-8")
            result = self.runner.invoke(
                cli, ["match", "prices.txt", "products.txt", "--locked", "--rules", "rules.json", "-o", "out.txt"]
            )

            self.assertEqual(result.exit_code, 0, result.output)
            self.assertEqual(Path("out.txt").read_text(encoding="utf-8"), "1\t4900\n")

    def test_match_with_invalid_rules(self):
        with self.runner.isolated_filesystem():
            self._write_inputs()
            Path("rules.json").write_text(json.dumps({"colour": []}), encoding="utf-8")
            result = self.runner.invoke(cli, ["match", "prices.txt", "products.txt", "--rules", "rules.json"])

            self.assertEqual(result.exit_code, 1)
            self.assertIn("Unknown rules keys: colour", result.output)

    def test_match_missing_file(self):
        result = self.runner.invoke(cli, ["match", "missing-prices.txt", "missing-products.txt"])
        self.assertEqual(result.exit_code, 2)

    def test_deduct(self):
        result = self.runner.invoke(cli, ["deduct", "5000", "小花 黑機"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("4685", result.output)

        result = self.runner.invoke(cli, ["deduct", "5000"])
        self.assertIn("4985", result.output)

    def test_deduct_rejects_non_numbers(self):
        result = self.runner.invoke(cli, ["deduct", "abc"])
        self.assertEqual(result.exit_code, 2)

    def test_interactive_toggle_locked(self):
        user_input = PRICE_SHEET + ".\n" + PRODUCT_LIST + ".\n" + "1\n" + "5\n"
        result = self.runner.invoke(cli, ["interactive"], input=user_input)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("5000", result.output)
        self.assertIn("4885", result.output)
        self.assertIn("Goodbye", result.output)

    def test_interactive_clear_all(self):
        user_input = PRICE_SHEET + ".\n" + PRODUCT_LIST + ".\n" + "4\n" + "5\n"
        result = self.runner.invoke(cli, ["interactive"], input=user_input)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("All data cleared", result.output)


if __name__ == '__main__':
    unittest.main()
