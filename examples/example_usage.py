#!/usr/bin/env python3
"""
Example usage of the Catalog Price Matcher
Demonstrates plain and locked matching with sample data.
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from price_matcher import PriceMatcher, parse_prices, parse_products


def create_sample_price_sheet():
    """Create a sample price sheet as pasted from a supplier spreadsheet."""
    return "\n".join([
        "UNLOCKED\tCAP\tQTY\tHKD",
        "IPHONE 16 PRO\t256GB\t20\t8650",
        "IPHONE 16 PRO\t512GB\t8\t10200",
        "IPHONE 15\t128GB\t30\t5000",
        "IPHONE 15 PINK\t128GB\t5\t5080",
        "",
        "LOCKED N/A",
        "IPHONE 15 BLUE\t128GB\t12\t4300",
        "IPHONE 15\tMTP03ZA\t6\t4200",
    ])


def create_sample_product_list():
    """Create a sample product list: line number, remarks, description."""
    return "\n".join([
        "UNLOCKED",
        "101\t\tIPHONE 16 PRO 256GB DESERT TITANIUM",
        "102\t小花\tIPHONE 16PRO 512GB",
        "103\t\tIPHONE 15 128GB PINK",
        "104\t過保 黑機\tIPHONE 15 128GB BLACK",
        "105\t\tIPHONE 16 PRO 1TB",
        "LOCKED N/A",
        "201\t\tIPHONE 15 128GB BLUE",
        "202\t舊機\tIPHONE 15 128GB GREEN",
    ])


def demonstrate_parsing():
    """Show the records the parsers produce."""
    print("=" * 60)
    print("DEMONSTRATION: Parsing")
    print("=" * 60)

    for price in parse_prices(create_sample_price_sheet()):
        print(f"{price.category:<12} {price.model:<16} {price.capacity or '-':<6} {price.unit_price}")

    print()
    for product in parse_products(create_sample_product_list()):
        print(f"{product.line_number:<5} {product.category:<12} {product.remarks or '-':<8} {product.description}")


def demonstrate_matching():
    """Match the sample product list in both modes."""
    matcher = PriceMatcher()

    for locked in (False, True):
        print("\n" + "=" * 60)
        print(f"DEMONSTRATION: {'Locked' if locked else 'Plain'} mode")
        print("=" * 60)

        report = matcher.match_text(create_sample_price_sheet(), create_sample_product_list(), locked)
        print(report.text)
        print(json.dumps(report.stats.to_dict()))


def main():
    """Run all demonstrations."""
    demonstrate_parsing()
    demonstrate_matching()


if __name__ == "__main__":
    main()
