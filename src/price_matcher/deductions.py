#!/usr/bin/env python3
"""
Condition deductions for locked-mode pricing.
Every matched price pays a flat handling fee; remarks describing the
device's condition ("小花", "過保", ...) each knock a fixed amount off.
"""

import logging
from decimal import Decimal
from typing import List, Tuple, Union

from .rules import DEFAULT_RULES, MatchingRules

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 4999.9 from turning into 4999.8999...
    return Decimal(str(value))


def find_deductions(remarks: str, rules: MatchingRules = DEFAULT_RULES) -> List[Tuple[str, Decimal]]:
    """Keywords found in ``remarks`` with their (negative) amounts, in table order."""
    remarks = remarks or ""
    return [(keyword, amount) for keyword, amount in rules.deductions if keyword in remarks]


def apply_deductions(base_price: Number, remarks: str, rules: MatchingRules = DEFAULT_RULES) -> Decimal:
    """
    Price after the handling fee and every keyword deduction found in ``remarks``.

    Deductions stack and the result is not clamped, so it may go negative.
    """
    final_price = _as_decimal(base_price) - rules.handling_fee

    for keyword, amount in find_deductions(remarks, rules):
        final_price += amount
        logger.debug(f"Deduction '{keyword}': {amount}")

    return final_price
