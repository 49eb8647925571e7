#!/usr/bin/env python3
"""
Matching rules for the Catalog Price Matcher.

Every product-specific heuristic used by the parsers and the matcher lives
here: color words, capacity-sensitive product families, category markers,
header tokens and the deduction table. The defaults reproduce the behaviour
operators rely on; a JSON document can override any of them.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

logger = logging.getLogger(__name__)


class RulesError(ValueError):
    """Raised when a rules document cannot be turned into MatchingRules."""


@dataclass(frozen=True)
class MatchingRules:
    """Immutable table of heuristics shared by parsing and matching."""

    # Trailing color words stripped from model names when color is not compared
    colors: Tuple[str, ...] = (
        'BLACK', 'WHITE', 'BLUE', 'ORANGE', 'SILVER', 'GOLD', 'NATURAL', 'DESERT',
        'PINK', 'ULTRAMARINE', 'GRAY', 'GREY', 'GREEN', 'RED', 'PURPLE',
        'YELLOW', 'LAVENDER', 'SAGE', 'MIDNIGHT', 'STARLIGHT', 'TITANIUM',
        'SPACE', 'ROSE', 'CORAL', 'TEAL', 'INDIGO', 'CRIMSON',
    )

    # Product families whose prices differ by storage size
    capacity_families: Tuple[str, ...] = ('IPHONE', 'IPAD', 'MACBOOK')

    unlocked_markers: Tuple[str, ...] = ('UNLOCKED',)
    locked_markers: Tuple[str, ...] = ('LOCKED',)
    activation_markers: Tuple[str, ...] = ('N/A', 'ACTIVATED', '未激活', '已激活')

    # Tabular header detection: one token from each group must be present
    capacity_tokens: Tuple[str, ...] = ('CAP', 'CAPACITY', '容量')
    quantity_tokens: Tuple[str, ...] = ('QTY', 'QUANTITY', '數量', '数量')
    currency_tokens: Tuple[str, ...] = ('HKD', 'USD', 'CNY', 'RMB', 'PRICE', '價格', '价格', '港幣')

    # Category labels accepted verbatim even though they are not upper case
    category_labels: Tuple[str, ...] = ()

    handling_fee: Decimal = Decimal('15')
    deductions: Tuple[Tuple[str, Decimal], ...] = (
        ('小花', Decimal('-100')),
        ('花機', Decimal('-150')),
        ('大花', Decimal('-350')),
        ('舊機', Decimal('-350')),
        ('低保', Decimal('-100')),
        ('過保', Decimal('-200')),
        ('黑機', Decimal('-200')),
        ('配置鎖', Decimal('-300')),
    )

    @property
    def header_tokens(self) -> Tuple[str, ...]:
        return self.capacity_tokens + self.quantity_tokens + self.currency_tokens

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: 'MatchingRules' = None) -> 'MatchingRules':
        """
        Build rules from a mapping, overriding ``base`` (the defaults when omitted).

        Lists replace the corresponding default list, ``deductions`` is a
        ``{keyword: amount}`` mapping that replaces the whole table.
        """
        if not isinstance(data, Mapping):
            raise RulesError(f"Rules document must be an object, got {type(data).__name__}")

        base = base if base is not None else DEFAULT_RULES
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise RulesError(f"Unknown rules keys: {', '.join(unknown)}")

        overrides: Dict[str, Any] = {}
        for key, value in data.items():
            if key == 'handling_fee':
                overrides[key] = _to_decimal(key, value)
            elif key == 'deductions':
                if not isinstance(value, Mapping):
                    raise RulesError("'deductions' must map keywords to amounts")
                overrides[key] = tuple(
                    (str(keyword), _to_decimal(f"deductions[{keyword}]", amount))
                    for keyword, amount in value.items()
                )
            else:
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise RulesError(f"'{key}' must be a list of strings")
                overrides[key] = tuple(str(item) for item in value)

        return replace(base, **overrides)


def _to_decimal(key: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise RulesError(f"'{key}' must be a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise RulesError(f"'{key}' must be a number, got {value!r}")


def load_rules(path: Union[str, Path]) -> MatchingRules:
    """Load a JSON rules document, layering it over DEFAULT_RULES."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except UnicodeDecodeError as e:
        raise RulesError(f"Rules file {path} is not UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise RulesError(f"Invalid JSON in {path}: {e}") from e

    rules = MatchingRules.from_dict(data)
    logger.info(f"Loaded matching rules from: {path}")
    return rules


DEFAULT_RULES = MatchingRules()
