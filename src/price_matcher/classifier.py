"""
Line classification shared by the price-sheet and product-list parsers.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .models import DEFAULT_CATEGORY
from .rules import DEFAULT_RULES, MatchingRules

logger = logging.getLogger(__name__)


class LineKind(Enum):
    HEADER = "header"
    CATEGORY = "category"
    DATA = "data"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str
    # New category cursor carried by the line, if any
    category: Optional[str] = None


def split_columns(line: str) -> List[str]:
    return [column.strip() for column in line.split('\t')]


def is_tabular_header(line: str, rules: MatchingRules = DEFAULT_RULES) -> bool:
    """A header names a capacity, a quantity and a currency/price column."""
    upper = line.upper()
    return (
        any(token in upper for token in rules.capacity_tokens)
        and any(token in upper for token in rules.quantity_tokens)
        and any(token in upper for token in rules.currency_tokens)
    )


def _header_category(line: str, rules: MatchingRules) -> Optional[str]:
    # "UNLOCKED<TAB>CAP<TAB>QTY<TAB>HKD" names the category in its first cell
    columns = split_columns(line)
    if len(columns) < 2:
        return None
    first = columns[0]
    if not first or first != first.upper():
        return None
    if any(token in first for token in rules.header_tokens):
        return None
    return first


def classify_line(line: str, rules: MatchingRules = DEFAULT_RULES) -> ClassifiedLine:
    """Classify one trimmed, non-empty line."""
    if is_tabular_header(line, rules):
        return ClassifiedLine(LineKind.HEADER, line, _header_category(line, rules))

    if line in rules.category_labels:
        return ClassifiedLine(LineKind.CATEGORY, line, line)

    if '\t' not in line and line == line.upper():
        return ClassifiedLine(LineKind.CATEGORY, line, line)

    return ClassifiedLine(LineKind.DATA, line)


def advance(category: str, classified: ClassifiedLine) -> str:
    """Next value of the category cursor after seeing ``classified``."""
    return classified.category if classified.category is not None else category


def iter_data_rows(text: str, rules: MatchingRules = DEFAULT_RULES) -> Iterator[Tuple[str, List[str]]]:
    """
    Yield ``(category, columns)`` for every data row of ``text``.

    The category cursor starts at DEFAULT and is folded through the lines:
    category lines and headers that carry a category move it, data rows
    inherit whatever it currently holds.
    """
    category = DEFAULT_CATEGORY
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue

        classified = classify_line(line, rules)
        next_category = advance(category, classified)
        if next_category != category:
            logger.debug(f"Category switched to: {next_category}")
        category = next_category

        if classified.kind is LineKind.DATA:
            yield category, split_columns(line)
