"""
Model name normalization.

Model names in price sheets and product lists carry storage sizes and colors
in free text ("IPHONE 15 PRO 256GB Natural Titanium"). Comparison keys are
built by removing those tokens and canonicalizing case and spacing.
"""

import re
from functools import lru_cache
from typing import Pattern, Tuple

from .rules import DEFAULT_RULES, MatchingRules

_RX_CAPACITY = re.compile(r'\b(\d+(?:GB|TB))\b', re.IGNORECASE)
_RX_MULTI_SPACE = re.compile(r'\s+')
_RX_WORD = re.compile(r'\w+')


@lru_cache(maxsize=None)
def _trailing_color_patterns(colors: Tuple[str, ...]) -> Tuple[Pattern, ...]:
    return tuple(
        re.compile(r'\b' + re.escape(color) + r'\b\s*$', re.IGNORECASE)
        for color in colors
    )


def extract_capacity(text: str) -> str:
    """First storage token in ``text``, upper-cased ("128gb" -> "128GB"), or ""."""
    match = _RX_CAPACITY.search(text or "")
    return match.group(1).upper() if match else ""


def strip_capacity(text: str) -> str:
    return _RX_CAPACITY.sub('', text or "").strip()


def strip_trailing_colors(text: str, rules: MatchingRules = DEFAULT_RULES) -> str:
    """
    Remove color words from the end of ``text`` until none is left.

    "IPHONE 15 PRO NATURAL TITANIUM" -> "IPHONE 15 PRO". A color in the
    middle of the name ("IPHONE 15 BLACK EDITION") is kept.
    """
    patterns = _trailing_color_patterns(rules.colors)
    changed = True
    while changed and text:
        changed = False
        for pattern in patterns:
            stripped = pattern.sub('', text).strip()
            if stripped != text:
                text = stripped
                changed = True
    return text


def contains_color(text: str, rules: MatchingRules = DEFAULT_RULES) -> bool:
    words = set(_RX_WORD.findall((text or "").upper()))
    return any(color.upper() in words for color in rules.colors)


def normalize_model(text: str, strip_color: bool = False, rules: MatchingRules = DEFAULT_RULES) -> str:
    """Canonical comparison key for a model or description string."""
    model = strip_capacity(text)
    if strip_color:
        model = strip_trailing_colors(model, rules)
    return _RX_MULTI_SPACE.sub(' ', model.upper()).strip()


def compact(key: str) -> str:
    return _RX_MULTI_SPACE.sub('', key)
