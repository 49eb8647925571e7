"""
Data models for the Catalog Price Matcher.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple


DEFAULT_CATEGORY = "DEFAULT"


def format_price(value: Decimal) -> str:
    """Render a price as a plain number: no exponent, no trailing '.0'."""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), 'f')


@dataclass(frozen=True)
class Price:
    """A single row of the price sheet."""
    category: str
    model: str
    capacity: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class Product:
    """A single catalog line-item waiting for a price."""
    line_number: str
    remarks: str
    description: str
    category: str


@dataclass(frozen=True)
class MatchResult:
    """Outcome of resolving one product against the price sheet."""
    product: Product
    price: Optional[Price] = None
    final_price: Optional[Decimal] = None

    @property
    def matched(self) -> bool:
        return self.price is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lineNumber": self.product.line_number,
            "category": self.product.category,
            "description": self.product.description,
            "remarks": self.product.remarks,
            "matched": self.matched,
            "model": self.price.model if self.price else None,
            "unitPrice": format_price(self.price.unit_price) if self.price else None,
            "finalPrice": format_price(self.final_price) if self.final_price is not None else None,
        }


@dataclass(frozen=True)
class MatchStats:
    """Tally of one matching pass."""
    matched: int = 0
    unmatched: int = 0

    @property
    def total(self) -> int:
        return self.matched + self.unmatched

    def to_dict(self) -> Dict[str, int]:
        return {"matched": self.matched, "unmatched": self.unmatched, "total": self.total}


@dataclass(frozen=True)
class MatchReport:
    """Rendered listing plus statistics for one matching pass."""
    lines: Tuple[str, ...] = ()
    stats: MatchStats = field(default_factory=MatchStats)
    results: Tuple[MatchResult, ...] = ()
    locked: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locked": self.locked,
            "lines": list(self.lines),
            "stats": self.stats.to_dict(),
            "results": [result.to_dict() for result in self.results],
        }
