"""Exact-decimal prices.

Prices never pass through binary floating point: JSON numbers are routed
through ``str()`` before becoming a :class:`~decimal.Decimal`, and the
store keeps the decimal text.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import cast

from satorder.domain.errors import InvalidInput

# Bounds on the decimal text a price can expand to in storage and in DECIMAL_CMP.
MAX_INTEGER_DIGITS = 15
MAX_SCALE = 10


def _to_decimal(raw: object, *, field: str) -> Decimal:
    if raw is None or isinstance(raw, bool):
        raise InvalidInput(f"{field} is required", field=field)
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float, str)):
        text = str(raw).strip()
        if not text:
            raise InvalidInput(f"{field} is required", field=field)
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidInput(f"{field} must be a decimal number", field=field) from exc
    else:
        raise InvalidInput(f"{field} must be a decimal number", field=field)

    if not value.is_finite():
        raise InvalidInput(f"{field} must be a finite number", field=field)
    exponent = cast(int, value.as_tuple().exponent)
    if exponent < -MAX_SCALE:
        raise InvalidInput(f"{field} must have at most {MAX_SCALE} decimal places", field=field)
    if value.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidInput(
            f"{field} must have at most {MAX_INTEGER_DIGITS} integer digits", field=field
        )
    return value


def parse_price(raw: object, *, field: str = "price") -> Decimal:
    """Parse an order price, which must be strictly positive."""
    value = _to_decimal(raw, field=field)
    if value <= 0:
        raise InvalidInput(f"{field} must be greater than 0", field=field)
    return value


def parse_price_bound(raw: object, *, field: str) -> Decimal:
    """Parse a price filter bound, which must be zero or positive."""
    value = _to_decimal(raw, field=field)
    if value < 0:
        raise InvalidInput(f"{field} must not be negative", field=field)
    return value


def format_price(value: Decimal) -> str:
    """Decimal text for storage; keeps the caller's scale, never uses exponents."""
    return format(value, "f")


@dataclass(frozen=True)
class PriceRange:
    """Closed price interval; either bound may be open."""

    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def __post_init__(self) -> None:
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise InvalidInput("minPrice must not exceed maxPrice", field="minPrice")


def parse_price_range(minimum: object, maximum: object) -> PriceRange | None:
    """Build a :class:`PriceRange` from optional raw bounds (``None`` if both blank)."""
    has_min = not _blank(minimum)
    has_max = not _blank(maximum)
    if not has_min and not has_max:
        return None
    return PriceRange(
        minimum=parse_price_bound(minimum, field="minPrice") if has_min else None,
        maximum=parse_price_bound(maximum, field="maxPrice") if has_max else None,
    )


def _blank(raw: object) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())
