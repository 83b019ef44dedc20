"""SearchFilter — the per-request filter set for catalog and order listings."""

from __future__ import annotations

from dataclasses import dataclass, field

from satorder.domain.geometry import AreaFilter, parse_area_filter
from satorder.domain.money import PriceRange, parse_price_range
from satorder.domain.pagination import DEFAULT_LIMIT, MAX_LIMIT, PageWindow, normalize
from satorder.domain.timestamps import DateRange, parse_date_range


@dataclass(frozen=True)
class SearchFilter:
    """Validated, transient filter set. Never persisted."""

    window: PageWindow = field(default_factory=PageWindow)
    date_range: DateRange | None = None
    price_range: PriceRange | None = None
    area: AreaFilter | None = None


def build_search_filter(
    *,
    page: object = None,
    limit: object = None,
    start_date: str | None = None,
    end_date: str | None = None,
    area: str | None = None,
    min_price: object = None,
    max_price: object = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> SearchFilter:
    """Validate raw request values into a :class:`SearchFilter`.

    Raises:
        ValidationError: Any input is invalid (pagination, dates, prices, area).
    """
    window = normalize(page, limit, default_limit=default_limit, max_limit=max_limit)
    date_range = parse_date_range(start_date, end_date)
    price_range = parse_price_range(min_price, max_price)
    area_filter = parse_area_filter(area) if area is not None and area.strip() else None
    return SearchFilter(
        window=window,
        date_range=date_range,
        price_range=price_range,
        area=area_filter,
    )
