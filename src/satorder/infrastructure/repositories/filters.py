"""Query builder for paginated, multi-predicate listings.

A :class:`PredicateSet` is an immutable conjunction of optional filters
(created-at range, price range, spatial intersection, key equality) over
one base entity. The count statement and the page statement are both
derived from the same clause tuple, so the reported ``total`` always
describes exactly the rows that pagination walks through.

Usage::

    predicates = PredicateSet.from_filter(IMAGES, search_filter)
    with engine.connect() as conn:
        page = fetch_page(conn, predicates, search_filter.window)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, func, select

from satorder.domain.money import format_price
from satorder.infrastructure.database.schema import orders, satellite_images

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Connection, Select, Table

    from satorder.domain.geometry import AreaFilter
    from satorder.domain.money import PriceRange
    from satorder.domain.pagination import PageWindow
    from satorder.domain.search import SearchFilter
    from satorder.domain.timestamps import DateRange


@dataclass(frozen=True)
class EntitySpec:
    """A filterable base entity: its table, projection, and stable ordering.

    ``order_by`` pairs are ``(column, descending)``. The last pair must be
    a unique key so that equal sort values still page deterministically.
    """

    name: str
    table: Table
    columns: tuple[str, ...]
    order_by: tuple[tuple[str, bool], ...]
    key_column: str
    created_column: str | None = None
    price_column: str | None = None
    geometry_column: str | None = None

    def ordering(self) -> list[ColumnElement[Any]]:
        cols = self.table.c
        return [cols[name].desc() if desc else cols[name].asc() for name, desc in self.order_by]


IMAGES = EntitySpec(
    name="images",
    table=satellite_images,
    columns=("catalog_id", "coverage_area", "created_at"),
    order_by=(("catalog_id", False),),
    key_column="catalog_id",
    created_column="created_at",
    geometry_column="coverage_area",
)

ORDERS = EntitySpec(
    name="orders",
    table=orders,
    columns=("id", "image_id", "price", "created_at"),
    order_by=(("created_at", True), ("id", False)),
    key_column="id",
    created_column="created_at",
    price_column="price",
)


@dataclass(frozen=True)
class Page:
    """One page of rows plus the total match count under the same predicates."""

    total: int
    rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True, eq=False)
class PredicateSet:
    """Immutable AND-combination of filters over an :class:`EntitySpec`.

    Each ``with``-style method returns a new set; ``None`` arguments are
    no-ops so optional request filters chain without branching.
    """

    entity: EntitySpec
    clauses: tuple[ColumnElement[bool], ...] = ()

    @classmethod
    def from_filter(cls, entity: EntitySpec, search: SearchFilter) -> PredicateSet:
        return (
            cls(entity)
            .created_between(search.date_range)
            .price_between(search.price_range)
            .intersects(search.area)
        )

    def _column(self, name: str | None, purpose: str) -> ColumnElement[Any]:
        if name is None:
            msg = f"{self.entity.name} does not support {purpose} filtering"
            raise ValueError(msg)
        return self.entity.table.c[name]

    def _with(self, *clauses: ColumnElement[bool]) -> PredicateSet:
        if not clauses:
            return self
        return replace(self, clauses=self.clauses + clauses)

    def created_between(self, date_range: DateRange | None) -> PredicateSet:
        if date_range is None:
            return self
        col = self._column(self.entity.created_column, "date range")
        new: list[ColumnElement[bool]] = []
        if date_range.start_text is not None:
            new.append(col >= date_range.start_text)
        if date_range.end_text is not None:
            new.append(col <= date_range.end_text)
        return self._with(*new)

    def price_between(self, price_range: PriceRange | None) -> PredicateSet:
        if price_range is None:
            return self
        col = self._column(self.entity.price_column, "price range")
        new: list[ColumnElement[bool]] = []
        if price_range.minimum is not None:
            new.append(func.DECIMAL_CMP(col, format_price(price_range.minimum)) >= 0)
        if price_range.maximum is not None:
            new.append(func.DECIMAL_CMP(col, format_price(price_range.maximum)) <= 0)
        return self._with(*new)

    def intersects(self, area: AreaFilter | None) -> PredicateSet:
        if area is None:
            return self
        col = self._column(self.entity.geometry_column, "spatial")
        return self._with(func.ST_Intersects(col, area.geojson) == 1)

    def key_equals(self, value: str | None) -> PredicateSet:
        if value is None:
            return self
        return self._with(self.entity.table.c[self.entity.key_column] == value)

    def _filtered(self, stmt: Select[Any]) -> Select[Any]:
        if self.clauses:
            stmt = stmt.where(and_(*self.clauses))
        return stmt

    def count_statement(self) -> Select[Any]:
        """Count every matching row, ignoring pagination."""
        return self._filtered(select(func.count()).select_from(self.entity.table))

    def page_statement(self, window: PageWindow) -> Select[Any]:
        """Fetch one stably ordered page of matching rows."""
        cols = self.entity.table.c
        stmt = self._filtered(select(*(cols[name] for name in self.entity.columns)))
        return stmt.order_by(*self.entity.ordering()).limit(window.limit).offset(window.offset)


def fetch_page(conn: Connection, predicates: PredicateSet, window: PageWindow) -> Page:
    """Run the count and page statements of *predicates* on one connection."""
    total = int(conn.execute(predicates.count_statement()).scalar_one() or 0)
    if total == 0 or window.offset >= total:
        return Page(total=total)
    rows = conn.execute(predicates.page_statement(window)).mappings().all()
    return Page(total=total, rows=[dict(row) for row in rows])
