"""Repository for order listings and inserts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert

from satorder.domain.pagination import PageWindow
from satorder.infrastructure.database.schema import orders
from satorder.infrastructure.repositories.filters import (
    ORDERS,
    Page,
    PredicateSet,
    fetch_page,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from satorder.domain.search import SearchFilter

_SINGLE_ROW = PageWindow(page=1, limit=1)


class OrderRepository:
    """Encapsulates SQL for order reads and writes."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list(self, search: SearchFilter) -> Page:
        """Count and fetch one page of orders, most recent first."""
        predicates = PredicateSet.from_filter(ORDERS, search)
        with self._engine.connect() as conn:
            return fetch_page(conn, predicates, search.window)

    def get(self, order_id: str) -> dict[str, Any] | None:
        """Fetch one order row by id."""
        stmt = PredicateSet(ORDERS).key_equals(order_id).page_statement(_SINGLE_ROW)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def insert(self, row: dict[str, Any]) -> None:
        """Insert one order in its own transaction.

        The ``image_id`` foreign key is enforced by the store; a missing
        image raises :class:`sqlalchemy.exc.IntegrityError` and nothing is
        written.
        """
        with self._engine.begin() as conn:
            conn.execute(insert(orders).values(**row))
