"""Tests for OrderRepository."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.exc import IntegrityError

from satorder.domain.search import build_search_filter
from satorder.infrastructure.repositories import OrderRepository
from satorder.infrastructure.store import Store

AddOrder = Callable[..., dict[str, Any]]


class TestOrderRepository:
    def test_insert_and_get(self, store: Store, catalog: list[str], add_order: AddOrder) -> None:
        add_order("o-1", "A", "10.50", "2025-03-01T00:00:00.000000Z")
        row = OrderRepository(store.engine).get("o-1")
        assert row == {
            "id": "o-1",
            "image_id": "A",
            "price": "10.50",
            "created_at": "2025-03-01T00:00:00.000000Z",
        }

    def test_insert_unknown_image_raises(self, store: Store, add_order: AddOrder) -> None:
        with pytest.raises(IntegrityError):
            add_order("o-1", "missing", "10", "2025-03-01T00:00:00.000000Z")
        assert OrderRepository(store.engine).get("o-1") is None

    def test_list_most_recent_first_with_id_tiebreak(
        self, store: Store, catalog: list[str], add_order: AddOrder
    ) -> None:
        add_order("b", "A", "1", "2025-03-01T00:00:00.000000Z")
        add_order("a", "A", "1", "2025-03-01T00:00:00.000000Z")
        add_order("c", "A", "1", "2025-03-02T00:00:00.000000Z")
        page = OrderRepository(store.engine).list(build_search_filter())
        assert [row["id"] for row in page.rows] == ["c", "a", "b"]

    def test_price_filter_is_numeric(
        self, store: Store, catalog: list[str], add_order: AddOrder
    ) -> None:
        add_order("cheap", "A", "9", "2025-03-01T00:00:00.000000Z")
        add_order("mid", "A", "10.00", "2025-03-02T00:00:00.000000Z")
        add_order("dear", "A", "100", "2025-03-03T00:00:00.000000Z")
        page = OrderRepository(store.engine).list(
            build_search_filter(min_price="10", max_price="99.99")
        )
        assert page.total == 1
        assert [row["id"] for row in page.rows] == ["mid"]
