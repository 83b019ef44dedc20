"""Tests for CatalogRepository."""

from __future__ import annotations

import json

from satorder.domain.search import build_search_filter
from satorder.infrastructure.repositories import CatalogRepository
from satorder.infrastructure.store import Store


class TestCatalogRepository:
    def test_count(self, store: Store, catalog: list[str]) -> None:
        assert CatalogRepository(store.engine).count() == 3

    def test_get_returns_row(self, store: Store, catalog: list[str]) -> None:
        row = CatalogRepository(store.engine).get("B")
        assert row is not None
        assert row["created_at"] == "2025-01-15T00:00:00.000000Z"
        assert json.loads(row["coverage_area"])["type"] == "Polygon"

    def test_get_is_exact_match(self, store: Store, catalog: list[str]) -> None:
        repo = CatalogRepository(store.engine)
        assert repo.get("b") is None
        assert repo.get("missing") is None

    def test_search_unfiltered_ordered_by_id(self, store: Store, catalog: list[str]) -> None:
        page = CatalogRepository(store.engine).search(build_search_filter())
        assert page.total == 3
        assert [row["catalog_id"] for row in page.rows] == ["A", "B", "C"]

    def test_existing_ids(self, store: Store, catalog: list[str]) -> None:
        repo = CatalogRepository(store.engine)
        assert repo.existing_ids(["A", "Z", "C"]) == {"A", "C"}
        assert repo.existing_ids([]) == set()
