"""Tests for ImageService — catalog search and lookup."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from satorder.infrastructure.repositories import CatalogRepository
from satorder.infrastructure.store import Store
from satorder.services.images import ImageService

Square = Callable[..., dict[str, Any]]


class TestSearch:
    def test_unfiltered(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).search()
        assert result.ok
        assert [item["catalog_id"] for item in result.data["items"]] == ["A", "B", "C"]
        assert result.data["total"] == 3
        assert result.data["page"] == 1
        assert result.data["limit"] == 5
        assert result.data["total_pages"] == 1

    def test_start_date_example(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).search(start_date="2025-01-10")
        assert result.ok
        assert [item["catalog_id"] for item in result.data["items"]] == ["B", "C"]
        assert result.data["total"] == 2

    def test_end_date_includes_whole_day(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).search(end_date="2025-01-15")
        assert [item["catalog_id"] for item in result.data["items"]] == ["A", "B"]

    def test_item_shape(self, store: Store, catalog: list[str]) -> None:
        item = ImageService(store).search(limit=1).data["items"][0]
        assert set(item) == {"catalog_id", "geometry", "created_at"}
        assert item["geometry"]["type"] == "Polygon"
        assert item["created_at"] == "2025-01-01T00:00:00.000000Z"

    def test_overlapping_area_matches(self, store: Store, catalog: list[str], square: Square) -> None:
        result = ImageService(store).search(area=json.dumps(square(20.5, 20.5)))
        assert [item["catalog_id"] for item in result.data["items"]] == ["C"]

    def test_disjoint_area_matches_nothing(
        self, store: Store, catalog: list[str], square: Square
    ) -> None:
        result = ImageService(store).search(area=json.dumps(square(-50, -50)))
        assert result.ok
        assert result.data["items"] == []
        assert result.data["total"] == 0
        assert result.data["total_pages"] == 1

    def test_pages_cover_total_without_duplicates(self, store: Store, catalog: list[str]) -> None:
        svc = ImageService(store)
        first = svc.search(limit=2)
        total_pages = first.data["total_pages"]
        ids: list[str] = []
        for page in range(1, total_pages + 1):
            ids.extend(item["catalog_id"] for item in svc.search(page=page, limit=2).data["items"])
        assert len(ids) == first.data["total"]
        assert len(set(ids)) == len(ids)

    def test_page_past_end_is_empty(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).search(page=9)
        assert result.ok
        assert result.data["items"] == []
        assert result.data["total"] == 3

    def test_configured_default_limit(self, tmp_path: Path, catalog: list[str]) -> None:
        from satorder.config.settings import SatSettings

        settings = SatSettings.from_cli(project_root=tmp_path, pagination={"default_limit": 2})
        other = Store(settings)
        try:
            assert ImageService(other).search().data["limit"] == 2
        finally:
            other.close()

    @pytest.mark.parametrize(
        ("kwargs", "code"),
        [
            ({"page": 0}, "INVALID_PAGINATION"),
            ({"limit": "-3"}, "INVALID_PAGINATION"),
            ({"limit": 10**20}, "INVALID_PAGINATION"),
            ({"page": 10**20}, "INVALID_PAGINATION"),
            ({"area": "not-geojson"}, "INVALID_GEOMETRY"),
            ({"start_date": "0001-01-01T00:00:00+01:00"}, "INVALID_INPUT"),
            ({"start_date": "soon"}, "INVALID_INPUT"),
            ({"start_date": "2025-02-01", "end_date": "2025-01-01"}, "INVALID_INPUT"),
        ],
    )
    def test_invalid_input_never_reaches_store(
        self, store: Store, kwargs: dict[str, Any], code: str
    ) -> None:
        with patch.object(CatalogRepository, "search") as search:
            result = ImageService(store).search(**kwargs)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == code
        search.assert_not_called()

    def test_store_failure_is_opaque(self, store: Store) -> None:
        boom = OperationalError("SELECT secret", {}, Exception("disk I/O error"))
        with patch.object(CatalogRepository, "search", side_effect=boom):
            result = ImageService(store).search()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "STORE_FAILURE"
        assert "SELECT" not in result.error.message

    def test_lock_timeout_is_unavailable(self, store: Store) -> None:
        locked = OperationalError("SELECT 1", {}, Exception("database is locked"))
        with patch.object(CatalogRepository, "search", side_effect=locked):
            result = ImageService(store).search()
        assert result.error is not None
        assert result.error.code == "SERVICE_UNAVAILABLE"


class TestGet:
    def test_found(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).get("C")
        assert result.ok
        assert result.data["catalog_id"] == "C"
        assert result.data["geometry"]["coordinates"][0][0] == [20.0, 20.0]

    def test_not_found(self, store: Store, catalog: list[str]) -> None:
        result = ImageService(store).get("nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"catalog_id": "nope"}

    def test_blank_id_rejected(self, store: Store) -> None:
        result = ImageService(store).get("  ")
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"
