"""Tests for the Store handle."""

from __future__ import annotations

import pytest
from sqlalchemy import insert, select

from satorder.config.settings import SatSettings
from satorder.infrastructure.database.schema import satellite_images
from satorder.infrastructure.store import Store


class TestStore:
    def test_database_under_project_root(self, settings: SatSettings) -> None:
        s = Store(settings)
        try:
            assert s.db_path == settings.project_root / ".satorder" / "satorder.db"
            assert s.db_path.exists()
        finally:
            s.close()

    def test_ping(self, store: Store) -> None:
        store.ping()

    def test_transaction_rolls_back_on_error(self, store: Store) -> None:
        row = {
            "catalog_id": "R",
            "coverage_area": "{}",
            "created_at": "2025-01-01T00:00:00.000000Z",
        }
        with pytest.raises(RuntimeError), store.transaction() as conn:
            conn.execute(insert(satellite_images).values(**row))
            raise RuntimeError("abort")

        with store.engine.connect() as conn:
            assert conn.execute(select(satellite_images.c.catalog_id)).first() is None
