"""Read-oriented repository for the satellite image catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select

from satorder.domain.pagination import PageWindow
from satorder.infrastructure.database.schema import satellite_images
from satorder.infrastructure.repositories.filters import (
    IMAGES,
    Page,
    PredicateSet,
    fetch_page,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from satorder.domain.search import SearchFilter

_SINGLE_ROW = PageWindow(page=1, limit=1)


class CatalogRepository:
    """Encapsulates SQL for catalog image lookups and searches."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def count(self) -> int:
        """Count all catalog images."""
        with self._engine.connect() as conn:
            return int(conn.execute(PredicateSet(IMAGES).count_statement()).scalar_one())

    def search(self, search: SearchFilter) -> Page:
        """Count and fetch one page of images matching *search*."""
        predicates = PredicateSet.from_filter(IMAGES, search)
        with self._engine.connect() as conn:
            return fetch_page(conn, predicates, search.window)

    def get(self, catalog_id: str) -> dict[str, Any] | None:
        """Fetch one image row by exact catalog id."""
        stmt = PredicateSet(IMAGES).key_equals(catalog_id).page_statement(_SINGLE_ROW)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def existing_ids(self, catalog_ids: list[str]) -> set[str]:
        """Return the subset of *catalog_ids* already present in the catalog."""
        if not catalog_ids:
            return set()
        stmt = select(satellite_images.c.catalog_id).where(
            satellite_images.c.catalog_id.in_(catalog_ids)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return {str(row.catalog_id) for row in rows}

    @staticmethod
    def insert(conn: Connection, row: dict[str, Any]) -> None:
        """Insert one image row on a caller-owned transaction."""
        conn.execute(insert(satellite_images).values(**row))

