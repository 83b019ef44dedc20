"""ImageService — catalog search and exact lookup.

Both operations validate every input before the first store round-trip;
a rejected request never touches the database.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from satorder.domain.errors import InvalidInput, ValidationError
from satorder.domain.geometry import geojson_to_dict
from satorder.domain.search import build_search_filter
from satorder.infrastructure.repositories import CatalogRepository
from satorder.services.base import BaseService
from satorder.services.result import ServiceResult
from satorder.services.telemetry import trace_span, traced

NOT_FOUND = "NOT_FOUND"


def image_item(row: dict[str, Any]) -> dict[str, Any]:
    """Response shape for one catalog row (only the public columns)."""
    return {
        "catalog_id": row["catalog_id"],
        "geometry": geojson_to_dict(row["coverage_area"]),
        "created_at": row["created_at"],
    }


class ImageService(BaseService):
    """Searches the image catalog by date range and area of interest."""

    @traced
    def search(
        self,
        *,
        page: object = None,
        limit: object = None,
        start_date: str | None = None,
        end_date: str | None = None,
        area: str | None = None,
    ) -> ServiceResult:
        """Paginated catalog search.

        Args:
            page: 1-based page number (untrusted; defaults to 1).
            limit: Page size (untrusted; defaults to the configured limit).
            start_date: Inclusive lower bound on ``created_at``.
            end_date: Inclusive upper bound on ``created_at``; a bare date
                covers that whole day.
            area: GeoJSON Polygon text; images whose coverage intersects it
                are kept.
        """
        op = "search_images"
        with trace_span("validate"):
            try:
                search = build_search_filter(
                    page=page,
                    limit=limit,
                    start_date=start_date,
                    end_date=end_date,
                    area=area,
                    default_limit=self._store.settings.pagination.default_limit,
                    max_limit=self._store.settings.pagination.max_limit,
                )
            except ValidationError as exc:
                return self._invalid(op, exc)

        window = search.window
        with trace_span("query") as span:
            try:
                page_rows = CatalogRepository(self._store.engine).search(search)
            except SQLAlchemyError as exc:
                return self._store_failure(
                    op,
                    exc,
                    page=window.page,
                    limit=window.limit,
                    spatial=search.area is not None,
                )
            if span is not None:
                span.annotate("total", page_rows.total)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": [image_item(row) for row in page_rows.rows],
                "total": page_rows.total,
                "page": window.page,
                "limit": window.limit,
                "total_pages": window.total_pages(page_rows.total),
            },
        )

    @traced
    def get(self, catalog_id: str) -> ServiceResult:
        """Retrieve one image by exact catalog id."""
        op = "get_image"
        if not isinstance(catalog_id, str) or not catalog_id.strip():
            return self._invalid(op, InvalidInput("id must be a non-empty string", field="id"))

        try:
            row = CatalogRepository(self._store.engine).get(catalog_id)
        except SQLAlchemyError as exc:
            return self._store_failure(op, exc, catalog_id=catalog_id)

        if row is None:
            return ServiceResult.failure(
                op, NOT_FOUND, f"Image not found: {catalog_id}", {"catalog_id": catalog_id}
            )
        return ServiceResult(ok=True, op=op, data=image_item(row))
