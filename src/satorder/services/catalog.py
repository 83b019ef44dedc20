"""CatalogService — insert-only catalog ingestion.

Images are immutable once ingested: a record whose catalog id already
exists is skipped with a warning, never overwritten. Every record is
validated before anything is written, and all new rows are inserted in
one transaction.

Accepted record shape (``images.json`` style)::

    {"catalogID": "103401008B2340",
     "geometry": {"type": "Polygon", "coordinates": [...]},
     "createdAt": "2025-01-30T11:30:00Z"}

``catalogId`` / ``catalog_id`` and ``coverageArea`` are accepted as
aliases; ``createdAt`` defaults to the ingestion time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from satorder.domain.errors import InvalidInput, ValidationError
from satorder.domain.geometry import parse_polygon, polygon_to_geojson
from satorder.domain.ids import normalize_catalog_id
from satorder.domain.timestamps import format_timestamp, parse_timestamp, utc_now
from satorder.infrastructure.repositories import CatalogRepository
from satorder.services.base import BaseService
from satorder.services.result import ServiceResult
from satorder.services.telemetry import trace_span, traced

_ID_KEYS = ("catalogID", "catalogId", "catalog_id")
_GEOMETRY_KEYS = ("geometry", "coverageArea", "coverage_area")

# Demo catalog entry shipped with the service (Munich, 2025-01-30).
SAMPLE_CATALOG: list[dict[str, Any]] = [
    {
        "catalogID": "103401008B2340",
        "geometry": {
            "type": "Polygon",
            "coordinates": [
                [
                    [11.55925345655993, 48.15521738088981],
                    [11.558316603320833, 48.15253338175748],
                    [11.562201667375433, 48.15208710581413],
                    [11.566757031985645, 48.15342932937514],
                    [11.566756986040389, 48.156020777339506],
                    [11.55925345655993, 48.15521738088981],
                ]
            ],
        },
        "createdAt": "2025-01-30T11:30:00Z",
    },
]


def _first(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def catalog_row(record: object, *, ingested_at: str) -> dict[str, str]:
    """Validate one ingestion record into a ``satellite_images`` row."""
    if not isinstance(record, Mapping):
        raise InvalidInput("Catalog record must be an object")

    catalog_id = normalize_catalog_id(_first(record, _ID_KEYS), field="catalogID")

    geometry = _first(record, _GEOMETRY_KEYS)
    if geometry is None:
        raise InvalidInput("geometry is required", field="geometry")
    polygon = parse_polygon(geometry, field="geometry")

    created_raw = record.get("createdAt")
    if created_raw is None:
        created_at = ingested_at
    elif isinstance(created_raw, str):
        created_at = format_timestamp(parse_timestamp(created_raw, field="createdAt"))
    else:
        raise InvalidInput("createdAt must be an ISO 8601 string", field="createdAt")

    return {
        "catalog_id": catalog_id,
        "coverage_area": polygon_to_geojson(polygon),
        "created_at": created_at,
    }


class CatalogService(BaseService):
    """Loads catalog images into the store."""

    @traced
    def ingest(self, records: Sequence[object]) -> ServiceResult:
        """Validate all *records*, then insert the ones not yet in the catalog."""
        op = "ingest_catalog"
        ingested_at = format_timestamp(utc_now())
        warnings: list[str] = []

        rows: list[dict[str, str]] = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                row = catalog_row(record, ingested_at=ingested_at)
            except ValidationError as exc:
                return ServiceResult.failure(
                    op,
                    exc.code,
                    f"Record {index}: {exc.message}",
                    {"index": index, **exc.to_detail()},
                )
            if row["catalog_id"] in seen:
                warnings.append(f"Duplicate catalog id in input skipped: {row['catalog_id']}")
                continue
            seen.add(row["catalog_id"])
            rows.append(row)

        repo = CatalogRepository(self._store.engine)
        try:
            with trace_span("existence_check") as span:
                existing = repo.existing_ids([row["catalog_id"] for row in rows])
                if span is not None:
                    span.annotate("existing", len(existing))
            new_rows = [row for row in rows if row["catalog_id"] not in existing]
            with trace_span("insert") as span, self._store.transaction() as conn:
                for row in new_rows:
                    repo.insert(conn, row)
                if span is not None:
                    span.annotate("rows", len(new_rows))
            catalog_size = repo.count()
        except SQLAlchemyError as exc:
            return self._store_failure(op, exc, records=len(rows))

        for catalog_id in sorted(existing):
            warnings.append(f"Image already in catalog, left unchanged: {catalog_id}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "inserted": len(new_rows),
                "skipped": len(existing),
                "ids": [row["catalog_id"] for row in new_rows],
                "catalog_size": catalog_size,
            },
            warnings=warnings,
        )

    def seed(self) -> ServiceResult:
        """Ingest the bundled sample catalog."""
        return self.ingest(SAMPLE_CATALOG).model_copy(update={"op": "seed_catalog"})
