"""OrderService — order placement and order history.

Placement pipeline: VALIDATE → CHECK IMAGE → STAMP → INSERT

The image check gives callers a clear ``IMAGE_NOT_FOUND``; the foreign
key on ``orders.image_id`` remains the final authority. If the image
disappears between the check and the insert, the constraint violation is
reported as the same ``IMAGE_NOT_FOUND`` and nothing is persisted.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from satorder.domain.errors import ValidationError
from satorder.domain.ids import generate_order_id, normalize_catalog_id
from satorder.domain.money import format_price, parse_price
from satorder.domain.search import build_search_filter
from satorder.domain.timestamps import format_timestamp, utc_now
from satorder.infrastructure.repositories import OrderRepository
from satorder.services.base import BaseService
from satorder.services.images import NOT_FOUND, ImageService
from satorder.services.result import ServiceResult
from satorder.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"


def order_item(row: dict[str, Any]) -> dict[str, Any]:
    """Response shape for one order row."""
    return {
        "id": row["id"],
        "image_id": row["image_id"],
        "price": row["price"],
        "created_at": row["created_at"],
    }


def _image_not_found(op: str, catalog_id: str) -> ServiceResult:
    return ServiceResult.failure(
        op, IMAGE_NOT_FOUND, f"Image not found: {catalog_id}", {"image_id": catalog_id}
    )


class OrderService(BaseService):
    """Places orders against catalog images and lists order history."""

    @traced
    def create(self, image_id: object, price: object) -> ServiceResult:
        """Place an order for one catalog image.

        The id and ``created_at`` are always assigned server-side.
        """
        op = "create_order"
        try:
            catalog_id = normalize_catalog_id(image_id, field="imageId")
            amount = parse_price(price)
        except ValidationError as exc:
            return self._invalid(op, exc)

        lookup = ImageService(self._store).get(catalog_id)
        if not lookup.ok:
            if lookup.code == NOT_FOUND:
                return _image_not_found(op, catalog_id)
            return lookup.model_copy(update={"op": op, "meta": None})

        row = {
            "id": generate_order_id(),
            "image_id": catalog_id,
            "price": format_price(amount),
            "created_at": format_timestamp(utc_now()),
        }
        try:
            OrderRepository(self._store.engine).insert(row)
        except IntegrityError:
            logger.info("Order rejected by image foreign key: %s", catalog_id)
            return _image_not_found(op, catalog_id)
        except SQLAlchemyError as exc:
            return self._store_failure(op, exc, image_id=catalog_id, order_id=row["id"])

        logger.debug("Created order %s for image %s", row["id"], catalog_id)
        return ServiceResult(ok=True, op=op, data=order_item(row))

    @traced
    def list(
        self,
        *,
        page: object = None,
        limit: object = None,
        min_price: object = None,
        max_price: object = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> ServiceResult:
        """Paginated order history, most recent first.

        Price bounds are inclusive and compared as exact decimals.
        """
        op = "list_orders"
        try:
            search = build_search_filter(
                page=page,
                limit=limit,
                start_date=start_date,
                end_date=end_date,
                min_price=min_price,
                max_price=max_price,
                default_limit=self._store.settings.pagination.default_limit,
                max_limit=self._store.settings.pagination.max_limit,
            )
        except ValidationError as exc:
            return self._invalid(op, exc)

        window = search.window
        with trace_span("query") as span:
            try:
                page_rows = OrderRepository(self._store.engine).list(search)
            except SQLAlchemyError as exc:
                return self._store_failure(op, exc, page=window.page, limit=window.limit)
            if span is not None:
                span.annotate("total", page_rows.total)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": [order_item(row) for row in page_rows.rows],
                "total": page_rows.total,
                "page": window.page,
                "limit": window.limit,
                "total_pages": window.total_pages(page_rows.total),
            },
        )
