"""Route handlers: parse query/body → call service → map to wire models.

Handlers are plain ``def`` functions; FastAPI runs them in its thread
pool, which suits the blocking SQLAlchemy engine underneath.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from satorder.api.errors import ApiError
from satorder.api.schemas import (
    Health,
    ImageEnvelope,
    ImageOut,
    ImagePage,
    OrderCreate,
    OrderEnvelope,
    OrderOut,
    OrderPage,
    PageMeta,
)
from satorder.domain.errors import InvalidInput
from satorder.infrastructure.store import Store
from satorder.services.images import ImageService
from satorder.services.orders import OrderService
from satorder.services.result import ServiceResult

router = APIRouter()


def get_store(request: Request) -> Store:
    """The store opened by the app lifespan."""
    return request.app.state.store


def allow_params(*allowed: str) -> Callable[[Request], None]:
    """Dependency rejecting query parameters outside *allowed*."""
    permitted = frozenset(allowed)

    def check(request: Request) -> None:
        unknown = sorted(set(request.query_params) - permitted)
        if unknown:
            raise ApiError(InvalidInput.code, f"Unknown query parameter(s): {', '.join(unknown)}")

    return check


def _unwrap(result: ServiceResult) -> dict:
    if not result.ok:
        raise ApiError.from_result(result)
    return result.data


@router.get("/health", response_model=Health, responses={503: {"model": Health}})
def health(store: Store = Depends(get_store)) -> Health | JSONResponse:
    try:
        store.ping()
    except SQLAlchemyError:
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return Health(status="ok")


@router.get(
    "/images",
    response_model=ImagePage,
    dependencies=[Depends(allow_params("page", "limit", "startDate", "endDate", "area"))],
    summary="Search the image catalog",
)
def search_images(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    area: str | None = Query(None, description="GeoJSON Polygon (EPSG:4326)."),
    store: Store = Depends(get_store),
) -> ImagePage:
    """Images whose coverage intersects *area* within the date range, by catalog id."""
    data = _unwrap(
        ImageService(store).search(
            page=page,
            limit=limit,
            start_date=start_date,
            end_date=end_date,
            area=area,
        )
    )
    return ImagePage(
        data=[ImageOut(**item) for item in data["items"]],
        metadata=PageMeta.from_data(data),
    )


@router.get(
    "/images/{catalog_id}",
    response_model=ImageEnvelope,
    dependencies=[Depends(allow_params())],
)
def get_image(catalog_id: str, store: Store = Depends(get_store)) -> ImageEnvelope:
    data = _unwrap(ImageService(store).get(catalog_id))
    return ImageEnvelope(data=ImageOut(**data))


@router.get(
    "/orders",
    response_model=OrderPage,
    dependencies=[
        Depends(
            allow_params("page", "limit", "minPrice", "maxPrice", "startDate", "endDate")
        )
    ],
    summary="List orders, most recent first",
)
def list_orders(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: Store = Depends(get_store),
) -> OrderPage:
    data = _unwrap(
        OrderService(store).list(
            page=page,
            limit=limit,
            min_price=min_price,
            max_price=max_price,
            start_date=start_date,
            end_date=end_date,
        )
    )
    return OrderPage(
        data=[OrderOut(**item) for item in data["items"]],
        metadata=PageMeta.from_data(data),
    )


@router.post(
    "/orders",
    response_model=OrderEnvelope,
    status_code=201,
    dependencies=[Depends(allow_params())],
    summary="Order a catalog image",
)
def create_order(body: OrderCreate, store: Store = Depends(get_store)) -> OrderEnvelope:
    data = _unwrap(OrderService(store).create(body.image_id, body.price))
    return OrderEnvelope(data=OrderOut(**data))
