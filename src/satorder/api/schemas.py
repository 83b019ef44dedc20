"""Wire models. Field names are snake_case in Python and camelCase on the wire."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ImageOut(CamelModel):
    catalog_id: str
    geometry: dict[str, Any]
    created_at: str


class OrderOut(CamelModel):
    id: str
    image_id: str
    price: str = Field(description="Exact decimal, serialized as a string.")
    created_at: str


class PageMeta(CamelModel):
    total: int
    current_page: int
    total_pages: int
    limit: int

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> PageMeta:
        return cls(
            total=data["total"],
            current_page=data["page"],
            total_pages=data["total_pages"],
            limit=data["limit"],
        )


class ImagePage(CamelModel):
    data: list[ImageOut]
    metadata: PageMeta


class ImageEnvelope(CamelModel):
    data: ImageOut


class OrderPage(CamelModel):
    data: list[OrderOut]
    metadata: PageMeta


class OrderEnvelope(CamelModel):
    data: OrderOut


class OrderCreate(CamelModel):
    """POST /orders body. Values are checked by the order service, not here."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=False, extra="forbid")

    image_id: Any = None
    price: Any = None


class Welcome(BaseModel):
    message: str
    version: str
    status: str


class Health(BaseModel):
    status: str
