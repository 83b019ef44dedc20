"""Repositories — SQL encapsulation for catalog images and orders."""

from satorder.infrastructure.repositories.catalog import CatalogRepository
from satorder.infrastructure.repositories.filters import (
    IMAGES,
    ORDERS,
    EntitySpec,
    Page,
    PredicateSet,
    fetch_page,
)
from satorder.infrastructure.repositories.orders import OrderRepository

__all__ = [
    "IMAGES",
    "ORDERS",
    "CatalogRepository",
    "EntitySpec",
    "OrderRepository",
    "Page",
    "PredicateSet",
    "fetch_page",
]
