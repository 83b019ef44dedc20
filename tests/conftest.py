"""Shared pytest fixtures for satorder tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from satorder.config.settings import SatSettings
from satorder.infrastructure.store import Store
from satorder.services.telemetry import disable_telemetry

SquareFactory = Callable[..., dict[str, Any]]


@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep CLI invocations from leaking logging handlers, telemetry, or config env."""
    monkeypatch.delenv("SATORDER_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    disable_telemetry()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> SatSettings:
    """Settings rooted at a temp project directory (database under .satorder/)."""
    return SatSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def store(settings: SatSettings) -> Generator[Store]:
    """Store with all tables created."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def square() -> SquareFactory:
    """Factory for axis-aligned GeoJSON square polygons."""

    def make(lon: float, lat: float, size: float = 1.0) -> dict[str, Any]:
        return {
            "type": "Polygon",
            "coordinates": [
                [
                    [lon, lat],
                    [lon + size, lat],
                    [lon + size, lat + size],
                    [lon, lat + size],
                    [lon, lat],
                ]
            ],
        }

    return make


@pytest.fixture
def catalog(store: Store, square: SquareFactory) -> list[str]:
    """Three images A, B, C at 2025-01-01, 2025-01-15, 2025-02-01.

    A and B cover the square (10, 10)-(11, 11); C covers (20, 20)-(21, 21).
    """
    from satorder.services.catalog import CatalogService

    result = CatalogService(store).ingest(
        [
            {"catalogID": "A", "geometry": square(10, 10), "createdAt": "2025-01-01T00:00:00Z"},
            {"catalogID": "B", "geometry": square(10, 10), "createdAt": "2025-01-15T00:00:00Z"},
            {"catalogID": "C", "geometry": square(20, 20), "createdAt": "2025-02-01T00:00:00Z"},
        ]
    )
    assert result.ok, result.error
    return ["A", "B", "C"]


@pytest.fixture
def add_order(store: Store) -> Callable[..., dict[str, Any]]:
    """Insert an order row directly, with a chosen id, price, and timestamp."""
    from satorder.infrastructure.repositories import OrderRepository

    def add(order_id: str, image_id: str, price: str, created_at: str) -> dict[str, Any]:
        row = {"id": order_id, "image_id": image_id, "price": price, "created_at": created_at}
        OrderRepository(store.engine).insert(row)
        return row

    return add
