"""Fixtures for HTTP API tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from satorder.api.app import create_app
from satorder.config.settings import SatSettings


@pytest.fixture
def client(settings: SatSettings) -> Generator[TestClient]:
    """API client over the temp project database (lifespan runs on enter)."""
    with TestClient(create_app(settings)) as c:
        yield c
