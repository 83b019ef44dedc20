"""Tests for the application factory and error mapping."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from satorder.api.app import REQUEST_ID_HEADER, create_app
from satorder.api.errors import STATUS_BY_CODE, status_for
from satorder.config.logging import configure_logging
from satorder.config.settings import SatSettings
from satorder.infrastructure.repositories import CatalogRepository


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("code", "status"),
        [
            ("INVALID_INPUT", 400),
            ("INVALID_GEOMETRY", 400),
            ("INVALID_PAGINATION", 400),
            ("NOT_FOUND", 404),
            ("IMAGE_NOT_FOUND", 404),
            ("STORE_FAILURE", 500),
            ("SERVICE_UNAVAILABLE", 503),
        ],
    )
    def test_known_codes(self, code: str, status: int) -> None:
        assert status_for(code) == status

    def test_unknown_code_is_server_error(self) -> None:
        assert status_for("SOMETHING_ELSE") == 500
        assert "SOMETHING_ELSE" not in STATUS_BY_CODE


class TestCreateApp:
    def test_custom_prefix(self, tmp_path: Path) -> None:
        settings = SatSettings.from_cli(project_root=tmp_path, api={"prefix": "/v1/"})
        with TestClient(create_app(settings)) as client:
            assert client.get("/v1/health").status_code == 200
            assert client.get("/api/health").status_code == 404

    def test_cors_origins(self, tmp_path: Path) -> None:
        settings = SatSettings.from_cli(
            project_root=tmp_path, api={"cors_origins": ["http://localhost:5173"]}
        )
        with TestClient(create_app(settings)) as client:
            response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_lifespan_creates_database(self, tmp_path: Path) -> None:
        settings = SatSettings.from_cli(project_root=tmp_path)
        with TestClient(create_app(settings)):
            assert settings.database_path.exists()


class TestRequestContext:
    def test_request_id_echoed(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={REQUEST_ID_HEADER: "req-7"})
        assert response.headers[REQUEST_ID_HEADER] == "req-7"

    def test_request_id_generated(self, client: TestClient) -> None:
        first = client.get("/api/health").headers[REQUEST_ID_HEADER]
        second = client.get("/api/health").headers[REQUEST_ID_HEADER]
        assert len(first) == 32
        assert first != second

    def test_request_id_on_error_responses(self, client: TestClient) -> None:
        response = client.get("/api/images/missing", headers={REQUEST_ID_HEADER: "req-8"})
        assert response.status_code == 404
        assert response.headers[REQUEST_ID_HEADER] == "req-8"

    def test_store_failure_logged_with_request_context(
        self, client: TestClient, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True)
        capfd.readouterr()
        boom = OperationalError("SELECT secret", {}, Exception("disk I/O error"))
        with patch.object(CatalogRepository, "search", side_effect=boom):
            response = client.get("/api/images", headers={REQUEST_ID_HEADER: "req-42"})
        assert response.status_code == 500
        events = [
            json.loads(line) for line in capfd.readouterr().err.splitlines() if line.startswith("{")
        ]
        (failure,) = [e for e in events if e["event"] == "store.failure"]
        assert failure["request_id"] == "req-42"
        assert failure["method"] == "GET"
        assert failure["path"] == "/api/images"
        assert failure["op"] == "search_images"
