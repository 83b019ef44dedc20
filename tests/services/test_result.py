"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from satorder.services.result import ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="get_image", data={"catalog_id": "A"})
        assert result.warnings == []
        assert result.error is None
        assert result.code is None
        assert result.meta is None

    def test_failure_builds_error(self) -> None:
        result = ServiceResult.failure(
            "create_order", "IMAGE_NOT_FOUND", "Image not found: X", {"image_id": "X"}
        )
        assert not result.ok
        assert result.op == "create_order"
        assert result.code == "IMAGE_NOT_FOUND"
        assert result.error is not None
        assert result.error.detail == {"image_id": "X"}
        assert result.data == {}

    def test_failure_detail_defaults_empty(self) -> None:
        result = ServiceResult.failure("list_orders", "STORE_FAILURE", "Internal server error")
        assert result.error is not None
        assert result.error.detail == {}

    def test_json_leaves_out_code_property(self) -> None:
        result = ServiceResult.failure("get_image", "NOT_FOUND", "Image not found: A")
        parsed = json.loads(result.model_dump_json())
        assert "code" not in parsed
        assert parsed["error"]["code"] == "NOT_FOUND"

    def test_json_carries_meta(self) -> None:
        result = ServiceResult(ok=True, op="search_images", data={"total": 2}, meta={"x": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["total"] == 2
        assert parsed["meta"]["x"] == 1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="search_images")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
