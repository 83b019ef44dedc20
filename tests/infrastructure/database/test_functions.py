"""Tests for the SQL functions registered on each connection."""

from __future__ import annotations

import json

import pytest
from sqlalchemy import text

from satorder.infrastructure.database.functions import decimal_cmp, st_intersects
from satorder.infrastructure.store import Store


def _square(lon: float, lat: float, size: float = 1.0) -> str:
    ring = [[lon, lat], [lon + size, lat], [lon + size, lat + size], [lon, lat + size], [lon, lat]]
    return json.dumps({"type": "Polygon", "coordinates": [ring]})


class TestStIntersects:
    def test_overlap(self) -> None:
        assert st_intersects(_square(0, 0), _square(0.5, 0.5)) == 1

    def test_touching_corner(self) -> None:
        assert st_intersects(_square(0, 0), _square(1, 1)) == 1

    def test_disjoint(self) -> None:
        assert st_intersects(_square(0, 0), _square(5, 5)) == 0

    def test_contained(self) -> None:
        assert st_intersects(_square(0, 0, 10), _square(2, 2)) == 1

    def test_null_propagates(self) -> None:
        assert st_intersects(None, _square(0, 0)) is None


class TestDecimalCmp:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [("10", "9.99", 1), ("9.99", "10", -1), ("10.00", "10", 0), ("0.1", "0.10", 0)],
    )
    def test_compare(self, left: str, right: str, expected: int) -> None:
        assert decimal_cmp(left, right) == expected

    def test_lexical_order_is_not_used(self) -> None:
        # "9" > "10" as text, but not as a number
        assert decimal_cmp("9", "10") == -1

    def test_null_propagates(self) -> None:
        assert decimal_cmp(None, "1") is None


class TestRegisteredInSql:
    def test_callable_from_sql(self, store: Store) -> None:
        with store.engine.connect() as conn:
            hit = conn.execute(
                text("SELECT ST_Intersects(:a, :b)"),
                {"a": _square(0, 0), "b": _square(0.5, 0.5)},
            ).scalar()
        assert hit == 1
