"""SQL functions registered on every SQLite connection.

- ``ST_Intersects(a, b)``: 1 when two GeoJSON polygons share any boundary
  or interior point, else 0. Both sides are WGS84 (SRID 4326).
- ``DECIMAL_CMP(a, b)``: -1/0/1 comparison of two decimal strings with
  :class:`~decimal.Decimal` semantics.

SQLite has no spatial or decimal types, so these give the query builder
store-side predicates that both the count and the page query evaluate.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from shapely.geometry import shape


def st_intersects(left: str | None, right: str | None) -> int | None:
    if left is None or right is None:
        return None
    return int(shape(json.loads(left)).intersects(shape(json.loads(right))))


def decimal_cmp(left: Any, right: Any) -> int | None:
    if left is None or right is None:
        return None
    a, b = Decimal(str(left)), Decimal(str(right))
    return (a > b) - (a < b)


def register_functions(dbapi_conn: Any) -> None:
    """Attach satorder's SQL functions to a raw ``sqlite3`` connection."""
    dbapi_conn.create_function("ST_Intersects", 2, st_intersects, deterministic=True)
    dbapi_conn.create_function("DECIMAL_CMP", 2, decimal_cmp, deterministic=True)
