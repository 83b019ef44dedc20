"""Identifier rules.

- Catalog ids are opaque strings assigned by the catalog provider.
- Order ids are random UUID4 strings generated server-side.

INVARIANT: Ids are permanent. Records are never renamed.
"""

from __future__ import annotations

import uuid

from satorder.domain.errors import InvalidInput

MAX_CATALOG_ID_LENGTH = 255


def generate_order_id() -> str:
    return str(uuid.uuid4())


def normalize_catalog_id(raw: object, *, field: str = "imageId") -> str:
    """Return a stripped, non-empty catalog id or raise :class:`InvalidInput`."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput(f"{field} must be a non-empty string", field=field)
    value = raw.strip()
    if len(value) > MAX_CATALOG_ID_LENGTH:
        raise InvalidInput(
            f"{field} must be at most {MAX_CATALOG_ID_LENGTH} characters", field=field
        )
    return value
