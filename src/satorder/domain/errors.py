"""Validation error taxonomy.

Domain parsers raise these; services convert them into a failed
ServiceResult carrying ``code`` before touching the store.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Client-side input error. Always surfaced as a 400-class failure."""

    code = "INVALID_INPUT"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_detail(self) -> dict[str, str]:
        return {"field": self.field} if self.field else {}


class InvalidInput(ValidationError):
    """Malformed or missing required field."""

    code = "INVALID_INPUT"


class InvalidGeometry(ValidationError):
    """Unparsable polygon, or a polygon outside the WGS84 reference system."""

    code = "INVALID_GEOMETRY"


class InvalidPagination(ValidationError):
    """Page or limit below 1."""

    code = "INVALID_PAGINATION"
