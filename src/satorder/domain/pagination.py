"""Pagination policy shared by every listing endpoint.

Untrusted ``page``/``limit`` inputs are normalized into a :class:`PageWindow`:

- missing, blank, or unparsable values fall back to the defaults;
- a value that parses to an integer below 1 is rejected with
  :class:`InvalidPagination` (never silently clamped);
- so is a limit above the configured maximum, or a page whose offset
  does not fit a SQLite INTEGER.

Examples:
    >>> normalize("2", "2").offset
    2
    >>> total_pages(0, 5)
    1
"""

from __future__ import annotations

from dataclasses import dataclass

from satorder.domain.errors import InvalidPagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
MAX_LIMIT = 100

# LIMIT/OFFSET are bound as signed 64-bit integers.
SQLITE_MAX_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """A validated page request (``page >= 1``, ``limit >= 1``, offset within int64)."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidPagination("page must be >= 1", field="page")
        if self.limit < 1:
            raise InvalidPagination("limit must be >= 1", field="limit")
        if self.limit > SQLITE_MAX_INTEGER:
            raise InvalidPagination("limit is too large", field="limit")
        if self.offset > SQLITE_MAX_INTEGER:
            raise InvalidPagination("page is too large", field="page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return total_pages(total, self.limit)


def total_pages(total: int, limit: int) -> int:
    """``ceil(total / limit)``, with an empty result set still counting as one page."""
    if limit < 1:
        raise InvalidPagination("limit must be >= 1", field="limit")
    if total <= 0:
        return 1
    return (total + limit - 1) // limit


def _parse_int(raw: object) -> int | None:
    """Parse an untrusted page/limit value; ``None`` means "use the default"."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        stripped = raw.strip()
        if not stripped:
            return None
        try:
            return int(stripped)
        except ValueError:
            return None
    return None


def normalize(
    page: object = None,
    limit: object = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageWindow:
    """Normalize untrusted page/limit values into a :class:`PageWindow`.

    Raises:
        InvalidPagination: A supplied value parsed to an integer below 1,
            the limit exceeds *max_limit*, or the page offset overflows.
    """
    parsed_page = _parse_int(page)
    parsed_limit = _parse_int(limit)
    if parsed_limit is not None and parsed_limit > max_limit:
        raise InvalidPagination(f"limit must be <= {max_limit}", field="limit")
    return PageWindow(
        page=DEFAULT_PAGE if parsed_page is None else parsed_page,
        limit=default_limit if parsed_limit is None else parsed_limit,
    )
