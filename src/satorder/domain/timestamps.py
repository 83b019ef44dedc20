"""Timestamp parsing, storage format, and date-range filters.

Timestamps are persisted as fixed-width UTC text so that lexical order in
the store is chronological order::

    2025-01-15T00:00:00.000000Z
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from satorder.domain.errors import InvalidInput

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the storage format (naive values are taken as UTC).

    Years below 1000 keep their leading zeros, unlike ``strftime("%Y")`` on glibc.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    utc = value.astimezone(UTC).replace(tzinfo=None)
    return utc.isoformat(timespec="microseconds") + "Z"


def parse_timestamp(raw: str, *, end_of_day: bool = False, field: str = "date") -> datetime:
    """Parse a ``YYYY-MM-DD`` date or an ISO 8601 datetime into aware UTC.

    A date-only value maps to the start of that day, or to its last
    microsecond when ``end_of_day`` is set (inclusive upper bounds).

    Raises:
        InvalidInput: The value is not a recognizable date or datetime, or
            its UTC equivalent falls outside years 1-9999.
    """
    text = raw.strip()
    if _DATE_ONLY.match(text):
        try:
            day = date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidInput(f"Invalid {field}: {raw!r}", field=field) from exc
        return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=UTC)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInput(f"Invalid {field}: {raw!r}", field=field) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError as exc:
        raise InvalidInput(f"{field} is out of range: {raw!r}", field=field) from exc


@dataclass(frozen=True)
class DateRange:
    """Closed interval over ``created_at``; either bound may be open."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidInput("startDate must not be after endDate", field="startDate")

    @property
    def start_text(self) -> str | None:
        return format_timestamp(self.start) if self.start is not None else None

    @property
    def end_text(self) -> str | None:
        return format_timestamp(self.end) if self.end is not None else None


def parse_date_range(start: str | None, end: str | None) -> DateRange | None:
    """Build a :class:`DateRange` from optional raw bounds (``None`` if both blank)."""
    start = start.strip() if isinstance(start, str) else None
    end = end.strip() if isinstance(end, str) else None
    if not start and not end:
        return None
    return DateRange(
        start=parse_timestamp(start, field="startDate") if start else None,
        end=parse_timestamp(end, end_of_day=True, field="endDate") if end else None,
    )
