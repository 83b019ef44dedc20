"""Return types shared by every satorder service.

A service never raises for an expected failure (bad input, unknown
image, store trouble). It returns a ``ServiceResult`` with ``ok=False``
and a ``ServiceError`` whose ``code`` the CLI maps to an exit status and
the HTTP API maps to a response status.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Machine-readable code, client-safe message, and optional field detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: True when ``data`` holds the operation's payload.
        op: Operation name, e.g. ``"search_images"`` or ``"create_order"``.
        data: Payload (a page of images, an order, ingest counts...).
        warnings: Non-fatal notes, such as catalog ids skipped on ingest.
        error: Set exactly when ``ok`` is False.
        meta: Extras outside the payload; ``--verbose`` adds ``timing``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Failed result for *op* carrying one ``ServiceError``."""
        error = ServiceError(code=code, message=message, detail=detail or {})
        return cls(ok=False, op=op, error=error)

    @property
    def code(self) -> str | None:
        """The error code, or ``None`` on success."""
        return self.error.code if self.error else None
