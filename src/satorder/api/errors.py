"""Error-code → HTTP status mapping and JSON error bodies.

Every error response has the shape ``{"error": message, "code": code}``;
request-shape errors add ``details``. Statement text and tracebacks never
reach a response.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from satorder.domain.errors import InvalidInput
from satorder.services.base import STORE_FAILURE

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

    from satorder.services.result import ServiceResult

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    "INVALID_INPUT": 400,
    "INVALID_GEOMETRY": 400,
    "INVALID_PAGINATION": 400,
    "NOT_FOUND": 404,
    "IMAGE_NOT_FOUND": 404,
    "STORE_FAILURE": 500,
    "SERVICE_UNAVAILABLE": 503,
}

_CODE_BY_HTTP_STATUS = {404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}


def status_for(code: str) -> int:
    """HTTP status for a service error code (unknown codes are server faults)."""
    return STATUS_BY_CODE.get(code, 500)


def error_body(message: str, code: str, **extra: Any) -> dict[str, Any]:
    return {"error": message, "code": code, **extra}


class ApiError(Exception):
    """Raised by route handlers; rendered by :func:`handle_api_error`."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def from_result(cls, result: ServiceResult) -> ApiError:
        if result.error is None:
            return cls(STORE_FAILURE, "Internal server error")
        return cls(result.error.code, result.error.message)


async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc.code), content=error_body(exc.message, exc.code))


async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are client errors (400), not 422."""
    details = [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": str(err.get("msg", "")),
            "type": str(err.get("type", "")),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request", InvalidInput.code, details=details),
    )


async def handle_http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _CODE_BY_HTTP_STATUS.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), code),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error", STORE_FAILURE),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
