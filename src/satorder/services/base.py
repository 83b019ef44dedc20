"""BaseService — shared foundation for all satorder services.

Every service receives the :class:`Store` at construction time and owns
its own statement and transaction boundaries. Validation failures and
store failures are turned into failed results here, in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import exc as sa_exc

from satorder.services.result import ServiceResult

if TYPE_CHECKING:
    from satorder.domain.errors import ValidationError
    from satorder.infrastructure.store import Store

log = structlog.get_logger(__name__)

# Error codes for store-side failures.
STORE_FAILURE = "STORE_FAILURE"
SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

_UNAVAILABLE_MARKERS = ("database is locked", "timed out", "timeout", "unable to open")


def _is_unavailable(exc: sa_exc.SQLAlchemyError) -> bool:
    """True for pool exhaustion, lock waits, and lost connections."""
    if isinstance(exc, (sa_exc.TimeoutError, sa_exc.DisconnectionError)):
        return True
    if isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated:
        return True
    if isinstance(exc, sa_exc.OperationalError):
        reason = str(exc.orig).lower()
        return any(marker in reason for marker in _UNAVAILABLE_MARKERS)
    return False


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ImageService(BaseService):
            def get(self, catalog_id: str) -> ServiceResult:
                row = CatalogRepository(self._store.engine).get(catalog_id)
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @staticmethod
    def _invalid(op: str, exc: ValidationError) -> ServiceResult:
        """Failed result for a client-side validation error."""
        return ServiceResult.failure(op, exc.code, exc.message, exc.to_detail())

    @staticmethod
    def _store_failure(op: str, exc: sa_exc.SQLAlchemyError, **context: Any) -> ServiceResult:
        """Log a store failure with key identifiers and return an opaque error.

        Neither the statement text nor the request payload reaches the log
        event or the caller.
        """
        unavailable = _is_unavailable(exc)
        log.error(
            "store.failure",
            op=op,
            error_type=type(exc).__name__,
            reason=str(getattr(exc, "orig", None) or type(exc).__name__),
            unavailable=unavailable,
            **context,
        )
        if unavailable:
            return ServiceResult.failure(
                op, SERVICE_UNAVAILABLE, "The data store is temporarily unavailable"
            )
        return ServiceResult.failure(op, STORE_FAILURE, "Internal server error")
