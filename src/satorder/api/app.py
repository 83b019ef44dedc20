"""FastAPI application factory.

``create_app`` builds the app around one :class:`Store`: the lifespan
opens it, verifies connectivity, and disposes it on shutdown. Run with
``satorder serve`` or ``uvicorn --factory satorder.api.app:create_app``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from satorder import __version__
from satorder.api.errors import install_error_handlers
from satorder.api.routes import router
from satorder.api.schemas import Welcome
from satorder.config.settings import SatSettings
from satorder.infrastructure.store import Store

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def create_app(settings: SatSettings | None = None) -> FastAPI:
    """Build the API application for *settings* (resolved from the environment if omitted)."""
    settings = settings or SatSettings.from_cli()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = Store(settings)
        try:
            store.ping()
        except Exception:
            store.close()
            raise
        app.state.store = store
        logger.info("API ready; database at %s", store.db_path)
        try:
            yield
        finally:
            logger.info("API shutting down")
            store.close()

    app = FastAPI(
        title="Satellite Image Ordering API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    install_error_handlers(app)

    @app.middleware("http")
    async def bind_request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get("/", response_model=Welcome)
    def welcome() -> Welcome:
        return Welcome(
            message="Welcome to the Satellite Image Ordering API",
            version=__version__,
            status="running",
        )

    app.include_router(router, prefix=settings.api.prefix.rstrip("/"))
    return app
