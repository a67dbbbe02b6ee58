"""FastAPI application entry point."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ulid import ULID

from storefront.api import auth, catalog, dashboard, health, orders
from storefront.config import settings
from storefront.db import dispose_engine
from storefront.logging import setup_logging
from storefront.services.exceptions import ServiceError
from storefront.services.storage.storage_service import S3StorageService

setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check external dependencies on startup, release the connection pool on shutdown."""
    logger.info("Starting storefront API", debug=settings.debug)

    await S3StorageService().ensure_bucket_exists()
    if not settings.mail_enabled:
        logger.warning("SMTP host or operator address not configured, order notifications are disabled")

    yield

    await dispose_engine()
    logger.info("Storefront API stopped")


app = FastAPI(
    title="Storefront API",
    description="Custom apparel ordering and admin dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Attach a request id, method and path to every log line emitted while handling the request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=str(ULID()),
        method=request.method,
        path=request.url.path,
    )
    return await call_next(request)


@app.exception_handler(ServiceError)
async def unhandled_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    """Service errors a route did not map itself never leak their message to the client."""
    logger.error("Unhandled service error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


for router in (health.router, catalog.router, orders.router, dashboard.router, auth.router):
    app.include_router(router, prefix="/api")
