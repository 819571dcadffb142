"""FastAPI application factory with lifespan context manager."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import init_relay_deps
from app.logging_config import configure_logging
from app.middleware.redirect import NonPostRedirectMiddleware
from app.routers import health, webhooks


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and resolve webhook routes before serving requests.

    A route referencing an unset environment variable aborts startup.
    """
    configure_logging(json_logs=not settings.debug, log_level=settings.log_level)
    route_table = init_relay_deps(
        routes=settings.webhook_routes,
        environ=os.environ,
        delivery_timeout=settings.delivery_timeout,
    )

    logger = structlog.get_logger()
    logger.info(
        "relay_started",
        routes=sorted(route_table),
        secret_configured=bool(settings.webhook_secret),
    )
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(NonPostRedirectMiddleware)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for any unhandled exception."""
    logger = structlog.get_logger()
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Health first: the webhook router catches every path.
app.include_router(health.router)
app.include_router(webhooks.router)
