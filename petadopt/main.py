"""
FastAPI application entry point.

Configures middleware, routes, exception handlers and the lifetime of the
database and Redis clients.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from petadopt import __version__
from petadopt.core.config import settings
from petadopt.core.database import Database
from petadopt.core.exceptions import AppError, ValidationError
from petadopt.core.middleware import (
    BearerIdentityMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    logger.info("Starting PetAdopt API in %s mode", settings.ENVIRONMENT)

    if getattr(app.state, "database", None) is None:
        app.state.database = Database(str(settings.DATABASE_URL), echo=settings.DEBUG)
    if getattr(app.state, "redis", None) is None and settings.RATE_LIMIT_ENABLED:
        app.state.redis = aioredis.from_url(
            str(settings.REDIS_URL),
            encoding="utf-8",
            decode_responses=True,
        )

    yield

    logger.info("Shutting down PetAdopt API")
    if app.state.redis is not None:
        await app.state.redis.aclose()
    await app.state.database.dispose()


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_detail()},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError("Request validation failed")
    detail: dict[str, Any] = {**error.to_detail(), "errors": jsonable_encoder(exc.errors())}
    return JSONResponse(status_code=error.status_code, content={"detail": detail})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": str(exc),
                    "type": type(exc).__name__,
                }
            },
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the application.

    Pass a Database to run against it (tests do); otherwise one is built
    from settings at startup.
    """
    app = FastAPI(
        title="PetAdopt API",
        description="Pet adoption marketplace for animal organizations",
        version=__version__,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.redis = None

    # Starlette runs middleware in reverse order of registration:
    # CORS -> security headers -> rate limit -> identity -> handler
    app.add_middleware(BearerIdentityMiddleware)
    app.add_middleware(RateLimitMiddleware, limit_per_minute=settings.RATE_LIMIT_PER_MINUTE)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    from petadopt.routers import health, organizations, pets

    app.include_router(health.router, tags=["Health"])
    app.include_router(organizations.router, tags=["Organizations"])
    app.include_router(pets.router, tags=["Pets"])

    return app


# Default app instance (used by uvicorn: petadopt.main:app)
app = create_app()
