"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app, which keeps tests simple

2. Lifespan Events
   - startup: connect to Redis (optional) and log configuration
   - shutdown: close the Redis connection

3. Middleware Stack (outermost first)
   - CORS: Allow cross-origin requests
   - Rate limiting: slowapi default limits per client
   - URL cache: Redis-backed cache of the author list

4. Exception Handlers
   - Domain errors (not found) -> 404
   - Request validation errors -> 400 with per-field messages
   - Database errors -> 400 (integrity) or 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bookshelf import __version__
from bookshelf.config import get_settings
from bookshelf.dependencies import DbSession
from bookshelf.errors import RecordNotFoundError
from bookshelf.routers import authors_router, books_router
from bookshelf.routers.authors import AUTHOR_LIST_PATH
from bookshelf.services.cache import close_redis_connection, get_cache_stats, get_redis_client
from bookshelf.services.rate_limiter import limiter, rate_limit_exceeded_handler
from bookshelf.services.url_cache import URLCacheMiddleware

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    """
    logger.info(f"Starting {settings.app_name} {__version__}...")
    logger.info(f"Environment: {settings.environment}, debug: {settings.debug}")

    if not settings.cache_enabled:
        logger.info("URL cache disabled by configuration")
    elif get_redis_client():
        logger.info("Redis caching enabled")
    else:
        logger.warning("Redis unavailable - caching disabled")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    close_redis_connection()


# =============================================================================
# Exception Handlers
# =============================================================================
def register_exception_handlers(app: FastAPI) -> None:
    """Map domain, validation and database errors to JSON responses."""

    @app.exception_handler(RecordNotFoundError)
    async def record_not_found_handler(
        request: Request,
        exc: RecordNotFoundError,
    ) -> JSONResponse:
        logger.info(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Report every invalid field with a 400.

        The location is flattened to a dotted path, e.g. "body.books.0.title".
        """
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": errors},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        logger.warning(f"Integrity error: {exc.orig}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Bad request"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """Log the database error, hide its details from clients."""
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "A database error occurred. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: details are only shown in debug mode."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An internal error occurred."},
        )


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="Authors and their books, over a REST/JSON API.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Middleware (added innermost first)
    # -------------------------------------------------------------------------
    app.add_middleware(URLCacheMiddleware, paths=[AUTHOR_LIST_PATH], ttl=settings.cache_ttl)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(authors_router, prefix=settings.api_prefix)
    app.include_router(books_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API, its database and its cache are reachable.",
    )
    def health_check(db: DbSession) -> dict:
        """
        Health check endpoint for load balancers and readiness probes.

        The API is "degraded" (still 200) when the database does not answer.
        """
        try:
            db.execute(text("SELECT 1"))
            database = "connected"
        except SQLAlchemyError as e:
            logger.error(f"Health check database error: {e}")
            database = "unreachable"

        return {
            "status": "healthy" if database == "connected" else "degraded",
            "app": settings.app_name,
            "version": __version__,
            "database": database,
            "cache": get_cache_stats(),
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshelf.main:app
app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookshelf.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
