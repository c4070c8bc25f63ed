"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: build the process-wide cache, create SQLite tables
   - shutdown: drop cached entries

3. Exception Handlers
   - NotFoundError → 404, ValidationFailed → 400
   - Database errors → 500 without leaking details
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookshelf import __version__
from bookshelf.config import get_settings
from bookshelf.database import create_tables
from bookshelf.exceptions import NotFoundError, ValidationFailed
from bookshelf.routers import auth_router, authors_router, books_router
from bookshelf.services.cache import create_cache

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

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Default API version: {settings.default_api_version}")

    # Outside production, SQLite tables are created on the fly;
    # everything else is managed with Alembic
    if settings.database_url.startswith("sqlite") and not settings.is_production:
        create_tables()

    app.state.cache = create_cache(settings)
    logger.info(f"Cache backend: {type(app.state.cache.backend).__name__}")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.cache.clear()


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
        description="""
## Bookshelf API

A RESTful API for managing authors and their books.

### Features
- **Authors** and **Books**: CRUD with pagination (`page`, `limit`)
- **Caching**: list pages are cached until the next write
- **Versioning**: send `Accept: application/json; version=2.0`
  to receive fields introduced in version 2.0

### Authentication
Reads are public. Writes require an administrator bearer token
from `/api/auth/login`.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(NotFoundError)
    async def not_found_handler(
        request: Request,
        exc: NotFoundError,
    ) -> JSONResponse:
        """An entity id could not be resolved."""
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(
        request: Request,
        exc: ValidationFailed,
    ) -> JSONResponse:
        """Field constraints violated: itemized {field, message} list."""
        logger.info(f"Validation failed on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content=[violation.as_dict() for violation in exc.violations],
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(authors_router, prefix=settings.api_prefix)
    app.include_router(books_router, prefix=settings.api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and which cache backend is in use.",
    )
    async def health_check(request: Request) -> dict:
        """Used by load balancers and monitoring systems."""
        cache = getattr(request.app.state, "cache", None)
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "api_version": settings.default_api_version,
            "cache": cache.stats() if cache is not None else {"backend": None},
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshelf.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
