"""Movie Catalog Backend - FastAPI Application."""

import time
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_api import __version__
from movie_api.boot import BootMode, bootstrap
from movie_api.config import Settings, get_settings
from movie_api.context import AppContext
from movie_api.deps import Context
from movie_api.logger import configure_logging, get_logger, log_exception
from movie_api.routers import auth, movies

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - validate, create tables and seed the admin before serving."""
    context: AppContext = app.state.context
    # Exits the process if config or database checks fail
    await bootstrap(context, mode=BootMode.CRITICAL)
    logger.info("Application started", version=__version__)
    yield
    await context.dispose()
    logger.info("Application shutting down")


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = [str(item) for item in error.get("loc", ()) if item != "body"]
        field = ".".join(location) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid')}")
    return "Validation failed: " + "; ".join(parts)


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": _format_validation_errors(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler to ensure JSON response."""
        log_exception(logger, exc, "Unhandled error")

        # Only show exception details in DEBUG mode
        if settings.debug:
            message = str(exc)
            trace = traceback.format_exc()
        else:
            message = "An internal server error occurred. Please try again later."
            trace = None

        return JSONResponse(
            status_code=500,
            content={
                "message": message,
                "trace": trace,
                "request_id": structlog.contextvars.get_contextvars().get("request_id"),
            },
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its process-wide context."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Movie Catalog API",
        description="Movie catalog with token authentication and admin-only writes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = AppContext.from_settings(settings)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: Any) -> Response:
        """Middleware to inject Request-ID and log request details."""
        request_id = request.headers.get("X-Request-ID", str(uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration = time.perf_counter() - start_time
            logger.exception(
                "HTTP Request Failed",
                duration_ms=round(duration * 1000, 2),
                error=str(exc),
            )
            raise

        duration = time.perf_counter() - start_time
        logger.info(
            "HTTP Request",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response

    _register_exception_handlers(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    app.include_router(auth.router)
    app.include_router(movies.router)

    @app.get("/health")
    async def health_check(context: Context) -> Response:
        """Return 200 when the database answers, 503 otherwise."""
        checks = {}
        try:
            async with context.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = True
        except Exception as exc:
            log_exception(logger, exc, "Health check: database unreachable", include_traceback=False)
            checks["database"] = False

        all_healthy = all(checks.values())
        return JSONResponse(
            status_code=200 if all_healthy else 503,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "timestamp": datetime.now(UTC).isoformat(),
                "checks": checks,
                "version": __version__,
            },
        )

    return app
