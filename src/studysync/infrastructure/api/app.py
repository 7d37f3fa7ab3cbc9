"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studysync.core.config import get_settings
from studysync.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from studysync.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StudySyncError,
    UnauthorizedError,
    ValidationError,
)
from studysync.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

# Checked in order; subclasses map through their base class.
STATUS_BY_ERROR: list[tuple[type[StudySyncError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and the database on startup and releases the
    database engine on shutdown.
    """
    settings = get_settings()

    configure_logging(settings)
    logger.info(
        "Starting StudySync",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    if settings.uses_default_secret and not settings.is_development:
        logger.warning("JWT secret key is the built-in default; set STUDYSYNC_SECRET_KEY")

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down StudySync")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Study group task tracking API",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Return 200 while the process is serving requests."""
        return {
            "status": "healthy",
            "service": "StudySync",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Return 200 when the database answers, 503 otherwise."""
        db_healthy = await get_db_manager().check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": "StudySync",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "service": "StudySync",
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from studysync.infrastructure.api.routes import (
        auth_router,
        groups_router,
        tasks_router,
        users_router,
    )

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users")
    app.include_router(groups_router, prefix=f"{settings.api_prefix}/groups")
    app.include_router(
        tasks_router, prefix=f"{settings.api_prefix}/groups/{{group_id}}/tasks"
    )

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "message": "StudySync API is running",
        }


def _error_response(
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, **extra},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors and framework errors to JSON responses.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(StudySyncError)
    async def domain_exception_handler(request: Request, exc: StudySyncError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        for error_type, code in STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                status_code = code
                break

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        extra = {}
        if isinstance(exc, ConflictError) and exc.field:
            extra["field"] = exc.field

        return _error_response(status_code, exc.error, exc.message, headers, **extra)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            details.append(
                {
                    "field": ".".join(loc) or "body",
                    "message": err.get("msg", "Invalid value"),
                    "code": err.get("type", "value_error"),
                }
            )
        logger.info(
            "Request validation failed",
            path=request.url.path,
            fields=[detail["field"] for detail in details],
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation error",
            details[0]["message"] if details else "Invalid request body",
            details=details,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Not Found - {request.url.path}"
            error = "Not found"
        else:
            message = str(exc.detail)
            error = "Error"
        return _error_response(exc.status_code, error, message, exc.headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        extra = {}
        if get_settings().is_development:
            extra["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            str(exc) or "An unexpected error occurred",
            **extra,
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate its correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
