"""FastAPI application factory and main entrypoint."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api.config import get_settings
from api.exceptions import AcquisitionError, PageLensError
from api.logging import setup_logging
from api.routers.health import API_VERSION
from api.schemas.responses import ErrorDetail, ErrorResponse

setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Prepare the results directory and log the effective configuration."""
    settings = get_settings()
    Path(settings.results_path).mkdir(parents=True, exist_ok=True)
    logger.info(
        "api_starting",
        env=settings.env,
        version=API_VERSION,
        results_path=settings.results_path,
        llm_provider=settings.llm_provider,
        llm_enabled=settings.llm_enabled,
        render_timeout_ms=settings.render_timeout_ms,
    )

    yield

    logger.info("api_shutdown")


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    field: str | None = None,
) -> ORJSONResponse:
    """Error envelope shared by every handler: ``{"error": {...}}``."""
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, field=field, details=details or None)
    )
    return ORJSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="PageLens",
        description="SEO and AI citability analysis for single pages",
        version=API_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # First added runs last: request IDs are bound before anything is logged
    from api.middleware import LoggingMiddleware, RequestIDMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    from api.routers import health, v1

    app.include_router(health.router)
    app.include_router(v1.router, prefix="/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AcquisitionError)
    async def acquisition_error_handler(
        request: Request, exc: AcquisitionError
    ) -> ORJSONResponse:
        """Page fetch failures are expected; log the target and reason."""
        logger.warning(
            "acquisition_failed",
            url=exc.url,
            reason=exc.reason,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(PageLensError)
    async def pagelens_error_handler(request: Request, exc: PageLensError) -> ORJSONResponse:
        logger.warning(
            "application_error",
            error_code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """422 naming the first invalid field, with every error in details."""
        errors = exc.errors()
        first = errors[0] if errors else {"msg": "Validation error"}
        # Drop the leading "body"/"query" segment
        field = ".".join(str(loc) for loc in first.get("loc", [])[1:]) or None

        logger.warning("validation_error", path=request.url.path, errors=len(errors))
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "validation_error",
            first.get("msg", "Validation error"),
            details={
                "errors": [
                    {"loc": list(e.get("loc", [])), "msg": e.get("msg"), "type": e.get("type")}
                    for e in errors
                ]
            },
            field=field,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "unhandled_exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )


app = create_app()
