"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edu_echo.config import load_config
from edu_echo.dependencies import Services, build_services
from edu_echo.logging import setup_logging
from edu_echo.routes import (
    audio_router,
    flashcards_router,
    notifications_router,
    quizzes_router,
    summaries_router,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Renders every HTTP and validation error as {"error": <message>}."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": str(exc.detail)},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in errors
        )
        return JSONResponse(status_code=422, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        services: Prebuilt service bundle. When omitted, services are built
            from the environment on startup.
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if services is None:
            app.state.services = build_services(load_config())
        yield

    app = FastAPI(title="Edu Echo API", lifespan=lifespan)
    if services is not None:
        app.state.services = services

    register_error_handlers(app)
    app.include_router(audio_router)
    app.include_router(summaries_router)
    app.include_router(quizzes_router)
    app.include_router(flashcards_router)
    app.include_router(notifications_router)
    return app
