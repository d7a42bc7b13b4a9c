"""FastAPI application factory for the task API."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..config import TaskflowSettings, get_settings
from ..database import create_db_and_tables
from ..errors import NotFoundError, ValidationError
from ..services import TaskStore
from .routes import router

logger = logging.getLogger(__name__)


def _validation_response(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error.message, "errors": error.errors},
    )


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Store-level validation failures are client errors."""
    return _validation_response(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are reported as 400 rather than 422."""
    error = ValidationError.from_error_list(exc.errors())
    logger.warning(f"{request.method} {request.url.path} rejected: {error.message}")
    return _validation_response(error)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    """Unknown task ids map to 404."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


def create_app(
    store: TaskStore | None = None, settings: TaskflowSettings | None = None
) -> FastAPI:
    """Build the task API application.

    Args:
        store: Task store to serve. If None, one is built on the engine from
            global settings and its tables are created.
        settings: Settings to read the route prefix from. If None, uses
            global settings.

    Returns:
        Configured FastAPI application

    """
    settings = settings or get_settings()

    if store is None:
        store = TaskStore()
        create_db_and_tables(store.engine)

    app = FastAPI(title="TaskFlow", debug=settings.debug_mode)
    app.state.store = store

    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)

    app.include_router(router, prefix=settings.server.api_prefix)

    @app.get("/health")
    def health() -> JSONResponse:
        """Report database reachability and task counts."""
        try:
            summary = store.summary()
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable"},
            )
        return JSONResponse(
            content={
                "status": "ok",
                "tasks": summary.total,
                "completed": summary.completed,
            }
        )

    logger.info(f"Task API ready (prefix={settings.server.api_prefix or '/'})")
    return app
