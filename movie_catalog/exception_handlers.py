"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert internal exceptions to problem+json responses
  - Turn request body/path validation failures into 400 VALIDATION_ERROR
  - Log server-side failures with their error id

Collaborators:
  - main.py: calls register_exception_handlers
  - exceptions.py: MovieCatalogError, DatabaseError
  - error_responses.py: codes, factories and rendering

Constraints:
  - Internal errors are surfaced opaquely; detail stays in the logs
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .error_responses import (
    AppHTTPException,
    database_error,
    internal_error,
    problem_response,
    validation_error,
)
from .exceptions import DatabaseError, MovieCatalogError
from .logger import logger

_LOCATION_PREFIXES = ("body", "query", "path")


def _field_name(loc: tuple) -> str:
    # ("body", "releaseDate") -> "releaseDate"
    parts = [str(part) for part in loc if part not in _LOCATION_PREFIXES]
    return ".".join(parts) or "body"


async def handle_app_exception(request: Request, exc: AppHTTPException) -> JSONResponse:
    return problem_response(request, exc)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """R: Malformed request payloads become 400 with one entry per field."""
    errors = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    fields = ", ".join(sorted({err["field"] for err in errors}))
    return problem_response(
        request, validation_error(f"Invalid fields: {fields}", errors)
    )


async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "Database error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return problem_response(request, database_error(exc.error_id))


async def handle_catalog_error(
    request: Request, exc: MovieCatalogError
) -> JSONResponse:
    logger.error(
        "Internal error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return problem_response(request, internal_error(exc.error_id))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """R: Last resort; the client sees a generic 500."""
    logger.error("Unhandled exception", exc_info=(type(exc), exc, exc.__traceback__))
    return problem_response(request, internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    """R: Install every handler on the app (subclass handlers win by MRO)."""
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(DatabaseError, handle_database_error)
    app.add_exception_handler(MovieCatalogError, handle_catalog_error)
    app.add_exception_handler(AppHTTPException, handle_app_exception)
    app.add_exception_handler(Exception, handle_unexpected)
