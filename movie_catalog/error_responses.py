"""
Name: Problem Details Catalog (RFC 7807)

Responsibilities:
  - Enumerate the error codes clients can branch on
  - Bind each code to its HTTP status and title
  - Render AppHTTPException as application/problem+json

Collaborators:
  - exception_handlers.py: maps domain exceptions onto these codes
  - middleware.py: renders edge rejections (401, 413) before routing
  - routes.py / auth_routes.py: raise the factories below

Notes:
  - Duplicate registration is a 400 with its own CONFLICT code
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Stable error codes for client-side handling."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def status(self) -> int:
        return _STATUS_BY_CODE[self]

    @property
    def problem_title(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.CONFLICT: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"
ERROR_TYPE_BASE = "https://api.movie-catalog.local/errors"


class ErrorDetail(BaseModel):
    """Problem Details body."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


OPENAPI_ERROR_RESPONSES = {
    code.status: {
        "description": f"{code.problem_title} (problem+json)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }
    for code in (
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.UNAUTHORIZED,
        ErrorCode.FORBIDDEN,
        ErrorCode.NOT_FOUND,
    )
}


class AppHTTPException(HTTPException):
    """HTTPException tagged with an ErrorCode; status follows the code."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=code.status, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' not found"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Not authenticated.") -> AppHTTPException:
    return AppHTTPException(ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Access denied.") -> AppHTTPException:
    return AppHTTPException(ErrorCode.FORBIDDEN, detail)


def payload_too_large(max_bytes: int) -> AppHTTPException:
    return AppHTTPException(
        ErrorCode.PAYLOAD_TOO_LARGE,
        f"Request body exceeds {max_bytes} bytes.",
    )


def internal_error(
    error_id: str | None = None,
) -> AppHTTPException:
    errors = [{"error_id": error_id}] if error_id else None
    return AppHTTPException(
        ErrorCode.INTERNAL_ERROR, "An unexpected error occurred.", errors
    )


def database_error(
    error_id: str | None = None,
) -> AppHTTPException:
    errors = [{"error_id": error_id}] if error_id else None
    return AppHTTPException(
        ErrorCode.DATABASE_ERROR, "Database operation failed.", errors
    )


def problem_response(request: Request, exc: AppHTTPException) -> JSONResponse:
    """R: Render an AppHTTPException as a problem+json response."""
    body = ErrorDetail(
        type=f"{ERROR_TYPE_BASE}/{exc.code.value.lower()}",
        title=exc.code.problem_title,
        status=exc.status_code,
        detail=exc.detail,
        code=exc.code,
        instance=request.url.path,
        errors=exc.errors,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
