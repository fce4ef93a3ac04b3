"""
Name: Internal Exceptions

Responsibilities:
  - Standardize internal errors that are later mapped to HTTP
  - Generate error_id for correlation with logs

Collaborators:
  - exception_handlers.py: maps these to RFC 7807 responses
  - infrastructure.repositories: raise DatabaseError on store failures
"""

from __future__ import annotations

from uuid import uuid4


class MovieCatalogError(Exception):
    """Base for internal errors not attributable to caller input."""

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(MovieCatalogError):
    """Store failures (connection, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class DuplicateEmailError(Exception):
    """A user with this email already exists (caller error, not internal)."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email '{email}' already exists")
