"""
Name: Movie Use Case Results

Responsibilities:
  - Define typed results and errors returned by movie use cases
  - Keep HTTP concerns out of the application layer

Collaborators:
  - routes.py: maps MovieErrorCode to HTTP responses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ...domain.entities import Movie


class MovieErrorCode(str, Enum):
    """R: Error codes for movie use cases."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class MovieError:
    code: MovieErrorCode
    message: str
    resource: str | None = None
    fields: List[FieldError] = field(default_factory=list)


@dataclass
class ListMoviesResult:
    movies: List[Movie]
    error: MovieError | None = None


@dataclass
class MovieResult:
    movie: Movie | None = None
    error: MovieError | None = None


@dataclass
class DeleteMovieResult:
    deleted: bool
    error: MovieError | None = None
