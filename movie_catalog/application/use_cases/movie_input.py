"""
Name: Movie Input Validation

Responsibilities:
  - Parse path identifiers into positive integers
  - Validate raw movie fields into a MovieDraft
  - Report every violated field at once

Collaborators:
  - domain.entities: MovieDraft, MovieRating
  - create_movie.py / update_movie.py: shared validation

Notes:
  - releaseDate accepts an ISO date or an ISO datetime; datetimes are
    truncated to their calendar date without timezone conversion
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Tuple

from ...domain.entities import MovieDraft, MovieRating
from ...rbac import MovieOperation, is_allowed
from ...token_codec import TokenClaims
from .movie_results import FieldError, MovieError, MovieErrorCode

DEFAULT_MAX_TITLE_CHARS = 200

# Ids are BIGINT-sized at most; longer digit strings never name a movie
MAX_MOVIE_ID = 2**63 - 1
_POSITIVE_INT = re.compile(r"[0-9]{1,19}")

RATING_CHOICES = ", ".join(r.value for r in MovieRating)


@dataclass
class MovieInput:
    """R: Raw movie fields as received from the caller."""

    title: str | None = None
    rating: str | None = None
    release_date: str | None = None


def parse_movie_id(raw: str | int | None) -> int | None:
    """R: Positive integer id, or None when the value does not parse."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif raw is None or not _POSITIVE_INT.fullmatch(raw):
        return None
    else:
        value = int(raw)
    return value if 0 < value <= MAX_MOVIE_ID else None


def parse_release_date(raw: str) -> date | None:
    value = raw.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def validate_movie_input(
    data: MovieInput, *, max_title_chars: int = DEFAULT_MAX_TITLE_CHARS
) -> Tuple[MovieDraft | None, List[FieldError]]:
    """
    R: Validate all mandatory fields.

    Returns:
        (draft, []) when valid, (None, errors) otherwise
    """
    errors: List[FieldError] = []

    title = (data.title or "").strip()
    if not title:
        errors.append(FieldError("title", "Title is required."))
    elif "\x00" in title:
        errors.append(FieldError("title", "Title must not contain NUL characters."))
    elif len(title) > max_title_chars:
        errors.append(
            FieldError("title", f"Title must be at most {max_title_chars} characters.")
        )

    rating = None
    if not data.rating:
        errors.append(FieldError("rating", "Rating is required."))
    else:
        try:
            rating = MovieRating(data.rating)
        except ValueError:
            errors.append(
                FieldError("rating", f"Rating must be one of {RATING_CHOICES}.")
            )

    release_date = None
    if not data.release_date:
        errors.append(FieldError("releaseDate", "Release date is required."))
    else:
        release_date = parse_release_date(data.release_date)
        if release_date is None:
            errors.append(
                FieldError("releaseDate", "Release date must be an ISO date.")
            )

    if errors:
        return None, errors
    return MovieDraft(title=title, rating=rating, release_date=release_date), []


def check_permission(
    actor: TokenClaims | None, operation: MovieOperation
) -> MovieError | None:
    """R: FORBIDDEN error when the actor's role does not allow the operation."""
    if actor is None or not is_allowed(actor.role, operation):
        return MovieError(
            code=MovieErrorCode.FORBIDDEN,
            message=f"Role is not allowed to {operation.value} movies.",
        )
    return None


def invalid_id_error(raw) -> MovieError:
    shown = str(raw)[:32]
    return MovieError(
        code=MovieErrorCode.INVALID_ID,
        message=f"Movie id must be a positive integer, got '{shown}'.",
        resource="Movie",
        fields=[FieldError("id", "Must be a positive integer.")],
    )


def not_found_error() -> MovieError:
    return MovieError(
        code=MovieErrorCode.NOT_FOUND,
        message="Movie not found.",
        resource="Movie",
    )


def validation_failed(errors: List[FieldError]) -> MovieError:
    names = ", ".join(e.field for e in errors)
    return MovieError(
        code=MovieErrorCode.VALIDATION_ERROR,
        message=f"Invalid fields: {names}",
        resource="Movie",
        fields=list(errors),
    )
