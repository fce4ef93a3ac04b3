"""
Name: Update Movie Use Case

Responsibilities:
  - Replace every field of an existing movie
  - Enforce the update permission

Collaborators:
  - domain.repositories.MovieRepository
  - movie_input: parse_movie_id, validate_movie_input
"""

from ...domain.repositories import MovieRepository
from ...logger import logger
from ...rbac import MovieOperation
from ...token_codec import TokenClaims
from .movie_input import (
    DEFAULT_MAX_TITLE_CHARS,
    MovieInput,
    check_permission,
    invalid_id_error,
    not_found_error,
    parse_movie_id,
    validate_movie_input,
    validation_failed,
)
from .movie_results import MovieResult


class UpdateMovieUseCase:
    """R: Full-replace update of a movie."""

    def __init__(
        self,
        repository: MovieRepository,
        max_title_chars: int = DEFAULT_MAX_TITLE_CHARS,
    ):
        self.repository = repository
        self.max_title_chars = max_title_chars

    def execute(
        self,
        input_data: MovieInput,
        *,
        movie_id: str | int,
        actor: TokenClaims | None,
    ) -> MovieResult:
        error = check_permission(actor, MovieOperation.UPDATE)
        if error:
            return MovieResult(error=error)

        parsed_id = parse_movie_id(movie_id)
        if parsed_id is None:
            return MovieResult(error=invalid_id_error(movie_id))

        draft, field_errors = validate_movie_input(
            input_data, max_title_chars=self.max_title_chars
        )
        if field_errors:
            return MovieResult(error=validation_failed(field_errors))

        if not self.repository.get_movie(parsed_id):
            return MovieResult(error=not_found_error())

        # Row may vanish between the check and the write
        movie = self.repository.update_movie(parsed_id, draft)
        if not movie:
            return MovieResult(error=not_found_error())

        logger.info(
            "Movie updated",
            extra={"movie_id": movie.id, "user_id": actor.user_id},
        )
        return MovieResult(movie=movie)
