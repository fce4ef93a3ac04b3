"""
Name: Create Movie Use Case

Responsibilities:
  - Validate the payload (title, rating, releaseDate)
  - Persist a new movie with store-assigned id and timestamps
  - Enforce the create permission

Collaborators:
  - domain.repositories.MovieRepository
  - movie_input: validate_movie_input
"""

from ...domain.repositories import MovieRepository
from ...logger import logger
from ...rbac import MovieOperation
from ...token_codec import TokenClaims
from .movie_input import (
    DEFAULT_MAX_TITLE_CHARS,
    MovieInput,
    check_permission,
    validate_movie_input,
    validation_failed,
)
from .movie_results import MovieResult


class CreateMovieUseCase:
    """R: Create a movie."""

    def __init__(
        self,
        repository: MovieRepository,
        max_title_chars: int = DEFAULT_MAX_TITLE_CHARS,
    ):
        self.repository = repository
        self.max_title_chars = max_title_chars

    def execute(
        self, input_data: MovieInput, *, actor: TokenClaims | None
    ) -> MovieResult:
        error = check_permission(actor, MovieOperation.CREATE)
        if error:
            return MovieResult(error=error)

        draft, field_errors = validate_movie_input(
            input_data, max_title_chars=self.max_title_chars
        )
        if field_errors:
            return MovieResult(error=validation_failed(field_errors))

        movie = self.repository.create_movie(draft)
        logger.info(
            "Movie created",
            extra={"movie_id": movie.id, "user_id": actor.user_id},
        )
        return MovieResult(movie=movie)
