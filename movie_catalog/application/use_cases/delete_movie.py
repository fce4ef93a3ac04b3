"""
Name: Delete Movie Use Case

Responsibilities:
  - Permanently delete a movie by ID
  - Enforce the delete permission (MANAGER only)

Collaborators:
  - domain.repositories.MovieRepository
"""

from ...domain.repositories import MovieRepository
from ...logger import logger
from ...rbac import MovieOperation
from ...token_codec import TokenClaims
from .movie_input import check_permission, invalid_id_error, not_found_error, parse_movie_id
from .movie_results import DeleteMovieResult


class DeleteMovieUseCase:
    """R: Delete a movie (no soft delete)."""

    def __init__(self, repository: MovieRepository):
        self.repository = repository

    def execute(
        self, *, movie_id: str | int, actor: TokenClaims | None
    ) -> DeleteMovieResult:
        error = check_permission(actor, MovieOperation.DELETE)
        if error:
            return DeleteMovieResult(deleted=False, error=error)

        parsed_id = parse_movie_id(movie_id)
        if parsed_id is None:
            return DeleteMovieResult(deleted=False, error=invalid_id_error(movie_id))

        if not self.repository.get_movie(parsed_id):
            return DeleteMovieResult(deleted=False, error=not_found_error())

        deleted = self.repository.delete_movie(parsed_id)
        if not deleted:
            return DeleteMovieResult(deleted=False, error=not_found_error())

        logger.info(
            "Movie deleted",
            extra={"movie_id": parsed_id, "user_id": actor.user_id},
        )
        return DeleteMovieResult(deleted=True)
