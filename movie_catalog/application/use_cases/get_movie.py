"""
Name: Get Movie Use Case

Responsibilities:
  - Retrieve a single movie by ID
  - Enforce the read permission

Collaborators:
  - domain.repositories.MovieRepository
"""

from ...domain.repositories import MovieRepository
from ...rbac import MovieOperation
from ...token_codec import TokenClaims
from .movie_input import check_permission, invalid_id_error, not_found_error, parse_movie_id
from .movie_results import MovieResult


class GetMovieUseCase:
    """R: Fetch a movie by ID."""

    def __init__(self, repository: MovieRepository):
        self.repository = repository

    def execute(self, *, movie_id: str | int, actor: TokenClaims | None) -> MovieResult:
        error = check_permission(actor, MovieOperation.READ)
        if error:
            return MovieResult(error=error)

        parsed_id = parse_movie_id(movie_id)
        if parsed_id is None:
            return MovieResult(error=invalid_id_error(movie_id))

        movie = self.repository.get_movie(parsed_id)
        if not movie:
            return MovieResult(error=not_found_error())

        return MovieResult(movie=movie)
