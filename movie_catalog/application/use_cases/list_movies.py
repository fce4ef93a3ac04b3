"""
Name: List Movies Use Case

Responsibilities:
  - Return every movie, newest first
  - Enforce the read permission

Collaborators:
  - domain.repositories.MovieRepository
  - rbac: is_allowed
"""

from ...domain.repositories import MovieRepository
from ...rbac import MovieOperation
from ...token_codec import TokenClaims
from .movie_input import check_permission
from .movie_results import ListMoviesResult


class ListMoviesUseCase:
    """R: List all movies (no pagination)."""

    def __init__(self, repository: MovieRepository):
        self.repository = repository

    def execute(self, *, actor: TokenClaims | None) -> ListMoviesResult:
        error = check_permission(actor, MovieOperation.READ)
        if error:
            return ListMoviesResult(movies=[], error=error)

        return ListMoviesResult(movies=self.repository.list_movies())
