"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for user and movie persistence
  - Provide abstraction over storage technology

Collaborators:
  - domain.entities: Movie, MovieDraft
  - users: User, UserRole
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage-agnostic (PostgreSQL or in-memory)

Notes:
  - Using typing.Protocol for structural subtyping
  - Implementations receive their store handle at construction
"""

from typing import List, Optional, Protocol

from ..users import User, UserRole
from .entities import Movie, MovieDraft


class UserRepository(Protocol):
    """R: Interface for user records (credential store)."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by normalized email."""
        ...

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """R: Fetch a user by ID."""
        ...

    def create_user(
        self, *, name: str, email: str, password_hash: str, role: UserRole
    ) -> User:
        """
        R: Insert a user and return it with id and timestamps.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...


class MovieRepository(Protocol):
    """R: Interface for movie persistence."""

    def list_movies(self) -> List[Movie]:
        """R: All movies, newest first (created_at DESC, id DESC)."""
        ...

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        """R: Fetch a movie or None."""
        ...

    def create_movie(self, draft: MovieDraft) -> Movie:
        """R: Persist a new movie; the store assigns id and timestamps."""
        ...

    def update_movie(self, movie_id: int, draft: MovieDraft) -> Optional[Movie]:
        """R: Replace all fields; returns None if the movie does not exist."""
        ...

    def delete_movie(self, movie_id: int) -> bool:
        """R: Permanently delete; returns False if nothing was deleted."""
        ...

    def ping(self) -> bool:
        """R: Check the store is reachable."""
        ...
