"""Repository implementations"""

from .in_memory_movie_repo import InMemoryMovieRepository
from .in_memory_user_repo import InMemoryUserRepository
from .postgres_movie_repo import PostgresMovieRepository
from .postgres_user_repo import PostgresUserRepository

__all__ = [
    "InMemoryMovieRepository",
    "InMemoryUserRepository",
    "PostgresMovieRepository",
    "PostgresUserRepository",
]
