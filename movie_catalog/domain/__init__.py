"""Domain layer: entities and repository contracts"""

from .entities import Movie, MovieDraft, MovieRating
from .repositories import MovieRepository, UserRepository

__all__ = [
    "Movie",
    "MovieDraft",
    "MovieRating",
    "MovieRepository",
    "UserRepository",
]
