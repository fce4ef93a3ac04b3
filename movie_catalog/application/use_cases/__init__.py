"""Application use cases"""

from .create_movie import CreateMovieUseCase
from .delete_movie import DeleteMovieUseCase
from .get_movie import GetMovieUseCase
from .list_movies import ListMoviesUseCase
from .movie_input import MovieInput, parse_movie_id, validate_movie_input
from .movie_results import (
    DeleteMovieResult,
    FieldError,
    ListMoviesResult,
    MovieError,
    MovieErrorCode,
    MovieResult,
)
from .update_movie import UpdateMovieUseCase

__all__ = [
    "CreateMovieUseCase",
    "DeleteMovieUseCase",
    "GetMovieUseCase",
    "ListMoviesUseCase",
    "UpdateMovieUseCase",
    "MovieInput",
    "parse_movie_id",
    "validate_movie_input",
    "DeleteMovieResult",
    "FieldError",
    "ListMoviesResult",
    "MovieError",
    "MovieErrorCode",
    "MovieResult",
]
