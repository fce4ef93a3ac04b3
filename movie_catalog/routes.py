"""
Name: Movie API Controllers

Responsibilities:
  - Expose HTTP endpoints for movie CRUD
  - Delegate business logic to application use cases
  - Validate requests and serialize responses using Pydantic models
  - Map use case errors to RFC 7807 responses

Collaborators:
  - application.use_cases: List/Get/Create/Update/DeleteMovieUseCase
  - container: use case providers
  - rbac.require_operation: Auth Gate + Access Policy per endpoint

Constraints:
  - Auth and policy run as dependencies, before the body is validated
  - Path ids arrive as strings; the use cases decide what a valid id is

Notes:
  - This module stays thin (controllers only)
  - JSON uses camelCase field names (releaseDate, createdAt, updatedAt)
"""

from datetime import date, datetime
from typing import NoReturn

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .application.use_cases import (
    CreateMovieUseCase,
    DeleteMovieUseCase,
    GetMovieUseCase,
    ListMoviesUseCase,
    MovieError,
    MovieErrorCode,
    MovieInput,
    UpdateMovieUseCase,
)
from .container import (
    get_create_movie_use_case,
    get_delete_movie_use_case,
    get_get_movie_use_case,
    get_list_movies_use_case,
    get_update_movie_use_case,
)
from .domain.entities import Movie, MovieRating
from .error_responses import (
    OPENAPI_ERROR_RESPONSES,
    forbidden,
    not_found,
    validation_error,
)
from .rbac import MovieOperation, require_operation
from .token_codec import TokenClaims

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MovieReq(_CamelModel):
    """Fields are optional here so the use case can report every missing one."""

    title: str | None = None
    rating: str | None = None
    release_date: str | None = None

    def to_input(self) -> MovieInput:
        return MovieInput(
            title=self.title, rating=self.rating, release_date=self.release_date
        )


class MovieRes(_CamelModel):
    id: int
    title: str
    rating: MovieRating
    release_date: date
    created_at: datetime
    updated_at: datetime


class DeleteMovieRes(BaseModel):
    message: str


def _to_movie_res(movie: Movie) -> MovieRes:
    return MovieRes(
        id=movie.id,
        title=movie.title,
        rating=movie.rating,
        release_date=movie.release_date,
        created_at=movie.created_at,
        updated_at=movie.updated_at,
    )


def _raise_movie_error(error: MovieError, movie_id: str | None = None) -> NoReturn:
    if error.code in (MovieErrorCode.VALIDATION_ERROR, MovieErrorCode.INVALID_ID):
        raise validation_error(
            error.message,
            [{"field": f.field, "message": f.message} for f in error.fields] or None,
        )
    if error.code == MovieErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == MovieErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Movie", str(movie_id))
    raise validation_error(error.message)


@router.get("/movies", response_model=list[MovieRes], tags=["movies"])
def list_movies(
    use_case: ListMoviesUseCase = Depends(get_list_movies_use_case),
    actor: TokenClaims = Depends(require_operation(MovieOperation.READ)),
):
    result = use_case.execute(actor=actor)
    if result.error:
        _raise_movie_error(result.error)
    return [_to_movie_res(movie) for movie in result.movies]


@router.post(
    "/movies", response_model=MovieRes, status_code=201, tags=["movies"]
)
def create_movie(
    req: MovieReq,
    use_case: CreateMovieUseCase = Depends(get_create_movie_use_case),
    actor: TokenClaims = Depends(require_operation(MovieOperation.CREATE)),
):
    result = use_case.execute(req.to_input(), actor=actor)
    if result.error:
        _raise_movie_error(result.error)
    return _to_movie_res(result.movie)


@router.get("/movies/{movie_id}", response_model=MovieRes, tags=["movies"])
def get_movie(
    movie_id: str,
    use_case: GetMovieUseCase = Depends(get_get_movie_use_case),
    actor: TokenClaims = Depends(require_operation(MovieOperation.READ)),
):
    result = use_case.execute(movie_id=movie_id, actor=actor)
    if result.error:
        _raise_movie_error(result.error, movie_id)
    return _to_movie_res(result.movie)


@router.put("/movies/{movie_id}", response_model=MovieRes, tags=["movies"])
def update_movie(
    movie_id: str,
    req: MovieReq,
    use_case: UpdateMovieUseCase = Depends(get_update_movie_use_case),
    actor: TokenClaims = Depends(require_operation(MovieOperation.UPDATE)),
):
    result = use_case.execute(req.to_input(), movie_id=movie_id, actor=actor)
    if result.error:
        _raise_movie_error(result.error, movie_id)
    return _to_movie_res(result.movie)


@router.delete("/movies/{movie_id}", response_model=DeleteMovieRes, tags=["movies"])
def delete_movie(
    movie_id: str,
    use_case: DeleteMovieUseCase = Depends(get_delete_movie_use_case),
    actor: TokenClaims = Depends(require_operation(MovieOperation.DELETE)),
):
    result = use_case.execute(movie_id=movie_id, actor=actor)
    if result.error:
        _raise_movie_error(result.error, movie_id)
    return DeleteMovieRes(message="Movie deleted successfully")
