"""
Name: Dependency Injection Container

Responsibilities:
  - Wire up repositories, the token codec and the auth gate
  - Provide factory functions for use cases
  - Enable dependency injection in FastAPI endpoints

Collaborators:
  - infrastructure.repositories: Postgres and in-memory implementations
  - token_codec.TokenCodec / auth_users.AuthGate
  - application.use_cases: movie use cases
  - FastAPI Depends(): Dependency injection mechanism

Constraints:
  - Manual DI (no library like dependency-injector)
  - No global store connection: the pool is created by main.py and handed
    to build_repositories; the result lives on app.state

Notes:
  - This is the composition root (where dependencies are wired)
  - Tests pass their own Repositories / AuthGate to create_app
"""

from dataclasses import dataclass

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from .application.use_cases import (
    CreateMovieUseCase,
    DeleteMovieUseCase,
    GetMovieUseCase,
    ListMoviesUseCase,
    UpdateMovieUseCase,
)
from .auth_users import AuthGate
from .config import Settings, get_settings
from .domain.repositories import MovieRepository, UserRepository
from .infrastructure.repositories import (
    InMemoryMovieRepository,
    InMemoryUserRepository,
    PostgresMovieRepository,
    PostgresUserRepository,
)
from .token_codec import TokenCodec


@dataclass
class Repositories:
    """R: The store handles used by one application instance."""

    users: UserRepository
    movies: MovieRepository


def build_repositories(
    settings: Settings, pool: ConnectionPool | None = None
) -> Repositories:
    """
    R: Pick repository implementations for the configured backend.

    Raises:
        RuntimeError: If PostgreSQL storage is configured without a pool
    """
    if settings.uses_memory_storage():
        return Repositories(
            users=InMemoryUserRepository(), movies=InMemoryMovieRepository()
        )
    if pool is None:
        raise RuntimeError("PostgreSQL storage requires an open connection pool")
    return Repositories(
        users=PostgresUserRepository(pool), movies=PostgresMovieRepository(pool)
    )


def build_token_codec(settings: Settings) -> TokenCodec:
    return TokenCodec(
        settings.jwt_secret,
        ttl_seconds=settings.jwt_access_ttl_minutes * 60,
    )


def build_auth_gate(settings: Settings) -> AuthGate:
    return AuthGate(build_token_codec(settings), cookie_name=settings.jwt_cookie_name)


# R: Request-scoped accessors for what create_app placed on app.state


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_repositories(request: Request) -> Repositories:
    repositories = getattr(request.app.state, "repositories", None)
    if repositories is None:
        raise RuntimeError("Repositories are not initialized")
    return repositories


def get_user_repository(
    repositories: Repositories = Depends(get_repositories),
) -> UserRepository:
    return repositories.users


def get_movie_repository(
    repositories: Repositories = Depends(get_repositories),
) -> MovieRepository:
    return repositories.movies


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


def get_token_codec(gate: AuthGate = Depends(get_auth_gate)) -> TokenCodec:
    return gate.codec


# R: Use case factories


def get_list_movies_use_case(
    movies: MovieRepository = Depends(get_movie_repository),
) -> ListMoviesUseCase:
    return ListMoviesUseCase(movies)


def get_get_movie_use_case(
    movies: MovieRepository = Depends(get_movie_repository),
) -> GetMovieUseCase:
    return GetMovieUseCase(movies)


def get_create_movie_use_case(
    movies: MovieRepository = Depends(get_movie_repository),
    settings: Settings = Depends(get_app_settings),
) -> CreateMovieUseCase:
    return CreateMovieUseCase(movies, max_title_chars=settings.max_title_chars)


def get_update_movie_use_case(
    movies: MovieRepository = Depends(get_movie_repository),
    settings: Settings = Depends(get_app_settings),
) -> UpdateMovieUseCase:
    return UpdateMovieUseCase(movies, max_title_chars=settings.max_title_chars)


def get_delete_movie_use_case(
    movies: MovieRepository = Depends(get_movie_repository),
) -> DeleteMovieUseCase:
    return DeleteMovieUseCase(movies)
