"""
Unit tests for the PostgreSQL repositories with a mocked pool.

Tests:
  - Row mapping into entities
  - Driver failures surface as DatabaseError
  - Unique violations surface as DuplicateEmailError
"""

from contextlib import contextmanager
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest
from psycopg import errors as pg_errors

from movie_catalog.domain.entities import MovieDraft, MovieRating
from movie_catalog.exceptions import DatabaseError, DuplicateEmailError
from movie_catalog.infrastructure.repositories import (
    PostgresMovieRepository,
    PostgresUserRepository,
)
from movie_catalog.users import UserRole

pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
DRAFT = MovieDraft(title="Alien", rating=MovieRating.MA, release_date=date(1979, 5, 25))


def _pool_with(conn) -> MagicMock:
    pool = MagicMock()

    @contextmanager
    def connection():
        yield conn

    pool.connection.side_effect = connection
    return pool


def test_create_movie_maps_row():
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (
        1, "Alien", "MA", date(1979, 5, 25), NOW, NOW,
    )

    movie = PostgresMovieRepository(_pool_with(conn)).create_movie(DRAFT)

    assert movie.id == 1
    assert movie.rating == MovieRating.MA
    sql, params = conn.execute.call_args.args
    assert "INSERT INTO movies" in sql
    assert params == ("Alien", "MA", date(1979, 5, 25))


def test_get_missing_movie():
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = None

    assert PostgresMovieRepository(_pool_with(conn)).get_movie(5) is None


def test_unknown_rating_in_row_is_database_error():
    conn = MagicMock()
    conn.execute.return_value.fetchall.return_value = [
        (1, "Alien", "NC-17", date(1979, 5, 25), NOW, NOW)
    ]

    with pytest.raises(DatabaseError):
        PostgresMovieRepository(_pool_with(conn)).list_movies()


def test_driver_failure_is_database_error():
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("connection lost")

    with pytest.raises(DatabaseError) as exc_info:
        PostgresMovieRepository(_pool_with(conn)).delete_movie(1)

    assert "connection lost" in exc_info.value.message


def test_delete_uses_rowcount():
    conn = MagicMock()
    conn.execute.return_value.rowcount = 0

    assert PostgresMovieRepository(_pool_with(conn)).delete_movie(1) is False


def test_ping_failure_raises():
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("down")

    with pytest.raises(DatabaseError):
        PostgresMovieRepository(_pool_with(conn)).ping()


def test_create_user_duplicate_email():
    conn = MagicMock()
    conn.execute.side_effect = pg_errors.UniqueViolation("duplicate key")

    with pytest.raises(DuplicateEmailError):
        PostgresUserRepository(_pool_with(conn)).create_user(
            name="A", email="a@example.com", password_hash="h", role=UserRole.MANAGER
        )


def test_get_user_maps_row():
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (
        3, "Ann", "ann@example.com", "hash", "TEAMLEADER", NOW, NOW,
    )

    user = PostgresUserRepository(_pool_with(conn)).get_user_by_id(3)

    assert user.name == "Ann"
    assert user.role == UserRole.TEAMLEADER
