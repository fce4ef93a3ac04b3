"""
Name: PostgreSQL Movie Repository Implementation

Responsibilities:
  - Implement MovieRepository for PostgreSQL
  - Map database rows into Movie entities
  - Let the database assign ids and timestamps

Collaborators:
  - domain.repositories.MovieRepository: Interface implementation
  - domain.entities: Movie, MovieDraft, MovieRating
  - infrastructure.db.pool: Connection pool (injected)

Constraints:
  - Every failure surfaces as DatabaseError
  - updated_at is bumped by the UPDATE statement itself
"""

from typing import List, Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import Movie, MovieDraft, MovieRating
from ...exceptions import DatabaseError
from ...logger import logger

_MOVIE_COLUMNS = "id, title, rating, release_date, created_at, updated_at"


def _row_to_movie(row) -> Movie:
    try:
        rating = MovieRating(row[2])
    except ValueError as exc:
        raise DatabaseError(f"Invalid movie rating in database: {row[2]}") from exc

    return Movie(
        id=row[0],
        title=row[1],
        rating=rating,
        release_date=row[3],
        created_at=row[4],
        updated_at=row[5],
    )


class PostgresMovieRepository:
    """R: PostgreSQL implementation of MovieRepository."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    def list_movies(self) -> List[Movie]:
        """R: All movies, newest first."""
        try:
            with self._pool.connection() as conn:
                rows = conn.execute(
                    f"""
                    SELECT {_MOVIE_COLUMNS}
                    FROM movies
                    ORDER BY created_at DESC, id DESC
                    """
                ).fetchall()
            return [_row_to_movie(row) for row in rows]
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresMovieRepository: List movies failed: {e}")
            raise DatabaseError(f"Movie listing failed: {e}", original_error=e)

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"SELECT {_MOVIE_COLUMNS} FROM movies WHERE id = %s",
                    (movie_id,),
                ).fetchone()
            if not row:
                return None
            return _row_to_movie(row)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresMovieRepository: Get movie {movie_id} failed: {e}")
            raise DatabaseError(f"Movie lookup failed: {e}", original_error=e)

    def create_movie(self, draft: MovieDraft) -> Movie:
        """
        R: Insert a movie and return it with id and timestamps.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO movies (title, rating, release_date)
                    VALUES (%s, %s, %s)
                    RETURNING {_MOVIE_COLUMNS}
                    """,
                    (draft.title, draft.rating.value, draft.release_date),
                ).fetchone()
            if not row:
                raise DatabaseError("Movie creation failed: no row returned")
            movie = _row_to_movie(row)
            logger.info(f"PostgresMovieRepository: Movie created: {movie.id}")
            return movie
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresMovieRepository: Create movie failed: {e}")
            raise DatabaseError(f"Movie creation failed: {e}", original_error=e)

    def update_movie(self, movie_id: int, draft: MovieDraft) -> Optional[Movie]:
        """R: Full replace; None when the movie does not exist."""
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"""
                    UPDATE movies
                    SET title = %s,
                        rating = %s,
                        release_date = %s,
                        updated_at = GREATEST(NOW(), created_at)
                    WHERE id = %s
                    RETURNING {_MOVIE_COLUMNS}
                    """,
                    (draft.title, draft.rating.value, draft.release_date, movie_id),
                ).fetchone()
            if not row:
                return None
            logger.info(f"PostgresMovieRepository: Movie updated: {movie_id}")
            return _row_to_movie(row)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(
                f"PostgresMovieRepository: Update movie {movie_id} failed: {e}"
            )
            raise DatabaseError(f"Movie update failed: {e}", original_error=e)

    def delete_movie(self, movie_id: int) -> bool:
        """
        R: Permanently delete a movie.

        Returns:
            True if a row was deleted, False otherwise
        """
        try:
            with self._pool.connection() as conn:
                result = conn.execute(
                    "DELETE FROM movies WHERE id = %s",
                    (movie_id,),
                )
                deleted = result.rowcount > 0
            if deleted:
                logger.info(f"PostgresMovieRepository: Movie deleted: {movie_id}")
            return deleted
        except Exception as e:
            logger.error(
                f"PostgresMovieRepository: Delete movie {movie_id} failed: {e}"
            )
            raise DatabaseError(f"Movie deletion failed: {e}", original_error=e)

    def ping(self) -> bool:
        """R: Verify database connectivity via pool."""
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
            return True
        except Exception as e:
            logger.warning(f"PostgresMovieRepository: ping failed: {e}")
            raise DatabaseError(f"Ping failed: {e}", original_error=e)
