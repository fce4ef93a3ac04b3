"""
Name: PostgreSQL User Repository

Responsibilities:
  - Load users for authentication by email or ID
  - Insert users at registration
  - Map database rows into User records
"""

from typing import Optional

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ...exceptions import DatabaseError, DuplicateEmailError
from ...logger import logger
from ...users import User, UserRole

_USER_COLUMNS = "id, name, email, password_hash, role, created_at, updated_at"


def _row_to_user(row) -> User:
    try:
        role = UserRole(row[4])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[4]}") from exc

    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        role=role,
        created_at=row[5],
        updated_at=row[6],
    )


class PostgresUserRepository:
    """R: PostgreSQL implementation of UserRepository."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch user by email for authentication."""
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
                    (email,),
                ).fetchone()
            if not row:
                return None
            return _row_to_user(row)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresUserRepository: Get by email failed: {e}")
            raise DatabaseError(f"User lookup failed: {e}", original_error=e)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """R: Fetch user by ID for identity refresh."""
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
                    (user_id,),
                ).fetchone()
            if not row:
                return None
            return _row_to_user(row)
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresUserRepository: Get by id failed: {e}")
            raise DatabaseError(f"User lookup failed: {e}", original_error=e)

    def create_user(
        self, *, name: str, email: str, password_hash: str, role: UserRole
    ) -> User:
        """
        R: Create a new user and return the record.

        Raises:
            DuplicateEmailError: If the unique email constraint is violated
            DatabaseError: If database operation fails
        """
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (name, email, password_hash, role)
                    VALUES (%s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                    """,
                    (name, email, password_hash, role.value),
                ).fetchone()
            if not row:
                raise DatabaseError("User creation failed: no row returned")
            return _row_to_user(row)
        except pg_errors.UniqueViolation as e:
            raise DuplicateEmailError(email) from e
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"PostgresUserRepository: Create user failed: {e}")
            raise DatabaseError(f"User creation failed: {e}", original_error=e)
