"""
Name: PostgreSQL Connection Pool

Responsibilities:
  - Open and close the connection pool used by the repositories
  - Configure each connection with statement_timeout

Collaborators:
  - psycopg_pool: Connection pooling
  - main.py: opens the pool at startup, closes it at shutdown
  - container.py: hands the pool to repositories

Constraints:
  - No module-level singleton; the owner of the pool passes it on explicitly
"""

from functools import partial

from psycopg_pool import ConnectionPool

from ...logger import logger


def _configure_connection(conn, *, statement_timeout_ms: int) -> None:
    """R: Called for each new connection in the pool."""
    if statement_timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
        conn.commit()


def open_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    """
    R: Create and open a connection pool.

    Args:
        database_url: PostgreSQL connection string
        min_size: Minimum connections to maintain
        max_size: Maximum connections allowed
        statement_timeout_ms: Per-statement timeout (0 disables)
    """
    logger.info(
        "Initializing connection pool",
        extra={"min_size": min_size, "max_size": max_size},
    )
    pool = ConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        configure=partial(
            _configure_connection, statement_timeout_ms=statement_timeout_ms
        ),
        open=True,
    )
    logger.info("Connection pool initialized")
    return pool


def close_pool(pool: ConnectionPool | None) -> None:
    """R: Close a pool; safe to call with None."""
    if pool is None:
        return
    logger.info("Closing connection pool")
    pool.close()
    logger.info("Connection pool closed")
