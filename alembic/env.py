"""Alembic environment: migrations run against the app's configured database."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from movie_catalog.config import get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Raw SQL migrations; no ORM metadata to autogenerate from
target_metadata = None

_PSYCOPG_SCHEMES = ("postgresql://", "postgres://")


def database_url() -> str:
    """R: DATABASE_URL as a SQLAlchemy URL on the psycopg 3 driver."""
    url = config.get_main_option("sqlalchemy.url") or get_settings().database_url
    for scheme in _PSYCOPG_SCHEMES:
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme):]
    return url


def run_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
