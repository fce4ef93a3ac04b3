"""
Name: Application Configuration (Settings)

Responsibilities:
  - Read typed settings from the environment (and .env) once per process
  - Reject unusable combinations at startup (pool sizes, TTL, prod secret)
  - Decide between the Postgres and in-memory storage backends

Collaborators:
  - main.py: CORS origins, body limit, cookie name, environment flags
  - container.py: storage backend, pool sizing and token codec inputs
  - alembic/env.py: database URL for migrations

Constraints:
  - Pure configuration; nothing here touches the network
  - The JWT secret is read here and injected into TokenCodec, never re-read

Notes:
  - get_settings() is cached; tests call get_settings.cache_clear()
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: development | test | production
        storage_backend: postgres | memory (memory is forced in test env)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        max_body_bytes: Max request body size (default: 1MB)
        max_title_chars: Maximum movie title length (default: 200)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: 60)
        jwt_cookie_name: Cookie name for access token
        jwt_cookie_secure: Set Secure on auth cookies
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required (no defaults)
    database_url: str

    app_env: str = "development"
    storage_backend: str = "postgres"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - Hardening
    max_body_bytes: int = 1024 * 1024  # 1MB

    # Movie payload limits
    max_title_chars: int = 200

    # Security - JWT Auth
    jwt_secret: str = DEV_JWT_SECRET
    jwt_access_ttl_minutes: int = 60
    jwt_cookie_name: str = "auth-token"
    jwt_cookie_secure: bool = False

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    @field_validator("app_env")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_must_be_known(cls, v: str) -> str:
        value = v.strip().lower()
        if value not in {"postgres", "memory"}:
            raise ValueError("storage_backend must be 'postgres' or 'memory'")
        return value

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    @model_validator(mode="after")
    def check_consistency(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must not exceed "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        if self.is_production() and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env in {"test", "testing"}

    def uses_memory_storage(self) -> bool:
        """In-memory repositories are used for tests and explicit opt-in."""
        return self.is_test() or self.storage_backend == "memory"

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
