"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with its middleware stack
  - Open the connection pool and repositories at startup, close at shutdown
  - Mount the JSON API under /api and the browser UI at /
  - Expose the health check endpoint

Collaborators:
  - container.py: build_repositories, build_auth_gate
  - infrastructure.db.pool: open_pool / close_pool
  - routes.router / auth_routes.router / ui.router
  - middleware.py / security.py: request hardening

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Repositories and the auth gate live on app.state; nothing global

Notes:
  - Middleware order matters: CORS → SecurityHeaders → RequestContext →
    BodyLimit → AuthGate → routes
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .auth_routes import router as auth_router
from .auth_users import AuthGate
from .config import Settings, get_settings
from .container import Repositories, build_auth_gate, build_repositories
from .exception_handlers import register_exception_handlers
from .infrastructure.db import close_pool, open_pool
from .logger import logger
from .middleware import AuthGateMiddleware, BodyLimitMiddleware, RequestContextMiddleware
from .routes import router
from .security import SecurityHeadersMiddleware
from .ui import STATIC_DIR
from .ui import router as ui_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool when PostgreSQL is used."""
    settings: Settings = app.state.settings

    if app.state.repositories is None:
        app.state.pool = open_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )
        app.state.repositories = build_repositories(settings, app.state.pool)

    logger.info(
        "Movie Catalog starting up",
        extra={
            "app_env": settings.app_env,
            "storage_backend": (
                "memory" if settings.uses_memory_storage() else "postgres"
            ),
            "jwt_access_ttl_minutes": settings.jwt_access_ttl_minutes,
        },
    )
    yield

    close_pool(app.state.pool)
    app.state.pool = None
    logger.info("Movie Catalog shutting down")


def create_app(
    settings: Settings | None = None,
    repositories: Repositories | None = None,
    auth_gate: AuthGate | None = None,
) -> FastAPI:
    """
    R: Application factory.

    Args:
        settings: Defaults to get_settings() (env / .env)
        repositories: Pre-built store handles; when omitted, in-memory
            storage is built immediately and PostgreSQL is opened at startup
        auth_gate: Defaults to one built from settings
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Movie Catalog API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "movies", "description": "Movie catalog (role-gated)"},
            {"name": "auth", "description": "User authentication (JWT cookie)"},
        ],
    )

    if repositories is None and settings.uses_memory_storage():
        repositories = build_repositories(settings)

    app.state.settings = settings
    app.state.repositories = repositories
    app.state.auth_gate = auth_gate or build_auth_gate(settings)
    app.state.pool = None

    # R: add_middleware wraps, so the last one added runs first
    app.add_middleware(
        AuthGateMiddleware, cookie_name=app.state.auth_gate.cookie_name
    )
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(RequestContextMiddleware)
    # R: Outside the request context so its 500s get the headers too
    app.add_middleware(
        SecurityHeadersMiddleware, is_production=settings.is_production()
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-Id"],
    )

    app.include_router(router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(ui_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        """
        R: Health check that pings the movie store.

        Returns:
            ok: True if the store answered
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        repositories = request.app.state.repositories
        try:
            if repositories is not None and repositories.movies.ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
