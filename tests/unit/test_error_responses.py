"""
Unit tests for RFC 7807 error rendering and exception handlers.

Tests:
  - Factories produce the expected status and code
  - Handlers render problem+json with field errors
  - Internal errors are opaque to the client
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from movie_catalog.error_responses import (
    ErrorCode,
    conflict,
    database_error,
    forbidden,
    not_found,
    payload_too_large,
    unauthorized,
    validation_error,
)
from movie_catalog.exception_handlers import register_exception_handlers
from movie_catalog.exceptions import DatabaseError, MovieCatalogError

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "exc,status,code",
    [
        (validation_error("bad"), 400, ErrorCode.VALIDATION_ERROR),
        (not_found("Movie", "1"), 404, ErrorCode.NOT_FOUND),
        (conflict("dup"), 400, ErrorCode.CONFLICT),
        (unauthorized(), 401, ErrorCode.UNAUTHORIZED),
        (forbidden(), 403, ErrorCode.FORBIDDEN),
        (payload_too_large(10), 413, ErrorCode.PAYLOAD_TOO_LARGE),
        (database_error(), 503, ErrorCode.DATABASE_ERROR),
    ],
)
def test_factories(exc, status, code):
    assert exc.status_code == status
    assert exc.code == code


class _Body(BaseModel):
    count: int


@pytest.fixture
def error_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/forbidden")
    def _forbidden():
        raise forbidden("Nope.")

    @app.get("/db")
    def _db():
        raise DatabaseError("connection refused: host=db password=hunter2")

    @app.get("/internal")
    def _internal():
        raise MovieCatalogError("invariant broken")

    @app.get("/boom")
    def _boom():
        raise RuntimeError("kaboom")

    @app.post("/body")
    def _body(body: _Body):
        return body

    return TestClient(app, raise_server_exceptions=False)


def test_app_exception_is_problem_json(error_client):
    response = error_client.get("/forbidden")

    assert response.status_code == 403
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["code"] == "FORBIDDEN"
    assert body["detail"] == "Nope."
    assert body["status"] == 403
    assert body["type"].endswith("/forbidden")


def test_request_validation_is_400_with_fields(error_client):
    response = error_client.post("/body", json={"count": "many"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == "count"
    assert body["detail"] == "Invalid fields: count"


def test_database_error_is_opaque_503(error_client):
    response = error_client.get("/db")

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "DATABASE_ERROR"
    assert "hunter2" not in response.text
    assert body["errors"][0]["error_id"]


def test_internal_error_is_500(error_client):
    response = error_client.get("/internal")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"
    assert "invariant" not in response.text


def test_unhandled_exception_is_500(error_client):
    response = error_client.get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"
    assert "kaboom" not in response.text
