"""
Unit tests for the /healthz endpoint.

Tests:
  - Connected store reports ok
  - Store failures report disconnected without raising
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from movie_catalog.container import Repositories
from movie_catalog.exceptions import DatabaseError
from movie_catalog.main import create_app

pytestmark = pytest.mark.unit


def test_connected(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["db"] == "connected"
    assert body["request_id"]


def test_disconnected(settings, user_repo):
    movies = Mock()
    movies.ping.side_effect = DatabaseError("Ping failed")
    app = create_app(
        settings=settings, repositories=Repositories(users=user_repo, movies=movies)
    )

    response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.json()["ok"] is False
    assert response.json()["db"] == "disconnected"
