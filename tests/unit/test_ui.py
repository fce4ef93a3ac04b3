"""
Unit tests for the browser UI pages.

Tests:
  - "/" renders the sign-in and registration forms
  - "/movie" renders for signed-in users and hides delete for non-managers
  - Static assets are served
"""

import pytest
from fastapi.testclient import TestClient

from movie_catalog.users import UserRole

pytestmark = pytest.mark.unit


def test_index_renders_forms(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'id="login-form"' in response.text
    assert 'id="register-form"' in response.text
    for role in ("MANAGER", "TEAMLEADER", "FLOORSTAFF"):
        assert f'value="{role}"' in response.text


def test_movie_page_for_manager(make_user, client_for):
    user = make_user(UserRole.MANAGER)

    response = client_for(user).get("/movie")

    assert response.status_code == 200
    assert user.email in response.text
    assert 'data-can-delete="true"' in response.text
    for rating in ("G", "PG", "M", "MA", "R"):
        assert f'<option value="{rating}">' in response.text


def test_movie_page_hides_delete_for_staff(make_user, client_for):
    response = client_for(make_user(UserRole.FLOORSTAFF)).get("/movie")

    assert 'data-can-delete="false"' in response.text


def test_movie_page_with_forged_token_redirects(app):
    visitor = TestClient(app)
    visitor.cookies.set("auth-token", "a.b.c")

    response = visitor.get("/movie", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


@pytest.mark.parametrize("asset", ["app.css", "auth.js", "movies.js"])
def test_static_assets(client, asset):
    assert client.get(f"/static/{asset}").status_code == 200
