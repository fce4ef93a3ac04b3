"""
Name: Browser UI Routes

Responsibilities:
  - Render the sign-in / registration page at "/"
  - Render the movie management page at "/movie"

Collaborators:
  - fastapi.templating.Jinja2Templates: server-side HTML
  - auth_users.AuthGate: decides whether the visitor is signed in
  - rbac.is_allowed: hides delete controls the role cannot use

Notes:
  - Pages only carry the shell; data goes through the JSON API with the
    auth cookie (see static/movies.js)
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .auth_users import AuthenticationError, AuthGate
from .container import get_auth_gate
from .domain.entities import MovieRating
from .rbac import MovieOperation, is_allowed
from .token_codec import TokenClaims
from .users import UserRole

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False)


def _current_claims(gate: AuthGate, request: Request) -> TokenClaims | None:
    try:
        return gate.authenticate(request)
    except AuthenticationError:
        return None


@router.get("/", response_class=HTMLResponse)
def index(request: Request, gate: AuthGate = Depends(get_auth_gate)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "roles": [role.value for role in UserRole],
            "signed_in": _current_claims(gate, request) is not None,
        },
    )


@router.get("/movie", response_class=HTMLResponse)
def movie_page(request: Request, gate: AuthGate = Depends(get_auth_gate)):
    claims = _current_claims(gate, request)
    if claims is None:
        return RedirectResponse(url="/", status_code=303)
    return templates.TemplateResponse(
        request,
        "movie.html",
        {
            "claims": claims,
            "ratings": [rating.value for rating in MovieRating],
            "can_delete": is_allowed(claims.role, MovieOperation.DELETE),
        },
    )
