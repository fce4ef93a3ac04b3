"""
Name: Security Headers Middleware

Responsibilities:
  - Stamp browser hardening headers on every response
  - Pick a stricter Content-Security-Policy in production

Notes:
  - The UI ships its script and styles as static files, so the production
    CSP needs no 'unsafe-inline'
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_BASE_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=()",
}

_CSP_DIRECTIVES = {
    "default-src": "'self'",
    "img-src": "'self' data:",
    "connect-src": "'self'",
}


def _build_csp(is_production: bool) -> str:
    directives = dict(_CSP_DIRECTIVES)
    inline = "" if is_production else " 'unsafe-inline'"
    directives["script-src"] = "'self'" + inline
    directives["style-src"] = "'self'" + inline
    if is_production:
        directives["frame-ancestors"] = "'none'"
    return "; ".join(f"{name} {value}" for name, value in directives.items())


def security_headers(is_production: bool) -> Dict[str, str]:
    """R: Headers added to every response for the given environment."""
    headers = dict(_BASE_HEADERS)
    headers["Content-Security-Policy"] = _build_csp(is_production)
    if is_production:
        # HTTPS deployments only
        headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, is_production: bool = False):
        super().__init__(app)
        self._headers = security_headers(is_production)

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.update(self._headers)
        return response
