"""
Name: HTTP Middleware

Responsibilities:
  - Assign each request an id and publish it to the log context
  - Echo the id back as X-Request-Id and log one line per request
  - Reject oversized request bodies (413)
  - Turn away protected paths that carry no plausible auth cookie

Collaborators:
  - context.py: request-scoped ContextVars
  - error_responses.py: problem+json rendering for 401/413
  - main.py: installs the stack in order

Constraints:
  - RequestContextMiddleware sits inside CORS and the security headers
  - The context is cleared when the request finishes
  - Unexpected exceptions end as an opaque 500 with X-Request-Id
  - AuthGateMiddleware checks cookie shape only; routes verify the token
"""

import time
import uuid
from typing import Iterable, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from .context import clear_context, http_method_var, http_path_var, request_id_var
from .error_responses import (
    internal_error,
    payload_too_large,
    problem_response,
    unauthorized,
)
from .logger import logger

DEFAULT_PROTECTED_PREFIXES: Tuple[str, ...] = ("/movie", "/api/movies")
REQUEST_ID_HEADER = "X-Request-Id"
_MAX_INBOUND_REQUEST_ID = 64


def _request_id_from(request: Request) -> str:
    # Accept a caller-supplied id when it is short and printable
    inbound = request.headers.get(REQUEST_ID_HEADER, "")
    if inbound and len(inbound) <= _MAX_INBOUND_REQUEST_ID and inbound.isprintable():
        return inbound
    return str(uuid.uuid4())


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """R: Bind request id, method and path for the lifetime of the request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _request_id_from(request)
        request_id_var.set(request_id)
        http_method_var.set(request.method)
        http_path_var.set(request.url.path)
        request.state.request_id = request_id

        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                # Rendered here so the 500 still carries the request id
                logger.exception(
                    "request failed", extra={"latency_ms": _elapsed_ms(started)}
                )
                response = problem_response(request, internal_error())
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request completed",
                extra={
                    "status_code": response.status_code,
                    "latency_ms": _elapsed_ms(started),
                },
            )
            return response
        finally:
            clear_context()


class BodyLimitMiddleware(BaseHTTPMiddleware):
    """R: 413 when the declared Content-Length exceeds max_bytes."""

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")

        if content_length:
            try:
                too_large = int(content_length) > self.max_bytes
            except ValueError:
                too_large = False  # Invalid content-length, let it through
            if too_large:
                logger.warning(
                    "Request body too large",
                    extra={
                        "content_length": content_length,
                        "max_bytes": self.max_bytes,
                    },
                )
                return problem_response(request, payload_too_large(self.max_bytes))

        return await call_next(request)


def _is_protected(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


def _looks_like_jwt(token: str) -> bool:
    return len(token.split(".")) == 3


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    R: Edge gate for protected paths.

    No cookie, or a cookie that is not three dot-separated segments, gets
    401 on /api/* and a redirect to "/" on pages. Anything else passes
    through to the route, which verifies the signature and expiry.
    """

    def __init__(
        self,
        app,
        cookie_name: str,
        protected_prefixes: Iterable[str] = DEFAULT_PROTECTED_PREFIXES,
    ):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.protected_prefixes = tuple(protected_prefixes)

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not _is_protected(path, self.protected_prefixes):
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        if token and _looks_like_jwt(token):
            return await call_next(request)

        detail = "Not authenticated." if not token else "Invalid token."
        if path.startswith("/api/"):
            return problem_response(request, unauthorized(detail))
        return RedirectResponse(url="/")
