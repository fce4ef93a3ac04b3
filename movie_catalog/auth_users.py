"""
Name: User Authentication (Auth Gate)

Responsibilities:
  - Hash and verify passwords using Argon2
  - Validate login credentials against the user repository
  - Extract the access token from the auth cookie and verify it
  - Provide the FastAPI dependency for authenticated routes

Collaborators:
  - token_codec.py: TokenCodec verification and TokenClaims
  - domain.repositories.UserRepository: credential lookups
  - container.py: get_auth_gate (composition root)
  - error_responses.py: unauthorized

Constraints:
  - The gate is read-only on the request
  - Every codec failure surfaces as INVALID_TOKEN; the cause is kept for logs
"""

from enum import Enum
from typing import Callable, Mapping

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Request

from .context import user_id_var
from .domain.repositories import UserRepository
from .error_responses import unauthorized
from .logger import logger
from .token_codec import TokenClaims, TokenCodec, TokenError
from .users import User

DEFAULT_ACCESS_TOKEN_COOKIE = "auth-token"

_password_hasher = PasswordHasher()


class AuthFailure(str, Enum):
    """R: Why a request could not be authenticated."""

    NO_TOKEN = "no_token"
    INVALID_TOKEN = "invalid_token"


class AuthenticationError(Exception):
    """R: Typed Auth Gate failure."""

    def __init__(self, failure: AuthFailure, cause: TokenError | None = None):
        self.failure = failure
        self.cause = cause
        super().__init__(failure.value)

    @property
    def detail(self) -> str:
        if self.failure == AuthFailure.NO_TOKEN:
            return "Not authenticated."
        if isinstance(self.cause, TokenError) and self.cause.reason == "expired":
            return "Token expired."
        return "Invalid token."


def hash_password(password: str) -> str:
    """R: Hash a password using Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """R: Verify password against stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def has_nul(value: str | None) -> bool:
    return bool(value) and "\x00" in value


def authenticate_user(
    users: UserRepository, email: str, password: str
) -> User | None:
    """R: Validate credentials; no distinction between unknown user and bad password."""
    normalized_email = normalize_email(email)
    if not normalized_email:
        return None
    # NUL never reaches the store; no stored credential can contain it
    if has_nul(normalized_email) or has_nul(password):
        return None

    user = users.get_user_by_email(normalized_email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: bad password", extra={"user_id": user.id})
        return None
    return user


def claims_for(user: User) -> TokenClaims:
    """R: Claims minted at sign-in for a user."""
    return TokenClaims(user_id=user.id, email=user.email, role=user.role.value)


class AuthGate:
    """R: Turn an inbound request into verified claims or a typed failure."""

    def __init__(
        self, codec: TokenCodec, cookie_name: str = DEFAULT_ACCESS_TOKEN_COOKIE
    ):
        self.codec = codec
        self.cookie_name = cookie_name or DEFAULT_ACCESS_TOKEN_COOKIE

    def extract_token(self, cookies: Mapping[str, str]) -> str | None:
        return cookies.get(self.cookie_name) or None

    def authenticate(self, request: Request) -> TokenClaims:
        """
        R: Verify the token carried by the auth cookie.

        Raises:
            AuthenticationError: NO_TOKEN or INVALID_TOKEN
        """
        token = self.extract_token(request.cookies)
        if not token:
            raise AuthenticationError(AuthFailure.NO_TOKEN)
        try:
            return self.codec.verify(token)
        except TokenError as exc:
            raise AuthenticationError(AuthFailure.INVALID_TOKEN, cause=exc) from exc


def require_user() -> Callable:
    """R: FastAPI dependency that requires a valid access token cookie."""
    from .container import get_auth_gate

    def dependency(
        request: Request, gate: AuthGate = Depends(get_auth_gate)
    ) -> TokenClaims:
        try:
            claims = gate.authenticate(request)
        except AuthenticationError as exc:
            if exc.cause is not None:
                logger.info(
                    "Token rejected", extra={"reason": exc.cause.reason}
                )
            raise unauthorized(exc.detail) from exc

        request.state.claims = claims
        user_id_var.set(str(claims.user_id))
        return claims

    return dependency
