"""
Name: Token Codec (JWT)

Responsibilities:
  - Issue signed, time-limited access tokens for a user identity
  - Verify structure, expiry and signature of presented tokens
  - Return the embedded claims unchanged

Collaborators:
  - PyJWT: HS256 signing and verification
  - container.py: builds the codec with the configured secret and TTL
  - auth_users.py: AuthGate delegates verification here

Constraints:
  - Stateless: the secret is injected at construction and never mutated
  - Expiry is checked before the signature, so an expired token is always
    reported as expired
  - Role is carried as a raw string; the access policy decides what it means
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

JWT_ALGORITHM = "HS256"

CLAIM_SUB = "sub"
CLAIM_EMAIL = "email"
CLAIM_ROLE = "role"
CLAIM_IAT = "iat"
CLAIM_EXP = "exp"

DEFAULT_TTL_SECONDS = 60 * 60


class TokenError(Exception):
    """R: Base class for token verification failures."""

    reason = "invalid"


class TokenMalformedError(TokenError):
    """R: Not a three-segment JWT, or its segments do not decode."""

    reason = "malformed"


class TokenSignatureError(TokenError):
    """R: Signature does not match the configured secret."""

    reason = "signature_invalid"


class TokenExpiredError(TokenError):
    """R: The embedded expiry is in the past."""

    reason = "expired"


@dataclass(frozen=True)
class TokenClaims:
    """R: Identity carried inside an access token."""

    user_id: int
    email: str
    role: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None


def has_token_shape(token: str | None) -> bool:
    """R: Cheap structural check: three non-empty dot-separated segments."""
    if not token:
        return False
    parts = token.split(".")
    return len(parts) == 3 and all(parts)


class TokenCodec:
    """R: Encode/decode access tokens with an injected shared secret."""

    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        if not secret:
            raise ValueError("secret must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(
        self, claims: TokenClaims, *, now: datetime | None = None
    ) -> tuple[str, int]:
        """
        R: Create a signed access token.

        Returns:
            (token, expires_in_seconds)
        """
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self.ttl_seconds)
        payload: dict[str, object] = {
            CLAIM_SUB: str(claims.user_id),
            CLAIM_EMAIL: claims.email,
            CLAIM_ROLE: _role_name(claims.role),
            CLAIM_IAT: int(issued_at.timestamp()),
            CLAIM_EXP: int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        return token, self.ttl_seconds

    def verify(self, token: str, *, now: datetime | None = None) -> TokenClaims:
        """
        R: Verify a token and return its claims.

        Raises:
            TokenMalformedError: wrong shape or undecodable segments
            TokenExpiredError: now is past exp (signature not consulted)
            TokenSignatureError: signature or algorithm mismatch
        """
        if not has_token_shape(token):
            raise TokenMalformedError("Token must have three segments.")

        try:
            unverified = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError("Token could not be decoded.") from exc

        exp = unverified.get(CLAIM_EXP)
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise TokenMalformedError("Token has no valid expiry.")
        current = (now or datetime.now(timezone.utc)).timestamp()
        if exp < current:
            raise TokenExpiredError("Token expired.")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_EXP],
                    # expiry was decided above; a token is valid through its exp second
                    "verify_exp": False,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            raise TokenSignatureError("Token signature is invalid.") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformedError("Token claims are invalid.") from exc

        return _claims_from_payload(payload)


def _role_name(role) -> str:
    # UserRole is a str mixin; str() of a member would give "UserRole.X"
    return str(getattr(role, "value", role))


def _claims_from_payload(payload: dict) -> TokenClaims:
    try:
        user_id = int(payload[CLAIM_SUB])
    except (TypeError, ValueError) as exc:
        raise TokenMalformedError("Token subject is not a user id.") from exc

    email = payload.get(CLAIM_EMAIL)
    role = payload.get(CLAIM_ROLE)
    if not isinstance(email, str) or not isinstance(role, str):
        raise TokenMalformedError("Token claims are invalid.")

    issued_at = payload.get(CLAIM_IAT)
    return TokenClaims(
        user_id=user_id,
        email=email,
        role=role,
        issued_at=(
            datetime.fromtimestamp(issued_at, tz=timezone.utc)
            if isinstance(issued_at, (int, float))
            else None
        ),
        expires_at=datetime.fromtimestamp(payload[CLAIM_EXP], tz=timezone.utc),
    )
