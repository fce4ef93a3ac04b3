"""
Name: Auth Routes (JWT)

Responsibilities:
  - Handle login/logout with the auth-token cookie
  - Register new staff accounts
  - Expose /auth/me for current user info

Collaborators:
  - auth_users.py: authenticate_user, hash_password, require_user
  - container.py: user repository, token codec and settings providers
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .auth_users import (
    authenticate_user,
    claims_for,
    has_nul,
    hash_password,
    normalize_email,
    require_user,
)
from .config import Settings
from .container import get_app_settings, get_token_codec, get_user_repository
from .domain.repositories import UserRepository
from .error_responses import OPENAPI_ERROR_RESPONSES, conflict, not_found, unauthorized
from .exceptions import DuplicateEmailError
from .logger import logger
from .token_codec import TokenClaims, TokenCodec
from .users import User, UserRole

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return normalize_email(v)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)
    role: UserRole

    @field_validator("name", "email", "password")
    @classmethod
    def reject_nul(cls, v: str) -> str:
        if has_nul(v):
            raise ValueError("must not contain NUL characters")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime | None
    updated_at: datetime | None


class AuthMessageResponse(BaseModel):
    message: str
    user: UserResponse


class MeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user: UserResponse
    is_authenticated: bool = True


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _set_auth_cookie(
    response: Response, settings: Settings, token: str, expires_in: int
) -> None:
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _clear_auth_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.jwt_cookie_name,
        path="/",
        samesite="lax",
        secure=settings.jwt_cookie_secure,
    )


@router.post("/auth/login", response_model=AuthMessageResponse, tags=["auth"])
def login(
    req: LoginRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_app_settings),
):
    user = authenticate_user(users, req.email, req.password)
    if not user:
        raise unauthorized("Invalid credentials.")

    token, expires_in = codec.issue(claims_for(user))
    _set_auth_cookie(response, settings, token, expires_in)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return AuthMessageResponse(
        message="Login successful", user=_to_user_response(user)
    )


@router.post(
    "/auth/register",
    response_model=AuthMessageResponse,
    status_code=201,
    tags=["auth"],
)
def register(
    req: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
):
    try:
        user = users.create_user(
            name=req.name,
            email=req.email,
            password_hash=hash_password(req.password),
            role=req.role,
        )
    except DuplicateEmailError as exc:
        raise conflict("User with this email already exists.") from exc

    logger.info(
        "User registered", extra={"user_id": user.id, "role": user.role.value}
    )
    return AuthMessageResponse(
        message="User created successfully", user=_to_user_response(user)
    )


@router.get("/auth/me", response_model=MeResponse, tags=["auth"])
def me(
    claims: TokenClaims = Depends(require_user()),
    users: UserRepository = Depends(get_user_repository),
):
    # Token may outlive the account it was issued for
    user = users.get_user_by_id(claims.user_id)
    if not user:
        raise not_found("User", str(claims.user_id))
    return MeResponse(user=_to_user_response(user))


@router.post("/auth/logout", tags=["auth"])
def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    _clear_auth_cookie(response, settings)
    return {"ok": True}
