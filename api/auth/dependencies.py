"""
Auth dependencies for protected FastAPI routes.

`get_current_user` is the single place where access tokens are verified.
Routers that need an identity declare it once at router level, and FastAPI
caches the result for the rest of the request.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from core import errors
from core.config import get_settings

from . import schemas, security, service
from .repository import PostgresUserRepository, UserRepository

BEARER_PREFIX = "Bearer "


def get_token_service() -> security.TokenService:
    return security.TokenService(get_settings())


def get_user_repository() -> UserRepository:
    return PostgresUserRepository(bcrypt_rounds=get_settings().bcrypt_rounds)


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise errors.MissingCredentials("Missing Authorization header.")

    if raw[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX.lower():
        raise errors.Unauthorized("Authorization must be: Bearer <token>.")

    token = raw[len(BEARER_PREFIX):].strip()
    if not token:
        raise errors.MissingCredentials("Missing bearer token.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(
    request: Request,
    access_token: str = Depends(get_bearer_token),
    users: UserRepository = Depends(get_user_repository),
    tokens: security.TokenService = Depends(get_token_service),
) -> schemas.User:
    user = await service.get_user_from_access_token(access_token, users=users, tokens=tokens)
    request.state.user = user
    return user
