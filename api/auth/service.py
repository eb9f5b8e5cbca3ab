"""
Auth business logic.
"""

from __future__ import annotations

import logging

from core import errors

from . import schemas, security
from .repository import UserRepository

logger = logging.getLogger(__name__)

# Same message for unknown user and wrong password.
INVALID_LOGIN = "Invalid username or password."


def _to_auth_response(tokens: schemas.TokenPairResponse, username: str) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        username=username,
    )


async def register(
    payload: schemas.RegisterRequest,
    *,
    users: UserRepository,
    tokens: security.TokenService,
) -> schemas.AuthResponse:
    username = payload.username.strip()
    email = payload.email.strip()
    if not username or not email or not payload.password:
        raise errors.MissingCredentials()

    if await users.user_exists(username, email):
        raise errors.UserExists()

    user = await users.create_user(username, email, payload.password)
    logger.info("user_registered user_id=%s", user.id)

    # Registering logs the user in straight away.
    return _to_auth_response(tokens.issue_token_pair(user.username), user.username)


async def login(
    payload: schemas.LoginRequest,
    *,
    users: UserRepository,
    tokens: security.TokenService,
) -> schemas.AuthResponse:
    username = payload.username.strip()
    if not username or not payload.password:
        raise errors.MissingCredentials()

    try:
        user = await users.get_user(username)
    except errors.Unauthorized as exc:
        raise errors.Unauthorized(INVALID_LOGIN) from exc

    if not security.verify_password(payload.password, user.password_hash):
        raise errors.Unauthorized(INVALID_LOGIN)

    return _to_auth_response(tokens.issue_token_pair(user.username), user.username)


async def refresh_tokens(
    payload: schemas.RefreshRequest,
    *,
    tokens: security.TokenService,
) -> schemas.TokenPairResponse:
    incoming_refresh = (payload.refresh_token or "").strip()
    if not incoming_refresh:
        raise errors.MissingCredentials("refreshToken is required.")

    try:
        claims = tokens.verify(incoming_refresh)
    except security.InvalidToken as exc:
        raise errors.Unauthorized("Invalid refresh token.") from exc
    # TokenExpired propagates so the client knows to log in again.

    # The previous refresh token is not revoked; it stays valid until it expires.
    return tokens.issue_token_pair(claims.sub)


async def get_user_from_access_token(
    access_token: str,
    *,
    users: UserRepository,
    tokens: security.TokenService,
) -> schemas.User:
    try:
        claims = tokens.verify(access_token)
    except (security.InvalidToken, errors.TokenExpired) as exc:
        raise errors.Unauthorized() from exc

    # A valid token for a user that no longer exists is not a session.
    return await users.get_user(claims.sub)
