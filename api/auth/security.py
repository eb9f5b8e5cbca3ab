"""
Auth security helpers: password hashing and the token service.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from core import errors
from core.config import Settings

from .schemas import Claims, TokenPairResponse

# Constant issuer tag carried by every token this service signs.
TOKEN_ISSUER = "flexnotes"


class InvalidToken(errors.Unauthorized):
    default_detail = "Invalid token."


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str, *, rounds: int = 12) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise errors.MissingCredentials("Password is empty.")
    try:
        hashed = bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds))
    except ValueError as exc:
        raise errors.InternalError("Password could not be hashed.") from exc
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


class TokenService:
    """
    Issues and verifies HS256 access/refresh tokens.

    Both token kinds carry the same claims and differ only in lifetime.
    `verify` checks expiry itself against `clock` rather than relying on
    PyJWT, so an expired-but-authentic token is reported as `TokenExpired`
    and anything else wrong with it as `InvalidToken`.
    """

    def __init__(self, settings: Settings, *, clock: Callable[[], int] = now_epoch_s) -> None:
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._access_ttl_s = settings.access_token_ttl_s
        self._refresh_ttl_s = settings.refresh_token_ttl_s
        self._clock = clock

    def _build(self, subject: str, ttl_s: int) -> str:
        payload = {
            "sub": subject,
            "iss": TOKEN_ISSUER,
            "exp": self._clock() + ttl_s,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_access_token(self, subject: str) -> str:
        return self._build(subject, self._access_ttl_s)

    def issue_refresh_token(self, subject: str) -> str:
        return self._build(subject, self._refresh_ttl_s)

    def issue_token_pair(self, subject: str) -> TokenPairResponse:
        return TokenPairResponse(
            access_token=self.issue_access_token(subject),
            refresh_token=self.issue_refresh_token(subject),
        )

    def verify(self, token: str) -> Claims:
        raw = (token or "").strip()
        if not raw:
            raise InvalidToken("Token is empty.")

        try:
            payload: dict[str, Any] = jwt.decode(
                raw,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": ["sub", "iss", "exp"]},
            )
            claims = Claims.model_validate(payload)
        except (jwt.InvalidTokenError, ValidationError) as exc:
            raise InvalidToken() from exc

        if claims.iss != TOKEN_ISSUER:
            raise InvalidToken()
        if claims.exp < self._clock():
            raise errors.TokenExpired()
        return claims
