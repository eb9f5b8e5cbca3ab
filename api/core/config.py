"""
Process-wide settings, loaded once from the environment at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)

# Cost range accepted by bcrypt.gensalt.
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def cors_origins() -> tuple[str, ...]:
    return _env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_min: int = 120
    refresh_token_expire_hours: int = 48
    bcrypt_rounds: int = 12

    @property
    def access_token_ttl_s(self) -> int:
        return self.access_token_expire_min * 60

    @property
    def refresh_token_ttl_s(self) -> int:
        return self.refresh_token_expire_hours * 60 * 60


def load_settings() -> Settings:
    secret = os.environ.get("JWT_SECRET", "").strip()
    if not secret:
        # No signing key means no valid session can ever exist.
        raise RuntimeError("JWT_SECRET is not set.")

    return Settings(
        jwt_secret=secret,
        access_token_expire_min=_env_int("ACCESS_TOKEN_EXPIRE_MIN", 120),
        refresh_token_expire_hours=_env_int("REFRESH_TOKEN_EXPIRE_HOURS", 48),
        bcrypt_rounds=min(max(_env_int("BCRYPT_ROUNDS", 12), MIN_BCRYPT_ROUNDS), MAX_BCRYPT_ROUNDS),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
