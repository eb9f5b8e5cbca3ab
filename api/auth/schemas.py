"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from core.schemas import ApiModel

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


class RegisterRequest(ApiModel):
    # Emptiness is checked by the service so it maps to MissingCredentials.
    username: str = Field(default="", max_length=64)
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
        return value


class LoginRequest(ApiModel):
    username: str = Field(default="", max_length=64)
    password: str = Field(default="", max_length=128)


class RefreshRequest(ApiModel):
    refresh_token: str = ""


class User(BaseModel):
    id: UUID
    username: str
    email: str
    password_hash: str


class Claims(BaseModel):
    sub: str
    iss: str
    exp: int


class TokenPairResponse(ApiModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class AuthResponse(TokenPairResponse):
    username: str


class CheckResponse(ApiModel):
    ok: bool = True
    username: str
