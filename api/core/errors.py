"""
Error taxonomy shared by all feature packages.

Services and repositories raise these; `main.py` turns them into JSON
responses. `detail` is always safe to show to the client.
"""

from __future__ import annotations


class ApiError(RuntimeError):
    status_code = 500
    code = "error"
    default_detail = "Something went wrong."

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class MissingCredentials(ApiError):
    status_code = 401
    code = "missing_credentials"
    default_detail = "Missing credentials."


class Unauthorized(ApiError):
    status_code = 401
    code = "unauthorized"
    default_detail = "Unauthorized."


class TokenExpired(ApiError):
    status_code = 401
    code = "token_expired"
    default_detail = "Token expired."


class UserExists(ApiError):
    status_code = 409
    code = "user_exists"
    default_detail = "User already exists."


class NotFound(ApiError):
    # Also used for resources owned by someone else.
    status_code = 404
    code = "not_found"
    default_detail = "Resource not found."


class NothingChanged(ApiError):
    status_code = 409
    code = "nothing_changed"
    default_detail = "Nothing changed."


class InternalError(ApiError):
    status_code = 500
    code = "internal_error"
    default_detail = "Internal server error."
