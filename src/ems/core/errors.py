"""Application error taxonomy.

Every workflow-level failure carries an HTTP status, a stable code and a
human message. Handlers in core/exceptions.py turn them into the error
envelope at the HTTP boundary.
"""

from typing import Any


class AppError(Exception):
    """Base class for expected application failures."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTHENTICATION_ERROR"


class AuthorizationError(AppError):
    status_code = 403
    code = "AUTHORIZATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"


class TokenError(AuthenticationError):
    """Token verification failure. Subclasses carry distinct codes."""


class TokenExpiredError(TokenError):
    code = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenInvalidError(TokenError):
    code = "TOKEN_INVALID"

    def __init__(self, message: str = "Token is invalid"):
        super().__init__(message)


class TokenMalformedError(TokenError):
    code = "TOKEN_MALFORMED"

    def __init__(self, message: str = "Token is malformed"):
        super().__init__(message)
