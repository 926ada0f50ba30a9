"""
Typed failures raised by the auth core and the store helpers.

Every class carries a fixed public message used in HTTP responses; the
exception text itself is internal detail and is only written to the logs.
"""
from __future__ import annotations


class ChirpyError(Exception):
    status = 500
    code = "INTERNAL_ERROR"
    public_message = "An unexpected error occurred"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class ValidationFailure(ChirpyError):
    status = 400
    code = "BAD_REQUEST"
    public_message = "Invalid input"

    def __init__(self, detail: str | None = None):
        super().__init__(detail)
        # validation messages are safe to show the caller
        if detail:
            self.public_message = detail


class AuthenticationFailure(ChirpyError):
    status = 401
    code = "UNAUTHORIZED"
    public_message = "Not authenticated"


class MissingCredential(AuthenticationFailure):
    public_message = "Missing or invalid authorization header"


class PasswordMismatch(AuthenticationFailure):
    public_message = "Incorrect email or password"


class InvalidCredentials(AuthenticationFailure):
    """Login failure; `reason` tells unknown email and wrong password apart."""

    public_message = "Incorrect email or password"

    def __init__(self, reason: str):
        super().__init__(f"login rejected: {reason}")
        self.reason = reason


class MalformedToken(AuthenticationFailure):
    public_message = "Invalid token"


class BadSignature(AuthenticationFailure):
    public_message = "Invalid token"


class TokenExpired(AuthenticationFailure):
    public_message = "Token expired"


class InvalidSubject(AuthenticationFailure):
    public_message = "Invalid token"


class RefreshTokenNotFound(AuthenticationFailure):
    public_message = "Invalid refresh token"


class RefreshTokenExpired(AuthenticationFailure):
    public_message = "Invalid refresh token"


class RefreshTokenRevoked(AuthenticationFailure):
    public_message = "Invalid refresh token"


class InvalidAPIKey(AuthenticationFailure):
    public_message = "Invalid API key"


class AuthorizationFailure(ChirpyError):
    status = 403
    code = "FORBIDDEN"
    public_message = "Forbidden"

    def __init__(self, detail: str | None = None):
        super().__init__(detail)
        if detail:
            self.public_message = detail


class NotFoundError(ChirpyError):
    status = 404
    code = "NOT_FOUND"
    public_message = "Resource not found"

    def __init__(self, detail: str | None = None):
        super().__init__(detail)
        if detail:
            self.public_message = detail


class UpstreamFailure(ChirpyError):
    """Store or random source error."""


class HashingFailure(UpstreamFailure):
    pass
