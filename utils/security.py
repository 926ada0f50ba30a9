"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT session token creation/verification via PyJWT
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Union

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from utils.exceptions import (
    BadSignature,
    HashingFailure,
    InvalidSubject,
    MalformedToken,
    PasswordMismatch,
    TokenExpired,
)

TOKEN_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"
# any member of the HMAC family verifies; everything else is refused
ALLOWED_ALGORITHMS = ["HS256", "HS384", "HS512"]

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2.

    The encoded result carries the algorithm, parameters and salt, so two
    calls with the same password never return the same string.
    """
    try:
        return ph.hash(password)
    except HashingError as exc:
        raise HashingFailure(f"argon2 hashing failed: {exc}") from exc


def verify_password(password: str, password_hash: str) -> None:
    """Verify a plaintext password against an Argon2 hash; raise PasswordMismatch if it fails."""
    try:
        ph.verify(password_hash, password)
    except VerifyMismatchError as exc:
        raise PasswordMismatch("password does not match stored hash") from exc
    except (InvalidHashError, VerificationError) as exc:
        raise PasswordMismatch(f"stored hash could not be verified: {exc}") from exc


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_jwt(user_id: Union[uuid.UUID, str], secret: str, expires_in: timedelta) -> str:
    """Issue a signed session token for `user_id` valid for `expires_in`."""
    now = _now()
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def validate_jwt(token: str, secret: str) -> uuid.UUID:
    """
    Decode and validate a session token and return the user id it asserts.
    Raises MalformedToken, BadSignature, TokenExpired or InvalidSubject.
    """
    try:
        header = jwt.get_unverified_header(token)
    except jwt.DecodeError as exc:
        raise MalformedToken(f"token is not a JWT: {exc}") from exc

    if header.get("alg") not in ALLOWED_ALGORITHMS:
        raise BadSignature(f"unexpected signing method: {header.get('alg')!r}")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=ALLOWED_ALGORITHMS,
            issuer=TOKEN_ISSUER,
            options={"require": ["iss", "sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired("token expired") from exc
    except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
        raise BadSignature(f"signature rejected: {exc}") from exc
    except jwt.InvalidTokenError as exc:
        raise MalformedToken(f"invalid token: {exc}") from exc

    try:
        return uuid.UUID(str(claims["sub"]))
    except ValueError as exc:
        raise InvalidSubject(f"invalid user id in token: {claims['sub']!r}") from exc
