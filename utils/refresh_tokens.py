"""
Opaque refresh tokens: generation, persistence, validation and revocation.

Tokens are 32 random bytes, hex encoded. The record lives in the database;
a token is usable while `now < expires_at` and `revoked_at` is null.
Validation never mutates the record, so a token can be presented again
until it expires or is revoked.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable, Union

from sqlalchemy.exc import SQLAlchemyError

from models.base_model import as_utc, utcnow
from utils.exceptions import (
    RefreshTokenExpired,
    RefreshTokenNotFound,
    RefreshTokenRevoked,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32
DEFAULT_REFRESH_TTL = timedelta(days=60)


def make_refresh_token() -> str:
    """Return a new 64 character hex refresh token."""
    try:
        return secrets.token_hex(REFRESH_TOKEN_BYTES)
    except OSError as exc:
        raise UpstreamFailure(f"failed to generate random bytes: {exc}") from exc


class RefreshTokenManager:
    def __init__(self, storage, ttl: timedelta = DEFAULT_REFRESH_TTL,
                 clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self.ttl = ttl
        self.clock = clock

    def issue(self, user_id: Union[uuid.UUID, str]) -> str:
        token = make_refresh_token()
        now = self.clock()
        try:
            self.storage.create_refresh_token(
                token=token,
                user_id=str(user_id),
                expires_at=now + self.ttl,
                created_at=now,
            )
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"could not persist refresh token: {exc}") from exc
        logger.info("issued refresh token for user %s", user_id)
        return token

    def validate(self, token: str) -> uuid.UUID:
        """Return the owner of `token`; raise if it is unknown, expired or revoked."""
        try:
            record = self.storage.get_refresh_token(token)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"could not load refresh token: {exc}") from exc

        if record is None:
            raise RefreshTokenNotFound("refresh token does not exist")
        if self.clock() >= as_utc(record.expires_at):
            raise RefreshTokenExpired(f"refresh token for user {record.user_id} has expired")
        if record.revoked_at is not None:
            raise RefreshTokenRevoked(f"refresh token for user {record.user_id} is revoked")
        return uuid.UUID(record.user_id)

    def revoke(self, token: str) -> None:
        try:
            found = self.storage.revoke_refresh_token(token, revoked_at=self.clock())
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"could not revoke refresh token: {exc}") from exc
        if not found:
            raise RefreshTokenNotFound("refresh token does not exist")
