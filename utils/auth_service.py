"""
Auth orchestration: login, protected-route authentication, refresh and revoke.

An AuthService is built once per application from its configuration and
handed the storage it talks to. It holds no mutable state.
"""
from __future__ import annotations

import hmac
import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError

from models.user import User
from utils.credentials import get_api_key, get_bearer_token
from utils.exceptions import InvalidAPIKey, InvalidCredentials, PasswordMismatch, UpstreamFailure
from utils.refresh_tokens import DEFAULT_REFRESH_TTL, RefreshTokenManager
from utils.security import hash_password, make_jwt, validate_jwt, verify_password

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TTL = timedelta(seconds=3600)

# Verified against when the email is unknown, so both failures cost one argon2 check
_DUMMY_HASH = hash_password("chirpy-no-such-user")


@dataclass(frozen=True)
class LoginResult:
    user: User
    token: str
    refresh_token: str


class AuthService:
    def __init__(self, storage, secret: str, api_key: str = "",
                 access_ttl: timedelta = DEFAULT_ACCESS_TTL,
                 refresh_ttl: timedelta = DEFAULT_REFRESH_TTL,
                 refresh_tokens: RefreshTokenManager | None = None):
        if not secret:
            raise ValueError("a signing secret is required")
        self.storage = storage
        self.secret = secret
        self.api_key = api_key
        self.access_ttl = access_ttl
        self.refresh_tokens = refresh_tokens or RefreshTokenManager(storage, refresh_ttl)

    def issue_access_token(self, user_id: uuid.UUID | str) -> str:
        return make_jwt(user_id, self.secret, self.access_ttl)

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and hand out a session token plus a refresh token.
        Unknown email and wrong password both surface as InvalidCredentials.
        """
        try:
            user = self.storage.get_user_by_email(email)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"could not look up user: {exc}") from exc

        if user is None:
            try:
                verify_password(password, _DUMMY_HASH)
            except PasswordMismatch:
                pass
            raise InvalidCredentials("unknown email")
        try:
            verify_password(password, user.hashed_password)
        except PasswordMismatch as exc:
            raise InvalidCredentials(f"password mismatch for user {user.id}") from exc

        token = self.issue_access_token(user.id)
        refresh_token = self.refresh_tokens.issue(user.id)
        logger.info("user %s logged in", user.id)
        return LoginResult(user=user, token=token, refresh_token=refresh_token)

    def authenticate(self, headers: Mapping[str, str]) -> uuid.UUID:
        """Protected-route guard: bearer session token -> user id."""
        token = get_bearer_token(headers)
        return validate_jwt(token, self.secret)

    def refresh(self, headers: Mapping[str, str]) -> str:
        """Bearer refresh token -> new session token; the refresh token stays valid."""
        token = get_bearer_token(headers)
        user_id = self.refresh_tokens.validate(token)
        return self.issue_access_token(user_id)

    def revoke(self, headers: Mapping[str, str]) -> None:
        token = get_bearer_token(headers)
        self.refresh_tokens.revoke(token)

    def check_api_key(self, headers: Mapping[str, str]) -> None:
        key = get_api_key(headers)
        if not self.api_key or not hmac.compare_digest(key.encode(), self.api_key.encode()):
            raise InvalidAPIKey("API key does not match")
