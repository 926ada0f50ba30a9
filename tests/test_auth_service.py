"""Tests for the login / guard / refresh / revoke flows."""

import re
import uuid
from datetime import timedelta

import pytest

from conftest import TEST_EMAIL, TEST_PASSWORD, bearer
from models.base_model import as_utc, utcnow
from utils.auth_service import AuthService
from utils.exceptions import (
    BadSignature,
    InvalidAPIKey,
    InvalidCredentials,
    MissingCredential,
    RefreshTokenNotFound,
    RefreshTokenRevoked,
)
from utils.security import validate_jwt, verify_password


def test_login_issues_both_tokens(auth_service, storage, user):
    result = auth_service.login(TEST_EMAIL, TEST_PASSWORD)

    assert result.user.id == user.id
    assert validate_jwt(result.token, auth_service.secret) == uuid.UUID(user.id)
    assert re.fullmatch(r"[0-9a-f]{64}", result.refresh_token)

    record = storage.get_refresh_token(result.refresh_token)
    assert record.user_id == user.id
    expected = utcnow() + timedelta(days=60)
    assert abs(as_utc(record.expires_at) - expected) < timedelta(minutes=1)


def test_login_failures_look_the_same(auth_service, user):
    with pytest.raises(InvalidCredentials) as unknown:
        auth_service.login("nobody@b.com", TEST_PASSWORD)
    with pytest.raises(InvalidCredentials) as wrong:
        auth_service.login(TEST_EMAIL, "not-the-password")

    assert unknown.value.public_message == wrong.value.public_message == "Incorrect email or password"
    # the internal reason still tells them apart
    assert unknown.value.reason != wrong.value.reason


def test_unknown_email_still_checks_a_password(auth_service, monkeypatch):
    checked = []

    def spy(password, password_hash):
        checked.append(password_hash)
        return verify_password(password, password_hash)

    monkeypatch.setattr("utils.auth_service.verify_password", spy)
    with pytest.raises(InvalidCredentials):
        auth_service.login("nobody@b.com", TEST_PASSWORD)

    assert len(checked) == 1
    assert checked[0].startswith("$argon2")


def test_authenticate(auth_service, user):
    token = auth_service.login(TEST_EMAIL, TEST_PASSWORD).token
    assert auth_service.authenticate(bearer(token)) == uuid.UUID(user.id)


def test_authenticate_fails_closed(auth_service, storage):
    with pytest.raises(MissingCredential):
        auth_service.authenticate({})

    other = AuthService(storage, secret="another-secret-another-secret-0123456789")
    token = other.issue_access_token(uuid.uuid4())
    with pytest.raises(BadSignature):
        auth_service.authenticate(bearer(token))


def test_refresh_mints_new_session_token(auth_service, user):
    refresh_token = auth_service.login(TEST_EMAIL, TEST_PASSWORD).refresh_token

    token = auth_service.refresh(bearer(refresh_token))
    assert validate_jwt(token, auth_service.secret) == uuid.UUID(user.id)
    # the refresh token is not rotated
    assert auth_service.refresh(bearer(refresh_token))


def test_refresh_after_revoke(auth_service, user):
    refresh_token = auth_service.login(TEST_EMAIL, TEST_PASSWORD).refresh_token
    auth_service.revoke(bearer(refresh_token))

    with pytest.raises(RefreshTokenRevoked):
        auth_service.refresh(bearer(refresh_token))


def test_refresh_with_unknown_token(auth_service):
    with pytest.raises(RefreshTokenNotFound):
        auth_service.refresh(bearer("f" * 64))


def test_session_token_is_not_a_refresh_token(auth_service, user):
    token = auth_service.login(TEST_EMAIL, TEST_PASSWORD).token
    with pytest.raises(RefreshTokenNotFound):
        auth_service.refresh(bearer(token))


def test_check_api_key(app, auth_service):
    key = app.config["POLKA_KEY"]
    auth_service.check_api_key({"Authorization": f"ApiKey {key}"})

    with pytest.raises(InvalidAPIKey):
        auth_service.check_api_key({"Authorization": "ApiKey wrong"})
    with pytest.raises(MissingCredential):
        auth_service.check_api_key({"Authorization": f"Bearer {key}"})


def test_unconfigured_api_key_rejects_everything(storage):
    service = AuthService(storage, secret="s" * 40, api_key="")
    with pytest.raises(InvalidAPIKey):
        service.check_api_key({"Authorization": "ApiKey anything"})


def test_secret_is_required(storage):
    with pytest.raises(ValueError):
        AuthService(storage, secret="")
