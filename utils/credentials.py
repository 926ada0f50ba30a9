"""Pull credentials out of request headers."""
from __future__ import annotations

from typing import Mapping

from utils.exceptions import MissingCredential

BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


def _extract(headers: Mapping[str, str], prefix: str) -> str:
    value = headers.get("Authorization")
    if not value:
        raise MissingCredential("Authorization header is missing")
    if not value.startswith(prefix):
        raise MissingCredential(f"Authorization header does not use the {prefix.strip()} scheme")
    credential = value[len(prefix):].strip()
    if not credential:
        raise MissingCredential(f"{prefix.strip()} credential is empty")
    return credential


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """`Authorization: Bearer <token>` -> token"""
    return _extract(headers, BEARER_PREFIX)


def get_api_key(headers: Mapping[str, str]) -> str:
    """`Authorization: ApiKey <key>` -> key"""
    return _extract(headers, API_KEY_PREFIX)
