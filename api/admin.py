"""
Admin blueprint:
- GET  /admin/metrics  -> HTML page with the file server hit count
- POST /admin/reset    -> wipe users and zero the counter (PLATFORM=dev only)
"""
from __future__ import annotations

import logging
import threading

from flask import Blueprint, current_app

from api.deps import get_storage
from utils.exceptions import AuthorizationFailure

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = (
    "<html>"
    "<body>"
    "<h1>Welcome, Chirpy Admin</h1>"
    "<p>Chirpy has been visited {hits} times!</p>"
    "</body>"
    "</html>"
)


class HitCounter:
    """Counts file server requests for one app."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self):
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def get_hit_counter() -> HitCounter:
    return current_app.extensions["metrics"]


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200: { description: OK }
    """
    body = METRICS_TEMPLATE.format(hits=get_hit_counter().value)
    return body, 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Delete every user and zero the hit counter. Only allowed when PLATFORM is "dev".
    ---
    tags:
      - Admin
    responses:
      200: { description: OK }
      403: { description: Not a development environment }
    """
    if current_app.config.get("PLATFORM") != "dev":
        raise AuthorizationFailure("This operation is not allowed in non-development environment")

    deleted = get_storage().delete_all_users()
    get_hit_counter().reset()
    logger.warning("admin reset: deleted %d users", deleted)
    return "Hits reset to 0\n", 200, {"Content-Type": "text/plain; charset=utf-8"}
