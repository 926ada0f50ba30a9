"""
Polka payment webhooks. Authenticated with the operator API key
(`Authorization: ApiKey <key>`), not with a user session.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request

from api.deps import get_storage
from models.schemas.webhook import PolkaWebhookSchema, USER_UPGRADED
from utils.decorators import api_key_required
from utils.exceptions import NotFoundError, ValidationFailure

logger = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

webhook_schema = PolkaWebhookSchema()


@bp.post("/polka/webhooks")
@api_key_required()
def polka_webhook():
    """
    Mark a user as Chirpy Red when Polka reports an upgrade
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Processed or ignored }
      401: { description: Missing or wrong API key }
      404: { description: User not found }
    """
    payload = request.get_json(silent=True) or {}
    data = webhook_schema.load(payload)

    if data["event"] != USER_UPGRADED:
        return "", 204

    if "data" not in data:
        raise ValidationFailure("data.user_id is required")
    user_id = str(data["data"]["user_id"])
    if not get_storage().upgrade_user_to_chirpy_red(user_id):
        raise NotFoundError("User not found")

    logger.info("user %s upgraded to Chirpy Red", user_id)
    return "", 204
