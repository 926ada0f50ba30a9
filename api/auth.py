"""
Authentication blueprint:
- POST /api/login    -> user + session token + refresh token
- POST /api/refresh  -> new session token for a bearer refresh token
- POST /api/revoke   -> revoke a bearer refresh token

Password checks, token issuing and refresh token state all live in
utils.auth_service.AuthService; this module only translates HTTP.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.deps import get_auth
from models.schemas.user import UserCredentialsSchema, UserOutSchema

bp = Blueprint("auth", __name__)

credentials_schema = UserCredentialsSchema()
user_out_schema = UserOutSchema()


@bp.post("/login")
def login():
    """
    Login: return the user, a session token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Incorrect email or password
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    result = get_auth().login(data["email"], data["password"])

    return jsonify({
        **user_out_schema.dump(result.user),
        "token": result.token,
        "refresh_token": result.refresh_token,
    }), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new session token. The refresh token stays valid.
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unknown, expired or revoked refresh token
    """
    token = get_auth().refresh(request.headers)
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke the bearer refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Unknown refresh token
    """
    get_auth().revoke(request.headers)
    return "", 204
