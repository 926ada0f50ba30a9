from __future__ import annotations

from flask import Blueprint, request, jsonify, g

from api.deps import get_storage
from models.schemas.user import UserCredentialsSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.exceptions import NotFoundError
from utils.security import hash_password

bp = Blueprint("users", __name__)

credentials_schema = UserCredentialsSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    user = get_storage().create_user(
        email=data["email"],
        hashed_password=hash_password(data["password"]),
    )
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the email and password of the authenticated user.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    user = get_storage().update_user_credentials(
        str(g.current_user_id),
        email=data["email"],
        hashed_password=hash_password(data["password"]),
    )
    if user is None:
        raise NotFoundError("User not found")
    return jsonify(user_out_schema.dump(user)), 200
