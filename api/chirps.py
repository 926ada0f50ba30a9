from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g

from api.deps import get_storage
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required
from utils.exceptions import AuthorizationFailure, NotFoundError, ValidationFailure

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)

SORT_ORDERS = ("asc", "desc")


def parse_uuid(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValidationFailure(f"Invalid {name} format")


def parse_sort() -> bool:
    """Return True for newest-first ordering."""
    sort = request.args.get("sort", "asc").lower()
    if sort not in SORT_ORDERS:
        raise ValidationFailure("Unsupported sort order. Allowed: asc, desc")
    return sort == "desc"


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
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
            body: { type: string, maxLength: 140 }
    responses:
      201: { description: Created }
      400: { description: Chirp is too long }
      401: { description: Unauthorized }
    """
    payload = request.get_json(silent=True) or {}
    data = chirp_create_schema.load(payload)

    chirp = get_storage().create_chirp(body=data["body"], user_id=str(g.current_user_id))
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first unless sort=desc
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        required: false
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        required: false
    responses:
      200: { description: OK }
      400: { description: Invalid author_id or sort }
    """
    author_id = request.args.get("author_id")
    if author_id:
        author_id = parse_uuid(author_id, "author_id")
    descending = parse_sort()

    rows = get_storage().list_chirps(author_id=author_id, descending=descending)
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    chirp = get_storage().get_chirp(parse_uuid(chirp_id, "chirp_id"))
    if chirp is None:
        raise NotFoundError("Chirp not found")
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete a chirp; only its author may do so
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Not found }
    """
    storage = get_storage()
    chirp = storage.get_chirp(parse_uuid(chirp_id, "chirp_id"))
    if chirp is None:
        raise NotFoundError("Chirp not found")
    if chirp.user_id != str(g.current_user_id):
        raise AuthorizationFailure("You are not allowed to delete this chirp")

    storage.delete_chirp(chirp)
    return "", 204
