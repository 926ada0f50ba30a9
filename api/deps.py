"""Accessors for the per-app objects built in create_app()."""
from flask import current_app

from models import DBStorage
from utils.auth_service import AuthService


def get_storage() -> DBStorage:
    return current_app.extensions["storage"]


def get_auth() -> AuthService:
    return current_app.extensions["auth"]
