from __future__ import annotations
from functools import wraps
from flask import request, g, current_app


def _auth_service():
    return current_app.extensions["auth"]


def jwt_required():
    """
    Reject the request unless it carries a valid bearer session token.
    The authenticated user id (uuid.UUID) is stored on g.current_user_id.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            # failures propagate as AuthenticationFailure and become a 401
            g.current_user_id = _auth_service().authenticate(request.headers)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required():
    """Allow only callers presenting the configured operator API key."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            _auth_service().check_api_key(request.headers)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
