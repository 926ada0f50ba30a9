from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .admin import HitCounter
from .config import check_secrets, get_config
from .errors import register_error_handlers
from models import DBStorage
from utils.auth_service import AuthService
from utils.log import setup_logging

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "REST API for users and chirps with JWT session tokens and refresh tokens.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        },
        "ApiKey": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Operator key with the `ApiKey ` prefix."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, config_overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.

    Storage, the auth service and the hit counter are built here from the
    app config and kept in app.extensions, so each app (and each test)
    gets its own.
    """
    app = Flask(__name__)

    app.config.from_object(get_config(config_name))
    if config_overrides:
        app.config.update(config_overrides)
    check_secrets(app.config)

    setup_logging(app.config["LOG_LEVEL"], app.config["LOG_FORMAT"])

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    register_error_handlers(app)

    storage = DBStorage(app.config["DATABASE_URL"], timeout=app.config["STORE_TIMEOUT_SECONDS"])
    storage.reload()
    app.extensions["storage"] = storage
    app.extensions["auth"] = AuthService(
        storage,
        secret=app.config["JWT_SECRET"],
        api_key=app.config["POLKA_KEY"],
        access_ttl=app.config["ACCESS_TOKEN_EXPIRES"],
        refresh_ttl=app.config["REFRESH_TOKEN_EXPIRES"],
    )
    app.extensions["metrics"] = HitCounter()

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp
    from .chirps import bp as chirps_bp
    from .webhooks import bp as webhooks_bp
    from .admin import bp as admin_bp
    from .fileserver import bp as fileserver_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(chirps_bp, url_prefix="/api")
    app.register_blueprint(webhooks_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(fileserver_bp, url_prefix="/app")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    return app
