"""
Environment-aware configuration.
Values are read once when the app is created and handed to the auth core
and storage explicitly; nothing reads os.environ after startup.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


class BaseConfig:
    DEBUG = False
    TESTING = False
    # Unset means production; local runs opt in with APP_ENV=dev
    APP_ENV = os.getenv("APP_ENV", "production")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "")
    DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or "sqlite:///chirpy.db"
    # Seconds a single store call may wait before failing
    STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    # Session token signing; "secret" is the legacy variable name
    JWT_SECRET = os.getenv("JWT_SECRET") or os.getenv("secret") or ""
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=3600)
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))
    # Operator key for the Polka webhook
    POLKA_KEY = os.getenv("POLKA_KEY", "")
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.getcwd())
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "dev")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True
    JWT_SECRET = BaseConfig.JWT_SECRET or "dev-secret-change-me-dev-secret-change-me"


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_FORMAT = os.getenv("LOG_FORMAT", "structured")


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite://"
    JWT_SECRET = "test-secret-key-with-at-least-32-bytes!"
    POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"
    LOG_LEVEL = "WARNING"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test), production when unset.
    """
    env = (name or os.getenv("APP_ENV", "production")).lower()
    if env in ["dev", "development"]:
        return DevelopmentConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return ProductionConfig


def check_secrets(config) -> None:
    """Refuse to start without a signing secret, or outside dev/test without the Polka key."""
    if not config.get("JWT_SECRET"):
        raise RuntimeError("JWT_SECRET must be set")
    if not (config.get("DEBUG") or config.get("TESTING")) and not config.get("POLKA_KEY"):
        raise RuntimeError("POLKA_KEY must be set")
