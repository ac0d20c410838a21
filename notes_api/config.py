import os
from datetime import timedelta
from sqlalchemy.pool import StaticPool


def _access_expires():
    # pas de variable => token sans expiration (comportement historique)
    minutes = os.getenv("JWT_ACCESS_MINUTES")
    if not minutes:
        return False
    return timedelta(minutes=int(minutes))


class BaseConfig:
    # --- Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    # --- Database (un seul fichier, comme l'ancien notes.db)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///notes.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }

    # --- JWT
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_IDENTITY_CLAIM = "username"
    JWT_ENCODE_NBF = False
    JWT_ACCESS_TOKEN_EXPIRES = _access_expires()

    # --- Hashing
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # --- Notes
    # liste vide => 404 "No notes found" (comportement historique)
    NOTES_EMPTY_LIST_AS_404 = os.getenv("NOTES_EMPTY_LIST_AS_404", "true").lower() == "true"

    # --- CORS (strings CSV -> découpées dans __init__)
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    CORS_ALLOW_HEADERS = os.getenv("CORS_ALLOW_HEADERS", "Content-Type,Authorization")
    CORS_EXPOSE_HEADERS = os.getenv("CORS_EXPOSE_HEADERS", "Content-Type,X-Request-Id")

    # --- Rate limit
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", None)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_AUTH_SIGNUP = os.getenv("RATELIMIT_AUTH_SIGNUP", "10/hour")
    RATELIMIT_AUTH_LOGIN = os.getenv("RATELIMIT_AUTH_LOGIN", "5/minute")

    # --- Sécurité HTTP
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", "1000000"))  # ~1 Mo
    ENFORCE_HTTPS = os.getenv("ENFORCE_HTTPS", "false").lower() == "true"

    # --- Serveur
    PORT = int(os.getenv("PORT", "3000"))


class DevConfig(BaseConfig):
    DEBUG = True


class ProdConfig(BaseConfig):
    DEBUG = False


class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    # IMPORTANT: pool adapté à SQLite en mémoire
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    JWT_SECRET_KEY = "test-jwt-secret"
    JWT_ACCESS_TOKEN_EXPIRES = False
    BCRYPT_ROUNDS = 4
    NOTES_EMPTY_LIST_AS_404 = True
    RATELIMIT_ENABLED = False
