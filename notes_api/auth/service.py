import logging

from flask import current_app
from passlib.hash import bcrypt
from flask_jwt_extended import create_access_token

from notes_api.users import store
from notes_api.users.models import User
from notes_api.common.errors import AuthenticationError, InternalError, ValidationError

log = logging.getLogger(__name__)


def _require(username: str, password: str) -> None:
    if not username or not password:
        raise ValidationError("Username and password are required")


def hash_password(password: str) -> str:
    rounds = current_app.config.get("BCRYPT_ROUNDS", 10)
    try:
        return bcrypt.using(rounds=rounds).hash(password)
    except (ValueError, TypeError):
        log.exception("password_hash_failed")
        raise InternalError()


def create_user(username: str, password: str) -> User:
    _require(username, password)
    user = store.insert_user(username, hash_password(password))
    log.info("user_created", extra={"username": username})
    return user


def authenticate_user(username: str, password: str) -> User:
    _require(username, password)
    user = store.find_user(username)
    # même message dans les deux cas: on ne dit pas quel facteur est faux
    if not user:
        log.info("login_failed", extra={"username": username, "reason": "unknown_user"})
        raise AuthenticationError()
    try:
        ok = user.check_password(password)
    except (ValueError, TypeError):
        log.exception("password_verify_failed", extra={"username": username})
        raise InternalError()
    if not ok:
        log.info("login_failed", extra={"username": username, "reason": "bad_password"})
        raise AuthenticationError()
    return user


def issue_token(user: User) -> str:
    """Token signé dont le seul claim métier est le username (identity claim)."""
    # flask-jwt-extended ajoute toujours iat, jti, type et fresh; nbf est coupé en config
    return create_access_token(identity=user.username)
