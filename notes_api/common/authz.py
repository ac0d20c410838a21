from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity


def auth_required(fn):
    """
    Garde des routes protégées:
      - pas de bearer token           -> 401 (unauthorized_loader)
      - token invalide / mal formé    -> 403 (invalid_token_loader)
    Le username extrait du token est posé dans g.username.
    On ne vérifie pas ici que l'utilisateur existe encore en base.
    """
    @wraps(fn)
    def inner(*args, **kwargs):
        verify_jwt_in_request()
        g.username = get_jwt_identity()
        return fn(*args, **kwargs)
    return inner


def current_username() -> str:
    return g.username
