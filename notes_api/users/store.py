"""Accès au magasin des utilisateurs.

Un enregistrement par utilisateur, les notes sont embarquées dans la colonne
JSON ``notes``. Toute réécriture de la liste s'appuie sur la colonne
``version`` (``version_id_col``): si un autre écrivain a modifié le document
entre la lecture et l'écriture, l'UPDATE ne touche aucune ligne.

- ``push_note`` (ajout): relit le document et rejoue l'ajout, deux ajouts
  concurrents aboutissent tous les deux.
- ``save_notes`` (modification / suppression): lève ``Conflict``.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from notes_api.extensions import db
from notes_api.users.models import User
from notes_api.common.errors import Conflict, InternalError

log = logging.getLogger(__name__)

PUSH_ATTEMPTS = 5


def insert_user(username: str, password_hash: str) -> User:
    user = User(username=username, password_hash=password_hash, notes=[])
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already exists.", details={"username": username})
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("user_insert_failed", extra={"username": username})
        raise InternalError()
    return user


def find_user(username: str) -> User | None:
    try:
        return User.query.filter_by(username=username).first()
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("user_lookup_failed", extra={"username": username})
        raise InternalError()


def _write_notes(user: User, notes: list) -> None:
    # nouvelle liste (copies) => SQLAlchemy détecte le changement de la colonne JSON
    user.notes = notes
    db.session.commit()


def push_note(username: str, note: dict) -> User | None:
    """Ajoute une note en fin de liste; None si l'utilisateur n'existe pas."""
    for attempt in range(1, PUSH_ATTEMPTS + 1):
        user = find_user(username)
        if user is None:
            return None
        try:
            _write_notes(user, [dict(n) for n in user.notes] + [note])
            return user
        except StaleDataError:
            db.session.rollback()
            log.info("note_push_retry", extra={"username": username, "attempt": attempt})
        except SQLAlchemyError:
            db.session.rollback()
            log.exception("note_push_failed", extra={"username": username})
            raise InternalError()
    log.error("note_push_gave_up", extra={"username": username, "attempts": PUSH_ATTEMPTS})
    raise InternalError()


def save_notes(user: User, notes: list) -> User:
    """Remplace la liste de notes du document (écriture complète, gardée par version)."""
    username = user.username
    try:
        _write_notes(user, notes)
    except StaleDataError:
        db.session.rollback()
        raise Conflict(
            "Notes were modified concurrently, retry the request.",
            details={"username": username},
        )
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("notes_save_failed", extra={"username": username})
        raise InternalError()
    return user
