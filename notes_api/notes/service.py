import logging

from flask import current_app

from notes_api.users import store
from notes_api.users.models import User
from notes_api.notes.models import new_note, edited_note
from notes_api.common.errors import NotFound, ValidationError

log = logging.getLogger(__name__)


def _get_user(username: str) -> User:
    # le token peut survivre à l'utilisateur: absence => 404 explicite
    user = store.find_user(username)
    if not user:
        raise NotFound("User not found.", details={"username": username})
    return user


def _get_owned_note(user: User, note_id: str) -> dict:
    # recherche limitée aux notes de l'appelant
    note = user.find_note(note_id)
    if note is None:
        raise NotFound("Note not found", details={"note_id": note_id})
    return note


def list_notes(username: str) -> list:
    user = _get_user(username)
    notes = list(user.notes)
    if not notes and current_app.config.get("NOTES_EMPTY_LIST_AS_404", True):
        raise NotFound("No notes found")
    return notes


def get_note(username: str, note_id: str) -> dict:
    return _get_owned_note(_get_user(username), note_id)


def search_notes(username: str, title: str) -> list:
    needle = title.casefold()
    return [n for n in _get_user(username).notes if needle in n["title"].casefold()]


def add_note(username: str, title: str, content: str) -> dict:
    if not title or not content:
        raise ValidationError("Title and content are required")
    note = new_note(title, content)
    if store.push_note(username, note) is None:
        raise NotFound("User not found.", details={"username": username})
    log.info("note_added", extra={"username": username, "note_id": note["id"]})
    return note


def update_note(username: str, note_id: str, title: str | None = None, content: str | None = None) -> dict:
    if title is None and content is None:
        raise ValidationError("No updatable fields provided.")
    user = _get_user(username)
    current = _get_owned_note(user, note_id)
    updated = edited_note(current, title=title, content=content)

    notes = [updated if n["id"] == note_id else dict(n) for n in user.notes]
    store.save_notes(user, notes)
    log.info("note_updated", extra={"username": username, "note_id": note_id})
    return updated


def delete_note(username: str, note_id: str) -> None:
    user = _get_user(username)
    _get_owned_note(user, note_id)

    notes = [dict(n) for n in user.notes if n["id"] != note_id]
    store.save_notes(user, notes)
    log.info("note_deleted", extra={"username": username, "note_id": note_id})
