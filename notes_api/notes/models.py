import uuid
from notes_api.common.utils import utcnow_iso


# Une note n'a pas de table: c'est un document embarqué dans users.notes
def new_note(title: str, content: str) -> dict:
    now = utcnow_iso()
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "content": content,
        "createdAt": now,
        "modifiedAt": now,
    }


def edited_note(note: dict, title: str | None = None, content: str | None = None) -> dict:
    """Copie modifiée; createdAt reste intact."""
    out = dict(note)
    if title is not None:
        out["title"] = title
    if content is not None:
        out["content"] = content
    out["modifiedAt"] = utcnow_iso()
    return out
