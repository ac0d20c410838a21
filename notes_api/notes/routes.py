from flask import Blueprint, request, jsonify

from notes_api.notes.schemas import NoteIn, NoteOut, SearchArgs
from notes_api.notes import service
from notes_api.common.authz import auth_required, current_username
from notes_api.common.utils import message

bp = Blueprint("notes", __name__)

note_in = NoteIn()
note_in_partial = NoteIn(partial=True)
note_out = NoteOut()
note_out_many = NoteOut(many=True)
search_args = SearchArgs()


@bp.get("")
@auth_required
def list_notes():
    notes = service.list_notes(current_username())
    return jsonify(note_out_many.dump(notes)), 200


@bp.get("/search")
@auth_required
def search_notes():
    args = search_args.load(request.args)
    notes = service.search_notes(current_username(), args["title"])
    return jsonify(note_out_many.dump(notes)), 200


@bp.get("/<note_id>")
@auth_required
def get_note(note_id):
    note = service.get_note(current_username(), note_id)
    return jsonify(note_out.dump(note)), 200


@bp.post("")
@auth_required
def create_note():
    payload = request.get_json(silent=True) or {}
    data = note_in.load(payload)
    note = service.add_note(current_username(), data["title"], data["content"])
    return message("Note saved successfully", 201, note=note_out.dump(note))


@bp.put("/<note_id>")
@auth_required
def update_note(note_id):
    payload = request.get_json(silent=True) or {}
    # Validations partielles (autorise subset des champs)
    data = note_in_partial.load(payload)
    note = service.update_note(
        current_username(), note_id,
        title=data.get("title"), content=data.get("content"),
    )
    return message("Note updated successfully", 200, note=note_out.dump(note))


@bp.delete("/<note_id>")
@auth_required
def delete_note(note_id):
    service.delete_note(current_username(), note_id)
    return message("Note deleted successfully", 200)
