from flask import Blueprint, request, jsonify, current_app

from notes_api.extensions import limiter
from notes_api.auth.schemas import SignupSchema, LoginSchema, TokenOut
from notes_api.auth import service
from notes_api.common.utils import message

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
login_schema = LoginSchema()
token_out = TokenOut()


@bp.post("/signup")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_SIGNUP", "10/hour"))
def signup():
    payload = request.get_json(silent=True) or {}
    data = signup_schema.load(payload)
    service.create_user(data["username"], data["password"])
    return message("User created successfully", 201)


@bp.post("/login")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_LOGIN", "5/minute"))
def login():
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)

    user = service.authenticate_user(data["username"], data["password"])
    token = service.issue_token(user)
    return jsonify(token_out.dump({"message": "Login successful", "token": token})), 200
