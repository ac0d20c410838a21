# tests/test_auth.py
from flask_jwt_extended import decode_token
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from notes_api.auth import service
from notes_api.users.models import User


def test_signup_then_login_issues_token_with_username(client, app):
    r = client.post("/api/user/signup", json={"username": "carol", "password": "pw-carol"})
    assert r.status_code == 201
    assert r.get_json() == {"message": "User created successfully"}

    r = client.post("/api/user/login", json={"username": "carol", "password": "pw-carol"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["message"] == "Login successful"

    with app.app_context():
        claims = decode_token(body["token"])
    assert claims["username"] == "carol"
    assert "exp" not in claims
    assert "nbf" not in claims


def test_signup_stores_hash_not_password(client, app):
    client.post("/api/user/signup", json={"username": "dave", "password": "plain-text"})
    with app.app_context():
        user = User.query.filter_by(username="dave").one()
        assert user.password_hash != "plain-text"
        assert user.password_hash.startswith("$2")
        assert user.notes == []
        assert user.check_password("plain-text")


def test_signup_missing_fields_creates_nothing(client, app):
    for payload in ({}, {"username": "x"}, {"password": "y"},
                    {"username": "", "password": "y"}, {"username": "x", "password": ""}):
        r = client.post("/api/user/signup", json=payload)
        assert r.status_code == 400
        assert r.get_json()["code"] == "validation_error"
        assert "message" in r.get_json()
    with app.app_context():
        assert User.query.count() == 0


def test_signup_duplicate_username_is_conflict(client, app):
    assert client.post("/api/user/signup", json={"username": "eve", "password": "a"}).status_code == 201
    r = client.post("/api/user/signup", json={"username": "eve", "password": "b"})
    assert r.status_code == 409
    assert r.get_json()["code"] == "conflict"
    with app.app_context():
        assert User.query.filter_by(username="eve").count() == 1


def test_login_wrong_password_and_unknown_user_look_the_same(client):
    client.post("/api/user/signup", json={"username": "frank", "password": "right"})

    wrong = client.post("/api/user/login", json={"username": "frank", "password": "wrong"})
    unknown = client.post("/api/user/login", json={"username": "nobody", "password": "right"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()
    assert wrong.get_json()["message"] == "Invalid username or password"
    assert "token" not in wrong.get_json()


def test_login_missing_fields(client):
    r = client.post("/api/user/login", json={"username": "frank"})
    assert r.status_code == 400
    r = client.post("/api/user/login", data="not json", content_type="text/plain")
    assert r.status_code == 400


def test_token_gate(client):
    # pas de token -> 401
    r = client.get("/api/notes")
    assert r.status_code == 401
    assert r.get_json()["code"] == "authorization_required"

    # token mal formé -> 403
    r = client.get("/api/notes", headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 403
    assert r.get_json()["code"] == "token_invalid"
    assert "message" in r.get_json()


def test_token_signed_with_another_secret_is_forbidden(client):
    import jwt as pyjwt

    forged = pyjwt.encode({"username": "alice"}, "some-other-secret", algorithm="HS256")
    r = client.get("/api/notes", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 403


def test_store_failure_on_signup_is_500(client, app, monkeypatch):
    def fail_commit(self):
        raise OperationalError("INSERT INTO users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", fail_commit)
    r = client.post("/api/user/signup", json={"username": "gus", "password": "pw"})
    assert r.status_code == 500
    assert r.get_json()["message"] == "Internal server error"
    assert r.get_json()["code"] == "internal_error"

    monkeypatch.undo()
    with app.app_context():
        assert User.query.count() == 0


def test_hashing_failure_on_signup_is_500(client, monkeypatch):
    def broken_using(**kwargs):
        raise ValueError("bcrypt backend unavailable")

    monkeypatch.setattr(service.bcrypt, "using", broken_using)
    r = client.post("/api/user/signup", json={"username": "hal", "password": "pw"})
    assert r.status_code == 500
    assert r.get_json()["code"] == "internal_error"
