# tests/conftest.py
import os
import pytest

os.environ.setdefault("APP_ENV", "test")

from notes_api import create_app
from notes_api.config import TestConfig
from notes_api.extensions import db


@pytest.fixture(scope="session")
def app():
    app = create_app(TestConfig)
    yield app


@pytest.fixture(autouse=True)
def _tables(app):
    # tables propres pour chaque test
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def signup(client, username, password="s3cret-pass"):
    return client.post("/api/user/signup", json={"username": username, "password": password})


def login(client, username, password="s3cret-pass"):
    r = client.post("/api/user/login", json={"username": username, "password": password})
    assert r.status_code == 200
    return r.get_json()["token"]


@pytest.fixture()
def alice(client):
    signup(client, "alice")
    return {"Authorization": f"Bearer {login(client, 'alice')}"}


@pytest.fixture()
def bob(client):
    signup(client, "bob")
    return {"Authorization": f"Bearer {login(client, 'bob')}"}
