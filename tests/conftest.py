# tests/conftest.py
import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from models import User, db


@pytest.fixture
def app():
    """In-memory SQLite app with a small, well-formed candidate list."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'CANDIDATES': ["Ada", "AWK", "Axum", "Haskell", "Python"],
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def users(app):
    """alice trusts carol and bob; bob trusts nobody."""
    with app.app_context():
        alice, bob, carol = (
            User(username=name, nickname=name.title(), password=generate_password_hash("secret"))
            for name in ("alice", "bob", "carol")
        )
        db.session.add_all([alice, bob, carol])
        db.session.commit()
        alice.trust(carol)
        alice.trust(bob)
        db.session.commit()
    return ["alice", "bob", "carol"]


@pytest.fixture
def alice_client(client, users):
    client.post("/login", data={"username": "alice", "password": "secret"})
    return client
