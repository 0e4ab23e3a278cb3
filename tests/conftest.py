"""
Test configuration and fixtures for Threadbox tests.
"""
import os

os.environ.setdefault("THREADBOX_LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from threadbox.core.comments import CommentStore
from threadbox.core.db.tables.base import Base
from threadbox.core.db.tables.post import Post
from threadbox.core.db.tables.secretkey import SecretKey
from threadbox.core.security import extract_key_id, hash_key, new_sk


@pytest.fixture(scope="function")
def db_session():
    """Create an isolated test database session for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    Session = sessionmaker(bind=engine)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def store(db_session):
    return CommentStore(db_session)


@pytest.fixture
def client_factory():
    """Factory to create test clients bound to a specific db session."""

    def create_client(session, user_sk=None):
        from threadbox.app import app
        from threadbox.core.db.session import get_db

        def override_get_db():
            yield session

        app.dependency_overrides[get_db] = override_get_db

        client = TestClient(app)
        if user_sk:
            client.cookies.set("secret_key", user_sk)
        return client

    yield create_client

    from threadbox.app import app

    app.dependency_overrides.clear()


def make_user(session, username: str) -> dict:
    sk = new_sk()
    # Low bcrypt cost keeps the suite fast; verification reads the cost from the hash
    session.add(SecretKey(sk_id=extract_key_id(sk), sk_hash=hash_key(sk, rounds=4), username=username))
    session.commit()
    return {"username": username, "sk": sk}


@pytest.fixture
def test_user_data(db_session):
    """Create a test user and return their credentials."""
    return make_user(db_session, "testuser")


@pytest.fixture
def other_user_data(db_session):
    return make_user(db_session, "otheruser")


@pytest.fixture
def test_post(db_session, test_user_data):
    post = Post(username=test_user_data["username"], title="Test post", content="Post body")
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture
def other_post(db_session, test_user_data):
    post = Post(username=test_user_data["username"], title="Other post", content="Another body")
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post
