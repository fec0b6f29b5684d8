"""
Shared fixtures: in-memory SQLite database and API client.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.db.session import get_db, init_db
from app.main import app
from app.services import member_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def users(db):
    """Three users: alice, bob and carol."""
    return [
        member_service.create_user(name, name.title(), f"{name}@example.com", db)
        for name in ("alice", "bob", "carol")
    ]


@pytest.fixture
def group(db, users):
    """Group created by alice with bob and carol as members."""
    alice, bob, carol = users
    group = member_service.create_group("Flatmates", alice.id, db)
    member_service.add_member(group.id, bob.id, db)
    member_service.add_member(group.id, carol.id, db)
    return group
