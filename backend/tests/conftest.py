import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kanban.db.session import get_db
from kanban.core.security import create_access_token
from kanban.db.models import Base, User
from kanban.main import app


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(session_factory):
    db = session_factory()
    alice = User(name="Alice", email="alice@test.local", username="alice", password_hash="pw", role="project_manager")
    bob = User(name="Bob", email="bob@test.local", username="bob", password_hash="pw", role="developer")
    carol = User(name="Carol", email="carol@test.local", username="carol", password_hash="pw", role="admin")
    db.add_all([alice, bob, carol])
    db.commit()
    ids = {"alice": alice.id, "bob": bob.id, "carol": carol.id}
    db.close()
    return ids


@pytest.fixture
def auth_headers(users):
    def make(username: str) -> dict:
        token = create_access_token(subject=str(users[username]))
        return {"Authorization": f"Bearer {token}"}

    return make
