from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

import kanban.main
from kanban.main import app


def test_startup_creates_tables(monkeypatch):
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    monkeypatch.setattr(kanban.main, "engine", engine)

    with TestClient(app) as client:
        assert client.get("/health").json() == {"status": "ok"}

    tables = set(inspect(engine).get_table_names())
    assert {"Users", "Projects", "Boards", "BoardMembers", "Lists", "Cards"} <= tables
    engine.dispose()
