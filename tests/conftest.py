# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from taskboard.store import TaskStore, create_schema


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the app at a throwaway SQLite file for the duration of one test."""
    url = sqlite_url(tmp_path / "tasks.sqlite3")
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture()
def client(database_url: str):
    from server import app

    # Entering the context runs the lifespan handler (engine + schema)
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture()
async def engine(tmp_path: Path):
    eng: AsyncEngine = create_async_engine(sqlite_url(tmp_path / "store.sqlite3"))
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture()
def store(engine: AsyncEngine) -> TaskStore:
    return TaskStore(engine)
