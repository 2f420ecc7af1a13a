"""Shared pytest fixtures: a fresh SQLite file database per test."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskdeck.core.config import Settings
from taskdeck.db.session import init_db, make_engine
from taskdeck.db.store import TaskStore
from taskdeck.main import create_app
from taskdeck.schemas.tasks import TaskCreate
from taskdeck.services.tasks import TaskService


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture()
def engine(database_url: str):
    engine = make_engine(database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine) -> TaskStore:
    return TaskStore(engine)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def make_task(service: TaskService):
    """Create a task through the service with sensible defaults."""

    def _make(title: str = "Task", **fields):
        return service.create_task(TaskCreate(title=title, **fields))

    return _make


@pytest.fixture()
def settings(database_url: str) -> Settings:
    return Settings(DATABASE_URL=database_url, API_V1_PREFIX="/api/v1")


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
