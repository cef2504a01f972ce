# tests/conftest.py

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from taskflow.client import ConfirmationGate, TaskApiClient, TaskListController
from taskflow.database import create_tables
from taskflow.main import app
from taskflow.services.task_service import TaskService

from .fakes import FakePrompter


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite per test.

    StaticPool keeps a single connection so the tables survive across sessions
    and threads (FastAPI runs sync endpoints in a worker thread).
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def service(engine) -> TaskService:
    return TaskService(engine)


@pytest.fixture()
def installed_service(service):
    """Install ``service`` on the app for the duration of a test."""
    app.state.task_service = service
    yield service
    app.state.task_service = None


@pytest.fixture()
def client(installed_service) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture()
def api(installed_service) -> TaskApiClient:
    """Client API wired straight to the ASGI app, no network involved."""
    http = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    )
    return TaskApiClient("http://testserver/tasks", http=http)


@pytest.fixture()
def controller(api, prompter) -> TaskListController:
    return TaskListController(api, ConfirmationGate(prompter))
