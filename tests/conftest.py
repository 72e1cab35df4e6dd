"""Shared fixtures: every test gets its own store and application."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.main import create_app
from taskboard.services.task_store import TaskStore


class FakeClock:
    """Deterministic clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture
def app(store: TaskStore) -> FastAPI:
    return create_app(Settings(SERVE_FRONTEND=False), store=store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
