from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.settings import Settings
from helpers.fake_db import InMemoryDatabase
from main import create_app


def _settings() -> Settings:
    return Settings(
        database_url="postgresql://postgres@localhost:1200/simpleapp",
        pool_min_size=1,
        pool_max_size=5,
        command_timeout=30.0,
        host="127.0.0.1",
        port=8080,
        log_level="INFO",
    )


@pytest.fixture
def settings() -> Settings:
    return _settings()


@pytest.fixture
def fake_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def client(fake_db: InMemoryDatabase, settings: Settings) -> TestClient:
    app = create_app(database=fake_db, settings=settings)
    return TestClient(app)
