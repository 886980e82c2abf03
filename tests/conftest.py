"""Service test fixtures with in-memory fake repos."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Make _helpers importable from test files
sys.path.insert(0, str(Path(__file__).parent))

from _helpers import TEST_SECRET, FakeClock, InMemoryTaskRepo, InMemoryUserRepo  # noqa: E402

from task_manager_service.auth.jwt import JWTService  # noqa: E402
from task_manager_service.auth.passwords import BcryptHasher  # noqa: E402
from task_manager_service.db.deps import get_task_repo, get_user_repo  # noqa: E402
from task_manager_service.rest.app import create_app  # noqa: E402
from task_manager_service.settings import Settings  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock: FakeClock) -> JWTService:
    return JWTService(TEST_SECRET, clock=clock)


@pytest.fixture
def hasher() -> BcryptHasher:
    # Minimum cost keeps the suite fast.
    return BcryptHasher(rounds=4)


@pytest.fixture
def user_repo() -> InMemoryUserRepo:
    return InMemoryUserRepo()


@pytest.fixture
def task_repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture
def app(clock, token_service, hasher, user_repo, task_repo) -> FastAPI:
    """Create the real app with in-memory repos (no database needed)."""
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:", jwt_secret=TEST_SECRET)
    app = create_app(settings, token_service=token_service, password_hasher=hasher, clock=clock)

    app.dependency_overrides[get_user_repo] = lambda: user_repo
    app.dependency_overrides[get_task_repo] = lambda: task_repo
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers(token_service: JWTService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.generate_token('alice', 'admin')}"}


@pytest.fixture
def user_headers(token_service: JWTService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.generate_token('bob', 'user')}"}
