"""
Shared pytest fixtures.

Provides a test app built from ``create_app`` with authentication and
repositories overridden by in-memory fakes.

Usage:
    def test_something(client, session_repo):
        session_repo.seed_routine_day(DAY_ID, user_id=TEST_USER_ID)
        response = client.post("/sessions", json={"routineDayId": DAY_ID})
        assert response.status_code == 201
"""

from datetime import date
from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    TEST_USER_ID,
    FakeSessionAnalyticsRepository,
    FakeWorkoutSessionRepository,
)

TODAY = date(2024, 1, 10)


async def _mock_current_user() -> str:
    return TEST_USER_ID


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def session_repo() -> FakeWorkoutSessionRepository:
    """Fresh fake session repository bound to TEST_USER_ID."""
    return FakeWorkoutSessionRepository(current_user_id=TEST_USER_ID)


@pytest.fixture
def analytics_repo(session_repo) -> FakeSessionAnalyticsRepository:
    """Analytics fake reading the same rows as ``session_repo``."""
    return FakeSessionAnalyticsRepository(session_repo, today=TODAY)


@pytest.fixture
def app(test_settings, session_repo, analytics_repo) -> FastAPI:
    """Test app with auth and repositories overridden."""
    application = create_app(settings=test_settings)
    application.dependency_overrides[deps.get_settings] = lambda: test_settings
    application.dependency_overrides[deps.get_current_user] = _mock_current_user
    application.dependency_overrides[deps.get_session_repo] = lambda: session_repo
    application.dependency_overrides[deps.get_session_analytics_repo] = lambda: analytics_repo
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def override_deps(app) -> Callable[[Callable[..., Any], Any], Any]:
    """
    Override an additional dependency on the test app.

    Usage:
        def test_something(override_deps):
            override_deps(get_track_session_use_case, MagicMock())
    """
    def _override(getter: Callable[..., Any], implementation: Any) -> Any:
        app.dependency_overrides[getter] = lambda: implementation
        return implementation

    return _override
