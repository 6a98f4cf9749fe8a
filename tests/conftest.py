from unittest.mock import MagicMock

import pytest

from app.database.latency import LatencyRecord


@pytest.fixture(autouse=True)
def _default_test_env(monkeypatch: pytest.MonkeyPatch):
    """@brief Provide stable default env values for the test suite.

    @details
    Ensures local `.env` changes do not make tests flaky. Individual tests may
    still override these values with `monkeypatch.setenv(...)` when needed.
    """
    monkeypatch.setenv("GITHUB_API_URL", "https://api.github.test")
    monkeypatch.setenv("GITHUB_MAX_STARGAZERS", "40000")
    monkeypatch.setenv("GITHUB_PAGE_SIZE", "100")
    monkeypatch.setenv("CACHE_BACKEND", "none")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "86400")
    monkeypatch.setenv("LATENCY_HISTORY_LIMIT", "10")
    monkeypatch.setenv("REDIS_URL", "redis://redis:6379/0")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("LATENCY_TRACKING", raising=False)


@pytest.fixture(autouse=True)
def latency_record():
    """@brief Replace the app's shared latency record with a mock.

    @details Only the instance stored on `app.state` is swapped, so
    `LatencyRecord` itself keeps its real behavior in unit tests.
    """
    from app.main import app

    previous = app.state.latency_record
    record = MagicMock(spec=LatencyRecord)
    app.state.latency_record = record
    yield record
    app.state.latency_record = previous
