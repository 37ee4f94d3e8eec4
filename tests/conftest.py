"""Pytest configuration and shared fixtures for the test suite."""

import os

import pytest

from tests.fakes import FakeGitRunner

# Configure pytest-asyncio
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def fake_runner() -> FakeGitRunner:
    """Create a fake git runner with no canned responses."""
    return FakeGitRunner()


@pytest.fixture(autouse=True)
def clean_versionforge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep VERSIONFORGE_* variables and .env files from the host out of tests."""
    for key in list(os.environ):
        if key.startswith("VERSIONFORGE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("versionforge.config.load_dotenv", lambda *args, **kwargs: False)
