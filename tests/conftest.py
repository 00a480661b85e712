"""Shared test fixtures for the GitHub MCP test suite.

Keeps settings tests isolated from the developer's shell environment and
``.env`` file.
"""

from __future__ import annotations

import pytest

from shared.config import get_settings

# Environment variables that Settings reads; cleared for every settings test.
SETTINGS_ENV_VARS = [
    "GITHUB_PAT_FOR_PROJECT",
    "GITHUB_API_BASE_URL",
    "GITHUB_USER_AGENT",
    "GITHUB_REQUEST_TIMEOUT",
    "SERVICE_AUTH_TOKEN",
    "SERVER_NAME",
    "SERVER_VERSION",
    "HOST",
    "PORT",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty settings environment, run from a directory without a ``.env``."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
