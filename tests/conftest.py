"""Shared fixtures."""

import pytest

CI_ENV_VARS = [
    "GITHUB_ACTIONS",
    "GITHUB_EVENT_PATH",
    "GITHUB_STEP_SUMMARY",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "CHANGELOG_REQUIRED",
    "IGNORE_CHECK_LABEL",
    "CHANGELOG_PATH",
    "LOG_LEVEL",
    "LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_ci_environment(monkeypatch):
    """Keep the host CI environment out of the tests."""
    for name in CI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
