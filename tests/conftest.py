"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from github_dev_app.config import DevAppSettings
from github_dev_app.github.client import AppCredentials


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> DevAppSettings:
    """Provide settings that ignore the developer's environment and `.env`."""
    for name in (
        "GITHUB_URL",
        "GITHUB_API_URL",
        "GITHUB_DEV_APP_CALLBACK_HOST",
        "GITHUB_DEV_APP_IDLE_TIMEOUT",
        "LOG_LEVEL",
        "CI",
    ):
        monkeypatch.delenv(name, raising=False)
    return DevAppSettings(_env_file=None)


@pytest.fixture
def credentials() -> AppCredentials:
    """Provide credentials shaped like a manifest conversion response."""
    return AppCredentials.model_validate(
        {
            "id": 1,
            "name": "app",
            "client_id": "client_id",
            "client_secret": "client_secret",
            "webhook_secret": "webhook_secret",
            "pem": "pem",
        }
    )


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    """Provide a minimal manifest on disk."""
    path = tmp_path / "manifest.json"
    path.write_text('{"url":"http://localhost"}', encoding="utf-8")
    return path
