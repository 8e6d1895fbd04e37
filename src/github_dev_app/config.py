"""Configuration for the GitHub Dev App tool.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The same `.env` file receives the app credentials after registration; settings
ignore those keys.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_CI_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


class DevAppSettings(BaseSettings):
    """Settings for registering a GitHub App.

    Environment variables:
    - GITHUB_URL                     (optional)
    - GITHUB_API_URL                 (optional)
    - GITHUB_DEV_APP_CALLBACK_HOST   (optional)
    - GITHUB_DEV_APP_IDLE_TIMEOUT    (optional)
    - LOG_LEVEL                      (optional)
    - CI                             (optional; any value but 0/false/no/off)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `DevAppSettings(_env_file=path_to_env)`.
    """

    github_url: str = Field(
        default="https://github.com",
        validation_alias="GITHUB_URL",
        description="GitHub web URL hosting the app registration page",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    callback_host: str = Field(
        default="127.0.0.1",
        validation_alias="GITHUB_DEV_APP_CALLBACK_HOST",
        description="Host the local callback server binds to",
    )
    idle_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias="GITHUB_DEV_APP_IDLE_TIMEOUT",
        description="How long the callback server waits in --no-exchange mode",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    ci: bool = Field(
        default=False,
        validation_alias="CI",
        description="Set by CI systems; suppresses browser launches",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @property
    def interactive(self) -> bool:
        """Whether the browser may be opened for the user."""

        return not self.ci

    @field_validator("ci", mode="before")
    @classmethod
    def _any_ci_value_is_true(cls, value: object) -> object:
        # CI systems set arbitrary values (e.g. CI=woodpecker).
        if isinstance(value, str):
            return value.strip().lower() not in _CI_FALSE_VALUES
        return value
