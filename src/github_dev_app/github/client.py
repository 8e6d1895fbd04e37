"""GitHub API client for the app manifest flow.

Wraps the single REST call the registration needs: converting the one-time
manifest code into the app's credentials.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from github_dev_app import __version__
from github_dev_app.errors import CredentialExchangeError

logger = logging.getLogger(__name__)


class AppCredentials(BaseModel):
    """A GitHub App's identity, secrets and private key."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    client_id: str
    client_secret: SecretStr
    webhook_secret: SecretStr | None = None
    pem: SecretStr

    slug: str | None = None
    html_url: str | None = None

    @property
    def installation_url(self) -> str | None:
        """Page where the new app can be installed, when GitHub reported it."""

        if not self.html_url:
            return None
        return f"{self.html_url.rstrip('/')}/installations/new"


class GitHubAppClient:
    """Small wrapper around the GitHub REST API for app registration."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"github-dev-app/{__version__}",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _conversion_url(self, code: str) -> str:
        if not code:
            raise ValueError("code is required")
        return f"{self._base_url}/app-manifests/{quote(code, safe='')}/conversions"

    def exchange_code(self, code: str) -> AppCredentials:
        """Exchange a one-time manifest code for the app's credentials.

        The code is single-use, so the request is never retried.

        Raises:
            CredentialExchangeError: transport failure, non-success status, or a
                body that does not describe an app.
        """

        url = self._conversion_url(code)
        try:
            resp = self._session.post(url, timeout=self._timeout)
        except requests.RequestException as e:
            raise CredentialExchangeError(f"request to {self._base_url} failed: {e}") from e

        if not resp.ok:
            logger.error(
                "Manifest code conversion rejected",
                extra={"status_code": resp.status_code, "base_url": self._base_url},
            )
            raise CredentialExchangeError(
                f"GitHub responded with HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data: Any = resp.json()
            credentials = AppCredentials.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise CredentialExchangeError(
                f"unexpected conversion response: {e}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

        logger.info(
            "Exchanged manifest code for app credentials",
            extra={"app_id": credentials.id, "app_name": credentials.name},
        )
        return credentials

    def close(self) -> None:
        self._session.close()
