"""Drive the GitHub App manifest registration flow.

Exchange mode:
1. load the manifest
2. start the callback server and point the manifest's redirect at it
3. open the registration form (or print where it is)
4. wait, without a timeout, for GitHub to redirect back with a code
5. exchange the code for credentials and merge them into the env file
6. open (or print) the installation page

Headless mode starts the callback server, prints its URL, waits for a
callback or the idle window, and stops without exchanging anything.
"""

from __future__ import annotations

import enum
import logging
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from github_dev_app.config import DevAppSettings
from github_dev_app.github.client import AppCredentials, GitHubAppClient
from github_dev_app.manifest import Manifest
from github_dev_app.register.env_file import persist_credentials
from github_dev_app.register.form import registration_url, write_form
from github_dev_app.server.callback import CallbackServer

logger = logging.getLogger(__name__)


class RegistrationMode(enum.Enum):
    EXCHANGE = "exchange"
    HEADLESS = "headless"


@dataclass
class RegistrationOrchestrator:
    """Register a GitHub App from a manifest file.

    `interactive` decides whether pages are opened in a browser or printed.
    The collaborators are injectable so tests can replace the network and the
    browser.
    """

    settings: DevAppSettings
    interactive: bool
    start_server: Callable[[str, int | None], CallbackServer] = CallbackServer.start
    client_factory: Callable[[str], GitHubAppClient] = GitHubAppClient
    open_browser: Callable[[str], bool] = webbrowser.open

    def register(
        self,
        manifest_path: Path,
        *,
        api_url: str | None = None,
        port: int | None = None,
        mode: RegistrationMode = RegistrationMode.EXCHANGE,
        env_file: Path = Path(".env"),
        organization: str | None = None,
    ) -> AppCredentials | None:
        """Run the registration flow.

        Returns:
            The new app's credentials, or None in headless mode.

        Raises:
            RegistrationError: a subclass naming the failed stage.
        """

        manifest = Manifest.from_file(manifest_path)
        server = self.start_server(self.settings.callback_host, port)
        try:
            if mode is RegistrationMode.HEADLESS:
                self._wait_headless(server)
                return None
            return self._register_and_exchange(
                manifest,
                server,
                api_url=api_url or self.settings.github_api_url,
                env_file=env_file,
                organization=organization,
            )
        finally:
            server.shutdown()

    def _present(self, url: str, message: str) -> None:
        if self.interactive and self.open_browser(url):
            logger.info("Opened browser", extra={"url": url})
            return
        print(f"{message}:\n  {url}")

    def _register_and_exchange(
        self,
        manifest: Manifest,
        server: CallbackServer,
        *,
        api_url: str,
        env_file: Path,
        organization: str | None,
    ) -> AppCredentials:
        manifest = manifest.with_redirect_url(server.url)
        action = registration_url(self.settings.github_url, organization)
        form = write_form(manifest.serialize(), action)
        logger.info("Registration form written", extra={"path": str(form), "action": action})

        try:
            self._present(form.as_uri(), "Open this page in a browser to register the GitHub App")
            code = server.channel.receive()
        finally:
            form.unlink(missing_ok=True)
        assert code is not None

        client = self.client_factory(api_url)
        try:
            credentials = client.exchange_code(code)
        finally:
            client.close()

        persist_credentials(env_file, credentials)
        print(
            f"Registered GitHub App '{credentials.name}' (id {credentials.id}); "
            f"credentials saved to {env_file}"
        )

        if credentials.installation_url:
            self._present(credentials.installation_url, "Install the app")
        return credentials

    def _wait_headless(self, server: CallbackServer) -> None:
        timeout = self.settings.idle_timeout_seconds
        print(f"Waiting up to {timeout:g}s for the GitHub callback on {server.url}")

        code = server.channel.receive(timeout=timeout)
        if code is None:
            logger.info("No callback received", extra={"timeout_seconds": timeout})
            print("No callback received; exiting.")
            return

        logger.info("Callback received; skipping credential exchange")
        print("Callback received; credentials were not exchanged.")
