"""Local callback server for GitHub's app manifest flow.

GitHub redirects the browser back to this server with a one-time code; the
server hands that code to the registration flow exactly once.
"""

from __future__ import annotations

__all__ = ["CallbackChannel", "CallbackServer", "create_app"]

from github_dev_app.server.app import create_app
from github_dev_app.server.callback import CallbackServer
from github_dev_app.server.channel import CallbackChannel
