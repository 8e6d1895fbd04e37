"""The form that starts GitHub's app registration.

GitHub only accepts a manifest through a browser form POST, so the user is
authenticated with GitHub when the app is created. The form is written to a
temporary HTML file that submits itself when opened.
"""

from __future__ import annotations

import html
import tempfile
from pathlib import Path

_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Register GitHub App</title>
</head>
<body>
  <form id="register" method="post" action="{action}">
    <input type="hidden" name="manifest" value="{manifest}">
    <p>Redirecting to GitHub to register the app...</p>
    <noscript><button type="submit">Continue to GitHub</button></noscript>
  </form>
  <script>document.getElementById("register").submit();</script>
</body>
</html>
"""


def registration_url(github_url: str, organization: str | None = None) -> str:
    """URL of GitHub's "new app from manifest" page for a user or an organization."""

    base = github_url.rstrip("/")
    if organization:
        return f"{base}/organizations/{organization}/settings/apps/new"
    return f"{base}/settings/apps/new"


def render_form(serialized_manifest: str, action: str) -> str:
    return _TEMPLATE.format(
        action=html.escape(action, quote=True),
        manifest=html.escape(serialized_manifest, quote=True),
    )


def write_form(serialized_manifest: str, action: str, directory: Path | None = None) -> Path:
    """Render the form into a new temporary HTML file and return its path."""

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        prefix="github-dev-app-",
        suffix=".html",
        dir=directory,
        delete=False,
    ) as handle:
        handle.write(render_form(serialized_manifest, action))
    return Path(handle.name)
