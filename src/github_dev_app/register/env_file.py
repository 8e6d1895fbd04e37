"""Save a GitHub App's secrets to a `.env` file.

The six GitHub App keys are owned by this tool: every merge drops their old
lines and appends fresh ones after everything else in the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from github_dev_app.errors import EnvFileError
from github_dev_app.github.client import AppCredentials

logger = logging.getLogger(__name__)

GITHUB_APP_ID = "GITHUB_APP_ID"
GITHUB_APP_NAME = "GITHUB_APP_NAME"
GITHUB_CLIENT_ID = "GITHUB_CLIENT_ID"
GITHUB_CLIENT_SECRET = "GITHUB_CLIENT_SECRET"
GITHUB_WEBHOOK_SECRET = "GITHUB_WEBHOOK_SECRET"
GITHUB_PRIVATE_KEY = "GITHUB_PRIVATE_KEY"

MANAGED_KEYS: tuple[str, ...] = (
    GITHUB_APP_ID,
    GITHUB_APP_NAME,
    GITHUB_CLIENT_ID,
    GITHUB_CLIENT_SECRET,
    GITHUB_WEBHOOK_SECRET,
    GITHUB_PRIVATE_KEY,
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _line_key(line: str) -> str:
    key = line.split("=", 1)[0].strip()
    if key.startswith("export "):
        key = key[len("export ") :].strip()
    return key


def _opens_multiline_value(line: str) -> bool:
    """True if the value starts a double quote that the line does not close."""

    if "=" not in line:
        return False
    value = line.split("=", 1)[1].strip()
    if not value.startswith('"'):
        return False
    body = value[1:]
    escaped = False
    for char in body:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            return False
    return True


def _closes_multiline_value(line: str) -> bool:
    return line.rstrip().endswith('"') and not line.rstrip().endswith('\\"')


def _unmanaged_lines(existing: str) -> list[str]:
    """Return the lines not owned by this tool, each with its original line ending."""

    lines: list[str] = []
    open_value: list[str] | None = None
    for line in existing.splitlines(keepends=True):
        if open_value is not None:
            open_value.append(line)
            if _closes_multiline_value(line):
                open_value = None
            continue
        if _line_key(line) in MANAGED_KEYS:
            if _opens_multiline_value(line):
                open_value = []
            continue
        lines.append(line)

    # The quote never closed, so the lines after it were not part of the value.
    if open_value:
        lines.extend(_unmanaged_lines("".join(open_value)))
    return lines


def quote_value(value: str) -> str:
    """Double-quote a value, escaping characters a dotenv parser would choke on."""

    return '"' + "".join(_ESCAPES.get(char, char) for char in value) + '"'


def _managed_lines(credentials: AppCredentials) -> list[str]:
    lines = [
        f"{GITHUB_APP_ID}={credentials.id}",
        f"{GITHUB_APP_NAME}={credentials.name}",
        f"{GITHUB_CLIENT_ID}={quote_value(credentials.client_id)}",
        f"{GITHUB_CLIENT_SECRET}={credentials.client_secret.get_secret_value()}",
    ]
    if credentials.webhook_secret is not None:
        lines.append(f"{GITHUB_WEBHOOK_SECRET}={credentials.webhook_secret.get_secret_value()}")
    lines.append(f"{GITHUB_PRIVATE_KEY}={quote_value(credentials.pem.get_secret_value())}")
    return lines


def merge_env(existing: str, credentials: AppCredentials) -> str:
    """Return `existing` with the app's keys replaced and appended at the end.

    Unrelated lines keep their order and line endings. Merging the same
    credentials twice yields the same text.
    """

    unmanaged = _unmanaged_lines(existing)
    if unmanaged and not unmanaged[-1].endswith(("\n", "\r")):
        unmanaged[-1] += "\n"
    return "".join(unmanaged) + "".join(f"{line}\n" for line in _managed_lines(credentials))


def persist_credentials(path: Path, credentials: AppCredentials) -> None:
    """Merge the app's credentials into the env file at `path`.

    A missing file is treated as empty. The file is rewritten in place.
    """

    try:
        existing = path.read_bytes().decode("utf-8") if path.exists() else ""
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(f"failed to read {path}: {e}") from e

    updated = merge_env(existing, credentials)

    try:
        path.write_bytes(updated.encode("utf-8"))
    except OSError as e:
        raise EnvFileError(f"failed to write {path}: {e}") from e

    logger.info(
        "App credentials saved",
        extra={"path": str(path), "app_id": credentials.id},
    )
