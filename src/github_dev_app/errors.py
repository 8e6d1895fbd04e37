"""Errors raised while registering a GitHub App.

Every failure carries the stage it happened in so the CLI can report it in a
single line.
"""

from __future__ import annotations


class RegistrationError(Exception):
    """Base class for terminal registration failures."""

    stage = "register"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Registration failed during {self.stage}: {self.message}"


class ManifestError(RegistrationError):
    """The manifest is missing, unreadable or invalid."""

    stage = "manifest"


class CallbackServerError(RegistrationError):
    """The local callback server could not bind its socket."""

    stage = "bind"


class CredentialExchangeError(RegistrationError):
    """GitHub refused (or never answered) the manifest code conversion."""

    stage = "exchange"

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        text = super().__str__()
        if self.body:
            return f"{text}\n{self.body}"
        return text


class EnvFileError(RegistrationError):
    """The environment file could not be read or written."""

    stage = "persist"
