"""Manifest for a GitHub App.

GitHub Apps can be created from a manifest: a JSON object describing the
app's name, URLs, permissions and events. The manifest is provided by the
user; the registration flow only overrides ``redirect_url`` so GitHub sends
the one-time code back to the local callback server.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from github_dev_app.errors import ManifestError


class HookAttributes(BaseModel):
    """Configuration of the GitHub App's webhook."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    active: bool | None = None


class Manifest(BaseModel):
    """Manifest for a GitHub App.

    Only ``url`` (the app's homepage) is required. Unset optional fields are
    left out of the serialized manifest, and unknown fields are dropped on
    load.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    url: str
    hook_attributes: HookAttributes | None = None
    redirect_url: str | None = None
    # GitHub accepts up to 10 callback URLs.
    callback_urls: list[str] | None = None
    setup_url: str | None = None
    description: str | None = None
    public: bool | None = None
    default_events: list[str] | None = None
    default_permissions: dict[str, str] | None = None
    request_oauth_on_install: bool | None = None
    setup_on_update: bool | None = None

    @classmethod
    def from_str(cls, source: str) -> Manifest:
        try:
            return cls.model_validate_json(source)
        except ValidationError as e:
            raise ManifestError(f"failed to deserialize manifest: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> Manifest:
        """Load a manifest from a JSON file."""

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"failed to read manifest file {path}: {e}") from e
        return cls.from_str(source)

    def with_redirect_url(self, redirect_url: str) -> Manifest:
        return self.model_copy(update={"redirect_url": redirect_url})

    def serialize(self) -> str:
        """Return the compact JSON form sent to GitHub."""

        return self.model_dump_json(exclude_none=True)
