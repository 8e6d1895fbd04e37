"""Register a new GitHub App from a manifest."""

from __future__ import annotations

__all__ = [
    "RegistrationMode",
    "RegistrationOrchestrator",
    "merge_env",
    "persist_credentials",
]

from github_dev_app.register.env_file import merge_env, persist_credentials
from github_dev_app.register.orchestrator import RegistrationMode, RegistrationOrchestrator
