"""GitHub Dev App.

Create a GitHub App for local development from a manifest:
- configuration loaded from `.env`
- structured logging
- local callback server for GitHub's manifest flow
- app credentials merged into `.env`
"""

__version__ = "0.1.0"

from github_dev_app.config import DevAppSettings

__all__ = ["__version__", "DevAppSettings"]
