"""Console script entrypoint (`github-dev-app`).

The CLI itself lives in `github_dev_app.main`.
"""

from __future__ import annotations

from github_dev_app.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
