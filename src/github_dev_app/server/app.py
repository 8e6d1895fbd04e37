"""FastAPI app factory for the callback server.

GitHub redirects the browser to the manifest's ``redirect_url`` with a
one-time ``code`` query parameter after the user confirms the new app.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Response

from github_dev_app import __version__
from github_dev_app.server.channel import CallbackChannel

logger = logging.getLogger(__name__)


def create_app(channel: CallbackChannel) -> FastAPI:
    app = FastAPI(
        title="GitHub Dev App callback",
        version=__version__,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )

    app.state.channel = channel

    # GitHub's redirect arrives as a browser GET; POST is kept for scripted callers.
    @app.api_route("/", methods=["GET", "POST"], status_code=204)
    def accept_code(code: str | None = None) -> Response:
        if not code:
            logger.warning("Callback request without a code")
            raise HTTPException(status_code=400, detail="Missing 'code' query parameter")

        if not channel.send(code):
            logger.warning("Ignoring callback after a code was already delivered")
            raise HTTPException(status_code=409, detail="A code was already received")

        logger.info("Received manifest code from GitHub")
        return Response(status_code=204)

    return app
