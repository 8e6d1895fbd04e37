"""Background callback server.

The listening socket is bound before :meth:`CallbackServer.start` returns so
the address can be advertised right away; uvicorn serves the app from a
daemon thread using that socket.
"""

from __future__ import annotations

import logging
import socket
import threading

import uvicorn

from github_dev_app.errors import CallbackServerError
from github_dev_app.server.app import create_app
from github_dev_app.server.channel import CallbackChannel

logger = logging.getLogger(__name__)


def _bind(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    try:
        return socket.create_server((host, port), family=family)
    except OSError as e:
        raise CallbackServerError(f"failed to bind {host}:{port}: {e}") from e


class CallbackServer:
    """Ephemeral HTTP listener that hands one code to the registration flow."""

    def __init__(self, sock: socket.socket, channel: CallbackChannel) -> None:
        self._socket = sock
        host, port = sock.getsockname()[:2]
        self._address: tuple[str, int] = (host, port)
        self.channel = channel

        config = uvicorn.Config(
            create_app(channel),
            log_config=None,
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            name="callback-server",
            daemon=True,
            kwargs={"sockets": [sock]},
        )

    @classmethod
    def start(cls, host: str = "127.0.0.1", port: int | None = None) -> CallbackServer:
        """Bind `host`:`port` (an OS-assigned port if None) and start serving.

        Raises:
            CallbackServerError: the socket could not be bound.
        """

        sock = _bind(host, port or 0)
        server = cls(sock, CallbackChannel())
        server._thread.start()
        logger.info("Callback server listening", extra={"url": server.url})
        return server

    @property
    def address(self) -> tuple[str, int]:
        return self._address

    @property
    def url(self) -> str:
        host, port = self.address
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{port}/"

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop serving and wait for the background thread to finish."""

        self._server.should_exit = True
        self._thread.join(timeout)
        self._socket.close()
