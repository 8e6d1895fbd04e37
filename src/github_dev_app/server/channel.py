"""Single-use handoff of the one-time code from the HTTP handler to the caller."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


class ChannelAlreadyReceived(RuntimeError):
    """Raised when the code is read a second time."""


@dataclass
class CallbackChannel:
    """A one-slot channel written at most once and read at most once.

    The HTTP handler calls :meth:`send`; the registration flow blocks in
    :meth:`receive`. Later sends are refused and never overwrite the first
    value.
    """

    _value: str | None = field(default=None, init=False, repr=False)
    _received: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = threading.Event()

    @property
    def delivered(self) -> bool:
        return self._ready.is_set()

    def send(self, code: str) -> bool:
        """Store `code` if the slot is empty. Returns False if it was already filled."""

        with self._lock:
            if self._ready.is_set():
                return False
            self._value = code
            self._ready.set()
            return True

    def receive(self, timeout: float | None = None) -> str | None:
        """Block until a code arrives or `timeout` seconds pass.

        Returns None on timeout. A `timeout` of None waits forever.
        """

        if not self._ready.wait(timeout):
            return None
        with self._lock:
            if self._received:
                raise ChannelAlreadyReceived("the callback code was already received")
            self._received = True
            return self._value
