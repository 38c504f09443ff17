"""Cancellable waiting between status polls."""

import threading
from typing import Optional

from ..exceptions import ScanInterruptedError


class CancellationToken:
    """Set by the host to abort a run at its next wait."""

    def __init__(self):
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled by host") -> None:
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)


class Sleeper:
    """Blocks the poll loop, honouring a cancellation token."""

    def __init__(self, token: Optional[CancellationToken] = None):
        self.token = token or CancellationToken()

    def sleep(self, seconds: float) -> None:
        """Wait for ``seconds``.

        Raises:
            ScanInterruptedError: If the token is (or becomes) cancelled
        """
        if self.token.wait(seconds):
            raise ScanInterruptedError(self.token.reason or "cancelled")
