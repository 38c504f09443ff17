"""Human-readable progress lines for the host build log."""

import logging
from typing import Any, Optional


class ProgressLogger:
    """Formats progress messages and writes them to a logger at INFO.

    Messages are passed as a format string plus arguments so callers (and
    tests) can match on the format string independently of the values.
    """

    PREFIX = "[scan-gate]"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('scan_gate.progress')

    def log(self, message: str, *args: Any) -> None:
        text = message % args if args else message
        self.logger.info(f"{self.PREFIX} {text}")
