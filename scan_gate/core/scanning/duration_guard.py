"""Wall-clock ceilings for the pending and executing phases of a scan."""

import logging
import time
from typing import Callable, Optional

from ...api.models import ScanStatus
from ..exceptions import ScanTimedOutError


class DurationGuard:
    """Checks elapsed time against optional pending and executing ceilings.

    The pending clock starts at ``start`` (submission time). The executing
    clock starts the first time a status that indicates the scan has begun
    executing is observed (or checked, if it was never observed), so time
    spent queued never counts against the execution ceiling.
    """

    def __init__(self, start: float, max_pending: Optional[float] = None,
                 max_executing: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 scan_id: Optional[str] = None):
        """Initialize duration guard.

        Args:
            start: Clock reading taken when the scan was submitted
            max_pending: Ceiling in seconds for the pending phase, None for unlimited
            max_executing: Ceiling in seconds for the executing phase, None for unlimited
            clock: Monotonic clock returning seconds
            scan_id: Scan handle, attached to raised errors
        """
        self.start = start
        self.max_pending = max_pending
        self.max_executing = max_executing
        self.clock = clock
        self.scan_id = scan_id
        self.execution_started_at: Optional[float] = None
        self.logger = logging.getLogger('scan_gate.duration_guard')

    @property
    def enabled(self) -> bool:
        return self.max_pending is not None or self.max_executing is not None

    def observe(self, status: ScanStatus) -> None:
        """Start the execution clock when a started status is first seen."""
        if self.execution_started_at is None and status.has_started:
            self.execution_started_at = self.clock()
            self.logger.debug(f"Execution clock started with status {status}")

    def check(self, status: ScanStatus) -> None:
        """Run both ceiling checks for the just-observed status."""
        if not self.enabled:
            return
        self.check_pending(status)
        self.check_executing(status)

    def check_pending(self, status: ScanStatus) -> None:
        if self.max_pending is None or not status.is_pending:
            return

        elapsed = self.clock() - self.start
        if elapsed > self.max_pending:
            self.logger.warning(f"Max scan pending duration exceeded: {elapsed:.0f}s "
                                f"> {self.max_pending:.0f}s")
            raise ScanTimedOutError(ScanTimedOutError.PENDING, self.max_pending, elapsed,
                                    scan_id=self.scan_id)

    def check_executing(self, status: ScanStatus) -> None:
        if self.max_executing is None or not status.has_started:
            return

        self.observe(status)

        elapsed = self.clock() - self.execution_started_at
        if elapsed > self.max_executing:
            self.logger.warning(f"Max scan execution duration exceeded: {elapsed:.0f}s "
                                f"> {self.max_executing:.0f}s")
            raise ScanTimedOutError(ScanTimedOutError.EXECUTING, self.max_executing, elapsed,
                                    scan_id=self.scan_id)
