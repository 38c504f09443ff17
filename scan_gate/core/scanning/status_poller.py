"""Single best-effort status polls with a consecutive-failure budget."""

import logging

from ...api.scan_api import ScanApi
from ..exceptions import ApiError, ScanPollingAbortedError
from .data_structures import Observed, PollOutcome, ScanHandle, Transient


# Roughly five minutes of failed polling at the fixed 15 second interval
FAILURE_THRESHOLD = 20


class StatusPoller:
    """Fetches scan status, tolerating up to 20 consecutive failures.

    A poller is owned by exactly one run. Any successful poll re-arms the
    full budget, so only an unbroken run of failures aborts polling.
    """

    def __init__(self, scan_api: ScanApi):
        self.scan_api = scan_api
        self.failed_count = 0
        self.logger = logging.getLogger('scan_gate.status_poller')

    def poll(self, handle: ScanHandle) -> PollOutcome:
        """Poll once.

        Returns:
            Observed on success, Transient on a communication failure

        Raises:
            ScanPollingAbortedError: On the 21st consecutive failure
        """
        try:
            scan = self.scan_api.get_scan(handle)
        except ApiError as e:
            self.failed_count += 1
            self.logger.debug(f"Status poll for scan {handle} failed "
                              f"({self.failed_count} consecutive): {e}")

            if self.failed_count > FAILURE_THRESHOLD:
                raise ScanPollingAbortedError(self.failed_count, scan_id=handle) from e
            return Transient(e)

        self.failed_count = 0
        return Observed(scan)
