"""Scan lifecycle controller: submit, poll, and collect results."""

import logging
import time
from typing import Callable, Optional

from ...api.models import ScanStatus
from ...api.scan_api import ScanApi
from ...api.search_api import SearchApi
from ..exceptions import ApiError, ScanFailedError, ScanSubmissionFailedError
from ..logger.progress_logger import ProgressLogger
from .advance_indicator import AdvanceLevel
from .data_structures import DurationBudget, Observed, ScanHandle, ScanResult
from .duration_guard import DurationGuard
from .lifecycle import LifecyclePhase, PollDecision, decide_poll_action
from .result_aggregator import ResultAggregator
from .sleeper import Sleeper
from .status_poller import StatusPoller


POLL_INTERVAL_SECONDS = 15


def extract_scan_handle(location: Optional[str]) -> Optional[ScanHandle]:
    """Take the scan id from the last path segment of a Location header."""
    if not location:
        return None
    handle = location.rstrip('/').rsplit('/', 1)[-1]
    return ScanHandle(handle) if handle else None


class ScanLifecycleController:
    """Drives one scan from submission to the caller's advance level.

    A controller is built for a single run; the poller and duration guard
    it creates never outlive that run.
    """

    def __init__(self, scan_api: ScanApi, search_api: SearchApi,
                 progress: Optional[ProgressLogger] = None,
                 sleeper: Optional[Sleeper] = None,
                 budget: Optional[DurationBudget] = None,
                 clock: Callable[[], float] = time.monotonic,
                 aggregator: Optional[ResultAggregator] = None):
        """Initialize controller.

        Args:
            scan_api: Scan service client
            search_api: Search service client
            progress: Sink for build log progress lines
            sleeper: Cancellable sleep used between polls
            budget: Pending and executing duration ceilings
            clock: Monotonic clock returning seconds
            aggregator: Result collector, built from the API clients by default
        """
        self.scan_api = scan_api
        self.search_api = search_api
        self.progress = progress or ProgressLogger()
        self.sleeper = sleeper or Sleeper()
        self.budget = budget or DurationBudget()
        self.clock = clock
        self.aggregator = aggregator or ResultAggregator(scan_api, search_api, self.progress)
        self.phase = LifecyclePhase.SUBMITTING
        self.logger = logging.getLogger('scan_gate.controller')

    def run(self, scan_config_id: str, advance_level: AdvanceLevel,
            result_filter: Optional[str] = None) -> Optional[ScanResult]:
        """Submit a scan and wait until ``advance_level`` is reached.

        Args:
            scan_config_id: Scan config to launch
            advance_level: How far to wait before returning
            result_filter: Extra search query ANDed into the findings search

        Returns:
            ScanResult for the completed levels, otherwise None

        Raises:
            ScanSubmissionFailedError: Submission failed
            ScanFailedError: Scan reached FAILED or CANCELING
            ScanPollingAbortedError: Too many consecutive failed polls
            ScanTimedOutError: A duration ceiling was exceeded
            ScanInterruptedError: The run was cancelled while waiting
        """
        self.phase = LifecyclePhase.SUBMITTING
        submitted_at = self.clock()
        handle = self._submit_scan(scan_config_id)

        self.progress.log("Using build advance indicator: '%s'", advance_level.display_name)

        desired_status = advance_level.desired_status
        if desired_status is None:
            self.phase = LifecyclePhase.DONE
            return None

        self.phase = LifecyclePhase.POLLING
        guard = DurationGuard(submitted_at,
                              max_pending=self.budget.max_pending,
                              max_executing=self.budget.max_executing,
                              clock=self.clock,
                              scan_id=handle)
        self._block_until_status(handle, desired_status, guard)

        if not advance_level.fetches_results:
            self.phase = LifecyclePhase.DONE
            return None

        self.phase = LifecyclePhase.AGGREGATING
        query_filter = result_filter if advance_level.applies_filter else None
        result = self.aggregator.aggregate(handle, query_filter)

        self.phase = LifecyclePhase.DONE
        return result

    def _submit_scan(self, scan_config_id: str) -> ScanHandle:
        self.progress.log("Submitting scan for scan config with id: %s", scan_config_id)

        try:
            response = self.scan_api.submit_scan(scan_config_id)
        except ApiError as e:
            raise ScanSubmissionFailedError(scan_config_id, reason=str(e)) from e

        if response.status_code != 201:
            raise ScanSubmissionFailedError(scan_config_id,
                                            status_code=response.status_code,
                                            response_body=response.text)

        handle = extract_scan_handle(response.headers.get("Location"))
        if handle is None:
            raise ScanSubmissionFailedError(scan_config_id,
                                            reason="response has no Location header")

        self.progress.log("Scan submitted successfully")
        self.progress.log("Scan id: %s", handle)
        return handle

    def _block_until_status(self, handle: ScanHandle, desired_status: ScanStatus,
                            guard: DurationGuard) -> None:
        self.progress.log("Beginning polling for scan with id: %s", handle)

        poller = StatusPoller(self.scan_api)
        last_status: Optional[ScanStatus] = None

        while True:
            outcome = poller.poll(handle)

            if isinstance(outcome, Observed):
                status = outcome.status

                if last_status is None:
                    self.progress.log("Scan status: %s", status)
                elif status is not last_status:
                    self.progress.log("Scan status has been updated from %s to %s",
                                      last_status, status)
                last_status = status
                guard.observe(status)

                decision = decide_poll_action(status, desired_status)
                if decision is PollDecision.FAIL:
                    self.progress.log("Failing build due to scan status: %s", status)
                    raise ScanFailedError(status, scan_id=handle)
                if decision is PollDecision.REACHED:
                    self.progress.log("Desired scan status has been reached")
                    return

            self.sleeper.sleep(POLL_INTERVAL_SECONDS)

            # After a failed poll the last known status still drives the ceilings
            if last_status is not None:
                guard.check(last_status)
