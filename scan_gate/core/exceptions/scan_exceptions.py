"""Scan lifecycle exception classes."""

from typing import Optional, Any
from .base_exceptions import ScanGateError


class ScanError(ScanGateError):
    """Base class for scan lifecycle errors."""

    def __init__(self, message: str, scan_id: Optional[str] = None, **kwargs):
        """Initialize scan error.

        Args:
            message: Error message
            scan_id: Handle of the remote scan, when one exists
            **kwargs: Additional arguments for base class
        """
        details = kwargs.get('details', {})
        if scan_id:
            details['scan_id'] = scan_id

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'SCAN_ERROR')

        super().__init__(message, **kwargs)

        self.scan_id = scan_id


class ScanSubmissionFailedError(ScanError):
    """Exception raised when the scan could not be submitted."""

    def __init__(self, scan_config_id: str, status_code: Optional[int] = None,
                 response_body: Optional[str] = None, reason: Optional[str] = None,
                 **kwargs):
        """Initialize scan submission error.

        Args:
            scan_config_id: Scan config the submission was made for
            status_code: HTTP status returned by the scan service, if any
            response_body: Response body returned by the scan service, if any
            reason: Transport-level failure description, if any
            **kwargs: Additional arguments for base class
        """
        message = "Error occurred submitting scan"
        if status_code is not None:
            message += f". Response status: {status_code}"
            if response_body:
                message += f", body: {response_body}"
        elif reason:
            message += f": {reason}"

        details = kwargs.get('details', {})
        details.update({
            'scan_config_id': scan_config_id,
            'status_code': status_code,
            'response_body': response_body,
            'reason': reason
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_SUBMISSION_FAILED'
        kwargs['suggestion'] = 'Check the scan config id and API credentials'

        super().__init__(message, **kwargs)

        self.scan_config_id = scan_config_id
        self.status_code = status_code
        self.response_body = response_body
        self.reason = reason


class ScanFailedError(ScanError):
    """Exception raised when the remote scan reports a failure status."""

    def __init__(self, status: Any, **kwargs):
        """Initialize scan failed error.

        Args:
            status: Terminal failure status reported by the scan service
            **kwargs: Additional arguments for base class
        """
        message = f"Scan has failed. Status: {status}"

        details = kwargs.get('details', {})
        details['status'] = str(status)

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_FAILED'

        super().__init__(message, **kwargs)

        self.status = status


class ScanPollingAbortedError(ScanError):
    """Exception raised when too many consecutive status polls fail."""

    def __init__(self, failure_count: int, **kwargs):
        """Initialize polling aborted error.

        Args:
            failure_count: Number of consecutive failed polls
            **kwargs: Additional arguments for base class
        """
        message = f"Scan polling has failed {failure_count} times, aborting"

        details = kwargs.get('details', {})
        details['failure_count'] = failure_count

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_POLLING_ABORTED'
        kwargs['suggestion'] = 'Check network connectivity to the scan service'

        super().__init__(message, **kwargs)

        self.failure_count = failure_count


class ScanTimedOutError(ScanError):
    """Exception raised when a scan phase exceeds its duration ceiling."""

    PENDING = 'pending'
    EXECUTING = 'executing'

    def __init__(self, phase: str, limit_seconds: float, elapsed_seconds: float,
                 **kwargs):
        """Initialize scan timeout error.

        Args:
            phase: Which ceiling was breached ('pending' or 'executing')
            limit_seconds: Configured ceiling in seconds
            elapsed_seconds: Time spent in the phase when the breach was seen
            **kwargs: Additional arguments for base class
        """
        message = (f"Scan exceeded max {phase} duration "
                   f"({elapsed_seconds:.0f}s elapsed, limit {limit_seconds:.0f}s)")

        details = kwargs.get('details', {})
        details.update({
            'phase': phase,
            'limit_seconds': limit_seconds,
            'elapsed_seconds': elapsed_seconds
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_TIMED_OUT'
        kwargs['suggestion'] = f'Increase the max {phase} duration or check the scan queue'

        super().__init__(message, **kwargs)

        self.phase = phase
        self.limit_seconds = limit_seconds
        self.elapsed_seconds = elapsed_seconds


class ScanInterruptedError(ScanError):
    """Exception raised when the host cancels a run while it is waiting."""

    def __init__(self, reason: str, **kwargs):
        """Initialize scan interrupted error.

        Args:
            reason: Reason why the run was interrupted
            **kwargs: Additional arguments for base class
        """
        message = f"Scan run was interrupted: {reason}"

        details = kwargs.get('details', {})
        details['reason'] = reason

        kwargs['details'] = details
        kwargs['error_code'] = 'SCAN_INTERRUPTED'

        super().__init__(message, **kwargs)

        self.reason = reason
