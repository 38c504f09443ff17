"""Exception classes for scan-gate."""

from .base_exceptions import ScanGateException, ScanGateError
from .config_exceptions import (
    ConfigurationError, ConfigValidationError, InvalidDurationError
)
from .scan_exceptions import (
    ScanError, ScanSubmissionFailedError, ScanFailedError,
    ScanPollingAbortedError, ScanTimedOutError, ScanInterruptedError
)
from .api_exceptions import ApiError, ApiRequestError, ApiResponseError

__all__ = [
    'ScanGateException', 'ScanGateError',
    'ConfigurationError', 'ConfigValidationError', 'InvalidDurationError',
    'ScanError', 'ScanSubmissionFailedError', 'ScanFailedError',
    'ScanPollingAbortedError', 'ScanTimedOutError', 'ScanInterruptedError',
    'ApiError', 'ApiRequestError', 'ApiResponseError'
]
