"""Tests for exception classes."""

import pytest

from scan_gate.api import ScanStatus
from scan_gate.core.exceptions import (
    ScanGateException, ScanGateError,
    ConfigurationError, ConfigValidationError, InvalidDurationError,
    ScanError, ScanSubmissionFailedError, ScanFailedError,
    ScanPollingAbortedError, ScanTimedOutError, ScanInterruptedError,
    ApiError, ApiRequestError, ApiResponseError
)


class TestBaseExceptions:
    """Test cases for base exception classes."""

    def test_exception_basic(self):
        """Test basic ScanGateException functionality."""
        exc = ScanGateException("Test message")

        assert str(exc) == "Test message"
        assert exc.message == "Test message"
        assert exc.error_code is None
        assert exc.details == {}
        assert exc.suggestion is None

    def test_exception_with_all_params(self):
        """Test ScanGateException with all parameters."""
        exc = ScanGateException(
            "Test message",
            error_code="TEST_ERROR",
            details={'key': 'value'},
            suggestion="Try this fix"
        )

        assert exc.error_code == "TEST_ERROR"
        assert exc.details == {'key': 'value'}
        assert str(exc) == "Test message. Suggestion: Try this fix"

    def test_to_dict(self):
        """Test exception to_dict conversion."""
        exc = ScanGateError("Test message", error_code="TEST_ERROR")

        assert exc.to_dict() == {
            'exception_type': 'ScanGateError',
            'message': 'Test message',
            'error_code': 'TEST_ERROR',
            'details': {},
            'suggestion': None
        }


class TestConfigurationExceptions:
    """Test cases for configuration exceptions."""

    def test_configuration_error(self):
        exc = ConfigurationError("Bad value", config_section='api', config_key='page_size')

        assert exc.error_code == 'CONFIG_ERROR'
        assert exc.details == {'config_section': 'api', 'config_key': 'page_size'}
        assert isinstance(exc, ScanGateError)

    def test_config_validation_error(self):
        exc = ConfigValidationError(['first problem', 'second problem'])

        assert exc.message == ("Configuration validation failed with 2 errors: "
                               "first problem; second problem")
        assert exc.validation_errors == ['first problem', 'second problem']
        assert exc.error_code == 'CONFIG_VALIDATION_ERROR'
        assert isinstance(exc, ConfigurationError)

    def test_invalid_duration_error(self):
        exc = InvalidDurationError('5x', "unknown unit 'x'")

        assert exc.message == "Invalid duration '5x': unknown unit 'x'"
        assert exc.details == {'value': '5x', 'reason': "unknown unit 'x'"}
        assert 'Suggestion' in str(exc)


class TestScanExceptions:
    """Test cases for scan lifecycle exceptions."""

    def test_submission_failed_with_status(self):
        exc = ScanSubmissionFailedError('config-1', status_code=400,
                                        response_body='{"message": "bad"}')

        assert exc.message == ('Error occurred submitting scan. Response status: 400, '
                               'body: {"message": "bad"}')
        assert exc.details['scan_config_id'] == 'config-1'
        assert exc.error_code == 'SCAN_SUBMISSION_FAILED'

    def test_submission_failed_with_reason(self):
        exc = ScanSubmissionFailedError('config-1', reason='connection refused')

        assert exc.message == "Error occurred submitting scan: connection refused"
        assert exc.status_code is None

    def test_scan_failed(self):
        exc = ScanFailedError(ScanStatus.CANCELING, scan_id='scan-1')

        assert str(exc) == "Scan has failed. Status: CANCELING"
        assert exc.details == {'scan_id': 'scan-1', 'status': 'CANCELING'}
        assert isinstance(exc, ScanError)

    def test_polling_aborted(self):
        exc = ScanPollingAbortedError(21, scan_id='scan-1')

        assert exc.message == "Scan polling has failed 21 times, aborting"
        assert exc.failure_count == 21
        assert exc.scan_id == 'scan-1'

    def test_timed_out(self):
        exc = ScanTimedOutError(ScanTimedOutError.EXECUTING, 60, 75)

        assert exc.phase == 'executing'
        assert exc.message == "Scan exceeded max executing duration (75s elapsed, limit 60s)"
        assert exc.details['limit_seconds'] == 60
        assert exc.error_code == 'SCAN_TIMED_OUT'

    def test_interrupted(self):
        exc = ScanInterruptedError("received signal 15")

        assert str(exc) == "Scan run was interrupted: received signal 15"
        assert exc.error_code == 'SCAN_INTERRUPTED'


class TestApiExceptions:
    """Test cases for service client exceptions."""

    def test_request_error(self):
        exc = ApiRequestError('GET', 'https://scan.test/scans/1', 'timed out')

        assert exc.message == "GET https://scan.test/scans/1 failed: timed out"
        assert exc.details == {'reason': 'timed out', 'method': 'GET',
                               'url': 'https://scan.test/scans/1'}
        assert isinstance(exc, ApiError)

    def test_response_error(self):
        exc = ApiResponseError('POST', 'https://scan.test/search', 400, body='bad query')

        assert exc.status_code == 400
        assert exc.body == 'bad query'
        assert exc.error_code == 'API_RESPONSE_ERROR'


class TestExceptionHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize('exc', [
        ConfigValidationError([]),
        InvalidDurationError('x', 'y'),
        ScanSubmissionFailedError('c'),
        ScanFailedError('FAILED'),
        ScanPollingAbortedError(21),
        ScanTimedOutError('pending', 1, 2),
        ScanInterruptedError('r'),
        ApiRequestError('GET', 'u', 'r'),
        ApiResponseError('GET', 'u', 500),
    ])
    def test_all_derive_from_base(self, exc):
        assert isinstance(exc, ScanGateException)
        assert isinstance(exc, Exception)
        assert exc.to_dict()['exception_type'] == type(exc).__name__
