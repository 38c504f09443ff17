"""HTTP API exception classes."""

from typing import Optional
from .base_exceptions import ScanGateError


class ApiError(ScanGateError):
    """Base class for errors talking to the scan or search services."""

    def __init__(self, message: str, method: Optional[str] = None,
                 url: Optional[str] = None, **kwargs):
        details = kwargs.get('details', {})
        if method:
            details['method'] = method
        if url:
            details['url'] = url

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'API_ERROR')

        super().__init__(message, **kwargs)

        self.method = method
        self.url = url


class ApiRequestError(ApiError):
    """Exception raised when a request could not be completed at all."""

    def __init__(self, method: str, url: str, reason: str, **kwargs):
        """Initialize API request error.

        Args:
            method: HTTP method
            url: Request URL
            reason: Transport-level failure description
            **kwargs: Additional arguments for base class
        """
        message = f"{method} {url} failed: {reason}"

        details = kwargs.get('details', {})
        details['reason'] = reason

        kwargs['details'] = details
        kwargs['error_code'] = 'API_REQUEST_ERROR'

        super().__init__(message, method=method, url=url, **kwargs)

        self.reason = reason


class ApiResponseError(ApiError):
    """Exception raised when the service answers with an unusable response."""

    def __init__(self, method: str, url: str, status_code: int,
                 body: Optional[str] = None, **kwargs):
        """Initialize API response error.

        Args:
            method: HTTP method
            url: Request URL
            status_code: HTTP status code returned
            body: Response body, if any
            **kwargs: Additional arguments for base class
        """
        message = f"{method} {url} returned unexpected status {status_code}"

        details = kwargs.get('details', {})
        details.update({
            'status_code': status_code,
            'body': body
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'API_RESPONSE_ERROR'

        super().__init__(message, method=method, url=url, **kwargs)

        self.status_code = status_code
        self.body = body
