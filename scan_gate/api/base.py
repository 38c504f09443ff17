"""Base HTTP client shared by the scan and search services."""

import logging
from typing import Callable, Dict, Any, Iterable, Optional, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.exceptions import ApiRequestError, ApiResponseError


X_API_KEY_HEADER = "x-api-key"

T = TypeVar("T")


class ApiClient:
    """Thin wrapper around a ``requests.Session`` for one service."""

    def __init__(self, base_url: str, api_key: str,
                 timeout_seconds: float = 30, max_retries: int = 0,
                 backoff_factor: float = 1.0,
                 session: Optional[requests.Session] = None):
        """Initialize API client.

        Args:
            base_url: Service root, e.g. ``https://us.api.example.com/ias/v1``
            api_key: Key sent in the ``x-api-key`` header
            timeout_seconds: Per-request timeout
            max_retries: Adapter-level retries for idempotent requests
            backoff_factor: Adapter retry backoff factor
            session: Session to use instead of creating one
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger(f"scan_gate.api.{self.__class__.__name__}")
        self.session = session or requests.Session()

        if session is None:
            # POST is never retried at this level
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=backoff_factor,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=frozenset(["GET"])
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

        self.session.headers.update({
            X_API_KEY_HEADER: api_key,
            "Content-Type": "application/json",
            "Accept": "application/json"
        })

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _make_request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Make an HTTP request, mapping transport failures to ApiRequestError."""
        url = self._url(path)
        kwargs.setdefault("timeout", self.timeout_seconds)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise ApiRequestError(method, url, str(e)) from e

        self.logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def _expect(self, response: requests.Response,
                expected_status: Iterable[int] = (200,)) -> requests.Response:
        """Raise ApiResponseError unless the response has an expected status."""
        if response.status_code not in tuple(expected_status):
            request = response.request
            raise ApiResponseError(
                request.method if request is not None else "",
                response.url,
                response.status_code,
                body=response.text
            )
        return response

    def _json(self, response: requests.Response) -> Dict[str, Any]:
        """Decode a JSON object body."""
        try:
            data = response.json()
        except ValueError as e:
            request = response.request
            raise ApiResponseError(
                request.method if request is not None else "",
                response.url,
                response.status_code,
                body=response.text,
                details={'decode_error': str(e)}
            ) from e

        if not isinstance(data, dict):
            request = response.request
            raise ApiResponseError(
                request.method if request is not None else "",
                response.url,
                response.status_code,
                body=response.text,
                details={'decode_error': 'expected a JSON object'}
            )
        return data

    def _parse(self, response: requests.Response,
               parser: Callable[[Dict[str, Any]], T]) -> T:
        """Decode a JSON object body and build a model from it.

        A body of the wrong shape raises ApiResponseError, so callers see
        one error type for every unusable response.
        """
        data = self._json(response)
        try:
            return parser(data)
        except (TypeError, AttributeError, KeyError, ValueError) as e:
            request = response.request
            raise ApiResponseError(
                request.method if request is not None else "",
                response.url,
                response.status_code,
                body=response.text,
                details={'decode_error': f"unexpected response shape: {e}"}
            ) from e

    def close(self) -> None:
        """Close the session and clean up resources."""
        if self.session:
            self.session.close()
