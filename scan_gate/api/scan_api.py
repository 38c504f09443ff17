"""Client for the scan management service."""

from typing import Dict, Any

import requests

from .base import ApiClient
from .models import Scan, ScanExecutionDetails


class ScanApi(ApiClient):
    """Submits scans and reads their status and execution details."""

    def submit_scan(self, scan_config_id: str) -> requests.Response:
        """Submit a scan for the given scan config.

        The raw response is returned; a successful submission answers
        ``201 Created`` with the new scan's URL in the ``Location`` header.
        Transport failures raise ``ApiRequestError``.
        """
        body: Dict[str, Any] = {"scan_config": {"id": scan_config_id}}
        return self._make_request("POST", "/scans", json=body)

    def get_scan(self, scan_id: str) -> Scan:
        """Fetch a scan; raises ``ApiError`` on any failure."""
        response = self._expect(self._make_request("GET", f"/scans/{scan_id}"))
        return self._parse(response, Scan.from_dict)

    def get_scan_execution_details(self, scan_id: str) -> ScanExecutionDetails:
        response = self._expect(self._make_request("GET", f"/scans/{scan_id}/execution-details"))
        return self._parse(response, ScanExecutionDetails.from_dict)
