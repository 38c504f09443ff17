"""Collection of findings and execution metadata for a completed scan."""

from typing import Optional, Tuple

from ...api.models import SearchRequest, SearchType, ScanExecutionDetails, Vulnerability
from ...api.scan_api import ScanApi
from ...api.search_api import SearchApi
from ..logger.progress_logger import ProgressLogger
from .data_structures import ScanHandle, ScanResult


def build_vulnerability_query(handle: ScanHandle, result_filter: Optional[str] = None) -> str:
    """Build the search query for a scan's vulnerabilities.

    The caller's filter is appended verbatim with ``&&``; it is written in
    the search service's own query language and is not interpreted here.
    """
    query = f"vulnerability.scans.id='{handle}'"
    if result_filter and result_filter.strip():
        query += f" && {result_filter.strip()}"
    return query


class ResultAggregator:
    """Fetches everything a completed scan produced."""

    def __init__(self, scan_api: ScanApi, search_api: SearchApi,
                 progress: Optional[ProgressLogger] = None):
        self.scan_api = scan_api
        self.search_api = search_api
        self.progress = progress or ProgressLogger()

    def fetch_all(self, handle: ScanHandle,
                  result_filter: Optional[str] = None) -> Tuple[Vulnerability, ...]:
        """Fetch every vulnerability of the scan, across all result pages."""
        request = SearchRequest(SearchType.VULNERABILITY,
                                build_vulnerability_query(handle, result_filter))

        self.progress.log("Searching for vulnerabilities using query [%s]", request.query)

        return tuple(self.search_api.search_all(request, Vulnerability.from_dict))

    def fetch_execution_details(self, handle: ScanHandle) -> ScanExecutionDetails:
        return self.scan_api.get_scan_execution_details(handle)

    def aggregate(self, handle: ScanHandle, result_filter: Optional[str] = None) -> ScanResult:
        vulnerabilities = self.fetch_all(handle, result_filter)
        execution_details = self.fetch_execution_details(handle)

        self.progress.log("Found %s vulnerabilities for scan %s", len(vulnerabilities), handle)

        return ScanResult(scan_id=handle,
                          vulnerabilities=vulnerabilities,
                          execution_details=execution_details)
