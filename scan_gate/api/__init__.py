"""Clients and models for the scan management and search services."""

from .base import ApiClient
from .scan_api import ScanApi
from .search_api import SearchApi
from .models import (
    ScanStatus,
    SearchType,
    Scan,
    ScanExecutionDetails,
    Vulnerability,
    SearchRequest,
    SearchPage,
    PageMetadata
)

__all__ = [
    'ApiClient',
    'ScanApi',
    'SearchApi',
    'ScanStatus',
    'SearchType',
    'Scan',
    'ScanExecutionDetails',
    'Vulnerability',
    'SearchRequest',
    'SearchPage',
    'PageMetadata'
]
