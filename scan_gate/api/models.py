"""Data models for the scan and search services."""

from datetime import datetime
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from enum import Enum


class ScanStatus(Enum):
    """Remote scan status states."""
    PENDING = "PENDING"
    QUEUED = "QUEUED"
    PROVISIONING = "PROVISIONING"
    AUTHENTICATING = "AUTHENTICATING"
    RUNNING = "RUNNING"
    PAUSING = "PAUSING"
    PAUSED = "PAUSED"
    RESUMING = "RESUMING"
    STOPPING = "STOPPING"
    CANCELING = "CANCELING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'ScanStatus':
        """Parse a status string reported by the scan service."""
        if not value or not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_failure(self) -> bool:
        return self in (ScanStatus.FAILED, ScanStatus.CANCELING)

    @property
    def is_pending(self) -> bool:
        """Whether the scan is still waiting to start executing."""
        return self in (ScanStatus.PENDING, ScanStatus.QUEUED)

    @property
    def has_started(self) -> bool:
        """Whether the scan has begun (or finished) executing."""
        return not self.is_pending and self is not ScanStatus.UNKNOWN


class SearchType(Enum):
    """Searchable resource types."""
    APP = "APP"
    SCAN = "SCAN"
    SCAN_CONFIG = "SCAN_CONFIG"
    VULNERABILITY = "VULNERABILITY"


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _nested(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    nested = data.get(key)
    return nested if isinstance(nested, dict) else {}


def _nested_id(data: Dict[str, Any], key: str) -> Optional[str]:
    return _nested(data, key).get("id")


@dataclass(frozen=True)
class Scan:
    """A remote scan as reported by the scan service."""
    id: str
    status: ScanStatus
    app_id: Optional[str] = None
    scan_config_id: Optional[str] = None
    submit_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    failure_reason: Optional[str] = None
    raw_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Scan':
        """Create a Scan from the service's JSON representation."""
        return cls(
            id=data.get("id", ""),
            status=ScanStatus.from_string(data.get("status")),
            app_id=_nested_id(data, "app"),
            scan_config_id=_nested_id(data, "scan_config"),
            submit_time=_parse_timestamp(data.get("submit_time")),
            completion_time=_parse_timestamp(data.get("completion_time")),
            failure_reason=data.get("failure_reason"),
            raw_status=data.get("status")
        )


@dataclass(frozen=True)
class ScanExecutionDetails:
    """Execution metadata for a scan."""
    logged_in: bool = False
    links_in_crawl_queue: int = 0
    links_crawled: int = 0
    attacks_in_queue: int = 0
    attacked: int = 0
    vulnerable_attacks: int = 0
    requests: int = 0
    failed_requests: int = 0
    network_speed: int = 0
    drip_delay: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanExecutionDetails':
        return cls(
            logged_in=bool(data.get("logged_in", False)),
            links_in_crawl_queue=data.get("links_in_crawl_queue", 0),
            links_crawled=data.get("links_crawled", 0),
            attacks_in_queue=data.get("attacks_in_queue", 0),
            attacked=data.get("attacked", 0),
            vulnerable_attacks=data.get("vulnerable_attacks", 0),
            requests=data.get("requests", 0),
            failed_requests=data.get("failed_requests", 0),
            network_speed=data.get("network_speed", 0),
            drip_delay=data.get("drip_delay", 0)
        )


@dataclass(frozen=True)
class Vulnerability:
    """A single finding returned by the search service.

    Only identifying fields are modelled; everything else the service
    returns is kept untouched in ``raw``.
    """
    id: str
    app_id: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = None
    root_cause_url: Optional[str] = None
    root_cause_method: Optional[str] = None
    root_cause_parameter: Optional[str] = None
    first_discovered: Optional[datetime] = None
    last_discovered: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Vulnerability':
        root_cause = _nested(data, "root_cause")
        return cls(
            id=data.get("id", ""),
            app_id=_nested_id(data, "app"),
            severity=data.get("severity"),
            status=data.get("status"),
            root_cause_url=root_cause.get("url"),
            root_cause_method=root_cause.get("method"),
            root_cause_parameter=root_cause.get("parameter"),
            first_discovered=_parse_timestamp(data.get("first_discovered")),
            last_discovered=_parse_timestamp(data.get("last_discovered")),
            raw=dict(data)
        )


@dataclass(frozen=True)
class SearchRequest:
    """Search service request body."""
    type: SearchType
    query: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "query": self.query}


@dataclass
class PageMetadata:
    """Pagination metadata attached to a search response."""
    index: int = 0
    size: int = 0
    total_data: int = 0
    total_pages: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PageMetadata':
        return cls(
            index=data.get("index", 0),
            size=data.get("size", 0),
            total_data=data.get("total_data", 0),
            total_pages=data.get("total_pages", 0)
        )


@dataclass
class SearchPage:
    """One page of search results."""
    data: List[Dict[str, Any]]
    metadata: PageMetadata

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchPage':
        return cls(
            data=list(data.get("data") or []),
            metadata=PageMetadata.from_dict(_nested(data, "metadata"))
        )
