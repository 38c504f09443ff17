"""Core data structures for a scan run."""

from dataclasses import dataclass
from typing import NewType, Optional, Tuple, Union

from ...api.models import Scan, ScanStatus, ScanExecutionDetails, Vulnerability
from .duration_parser import parse_duration


ScanHandle = NewType('ScanHandle', str)


@dataclass(frozen=True)
class DurationBudget:
    """Optional ceilings, in seconds, for the pending and executing phases."""
    max_pending: Optional[float] = None
    max_executing: Optional[float] = None

    def __post_init__(self):
        for name in ('max_pending', 'max_executing'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_strings(cls, max_pending: Optional[str] = None,
                     max_executing: Optional[str] = None) -> 'DurationBudget':
        """Build a budget from duration strings like ``'2h 30m'``."""
        return cls(
            max_pending=parse_duration(max_pending),
            max_executing=parse_duration(max_executing)
        )

    @property
    def is_unlimited(self) -> bool:
        return self.max_pending is None and self.max_executing is None


@dataclass(frozen=True)
class Observed:
    """A poll that reached the scan service."""
    scan: Scan

    @property
    def status(self) -> ScanStatus:
        return self.scan.status


@dataclass(frozen=True)
class Transient:
    """A poll that failed to communicate with the scan service."""
    error: Exception


PollOutcome = Union[Observed, Transient]


@dataclass(frozen=True)
class ScanResult:
    """Findings and execution metadata of a completed scan."""
    scan_id: str
    vulnerabilities: Tuple[Vulnerability, ...]
    execution_details: ScanExecutionDetails

    @property
    def vulnerability_count(self) -> int:
        return len(self.vulnerabilities)
