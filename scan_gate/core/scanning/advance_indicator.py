"""Advance levels: how far a run waits before handing control back."""

from enum import Enum
from typing import Optional

from ...api.models import ScanStatus


class AdvanceLevel(Enum):
    """Caller-selected completion point for a run."""
    SUBMITTED = "Scan has been submitted"
    STARTED = "Scan has been started"
    COMPLETED = "Scan has been completed"
    COMPLETED_WITH_RESULTS = "Vulnerability results query has returned no results"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def desired_status(self) -> Optional[ScanStatus]:
        """Remote status to wait for, or None to return right after submission."""
        return _DESIRED_STATUS[self]

    @property
    def fetches_results(self) -> bool:
        return self in (AdvanceLevel.COMPLETED, AdvanceLevel.COMPLETED_WITH_RESULTS)

    @property
    def applies_filter(self) -> bool:
        """Whether the caller's vulnerability filter narrows the results."""
        return self is AdvanceLevel.COMPLETED_WITH_RESULTS

    @classmethod
    def from_string(cls, value: str) -> 'AdvanceLevel':
        """Parse a level from its name or display name (case-insensitive)."""
        if not value:
            raise ValueError("Advance level must not be empty")

        normalized = value.strip()
        for level in cls:
            if normalized.upper() == level.name or normalized.lower() == level.value.lower():
                return level

        valid = ', '.join(level.name for level in cls)
        raise ValueError(f"Unknown advance level '{value}'. Valid levels: {valid}")


_DESIRED_STATUS = {
    AdvanceLevel.SUBMITTED: None,
    AdvanceLevel.STARTED: ScanStatus.RUNNING,
    AdvanceLevel.COMPLETED: ScanStatus.COMPLETE,
    AdvanceLevel.COMPLETED_WITH_RESULTS: ScanStatus.COMPLETE,
}
