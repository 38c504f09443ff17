"""Scan lifecycle: submission, status polling, duration ceilings and results."""

from .advance_indicator import AdvanceLevel
from .controller import ScanLifecycleController, POLL_INTERVAL_SECONDS, extract_scan_handle
from .data_structures import (
    ScanHandle, DurationBudget, Observed, Transient, PollOutcome, ScanResult
)
from .duration_guard import DurationGuard
from .duration_parser import parse_duration, is_valid_duration
from .lifecycle import LifecyclePhase, PollDecision, decide_poll_action
from .result_aggregator import ResultAggregator, build_vulnerability_query
from .sleeper import CancellationToken, Sleeper
from .status_poller import StatusPoller, FAILURE_THRESHOLD

__all__ = [
    'AdvanceLevel',
    'ScanLifecycleController', 'POLL_INTERVAL_SECONDS', 'extract_scan_handle',
    'ScanHandle', 'DurationBudget', 'Observed', 'Transient', 'PollOutcome', 'ScanResult',
    'DurationGuard',
    'parse_duration', 'is_valid_duration',
    'LifecyclePhase', 'PollDecision', 'decide_poll_action',
    'ResultAggregator', 'build_vulnerability_query',
    'CancellationToken', 'Sleeper',
    'StatusPoller', 'FAILURE_THRESHOLD'
]
