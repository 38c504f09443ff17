"""Phases of a run and the per-poll decision table."""

from enum import Enum

from ...api.models import ScanStatus


class LifecyclePhase(Enum):
    """Where a single run currently is."""
    SUBMITTING = "submitting"
    POLLING = "polling"
    AGGREGATING = "aggregating"
    DONE = "done"


class PollDecision(Enum):
    """What the poll loop does with an observed status."""
    FAIL = "fail"
    REACHED = "reached"
    CONTINUE = "continue"


def decide_poll_action(status: ScanStatus, desired_status: ScanStatus) -> PollDecision:
    """Decide what to do after observing ``status``.

    A failure status always wins, even when it equals the desired status.
    """
    if status.is_failure:
        return PollDecision.FAIL
    if status is desired_status:
        return PollDecision.REACHED
    return PollDecision.CONTINUE
