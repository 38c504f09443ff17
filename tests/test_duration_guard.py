"""Tests for duration parsing, budgets and the duration guard."""

import pytest

from scan_gate.api import ScanStatus
from scan_gate.core.exceptions import InvalidDurationError, ScanTimedOutError
from scan_gate.core.scanning import (
    DurationBudget, DurationGuard, is_valid_duration, parse_duration
)


class TestParseDuration:
    """Test duration string parsing."""

    @pytest.mark.parametrize('value,expected', [
        ('45m', 2700),
        ('2h', 7200),
        ('1d', 86400),
        ('1d 2h 30m', 86400 + 7200 + 1800),
        ('2h30m', 9000),
        ('  3 h  ', 10800),
        ('0m', 0),
        ('1H 5M', 3900),
    ])
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize('value', [None, '', '   '])
    def test_empty_means_unlimited(self, value):
        assert parse_duration(value) is None

    @pytest.mark.parametrize('value', ['abc', '10', '5x', '1h 2h', '1h, 5m', '-1h', '1.5h'])
    def test_invalid(self, value):
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(value)

        assert exc_info.value.error_code == 'INVALID_DURATION'

    def test_is_valid_duration(self):
        assert is_valid_duration('1h 30m')
        assert is_valid_duration('')
        assert not is_valid_duration('soon')


class TestDurationBudget:
    """Test DurationBudget."""

    def test_from_strings(self):
        budget = DurationBudget.from_strings('1h', '2h 30m')

        assert budget.max_pending == 3600
        assert budget.max_executing == 9000
        assert not budget.is_unlimited

    def test_unlimited_by_default(self):
        assert DurationBudget().is_unlimited
        assert DurationBudget.from_strings('', None).is_unlimited

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            DurationBudget(max_pending=-1)


class TestDurationGuard:
    """Test DurationGuard ceilings."""

    def test_disabled_guard_never_raises(self, clock):
        guard = DurationGuard(0, clock=clock)
        clock.advance(10 ** 6)

        assert not guard.enabled
        guard.check(ScanStatus.PENDING)
        guard.check(ScanStatus.RUNNING)
        assert guard.execution_started_at is None

    def test_pending_ceiling_counts_from_submission(self, clock):
        guard = DurationGuard(0, max_pending=60, clock=clock)

        clock.advance(60)
        guard.check(ScanStatus.QUEUED)

        clock.advance(1)
        with pytest.raises(ScanTimedOutError) as exc_info:
            guard.check(ScanStatus.QUEUED)

        assert exc_info.value.phase == ScanTimedOutError.PENDING
        assert exc_info.value.limit_seconds == 60
        assert exc_info.value.elapsed_seconds == 61

    def test_pending_ceiling_ignored_once_started(self, clock):
        guard = DurationGuard(0, max_pending=60, clock=clock)
        clock.advance(500)

        guard.check(ScanStatus.RUNNING)

    def test_execution_clock_starts_on_first_started_status(self, clock):
        guard = DurationGuard(0, max_executing=100, clock=clock)

        clock.advance(1000)
        guard.check(ScanStatus.PENDING)
        assert guard.execution_started_at is None

        guard.check(ScanStatus.PROVISIONING)
        assert guard.execution_started_at == 1000

        clock.advance(100)
        guard.check(ScanStatus.RUNNING)

        clock.advance(1)
        with pytest.raises(ScanTimedOutError) as exc_info:
            guard.check(ScanStatus.RUNNING)

        assert exc_info.value.phase == ScanTimedOutError.EXECUTING
        assert exc_info.value.elapsed_seconds == 101

    def test_observe_starts_execution_clock(self, clock):
        guard = DurationGuard(0, max_executing=40, clock=clock)

        clock.advance(100)
        guard.observe(ScanStatus.PENDING)
        assert guard.execution_started_at is None

        guard.observe(ScanStatus.RUNNING)
        clock.advance(15)
        guard.observe(ScanStatus.RUNNING)
        assert guard.execution_started_at == 100

        clock.advance(35)
        with pytest.raises(ScanTimedOutError) as exc_info:
            guard.check(ScanStatus.RUNNING)

        assert exc_info.value.elapsed_seconds == 50

    def test_unknown_status_does_not_start_execution_clock(self, clock):
        guard = DurationGuard(0, max_executing=10, clock=clock)

        clock.advance(50)
        guard.check(ScanStatus.UNKNOWN)

        assert guard.execution_started_at is None

    def test_error_carries_scan_id(self, clock, scan_id):
        guard = DurationGuard(0, max_pending=0, clock=clock, scan_id=scan_id)
        clock.advance(1)

        with pytest.raises(ScanTimedOutError) as exc_info:
            guard.check(ScanStatus.PENDING)

        assert exc_info.value.details['scan_id'] == scan_id
