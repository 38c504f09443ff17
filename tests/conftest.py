"""Test configuration and utilities for the scan-gate test suite."""

import json
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Dict, Any
from unittest.mock import Mock

import pytest
import requests

from scan_gate.api import ScanApi, SearchApi, Scan, ScanStatus, ScanExecutionDetails
from scan_gate.core.exceptions import ScanInterruptedError
from scan_gate.core.logger import ProgressLogger
from scan_gate.core.scanning import Sleeper


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleeper(Sleeper):
    """Sleeper that records requested waits and advances a fake clock."""

    def __init__(self, clock: FakeClock, token=None):
        super().__init__(token)
        self.clock = clock
        self.calls = []

    def sleep(self, seconds: float) -> None:
        if self.token.cancelled:
            raise ScanInterruptedError(self.token.reason or "cancelled")
        self.calls.append(seconds)
        self.clock.advance(seconds)


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Basic valid configuration."""
    return {
        'system': {
            'environment': 'testing',
            'logs_dir': 'logs'
        },
        'logging': {
            'level': 'ERROR',  # Reduce noise in tests
            'format': '%(message)s',
            'log_to_file': False,
            'file_rotation': False,
            'max_file_size': '1MB',
            'backup_count': 1
        },
        'api': {
            'base_url': 'https://scan.test/ias/v1',
            'api_key': 'test-api-key',
            'timeout_seconds': 5,
            'max_retries': 0,
            'backoff_factor': 1,
            'page_size': 2
        },
        'scan': {
            'max_pending_duration': '1h',
            'max_execution_duration': '2h 30m'
        }
    }


@pytest.fixture
def config_file(temp_dir, test_config):
    """Create temporary configuration file."""
    import yaml

    config_file = temp_dir / 'test_config.yml'
    with open(config_file, 'w') as f:
        yaml.dump(test_config, f)

    return config_file


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper(clock):
    return RecordingSleeper(clock)


@pytest.fixture
def progress():
    return Mock(spec=ProgressLogger)


@pytest.fixture
def scan_id():
    return str(uuid.uuid4())


@pytest.fixture
def scan_config_id():
    return str(uuid.uuid4())


@pytest.fixture
def make_scan(scan_id, scan_config_id):
    """Factory for Scan objects with the given status."""
    def _make_scan(status: ScanStatus) -> Scan:
        return Scan(id=scan_id, status=status, scan_config_id=scan_config_id)
    return _make_scan


@pytest.fixture
def make_response():
    """Factory for real ``requests.Response`` objects."""
    def _make_response(status_code: int = 200, json_body: Any = None,
                       headers: Dict[str, str] = None, method: str = 'GET',
                       url: str = 'https://scan.test/ias/v1/scans') -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response._content = b'' if json_body is None else json.dumps(json_body).encode('utf-8')
        response.encoding = 'utf-8'
        response.headers.update(headers or {})
        response.url = url
        response.request = requests.Request(method, url).prepare()
        return response
    return _make_response


@pytest.fixture
def scan_api(scan_id, make_response):
    """Mock scan service whose submission succeeds with ``scan_id``."""
    mock = Mock(spec=ScanApi)
    mock.submit_scan.return_value = make_response(
        201, headers={'Location': f'https://scan.test/ias/v1/scans/{scan_id}'}, method='POST'
    )
    mock.get_scan_execution_details.return_value = ScanExecutionDetails(
        links_crawled=120, attacked=40, vulnerable_attacks=3, requests=900
    )
    return mock


@pytest.fixture
def search_api():
    mock = Mock(spec=SearchApi)
    mock.search_all.return_value = []
    return mock
