"""scan-gate - drive a remote application security scan from a build pipeline.

Submits a scan, polls its status until a caller-selected point (submitted,
started, completed, or completed with findings), enforces optional pending
and execution duration ceilings, and collects the scan's findings.
"""

__version__ = "1.0.0"
__description__ = "Build-pipeline gate for remote application security scans"
__license__ = "MIT"

from .core import ScanGateCore
from .core.exceptions import ScanGateException, ScanGateError
from .core.scanning import AdvanceLevel, DurationBudget, ScanResult

__all__ = [
    'ScanGateCore',
    'ScanGateException',
    'ScanGateError',
    'AdvanceLevel',
    'DurationBudget',
    'ScanResult',
    '__version__'
]
