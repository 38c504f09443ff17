"""Core framework components for scan-gate."""

from .core_manager import ScanGateCore

__all__ = ['ScanGateCore']
