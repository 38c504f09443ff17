"""Logging framework for scan-gate."""

from .logger_manager import LoggerManager, parse_size
from .progress_logger import ProgressLogger
from .structured_formatter import StructuredFormatter

__all__ = ['LoggerManager', 'ProgressLogger', 'StructuredFormatter', 'parse_size']
