"""JSON formatter for machine-readable logs."""

import json
import logging
from datetime import datetime
from typing import Dict, Any


# LogRecord attributes that are never copied into the 'extra' block
_STANDARD_FIELDS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName',
    'exc_info', 'exc_text', 'stack_info', 'message', 'asctime'
})


class StructuredFormatter(logging.Formatter):
    """Formats each record as a single JSON line."""

    def __init__(self, include_extra: bool = True):
        """Initialize structured formatter.

        Args:
            include_extra: Whether to include extra fields from log records
        """
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.include_extra:
            extra_fields = self._extract_extra_fields(record)
            if extra_fields:
                log_data['extra'] = extra_fields

        try:
            return json.dumps(log_data, ensure_ascii=False, separators=(',', ':'))
        except (TypeError, ValueError) as e:
            return f"LOG_SERIALIZATION_ERROR: {e} - Original message: {record.getMessage()}"

    def _extract_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        extra_fields = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_FIELDS or key.startswith('_'):
                continue
            try:
                json.dumps(value)
                extra_fields[key] = value
            except (TypeError, ValueError):
                extra_fields[key] = str(value)
        return extra_fields
