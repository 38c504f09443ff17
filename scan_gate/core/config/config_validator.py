"""Configuration validator for scan-gate."""

from typing import Dict, Any, List
from urllib.parse import urlparse

from ..scanning.duration_parser import is_valid_duration


class ConfigValidator:
    """Validates scan-gate configuration before a run is attempted."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize validator with configuration.

        Args:
            config: Configuration dictionary to validate
        """
        self.config = config
        self.errors: List[str] = []

    def validate(self) -> List[str]:
        """Validate complete configuration.

        Returns:
            List of validation error messages
        """
        self.errors = []

        self._validate_system_config()
        self._validate_logging_config()
        self._validate_api_config()
        self._validate_scan_config()

        return self.errors

    def _validate_system_config(self) -> None:
        system = self.config.get('system', {})

        environment = system.get('environment')
        valid_envs = ['development', 'testing', 'production']
        if environment not in valid_envs:
            self.errors.append(f"Environment must be one of: {valid_envs}")

    def _validate_logging_config(self) -> None:
        logging_config = self.config.get('logging', {})

        level = logging_config.get('level')
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if level not in valid_levels:
            self.errors.append(f"logging.level must be one of: {valid_levels}")

        if not isinstance(logging_config.get('log_to_file', False), bool):
            self.errors.append("logging.log_to_file must be a boolean")

        if not isinstance(logging_config.get('file_rotation', True), bool):
            self.errors.append("logging.file_rotation must be a boolean")

        max_size = logging_config.get('max_file_size', '10MB')
        if not isinstance(max_size, str) or not self._validate_size_format(max_size):
            self.errors.append("logging.max_file_size must be a valid size string (e.g., '10MB')")

        backup_count = logging_config.get('backup_count', 5)
        if not isinstance(backup_count, int) or backup_count < 0:
            self.errors.append("logging.backup_count must be a non-negative integer")

    def _validate_size_format(self, size: str) -> bool:
        """Validate size format string.

        Args:
            size: Size string to validate (e.g., '10MB')

        Returns:
            True if valid format, False otherwise
        """
        if not size:
            return False

        # Check longer units first to avoid partial matches
        valid_units = ['GB', 'MB', 'KB', 'B']
        for unit in valid_units:
            if size.upper().endswith(unit):
                number_part = size[:-len(unit)]
                try:
                    float(number_part)
                    return True
                except ValueError:
                    return False

        return False

    def _validate_api_config(self) -> None:
        api = self.config.get('api', {})

        base_url = api.get('base_url')
        parsed = urlparse(base_url) if isinstance(base_url, str) else None
        if not parsed or parsed.scheme not in ('http', 'https') or not parsed.netloc:
            self.errors.append("api.base_url must be an http(s) URL")

        api_key = api.get('api_key')
        if not api_key or not isinstance(api_key, str):
            self.errors.append("api.api_key must be set (or provided via SCAN_GATE_API_KEY)")

        timeout = api.get('timeout_seconds')
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
            self.errors.append("api.timeout_seconds must be a positive number")

        max_retries = api.get('max_retries', 0)
        if not isinstance(max_retries, int) or isinstance(max_retries, bool) or max_retries < 0:
            self.errors.append("api.max_retries must be a non-negative integer")

        page_size = api.get('page_size', 50)
        if not isinstance(page_size, int) or isinstance(page_size, bool) or not 1 <= page_size <= 1000:
            self.errors.append("api.page_size must be an integer between 1 and 1000")

    def _validate_scan_config(self) -> None:
        scan = self.config.get('scan', {})

        for key in ('max_pending_duration', 'max_execution_duration'):
            value = scan.get(key)
            if value is None:
                continue
            if not isinstance(value, str) or not is_valid_duration(value):
                self.errors.append(f"scan.{key} must be a duration such as '2h 30m'")

    def is_valid(self) -> bool:
        return len(self.validate()) == 0
