"""Configuration-related exception classes."""

from typing import List, Optional
from .base_exceptions import ScanGateError


class ConfigurationError(ScanGateError):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_section: Optional[str] = None,
                 config_key: Optional[str] = None, **kwargs):
        """Initialize configuration error.

        Args:
            message: Error message
            config_section: Configuration section where error occurred
            config_key: Configuration key that caused the error
            **kwargs: Additional arguments for base class
        """
        details = kwargs.get('details', {})
        if config_section:
            details['config_section'] = config_section
        if config_key:
            details['config_key'] = config_key

        kwargs['details'] = details
        kwargs['error_code'] = kwargs.get('error_code', 'CONFIG_ERROR')

        super().__init__(message, **kwargs)

        self.config_section = config_section
        self.config_key = config_key


class ConfigValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    def __init__(self, validation_errors: List[str], **kwargs):
        """Initialize configuration validation error.

        Args:
            validation_errors: List of validation error messages
            **kwargs: Additional arguments for base class
        """
        message = (f"Configuration validation failed with {len(validation_errors)} errors: "
                   f"{'; '.join(validation_errors)}")

        details = kwargs.get('details', {})
        details['validation_errors'] = validation_errors

        kwargs['details'] = details
        kwargs['error_code'] = 'CONFIG_VALIDATION_ERROR'
        kwargs['suggestion'] = 'Check configuration files and fix validation errors'

        super().__init__(message, **kwargs)

        self.validation_errors = validation_errors


class InvalidDurationError(ConfigurationError):
    """Exception raised when a duration string cannot be parsed."""

    def __init__(self, value: str, reason: str, **kwargs):
        message = f"Invalid duration '{value}': {reason}"

        details = kwargs.get('details', {})
        details.update({
            'value': value,
            'reason': reason
        })

        kwargs['details'] = details
        kwargs['error_code'] = 'INVALID_DURATION'
        kwargs['suggestion'] = "Use a duration such as '2h 30m' or '1d 4h' (units d, h, m)"

        super().__init__(message, **kwargs)

        self.value = value
        self.reason = reason
