"""Configuration manager for scan-gate."""

import copy
import os
import yaml
from typing import Dict, Any, Optional, List
from pathlib import Path

from ..exceptions import ConfigurationError


DEFAULT_CONFIG: Dict[str, Any] = {
    'system': {
        'environment': 'development',
        'logs_dir': 'logs',
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'log_to_file': False,
        'file_rotation': True,
        'max_file_size': '10MB',
        'backup_count': 5,
    },
    'api': {
        'base_url': 'https://us.api.insight.rapid7.com/ias/v1',
        'api_key': None,
        'timeout_seconds': 30,
        'max_retries': 0,
        'backoff_factor': 1,
        'page_size': 50,
    },
    'scan': {
        'max_pending_duration': None,
        'max_execution_duration': None,
    },
}


class ConfigManager:
    """Loads configuration from defaults, YAML files and the environment."""

    ENV_MAPPINGS = {
        'SCAN_GATE_API_KEY': ('api', 'api_key'),
        'SCAN_GATE_BASE_URL': ('api', 'base_url'),
        'SCAN_GATE_TIMEOUT': ('api', 'timeout_seconds'),
        'SCAN_GATE_LOG_LEVEL': ('logging', 'level'),
        'SCAN_GATE_MAX_PENDING': ('scan', 'max_pending_duration'),
        'SCAN_GATE_MAX_EXECUTION': ('scan', 'max_execution_duration'),
    }

    # Values that must stay strings even when they look numeric
    STRING_KEYS = {'SCAN_GATE_API_KEY', 'SCAN_GATE_MAX_PENDING', 'SCAN_GATE_MAX_EXECUTION'}

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to custom configuration file
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.base_dir = Path(__file__).parent.parent.parent.parent
        self._load_configuration()

    def _load_configuration(self) -> None:
        """Load configuration from multiple sources in order of priority."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)

        default_config = self._load_config_file(self.base_dir / "config" / "default.yml")
        if default_config:
            self._deep_merge(self.config, default_config)

        env = os.getenv('SCAN_GATE_ENV', 'development')
        env_config = self._load_config_file(self.base_dir / "config" / f"{env}.yml")
        if env_config:
            self._deep_merge(self.config, env_config)

        if self.config_path:
            user_path = Path(self.config_path)
            if not user_path.exists():
                raise ConfigurationError(f"Configuration file not found: {user_path}")
            user_config = self._load_config_file(user_path)
            if user_config:
                self._deep_merge(self.config, user_config)

        self._load_environment_variables()

    def _load_config_file(self, file_path: Path) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file.

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration dictionary or None if file doesn't exist
        """
        if not file_path.exists():
            return None

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, IOError) as e:
            raise ConfigurationError(f"Failed to load configuration from {file_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {file_path} must be a mapping")
        return data

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _load_environment_variables(self) -> None:
        for env_var, config_path in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value:
                if env_var not in self.STRING_KEYS:
                    value = self._convert_env_value(value)
                self._set_nested_value(self.config, config_path, value)

    def _set_nested_value(self, config: Dict[str, Any], path: tuple, value: Any) -> None:
        current = config
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type.

        Args:
            value: String value from environment variable

        Returns:
            Converted value (bool, int, float, or str)
        """
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key.

        Args:
            key: Dot-separated configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        current = self.config

        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return default

        return current

    def set(self, key: str, value: Any) -> None:
        keys = key.split('.')
        current = self.config

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        return self.config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from all sources."""
        self._load_configuration()

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        from .config_validator import ConfigValidator
        validator = ConfigValidator(self.config)
        return validator.validate()

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)
