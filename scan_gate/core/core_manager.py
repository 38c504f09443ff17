"""Core manager class that wires scan-gate components for a host caller."""

import signal
import threading
from typing import Optional, Union

from .config import ConfigManager
from .logger import LoggerManager, ProgressLogger
from .exceptions import ConfigurationError, ConfigValidationError, ScanGateException
from .scanning import (
    AdvanceLevel, CancellationToken, DurationBudget, ScanLifecycleController,
    ScanResult, Sleeper
)
from ..api import ScanApi, SearchApi


class ScanGateCore:
    """Entry point for host pipelines.

    Loads configuration, sets up logging and the service clients, and runs
    scans. SIGINT/SIGTERM cancel a run that is waiting between polls; the
    remote scan itself keeps running.
    """

    def __init__(self, config_path: Optional[str] = None,
                 config_manager: Optional[ConfigManager] = None,
                 install_signal_handlers: bool = True):
        """Initialize scan-gate core.

        Args:
            config_path: Optional path to custom configuration file
            config_manager: Preloaded configuration, used instead of config_path
            install_signal_handlers: Whether to route SIGINT/SIGTERM to cancellation
        """
        self.config_path = config_path
        self.config_manager = config_manager
        self.logger_manager: Optional[LoggerManager] = None
        self.scan_api: Optional[ScanApi] = None
        self.search_api: Optional[SearchApi] = None
        self.cancellation = CancellationToken()
        self._logger = None
        self._main_thread = threading.current_thread()

        self._initialize_configuration()
        self._initialize_logging()
        self._initialize_clients()
        if install_signal_handlers:
            self._register_signal_handlers()

        self._logger.info("scan-gate core initialized", extra={
            'event_type': 'startup',
            'environment': self.config_manager.get('system.environment'),
            'base_url': self.config_manager.get('api.base_url'),
        })

    def _initialize_configuration(self) -> None:
        if self.config_manager is None:
            try:
                self.config_manager = ConfigManager(self.config_path)
            except ScanGateException:
                raise
            except Exception as e:
                raise ConfigurationError(f"Configuration initialization failed: {e}") from e

        validation_errors = self.config_manager.validate()
        if validation_errors:
            raise ConfigValidationError(validation_errors)

    def _initialize_logging(self) -> None:
        self.logger_manager = LoggerManager(self.config_manager.to_dict())
        self._logger = self.logger_manager.get_logger('core')

    def _initialize_clients(self) -> None:
        api = self.config_manager.get_section('api')
        client_args = dict(
            timeout_seconds=api.get('timeout_seconds', 30),
            max_retries=api.get('max_retries', 0),
            backoff_factor=api.get('backoff_factor', 1),
        )

        self.scan_api = ScanApi(api['base_url'], api['api_key'], **client_args)
        self.search_api = SearchApi(api['base_url'], api['api_key'],
                                    page_size=api.get('page_size', 50), **client_args)

    def _register_signal_handlers(self) -> None:
        if threading.current_thread() is not self._main_thread:
            return  # Signal handlers can only be registered from main thread

        def signal_handler(signum, frame):
            self._logger.info(f"Received signal {signum}, cancelling scan run")
            self.cancellation.cancel(f"received signal {signum}")

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def default_budget(self) -> DurationBudget:
        """Duration ceilings from the ``scan`` configuration section."""
        return DurationBudget.from_strings(
            self.config_manager.get('scan.max_pending_duration'),
            self.config_manager.get('scan.max_execution_duration')
        )

    def create_controller(self, budget: Optional[DurationBudget] = None) -> ScanLifecycleController:
        """Build a controller for a single run."""
        return ScanLifecycleController(
            self.scan_api,
            self.search_api,
            progress=ProgressLogger(self.logger_manager.get_logger('progress')),
            sleeper=Sleeper(self.cancellation),
            budget=budget if budget is not None else self.default_budget()
        )

    def run_scan(self, scan_config_id: str, advance_level: Union[AdvanceLevel, str],
                 result_filter: Optional[str] = None,
                 budget: Optional[DurationBudget] = None) -> Optional[ScanResult]:
        """Run one scan to the requested advance level.

        Args:
            scan_config_id: Scan config to launch
            advance_level: AdvanceLevel or its name/display name
            result_filter: Extra search query for the findings
            budget: Duration ceilings; the configured ones when omitted

        Returns:
            ScanResult for the completed levels, otherwise None
        """
        if not scan_config_id or not scan_config_id.strip():
            raise ConfigurationError("Scan config id must not be empty", config_key='scan_config_id')

        if isinstance(advance_level, str):
            try:
                advance_level = AdvanceLevel.from_string(advance_level)
            except ValueError as e:
                raise ConfigurationError(str(e), config_key='advance_level') from e

        self._logger.info("Starting scan run", extra={
            'event_type': 'scan_run',
            'scan_config_id': scan_config_id,
            'advance_level': advance_level.name,
        })

        controller = self.create_controller(budget)
        try:
            return controller.run(scan_config_id.strip(), advance_level, result_filter)
        except ScanGateException as e:
            self._logger.error(f"Scan run failed: {e}", extra={'error': e.to_dict()})
            raise

    def shutdown(self) -> None:
        """Close HTTP sessions and logging handlers."""
        for client in (self.scan_api, self.search_api):
            if client is not None:
                client.close()
        if self.logger_manager is not None:
            self.logger_manager.shutdown()
