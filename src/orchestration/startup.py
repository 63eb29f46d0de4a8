"""
Service startup: working directories, logging and the startup banner.

**Startup sequence**:
  1. Create config_path and data_path (parents included, existing is fine).
  2. Configure structlog at the resolved log level.
  3. Log the service identity, environment, port and endpoint paths.

Any failure is wrapped in InitializationError. The caller should treat it as
fatal: a service without its working directories or logging cannot safely
continue.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from src.config.errors import InitializationError
from src.config.health import STATUS_HEALTHY, health_payload
from src.config.settings import ResolvedConfig
from src.utils.logging import configure_logging, get_logger
from src.utils.time import Clock, RealClock, seconds_since

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServiceRuntime:
    """
    What a started service holds on to: its config, clock and start time.

    Attributes:
        config: The snapshot the service was started with.
        started_at: When initialize_service() completed.
        clock: Time source for uptime and health timestamps.
    """
    config: ResolvedConfig
    started_at: datetime
    clock: Clock

    def uptime_seconds(self) -> int:
        """Whole seconds elapsed since started_at, never negative."""
        return seconds_since(self.started_at, self.clock)

    def health(
        self,
        status: str = STATUS_HEALTHY,
        reason: Optional[str] = None,
        dependencies: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Health payload including the current uptime."""
        return health_payload(
            self.config,
            status=status,
            reason=reason,
            clock=self.clock,
            uptime_seconds=self.uptime_seconds(),
            dependencies=dependencies,
        )


def ensure_directories(config: ResolvedConfig) -> None:
    """
    Create the config and data directories.

    Raises:
        InitializationError: If either directory cannot be created.
    """
    for label, path in (
        ("config", config.service.config_path),
        ("data", config.service.data_path),
    ):
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InitializationError(f"Failed to create {label} directory {path!r}", e) from e


def initialize_service(
    config: ResolvedConfig,
    clock: Optional[Clock] = None,
    format_json: bool = False,
) -> ServiceRuntime:
    """
    Prepare the process to run the service described by config.

    Args:
        config: Resolved configuration.
        clock: Time source (default: RealClock).
        format_json: Emit JSON log lines instead of console output.

    Returns:
        ServiceRuntime recording the start time.

    Raises:
        InitializationError: If directories cannot be created or the log
                             level is not a valid level name.
    """
    clock = clock or RealClock()
    service = config.service

    ensure_directories(config)

    try:
        configure_logging(level=service.log_level, format_json=format_json)
    except ValueError as e:
        raise InitializationError("Failed to initialize logging", e) from e

    logger.info("service_initializing", service=service.name, service_type=service.kind)
    logger.info("service_environment", environment=service.environment)
    logger.info("service_port", port=service.port)
    logger.info("service_health_check", path=service.health_check_path)
    logger.info("service_metrics", path=service.metrics_path)

    return ServiceRuntime(config=config, started_at=clock.now(), clock=clock)
