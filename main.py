"""
fks-shared – Service entry point.

Resolves the configuration once, prepares directories and logging, and
reports the service as ready.
"""

import sys

from src.config.errors import ConfigError, InitializationError
from src.config.settings import resolve
from src.orchestration.startup import initialize_service
from src.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> int:
    """Start the service; returns the process exit code."""
    configure_logging(level="WARNING")
    try:
        config = resolve()
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        runtime = initialize_service(config)
    except InitializationError as e:
        print(f"Startup failed: {e}", file=sys.stderr)
        return 1

    logger.info("service_ready", config=str(config), health=runtime.health())
    return 0


if __name__ == "__main__":
    sys.exit(main())
