#!/usr/bin/env python3
"""
Resolve the service configuration and print it, a health payload, or a risk budget.

**Usage**:
    # One-line summary of the resolved configuration
    python actions/show_config.py

    # Full snapshot as JSON (secrets masked)
    python actions/show_config.py --json

    # Health payload as an external probe would receive it
    python actions/show_config.py --health
    python actions/show_config.py --unhealthy "postgres unreachable"

    # Per-trade risk budget for an account
    python actions/show_config.py --equity 10000

    # Read overrides from a different file than ./.env
    python actions/show_config.py --env-file deploy/staging.env

**Exit codes**:
  - 0: Success
  - 2: Configuration error (a provided value could not be parsed)
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to Python path so we can import src modules
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.analytics.risk import risk_threshold
from src.config.errors import ConfigError
from src.config.health import STATUS_HEALTHY, STATUS_UNHEALTHY, health_payload
from src.config.source import DEFAULT_ENV_FILE, ConfigSource
from src.config.settings import resolve
from src.utils.logging import configure_logging


def parse_args(argv=None):
    """
    Parse command line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        Namespace with env_file, json, health, unhealthy and equity.
    """
    parser = argparse.ArgumentParser(
        description="Show the resolved FKS service configuration",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=DEFAULT_ENV_FILE,
        help=f"Override file with KEY=VALUE lines (default: {DEFAULT_ENV_FILE}; missing is fine)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full snapshot as JSON with secrets masked",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--health",
        action="store_true",
        help="Print a healthy health-check payload",
    )
    mode.add_argument(
        "--unhealthy",
        type=str,
        metavar="REASON",
        default=None,
        help="Print an unhealthy health-check payload with the given reason",
    )
    mode.add_argument(
        "--equity",
        type=float,
        default=None,
        help="Print the per-trade risk threshold for this account equity",
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Entry point.

    Returns:
        Process exit code (0 on success, 2 on configuration error).
    """
    args = parse_args(argv)

    # Keep stdout for results; library debug output stays quiet on stderr.
    configure_logging(level="WARNING")

    try:
        config = resolve(ConfigSource(env_file=args.env_file))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.health:
        print(json.dumps(health_payload(config, status=STATUS_HEALTHY), indent=2))
    elif args.unhealthy is not None:
        print(json.dumps(health_payload(config, status=STATUS_UNHEALTHY, reason=args.unhealthy), indent=2))
    elif args.equity is not None:
        print(risk_threshold(args.equity, config))
    elif args.json:
        print(json.dumps(config.as_dict(), indent=2))
    else:
        print(config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
