"""
Raw configuration sources: documented defaults, the .env override file and
the live process environment.

**Precedence** (highest last):
  1. Documented defaults (DEFAULTS below).
  2. Optional override file, dotenv-style KEY=VALUE lines (usually ./.env).
  3. Live process environment variables.

**Why a source object instead of os.getenv everywhere?**
  - Tests inject a plain dict as the environment and a tmp_path .env file,
    so they never depend on (or leak into) the real process environment.
  - The override file is parsed at most once per source; the environment
    is read live on every lookup.
  - The file is merged into a base map with python-dotenv's dotenv_values,
    so loading it never mutates os.environ.

Values returned here are raw strings. Type coercion lives in
src.config.coercion; the strict and permissive readers build on top of it.
"""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

from dotenv import dotenv_values

from src.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENV_FILE = ".env"

# Every recognized key with its documented default, rendered as a string.
# APP_ENV keeps its short "dev" default for single-key reads, while the
# resolved service environment defaults to "development".
DEFAULTS: Dict[str, str] = {
    "APP_ENV": "dev",
    "LOG_LEVEL": "INFO",
    "RISK_MAX_PER_TRADE": "0.01",
    "DEBUG_MODE": "false",
    # Service identity
    "FKS_SERVICE_NAME": "fks-service",
    "FKS_SERVICE_TYPE": "engine",
    "FKS_SERVICE_PORT": "8080",
    "FKS_ENVIRONMENT": "development",
    "FKS_LOG_LEVEL": "INFO",
    "FKS_HEALTH_CHECK_PATH": "/health",
    "FKS_METRICS_PATH": "/metrics",
    "FKS_CONFIG_PATH": "/app/config",
    "FKS_DATA_PATH": "/app/data",
    # Datastore
    "DATABASE_HOST": "localhost",
    "DATABASE_PORT": "5432",
    "DATABASE_NAME": "fks",
    "DATABASE_USER": "fks",
    # Cache / broker
    "REDIS_HOST": "localhost",
    "REDIS_PORT": "6379",
    # Security
    "SECRET_KEY": "dev-secret-key",
    # Trading
    "RISK_MAX_DRAWDOWN": "0.05",
    "TRADING_MODE": "simulation",
    # Performance
    "MAX_CONNECTIONS": "1000",
    # Observability
    "ENABLE_METRICS": "true",
    "ENABLE_TRACING": "false",
}


def load_override_file(path: Optional[Union[str, Path]]) -> Dict[str, str]:
    """
    Parse a dotenv-style override file into a plain dict.

    A missing file (or path=None) is not an error and yields an empty dict.
    Keys declared without a value (a bare "KEY" line) are skipped.

    Args:
        path: Path to the override file, relative paths resolved against the
              current working directory.

    Returns:
        Mapping of key to raw string value.
    """
    if path is None:
        return {}

    env_path = Path(path)
    if not env_path.is_file():
        logger.debug("override_file_missing", path=str(env_path))
        return {}

    values = {
        key: value
        for key, value in dotenv_values(env_path, encoding="utf-8").items()
        if value is not None
    }
    logger.debug("override_file_loaded", path=str(env_path), keys=len(values))
    return values


class ConfigSource:
    """
    Layered view over defaults, the override file and the environment.

    Args:
        env_file: Override file path (default ".env"). None disables the file.
        environ: Environment mapping to read. None means the live os.environ,
                 re-read on every lookup.
        defaults: Documented defaults used by get() (default: DEFAULTS).

    Usage example:
        >>> source = ConfigSource(env_file=None, environ={"APP_ENV": "prod"})
        >>> source.get("APP_ENV")
        'prod'
        >>> source.get("LOG_LEVEL")
        'INFO'
    """

    def __init__(
        self,
        env_file: Optional[Union[str, Path]] = DEFAULT_ENV_FILE,
        environ: Optional[Mapping[str, str]] = None,
        defaults: Mapping[str, str] = DEFAULTS,
    ):
        self.env_file = Path(env_file) if env_file is not None else None
        self._environ = environ
        self._defaults = dict(defaults)
        self._file_values: Optional[Dict[str, str]] = None

    @property
    def environ(self) -> Mapping[str, str]:
        """The environment mapping consulted on every lookup."""
        return os.environ if self._environ is None else self._environ

    def file_values(self) -> Dict[str, str]:
        """Override file contents, parsed on first access and cached."""
        if self._file_values is None:
            self._file_values = load_override_file(self.env_file)
        return self._file_values

    def raw(self, key: str) -> Optional[str]:
        """
        Provided value for key (environment first, then override file).

        Returns None when neither layer provides the key; defaults are not
        consulted here.
        """
        environ = self.environ
        if key in environ:
            return environ[key]
        return self.file_values().get(key)

    def lookup(self, *keys: str) -> Optional[Tuple[str, str]]:
        """
        First provided (key, value) among alias keys.

        The environment layer is searched for every alias before the override
        file, so a live variable always beats the file regardless of alias order.
        """
        environ = self.environ
        for key in keys:
            if key in environ:
                return key, environ[key]
        file_values = self.file_values()
        for key in keys:
            if key in file_values:
                return key, file_values[key]
        return None

    def get(self, key: str) -> str:
        """Provided value for key, else its documented default, else ""."""
        value = self.raw(key)
        if value is None:
            return self._defaults.get(key, "")
        return value


_default_source: Optional[ConfigSource] = None


def default_source() -> ConfigSource:
    """
    Process-wide source reading ./.env and the live environment.

    Created lazily on first use so the override file is parsed at most once
    per process. Only the permissive single-key readers and resolve() without
    an explicit source use it; the resolved snapshot itself is never cached.
    """
    global _default_source

    if _default_source is None:
        _default_source = ConfigSource()
    return _default_source


def reset_default_source() -> None:
    """Forget the process-wide source (tests use this to re-read .env)."""
    global _default_source
    _default_source = None
