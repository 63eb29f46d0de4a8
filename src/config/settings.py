"""
Typed configuration snapshot for FKS services.

**Conceptual**: This module turns raw strings from a ConfigSource (defaults,
.env override file, process environment) into strongly-typed, immutable
settings objects. Each subsystem gets its own frozen dataclass, and
ResolvedConfig aggregates them into the single snapshot a service passes to
everything that needs configuration.

**Strict by design**: resolve() fails fast with TypeCoercionError when a
provided value cannot be read as its declared type (FKS_SERVICE_PORT=abc).
An absent key is never an error; every field has a documented default.

**No global snapshot**: resolve() re-reads its source on every call and never
caches the result. Build the snapshot once at startup and pass it to
consumers explicitly:

    ```python
    from src.config.settings import resolve

    config = resolve()
    run_service(config)
    ```

Tests construct ResolvedConfig(...) directly, or call
resolve(ConfigSource(env_file=None, environ={...})) for a hermetic snapshot.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from src.config.coercion import parse_bool, parse_count, parse_float, parse_port
from src.config.source import ConfigSource, default_source
from src.utils.logging import get_logger

logger = get_logger(__name__)

MASK = "***"


def _read_str(source: ConfigSource, default: str, *keys: str) -> str:
    found = source.lookup(*keys)
    return default if found is None else found[1]


def _read_optional_str(source: ConfigSource, *keys: str) -> Optional[str]:
    # An empty value counts as "not set" so URLs never get an empty password.
    found = source.lookup(*keys)
    if found is None or found[1] == "":
        return None
    return found[1]


def _read_bool(source: ConfigSource, default: bool, *keys: str) -> bool:
    found = source.lookup(*keys)
    return default if found is None else parse_bool(found[1])


def _read_float(source: ConfigSource, default: float, *keys: str) -> float:
    found = source.lookup(*keys)
    return default if found is None else parse_float(*found)


def _read_port(source: ConfigSource, default: int, *keys: str) -> int:
    found = source.lookup(*keys)
    return default if found is None else parse_port(*found)


def _read_count(source: ConfigSource, default: int, *keys: str) -> int:
    found = source.lookup(*keys)
    return default if found is None else parse_count(*found)


def _read_optional_count(source: ConfigSource, *keys: str) -> Optional[int]:
    found = source.lookup(*keys)
    if found is None or found[1] == "":
        return None
    return parse_count(*found)


@dataclass(frozen=True)
class ServiceSettings:
    """
    Service identity and runtime paths.

    Attributes:
        name: Service name reported in logs and health payloads (FKS_SERVICE_NAME).
        kind: Service type, e.g. "engine", "api", "worker" (FKS_SERVICE_TYPE).
        port: Listening port, 0..65535 (FKS_SERVICE_PORT).
        environment: Deployment tag (FKS_ENVIRONMENT, falling back to APP_ENV).
        log_level: Logging verbosity (FKS_LOG_LEVEL, falling back to LOG_LEVEL).
        debug_mode: Extra diagnostics toggle (DEBUG_MODE).
        health_check_path: HTTP path of the health endpoint.
        metrics_path: HTTP path of the metrics endpoint.
        config_path: Directory holding runtime config files (created at startup).
        data_path: Directory holding service data (created at startup).
    """
    name: str = "fks-service"
    kind: str = "engine"
    port: int = 8080
    environment: str = "development"
    log_level: str = "INFO"
    debug_mode: bool = False
    health_check_path: str = "/health"
    metrics_path: str = "/metrics"
    config_path: str = "/app/config"
    data_path: str = "/app/data"

    @classmethod
    def from_source(cls, source: ConfigSource) -> "ServiceSettings":
        defaults = cls()
        return cls(
            name=_read_str(source, defaults.name, "FKS_SERVICE_NAME"),
            kind=_read_str(source, defaults.kind, "FKS_SERVICE_TYPE"),
            port=_read_port(source, defaults.port, "FKS_SERVICE_PORT"),
            environment=_read_str(source, defaults.environment, "FKS_ENVIRONMENT", "APP_ENV"),
            log_level=_read_str(source, defaults.log_level, "FKS_LOG_LEVEL", "LOG_LEVEL"),
            debug_mode=_read_bool(source, defaults.debug_mode, "DEBUG_MODE"),
            health_check_path=_read_str(source, defaults.health_check_path, "FKS_HEALTH_CHECK_PATH"),
            metrics_path=_read_str(source, defaults.metrics_path, "FKS_METRICS_PATH"),
            config_path=_read_str(source, defaults.config_path, "FKS_CONFIG_PATH"),
            data_path=_read_str(source, defaults.data_path, "FKS_DATA_PATH"),
        )


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Datastore (PostgreSQL) connection parameters.

    When url is set (DATABASE_URL) it wins over the discrete fields.
    """
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    name: str = "fks"
    user: str = "fks"
    password: Optional[str] = None

    @classmethod
    def from_source(cls, source: ConfigSource) -> "DatabaseSettings":
        defaults = cls()
        return cls(
            url=_read_optional_str(source, "DATABASE_URL"),
            host=_read_str(source, defaults.host, "DATABASE_HOST"),
            port=_read_port(source, defaults.port, "DATABASE_PORT"),
            name=_read_str(source, defaults.name, "DATABASE_NAME"),
            user=_read_str(source, defaults.user, "DATABASE_USER"),
            password=_read_optional_str(source, "DATABASE_PASSWORD"),
        )


@dataclass(frozen=True)
class CacheSettings:
    """Cache/broker (Redis) connection parameters; url (REDIS_URL) wins when set."""
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None

    @classmethod
    def from_source(cls, source: ConfigSource) -> "CacheSettings":
        defaults = cls()
        return cls(
            url=_read_optional_str(source, "REDIS_URL"),
            host=_read_str(source, defaults.host, "REDIS_HOST"),
            port=_read_port(source, defaults.port, "REDIS_PORT"),
            password=_read_optional_str(source, "REDIS_PASSWORD"),
        )


@dataclass(frozen=True)
class SecuritySettings:
    """
    Secrets. The default secret_key is only fit for local development.

    **Security note**: never hardcode real values here; set SECRET_KEY,
    API_KEY and JWT_SECRET in the deployment environment or a local .env
    file that is kept out of version control.
    """
    secret_key: str = "dev-secret-key"
    api_key: Optional[str] = None
    jwt_secret: Optional[str] = None

    @classmethod
    def from_source(cls, source: ConfigSource) -> "SecuritySettings":
        defaults = cls()
        return cls(
            secret_key=_read_str(source, defaults.secret_key, "SECRET_KEY"),
            api_key=_read_optional_str(source, "API_KEY"),
            jwt_secret=_read_optional_str(source, "JWT_SECRET"),
        )


@dataclass(frozen=True)
class TradingSettings:
    """
    Trading risk parameters.

    Attributes:
        risk_max_per_trade: Fraction of equity risked on a single trade (0.01 = 1%).
        risk_max_drawdown: Largest tolerated peak-to-trough loss (0.05 = 5%).
        mode: "simulation" (paper) or "live".
    """
    risk_max_per_trade: float = 0.01
    risk_max_drawdown: float = 0.05
    mode: str = "simulation"

    @property
    def is_live(self) -> bool:
        return self.mode.lower() == "live"

    @classmethod
    def from_source(cls, source: ConfigSource) -> "TradingSettings":
        defaults = cls()
        return cls(
            risk_max_per_trade=_read_float(source, defaults.risk_max_per_trade, "RISK_MAX_PER_TRADE"),
            risk_max_drawdown=_read_float(source, defaults.risk_max_drawdown, "RISK_MAX_DRAWDOWN"),
            mode=_read_str(source, defaults.mode, "TRADING_MODE"),
        )


@dataclass(frozen=True)
class PerformanceSettings:
    """Worker pool size (None = runtime decides) and connection cap."""
    worker_threads: Optional[int] = None
    max_connections: int = 1000

    @classmethod
    def from_source(cls, source: ConfigSource) -> "PerformanceSettings":
        defaults = cls()
        return cls(
            worker_threads=_read_optional_count(source, "WORKER_THREADS"),
            max_connections=_read_count(source, defaults.max_connections, "MAX_CONNECTIONS"),
        )


@dataclass(frozen=True)
class ObservabilitySettings:
    """Metrics and tracing switches (ENABLE_METRICS, ENABLE_TRACING)."""
    enable_metrics: bool = True
    enable_tracing: bool = False

    @classmethod
    def from_source(cls, source: ConfigSource) -> "ObservabilitySettings":
        defaults = cls()
        return cls(
            enable_metrics=_read_bool(source, defaults.enable_metrics, "ENABLE_METRICS"),
            enable_tracing=_read_bool(source, defaults.enable_tracing, "ENABLE_TRACING"),
        )


# Section -> fields whose values must not be printed.
SECRET_FIELDS = {
    "database": ("url", "password"),
    "cache": ("url", "password"),
    "security": ("secret_key", "api_key", "jwt_secret"),
}


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Immutable snapshot of every recognized setting.

    ResolvedConfig() with no arguments is the all-defaults snapshot; tests
    build variants with dataclasses.replace() or by passing sections.

    Attributes:
        service: Identity, port, environment tag, log level, paths.
        database: Datastore connection parameters.
        cache: Cache/broker connection parameters.
        security: Signing key and optional API/token secrets.
        trading: Per-trade and drawdown risk limits, simulation/live mode.
        performance: Worker threads and connection cap.
        observability: Metrics and tracing toggles.
    """
    service: ServiceSettings = field(default_factory=ServiceSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    trading: TradingSettings = field(default_factory=TradingSettings)
    performance: PerformanceSettings = field(default_factory=PerformanceSettings)
    observability: ObservabilitySettings = field(default_factory=ObservabilitySettings)

    @classmethod
    def from_source(cls, source: ConfigSource) -> "ResolvedConfig":
        """
        Build a snapshot from source, section by section.

        Raises:
            TypeCoercionError: If any provided value fails to parse; the error
                               names the offending key.
        """
        return cls(
            service=ServiceSettings.from_source(source),
            database=DatabaseSettings.from_source(source),
            cache=CacheSettings.from_source(source),
            security=SecuritySettings.from_source(source),
            trading=TradingSettings.from_source(source),
            performance=PerformanceSettings.from_source(source),
            observability=ObservabilitySettings.from_source(source),
        )

    def as_dict(self, mask_secrets: bool = True) -> Dict[str, Dict[str, Any]]:
        """
        Nested plain-dict view, JSON-serializable.

        Args:
            mask_secrets: Replace set secrets (passwords, keys, URL overrides
                          that may embed credentials) with "***".
        """
        data = asdict(self)
        if mask_secrets:
            for section, names in SECRET_FIELDS.items():
                for name in names:
                    if data[section][name] is not None:
                        data[section][name] = MASK
        return data

    def __str__(self) -> str:
        return (
            f"ResolvedConfig(service={self.service.name}, type={self.service.kind}, "
            f"port={self.service.port}, env={self.service.environment})"
        )


def resolve(source: Optional[ConfigSource] = None) -> ResolvedConfig:
    """
    Resolve defaults, the override file and the environment into a snapshot.

    Args:
        source: Where to read from. Defaults to the process-wide source
                (./.env plus the live environment).

    Returns:
        A fresh ResolvedConfig. Repeated calls with an unchanged environment
        return equal snapshots; nothing is cached.

    Raises:
        TypeCoercionError: If a provided value cannot be parsed as its
                           declared type.
    """
    config = ResolvedConfig.from_source(source or default_source())
    logger.debug("config_resolved", summary=str(config))
    return config
