"""
Configuration error types.

**Conceptual**: Configuration problems fall into two buckets:
  - A value was provided but cannot be read as its declared type
    (e.g., FKS_SERVICE_PORT=eighty). This is a deployment mistake and strict
    resolution refuses to build a snapshot from it.
  - The service cannot prepare its runtime environment (working directories,
    logging). The caller should treat this as fatal.

An *absent* key is never an error: every setting has a default.
"""


class ConfigError(Exception):
    """Base class for every configuration-related failure."""
    pass


class TypeCoercionError(ConfigError, ValueError):
    """
    Raised when a provided value cannot be parsed as its declared type.

    Attributes:
        key: Environment/override-file key holding the bad value.
        value: The raw string that failed to parse.
        expected: Human-readable name of the declared type ("integer", "port", ...).
    """

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid {key}: expected {expected}, got {value!r}")


class InitializationError(ConfigError):
    """
    Raised when service startup cannot create directories or configure logging.

    Attributes:
        cause: The underlying exception (usually an OSError or ValueError).
    """

    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"{message}: {cause}")
