"""
Permissive single-key configuration readers.

These never raise: an absent key falls back to its documented default and a
malformed number falls back to 0.0. They are meant for optional, best-effort
reads (a feature flag, a tunable) where a bad value should not take the
process down. Use src.config.settings.resolve() when a typo must fail fast.
"""

from typing import Optional

from src.config.coercion import parse_bool, parse_number_or_zero
from src.config.source import ConfigSource, default_source


def get_string(key: str, source: Optional[ConfigSource] = None) -> str:
    """Value for key (environment, then override file, then default, then "")."""
    return (source or default_source()).get(key)


def get_bool(key: str, source: Optional[ConfigSource] = None) -> bool:
    """True iff the value is one of "1", "true", "yes", "on" (any case)."""
    return parse_bool(get_string(key, source))


def get_number(key: str, source: Optional[ConfigSource] = None) -> float:
    """Value parsed as a float, or 0.0 when it is not a number."""
    return parse_number_or_zero(get_string(key, source))
