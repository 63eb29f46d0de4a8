"""
String-to-type coercion for configuration values.

Two tiers share these rules:
  - Strict readers (used by resolve()) raise TypeCoercionError naming the key.
  - Permissive readers (get_bool/get_number) swallow parse failures and fall
    back to a zero value.

Booleans never fail: a value is true iff its lower-cased form is one of
TRUTHY_TOKENS, and everything else (including "false", "", "maybe") is false.
"""

import re
from typing import Optional

from src.config.errors import TypeCoercionError

TRUTHY_TOKENS = frozenset({"1", "true", "yes", "on"})

PORT_MIN = 0
PORT_MAX = 65535

# Plain decimal notation only; digit-group underscores and surrounding
# whitespace are not numbers.
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_bool(raw: str) -> bool:
    """Return True iff raw is a truthy token (case-insensitive)."""
    return raw.lower() in TRUTHY_TOKENS


def parse_float(key: str, raw: str) -> float:
    """
    Parse raw as a float.

    Accepts plain decimal or exponent notation plus inf, infinity and nan
    (any case), which pass through unchanged. Underscores and surrounding
    whitespace are rejected.

    Raises:
        TypeCoercionError: If raw is not a number.
    """
    if not _FLOAT_PATTERN.fullmatch(raw):
        raise TypeCoercionError(key, raw, "number")
    return float(raw)


def parse_int(key: str, raw: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """
    Parse raw as a base-10 integer, optionally bounded (inclusive).

    Raises:
        TypeCoercionError: If raw is not an integer or falls outside the bounds.
    """
    if not _INT_PATTERN.fullmatch(raw):
        raise TypeCoercionError(key, raw, _int_description(minimum, maximum))
    value = int(raw)

    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise TypeCoercionError(key, raw, _int_description(minimum, maximum))
    return value


def parse_port(key: str, raw: str) -> int:
    """Parse a TCP port number (0..65535)."""
    return parse_int(key, raw, minimum=PORT_MIN, maximum=PORT_MAX)


def parse_count(key: str, raw: str) -> int:
    """Parse a non-negative integer count."""
    return parse_int(key, raw, minimum=0)


def parse_number_or_zero(raw: str) -> float:
    """Permissive float parse: malformed input yields 0.0 instead of an error."""
    if not _FLOAT_PATTERN.fullmatch(raw):
        return 0.0
    return float(raw)


def _int_description(minimum: Optional[int], maximum: Optional[int]) -> str:
    if minimum == PORT_MIN and maximum == PORT_MAX:
        return f"port ({PORT_MIN}..{PORT_MAX})"
    if minimum == 0 and maximum is None:
        return "non-negative integer"
    if minimum is not None or maximum is not None:
        low = "-inf" if minimum is None else str(minimum)
        high = "inf" if maximum is None else str(maximum)
        return f"integer ({low}..{high})"
    return "integer"
