"""
Trade signal value objects and their JSON wire format.

**Conceptual**: A TradeSignal is one strategy's statement of intent ("go long
ETH-USD, strength 0.42") handed to whatever executes or records it. It
carries no behaviour; it only has to survive a trip over the wire intact.

**Wire format** (one JSON object):

    {
        "symbol": "ETH-USD",
        "side": "LONG",                  # literal token, never a number
        "strength": 0.42,
        "timestamp": "2025-08-21T12:00:00Z",
        "strategy": "mean_reversion",
        "meta": {"note": "test"}         # any JSON value, or null
    }

A missing or null "meta" decodes to None, not to an empty dict.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

REQUIRED_FIELDS = ("symbol", "side", "strength", "timestamp", "strategy")


class SignalDecodeError(ValueError):
    """Raised when a payload cannot be decoded into a TradeSignal."""
    pass


class TradeSide(Enum):
    """Direction of a trade signal; the value is the wire token."""
    LONG = "LONG"
    SHORT = "SHORT"

    @classmethod
    def from_token(cls, token: str) -> "TradeSide":
        try:
            return cls(token)
        except ValueError as e:
            raise SignalDecodeError(
                f"Unknown trade side {token!r}; expected one of {[side.value for side in cls]}"
            ) from e


@dataclass(frozen=True)
class TradeSignal:
    """
    One strategy-emitted trading intent.

    Attributes:
        symbol: Instrument identifier (e.g., "ETH-USD", "QQQ").
        side: TradeSide.LONG or TradeSide.SHORT.
        strength: Conviction score; scale is strategy-defined.
        timestamp: ISO-8601 string of when the signal was emitted.
        strategy: Name of the emitting strategy.
        meta: Optional free-form JSON payload (nested dicts/lists/scalars).
    """
    symbol: str
    side: TradeSide
    strength: float
    timestamp: str
    strategy: str
    meta: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "side": self.side.value,
            "strength": self.strength,
            "timestamp": self.timestamp,
            "strategy": self.strategy,
            "meta": self.meta,
        }

    def to_json(self) -> str:
        """
        Encode as a strict JSON object.

        Raises:
            ValueError: If strength or meta holds NaN or an infinity, which
                        have no JSON representation.
        """
        return json.dumps(self.to_dict(), allow_nan=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TradeSignal":
        """
        Decode a wire dict.

        Raises:
            SignalDecodeError: If a required field is missing, the side token
                              is unknown, strength is not a number, or a text
                              field is not a string.
        """
        missing = [name for name in REQUIRED_FIELDS if name not in payload]
        if missing:
            raise SignalDecodeError(f"Trade signal is missing fields: {missing}")

        for name in ("symbol", "side", "timestamp", "strategy"):
            if not isinstance(payload[name], str):
                raise SignalDecodeError(
                    f"Trade signal field {name!r} must be a string, got {type(payload[name]).__name__}"
                )

        strength = payload["strength"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(strength, bool) or not isinstance(strength, (int, float)):
            raise SignalDecodeError(
                f"Trade signal field 'strength' must be a number, got {type(strength).__name__}"
            )

        return cls(
            symbol=payload["symbol"],
            side=TradeSide.from_token(payload["side"]),
            strength=float(strength),
            timestamp=payload["timestamp"],
            strategy=payload["strategy"],
            meta=payload.get("meta"),
        )

    @classmethod
    def from_json(cls, text: str) -> "TradeSignal":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise SignalDecodeError(f"Trade signal is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise SignalDecodeError(
                f"Trade signal must be a JSON object, got {type(payload).__name__}"
            )
        return cls.from_dict(payload)
