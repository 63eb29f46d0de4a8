"""
Risk limits driven by the trading configuration.

**Per-trade budget**: risk_threshold(equity, config) is the amount of equity
a single trade may put at risk, equity * RISK_MAX_PER_TRADE. With the default
0.01, an account of 10,000 may risk 100 per trade.

**Drawdown limit**: drawdown_limit_breached() compares the worst
peak-to-trough loss of an equity curve against RISK_MAX_DRAWDOWN.

**Caveat**: risk_threshold does not validate its input. Negative equity
yields a negative budget and NaN/inf propagate unchanged, so callers must
guard equity >= 0 and finiteness themselves.
"""

from typing import Union

import pandas as pd

from src.config.settings import ResolvedConfig

Equity = Union[float, pd.Series]


def risk_threshold(equity: Equity, config: ResolvedConfig) -> Equity:
    """
    Maximum amount to risk on one trade.

    Args:
        equity: Current account equity, or a pandas Series of equity values
                (evaluated element-wise, index preserved).
        config: Resolved configuration supplying trading.risk_max_per_trade.

    Returns:
        equity * risk_max_per_trade, same shape as equity.

    Usage example:
        >>> risk_threshold(10_000, ResolvedConfig())
        100.0
    """
    return equity * config.trading.risk_max_per_trade


def drawdown_series(equity_curve: pd.Series) -> pd.Series:
    """
    Drawdown at each point as a fraction below the running peak.

    **Mathematical**: drawdown_t = equity_t / max(equity_0..equity_t) - 1,
    so values are <= 0 and exactly 0 at every new high.

    Args:
        equity_curve: Equity values in chronological order.

    Returns:
        Series of drawdowns with the same index as equity_curve.
    """
    cumulative_peak = equity_curve.cummax()
    return (equity_curve / cumulative_peak) - 1.0


def max_drawdown(equity_curve: pd.Series) -> float:
    """Worst drawdown over the curve as a positive fraction (0.2 = 20% down)."""
    if equity_curve.empty:
        return 0.0
    return float(-drawdown_series(equity_curve).min())


def drawdown_limit_breached(equity_curve: pd.Series, config: ResolvedConfig) -> bool:
    """
    True when the curve's max drawdown exceeds trading.risk_max_drawdown.

    A drawdown exactly equal to the limit is still within it.
    """
    return max_drawdown(equity_curve) > config.trading.risk_max_drawdown
