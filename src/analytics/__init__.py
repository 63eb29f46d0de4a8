"""
Risk calculations driven by the trading configuration.

Per-trade risk budgets and drawdown-limit checks over equity curves.
"""
