"""Outcome statistics for detected setups.

Only depends on engine/ for the signal models. Reading signal records from
storage happens outside this package.
"""

from backtest.stats import SetupStats, StatsAggregator

__all__ = ["SetupStats", "StatsAggregator"]
