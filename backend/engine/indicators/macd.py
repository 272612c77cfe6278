"""MACD - Moving Average Convergence Divergence.

MACD line = EMA(fast) - EMA(slow)
Signal    = EMA(signal) of the defined MACD values
Histogram = MACD - Signal
"""

from typing import Sequence

from engine.indicators.moving_average import ema_series
from engine.models.indicator import MacdPoint


def macd_warmup(fast_period: int = 12, slow_period: int = 26, signal_period: int = 9) -> int:
    """Index of the first defined histogram value."""
    return max(fast_period, slow_period) + signal_period - 2


def macd_series(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> list[MacdPoint]:
    """
    Calculate MACD at every index.

    The signal EMA runs over the defined MACD values only (leading
    undefined positions dropped) and is mapped back onto the original
    positions in order.

    Args:
        values: Sequence of values (typically closes)
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: Signal EMA period

    Returns:
        One MacdPoint per input value; all-undefined when input is short
    """
    ema_fast = ema_series(fast_period, values)
    ema_slow = ema_series(slow_period, values)

    macd_line = [
        fast - slow if fast is not None and slow is not None else None
        for fast, slow in zip(ema_fast, ema_slow)
    ]

    defined = [m for m in macd_line if m is not None]
    signal_values = iter(ema_series(signal_period, defined))

    points: list[MacdPoint] = []
    for m in macd_line:
        if m is None:
            points.append(MacdPoint())
            continue

        signal = next(signal_values)
        histogram = m - signal if signal is not None else None
        points.append(MacdPoint(macd=m, signal=signal, histogram=histogram))

    return points


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MacdPoint:
    """MACD for the latest value only."""
    series = macd_series(values, fast_period, slow_period, signal_period)
    return series[-1] if series else MacdPoint()
