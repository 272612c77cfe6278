"""Simple and exponential moving averages.

Every *_series function returns a list aligned with its input where
positions without enough lookback are None.
"""

from typing import Sequence

import numpy as np

from engine.models.indicator import Series


def sma_warmup(period: int) -> int:
    """Index of the first defined SMA value."""
    return period - 1


def ema_warmup(period: int) -> int:
    """Index of the first defined EMA value (the SMA seed)."""
    return period - 1


def _window_mean(arr: np.ndarray, end: int, period: int) -> float:
    return float(np.mean(arr[end - period : end]))


def sma(period: int, values: Sequence[float]) -> float | None:
    """
    Calculate the Simple Moving Average of the last ``period`` values.

    Args:
        period: SMA period
        values: Sequence of values, oldest first

    Returns:
        Mean of the trailing window, or None if there are fewer than
        ``period`` values or the period is not positive
    """
    if period <= 0 or len(values) < period:
        return None

    arr = np.asarray(values, dtype=np.float64)
    return _window_mean(arr, len(arr), period)


def sma_series(period: int, values: Sequence[float]) -> Series:
    """
    Calculate SMA at every index.

    Position i holds ``sma(period, values[:i + 1])``.
    """
    if period <= 0:
        return [None] * len(values)

    arr = np.asarray(values, dtype=np.float64)
    result: Series = [None] * len(arr)

    for i in range(sma_warmup(period), len(arr)):
        result[i] = _window_mean(arr, i + 1, period)

    return result


def ema_series(period: int, values: Sequence[float]) -> Series:
    """
    Calculate EMA at every index.

    The first ``period - 1`` positions are None, position ``period - 1``
    holds the SMA seed, and later positions follow
    ``e[i] = (v[i] - e[i-1]) * k + e[i-1]`` with ``k = 2 / (period + 1)``.
    The smoothing state carries through the whole series.
    """
    if period <= 0 or len(values) < period:
        return [None] * len(values)

    arr = np.asarray(values, dtype=np.float64)
    k = 2.0 / (period + 1)

    result: Series = [None] * len(arr)
    value = _window_mean(arr, period, period)
    result[ema_warmup(period)] = value

    for i in range(period, len(arr)):
        value = (float(arr[i]) - value) * k + value
        result[i] = value

    return result


def ema(period: int, values: Sequence[float]) -> float | None:
    """
    Calculate the Exponential Moving Average over all values.

    Args:
        period: EMA period
        values: Sequence of values, oldest first

    Returns:
        Final smoothed value, or None if fewer than ``period`` values
    """
    series = ema_series(period, values)
    return series[-1] if series else None
