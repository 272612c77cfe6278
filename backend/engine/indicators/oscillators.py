"""Windowed candle statistics: true range, ATR, RSI and volume."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from engine.models.candle import Candle


def true_range(current: Candle, previous: Candle | None) -> float:
    """
    Calculate True Range.

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close)),
    or just high - low for the first candle.
    """
    high_low = current.high - current.low
    if previous is None:
        return high_low

    return max(
        high_low,
        abs(current.high - previous.close),
        abs(current.low - previous.close),
    )


def atr(period: int, candles: Sequence[Candle]) -> float | None:
    """
    Calculate Average True Range as the plain mean of the last ``period``
    true ranges.

    Each true range uses the preceding candle, so ``period + 1`` candles
    are required.
    """
    if period <= 0 or len(candles) < period + 1:
        return None

    window = candles[-(period + 1) :]
    ranges = [true_range(window[i], window[i - 1]) for i in range(1, len(window))]
    return float(np.mean(ranges))


def atr_percent(period: int, candles: Sequence[Candle]) -> float | None:
    """ATR as a percentage of the last close."""
    value = atr(period, candles)
    if value is None:
        return None

    last_close = candles[-1].close
    if last_close == 0:
        return None

    return value / last_close * 100


def rsi(period: int, closes: Sequence[float]) -> float | None:
    """
    Calculate RSI from simple averages of the last ``period`` deltas.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss). With no losses in the
    window the result is exactly 100.
    """
    if period <= 0 or len(closes) < period + 1:
        return None

    deltas = np.diff(np.asarray(closes[-(period + 1) :], dtype=np.float64))
    gains = float(deltas[deltas > 0].sum())
    losses = float(-deltas[deltas < 0].sum())

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def avg_volume(period: int, candles: Sequence[Candle]) -> float | None:
    """Mean volume of the last ``period`` candles."""
    if period <= 0 or len(candles) < period:
        return None

    return float(np.mean([c.volume for c in candles[-period:]]))


def volume_ratio(period: int, candles: Sequence[Candle]) -> float | None:
    """
    Volume of the last candle relative to the average of the ``period``
    candles before it.

    Returns None when that average is unavailable or zero.
    """
    if not candles:
        return None

    average = avg_volume(period, candles[:-1])
    if average is None or average == 0:
        return None

    return candles[-1].volume / average
