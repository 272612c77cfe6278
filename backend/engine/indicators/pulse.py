"""Pulse - composite directional strength indicator.

Built from classic directional movement:

1. DM+/DM- per candle from the high/low deltas against the previous candle.
   Only the dominant move is kept; the other is zero.
2. Wilder smoothing of TR, DM+ and DM- over ``adx_length`` (L). The first L
   deltas are summed into the baseline, afterwards
   ``s = s - s / L + x``. DI+/DI- are the smoothed DMs as a percentage of
   the smoothed TR.
3. Over the last ``collect_length`` (C) DI points, count how often DI+
   dominated (positive_count) and how often DI- did (negative_count).
4. Intensity is the gamma-weighted net dominance over the same window,
   weight ``gamma ** k`` for the point k steps back from the latest one,
   normalised to [0, 1].

The first defined point is at index ``L + C - 1``.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from engine.indicators.oscillators import true_range
from engine.models.candle import Candle
from engine.models.indicator import PulsePoint

logger = logging.getLogger(__name__)

DEFAULT_ADX_LENGTH = 9
DEFAULT_COLLECT_LENGTH = 100
DEFAULT_GAMMA = 0.7


def pulse_warmup(adx_length: int = DEFAULT_ADX_LENGTH, collect_length: int = DEFAULT_COLLECT_LENGTH) -> int:
    """Index of the first defined Pulse point."""
    return adx_length + collect_length - 1


def _validate(adx_length: int, collect_length: int, gamma: float) -> None:
    if adx_length < 1:
        raise ValueError(f"adx_length must be >= 1, got {adx_length}")
    if collect_length < 1:
        raise ValueError(f"collect_length must be >= 1, got {collect_length}")
    if not 0 < gamma <= 1:
        raise ValueError(f"gamma must be in (0, 1], got {gamma}")


def directional_movement(current: Candle, previous: Candle) -> tuple[float, float]:
    """Return (dm_plus, dm_minus) for a candle against its predecessor."""
    up_move = current.high - previous.high
    down_move = previous.low - current.low

    dm_plus = up_move if up_move > down_move and up_move > 0 else 0.0
    dm_minus = down_move if down_move > up_move and down_move > 0 else 0.0
    return dm_plus, dm_minus


def _directional_index(
    candles: Sequence[Candle], adx_length: int
) -> tuple[np.ndarray, np.ndarray]:
    """DI+ and DI- per index; NaN before index ``adx_length``."""
    n = len(candles)
    di_plus = np.full(n, np.nan)
    di_minus = np.full(n, np.nan)
    if n <= adx_length:
        return di_plus, di_minus

    tr = np.zeros(n)
    dm_plus = np.zeros(n)
    dm_minus = np.zeros(n)
    for i in range(1, n):
        tr[i] = true_range(candles[i], candles[i - 1])
        dm_plus[i], dm_minus[i] = directional_movement(candles[i], candles[i - 1])

    # Baseline: sum of the first L deltas (indices 1..L)
    s_tr = float(tr[1 : adx_length + 1].sum())
    s_plus = float(dm_plus[1 : adx_length + 1].sum())
    s_minus = float(dm_minus[1 : adx_length + 1].sum())

    for i in range(adx_length, n):
        if i > adx_length:
            s_tr = s_tr - s_tr / adx_length + tr[i]
            s_plus = s_plus - s_plus / adx_length + dm_plus[i]
            s_minus = s_minus - s_minus / adx_length + dm_minus[i]

        if s_tr == 0:
            di_plus[i] = 0.0
            di_minus[i] = 0.0
        else:
            di_plus[i] = s_plus / s_tr * 100
            di_minus[i] = s_minus / s_tr * 100

    return di_plus, di_minus


def pulse_series(
    candles: Sequence[Candle],
    adx_length: int = DEFAULT_ADX_LENGTH,
    collect_length: int = DEFAULT_COLLECT_LENGTH,
    gamma: float = DEFAULT_GAMMA,
) -> list[PulsePoint | None]:
    """
    Calculate Pulse at every index.

    Args:
        candles: Candles, oldest first
        adx_length: Wilder smoothing length (L)
        collect_length: Collection window length (C)
        gamma: Per-step recency decay for intensity, in (0, 1]

    Returns:
        One entry per candle; None for the first ``L + C - 1`` indices

    Raises:
        ValueError: If a length is not positive or gamma is out of range
    """
    _validate(adx_length, collect_length, gamma)

    n = len(candles)
    result: list[PulsePoint | None] = [None] * n
    first = pulse_warmup(adx_length, collect_length)
    if n <= first:
        return result

    di_plus, di_minus = _directional_index(candles, adx_length)
    signs = np.sign(di_plus - di_minus)

    # weights[k] applies to the point k steps back from the latest
    weights = gamma ** np.arange(collect_length, dtype=np.float64)
    weight_total = float(weights.sum())

    for i in range(first, n):
        window = signs[i - collect_length + 1 : i + 1]
        positive = int((window > 0).sum())
        negative = int((window < 0).sum())
        trend_score = positive - negative

        weighted = float(np.dot(weights, window[::-1]))
        intensity = min(1.0, abs(weighted) / weight_total)

        dp = float(di_plus[i])
        dm = float(di_minus[i])
        is_bullish = trend_score > 0 if trend_score != 0 else dp >= dm

        result[i] = PulsePoint(
            positive_count=positive,
            negative_count=negative,
            trend_score=trend_score,
            intensity=intensity,
            di_plus=dp,
            di_minus=dm,
            is_bullish=is_bullish,
        )

    logger.debug(
        "Pulse: %d candles, %d defined points (L=%d, C=%d)",
        n,
        n - first,
        adx_length,
        collect_length,
    )
    return result


def pulse(
    candles: Sequence[Candle],
    adx_length: int = DEFAULT_ADX_LENGTH,
    collect_length: int = DEFAULT_COLLECT_LENGTH,
    gamma: float = DEFAULT_GAMMA,
) -> PulsePoint | None:
    """Pulse for the latest candle only."""
    series = pulse_series(candles, adx_length, collect_length, gamma)
    return series[-1] if series else None
