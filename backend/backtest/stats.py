"""Win/loss statistics over previously detected signals.

Signals arrive already outcome-tagged by the external tracker; this module
only counts them. Stats are derived on demand and never stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from engine.models.signal import Outcome, SetupType, SignalRecord

logger = logging.getLogger(__name__)


@dataclass
class SetupStats:
    ticker: str
    setup_type: SetupType | None = None  # None = all setup types together
    count: int = 0
    wins: int = 0
    losses: int = 0

    @property
    def pending(self) -> int:
        return self.count - self.wins - self.losses

    @property
    def resolved(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Fraction of resolved signals that won, 0.0 when none resolved."""
        return self.wins / self.resolved if self.resolved > 0 else 0.0

    def add(self, signal: SignalRecord) -> None:
        self.count += 1
        if signal.outcome == Outcome.WIN:
            self.wins += 1
        elif signal.outcome == Outcome.LOSS:
            self.losses += 1


class StatsAggregator:
    """Aggregate signal outcomes per ticker, optionally per setup type."""

    def calculate(
        self,
        signals: Iterable[SignalRecord],
        ticker: str,
        setup_type: SetupType | str | None = None,
    ) -> SetupStats:
        """
        Stats for one ticker.

        Args:
            signals: Signal records, any tickers/setup types mixed
            ticker: Ticker to aggregate (case-insensitive)
            setup_type: Restrict to one setup type; None aggregates all

        Returns:
            SetupStats for the matching records
        """
        key = ticker.strip().upper()
        scope = SetupType(setup_type) if setup_type is not None else None

        stats = SetupStats(ticker=key, setup_type=scope)
        for signal in signals:
            if signal.ticker != key:
                continue
            if scope is not None and signal.setup_type != scope:
                continue
            stats.add(signal)

        logger.debug(
            "Stats %s %s: count=%d wins=%d losses=%d",
            key,
            scope.value if scope else "all",
            stats.count,
            stats.wins,
            stats.losses,
        )
        return stats

    def by_setup_type(
        self,
        signals: Iterable[SignalRecord],
        ticker: str,
    ) -> list[SetupStats]:
        """Per-setup-type stats for one ticker, in SetupType order.

        Only setup types with at least one record are included.
        """
        key = ticker.strip().upper()
        groups: dict[SetupType, SetupStats] = {}
        for signal in signals:
            if signal.ticker != key:
                continue
            if signal.setup_type not in groups:
                groups[signal.setup_type] = SetupStats(ticker=key, setup_type=signal.setup_type)
            groups[signal.setup_type].add(signal)

        return [groups[t] for t in SetupType if t in groups]
