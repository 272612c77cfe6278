"""Signal (setup detection) data models."""

import hashlib
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, field_validator


class Direction(int, Enum):
    """Trade direction."""

    LONG = 1
    SHORT = -1


class Outcome(str, Enum):
    """Signal outcome status.

    Signals are created as PENDING; an external tracker resolves them later.
    """

    PENDING = "pending"
    WIN = "win"
    LOSS = "loss"


class SetupType(str, Enum):
    """Named setup patterns the detectors can emit."""

    BREAKOUT = "breakout"
    BREAKDOWN = "breakdown"
    PULLBACK = "pullback"
    PULSE_FLIP = "pulse_flip"
    SETUP_123 = "setup_123"


class SetupStatus(str, Enum):
    """Current state of a setup on the latest candle."""

    ACTIVE = "active"
    FORMING = "forming"  # Close to triggering, waiting for confirmation
    INVALID = "invalid"


class RiskLevel(str, Enum):
    """Risk attached to a setup given the current market context."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


def _generate_signal_id(
    ticker: str,
    timeframe: str,
    setup_type: str,
    detected_at: datetime,
    direction: int,
) -> str:
    """Generate deterministic signal ID based on the signal store key.

    Re-scanning the same history yields the same IDs, so the store can
    upsert instead of duplicating.
    """
    ts_str = detected_at.strftime("%Y%m%d%H%M%S%f")
    key = f"{setup_type}:{ticker}:{timeframe}:{ts_str}:{direction}"
    return hashlib.sha256(key.encode()).hexdigest()[:32]


class SignalRecord(BaseModel):
    """A setup detected on a specific candle."""

    id: str = ""  # Will be set in model_post_init
    ticker: str
    timeframe: str
    setup_type: SetupType
    detected_at: datetime
    direction: Direction
    outcome: Outcome = Outcome.PENDING
    entry_price: float | None = None
    stop_price: float | None = None

    @field_validator("ticker")
    @classmethod
    def _normalize_ticker(cls, value: str) -> str:
        return value.strip().upper()

    def model_post_init(self, __context) -> None:
        """Generate deterministic ID after model initialization."""
        if not self.id:
            object.__setattr__(
                self,
                "id",
                _generate_signal_id(
                    self.ticker,
                    self.timeframe,
                    self.setup_type.value,
                    self.detected_at,
                    self.direction.value,
                ),
            )

    @property
    def is_resolved(self) -> bool:
        return self.outcome != Outcome.PENDING

    @property
    def risk_amount(self) -> float | None:
        """Distance from entry to stop, or None when either is unknown."""
        if self.entry_price is None or self.stop_price is None:
            return None
        if self.direction == Direction.LONG:
            return self.entry_price - self.stop_price
        return self.stop_price - self.entry_price
