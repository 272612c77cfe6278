"""Serving-boundary services."""

from app.services.indicator_service import (
    IndicatorService,
    InsufficientDataError,
    required_lookback,
)
from app.services.setup_service import SetupService, build_detectors

__all__ = [
    "IndicatorService",
    "InsufficientDataError",
    "required_lookback",
    "SetupService",
    "build_detectors",
]
