"""Setup detector plugin system.

Public API:
- Detector: Protocol that all detectors implement
- register_detector / create_detector / list_detectors / get_detector_class
- scan_history / active_setups: run detectors over a candle history

Importing this package auto-registers all built-in detectors.
"""

from engine.setups.protocol import Detector
from engine.setups.registry import (
    register_detector,
    create_detector,
    list_detectors,
    get_detector_class,
)
from engine.setups.base import BaseDetector, Evaluation
from engine.setups.scanner import scan_history, active_setups

# Import built-in detectors to trigger auto-registration
from engine.setups.breakout import BreakoutDetector, BreakdownDetector
from engine.setups.pullback import PullbackDetector
from engine.setups.pulse_flip import PulseFlipDetector
from engine.setups.setup_123 import Setup123Detector

__all__ = [
    "Detector",
    "BaseDetector",
    "Evaluation",
    "register_detector",
    "create_detector",
    "list_detectors",
    "get_detector_class",
    "scan_history",
    "active_setups",
    "BreakoutDetector",
    "BreakdownDetector",
    "PullbackDetector",
    "PulseFlipDetector",
    "Setup123Detector",
]
