"""Detector registry for discovering and instantiating setup detectors.

Usage:
    @register_detector(SetupType.BREAKOUT)
    class BreakoutDetector(BaseDetector):
        ...

    detector = create_detector("breakout", config=BreakoutConfig())
    setup_types = list_detectors()
"""

from __future__ import annotations

import logging
from typing import Any

from engine.models.signal import SetupType

logger = logging.getLogger(__name__)

# Global registry: setup_type -> detector class
_REGISTRY: dict[SetupType, type] = {}


def register_detector(setup_type: SetupType | str):
    """Decorator to register a detector class for a setup type.

    Args:
        setup_type: Setup type the detector emits.

    Returns:
        Decorator that registers the class and returns it unchanged.

    Raises:
        ValueError: If a detector is already registered for the setup type.
    """
    key = SetupType(setup_type)

    def decorator(cls):
        if key in _REGISTRY:
            raise ValueError(
                f"Detector '{key.value}' is already registered by {_REGISTRY[key].__name__}"
            )
        _REGISTRY[key] = cls
        logger.debug("Registered detector: %s -> %s", key.value, cls.__name__)
        return cls

    return decorator


def get_detector_class(setup_type: SetupType | str) -> type:
    """Get the detector class for a setup type (without instantiating).

    Raises:
        KeyError: If no detector is registered for the setup type.
    """
    try:
        key = SetupType(setup_type)
    except ValueError:
        key = None

    cls = _REGISTRY.get(key) if key is not None else None
    if cls is None:
        available = ", ".join(t.value for t in list_detectors()) or "(none)"
        raise KeyError(f"Unknown detector '{setup_type}'. Available: {available}")
    return cls


def create_detector(setup_type: SetupType | str, **kwargs: Any):
    """Create a detector instance for a setup type.

    Args:
        setup_type: Registered setup type (enum or its string value).
        **kwargs: Arguments passed to the detector constructor.

    Raises:
        KeyError: If no detector is registered for the setup type.
    """
    return get_detector_class(setup_type)(**kwargs)


def list_detectors() -> list[SetupType]:
    """Return registered setup types in declaration order."""
    return [t for t in SetupType if t in _REGISTRY]
