"""
Core submodule for ScrollTune.

Contains the scroll configuration resolver and the curve machinery behind it.
Exports the main classes for use by other parts of the application.
"""

from scrolltune.core.model import (
    Axis,
    CurveVariant,
    EffectModification,
    InputModification,
    InvariantViolationError,
    ModificationContext,
    ScrollConfigError,
    SettingsSnapshot,
    SmoothnessTier,
    SpeedTier,
)
from scrolltune.core.scroll_config import ResolvedScrollConfig, ScrollConfigResolver

__all__ = [
    "Axis",
    "CurveVariant",
    "EffectModification",
    "InputModification",
    "InvariantViolationError",
    "ModificationContext",
    "ResolvedScrollConfig",
    "ScrollConfigError",
    "ScrollConfigResolver",
    "SettingsSnapshot",
    "SmoothnessTier",
    "SpeedTier",
]
