"""
Model module for ScrollTune.

Defines the enumerations and immutable value types that flow into the scroll
configuration core: the user's scroll settings, the per-event modification
context, and the animation curve variants the core can select.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ScrollConfigError(Exception):
    """Base exception for the scroll configuration core."""


class InvariantViolationError(ScrollConfigError):
    """
    Raised when an internal invariant is broken, e.g. an unmatched case in a
    total mapping. Indicates a programming error upstream, never bad user input.
    """


class SmoothnessTier(Enum):
    """User setting selecting the overall animation inertia class."""
    OFF = "off"
    LOW = "low"
    REGULAR = "regular"
    HIGH = "high"


class SpeedTier(Enum):
    """User setting selecting how aggressive acceleration is. SYSTEM defers to the OS."""
    SYSTEM = "system"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EffectModification(Enum):
    """Semantic transform of the scroll effect, driven by held modifier keys."""
    NONE = "none"
    HORIZONTAL_SCROLL = "horizontal_scroll"
    ZOOM = "zoom"
    ROTATE = "rotate"
    COMMAND_TAB = "command_tab"
    THREE_FINGER_SWIPE_HORIZONTAL = "three_finger_swipe_horizontal"
    FOUR_FINGER_PINCH = "four_finger_pinch"
    ADD_MODE_FEEDBACK = "add_mode_feedback"


class InputModification(Enum):
    """Transform of how input is interpreted, independent of the effect."""
    NONE = "none"
    QUICK = "quick"
    PRECISE = "precise"


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CurveVariant(Enum):
    """
    Named animation curves.

    NO_INERTIA, MEDIUM_INERTIA and TEST are reserved names. They are never
    selected and the catalog refuses to resolve them.
    """
    NONE = "none"
    VERY_LOW_INERTIA = "very_low_inertia"
    LOW_INERTIA = "low_inertia"
    HIGH_INERTIA = "high_inertia"
    HIGH_INERTIA_PLUS_TRACKPAD_SIM = "high_inertia_plus_trackpad_sim"
    TOUCH_DRIVER = "touch_driver"
    TOUCH_DRIVER_LINEAR = "touch_driver_linear"
    QUICK_SCROLL = "quick_scroll"
    PRECISE_SCROLL = "precise_scroll"

    NO_INERTIA = "no_inertia"
    MEDIUM_INERTIA = "medium_inertia"
    TEST = "test"

    @property
    def is_reserved(self) -> bool:
        return self in RESERVED_VARIANTS

    @property
    def is_animated(self) -> bool:
        return self is not CurveVariant.NONE


RESERVED_VARIANTS = frozenset({
    CurveVariant.NO_INERTIA,
    CurveVariant.MEDIUM_INERTIA,
    CurveVariant.TEST,
})

TOUCH_DRIVER_VARIANTS = frozenset({
    CurveVariant.TOUCH_DRIVER,
    CurveVariant.TOUCH_DRIVER_LINEAR,
})


@dataclass(frozen=True, slots=True, eq=False)
class SettingsSnapshot:
    """
    The user's scroll settings as of one load or reload.

    Compared by identity: every reload produces a new snapshot, and the
    resolver treats a new object as new settings even if the values match.

    Attributes:
        smoothness: Selected smoothness tier.
        speed: Selected speed tier.
        precise: Whether the precise setting is on.
        trackpad_simulation: Whether high smoothness simulates trackpad gestures.
        reverse_direction: Whether the scroll direction is inverted.
        horizontal_modifier_mask: Modifier flags that turn scrolling horizontal.
        zoom_modifier_mask: Modifier flags that turn scrolling into zooming.
    """
    smoothness: SmoothnessTier
    speed: SpeedTier
    precise: bool = False
    trackpad_simulation: bool = True
    reverse_direction: bool = False
    horizontal_modifier_mask: int = 0
    zoom_modifier_mask: int = 0


@dataclass(frozen=True, slots=True)
class ModificationContext:
    """Per-event modification state, produced by the input classifier."""
    effect: EffectModification = EffectModification.NONE
    input: InputModification = InputModification.NONE
    axis: Axis = Axis.VERTICAL
