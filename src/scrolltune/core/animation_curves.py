"""
Animation curve catalog.

Maps each live `CurveVariant` to the immutable parameter record the animator
consumes. The record uses small tagged types for the mutually exclusive
choices, so a base curve can never coexist with speed smoothing and a fixed
duration can never coexist with a duration curve.

Tuning history (kept here rather than as live branches):
- LowInertia previously ran with drag (1.05, 15) on a fixed 140 ms step and,
  before that, on speed smoothing 0.15 with a 175 ms step.
- HighInertia was tried with speed smoothing 0.15 and a stop speed of 50.
- TouchDriver durations of 225 ms and 275 ms were tried around the current 250 ms.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Union

from scrolltune.core.curves import (
    BezierCurve, CappedBezierCurve, Curve, ExponentialCurve, LINEAR_CURVE,
)
from scrolltune.core.model import CurveVariant, InvariantViolationError


@dataclass(frozen=True, slots=True)
class BaseCurve:
    """Fixed easing curve for each animation step."""
    curve: BezierCurve


@dataclass(frozen=True, slots=True)
class SpeedSmoothing:
    """
    Replaces the base curve. The step curve is computed on the fly so that the
    animation speed does not jump when a new tick arrives.
    """
    factor: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.factor <= 1.0):
            raise InvariantViolationError(f"Speed smoothing factor must be in [0, 1], got {self.factor}")


@dataclass(frozen=True, slots=True)
class FixedDuration:
    """Fixed base step duration in milliseconds."""
    ms: int

    def __post_init__(self) -> None:
        if self.ms <= 0:
            raise InvariantViolationError(f"Step duration must be positive, got {self.ms}")


@dataclass(frozen=True, slots=True)
class DurationCurve:
    """
    Step duration in milliseconds as a function of a speedup position in
    [0, 1]. The position grows from 0 to 1 as ticks come in faster.
    """
    curve: Curve

    def duration_ms(self, position: float) -> float:
        return self.curve.evaluate(position)


@dataclass(frozen=True, slots=True)
class DragPhysics:
    """Drag phase that follows the base curve. stop_speed is in pixels per second."""
    exponent: float
    coefficient: float
    stop_speed: int

    def __post_init__(self) -> None:
        if self.exponent <= 0 or self.coefficient <= 0 or self.stop_speed <= 0:
            raise InvariantViolationError(f"Drag physics values must be positive: {self}")


BaseShape = Union[BaseCurve, SpeedSmoothing]
StepDuration = Union[FixedDuration, DurationCurve]


@dataclass(frozen=True, slots=True)
class AnimationCurveParameters:
    """
    Parameters describing how one scroll distance is animated over time.

    Attributes:
        base: Easing of each step, either a fixed curve or speed smoothing.
        duration: Step duration, either fixed or driven by a curve.
        drag: Optional drag phase following the base curve.
        send_gesture_events: Emit gesture scroll events instead of plain
            continuous scroll events.
        send_momentum_events: Emit momentum events (what a trackpad sends after
            the fingers lift) while drag controls the animation.
    """
    base: BaseShape
    duration: StepDuration
    drag: Optional[DragPhysics] = None
    send_gesture_events: bool = False
    send_momentum_events: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.base, (BaseCurve, SpeedSmoothing)):
            raise InvariantViolationError(f"Invalid base shape: {self.base!r}")
        if not isinstance(self.duration, (FixedDuration, DurationCurve)):
            raise InvariantViolationError(f"Invalid step duration: {self.duration!r}")
        if self.send_momentum_events and not self.send_gesture_events:
            raise InvariantViolationError("Momentum events require gesture events")

    @property
    def uses_drag(self) -> bool:
        return self.drag is not None


_TOUCH_DRIVER_CURVE = BezierCurve([(0.0, 0.0), (0.0, 0.0), (0.5, 1.0), (1.0, 1.0)], epsilon=0.001)
_VERY_LOW_INERTIA_CURVE = BezierCurve([(0.0, 0.0), (0.0, 0.0), (0.85, 1.0), (1.0, 1.0)], epsilon=0.001)

# 15 and 6 frames at 60 Hz. No curvature: with curvature, two ticks that
# happen to land close together produced a jerky speedup.
_VERY_LOW_INERTIA_DURATION = CappedBezierCurve(
    x_min=0.0, x_max=1.0, y_min=(1000.0 / 60) * 15, y_max=(1000.0 / 60) * 6, curvature=0.0, epsilon=0.001,
)
# 110 ms at the fast end; 90 ms felt too abrupt.
_LOW_INERTIA_DURATION = ExponentialCurve(start=180.0, end=110.0, curvature=4.0)


_CATALOG: Dict[CurveVariant, Optional[AnimationCurveParameters]] = {
    CurveVariant.NONE: None,
    CurveVariant.VERY_LOW_INERTIA: AnimationCurveParameters(
        base=BaseCurve(_VERY_LOW_INERTIA_CURVE),
        duration=DurationCurve(_VERY_LOW_INERTIA_DURATION),
    ),
    CurveVariant.LOW_INERTIA: AnimationCurveParameters(
        base=BaseCurve(LINEAR_CURVE),
        duration=DurationCurve(_LOW_INERTIA_DURATION),
        drag=DragPhysics(exponent=1.0, coefficient=23.0, stop_speed=30),
    ),
    CurveVariant.HIGH_INERTIA: AnimationCurveParameters(
        base=SpeedSmoothing(0.0),
        duration=FixedDuration(220),
        drag=DragPhysics(exponent=0.7, coefficient=40.0, stop_speed=30),
    ),
    CurveVariant.HIGH_INERTIA_PLUS_TRACKPAD_SIM: AnimationCurveParameters(
        base=SpeedSmoothing(0.0),
        duration=FixedDuration(220),
        drag=DragPhysics(exponent=0.7, coefficient=40.0, stop_speed=30),
        send_gesture_events=True,
        send_momentum_events=True,
    ),
    CurveVariant.TOUCH_DRIVER: AnimationCurveParameters(
        base=BaseCurve(_TOUCH_DRIVER_CURVE),
        duration=FixedDuration(250),
    ),
    CurveVariant.TOUCH_DRIVER_LINEAR: AnimationCurveParameters(
        base=BaseCurve(LINEAR_CURVE),
        duration=FixedDuration(180),
    ),
    CurveVariant.QUICK_SCROLL: AnimationCurveParameters(
        base=BaseCurve(LINEAR_CURVE),
        duration=FixedDuration(300),
        drag=DragPhysics(exponent=0.7, coefficient=30.0, stop_speed=1),
        send_gesture_events=True,
        send_momentum_events=True,
    ),
    CurveVariant.PRECISE_SCROLL: AnimationCurveParameters(
        base=BaseCurve(LINEAR_CURVE),
        duration=FixedDuration(140),
        drag=DragPhysics(exponent=1.05, coefficient=15.0, stop_speed=50),
    ),
}


def resolve_animation_curve(variant: CurveVariant) -> Optional[AnimationCurveParameters]:
    """
    Returns the parameters for a live curve variant.

    `CurveVariant.NONE` means no animation and resolves to None.

    Raises:
        InvariantViolationError: For reserved variants, which are never selected.
    """
    try:
        return _CATALOG[variant]
    except KeyError:
        raise InvariantViolationError(f"Animation curve {variant!r} is reserved and has no parameters") from None
