"""
Unit tests for the animation curve catalog.
"""
import pytest

from scrolltune.core.animation_curves import (
    AnimationCurveParameters, BaseCurve, DragPhysics, DurationCurve, FixedDuration, SpeedSmoothing,
    resolve_animation_curve,
)
from scrolltune.core.curves import LINEAR_CURVE
from scrolltune.core.model import CurveVariant, InvariantViolationError, RESERVED_VARIANTS

LIVE_ANIMATED = [v for v in CurveVariant if v not in RESERVED_VARIANTS and v is not CurveVariant.NONE]


@pytest.mark.parametrize("variant", LIVE_ANIMATED)
def test_live_variants_resolve_to_consistent_parameters(variant):
    params = resolve_animation_curve(variant)
    assert isinstance(params, AnimationCurveParameters)
    assert isinstance(params.base, (BaseCurve, SpeedSmoothing))
    assert isinstance(params.duration, (FixedDuration, DurationCurve))
    if params.send_momentum_events:
        assert params.send_gesture_events


def test_none_variant_means_no_animation():
    assert resolve_animation_curve(CurveVariant.NONE) is None


@pytest.mark.parametrize("variant", sorted(RESERVED_VARIANTS, key=lambda v: v.value))
def test_reserved_variants_are_rejected(variant):
    assert variant.is_reserved
    with pytest.raises(InvariantViolationError):
        resolve_animation_curve(variant)


def test_momentum_without_gesture_is_rejected():
    with pytest.raises(InvariantViolationError):
        AnimationCurveParameters(
            base=BaseCurve(LINEAR_CURVE), duration=FixedDuration(100), send_momentum_events=True,
        )


def test_invalid_component_values_are_rejected():
    with pytest.raises(InvariantViolationError):
        SpeedSmoothing(1.5)
    with pytest.raises(InvariantViolationError):
        FixedDuration(0)
    with pytest.raises(InvariantViolationError):
        DragPhysics(exponent=0.7, coefficient=0.0, stop_speed=30)


def test_low_inertia_duration_curve_shortens_with_speed():
    params = resolve_animation_curve(CurveVariant.LOW_INERTIA)
    assert isinstance(params.duration, DurationCurve)
    assert params.duration.duration_ms(0.0) == pytest.approx(180.0)
    assert params.duration.duration_ms(1.0) == pytest.approx(110.0)
    assert params.drag == DragPhysics(exponent=1.0, coefficient=23.0, stop_speed=30)


def test_very_low_inertia_duration_curve():
    params = resolve_animation_curve(CurveVariant.VERY_LOW_INERTIA)
    assert params.duration.duration_ms(0.0) == pytest.approx(250.0)
    assert params.duration.duration_ms(1.0) == pytest.approx(100.0)
    assert not params.uses_drag


def test_high_inertia_variants_differ_only_in_event_flags():
    plain = resolve_animation_curve(CurveVariant.HIGH_INERTIA)
    sim = resolve_animation_curve(CurveVariant.HIGH_INERTIA_PLUS_TRACKPAD_SIM)
    assert plain.base == sim.base == SpeedSmoothing(0.0)
    assert plain.duration == sim.duration == FixedDuration(220)
    assert plain.drag == sim.drag
    assert not plain.send_gesture_events and not plain.send_momentum_events
    assert sim.send_gesture_events and sim.send_momentum_events


def test_quick_and_precise_scroll_parameters():
    quick = resolve_animation_curve(CurveVariant.QUICK_SCROLL)
    precise = resolve_animation_curve(CurveVariant.PRECISE_SCROLL)
    assert quick.duration == FixedDuration(300)
    assert quick.send_momentum_events
    assert precise.duration == FixedDuration(140)
    assert precise.drag.stop_speed == 50
    assert not precise.send_gesture_events


def test_touch_driver_variants_have_no_drag():
    assert resolve_animation_curve(CurveVariant.TOUCH_DRIVER).drag is None
    linear = resolve_animation_curve(CurveVariant.TOUCH_DRIVER_LINEAR)
    assert linear.drag is None
    assert linear.base == BaseCurve(LINEAR_CURVE)
