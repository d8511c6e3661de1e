"""
Unit tests for ModifierOverrideResolver.
"""
import pytest

from scrolltune import constants
from scrolltune.core.model import (
    CurveVariant, EffectModification, InputModification, InvariantViolationError, ModificationContext,
    SmoothnessTier, SpeedTier,
)
from scrolltune.core.override_resolver import (
    FastScrollSpeedupCurve, ModifierOverrideResolver, baseline_fast_scroll_curve, baseline_timing,
    baseline_variant,
)


@pytest.fixture
def resolver():
    return ModifierOverrideResolver()


@pytest.mark.parametrize("smoothness, trackpad_sim, expected", [
    (SmoothnessTier.OFF, True, CurveVariant.NONE),
    (SmoothnessTier.LOW, True, CurveVariant.VERY_LOW_INERTIA),
    (SmoothnessTier.REGULAR, True, CurveVariant.LOW_INERTIA),
    (SmoothnessTier.HIGH, False, CurveVariant.HIGH_INERTIA),
    (SmoothnessTier.HIGH, True, CurveVariant.HIGH_INERTIA_PLUS_TRACKPAD_SIM),
])
def test_baseline_variant(smoothness, trackpad_sim, expected):
    assert baseline_variant(smoothness, trackpad_sim) is expected


def test_baseline_lookups_reject_override_only_variants():
    with pytest.raises(InvariantViolationError):
        baseline_timing(CurveVariant.QUICK_SCROLL)
    with pytest.raises(InvariantViolationError):
        baseline_fast_scroll_curve(CurveVariant.PRECISE_SCROLL)


def test_fast_scroll_curve_needs_positive_threshold():
    with pytest.raises(InvariantViolationError):
        FastScrollSpeedupCurve(0, 1.0, 1.0)


def test_no_modification_keeps_baseline(resolver, make_settings):
    overrides = resolver.resolve(make_settings(SmoothnessTier.HIGH, trackpad_simulation=False), ModificationContext())
    assert overrides.variant is CurveVariant.HIGH_INERTIA
    assert overrides.animation_curve_override is None
    assert overrides.scale_to_display
    assert overrides.fast_scroll_curve == FastScrollSpeedupCurve(2, 1.33, 7.5)
    assert overrides.timing.swipe_max_interval == 0.600


@pytest.mark.parametrize("effect", [EffectModification.HORIZONTAL_SCROLL, EffectModification.ADD_MODE_FEEDBACK])
def test_pass_through_effects(resolver, make_settings, effect):
    overrides = resolver.resolve(make_settings(), ModificationContext(effect=effect))
    assert overrides.variant is CurveVariant.LOW_INERTIA
    assert overrides.scale_to_display


@pytest.mark.parametrize("smoothness", list(SmoothnessTier))
@pytest.mark.parametrize("precise", [False, True])
def test_quick_input_modification(resolver, make_settings, smoothness, precise):
    settings = make_settings(smoothness, SpeedTier.SYSTEM, precise=precise)
    overrides = resolver.resolve(settings, ModificationContext(input=InputModification.QUICK))

    c = constants.timing.consecutive
    assert overrides.variant is CurveVariant.QUICK_SCROLL
    assert overrides.use_quick_mod and not overrides.use_precise_mod
    assert overrides.precise is False
    assert overrides.scale_to_display is False
    assert overrides.fast_scroll_curve == FastScrollSpeedupCurve(1, 2.0, 10.0)
    assert overrides.timing.swipe_max_interval == c.QUICK_SWIPE_MAX_INTERVAL
    assert overrides.timing.tick_interval_max == c.QUICK_TICK_INTERVAL_MAX
    assert overrides.timing.swipe_min_tick_speed == c.QUICK_SWIPE_MIN_TICK_SPEED


@pytest.mark.parametrize("effect", [EffectModification.ZOOM, EffectModification.ROTATE])
@pytest.mark.parametrize("input_mod", list(InputModification))
def test_zoom_and_rotate_force_touch_driver(resolver, make_settings, effect, input_mod):
    settings = make_settings(SmoothnessTier.OFF, SpeedTier.LOW)
    overrides = resolver.resolve(settings, ModificationContext(effect=effect, input=input_mod))
    assert overrides.variant is CurveVariant.TOUCH_DRIVER
    assert overrides.scale_to_display is False


def test_command_tab_disables_animation_even_with_precise(resolver, make_settings):
    settings = make_settings(SmoothnessTier.HIGH)
    for input_mod in (InputModification.NONE, InputModification.PRECISE):
        overrides = resolver.resolve(settings, ModificationContext(effect=EffectModification.COMMAND_TAB,
                                                                   input=input_mod))
        assert overrides.variant is CurveVariant.NONE


@pytest.mark.parametrize("effect", [EffectModification.THREE_FINGER_SWIPE_HORIZONTAL,
                                    EffectModification.FOUR_FINGER_PINCH])
def test_finger_gesture_effects(resolver, make_settings, effect):
    settings = make_settings(SmoothnessTier.REGULAR, SpeedTier.SYSTEM, precise=True)
    overrides = resolver.resolve(settings, ModificationContext(effect=effect, input=InputModification.QUICK))
    assert overrides.variant is CurveVariant.TOUCH_DRIVER_LINEAR
    assert overrides.speed is SpeedTier.MEDIUM
    assert overrides.precise is False
    assert overrides.scale_to_display is False
    assert overrides.fast_scroll_curve is None
    assert not overrides.use_quick_mod and not overrides.use_precise_mod


def test_finger_gesture_keeps_explicit_speed(resolver, make_settings):
    overrides = resolver.resolve(make_settings(speed=SpeedTier.HIGH),
                                 ModificationContext(effect=EffectModification.FOUR_FINGER_PINCH))
    assert overrides.speed is SpeedTier.HIGH


def test_precise_input_on_animated_baseline(resolver, make_settings):
    settings = make_settings(SmoothnessTier.REGULAR, precise=True)
    overrides = resolver.resolve(settings, ModificationContext(input=InputModification.PRECISE))
    assert overrides.variant is CurveVariant.PRECISE_SCROLL
    assert overrides.use_precise_mod
    assert overrides.precise is False
    assert overrides.scale_to_display is False
    assert overrides.fast_scroll_curve is None


def test_precise_input_never_adds_animation(resolver, make_settings):
    overrides = resolver.resolve(make_settings(SmoothnessTier.OFF),
                                 ModificationContext(input=InputModification.PRECISE))
    assert overrides.variant is CurveVariant.NONE
    assert overrides.use_precise_mod


def test_effect_override_wins_over_precise(resolver, make_settings):
    overrides = resolver.resolve(make_settings(SmoothnessTier.HIGH),
                                 ModificationContext(effect=EffectModification.ZOOM,
                                                     input=InputModification.PRECISE))
    assert overrides.variant is CurveVariant.TOUCH_DRIVER
    assert overrides.use_precise_mod
