"""
Modifier override resolution.

Turns the user's settings plus the per-event modification context into the
effective curve variant and the flags that steer acceleration. Overrides are
applied in a fixed order: baseline from settings, then the effect
modification, then the input modification.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Optional

from scrolltune import constants
from scrolltune.core.model import (
    CurveVariant, EffectModification, InputModification, InvariantViolationError,
    ModificationContext, SettingsSnapshot, SmoothnessTier, SpeedTier,
)


logger = logging.getLogger(f"{constants.app.APP_NAME}.OverrideResolver")


@dataclass(frozen=True, slots=True)
class FastScrollSpeedupCurve:
    """
    Multiplicative speedup applied once `swipe_threshold` consecutive
    qualifying swipes have happened.
    """
    swipe_threshold: int
    initial_speedup: float
    exponential_speedup: float

    def __post_init__(self) -> None:
        if self.swipe_threshold < 1:
            raise InvariantViolationError(f"swipe_threshold must be >= 1, got {self.swipe_threshold}")


@dataclass(frozen=True, slots=True)
class ConsecutiveScrollTiming:
    """
    Thresholds for grouping ticks into swipes. Intervals in seconds.

    Attributes:
        tick_interval_max: Longest gap between two ticks that still counts as consecutive.
        tick_interval_min: Shortest plausible gap between two ticks.
        tick_interval_acceleration_end: Tick gap at which acceleration reaches max sensitivity.
        swipe_max_interval: Longest gap between two swipes that still counts as consecutive.
        swipe_min_tick_speed: Tick speed (ticks/s) a swipe needs to qualify for fast scroll.
        swipe_threshold_ticks: Consecutive ticks that form a swipe.
        swipe_max_ticks: Most ticks a single swipe naturally produces.
    """
    tick_interval_max: float
    tick_interval_min: float
    tick_interval_acceleration_end: float
    swipe_max_interval: float
    swipe_min_tick_speed: float
    swipe_threshold_ticks: int
    swipe_max_ticks: int


@dataclass(frozen=True, slots=True)
class ScrollOverrides:
    """
    Result of override resolution for one event context.

    Attributes:
        baseline_variant: Variant chosen from the settings alone.
        variant: Effective variant after all overrides.
        speed: Effective speed tier (may be raised from SYSTEM by an effect).
        precise: Effective precise flag.
        scale_to_display: Whether max sensitivity follows the display size.
        use_quick_mod: Quick input modification is in effect.
        use_precise_mod: Precise input modification is in effect.
        fast_scroll_curve: Fast scroll speedup, or None when disabled.
        timing: Consecutive tick and swipe thresholds.
        animation_curve_override: The variant forced by an override, if any.
    """
    baseline_variant: CurveVariant
    variant: CurveVariant
    speed: SpeedTier
    precise: bool
    scale_to_display: bool
    use_quick_mod: bool
    use_precise_mod: bool
    fast_scroll_curve: Optional[FastScrollSpeedupCurve]
    timing: ConsecutiveScrollTiming
    animation_curve_override: Optional[CurveVariant] = None


def baseline_variant(smoothness: SmoothnessTier, trackpad_simulation: bool) -> CurveVariant:
    """Selects the curve variant implied by the smoothness setting."""
    if smoothness is SmoothnessTier.OFF:
        return CurveVariant.NONE
    if smoothness is SmoothnessTier.LOW:
        return CurveVariant.VERY_LOW_INERTIA
    if smoothness is SmoothnessTier.REGULAR:
        return CurveVariant.LOW_INERTIA
    if smoothness is SmoothnessTier.HIGH:
        return CurveVariant.HIGH_INERTIA_PLUS_TRACKPAD_SIM if trackpad_simulation else CurveVariant.HIGH_INERTIA
    raise InvariantViolationError(f"Unhandled smoothness tier: {smoothness!r}")


def baseline_timing(variant: CurveVariant) -> ConsecutiveScrollTiming:
    """Consecutive scroll thresholds for a baseline variant."""
    c = constants.timing.consecutive
    try:
        return ConsecutiveScrollTiming(
            tick_interval_max=c.TICK_INTERVAL_MAX[variant.value],
            tick_interval_min=c.TICK_INTERVAL_MIN,
            tick_interval_acceleration_end=c.TICK_INTERVAL_ACCELERATION_END,
            swipe_max_interval=c.SWIPE_MAX_INTERVAL[variant.value],
            swipe_min_tick_speed=c.SWIPE_MIN_TICK_SPEED[variant.value],
            swipe_threshold_ticks=c.SWIPE_THRESHOLD_TICKS,
            swipe_max_ticks=c.SWIPE_MAX_TICKS,
        )
    except KeyError:
        raise InvariantViolationError(f"No consecutive scroll timing for baseline variant {variant!r}") from None


def baseline_fast_scroll_curve(variant: CurveVariant) -> FastScrollSpeedupCurve:
    """Fast scroll speedup for a baseline variant."""
    try:
        threshold, initial, exponential = constants.timing.fast_scroll.CURVES[variant.value]
    except KeyError:
        raise InvariantViolationError(f"No fast scroll curve for baseline variant {variant!r}") from None
    return FastScrollSpeedupCurve(threshold, initial, exponential)


class ModifierOverrideResolver:
    """
    Applies effect and input modification overrides on top of the settings.

    Effect modification overrides always win over input modification ones.
    The precise input modification may shorten an animation but never adds
    one where the settings or the effect asked for none.
    """

    def resolve(self, settings: SettingsSnapshot, context: ModificationContext) -> ScrollOverrides:
        baseline = baseline_variant(settings.smoothness, settings.trackpad_simulation)

        speed = settings.speed
        precise = settings.precise
        scale_to_display = True
        use_quick_mod = context.input is InputModification.QUICK
        use_precise_mod = context.input is InputModification.PRECISE
        fast_scroll_curve: Optional[FastScrollSpeedupCurve] = baseline_fast_scroll_curve(baseline)
        timing = baseline_timing(baseline)
        override: Optional[CurveVariant] = None

        # --- Effect modification ---
        effect = context.effect
        if effect in (EffectModification.NONE, EffectModification.ADD_MODE_FEEDBACK,
                      EffectModification.HORIZONTAL_SCROLL):
            pass
        elif effect in (EffectModification.ZOOM, EffectModification.ROTATE):
            override = CurveVariant.TOUCH_DRIVER
            scale_to_display = False
        elif effect is EffectModification.COMMAND_TAB:
            override = CurveVariant.NONE
        elif effect in (EffectModification.THREE_FINGER_SWIPE_HORIZONTAL, EffectModification.FOUR_FINGER_PINCH):
            override = CurveVariant.TOUCH_DRIVER_LINEAR
            precise = False
            if speed is SpeedTier.SYSTEM:
                speed = SpeedTier.MEDIUM
            scale_to_display = False
            # Simulated gestures ignore quick and precise input.
            use_quick_mod = False
            use_precise_mod = False
            fast_scroll_curve = None
        else:
            raise InvariantViolationError(f"Unhandled effect modification: {effect!r}")

        # --- Input modification ---
        if use_quick_mod:
            if override is None:
                override = CurveVariant.QUICK_SCROLL
            precise = False
            # Quick scroll scales to the window instead.
            scale_to_display = False
            c = constants.timing.consecutive
            timing = replace(
                timing,
                swipe_max_interval=c.QUICK_SWIPE_MAX_INTERVAL,
                tick_interval_max=c.QUICK_TICK_INTERVAL_MAX,
                swipe_min_tick_speed=c.QUICK_SWIPE_MIN_TICK_SPEED,
            )
            fast_scroll_curve = FastScrollSpeedupCurve(*constants.timing.fast_scroll.QUICK_CURVE)
        elif use_precise_mod:
            if override is None and baseline.is_animated:
                override = CurveVariant.PRECISE_SCROLL
            precise = False
            scale_to_display = False
            fast_scroll_curve = None

        variant = override if override is not None else baseline
        logger.debug("Resolved overrides for %s/%s: %s -> %s", effect.value, context.input.value,
                     baseline.value, variant.value)

        return ScrollOverrides(
            baseline_variant=baseline,
            variant=variant,
            speed=speed,
            precise=precise,
            scale_to_display=scale_to_display,
            use_quick_mod=use_quick_mod,
            use_precise_mod=use_precise_mod,
            fast_scroll_curve=fast_scroll_curve,
            timing=timing,
            animation_curve_override=override,
        )
