"""
Acceleration curve construction.

The acceleration curve maps scroll wheel tick speed (ticks per second, x axis)
to sensitivity (pixels per tick, y axis). It is a `CappedBezierCurve`:

- Below x_min acceleration is off and every tick moves y_min pixels. x_min is
  the slowest tick speed that still feels consecutive (1 / tick_interval_max),
  so isolated ticks are never accelerated.
- Between x_min and x_max the bezier rises to y_max. x_max is the tick speed
  at which acceleration ends (1 / tick_interval_acceleration_end).
- Above x_max the curve keeps going along its tangent, so very fast scrolling
  still gets reasonable values.

Curvature raises sensitivity for medium speeds, which makes scrolling feel
more comfortable and accurate, especially with a low min sensitivity.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from scrolltune import constants
from scrolltune.core.curves import CappedBezierCurve, CombinedLinearCurve
from scrolltune.core.model import (
    Axis, CurveVariant, InvariantViolationError, SmoothnessTier, SpeedTier, TOUCH_DRIVER_VARIANTS,
)


logger = logging.getLogger(f"{constants.app.APP_NAME}.AccelerationCurveBuilder")

PixelExtent = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class AccelerationAnchors:
    """Sensitivity anchors of an acceleration curve, in pixels per tick."""
    min_sens: float
    max_sens: float
    curvature: float


@dataclass(frozen=True, slots=True)
class NativeAcceleration:
    """Acceleration is left to the operating system."""


@dataclass(frozen=True, slots=True)
class CustomCurve:
    """Acceleration follows `curve`. `anchors` are the values the curve was built from."""
    curve: CappedBezierCurve
    anchors: AccelerationAnchors

    def sensitivity(self, ticks_per_second: float) -> float:
        return self.curve.evaluate(ticks_per_second)


AccelerationResult = Union[NativeAcceleration, CustomCurve]


def tier_position(speed: SpeedTier) -> float:
    """Position of a speed tier on the [0, 1] interpolation axis."""
    try:
        return constants.acceleration.anchors.TIER_POSITIONS[speed.value]
    except KeyError:
        raise InvariantViolationError(f"Speed tier {speed!r} has no interpolation position") from None


def axis_extent(display_extent: PixelExtent, axis: Axis, horizontal_effect: bool = False) -> int:
    """Display extent along the scroll axis. A horizontal scroll effect scrolls along the width."""
    width, height = display_extent
    return width if (axis is Axis.HORIZONTAL or horizontal_effect) else height


class AccelerationCurveBuilder:
    """
    Builds the acceleration curve for one resolved scroll context.

    The result is a pure function of the arguments.
    """

    def build(self,
              speed: SpeedTier,
              precise: bool,
              smoothness: SmoothnessTier,
              variant: CurveVariant,
              axis: Axis,
              display_extent: Optional[PixelExtent],
              scale_to_display: bool,
              use_quick_mod: bool,
              use_precise_mod: bool,
              tick_interval_max: float,
              tick_interval_acceleration_end: float,
              horizontal_effect: bool = False) -> AccelerationResult:
        """
        Args:
            speed: Effective speed tier.
            precise: Effective precise flag.
            smoothness: Smoothness tier from the settings.
            variant: Effective animation curve variant.
            axis: Input axis of the event.
            display_extent: (width, height) of the target display, or None if unknown.
            scale_to_display: Blend max sensitivity with the display size.
            use_quick_mod: Quick input modification is in effect.
            use_precise_mod: Precise input modification is in effect.
            tick_interval_max: Longest consecutive tick gap in seconds; defines x_min.
            tick_interval_acceleration_end: Tick gap in seconds at which acceleration ends; defines x_max.
            horizontal_effect: The effect turns vertical input into horizontal scrolling.

        Returns:
            NativeAcceleration when the system speed applies, otherwise a CustomCurve.
        """
        if speed is SpeedTier.SYSTEM and not use_quick_mod and not use_precise_mod:
            return NativeAcceleration()

        if tick_interval_max <= 0 or tick_interval_acceleration_end <= 0:
            raise InvariantViolationError("Tick intervals must be positive")

        extent = None
        if display_extent is not None:
            extent = axis_extent(display_extent, axis, horizontal_effect)

        anchors = self.select_anchors(speed, precise, smoothness, variant, axis, extent,
                                      use_quick_mod, use_precise_mod, horizontal_effect)
        if scale_to_display:
            anchors = self.scale_to_display(anchors, axis, extent)

        curve = CappedBezierCurve(
            x_min=1.0 / tick_interval_max,
            x_max=1.0 / tick_interval_acceleration_end,
            y_min=anchors.min_sens,
            y_max=anchors.max_sens,
            curvature=anchors.curvature,
        )
        logger.debug("Built acceleration curve %r", curve)
        return CustomCurve(curve=curve, anchors=anchors)

    def select_anchors(self,
                       speed: SpeedTier,
                       precise: bool,
                       smoothness: SmoothnessTier,
                       variant: CurveVariant,
                       axis: Axis,
                       extent: Optional[int],
                       use_quick_mod: bool,
                       use_precise_mod: bool,
                       horizontal_effect: bool = False) -> AccelerationAnchors:
        """Anchors before display scaling. `extent` is the display extent along the scroll axis."""
        fixed = constants.acceleration.fixed

        if use_quick_mod:
            if extent is None:
                extent = self._reference_extent(axis, horizontal_effect)
            return AccelerationAnchors(
                min_sens=extent * fixed.QUICK_MIN_SENS_FACTOR,
                max_sens=extent * fixed.QUICK_MAX_SENS_FACTOR,
                curvature=fixed.QUICK_CURVATURE,
            )
        if use_precise_mod:
            return AccelerationAnchors(
                min_sens=fixed.PRECISE_MOD_MIN_SENS,
                max_sens=fixed.PRECISE_MOD_MAX_SENS,
                curvature=fixed.PRECISE_MOD_CURVATURE,
            )

        if variant in TOUCH_DRIVER_VARIANTS:
            table_name = "touch_driver"
        elif smoothness in (SmoothnessTier.OFF, SmoothnessTier.LOW, SmoothnessTier.REGULAR, SmoothnessTier.HIGH):
            table_name = smoothness.value
        else:
            raise InvariantViolationError(f"Unhandled smoothness tier: {smoothness!r}")

        min_row, max_row, curvature_row, curvature_precise_row = constants.acceleration.anchors.TABLES[table_name]
        position = tier_position(speed)
        min_sens = CombinedLinearCurve(min_row).evaluate(position)
        max_sens = CombinedLinearCurve(max_row).evaluate(position)
        curvature = CombinedLinearCurve(curvature_precise_row if precise else curvature_row).evaluate(position)

        if precise:
            min_sens = fixed.PRECISE_MIN_SENS

        return AccelerationAnchors(min_sens=min_sens, max_sens=max_sens, curvature=curvature)

    def scale_to_display(self, anchors: AccelerationAnchors, axis: Axis, extent: Optional[int]) -> AccelerationAnchors:
        """
        Blends max sensitivity with the display size relative to a 1920x1080 reference.

        The reference follows the input axis, even when a horizontal scroll
        effect measures `extent` along the width. Without a known extent the
        anchors are returned unchanged.
        """
        if extent is None:
            return anchors
        weight = constants.acceleration.display.BLEND_WEIGHT
        ratio = extent / self._reference_extent(axis)
        max_sens = anchors.max_sens * (1.0 - weight) + anchors.max_sens * weight * ratio
        return AccelerationAnchors(min_sens=anchors.min_sens, max_sens=max_sens, curvature=anchors.curvature)

    @staticmethod
    def _reference_extent(axis: Axis, horizontal_effect: bool = False) -> int:
        display = constants.acceleration.display
        if axis is Axis.HORIZONTAL or horizontal_effect:
            return display.REFERENCE_WIDTH
        return display.REFERENCE_HEIGHT
