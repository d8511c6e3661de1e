"""Unit tests for ScrollTune constants.

Validates that the constant tables cover every curve variant and tier the core
can select, and that validation rejects inconsistent values.
"""

import unittest

from scrolltune import constants
from scrolltune.constants.acceleration import AnchorTableConstants, CurveSolverConstants
from scrolltune.constants.timing import FastScrollConstants
from scrolltune.core.model import CurveVariant, SmoothnessTier, SpeedTier, TOUCH_DRIVER_VARIANTS

BASELINE_VARIANTS = {
    CurveVariant.NONE, CurveVariant.VERY_LOW_INERTIA, CurveVariant.LOW_INERTIA,
    CurveVariant.HIGH_INERTIA, CurveVariant.HIGH_INERTIA_PLUS_TRACKPAD_SIM,
} | TOUCH_DRIVER_VARIANTS


class TestConstants(unittest.TestCase):
    """Tests for validating ScrollTune constants."""

    def test_app_constants(self):
        self.assertEqual(constants.app.APP_NAME, "ScrollTune")
        self.assertTrue(constants.app.VERSION)

    def test_anchor_tables_cover_every_smoothness_tier(self):
        for tier in SmoothnessTier:
            self.assertIn(tier.value, constants.acceleration.anchors.TABLES)
        self.assertIn("touch_driver", constants.acceleration.anchors.TABLES)

    def test_tier_positions_cover_non_system_speeds(self):
        positions = constants.acceleration.anchors.TIER_POSITIONS
        for tier in SpeedTier:
            if tier is SpeedTier.SYSTEM:
                self.assertNotIn(tier.value, positions)
            else:
                self.assertIn(tier.value, positions)

    def test_timing_tables_cover_baseline_variants(self):
        consecutive = constants.timing.consecutive
        for variant in BASELINE_VARIANTS:
            self.assertIn(variant.value, consecutive.TICK_INTERVAL_MAX)
            self.assertIn(variant.value, consecutive.SWIPE_MAX_INTERVAL)
            self.assertIn(variant.value, consecutive.SWIPE_MIN_TICK_SPEED)
            self.assertIn(variant.value, constants.timing.fast_scroll.CURVES)

    def test_quick_overrides(self):
        consecutive = constants.timing.consecutive
        self.assertEqual(consecutive.QUICK_SWIPE_MAX_INTERVAL, 0.725)
        self.assertEqual(consecutive.QUICK_TICK_INTERVAL_MAX, 0.200)
        self.assertEqual(consecutive.QUICK_SWIPE_MIN_TICK_SPEED, 12.0)
        self.assertEqual(constants.timing.fast_scroll.QUICK_CURVE, (1, 2.0, 10.0))

    def test_default_settings_are_valid_choices(self):
        defaults = constants.config.defaults
        self.assertIn(defaults.DEFAULT_SETTINGS["smooth"], defaults.SMOOTHNESS_CHOICES)
        self.assertIn(defaults.DEFAULT_SETTINGS["speed"], defaults.SPEED_CHOICES)
        self.assertEqual(set(defaults.SMOOTHNESS_CHOICES), {t.value for t in SmoothnessTier})
        self.assertEqual(set(defaults.SPEED_CHOICES), {t.value for t in SpeedTier})

    def test_validation_rejects_inverted_anchor_row(self):
        class BadTables(AnchorTableConstants):
            TABLES = {**AnchorTableConstants.TABLES,
                      "off": ((50.0, 30.0, 40.0), (40.0, 60.0, 80.0), (4.25, 3.0, 2.25), (4.25, 3.0, 2.25))}
        with self.assertRaises(ValueError):
            BadTables()

    def test_validation_rejects_zero_swipe_threshold(self):
        class BadFastScroll(FastScrollConstants):
            QUICK_CURVE = (0, 2.0, 10.0)
        with self.assertRaises(ValueError):
            BadFastScroll()

    def test_validation_rejects_non_positive_epsilon(self):
        class BadSolver(CurveSolverConstants):
            EPSILON = 0.0
        with self.assertRaises(ValueError):
            BadSolver()


if __name__ == "__main__":
    unittest.main()
