"""
Constants for the scroll acceleration curve.

The anchor tables give the value of each curve parameter at the three speed
tiers (low, medium, high). Values between the tiers are linearly interpolated.
Sensitivities are in pixels per tick, curvature is dimensionless.
"""
from typing import Final, Dict, Tuple

Triple = Tuple[float, float, float]


class AnchorTableConstants:
    """
    Per-context anchor tables.

    Each entry maps to (min_sens, max_sens, curvature, curvature_precise).
    Earlier tunings of the "regular" and "high" tables started lower
    ((20, 40, ...) and (30, ...)); those were dropped when the tiers were
    re-spaced.
    """
    TABLES: Final[Dict[str, Tuple[Triple, Triple, Triple, Triple]]] = {
        "touch_driver": ((45.0, 60.0, 90.0), (90.0, 120.0, 180.0), (0.25, 0.0, 0.0), (0.75, 0.75, 0.25)),
        # Same curvature whether precise or not, it felt best that way.
        "off": ((20.0, 30.0, 40.0), (40.0, 60.0, 80.0), (4.25, 3.0, 2.25), (4.25, 3.0, 2.25)),
        "low": ((30.0, 60.0, 120.0), (90.0, 120.0, 180.0), (0.25, 0.0, 0.0), (0.75, 0.75, 0.25)),
        "regular": ((30.0, 60.0, 120.0), (90.0, 120.0, 180.0), (0.25, 0.0, 0.0), (0.75, 0.75, 0.25)),
        "high": ((60.0, 90.0, 150.0), (120.0, 180.0, 240.0), (0.0, 0.0, 0.0), (1.5, 1.25, 0.75)),
    }

    # Position of each speed tier on the interpolation axis.
    TIER_POSITIONS: Final[Dict[str, float]] = {
        "low": 0.0,
        "medium": 0.5,
        "high": 1.0,
    }

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if set(self.TABLES) != {"touch_driver", "off", "low", "regular", "high"}:
            raise ValueError("TABLES must define touch_driver, off, low, regular and high")
        for name, table in self.TABLES.items():
            if len(table) != 4 or any(len(row) != 3 for row in table):
                raise ValueError(f"TABLES['{name}'] must hold four rows of three anchors")
            min_row, max_row, curv_row, curv_precise_row = table
            if any(lo > hi for lo, hi in zip(min_row, max_row)):
                raise ValueError(f"TABLES['{name}'] min sensitivity exceeds max sensitivity")
            if any(c < 0 for c in curv_row + curv_precise_row):
                raise ValueError(f"TABLES['{name}'] curvature must be non-negative")
        positions = sorted(self.TIER_POSITIONS.values())
        if positions != [0.0, 0.5, 1.0]:
            raise ValueError("TIER_POSITIONS must be 0.0, 0.5 and 1.0")


class FixedAnchorConstants:
    """Anchors that bypass the tier tables for the quick and precise input modifications."""
    # Quick: sensitivities scale with the display extent along the scroll axis.
    QUICK_MIN_SENS_FACTOR: Final[float] = 0.5
    QUICK_MAX_SENS_FACTOR: Final[float] = 1.5
    QUICK_CURVATURE: Final[float] = 0.0

    PRECISE_MOD_MIN_SENS: Final[float] = 1.0
    PRECISE_MOD_MAX_SENS: Final[float] = 20.0
    PRECISE_MOD_CURVATURE: Final[float] = 2.0

    # Replaces min sensitivity when the user's precise setting is on.
    PRECISE_MIN_SENS: Final[float] = 10.0

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not (0 < self.QUICK_MIN_SENS_FACTOR <= self.QUICK_MAX_SENS_FACTOR):
            raise ValueError("QUICK sensitivity factors must be positive and ordered")
        if not (0 < self.PRECISE_MOD_MIN_SENS <= self.PRECISE_MOD_MAX_SENS):
            raise ValueError("PRECISE_MOD sensitivities must be positive and ordered")
        if self.QUICK_CURVATURE < 0 or self.PRECISE_MOD_CURVATURE < 0:
            raise ValueError("Curvatures must be non-negative")
        if self.PRECISE_MIN_SENS <= 0:
            raise ValueError("PRECISE_MIN_SENS must be positive")


class DisplayScalingConstants:
    """Constants for scaling max sensitivity to the size of the display."""
    REFERENCE_WIDTH: Final[int] = 1920
    REFERENCE_HEIGHT: Final[int] = 1080
    # Share of max sensitivity that follows the display size.
    BLEND_WEIGHT: Final[float] = 0.1

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.REFERENCE_WIDTH <= 0 or self.REFERENCE_HEIGHT <= 0:
            raise ValueError("Reference display extent must be positive")
        if not (0.0 <= self.BLEND_WEIGHT <= 1.0):
            raise ValueError("BLEND_WEIGHT must be between 0 and 1")


class CurveSolverConstants:
    """Constants for the bezier root finder."""
    # Tolerance on the normalized x axis.
    EPSILON: Final[float] = 1e-6
    MAX_ITERATIONS: Final[int] = 64
    # Below this |dx/dt| a newton step is not attempted.
    MIN_DERIVATIVE: Final[float] = 1e-9
    DEFAULT_LOOKUP_SAMPLES: Final[int] = 2048

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.EPSILON <= 0:
            raise ValueError("EPSILON must be positive")
        if self.MAX_ITERATIONS < 1:
            raise ValueError("MAX_ITERATIONS must be at least 1")
        if self.MIN_DERIVATIVE <= 0:
            raise ValueError("MIN_DERIVATIVE must be positive")
        if self.DEFAULT_LOOKUP_SAMPLES < 2:
            raise ValueError("DEFAULT_LOOKUP_SAMPLES must be at least 2")


class AccelerationConstants:
    """Container for acceleration-related constant groups."""
    def __init__(self) -> None:
        self.anchors = AnchorTableConstants()
        self.fixed = FixedAnchorConstants()
        self.display = DisplayScalingConstants()
        self.solver = CurveSolverConstants()

# Singleton instance for easy access
acceleration = AccelerationConstants()
