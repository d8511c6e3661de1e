"""
Constants for consecutive-tick detection and the fast scroll speedup.

Tables are keyed by baseline animation curve name. Only variants that can be
selected from the smoothness setting alone (plus the touch driver curves) are
listed; the quick and precise curves only appear as overrides.
Intervals are in seconds, tick speeds in ticks per second.
"""
from typing import Final, Dict, Tuple


class ConsecutiveScrollConstants:
    """Thresholds that decide which ticks and swipes count as consecutive."""
    # 160 ms is the longest gap that still feels consecutive at all.
    TICK_INTERVAL_MAX: Final[Dict[str, float]] = {
        "none": 0.160,
        "very_low_inertia": 0.160,
        "low_inertia": 0.160,
        "high_inertia": 0.160,
        "high_inertia_plus_trackpad_sim": 0.160,
        "touch_driver": 0.160,
        "touch_driver_linear": 0.160,
    }
    SWIPE_MAX_INTERVAL: Final[Dict[str, float]] = {
        "none": 0.325,
        "very_low_inertia": 0.375,
        "low_inertia": 0.375,
        "high_inertia": 0.600,
        "high_inertia_plus_trackpad_sim": 0.600,
        "touch_driver": 0.375,
        "touch_driver_linear": 0.375,
    }
    SWIPE_MIN_TICK_SPEED: Final[Dict[str, float]] = {
        "none": 16.0,
        "very_low_inertia": 16.0,
        "low_inertia": 16.0,
        "high_inertia": 12.0,
        "high_inertia_plus_trackpad_sim": 12.0,
        "touch_driver": 16.0,
        "touch_driver_linear": 16.0,
    }
    TICK_INTERVAL_MIN: Final[float] = 0.001
    # Tick interval at which the acceleration curve reaches max sensitivity.
    TICK_INTERVAL_ACCELERATION_END: Final[float] = 0.015
    SWIPE_THRESHOLD_TICKS: Final[int] = 2
    # Most ticks a single swipe produces on a notched wheel.
    SWIPE_MAX_TICKS: Final[int] = 11

    QUICK_SWIPE_MAX_INTERVAL: Final[float] = 0.725
    QUICK_TICK_INTERVAL_MAX: Final[float] = 0.200
    QUICK_SWIPE_MIN_TICK_SPEED: Final[float] = 12.0

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        keys = set(self.TICK_INTERVAL_MAX)
        if set(self.SWIPE_MAX_INTERVAL) != keys or set(self.SWIPE_MIN_TICK_SPEED) != keys:
            raise ValueError("Consecutive scroll tables must cover the same curves")
        for table in (self.TICK_INTERVAL_MAX, self.SWIPE_MAX_INTERVAL, self.SWIPE_MIN_TICK_SPEED):
            if any(v <= 0 for v in table.values()):
                raise ValueError("Consecutive scroll thresholds must be positive")
        if not (0 < self.TICK_INTERVAL_MIN < self.TICK_INTERVAL_ACCELERATION_END < min(self.TICK_INTERVAL_MAX.values())):
            raise ValueError("TICK_INTERVAL_MIN < TICK_INTERVAL_ACCELERATION_END < TICK_INTERVAL_MAX must hold")
        if not (0 < self.TICK_INTERVAL_ACCELERATION_END < self.QUICK_TICK_INTERVAL_MAX):
            raise ValueError("QUICK_TICK_INTERVAL_MAX must exceed TICK_INTERVAL_ACCELERATION_END")
        if self.SWIPE_THRESHOLD_TICKS < 1 or self.SWIPE_MAX_TICKS < self.SWIPE_THRESHOLD_TICKS:
            raise ValueError("Swipe tick counts must satisfy 1 <= threshold <= max")
        if self.QUICK_SWIPE_MAX_INTERVAL <= 0 or self.QUICK_SWIPE_MIN_TICK_SPEED <= 0:
            raise ValueError("Quick scroll thresholds must be positive")


class FastScrollConstants:
    """Fast scroll speedup curves as (swipe_threshold, initial_speedup, exponential_speedup)."""
    CURVES: Final[Dict[str, Tuple[int, float, float]]] = {
        "none": (6, 1.4, 3.0),
        # Effectively off; the lowest smoothness should feel linear and controllable.
        "very_low_inertia": (1, 1.0, 7.5),
        "low_inertia": (3, 1.33, 7.5),
        "high_inertia": (2, 1.33, 7.5),
        "high_inertia_plus_trackpad_sim": (2, 1.33, 7.5),
        "touch_driver": (3, 1.33, 7.5),
        "touch_driver_linear": (3, 1.33, 7.5),
    }
    QUICK_CURVE: Final[Tuple[int, float, float]] = (1, 2.0, 10.0)

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name, (threshold, initial, exponential) in {**self.CURVES, "quick": self.QUICK_CURVE}.items():
            if threshold < 1:
                raise ValueError(f"Fast scroll curve '{name}' needs a swipe threshold >= 1")
            if initial <= 0 or exponential <= 0:
                raise ValueError(f"Fast scroll curve '{name}' needs positive speedups")


class TickSmoothingConstants:
    """Weights for smoothing the measured tick speed."""
    DOUBLE_EXPONENTIAL_INPUT_WEIGHT: Final[float] = 0.5
    DOUBLE_EXPONENTIAL_TREND_WEIGHT: Final[float] = 0.2
    EXPONENTIAL_INPUT_WEIGHT: Final[float] = 0.5

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("DOUBLE_EXPONENTIAL_INPUT_WEIGHT", "DOUBLE_EXPONENTIAL_TREND_WEIGHT", "EXPONENTIAL_INPUT_WEIGHT"):
            if not (0.0 < getattr(self, name) <= 1.0):
                raise ValueError(f"{name} must be in (0, 1]")


class TimingConstants:
    """Container for timing-related constant groups."""
    def __init__(self) -> None:
        self.consecutive = ConsecutiveScrollConstants()
        self.fast_scroll = FastScrollConstants()
        self.smoothing = TickSmoothingConstants()

# Singleton instance for easy access
timing = TimingConstants()
