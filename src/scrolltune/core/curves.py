"""
Curve primitives for the scroll configuration core.

This module provides the numeric building blocks the rest of the core is made of:

- `BezierCurve`: a cubic bezier over a monotonic x range, evaluated as y(x) by
  inverting x(t) with a safeguarded Newton-Raphson iteration.
- `CappedBezierCurve`: a bezier stretched over [x_min, x_max] x [y_min, y_max],
  flat below its domain and linearly extrapolated above it. Used for the
  acceleration curve and for some animation duration curves.
- `CombinedLinearCurve`: piecewise-linear interpolation over evenly spaced anchors,
  used to turn a discrete speed tier into a continuous value.
- `ExponentialCurve`: normalized exponential ramp between two values.
- `CurveLookupTable`: a numpy-sampled table of a `CappedBezierCurve` for
  repeated evaluation.
"""

from __future__ import annotations
import math
from typing import Protocol, Sequence, Tuple

import numpy as np

from scrolltune import constants

Point = Tuple[float, float]


class Curve(Protocol):
    """Anything that maps an x value to a y value."""

    def evaluate(self, x: float) -> float:
        ...


def _power_coefficients(p0: float, p1: float, p2: float, p3: float) -> Tuple[float, float, float, float]:
    """Converts one coordinate of the control points to power basis (a, b, c, d) with B(t) = at^3 + bt^2 + ct + d."""
    a = p3 - 3.0 * p2 + 3.0 * p1 - p0
    b = 3.0 * (p2 - 2.0 * p1 + p0)
    c = 3.0 * (p1 - p0)
    return a, b, c, p0


class BezierCurve:
    """
    Cubic bezier curve used as a function y(x).

    The x coordinates of the control points must be non-decreasing, which
    makes x(t) monotonic and the inversion well defined.

    Attributes:
        control_points: The four control points.
        epsilon: Tolerance on x when solving for t.
        max_iterations: Hard cap on solver iterations.
    """

    def __init__(self, control_points: Sequence[Point],
                 epsilon: float = constants.acceleration.solver.EPSILON,
                 max_iterations: int = constants.acceleration.solver.MAX_ITERATIONS) -> None:
        if len(control_points) != 4:
            raise ValueError(f"A cubic bezier needs 4 control points, got {len(control_points)}")
        points = tuple((float(x), float(y)) for x, y in control_points)
        xs = [p[0] for p in points]
        if any(later < earlier for earlier, later in zip(xs, xs[1:])):
            raise ValueError(f"Control point x coordinates must be non-decreasing, got {xs}")
        if xs[0] == xs[3]:
            raise ValueError("Bezier x range must not be empty")
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        self.control_points: Tuple[Point, ...] = points
        self.epsilon = epsilon
        self.max_iterations = max_iterations
        self._xc = _power_coefficients(*xs)
        self._yc = _power_coefficients(*(p[1] for p in points))

    def __repr__(self) -> str:
        return f"BezierCurve({list(self.control_points)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BezierCurve):
            return NotImplemented
        return self.control_points == other.control_points

    def __hash__(self) -> int:
        return hash(self.control_points)

    @property
    def x_range(self) -> Tuple[float, float]:
        return self.control_points[0][0], self.control_points[3][0]

    # --- Parametric evaluation ---

    @staticmethod
    def _value(c: Tuple[float, float, float, float], t: float) -> float:
        a, b, cc, d = c
        return ((a * t + b) * t + cc) * t + d

    @staticmethod
    def _derivative(c: Tuple[float, float, float, float], t: float, order: int) -> float:
        a, b, cc, _ = c
        if order == 1:
            return (3.0 * a * t + 2.0 * b) * t + cc
        if order == 2:
            return 6.0 * a * t + 2.0 * b
        return 6.0 * a

    def x_at(self, t: float) -> float:
        return self._value(self._xc, t)

    def y_at(self, t: float) -> float:
        return self._value(self._yc, t)

    def slope_at(self, t: float) -> float:
        """
        Returns dy/dx at parameter t.

        Where dx/dt vanishes (e.g. at the ends of the linear curve whose
        inner control points sit on the end points) the ratio of the first
        non-vanishing higher derivatives is used instead.
        """
        min_derivative = constants.acceleration.solver.MIN_DERIVATIVE
        for order in (1, 2, 3):
            dx = self._derivative(self._xc, t, order)
            dy = self._derivative(self._yc, t, order)
            if abs(dx) > min_derivative:
                return dy / dx
            if abs(dy) > min_derivative:
                return math.copysign(math.inf, dy)
        return 0.0

    # --- Inversion ---

    def solve_t(self, x: float) -> float:
        """
        Finds t in [0, 1] with x(t) == x, within `epsilon`.

        Newton-Raphson starting from the linear guess, with the root kept
        bracketed; a step that leaves the bracket or a flat derivative falls
        back to bisection. Terminates after `max_iterations` at the latest.
        """
        x_start, x_end = self.x_range
        if x <= x_start:
            return 0.0
        if x >= x_end:
            return 1.0

        lo, hi = 0.0, 1.0
        t = (x - x_start) / (x_end - x_start)
        min_derivative = constants.acceleration.solver.MIN_DERIVATIVE

        for _ in range(self.max_iterations):
            error = self.x_at(t) - x
            if abs(error) <= self.epsilon:
                return t
            if error > 0:
                hi = t
            else:
                lo = t
            dx = self._derivative(self._xc, t, 1)
            if abs(dx) > min_derivative:
                candidate = t - error / dx
                if lo < candidate < hi:
                    t = candidate
                    continue
            t = 0.5 * (lo + hi)
        return t

    def evaluate(self, x: float) -> float:
        """Returns y for the given x. x is clamped to the curve's x range."""
        return self.y_at(self.solve_t(x))

    def trace(self, samples: int = 100) -> Tuple[np.ndarray, np.ndarray]:
        """Samples the curve uniformly in t. Returns (xs, ys)."""
        if samples < 2:
            raise ValueError("samples must be at least 2")
        ts = np.linspace(0.0, 1.0, samples)
        xs = np.polyval(self._xc, ts)
        ys = np.polyval(self._yc, ts)
        return xs, ys


LINEAR_CURVE = BezierCurve([(0.0, 0.0), (0.0, 0.0), (1.0, 1.0), (1.0, 1.0)], epsilon=0.001)


def capped_control_points(curvature: float) -> Tuple[Point, Point, Point, Point]:
    """
    Control points of the unit-square bezier behind a `CappedBezierCurve`.

    With curvature 0 the inner points sit on the diagonal at 1/3 and 2/3 and
    the curve is the straight line. Increasing curvature moves both inner
    points towards the top-left by the same amount, mirrored about the
    anti-diagonal, so slope is concentrated at the low end. The shift
    approaches, but never reaches, 1/3, which keeps x(t) strictly increasing.
    """
    if curvature < 0 or math.isnan(curvature):
        raise ValueError(f"curvature must be >= 0, got {curvature}")
    shift = (1.0 / 3.0) * (curvature / (1.0 + curvature))
    return (
        (0.0, 0.0),
        (1.0 / 3.0 - shift, 1.0 / 3.0 + shift),
        (2.0 / 3.0 - shift, 2.0 / 3.0 + shift),
        (1.0, 1.0),
    )


class CappedBezierCurve:
    """
    Bezier curve on a bounded domain with defined behaviour outside it.

    - x < x_min: y_min (flat)
    - x_min <= x <= x_max: the bezier, scaled into [x_min, x_max] x [y_min, y_max]
    - x > x_max: the tangent line at x_max, so value and slope are continuous

    y_min may be larger than y_max, in which case the curve falls.
    """

    def __init__(self, x_min: float, x_max: float, y_min: float, y_max: float, curvature: float,
                 epsilon: float = constants.acceleration.solver.EPSILON) -> None:
        if not x_min < x_max:
            raise ValueError(f"x_min must be smaller than x_max, got {x_min} and {x_max}")
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.y_min = float(y_min)
        self.y_max = float(y_max)
        self.curvature = float(curvature)
        self.bezier = BezierCurve(capped_control_points(self.curvature), epsilon=epsilon)
        self._x_span = self.x_max - self.x_min
        self._y_span = self.y_max - self.y_min
        self.slope_at_max: float = self.bezier.slope_at(1.0) * self._y_span / self._x_span

    def __repr__(self) -> str:
        return (f"CappedBezierCurve(x=[{self.x_min:.4g}, {self.x_max:.4g}], "
                f"y=[{self.y_min:.4g}, {self.y_max:.4g}], curvature={self.curvature:.4g})")

    @property
    def epsilon(self) -> float:
        return self.bezier.epsilon

    def normalize_x(self, x: float) -> float:
        return (x - self.x_min) / self._x_span

    def evaluate(self, x: float) -> float:
        if x < self.x_min:
            return self.y_min
        if x > self.x_max:
            return self.y_max + self.slope_at_max * (x - self.x_max)
        t = self.bezier.solve_t(self.normalize_x(x))
        return self.y_min + self.bezier.y_at(t) * self._y_span

    def derivative(self, x: float) -> float:
        """dy/dx at x, using the same piecewise rule as `evaluate`."""
        if x < self.x_min:
            return 0.0
        if x > self.x_max:
            return self.slope_at_max
        t = self.bezier.solve_t(self.normalize_x(x))
        return self.bezier.slope_at(t) * self._y_span / self._x_span

    def lookup_table(self, samples: int = constants.acceleration.solver.DEFAULT_LOOKUP_SAMPLES) -> CurveLookupTable:
        return CurveLookupTable(self, samples)


class CurveLookupTable:
    """
    Precomputed samples of a `CappedBezierCurve`.

    Samples are taken uniformly in t, so every table point lies exactly on
    the curve, together with the exact slope there. Lookups interpolate with
    cubic Hermite segments, which keeps the table within the curve's epsilon
    of the root-finder path. Outside the domain the same flat / extrapolated
    rule as the source curve applies.
    """

    def __init__(self, curve: CappedBezierCurve, samples: int) -> None:
        bezier = curve.bezier
        ts = np.linspace(0.0, 1.0, samples)
        xs_n, ys_n = bezier.trace(samples)
        x_span = curve.x_max - curve.x_min
        y_span = curve.y_max - curve.y_min
        self.curve = curve
        self.xs: np.ndarray = curve.x_min + xs_n * x_span
        self.ys: np.ndarray = curve.y_min + ys_n * y_span
        self.slopes: np.ndarray = np.fromiter((bezier.slope_at(float(t)) for t in ts), dtype=float,
                                              count=samples) * (y_span / x_span)
        # Pin the ends so the table matches the curve exactly at the seams.
        self.xs[0], self.xs[-1] = curve.x_min, curve.x_max
        self.ys[0], self.ys[-1] = curve.y_min, curve.y_max

    def evaluate(self, x: float) -> float:
        c = self.curve
        if x < c.x_min:
            return c.y_min
        if x > c.x_max:
            return c.y_max + c.slope_at_max * (x - c.x_max)
        i = int(np.searchsorted(self.xs, x, side="right")) - 1
        i = min(max(i, 0), len(self.xs) - 2)
        x0, x1 = self.xs[i], self.xs[i + 1]
        h = x1 - x0
        s = (x - x0) / h
        s2 = s * s
        s3 = s2 * s
        return float((2 * s3 - 3 * s2 + 1) * self.ys[i]
                     + (s3 - 2 * s2 + s) * h * self.slopes[i]
                     + (3 * s2 - 2 * s3) * self.ys[i + 1]
                     + (s3 - s2) * h * self.slopes[i + 1])


class CombinedLinearCurve:
    """
    Piecewise-linear curve through evenly spaced anchors on [0, 1].

    With three anchors they sit at 0.0, 0.5 and 1.0. Inputs outside [0, 1]
    are clamped to the end anchors.
    """

    def __init__(self, y_values: Sequence[float]) -> None:
        if len(y_values) < 2:
            raise ValueError("CombinedLinearCurve needs at least two anchors")
        self.y_values = np.asarray(y_values, dtype=float)
        self.x_values = np.linspace(0.0, 1.0, len(self.y_values))

    def __repr__(self) -> str:
        return f"CombinedLinearCurve({self.y_values.tolist()!r})"

    def evaluate(self, x: float) -> float:
        return float(np.interp(x, self.x_values, self.y_values))


class ExponentialCurve:
    """
    Exponential ramp from `start` at x=0 to `end` at x=1.

    The shape is (e^(kx) - 1) / (e^k - 1) for curvature k > 0, and a straight
    line for k == 0. x is clamped to [0, 1].
    """

    def __init__(self, start: float, end: float, curvature: float) -> None:
        if curvature < 0:
            raise ValueError(f"curvature must be >= 0, got {curvature}")
        self.start = float(start)
        self.end = float(end)
        self.curvature = float(curvature)

    def __repr__(self) -> str:
        return f"ExponentialCurve({self.start}, {self.end}, curvature={self.curvature})"

    def evaluate(self, x: float) -> float:
        x = min(max(x, 0.0), 1.0)
        if self.curvature == 0.0:
            shaped = x
        else:
            shaped = math.expm1(x * self.curvature) / math.expm1(self.curvature)
        return self.start + shaped * (self.end - self.start)
