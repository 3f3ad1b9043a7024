"""
Parametric curve segments, each parameterized by its own arc length.

Every segment exposes position, tangent heading and signed curvature as
functions of arc length s in [0, length]. Out-of-range s is clamped so the
endpoints are always well defined for samplers.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

import numpy as np
from numpy.polynomial import Polynomial
from scipy.integrate import cumulative_trapezoid

from motionctl.config import SPLINE_ARC_SAMPLES
from motionctl.geometry import Angle, Vector2d
from motionctl.utils.errors import GeometryError

logger = logging.getLogger(__name__)


class CurveSegment(ABC):
    """Base class for a single piece of a Path."""

    @property
    @abstractmethod
    def length(self) -> float:
        """Arc length of the segment (always > 0)."""
        ...

    @abstractmethod
    def position(self, s: float) -> Vector2d:
        ...

    @abstractmethod
    def tangent_heading(self, s: float) -> Angle:
        """Direction of travel at arc length s."""
        ...

    @abstractmethod
    def curvature(self, s: float) -> float:
        """Signed curvature at s, positive when turning left (1/distance)."""
        ...

    def tangent(self, s: float) -> Vector2d:
        """Unit tangent vector at s."""
        return Vector2d.polar(1.0, self.tangent_heading(s))

    def start(self) -> Vector2d:
        return self.position(0.0)

    def end(self) -> Vector2d:
        return self.position(self.length)

    def start_heading(self) -> Angle:
        return self.tangent_heading(0.0)

    def end_heading(self) -> Angle:
        return self.tangent_heading(self.length)

    def _clamp(self, s: float) -> float:
        length = self.length
        return 0.0 if s < 0.0 else length if s > length else float(s)


class LineSegment(CurveSegment):
    """Straight segment between two points."""

    def __init__(self, start: Vector2d, end: Vector2d):
        self._start = start
        self._end = end
        self._length = start.dist_to(end)
        if not self._length > 0.0:
            raise GeometryError(
                f"Line segment from {start} to {end} has non-positive length"
            )
        self._heading = (end - start).angle()

    @property
    def length(self) -> float:
        return self._length

    def position(self, s: float) -> Vector2d:
        frac = self._clamp(s) / self._length
        return self._start + (self._end - self._start) * frac

    def tangent_heading(self, s: float) -> Angle:
        return self._heading

    def curvature(self, s: float) -> float:
        return 0.0

    def end(self) -> Vector2d:
        return self._end

    def __repr__(self) -> str:
        return f"LineSegment({self._start}, {self._end})"


def _quintic_hermite(p0: float, d0: float, d1: float, p1: float) -> Polynomial:
    """Quintic through (p0, d0) at t=0 and (p1, d1) at t=1 with zero second derivatives."""
    return Polynomial(
        [
            p0,
            d0,
            0.0,
            -10.0 * p0 - 6.0 * d0 - 4.0 * d1 + 10.0 * p1,
            15.0 * p0 + 8.0 * d0 + 7.0 * d1 - 15.0 * p1,
            -6.0 * p0 - 3.0 * d0 - 3.0 * d1 + 6.0 * p1,
        ]
    )


class QuinticSplineSegment(CurveSegment):
    """
    Quintic Hermite spline between two poses.

    The first-derivative magnitude at both ends equals the chord length and the
    second derivatives vanish, so joins with neighbouring segments are G1 and
    start/end with zero curvature.

    Arc length is tabulated by integrating |P'(t)| over a dense t grid; the
    table is inverted by linear interpolation to evaluate at arc length s.
    """

    def __init__(
        self,
        start: Vector2d,
        start_heading: Angle,
        end: Vector2d,
        end_heading: Angle,
        samples: int = SPLINE_ARC_SAMPLES,
    ):
        chord = start.dist_to(end)
        if not chord > 0.0:
            raise GeometryError(f"Spline from {start} to {end} has zero chord length")

        d0 = Vector2d.polar(chord, start_heading)
        d1 = Vector2d.polar(chord, end_heading)
        self._x = _quintic_hermite(start.x, d0.x, d1.x, end.x)
        self._y = _quintic_hermite(start.y, d0.y, d1.y, end.y)
        self._dx = self._x.deriv()
        self._dy = self._y.deriv()
        self._ddx = self._dx.deriv()
        self._ddy = self._dy.deriv()
        self._start = start
        self._end = end
        self._start_heading = start_heading
        self._end_heading = end_heading

        t = np.linspace(0.0, 1.0, samples)
        speed = np.hypot(self._dx(t), self._dy(t))
        if float(np.min(speed)) <= 1e-9 * chord:
            raise GeometryError(
                f"Spline from {start} to {end} has a cusp (zero parametric speed)"
            )
        self._t_table = t
        self._s_table = cumulative_trapezoid(speed, t, initial=0.0)
        self._length = float(self._s_table[-1])
        logger.debug(
            "QuinticSplineSegment %s -> %s: chord=%.4f length=%.4f",
            start,
            end,
            chord,
            self._length,
        )

    @property
    def length(self) -> float:
        return self._length

    def _t(self, s: float) -> float:
        return float(np.interp(self._clamp(s), self._s_table, self._t_table))

    def position(self, s: float) -> Vector2d:
        t = self._t(s)
        return Vector2d(float(self._x(t)), float(self._y(t)))

    def tangent_heading(self, s: float) -> Angle:
        t = self._t(s)
        return Angle.rad(math.atan2(float(self._dy(t)), float(self._dx(t))))

    def curvature(self, s: float) -> float:
        t = self._t(s)
        dx = float(self._dx(t))
        dy = float(self._dy(t))
        ddx = float(self._ddx(t))
        ddy = float(self._ddy(t))
        speed = math.hypot(dx, dy)
        return (dx * ddy - dy * ddx) / (speed * speed * speed)

    def start(self) -> Vector2d:
        return self._start

    def end(self) -> Vector2d:
        return self._end

    def start_heading(self) -> Angle:
        return self._start_heading

    def end_heading(self) -> Angle:
        return self._end_heading

    def __repr__(self) -> str:
        return (
            f"QuinticSplineSegment({self._start}, {self._start_heading}, "
            f"{self._end}, {self._end_heading})"
        )
