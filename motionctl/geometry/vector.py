"""Immutable 2D vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from motionctl.geometry.angle import Angle
from motionctl.utils.numeric import EPSILON, clamp, epsilon_equals


@dataclass(frozen=True, slots=True)
class Vector2d:
    """A 2D vector (x, y)."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def polar(cls, r: float, theta: Angle) -> Vector2d:
        """Cartesian vector from polar coordinates (r, theta)."""
        return cls(r * theta.cos(), r * theta.sin())

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Vector2d:
        return cls(float(arr[0]), float(arr[1]))

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def angle(self) -> Angle:
        return Angle.rad(math.atan2(self.y, self.x))

    def angle_between(self, other: Vector2d) -> Angle:
        """Unsigned angle between two vectors, in [0, π]."""
        denom = self.norm() * other.norm()
        if denom == 0.0:
            raise ValueError("Angle between zero-length vectors is undefined")
        return Angle.rad(math.acos(clamp(self.dot(other) / denom, -1.0, 1.0)))

    def __add__(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2d:
        return Vector2d(scalar * self.x, scalar * self.y)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2d:
        return Vector2d(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2d:
        return Vector2d(-self.x, -self.y)

    def dot(self, other: Vector2d) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2d) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def dist_to(self, other: Vector2d) -> float:
        return (self - other).norm()

    def project_onto(self, other: Vector2d) -> Vector2d:
        return other * (self.dot(other) / other.dot(other))

    def normalized(self) -> Vector2d:
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self / n

    def rotated(self, angle: Angle) -> Vector2d:
        c = angle.cos()
        s = angle.sin()
        return Vector2d(self.x * c - self.y * s, self.x * s + self.y * c)

    def epsilon_equals(self, other: Vector2d, epsilon: float = EPSILON) -> bool:
        return epsilon_equals(self.x, other.x, epsilon) and epsilon_equals(
            self.y, other.y, epsilon
        )

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"
