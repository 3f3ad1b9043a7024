"""Planar rigid-body poses."""

from __future__ import annotations

from dataclasses import dataclass, field

from motionctl.geometry.angle import Angle
from motionctl.geometry.vector import Vector2d
from motionctl.utils.numeric import EPSILON


@dataclass(frozen=True, slots=True)
class Pose2d:
    """Position plus heading."""

    position: Vector2d = field(default_factory=Vector2d)
    heading: Angle = field(default_factory=Angle)

    @classmethod
    def of(cls, x: float, y: float, heading: Angle | None = None) -> Pose2d:
        return cls(Vector2d(x, y), heading if heading is not None else Angle())

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def heading_vec(self) -> Vector2d:
        """Unit vector pointing along the heading."""
        return Vector2d.polar(1.0, self.heading)

    def __add__(self, other: Pose2d) -> Pose2d:
        return Pose2d(self.position + other.position, self.heading + other.heading)

    def __sub__(self, other: Pose2d) -> Pose2d:
        return Pose2d(self.position - other.position, self.heading - other.heading)

    def epsilon_equals(self, other: Pose2d, epsilon: float = EPSILON) -> bool:
        return self.position.epsilon_equals(
            other.position, epsilon
        ) and self.heading.epsilon_equals(other.heading, epsilon)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.heading.degrees:.3f}°)"
