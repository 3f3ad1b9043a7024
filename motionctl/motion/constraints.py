"""
Velocity and acceleration constraints evaluated along a path.

Constraints are evaluated per arc-length sample with the pose and curvature
at that sample, and combined by taking the minimum.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from motionctl.config import (
    CURVATURE_EPSILON,
    DEFAULT_MAX_ACCEL,
    DEFAULT_MAX_ANG_VEL_DEG,
    DEFAULT_MAX_VEL,
)
from motionctl.geometry import Angle, Pose2d


class VelocityConstraint(ABC):
    """Upper bound on path speed at a path sample."""

    @abstractmethod
    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        ...


class AccelerationConstraint(ABC):
    """Upper bound on |tangential acceleration| at a path sample."""

    @abstractmethod
    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        ...


class TranslationalVelocityConstraint(VelocityConstraint):
    def __init__(self, max_vel: float):
        self.max_vel = max_vel

    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        return self.max_vel


class CentripetalVelocityConstraint(VelocityConstraint):
    """Keeps centripetal acceleration v²·|κ| under max_lateral_accel."""

    def __init__(self, max_lateral_accel: float):
        self.max_lateral_accel = max_lateral_accel

    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        k = abs(curvature)
        if k <= CURVATURE_EPSILON:
            return math.inf
        return math.sqrt(self.max_lateral_accel / k)


class AngularVelocityConstraint(VelocityConstraint):
    """Keeps turn rate v·|κ| under max_ang_vel."""

    def __init__(self, max_ang_vel: Angle):
        self.max_ang_vel = max_ang_vel

    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        k = abs(curvature)
        if k <= CURVATURE_EPSILON:
            return math.inf
        return self.max_ang_vel.radians / k


class MinVelocityConstraint(VelocityConstraint):
    """Most restrictive of several velocity constraints."""

    def __init__(self, constraints: Sequence[VelocityConstraint]):
        if not constraints:
            raise ValueError("MinVelocityConstraint needs at least one constraint")
        self.constraints = list(constraints)

    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        return min(c.get(pose, curvature, s) for c in self.constraints)


class TranslationalAccelerationConstraint(AccelerationConstraint):
    def __init__(self, max_accel: float):
        self.max_accel = max_accel

    def get(self, pose: Pose2d, curvature: float, s: float) -> float:
        return self.max_accel


@dataclass(frozen=True)
class GenericConstraints:
    """
    Drive constraints for a generic mechanism.

    Attributes:
        max_vel: Global speed cap (distance/s)
        max_accel: Tangential acceleration limit (distance/s²)
        max_ang_vel: Turn-rate limit
        max_lateral_accel: Centripetal acceleration limit, None to skip
    """

    max_vel: float = DEFAULT_MAX_VEL
    max_accel: float = DEFAULT_MAX_ACCEL
    max_ang_vel: Angle = field(default_factory=lambda: Angle.deg(DEFAULT_MAX_ANG_VEL_DEG))
    max_lateral_accel: float | None = None

    @property
    def velocity_constraint(self) -> VelocityConstraint:
        constraints: list[VelocityConstraint] = [
            TranslationalVelocityConstraint(self.max_vel),
            AngularVelocityConstraint(self.max_ang_vel),
        ]
        if self.max_lateral_accel is not None:
            constraints.append(CentripetalVelocityConstraint(self.max_lateral_accel))
        return MinVelocityConstraint(constraints)

    @property
    def acceleration_constraint(self) -> AccelerationConstraint:
        return TranslationalAccelerationConstraint(self.max_accel)
