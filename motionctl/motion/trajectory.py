"""
Trajectories: a Path timed by a MotionProfile keyed on arc length.

Pipeline:
  1. Build a Path (motionctl.path)
  2. TrajectoryGenerator evaluates the velocity/acceleration constraints along
     the path and runs the path-constrained profile generator over [0, length]
  3. Trajectory.sample(t) maps time -> arc length -> pose and derivatives
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple, Union

from motionctl.config import PROFILE_RESOLUTION, PROFILE_TOLERANCE
from motionctl.geometry import Angle, Pose2d, Vector2d
from motionctl.motion.constraints import AccelerationConstraint, VelocityConstraint
from motionctl.motion.generator import MotionProfileGenerator
from motionctl.motion.profile import MotionProfile
from motionctl.path import Path

logger = logging.getLogger(__name__)

_QUARTER_TURN = Angle.deg(90.0)

VelocityLimit = Union[VelocityConstraint, Callable[[float], float]]
AccelerationLimit = Union[AccelerationConstraint, Callable[[float], float]]


class TrajectorySample(NamedTuple):
    """Kinematic state of a trajectory at one instant."""

    time: float
    s: float  # arc length
    pose: Pose2d
    speed: float  # along the path
    tangential_accel: float
    velocity: Vector2d
    acceleration: Vector2d  # tangential + centripetal
    angular_velocity: float  # rad/s, positive counter-clockwise


class Trajectory:
    """
    Immutable pairing of a Path and an arc-length MotionProfile.

    Sampling is a pure function of time, so one instance can be shared by
    any number of readers.
    """

    def __init__(self, path: Path, profile: MotionProfile):
        self._path = path
        self._profile = profile
        self._duration = profile.duration()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def profile(self) -> MotionProfile:
        return self._profile

    def duration(self) -> float:
        return self._duration

    def sample(self, t: float) -> TrajectorySample:
        """Pose, velocity and acceleration at time t (clamped into [0, duration])."""
        t = min(max(float(t), 0.0), self._duration)
        state = self._profile.get(t)
        segment, local = self._path.segment_at(state.x)
        heading = segment.tangent_heading(local)
        curvature = segment.curvature(local)
        tangent = Vector2d.polar(1.0, heading)
        normal = tangent.rotated(_QUARTER_TURN)
        return TrajectorySample(
            time=t,
            s=state.x,
            pose=Pose2d(segment.position(local), heading),
            speed=state.v,
            tangential_accel=state.a,
            velocity=tangent * state.v,
            acceleration=tangent * state.a + normal * (curvature * state.v * state.v),
            angular_velocity=curvature * state.v,
        )

    def get(self, t: float) -> Pose2d:
        return self.sample(t).pose

    def velocity(self, t: float) -> Vector2d:
        return self.sample(t).velocity

    def acceleration(self, t: float) -> Vector2d:
        return self.sample(t).acceleration

    def start(self) -> Pose2d:
        return self.get(0.0)

    def end(self) -> Pose2d:
        return self.get(self._duration)

    def __repr__(self) -> str:
        return f"Trajectory(length={self._path.length:.4f}, duration={self._duration:.4f})"


def _position_limit(
    path: Path, constraint: VelocityLimit | AccelerationLimit
) -> Callable[[float], float]:
    if isinstance(constraint, (VelocityConstraint, AccelerationConstraint)):

        def limit(s: float) -> float:
            segment, local = path.segment_at(s)
            pose = Pose2d(segment.position(local), segment.tangent_heading(local))
            return constraint.get(pose, segment.curvature(local), s)

        return limit
    return constraint


class TrajectoryGenerator:
    """Times a Path under velocity/acceleration constraints."""

    @staticmethod
    def generate(
        path: Path,
        velocity_constraint: VelocityLimit,
        acceleration_constraint: AccelerationLimit,
        start_velocity: float = 0.0,
        end_velocity: float = 0.0,
        resolution: float = PROFILE_RESOLUTION,
        tolerance: float = PROFILE_TOLERANCE,
    ) -> Trajectory:
        """
        Generate a time-parameterized trajectory along path.

        Args:
            path: Geometry to follow
            velocity_constraint: Constraint object, or callable of arc length
            acceleration_constraint: Constraint object, or callable of arc length
            start_velocity: Path speed at s=0
            end_velocity: Path speed at s=length
            resolution: Arc-length spacing of the profile samples
            tolerance: Relative tolerance passed to the profile generator

        Raises:
            ProfileError: If no feasible profile exists
        """
        profile = MotionProfileGenerator.generate_path_constrained_profile(
            path.length,
            _position_limit(path, velocity_constraint),
            _position_limit(path, acceleration_constraint),
            start_velocity=start_velocity,
            end_velocity=end_velocity,
            resolution=resolution,
            tolerance=tolerance,
        )
        trajectory = Trajectory(path, profile)
        logger.debug("Generated %r", trajectory)
        return trajectory


generate_trajectory = TrajectoryGenerator.generate
