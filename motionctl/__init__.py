"""
motionctl Python Package

Motion planning and actuator control for planar mobile mechanisms.

Key components:
- Vector2d, Angle, Pose2d: immutable planar geometry
- build_path / Path: G1-continuous paths of lines and quintic splines
- generate_simple_motion_profile / generate_path_constrained_profile: 1-D
  time-optimal profiles under velocity and acceleration limits
- generate_trajectory / Trajectory: a Path timed by an arc-length profile
- Motor / MotorGroup: PID + feedforward control of encoder-equipped actuators
"""

from ._version import __version__
from .geometry import Angle, AngleUnit, Pose2d, Vector2d
from .hardware import Motor, MotorDevice, MotorGroup, RotationUnit, RunMode
from .motion import (
    GenericConstraints,
    MotionProfile,
    MotionState,
    Trajectory,
    generate_path_constrained_profile,
    generate_simple_motion_profile,
    generate_trajectory,
)
from .path import Path, build_path
from .utils.errors import (
    ConfigurationError,
    GeometryError,
    MotionError,
    MotorGroupError,
    ProfileError,
)

__all__ = [
    "__version__",
    "Angle",
    "AngleUnit",
    "Vector2d",
    "Pose2d",
    "Path",
    "build_path",
    "MotionState",
    "MotionProfile",
    "generate_simple_motion_profile",
    "generate_path_constrained_profile",
    "GenericConstraints",
    "Trajectory",
    "generate_trajectory",
    "Motor",
    "MotorDevice",
    "MotorGroup",
    "RotationUnit",
    "RunMode",
    "MotionError",
    "GeometryError",
    "ProfileError",
    "ConfigurationError",
    "MotorGroupError",
]
