"""
Motion planning: profiles, constraints and trajectories.

A MotionProfile times one-dimensional travel; a Trajectory times travel along
a Path by keying a profile on arc length.
"""

from motionctl.motion.constraints import (
    AccelerationConstraint,
    AngularVelocityConstraint,
    CentripetalVelocityConstraint,
    GenericConstraints,
    MinVelocityConstraint,
    TranslationalAccelerationConstraint,
    TranslationalVelocityConstraint,
    VelocityConstraint,
)
from motionctl.motion.generator import (
    MotionProfileGenerator,
    generate_path_constrained_profile,
    generate_simple_motion_profile,
)
from motionctl.motion.profile import MotionProfile, MotionSegment, MotionState
from motionctl.motion.trajectory import (
    Trajectory,
    TrajectoryGenerator,
    TrajectorySample,
    generate_trajectory,
)

__all__ = [
    # Profiles
    "MotionState",
    "MotionSegment",
    "MotionProfile",
    "MotionProfileGenerator",
    "generate_simple_motion_profile",
    "generate_path_constrained_profile",
    # Constraints
    "VelocityConstraint",
    "AccelerationConstraint",
    "TranslationalVelocityConstraint",
    "CentripetalVelocityConstraint",
    "AngularVelocityConstraint",
    "MinVelocityConstraint",
    "TranslationalAccelerationConstraint",
    "GenericConstraints",
    # Trajectories
    "Trajectory",
    "TrajectorySample",
    "TrajectoryGenerator",
    "generate_trajectory",
]
