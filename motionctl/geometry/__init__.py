"""
Planar geometry value types.

All types are immutable; angles carry their unit so degrees and radians are
never mixed silently.
"""

from motionctl.geometry.angle import Angle, AngleUnit
from motionctl.geometry.pose import Pose2d
from motionctl.geometry.vector import Vector2d

__all__ = [
    "Angle",
    "AngleUnit",
    "Vector2d",
    "Pose2d",
]
