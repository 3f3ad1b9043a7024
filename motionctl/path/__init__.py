"""
Path geometry: curve segments composed into arc-length parameterized paths.
"""

from motionctl.path.builder import PathBuilder, build_path
from motionctl.path.path import Path
from motionctl.path.segments import CurveSegment, LineSegment, QuinticSplineSegment

__all__ = [
    "CurveSegment",
    "LineSegment",
    "QuinticSplineSegment",
    "Path",
    "PathBuilder",
    "build_path",
]
