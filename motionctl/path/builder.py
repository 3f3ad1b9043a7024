"""Fluent construction of Paths from a start pose."""

from __future__ import annotations

from motionctl.config import PATH_HEADING_TOLERANCE_RAD
from motionctl.geometry import Angle, Pose2d, Vector2d
from motionctl.path.path import Path
from motionctl.path.segments import CurveSegment, LineSegment, QuinticSplineSegment
from motionctl.utils.errors import GeometryError


class PathBuilder:
    """
    Accumulates line and spline segments starting at a pose.

    Example:
        path = (
            PathBuilder(Pose2d())
            .line_to(Vector2d(10.0, 0.0))
            .spline_to(Vector2d(30.0, 10.0), Angle.deg(90.0))
            .build()
        )
    """

    def __init__(
        self,
        start_pose: Pose2d,
        heading_tolerance: float = PATH_HEADING_TOLERANCE_RAD,
    ):
        self.start_pose = start_pose
        self.heading_tolerance = heading_tolerance
        self._segments: list[CurveSegment] = []
        self._position = start_pose.position
        self._heading = start_pose.heading

    @property
    def current_pose(self) -> Pose2d:
        """Where the next segment will begin."""
        return Pose2d(self._position, self._heading)

    def _add(self, segment: CurveSegment) -> PathBuilder:
        self._segments.append(segment)
        self._position = segment.end()
        self._heading = segment.end_heading()
        return self

    def line_to(self, end: Vector2d) -> PathBuilder:
        return self._add(LineSegment(self._position, end))

    def forward(self, distance: float) -> PathBuilder:
        """Straight line of the given length along the current heading."""
        return self.line_to(self._position + Vector2d.polar(distance, self._heading))

    def spline_to(self, end: Vector2d, end_heading: Angle) -> PathBuilder:
        """Quintic spline leaving along the current heading and arriving at end_heading."""
        return self._add(
            QuinticSplineSegment(self._position, self._heading, end, end_heading)
        )

    def build(self) -> Path:
        """
        Build the immutable Path.

        Raises:
            GeometryError: If nothing was added, if the first segment does not
                leave along the start heading, or on a join discontinuity.
        """
        if not self._segments:
            raise GeometryError("PathBuilder has no segments")
        first_heading = self._segments[0].start_heading()
        jump = abs((first_heading - self.start_pose.heading).norm_delta().radians)
        if jump > self.heading_tolerance:
            raise GeometryError(
                f"First segment leaves at {first_heading.to(self.start_pose.heading.units)}, "
                f"start pose heading is {self.start_pose.heading}"
            )
        return Path(self._segments, heading_tolerance=self.heading_tolerance)


def build_path(start_pose: Pose2d) -> PathBuilder:
    """Begin a path at start_pose."""
    return PathBuilder(start_pose)
