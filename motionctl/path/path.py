"""Continuous paths composed of curve segments."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterator, Sequence

import numpy as np

from motionctl.config import PATH_HEADING_TOLERANCE_RAD
from motionctl.geometry import Angle, Pose2d, Vector2d
from motionctl.path.segments import CurveSegment
from motionctl.utils.errors import GeometryError

logger = logging.getLogger(__name__)


class Path:
    """
    Immutable, G1-continuous sequence of curve segments.

    Arc length s over [0, length] is the single coordinate used by profile and
    trajectory generation. Queries clamp s into range.

    Raises:
        GeometryError: If there are no segments, a segment has non-positive
            length, or the heading jumps by more than heading_tolerance at a join.
    """

    def __init__(
        self,
        segments: Sequence[CurveSegment],
        heading_tolerance: float = PATH_HEADING_TOLERANCE_RAD,
    ):
        if not segments:
            raise GeometryError("A path needs at least one segment")
        for i, segment in enumerate(segments):
            if not segment.length > 0.0:
                raise GeometryError(f"Segment {i} has non-positive length")

        for i in range(1, len(segments)):
            prev_heading = segments[i - 1].end_heading()
            next_heading = segments[i].start_heading()
            jump = abs((next_heading - prev_heading).norm_delta().radians)
            if jump > heading_tolerance:
                raise GeometryError(
                    f"Heading discontinuity of {Angle.rad(jump).degrees:.3f}° "
                    f"between segments {i - 1} and {i}"
                )

        self._segments: tuple[CurveSegment, ...] = tuple(segments)
        lengths = np.array([seg.length for seg in self._segments], dtype=np.float64)
        # _starts[i] is the arc length at which segment i begins
        self._starts: list[float] = [0.0] + np.cumsum(lengths)[:-1].tolist()
        self._length = float(np.sum(lengths))
        logger.debug(
            "Path built: %d segment(s), length=%.4f", len(self._segments), self._length
        )

    @property
    def length(self) -> float:
        return self._length

    @property
    def segments(self) -> tuple[CurveSegment, ...]:
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[CurveSegment]:
        return iter(self._segments)

    def segment_at(self, s: float) -> tuple[CurveSegment, float]:
        """Segment containing arc length s and the local arc length within it."""
        s = min(max(float(s), 0.0), self._length)
        idx = max(0, min(bisect_right(self._starts, s) - 1, len(self._segments) - 1))
        segment = self._segments[idx]
        return segment, min(s - self._starts[idx], segment.length)

    def position(self, s: float) -> Vector2d:
        segment, local = self.segment_at(s)
        return segment.position(local)

    def tangent_heading(self, s: float) -> Angle:
        segment, local = self.segment_at(s)
        return segment.tangent_heading(local)

    def tangent(self, s: float) -> Vector2d:
        segment, local = self.segment_at(s)
        return segment.tangent(local)

    def curvature(self, s: float) -> float:
        segment, local = self.segment_at(s)
        return segment.curvature(local)

    def get(self, s: float) -> Pose2d:
        """Pose at arc length s, heading along the tangent."""
        segment, local = self.segment_at(s)
        return Pose2d(segment.position(local), segment.tangent_heading(local))

    def start(self) -> Pose2d:
        first = self._segments[0]
        return Pose2d(first.start(), first.start_heading())

    def end(self) -> Pose2d:
        last = self._segments[-1]
        return Pose2d(last.end(), last.end_heading())

    def __repr__(self) -> str:
        return f"Path(segments={len(self._segments)}, length={self._length:.4f})"
