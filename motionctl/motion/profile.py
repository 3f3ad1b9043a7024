"""
One-dimensional motion profiles built from constant-acceleration segments.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from motionctl.utils.errors import ProfileError


@dataclass(frozen=True, slots=True)
class MotionState:
    """Position, velocity and acceleration at one instant."""

    x: float
    v: float
    a: float = 0.0

    def get(self, dt: float) -> MotionState:
        """State after dt seconds of constant acceleration."""
        return MotionState(
            self.x + self.v * dt + 0.5 * self.a * dt * dt,
            self.v + self.a * dt,
            self.a,
        )

    def flipped(self) -> MotionState:
        return MotionState(-self.x, -self.v, -self.a)

    def __str__(self) -> str:
        return f"(x={self.x:.4f}, v={self.v:.4f}, a={self.a:.4f})"


@dataclass(frozen=True, slots=True)
class MotionSegment:
    """Constant-acceleration piece lasting dt seconds from start."""

    start: MotionState
    dt: float

    def get(self, t: float) -> MotionState:
        return self.start.get(t)

    def end(self) -> MotionState:
        return self.start.get(self.dt)

    def flipped(self) -> MotionSegment:
        return MotionSegment(self.start.flipped(), self.dt)


class MotionProfile:
    """
    Immutable, time-contiguous sequence of MotionSegments.

    Queries clamp time into [0, duration]. Generated profiles are monotonic in
    position, which makes position queries (time_at, get_at_position)
    well defined.
    """

    def __init__(self, segments: Sequence[MotionSegment]):
        if not segments:
            raise ProfileError("A motion profile needs at least one segment")
        starts: list[float] = []
        total = 0.0
        for i, segment in enumerate(segments):
            if segment.dt < 0.0 or math.isnan(segment.dt):
                raise ProfileError(f"Segment {i} has invalid duration {segment.dt}")
            starts.append(total)
            total += segment.dt
        self._segments: tuple[MotionSegment, ...] = tuple(segments)
        self._starts = starts
        self._duration = total

    @property
    def segments(self) -> tuple[MotionSegment, ...]:
        return self._segments

    @property
    def segment_start_times(self) -> list[float]:
        """Absolute start time of each segment."""
        return list(self._starts)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[MotionSegment]:
        return iter(self._segments)

    def duration(self) -> float:
        return self._duration

    def start(self) -> MotionState:
        return self._segments[0].start

    def end(self) -> MotionState:
        return self._segments[-1].end()

    def get(self, t: float) -> MotionState:
        """State at time t (clamped into [0, duration])."""
        t = min(max(float(t), 0.0), self._duration)
        idx = max(0, min(bisect_right(self._starts, t) - 1, len(self._segments) - 1))
        segment = self._segments[idx]
        return segment.get(min(t - self._starts[idx], segment.dt))

    def time_at(self, x: float) -> float:
        """
        Earliest time at which the profile reaches position x.

        x is clamped into the range covered by the profile.
        """
        direction = 1.0 if self.end().x >= self.start().x else -1.0
        target = direction * float(x)
        lo = direction * self.start().x
        hi = direction * self.end().x
        target = min(max(target, lo), hi)

        for t0, segment in zip(self._starts, self._segments):
            state = segment.start if direction > 0 else segment.start.flipped()
            end_x = state.get(segment.dt).x
            if end_x < target and segment is not self._segments[-1]:
                continue
            dx = max(0.0, target - state.x)
            disc = max(0.0, state.v * state.v + 2.0 * state.a * dx)
            denom = state.v + math.sqrt(disc)
            if denom <= 0.0:
                return t0
            return t0 + min(2.0 * dx / denom, segment.dt)
        return self._duration

    def get_at_position(self, x: float) -> MotionState:
        """State when the profile first reaches position x."""
        return self.get(self.time_at(x))

    def flipped(self) -> MotionProfile:
        """Profile mirrored about x = 0."""
        return MotionProfile([segment.flipped() for segment in self._segments])

    def __repr__(self) -> str:
        return (
            f"MotionProfile(segments={len(self._segments)}, "
            f"duration={self._duration:.4f}, start={self.start()}, end={self.end()})"
        )
