"""
Motion profile generation.

Two entry points share the same output type (MotionProfile):

- generate_simple_motion_profile: closed-form trapezoid/triangle between two
  boundary states under scalar velocity/acceleration limits.
- generate_path_constrained_profile: forward/backward pass over a sampled
  velocity envelope, for limits that vary with position (e.g. curvature).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

import numpy as np
from numba import njit  # type: ignore[import-untyped]
from numpy.typing import NDArray

from motionctl.config import PROFILE_RESOLUTION, PROFILE_TOLERANCE
from motionctl.motion.profile import MotionProfile, MotionSegment, MotionState
from motionctl.utils.errors import ProfileError

logger = logging.getLogger(__name__)

PositionLimit = Callable[[float], float]


@njit(cache=True)
def _forward_pass(
    v_limit: np.ndarray,
    a_limit: np.ndarray,
    ds: float,
    v_start: float,
    out: np.ndarray,
) -> None:
    """Fastest velocity reachable at each sample accelerating from v_start.

    a_limit holds one value per interval (len(v_limit) - 1).
    """
    n = v_limit.shape[0]
    out[0] = min(v_start, v_limit[0])
    for i in range(1, n):
        reach = math.sqrt(out[i - 1] * out[i - 1] + 2.0 * a_limit[i - 1] * ds)
        out[i] = min(v_limit[i], reach)


@njit(cache=True)
def _backward_pass(
    v_limit: np.ndarray,
    a_limit: np.ndarray,
    ds: float,
    v_end: float,
    out: np.ndarray,
) -> None:
    """Fastest velocity at each sample from which v_end is still reachable."""
    n = v_limit.shape[0]
    out[n - 1] = min(v_end, v_limit[n - 1])
    for i in range(n - 2, -1, -1):
        reach = math.sqrt(out[i + 1] * out[i + 1] + 2.0 * a_limit[i] * ds)
        out[i] = min(v_limit[i], reach)


def _same_value(a1: float, a2: float, tolerance: float) -> bool:
    return abs(a1 - a2) <= tolerance * max(1.0, abs(a1), abs(a2))


def _regime(a: float, tolerance: float) -> int:
    """+1 accel-limited, -1 decel-limited, 0 cruise."""
    if a > tolerance:
        return 1
    if a < -tolerance:
        return -1
    return 0


class MotionProfileGenerator:
    """Builds feasible MotionProfiles from boundary states and constraints."""

    @staticmethod
    def generate_simple_motion_profile(
        start: MotionState,
        goal: MotionState,
        max_vel: float,
        max_accel: float,
        tolerance: float = PROFILE_TOLERANCE,
    ) -> MotionProfile:
        """
        Trapezoidal (or triangular) profile from start to goal.

        Args:
            start: Initial position and velocity (acceleration ignored)
            goal: Final position and velocity (acceleration ignored)
            max_vel: Cruise velocity limit (> 0)
            max_accel: Acceleration limit (> 0)
            tolerance: Relative tolerance for degenerate/feasibility checks

        Returns:
            MotionProfile with at most three segments (zero-duration profile
            when start and goal coincide)

        Raises:
            ProfileError: If the limits are non-positive, a boundary speed
                exceeds max_vel, or the displacement is too short to change
                from the start speed to the goal speed.
        """
        if not max_vel > 0.0 or not max_accel > 0.0:
            raise ProfileError(
                f"Limits must be positive (max_vel={max_vel}, max_accel={max_accel})"
            )
        if goal.x < start.x:
            # Mirror goals behind the start so the core only handles d >= 0
            return MotionProfileGenerator.generate_simple_motion_profile(
                start.flipped(), goal.flipped(), max_vel, max_accel, tolerance
            ).flipped()

        v0, vf = start.v, goal.v
        if v0 < -tolerance or vf < -tolerance:
            raise ProfileError(
                f"Boundary velocities must point toward the goal (v0={v0}, vf={vf})"
            )
        v0 = max(v0, 0.0)
        vf = max(vf, 0.0)
        if max(v0, vf) > max_vel * (1.0 + tolerance):
            raise ProfileError(
                f"Boundary velocity {max(v0, vf)} exceeds max_vel {max_vel}"
            )

        d = goal.x - start.x
        if d <= tolerance:
            if _same_value(v0, vf, tolerance):
                return MotionProfile([MotionSegment(MotionState(start.x, v0), 0.0)])
            raise ProfileError(
                f"Zero displacement cannot change velocity from {v0} to {vf}"
            )

        d_min = abs(vf * vf - v0 * v0) / (2.0 * max_accel)
        if d < d_min * (1.0 - tolerance) - tolerance:
            raise ProfileError(
                f"Displacement {d:.6f} is shorter than the {d_min:.6f} needed "
                f"to go from v0={v0} to vf={vf} at max_accel={max_accel}"
            )

        v_peak = math.sqrt((2.0 * max_accel * d + v0 * v0 + vf * vf) / 2.0)
        if v_peak <= max_vel:
            # Triangular: accelerate to v_peak then decelerate
            phases = [
                (max_accel, max(0.0, (v_peak - v0) / max_accel)),
                (-max_accel, max(0.0, (v_peak - vf) / max_accel)),
            ]
        else:
            accel_dist = (max_vel * max_vel - v0 * v0) / (2.0 * max_accel)
            decel_dist = (max_vel * max_vel - vf * vf) / (2.0 * max_accel)
            cruise_dist = max(0.0, d - accel_dist - decel_dist)
            phases = [
                (max_accel, max(0.0, (max_vel - v0) / max_accel)),
                (0.0, cruise_dist / max_vel),
                (-max_accel, max(0.0, (max_vel - vf) / max_accel)),
            ]

        segments: list[MotionSegment] = []
        state = MotionState(start.x, v0)
        for accel, dt in phases:
            if dt <= 0.0:
                continue
            segment = MotionSegment(MotionState(state.x, state.v, accel), dt)
            segments.append(segment)
            state = segment.end()

        profile = MotionProfile(segments)
        logger.debug(
            "Simple profile d=%.4f v0=%.4f vf=%.4f: %d segment(s), duration=%.4fs",
            d,
            v0,
            vf,
            len(segments),
            profile.duration(),
        )
        return profile

    @staticmethod
    def generate_path_constrained_profile(
        length: float,
        velocity_limit: PositionLimit,
        acceleration_limit: PositionLimit,
        start_velocity: float = 0.0,
        end_velocity: float = 0.0,
        resolution: float = PROFILE_RESOLUTION,
        tolerance: float = PROFILE_TOLERANCE,
    ) -> MotionProfile:
        """
        Time-parameterize travel over [0, length] under position-dependent limits.

        The interval is sampled every ~resolution. A forward pass accelerates
        from start_velocity, a backward pass decelerates into end_velocity, and
        the envelope is the pointwise minimum of both passes and
        velocity_limit. Each sample interval becomes a constant-acceleration
        piece; consecutive pieces whose accelerations agree within tolerance
        (relative) are merged.

        The velocity bound holds exactly at the samples. Between samples v² is
        linear in position, so a limit that dips between two samples can be
        exceeded by an amount that shrinks with resolution (O(resolution)).
        Limits that change in steps are met exactly when the steps fall on
        sample positions.

        Args:
            length: Distance to travel (> 0)
            velocity_limit: Max velocity as a function of position (> 0, may be inf)
            acceleration_limit: Max |acceleration| as a function of position (> 0)
            start_velocity: Velocity at position 0
            end_velocity: Velocity at position length
            resolution: Sample spacing along position
            tolerance: Relative tolerance for merging and boundary checks

        Raises:
            ProfileError: On non-positive length, non-positive limits anywhere,
                or boundary velocities the limits cannot honour.
        """
        if not length > 0.0:
            raise ProfileError(f"Profile length must be positive, got {length}")
        if not resolution > 0.0:
            raise ProfileError(f"Resolution must be positive, got {resolution}")
        if start_velocity < 0.0 or end_velocity < 0.0:
            raise ProfileError(
                f"Boundary velocities must be non-negative "
                f"(start={start_velocity}, end={end_velocity})"
            )

        n = max(2, math.ceil(length / resolution)) + 1
        s: NDArray[np.float64] = np.linspace(0.0, length, n)
        ds = float(s[1] - s[0])

        v_limit = np.array([velocity_limit(float(si)) for si in s], dtype=np.float64)
        bad = np.flatnonzero(~(v_limit > 0.0))
        if bad.size:
            raise ProfileError(
                f"Velocity limit is non-positive at s={s[bad[0]]:.4f} "
                f"({v_limit[bad[0]]})"
            )
        a_sample = np.array(
            [acceleration_limit(float(si)) for si in s], dtype=np.float64
        )
        bad = np.flatnonzero(~(a_sample > 0.0) | ~np.isfinite(a_sample))
        if bad.size:
            raise ProfileError(
                f"Acceleration limit is not positive and finite at s={s[bad[0]]:.4f} "
                f"({a_sample[bad[0]]})"
            )
        a_limit = np.minimum(a_sample[:-1], a_sample[1:])

        if start_velocity > v_limit[0] * (1.0 + tolerance):
            raise ProfileError(
                f"Start velocity {start_velocity} exceeds the limit {v_limit[0]} at s=0"
            )
        if end_velocity > v_limit[-1] * (1.0 + tolerance):
            raise ProfileError(
                f"End velocity {end_velocity} exceeds the limit {v_limit[-1]} at s={length}"
            )

        forward = np.empty(n, dtype=np.float64)
        backward = np.empty(n, dtype=np.float64)
        _forward_pass(v_limit, a_limit, ds, start_velocity, forward)
        _backward_pass(v_limit, a_limit, ds, end_velocity, backward)
        envelope = np.minimum(np.minimum(forward, backward), v_limit)

        if not _same_value(envelope[0], start_velocity, tolerance):
            raise ProfileError(
                f"Cannot slow down from start velocity {start_velocity} "
                f"within the acceleration limit"
            )
        if not _same_value(envelope[-1], end_velocity, tolerance):
            raise ProfileError(
                f"End velocity {end_velocity} is unreachable within the "
                f"acceleration limit (best {envelope[-1]:.6f})"
            )

        v_sq = envelope * envelope
        accels = (v_sq[1:] - v_sq[:-1]) / (2.0 * ds)

        # Group consecutive intervals with matching acceleration
        breaks = [0]
        ref = float(accels[0])
        for i in range(1, n - 1):
            a = float(accels[i])
            if _regime(a, tolerance) != _regime(ref, tolerance) or not _same_value(
                a, ref, tolerance
            ):
                breaks.append(i)
                ref = a
        breaks.append(n - 1)

        segments: list[MotionSegment] = []
        for j, k in zip(breaks[:-1], breaks[1:]):
            v_j = float(envelope[j])
            v_k = float(envelope[k])
            span = float(s[k] - s[j])
            if not v_j + v_k > 0.0:
                raise ProfileError(f"Profile stalls between s={s[j]:.4f} and s={s[k]:.4f}")
            accel = (v_k * v_k - v_j * v_j) / (2.0 * span)
            segments.append(
                MotionSegment(
                    MotionState(float(s[j]), v_j, accel), 2.0 * span / (v_j + v_k)
                )
            )

        profile = MotionProfile(segments)
        logger.debug(
            "Path-constrained profile length=%.4f samples=%d pieces=%d duration=%.4fs",
            length,
            n,
            len(segments),
            profile.duration(),
        )
        return profile


generate_simple_motion_profile = MotionProfileGenerator.generate_simple_motion_profile
generate_path_constrained_profile = (
    MotionProfileGenerator.generate_path_constrained_profile
)
