"""Unit tests for motion profiles and their generators."""

import numpy as np
import pytest

from motionctl.motion import (
    MotionProfile,
    MotionSegment,
    MotionState,
    generate_path_constrained_profile,
    generate_simple_motion_profile,
)
from motionctl.utils.errors import ProfileError

pytestmark = pytest.mark.unit


def _assert_continuous(profile: MotionProfile, tol: float = 1e-9):
    segments = profile.segments
    for prev, nxt in zip(segments[:-1], segments[1:]):
        end = prev.end()
        assert end.x == pytest.approx(nxt.start.x, abs=tol)
        assert end.v == pytest.approx(nxt.start.v, abs=tol)


class TestMotionState:
    def test_constant_acceleration_integration(self):
        """State integrates under constant acceleration."""
        state = MotionState(1.0, 2.0, 4.0).get(0.5)
        assert state.x == pytest.approx(1.0 + 1.0 + 0.5)
        assert state.v == pytest.approx(4.0)
        assert state.a == 4.0

    def test_flipped(self):
        """Flipping negates every component."""
        assert MotionState(1.0, -2.0, 3.0).flipped() == MotionState(-1.0, 2.0, -3.0)


class TestMotionProfile:
    def test_rejects_empty_and_negative_durations(self):
        """Profiles need segments with non-negative durations."""
        with pytest.raises(ProfileError):
            MotionProfile([])
        with pytest.raises(ProfileError):
            MotionProfile([MotionSegment(MotionState(0.0, 0.0), -1.0)])

    def test_get_clamps_time(self):
        """Sampling outside [0, duration] clamps to the ends."""
        profile = MotionProfile([MotionSegment(MotionState(0.0, 0.0, 2.0), 1.0)])
        assert profile.get(-1.0).x == 0.0
        assert profile.get(5.0).x == pytest.approx(1.0)
        assert profile.get(5.0).v == pytest.approx(2.0)

    def test_segment_start_times(self):
        """Segment start times accumulate durations."""
        profile = MotionProfile(
            [
                MotionSegment(MotionState(0.0, 0.0, 1.0), 1.0),
                MotionSegment(MotionState(0.5, 1.0, 0.0), 2.0),
            ]
        )
        assert profile.segment_start_times == [0.0, 1.0]
        assert profile.duration() == pytest.approx(3.0)


class TestSimpleMotionProfile:
    """Trapezoid/triangle profiles between two states."""

    def test_trapezoid_closed_form(self):
        """0 -> 60 at 30/30: one second each of accel, cruise and decel."""
        profile = generate_simple_motion_profile(
            MotionState(0.0, 0.0), MotionState(60.0, 0.0), 30.0, 30.0
        )
        assert profile.duration() == pytest.approx(3.0)
        assert len(profile) == 3
        mid_accel = profile.get(0.5)
        assert mid_accel.x == pytest.approx(3.75)
        assert mid_accel.v == pytest.approx(15.0)
        assert profile.get(1.5).x == pytest.approx(30.0)
        assert profile.get(1.5).v == pytest.approx(30.0)
        assert profile.end().x == pytest.approx(60.0)
        assert profile.end().v == pytest.approx(0.0, abs=1e-9)
        # Past the end the profile holds its final state
        assert profile.get(4.0).x == pytest.approx(60.0)
        _assert_continuous(profile)

    def test_triangle_when_cruise_is_unreachable(self):
        """Short moves never reach cruise speed."""
        profile = generate_simple_motion_profile(
            MotionState(0.0, 0.0), MotionState(10.0, 0.0), 30.0, 10.0
        )
        assert len(profile) == 2
        assert profile.duration() == pytest.approx(2.0)
        assert profile.get(1.0).v == pytest.approx(10.0)
        assert profile.end().x == pytest.approx(10.0)

    def test_nonzero_boundary_velocities(self):
        """Moving boundary states are honoured."""
        profile = generate_simple_motion_profile(
            MotionState(5.0, 10.0), MotionState(105.0, 4.0), 20.0, 10.0
        )
        assert profile.start().v == pytest.approx(10.0)
        assert profile.end().x == pytest.approx(105.0)
        assert profile.end().v == pytest.approx(4.0)
        for seg in profile:
            assert abs(seg.start.a) <= 10.0 + 1e-9
            assert seg.start.v <= 20.0 + 1e-9
        _assert_continuous(profile)

    def test_goal_behind_start(self):
        """A goal behind the start mirrors the forward profile."""
        profile = generate_simple_motion_profile(
            MotionState(0.0, 0.0), MotionState(-60.0, 0.0), 30.0, 30.0
        )
        assert profile.duration() == pytest.approx(3.0)
        assert profile.end().x == pytest.approx(-60.0)
        assert profile.get(1.5).v == pytest.approx(-30.0)

    def test_zero_displacement(self):
        """Start equal to goal gives an empty-duration profile."""
        profile = generate_simple_motion_profile(
            MotionState(2.0, 0.0), MotionState(2.0, 0.0), 30.0, 30.0
        )
        assert profile.duration() == 0.0
        assert profile.get(1.0).x == 2.0

    @pytest.mark.parametrize(
        "start,goal,max_vel,max_accel",
        [
            # Too short to stop from 30 at 30/s^2
            (MotionState(0.0, 30.0), MotionState(1.0, 0.0), 30.0, 30.0),
            # Boundary speed above the cruise limit
            (MotionState(0.0, 40.0), MotionState(100.0, 0.0), 30.0, 30.0),
            # Non-positive limits
            (MotionState(0.0, 0.0), MotionState(10.0, 0.0), 0.0, 30.0),
            (MotionState(0.0, 0.0), MotionState(10.0, 0.0), 30.0, -1.0),
            # Velocity pointing away from the goal
            (MotionState(0.0, -5.0), MotionState(10.0, 0.0), 30.0, 30.0),
        ],
    )
    def test_infeasible_inputs_raise(self, start, goal, max_vel, max_accel):
        """Bad limits or unreachable boundary speeds raise."""
        with pytest.raises(ProfileError):
            generate_simple_motion_profile(start, goal, max_vel, max_accel)

    def test_time_at_position(self):
        """time_at inverts position along the profile."""
        profile = generate_simple_motion_profile(
            MotionState(0.0, 0.0), MotionState(60.0, 0.0), 30.0, 30.0
        )
        assert profile.time_at(0.0) == pytest.approx(0.0)
        assert profile.time_at(15.0) == pytest.approx(1.0)
        assert profile.time_at(30.0) == pytest.approx(1.5)
        assert profile.time_at(60.0) == pytest.approx(3.0)
        assert profile.get_at_position(3.75).v == pytest.approx(15.0)

    def test_time_at_position_reverse_direction(self):
        """time_at also works when moving backwards."""
        profile = generate_simple_motion_profile(
            MotionState(0.0, 0.0), MotionState(-60.0, 0.0), 30.0, 30.0
        )
        assert profile.time_at(-30.0) == pytest.approx(1.5)


class TestPathConstrainedProfile:
    """Forward/backward pass profiles with position-dependent limits."""

    def test_constant_limits_match_trapezoid(self):
        """Constant limits reproduce the closed-form trapezoid."""
        profile = generate_path_constrained_profile(
            60.0, lambda s: 30.0, lambda s: 30.0
        )
        assert profile.duration() == pytest.approx(3.0, abs=1e-6)
        assert profile.start().v == 0.0
        assert profile.end().x == pytest.approx(60.0)
        assert profile.end().v == pytest.approx(0.0, abs=1e-9)
        # Equal-acceleration intervals merge into accel, cruise and decel pieces
        assert len(profile) == 3
        _assert_continuous(profile)

    def test_respects_local_velocity_limit(self):
        """A local speed cap holds at knots and between them."""
        def v_limit(s):
            return 10.0 if 20.0 <= s <= 30.0 else 30.0

        profile = generate_path_constrained_profile(60.0, v_limit, lambda s: 30.0)
        _assert_continuous(profile)
        for seg in profile:
            assert seg.start.v <= v_limit(seg.start.x) + 1e-6
            assert abs(seg.start.a) <= 30.0 + 1e-6
        # Knots bracket the limit step, so interior states stay under it too
        for t in np.linspace(0.0, profile.duration(), 200):
            state = profile.get(float(t))
            assert state.v <= v_limit(state.x) + 1e-6
        assert profile.end().x == pytest.approx(60.0)
        assert profile.end().v == pytest.approx(0.0, abs=1e-9)

    def test_smooth_limit_overshoot_shrinks_with_resolution(self):
        """A dipping limit holds at knots and is overshot between them only slightly."""

        def v_limit(s):
            return 5.0 + 0.1 * (s - 20.0) ** 2

        def worst_excess(resolution):
            profile = generate_path_constrained_profile(
                40.0, v_limit, lambda s: 10.0, resolution=resolution
            )
            for seg in profile:
                assert seg.start.v <= v_limit(seg.start.x) + 1e-9
            states = [profile.get(float(t)) for t in np.linspace(0.0, profile.duration(), 4000)]
            return max(state.v - v_limit(state.x) for state in states)

        coarse = worst_excess(0.25)
        fine = worst_excess(0.05)
        assert coarse <= 0.01
        assert fine <= coarse

    def test_boundary_velocities_are_honoured(self):
        """Start and end speeds are met exactly."""
        profile = generate_path_constrained_profile(
            50.0, lambda s: 20.0, lambda s: 10.0, start_velocity=5.0, end_velocity=12.0
        )
        assert profile.start().v == pytest.approx(5.0)
        assert profile.end().v == pytest.approx(12.0)

    def test_unreachable_end_velocity_raises(self):
        """An end speed out of acceleration reach raises."""
        with pytest.raises(ProfileError):
            generate_path_constrained_profile(
                1.0, lambda s: 50.0, lambda s: 30.0, end_velocity=30.0
            )

    def test_start_velocity_above_limit_raises(self):
        """A start speed above the local cap raises."""
        with pytest.raises(ProfileError):
            generate_path_constrained_profile(
                10.0, lambda s: 5.0, lambda s: 30.0, start_velocity=6.0
            )

    @pytest.mark.parametrize(
        "length,v_limit,a_limit",
        [
            (0.0, 30.0, 30.0),
            (10.0, 0.0, 30.0),
            (10.0, 30.0, 0.0),
            (10.0, 30.0, float("inf")),
        ],
    )
    def test_invalid_limits_raise(self, length, v_limit, a_limit):
        """Non-positive lengths or limits raise."""
        with pytest.raises(ProfileError):
            generate_path_constrained_profile(
                length, lambda s: v_limit, lambda s: a_limit
            )

    def test_infinite_velocity_limit_is_acceleration_bound(self):
        """With no speed cap the profile is a triangle: 2*sqrt(L/a)."""
        profile = generate_path_constrained_profile(
            40.0, lambda s: float("inf"), lambda s: 10.0
        )
        assert profile.duration() == pytest.approx(4.0, rel=1e-6)
