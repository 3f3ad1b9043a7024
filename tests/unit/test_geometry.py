"""Unit tests for motionctl.geometry value types."""

import math

import numpy as np
import pytest

from motionctl.geometry import Angle, AngleUnit, Pose2d, Vector2d

pytestmark = pytest.mark.unit


class TestAngle:
    """Unit-aware angle arithmetic."""

    def test_conversions(self):
        """Degrees and radians convert both ways."""
        assert Angle.deg(180.0).radians == pytest.approx(math.pi)
        assert Angle.rad(math.pi / 2).degrees == pytest.approx(90.0)
        assert Angle.deg(90.0).to(AngleUnit.RADIANS).value == pytest.approx(math.pi / 2)

    def test_mixed_unit_addition_keeps_left_unit(self):
        """Adding angles keeps the unit of the left operand."""
        total = Angle.deg(90.0) + Angle.rad(math.pi / 2)
        assert total.units is AngleUnit.DEGREES
        assert total.value == pytest.approx(180.0)

    @pytest.mark.parametrize(
        "value,expected",
        [(370.0, 10.0), (-10.0, 350.0), (720.0, 0.0), (0.0, 0.0)],
    )
    def test_normalized_degrees(self, value, expected):
        """Normalization wraps into [0, 360)."""
        assert Angle.deg(value).normalized().value == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value,expected",
        [(190.0, -170.0), (180.0, 180.0), (-180.0, 180.0), (-90.0, -90.0)],
    )
    def test_norm_delta_degrees(self, value, expected):
        """Deltas wrap into [-180, 180)."""
        assert Angle.deg(value).norm_delta().value == pytest.approx(expected)

    def test_epsilon_equals_across_wrap(self):
        """Angles a full turn apart compare equal."""
        assert Angle.deg(359.9999999).epsilon_equals(Angle.deg(0.0))
        assert Angle.rad(2 * math.pi).epsilon_equals(Angle.deg(0.0))
        assert not Angle.deg(1.0).epsilon_equals(Angle.deg(0.0))

    def test_trig_uses_radians(self):
        """sin/cos work from the radian value whatever the unit."""
        assert Angle.deg(30.0).sin() == pytest.approx(0.5)
        assert Angle.deg(60.0).cos() == pytest.approx(0.5)

    def test_unit_from_string(self):
        """Unit names parse case-insensitively with short aliases."""
        assert AngleUnit.from_string("Degrees") is AngleUnit.DEGREES
        assert AngleUnit.from_string("rad") is AngleUnit.RADIANS
        with pytest.raises(ValueError):
            AngleUnit.from_string("grad")


class TestVector2d:
    """Vector algebra."""

    def test_arithmetic(self):
        """Component-wise operators."""
        a = Vector2d(1.0, 2.0)
        b = Vector2d(3.0, -1.0)
        assert a + b == Vector2d(4.0, 1.0)
        assert a - b == Vector2d(-2.0, 3.0)
        assert 2.0 * a == Vector2d(2.0, 4.0)
        assert a / 2.0 == Vector2d(0.5, 1.0)
        assert -a == Vector2d(-1.0, -2.0)

    def test_products(self):
        """Dot and cross products."""
        a = Vector2d(1.0, 0.0)
        b = Vector2d(0.0, 2.0)
        assert a.dot(b) == 0.0
        assert a.cross(b) == 2.0
        assert b.cross(a) == -2.0

    def test_polar_round_trip(self):
        """polar() and norm()/angle() invert each other."""
        v = Vector2d.polar(2.0, Angle.deg(30.0))
        assert v.norm() == pytest.approx(2.0)
        assert v.angle().degrees == pytest.approx(30.0)

    def test_rotated_quarter_turn(self):
        """Rotation is counter-clockwise."""
        v = Vector2d(1.0, 0.0).rotated(Angle.deg(90.0))
        assert v.epsilon_equals(Vector2d(0.0, 1.0))

    def test_projection_and_distance(self):
        """Projection onto an axis and point distance."""
        v = Vector2d(3.0, 4.0)
        assert v.project_onto(Vector2d(2.0, 0.0)) == Vector2d(3.0, 0.0)
        assert v.dist_to(Vector2d()) == pytest.approx(5.0)
        assert v.normalized().norm() == pytest.approx(1.0)

    def test_angle_between(self):
        """Unsigned angle between two vectors."""
        a = Vector2d(1.0, 0.0)
        assert a.angle_between(Vector2d(0.0, 3.0)).degrees == pytest.approx(90.0)
        assert a.angle_between(Vector2d(-1.0, 0.0)).degrees == pytest.approx(180.0)

    def test_zero_vector_operations_raise(self):
        """Direction-dependent operations reject the zero vector."""
        with pytest.raises(ValueError):
            Vector2d().angle_between(Vector2d(1.0, 0.0))
        with pytest.raises(ValueError):
            Vector2d().normalized()

    def test_array_conversion(self):
        """Round trip through a numpy array."""
        v = Vector2d.from_array(np.array([1.5, -2.5]))
        assert v == Vector2d(1.5, -2.5)
        assert np.allclose(v.to_array(), [1.5, -2.5])


class TestPose2d:
    def test_of_and_components(self):
        """Pose accessors expose position and heading."""
        pose = Pose2d.of(1.0, 2.0, Angle.deg(45.0))
        assert pose.x == 1.0
        assert pose.y == 2.0
        assert pose.heading_vec().epsilon_equals(
            Vector2d(math.sqrt(0.5), math.sqrt(0.5))
        )

    def test_default_heading_is_zero(self):
        """Heading defaults to zero."""
        assert Pose2d.of(0.0, 0.0).heading.radians == 0.0

    def test_epsilon_equals(self):
        """Position and heading compare within tolerance."""
        a = Pose2d.of(1.0, 1.0, Angle.deg(10.0))
        b = Pose2d.of(1.0 + 1e-9, 1.0, Angle.rad(math.radians(10.0)))
        assert a.epsilon_equals(b)
        assert not a.epsilon_equals(Pose2d.of(1.0, 1.0, Angle.deg(11.0)))
