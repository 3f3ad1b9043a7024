"""Unit tests for MotorGroup fan-out and reversal."""

import pytest

from motionctl.control import PIDCoefficients
from motionctl.hardware import Motor, MotorGroup, RotationUnit, RunMode
from motionctl.utils.errors import MotorGroupError

pytestmark = pytest.mark.unit


@pytest.fixture
def devices(make_device):
    return [make_device() for _ in range(3)]


@pytest.fixture
def group(devices, clock):
    return MotorGroup(*(Motor(d, 100.0, 600.0, clock=clock) for d in devices))


class TestMotorGroupReversal:
    def test_toggle_on_change_keeps_relative_orientation(self, make_device, clock):
        """Group reversal toggles members only when the value changes."""
        left = Motor(make_device(), 100.0, 600.0, clock=clock)
        right = Motor(make_device(), 100.0, 600.0, clock=clock).reverse()
        group = MotorGroup(left, right)
        assert [m.reversed for m in group] == [False, True]

        group.reversed = True
        assert [m.reversed for m in group] == [True, False]

        # Setting the same value again is a no-op
        group.reversed = True
        assert [m.reversed for m in group] == [True, False]

        group.toggle_reversed()
        assert not group.reversed
        assert [m.reversed for m in group] == [False, True]

    def test_requires_members(self):
        """An empty group is rejected."""
        with pytest.raises(ValueError):
            MotorGroup()


class TestMotorGroupFanOut:
    def test_power_reaches_every_member(self, group, devices):
        """Power commands reach every device."""
        group.set_power(0.4)
        assert [d.power for d in devices] == [0.4, 0.4, 0.4]

    def test_configuration_fan_out(self, group):
        """Mode, gains and targets are applied to each member."""
        coefficients = PIDCoefficients(kp=0.1, ki=0.2)
        group.set_run_mode(RunMode.CLOSED_LOOP_POSITION)
        group.set_position_coefficients(coefficients)
        group.set_velocity_coefficients(coefficients)
        group.set_target_position(300)
        for motor in group:
            assert motor.run_mode is RunMode.CLOSED_LOOP_POSITION
            assert motor.position_coefficients == coefficients
            assert motor.velocity_coefficients == coefficients
            assert motor.target_position == 300
        assert group.is_busy()

    def test_update_and_queries(self, group, devices, clock):
        """update() and the aggregate queries return one entry per member."""
        group.set_power(1.0)
        for _ in range(2):
            clock.advance(0.1)
            for d in devices:
                d.step(0.1)
            powers = group.update()
        assert powers == [1.0, 1.0, 1.0]
        assert group.velocities(RotationUnit.TPS) == pytest.approx([1000.0] * 3)
        assert group.positions() == [200, 200, 200]
        group.reset_encoders()
        assert group.positions() == [0, 0, 0]

    def test_failures_are_collected_after_visiting_all(self, group, devices):
        """One failing member does not stop the others."""
        devices[1].fail_writes = True
        with pytest.raises(MotorGroupError) as excinfo:
            group.set_power(0.5)
        err = excinfo.value
        assert err.operation == "set_power"
        assert [idx for idx, _ in err.failures] == [1]
        assert isinstance(err.failures[0][1], RuntimeError)
        # Healthy members were still commanded
        assert devices[0].power == 0.5
        assert devices[2].power == 0.5
