"""Unit test fixtures: deterministic clock and a simulated motor."""

import math

import pytest

from motionctl.utils.clock import ManualClock


class SimulatedMotorDevice:
    """
    First-order DC motor model behind the MotorDevice protocol.

    Shaft speed relaxes toward gain * power * max speed with time constant tau
    (tau=0 responds instantly). The encoder reports the rounded tick count.
    """

    def __init__(self, max_rpm: float, ticks_per_rev: float, gain: float = 1.0, tau: float = 0.0):
        self.max_tps = max_rpm / 60.0 * ticks_per_rev
        self.gain = gain
        self.tau = tau
        self.power = 0.0
        self.tps = 0.0
        self.position = 0.0
        self.fail_writes = False

    def read_position(self) -> int:
        return int(round(self.position))

    def write_power(self, power: float) -> None:
        if self.fail_writes:
            raise RuntimeError("bus fault")
        self.power = power

    def step(self, dt: float) -> None:
        target = self.gain * self.power * self.max_tps
        if self.tau <= 0.0:
            self.tps = target
        else:
            self.tps += (target - self.tps) * (1.0 - math.exp(-dt / self.tau))
        self.position += self.tps * dt


def _run_loop(motor, device, clock, dt: float, steps: int) -> None:
    """Advance time, the plant and the controller in control-tick order."""
    for _ in range(steps):
        clock.advance(dt)
        device.step(dt)
        motor.update()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def make_device():
    def _make(max_rpm=100.0, ticks_per_rev=600.0, gain=1.0, tau=0.0):
        return SimulatedMotorDevice(max_rpm, ticks_per_rev, gain=gain, tau=tau)

    return _make


@pytest.fixture
def run_loop():
    return _run_loop
