"""
Fan-out of Motor operations across several actuators.

Every operation visits every member. Failures are collected and raised
together as a MotorGroupError once all members have been visited, so one bad
device never leaves the rest of the group half-commanded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from motionctl.control.pid import FeedforwardCoefficients, PIDCoefficients
from motionctl.hardware.motor import Motor, RotationUnit, RunMode
from motionctl.utils.errors import MotorGroupError

logger = logging.getLogger(__name__)


class MotorGroup:
    """Ordered collection of motors driven as one unit."""

    def __init__(self, *motors: Motor):
        if not motors:
            raise ValueError("MotorGroup requires at least one motor")
        self.motors: tuple[Motor, ...] = tuple(motors)
        self._reversed = False

    def __len__(self) -> int:
        return len(self.motors)

    def __iter__(self) -> Iterator[Motor]:
        return iter(self.motors)

    def __getitem__(self, index: int) -> Motor:
        return self.motors[index]

    # ------------------------------------------------------------------
    # Reversal
    # ------------------------------------------------------------------

    @property
    def reversed(self) -> bool:
        return self._reversed

    @reversed.setter
    def reversed(self, value: bool) -> None:
        # Members keep their relative orientation: a change toggles every one
        value = bool(value)
        if value != self._reversed:
            for motor in self.motors:
                motor.reverse()
            self._reversed = value

    def toggle_reversed(self) -> MotorGroup:
        self.reversed = not self._reversed
        return self

    # ------------------------------------------------------------------
    # Fan-out
    # ------------------------------------------------------------------

    def _each(self, operation: str, fn: Callable[[Motor], object]) -> list:
        results = []
        failures: list[tuple[int, Exception]] = []
        for index, motor in enumerate(self.motors):
            try:
                results.append(fn(motor))
            except Exception as e:
                logger.warning("Motor %d failed during %s: %s", index, operation, e)
                failures.append((index, e))
                results.append(None)
        if failures:
            raise MotorGroupError(operation, failures)
        return results

    def set_power(self, power: float) -> None:
        self._each("set_power", lambda m: m.set_power(power))

    def set_speed(
        self,
        velocity: float,
        acceleration: float = 0.0,
        unit: RotationUnit = RotationUnit.UPS,
    ) -> None:
        self._each("set_speed", lambda m: m.set_speed(velocity, acceleration, unit))

    def set_run_mode(self, mode: RunMode) -> None:
        self._each("set_run_mode", lambda m: m.set_run_mode(mode))

    def set_target_position(self, ticks: int) -> None:
        self._each("set_target_position", lambda m: m.set_target_position(ticks))

    def set_target_distance(self, distance: float) -> None:
        self._each("set_target_distance", lambda m: m.set_target_distance(distance))

    def set_velocity_coefficients(self, coefficients: PIDCoefficients) -> None:
        def apply(m: Motor) -> None:
            m.velocity_coefficients = coefficients

        self._each("set_velocity_coefficients", apply)

    def set_position_coefficients(self, coefficients: PIDCoefficients) -> None:
        def apply(m: Motor) -> None:
            m.position_coefficients = coefficients

        self._each("set_position_coefficients", apply)

    def set_feedforward_coefficients(
        self, coefficients: FeedforwardCoefficients | None
    ) -> None:
        def apply(m: Motor) -> None:
            m.feedforward_coefficients = coefficients

        self._each("set_feedforward_coefficients", apply)

    def reset_encoders(self) -> None:
        self._each("reset_encoder", lambda m: m.reset_encoder())

    def update(self, dt: float | None = None) -> list[float]:
        """Run one control tick on every member; returns the written powers."""
        return self._each("update", lambda m: m.update(dt))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_busy(self) -> bool:
        return any(m.is_busy() for m in self.motors)

    def velocities(self, unit: RotationUnit = RotationUnit.UPS) -> list[float]:
        return [m.get_velocity(unit) for m in self.motors]

    def positions(self) -> list[int]:
        return [m.current_position for m in self.motors]

    def __repr__(self) -> str:
        return f"MotorGroup({len(self.motors)} motors, reversed={self._reversed})"
