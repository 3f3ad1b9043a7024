"""
Single-axis actuator controller.

A Motor wraps a MotorDevice and runs once per control tick:

  read encoder -> estimate velocity -> per-mode command -> clamp -> write power

Run modes:
- POWER_ONLY: commanded power passes straight through (no feedback)
- CLOSED_LOOP_VELOCITY: PID on velocity error plus feedforward
- CLOSED_LOOP_POSITION: PID on encoder position error
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from motionctl.config import POSITION_TOLERANCE_TICKS, TRACE
from motionctl.control.pid import FeedforwardCoefficients, PIDCoefficients, PIDController
from motionctl.hardware.device import MotorDevice
from motionctl.utils.clock import Clock, MonotonicClock
from motionctl.utils.errors import ConfigurationError
from motionctl.utils.numeric import clamp

logger = logging.getLogger(__name__)

# Measured velocities beyond this multiple of the rated speed are sensor glitches
_VELOCITY_CLAMP_FACTOR = 1.5


class RunMode(Enum):
    """Feedback strategy used by Motor.update()."""

    POWER_ONLY = "power_only"
    CLOSED_LOOP_VELOCITY = "closed_loop_velocity"
    CLOSED_LOOP_POSITION = "closed_loop_position"

    @classmethod
    def from_string(cls, name: str) -> RunMode:
        """Convert string to RunMode, case-insensitive."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown run mode '{name}'") from None


class RotationUnit(Enum):
    """Velocity units a Motor can report and accept."""

    RPM = "rpm"  # output revolutions per minute
    TPS = "tps"  # encoder ticks per second
    DPS = "dps"  # output degrees per second
    RPS = "rps"  # output radians per second
    UPS = "ups"  # distance units per second


class Motor:
    """
    Closed-loop/open-loop controller for one actuator.

    Reversal flips both the measured feedback and the written power, so PID
    math always sees the logical direction.

    Args:
        device: Encoder/power boundary
        max_rpm: Rated motor speed (rev/min at the encoder shaft)
        ticks_per_rev: Encoder ticks per motor revolution
        clock: Time source for update() when dt is not given
        gear_ratio: Output revolutions per motor revolution
        distance_per_rev: Linear distance per output revolution
        position_tolerance: CLOSED_LOOP_POSITION "at target" window in ticks
        i_limits: (low, high) clamp on both PID integrators, or None to leave
            them unbounded

    Raises:
        ConfigurationError: If max_rpm, ticks_per_rev, gear_ratio or
            distance_per_rev is not positive.
    """

    def __init__(
        self,
        device: MotorDevice,
        max_rpm: float,
        ticks_per_rev: float,
        clock: Clock | None = None,
        gear_ratio: float = 1.0,
        distance_per_rev: float = 1.0,
        position_tolerance: int = POSITION_TOLERANCE_TICKS,
        i_limits: tuple[float, float] | None = None,
    ):
        if not max_rpm > 0:
            raise ConfigurationError(f"max_rpm must be positive, got {max_rpm}")
        if not ticks_per_rev > 0:
            raise ConfigurationError(
                f"ticks_per_rev must be positive, got {ticks_per_rev}"
            )
        if not gear_ratio > 0:
            raise ConfigurationError(f"gear_ratio must be positive, got {gear_ratio}")
        if position_tolerance < 0:
            raise ConfigurationError(
                f"position_tolerance must be non-negative, got {position_tolerance}"
            )

        self.device = device
        self.max_rpm = float(max_rpm)
        self.ticks_per_rev = float(ticks_per_rev)
        self.gear_ratio = float(gear_ratio)
        self.distance_per_rev = distance_per_rev
        self.position_tolerance = int(position_tolerance)
        self.clock = clock if clock is not None else MonotonicClock()

        self.velocity_pid = PIDController(PIDCoefficients(), i_limits=i_limits)
        self.position_pid = PIDController(PIDCoefficients(), i_limits=i_limits)
        self._feedforward: FeedforwardCoefficients | None = None

        self._run_mode = RunMode.POWER_ONLY
        self._reversed = False
        self._power = 0.0
        self._output = 0.0
        self._target_velocity = 0.0  # distance units/s
        self._target_accel = 0.0
        self._target_position = 0  # logical ticks

        self._last_raw = int(device.read_position())
        self._last_time = self.clock.now()
        self._zero_raw = self._last_raw
        self._velocity_tps = 0.0

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def distance_per_rev(self) -> float:
        return self._distance_per_rev

    @distance_per_rev.setter
    def distance_per_rev(self, value: float) -> None:
        if not value > 0:
            raise ConfigurationError(f"distance_per_rev must be positive, got {value}")
        self._distance_per_rev = float(value)

    @property
    def reversed(self) -> bool:
        return self._reversed

    @reversed.setter
    def reversed(self, value: bool) -> None:
        self._reversed = bool(value)

    def reverse(self) -> Motor:
        """Invert the reversal flag and return self (for chaining)."""
        self._reversed = not self._reversed
        return self

    @property
    def run_mode(self) -> RunMode:
        return self._run_mode

    @run_mode.setter
    def run_mode(self, mode: RunMode) -> None:
        # Switching modes always starts the loops fresh (no integrator carry-over)
        self.velocity_pid.reset()
        self.position_pid.reset()
        if mode is not self._run_mode:
            logger.debug("Motor run mode %s -> %s", self._run_mode.name, mode.name)
        self._run_mode = mode

    def set_run_mode(self, mode: RunMode) -> None:
        self.run_mode = mode

    @property
    def velocity_coefficients(self) -> PIDCoefficients:
        return self.velocity_pid.coefficients

    @velocity_coefficients.setter
    def velocity_coefficients(self, coefficients: PIDCoefficients) -> None:
        self.velocity_pid.coefficients = coefficients
        self.velocity_pid.reset()

    @property
    def position_coefficients(self) -> PIDCoefficients:
        return self.position_pid.coefficients

    @position_coefficients.setter
    def position_coefficients(self, coefficients: PIDCoefficients) -> None:
        self.position_pid.coefficients = coefficients
        self.position_pid.reset()

    @property
    def feedforward_coefficients(self) -> FeedforwardCoefficients:
        """Defaults to unity feedforward: full power at the rated distance velocity."""
        if self._feedforward is None:
            return FeedforwardCoefficients(kv=1.0 / self.max_distance_velocity)
        return self._feedforward

    @feedforward_coefficients.setter
    def feedforward_coefficients(self, coefficients: FeedforwardCoefficients | None) -> None:
        self._feedforward = coefficients

    # ------------------------------------------------------------------
    # Unit conversion
    # ------------------------------------------------------------------

    @property
    def max_ticks_per_second(self) -> float:
        return self.max_rpm / 60.0 * self.ticks_per_rev

    @property
    def max_distance_velocity(self) -> float:
        return self.rpm_to_distance_velocity(self.max_rpm * self.gear_ratio)

    def rpm_to_ticks_per_second(self, rpm: float) -> float:
        """Output RPM -> encoder ticks/s."""
        return rpm / 60.0 / self.gear_ratio * self.ticks_per_rev

    def ticks_per_second_to_rpm(self, tps: float) -> float:
        return tps / self.ticks_per_rev * self.gear_ratio * 60.0

    def rpm_to_distance_velocity(self, rpm: float) -> float:
        return rpm / 60.0 * self._distance_per_rev

    def distance_velocity_to_rpm(self, velocity: float) -> float:
        return velocity / self._distance_per_rev * 60.0

    def ticks_to_distance(self, ticks: float) -> float:
        return ticks / self.ticks_per_rev * self.gear_ratio * self._distance_per_rev

    def distance_to_ticks(self, distance: float) -> float:
        return distance / self._distance_per_rev / self.gear_ratio * self.ticks_per_rev

    def _from_tps(self, tps: float, unit: RotationUnit) -> float:
        if unit is RotationUnit.TPS:
            return tps
        rpm = self.ticks_per_second_to_rpm(tps)
        if unit is RotationUnit.RPM:
            return rpm
        if unit is RotationUnit.DPS:
            return rpm / 60.0 * 360.0
        if unit is RotationUnit.RPS:
            return rpm / 60.0 * 2.0 * math.pi
        return self.rpm_to_distance_velocity(rpm)

    def _to_tps(self, value: float, unit: RotationUnit) -> float:
        if unit is RotationUnit.TPS:
            return value
        if unit is RotationUnit.RPM:
            rpm = value
        elif unit is RotationUnit.DPS:
            rpm = value / 360.0 * 60.0
        elif unit is RotationUnit.RPS:
            rpm = value / (2.0 * math.pi) * 60.0
        else:
            rpm = self.distance_velocity_to_rpm(value)
        return self.rpm_to_ticks_per_second(rpm)

    def convert_velocity(
        self, value: float, from_unit: RotationUnit, to_unit: RotationUnit
    ) -> float:
        return self._from_tps(self._to_tps(value, from_unit), to_unit)

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    @property
    def current_position(self) -> int:
        """Logical encoder position in ticks (reversal and reset applied)."""
        offset = self._last_raw - self._zero_raw
        return -offset if self._reversed else offset

    @property
    def distance(self) -> float:
        return self.ticks_to_distance(self.current_position)

    def get_velocity(self, unit: RotationUnit = RotationUnit.UPS) -> float:
        """Velocity measured on the last update, in the requested unit."""
        return self._from_tps(self._velocity_tps, unit)

    @property
    def velocity(self) -> float:
        """Measured velocity in distance units per second."""
        return self.get_velocity(RotationUnit.UPS)

    @property
    def power(self) -> float:
        """Last power written to the device (logical direction)."""
        return self._output

    def reset_encoder(self) -> None:
        """Make the current encoder reading the new zero."""
        self._zero_raw = self._last_raw

    # ------------------------------------------------------------------
    # Setpoints
    # ------------------------------------------------------------------

    def set_power(self, power: float) -> None:
        """Set the POWER_ONLY command; written immediately in that mode."""
        self._power = clamp(float(power), -1.0, 1.0)
        if self._run_mode is RunMode.POWER_ONLY:
            self._write(self._power)

    def set_speed(
        self,
        velocity: float,
        acceleration: float = 0.0,
        unit: RotationUnit = RotationUnit.UPS,
    ) -> None:
        """
        Set the velocity setpoint (and feedforward acceleration).

        In POWER_ONLY the setpoint is converted open-loop through the
        feedforward coefficients and written immediately.
        """
        self._target_velocity = self.convert_velocity(velocity, unit, RotationUnit.UPS)
        self._target_accel = self.convert_velocity(acceleration, unit, RotationUnit.UPS)
        if self._run_mode is RunMode.POWER_ONLY:
            self.set_power(
                self.feedforward_coefficients.calculate(
                    self._target_velocity, self._target_accel
                )
            )

    @property
    def target_velocity(self) -> float:
        """Velocity setpoint in distance units per second."""
        return self._target_velocity

    def set_target_position(self, ticks: int) -> None:
        self._target_position = int(ticks)

    def set_target_distance(self, distance: float) -> None:
        self.set_target_position(round(self.distance_to_ticks(distance)))

    @property
    def target_position(self) -> int:
        return self._target_position

    def is_busy(self) -> bool:
        """True while CLOSED_LOOP_POSITION has not reached its target window."""
        if self._run_mode is not RunMode.CLOSED_LOOP_POSITION:
            return False
        return abs(self._target_position - self.current_position) > self.position_tolerance

    # ------------------------------------------------------------------
    # Control tick
    # ------------------------------------------------------------------

    def update(self, dt: float | None = None) -> float:
        """
        Run one control tick.

        Args:
            dt: Seconds since the previous tick; measured with the clock when omitted.

        Returns:
            Power written to the device (logical direction).
        """
        now = self.clock.now()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        raw = int(self.device.read_position())
        if dt > 0:
            tps = (raw - self._last_raw) / dt
            if self._reversed:
                tps = -tps
            limit = self.max_ticks_per_second * _VELOCITY_CLAMP_FACTOR
            if abs(tps) > limit:
                logger.log(TRACE, "Measured %.1f ticks/s clamped to ±%.1f", tps, limit)
                tps = clamp(tps, -limit, limit)
            self._velocity_tps = tps
        self._last_raw = raw

        mode = self._run_mode
        if mode is RunMode.POWER_ONLY:
            output = self._power
        elif mode is RunMode.CLOSED_LOOP_VELOCITY:
            error = self._target_velocity - self.velocity
            output = self.velocity_pid.step(
                error, dt
            ) + self.feedforward_coefficients.calculate(
                self._target_velocity, self._target_accel
            )
        else:
            error = self._target_position - self.current_position
            if abs(error) <= self.position_tolerance:
                output = 0.0
            else:
                output = self.position_pid.step(error, dt)

        self._write(output)
        return self._output

    def _write(self, output: float) -> None:
        output = clamp(output, -1.0, 1.0)
        self._output = output
        self.device.write_power(-output if self._reversed else output)

    def __repr__(self) -> str:
        return (
            f"Motor(mode={self._run_mode.name}, reversed={self._reversed}, "
            f"position={self.current_position}, velocity={self.velocity:.4f})"
        )
