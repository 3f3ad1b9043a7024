from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from motionctl.utils.numeric import clamp, sign


@dataclass(frozen=True)
class PIDCoefficients:
    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0


@dataclass(frozen=True)
class FeedforwardCoefficients:
    """Open-loop output from the commanded motion: kv·v + ka·a + ks·sign(v)."""

    kv: float = 0.0
    ka: float = 0.0
    ks: float = 0.0

    def calculate(self, velocity: float, acceleration: float = 0.0) -> float:
        return self.kv * velocity + self.ka * acceleration + self.ks * sign(velocity)


class PIDController:
    """Discrete PID on a caller-supplied error.

    Integral is clamped to i_limits and the sum to output_limits when given.
    The derivative term is zero on the first step after a reset.
    """

    def __init__(
        self,
        coefficients: PIDCoefficients | None = None,
        output_limits: Optional[Tuple[float, float]] = None,
        i_limits: Optional[Tuple[float, float]] = None,
    ):
        self.coefficients = coefficients or PIDCoefficients()
        self.output_limits = output_limits
        self.i_limits = i_limits
        self.i = 0.0
        self.prev_err: Optional[float] = None

    def reset(self) -> None:
        self.i = 0.0
        self.prev_err = None

    def step(self, err: float, dt: float) -> float:
        c = self.coefficients
        if dt > 0:
            self.i += err * dt
            if self.i_limits:
                lo, hi = self.i_limits
                self.i = clamp(self.i, lo, hi)

        d = 0.0 if self.prev_err is None or dt <= 0 else (err - self.prev_err) / dt
        u = c.kp * err + c.ki * self.i + c.kd * d

        if self.output_limits:
            lo, hi = self.output_limits
            u = clamp(u, lo, hi)

        self.prev_err = err
        return u
