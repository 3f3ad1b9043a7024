"""Exception types raised by motionctl."""

from __future__ import annotations


class MotionError(Exception):
    """Base class for all motionctl errors."""


class GeometryError(MotionError, ValueError):
    """Invalid path geometry (non-positive length, heading discontinuity)."""


class ProfileError(MotionError, ValueError):
    """Planning input that no feasible motion profile satisfies."""


class ConfigurationError(MotionError, ValueError):
    """Out-of-range controller configuration."""


class MotorGroupError(MotionError):
    """One or more members of a MotorGroup failed during a fan-out call.

    Attributes:
        failures: (member index, exception) pairs in member order
    """

    def __init__(self, operation: str, failures: list[tuple[int, Exception]]):
        self.operation = operation
        self.failures = failures
        detail = ", ".join(f"#{idx}: {exc!r}" for idx, exc in failures)
        super().__init__(f"{operation} failed for {len(failures)} motor(s): {detail}")
