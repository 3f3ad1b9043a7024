"""Shared utilities: clocks, errors and scalar helpers."""

from motionctl.utils.clock import Clock, ManualClock, MonotonicClock
from motionctl.utils.errors import (
    ConfigurationError,
    GeometryError,
    MotionError,
    MotorGroupError,
    ProfileError,
)

__all__ = [
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "MotionError",
    "GeometryError",
    "ProfileError",
    "ConfigurationError",
    "MotorGroupError",
]
