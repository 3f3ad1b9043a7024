"""Feedback and feedforward control primitives."""

from motionctl.control.pid import (
    FeedforwardCoefficients,
    PIDCoefficients,
    PIDController,
)

__all__ = [
    "PIDCoefficients",
    "FeedforwardCoefficients",
    "PIDController",
]
