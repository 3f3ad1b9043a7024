"""Actuator control: device boundary, single motors and motor groups."""

from motionctl.hardware.device import MotorDevice
from motionctl.hardware.group import MotorGroup
from motionctl.hardware.motor import Motor, RotationUnit, RunMode

__all__ = [
    "MotorDevice",
    "Motor",
    "MotorGroup",
    "RotationUnit",
    "RunMode",
]
