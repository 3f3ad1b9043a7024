"""Unit-aware planar angles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from motionctl.utils.numeric import EPSILON

TAU = 2.0 * math.pi


class AngleUnit(Enum):
    """Units an Angle value is expressed in."""

    RADIANS = "rad"
    DEGREES = "deg"

    @classmethod
    def from_string(cls, name: str) -> AngleUnit:
        """Convert 'rad'/'radians'/'deg'/'degrees' (any case) to AngleUnit."""
        key = name.strip().lower()
        if key in ("rad", "radian", "radians"):
            return cls.RADIANS
        if key in ("deg", "degree", "degrees"):
            return cls.DEGREES
        raise ValueError(f"Unknown angle unit '{name}'")


@dataclass(frozen=True, slots=True)
class Angle:
    """A planar angle that carries its unit.

    Arithmetic between two angles converts the right operand into the left
    operand's unit. Trigonometric functions always evaluate in radians.
    """

    value: float = 0.0
    units: AngleUnit = AngleUnit.RADIANS

    @classmethod
    def rad(cls, value: float) -> Angle:
        return cls(float(value), AngleUnit.RADIANS)

    @classmethod
    def deg(cls, value: float) -> Angle:
        return cls(float(value), AngleUnit.DEGREES)

    @property
    def radians(self) -> float:
        if self.units is AngleUnit.DEGREES:
            return math.radians(self.value)
        return self.value

    @property
    def degrees(self) -> float:
        if self.units is AngleUnit.RADIANS:
            return math.degrees(self.value)
        return self.value

    def to(self, units: AngleUnit) -> Angle:
        if units is self.units:
            return self
        if units is AngleUnit.RADIANS:
            return Angle(self.radians, units)
        return Angle(self.degrees, units)

    def _full_turn(self) -> float:
        return TAU if self.units is AngleUnit.RADIANS else 360.0

    def normalized(self) -> Angle:
        """Equivalent angle in [0, 2π) (or [0, 360) degrees)."""
        turn = self._full_turn()
        value = self.value % turn
        # Float modulo can land exactly on the full turn for tiny negatives
        if value >= turn:
            value -= turn
        return Angle(value, self.units)

    def norm_delta(self) -> Angle:
        """Equivalent angle in (-π, π] (or (-180, 180] degrees)."""
        turn = self._full_turn()
        value = self.normalized().value
        if value > turn / 2.0:
            value -= turn
        return Angle(value, self.units)

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)

    def __add__(self, other: Angle) -> Angle:
        return Angle(self.value + other.to(self.units).value, self.units)

    def __sub__(self, other: Angle) -> Angle:
        return Angle(self.value - other.to(self.units).value, self.units)

    def __neg__(self) -> Angle:
        return Angle(-self.value, self.units)

    def __mul__(self, scalar: float) -> Angle:
        return Angle(self.value * scalar, self.units)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Angle:
        return Angle(self.value / scalar, self.units)

    def __abs__(self) -> Angle:
        return Angle(abs(self.value), self.units)

    def epsilon_equals(self, other: Angle, epsilon: float = EPSILON) -> bool:
        """True if both angles point the same way (within epsilon radians)."""
        return abs((self - other).norm_delta().radians) < epsilon

    def __str__(self) -> str:
        suffix = "°" if self.units is AngleUnit.DEGREES else " rad"
        return f"{self.value:.3f}{suffix}"
