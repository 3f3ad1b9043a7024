"""Device boundary for a single actuator."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MotorDevice(Protocol):
    """
    Anything that reports an encoder position and accepts a power command.

    Both calls are expected to be non-blocking register accesses; the
    transport behind them is the device's business.
    """

    def read_position(self) -> int:
        """Raw encoder position in ticks."""
        ...

    def write_power(self, power: float) -> None:
        """Apply a power command in [-1, 1]."""
        ...
