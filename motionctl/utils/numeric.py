"""Small scalar helpers shared by geometry, planning and control."""

EPSILON: float = 1e-6


def epsilon_equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """True if a and b differ by less than epsilon."""
    return abs(a - b) < epsilon


def clamp(v: float, lo: float, hi: float) -> float:
    return hi if v > hi else lo if v < lo else v


def sign(v: float) -> float:
    """-1.0, 0.0 or 1.0."""
    if v > 0.0:
        return 1.0
    if v < 0.0:
        return -1.0
    return 0.0
