"""
Central configuration for motionctl tunables and shared constants.
"""

from __future__ import annotations

import logging
import math
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("MOTIONCTL_TRACE", "0")).lower() in (
    "1",
    "true",
    "yes",
    "on",
)

logger = logging.getLogger(__name__)

LOG_LEVEL_DEFAULT: str = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


# Control loop rate (Hz) used by followers and the CLI sampler
CONTROL_RATE_HZ: float = _env_float("MOTIONCTL_CONTROL_RATE_HZ", 100.0)

# Centralized loop interval (seconds).
INTERVAL_S: float = max(1e-6, 1.0 / max(CONTROL_RATE_HZ, 1.0))

# Relative tolerance for merging profile pieces and feasibility checks
PROFILE_TOLERANCE: float = _env_float("MOTIONCTL_PROFILE_TOLERANCE", 1e-6)

# Arc-length spacing of the path-constrained forward/backward pass samples
PROFILE_RESOLUTION: float = _env_float("MOTIONCTL_PROFILE_RESOLUTION", 0.25)

# Maximum heading jump tolerated at a path join (G1 continuity)
PATH_HEADING_TOLERANCE_RAD: float = math.radians(
    _env_float("MOTIONCTL_HEADING_TOLERANCE_DEG", 0.1)
)

# Samples of |P'(t)| used to build a spline's arc-length table
SPLINE_ARC_SAMPLES: int = int(_env_float("MOTIONCTL_SPLINE_ARC_SAMPLES", 2000))

# Curvature magnitude treated as a straight line
CURVATURE_EPSILON: float = 1e-9

# Closed-loop position controller "at target" window (encoder ticks)
POSITION_TOLERANCE_TICKS: int = int(
    _env_float("MOTIONCTL_POSITION_TOLERANCE_TICKS", 10)
)

# Generic drive constraints (distance units, seconds)
DEFAULT_MAX_VEL: float = 30.0
DEFAULT_MAX_ACCEL: float = 30.0
DEFAULT_MAX_ANG_VEL_DEG: float = 180.0

# Validate tunables at module load
if PROFILE_TOLERANCE <= 0 or PROFILE_RESOLUTION <= 0:
    raise ValueError(
        "Profile tolerance and resolution must be positive. Check MOTIONCTL_PROFILE_* env vars."
    )
if SPLINE_ARC_SAMPLES < 16:
    raise ValueError("MOTIONCTL_SPLINE_ARC_SAMPLES must be at least 16.")
if PATH_HEADING_TOLERANCE_RAD <= 0:
    raise ValueError("MOTIONCTL_HEADING_TOLERANCE_DEG must be positive.")
