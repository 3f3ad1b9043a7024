"""
Sampled, serializable views of profiles and trajectories.

Reports are msgspec Structs so they encode straight to JSON; the sample
records are array-like to keep long sample lists compact:

  ProfileReport:    {"type": "profile", "duration", "dt", "samples": [[t, x, v, a], ...]}
  TrajectoryReport: {"type": "trajectory", "duration", "length", "dt",
                     "samples": [[t, s, x, y, heading, speed, vx, vy, ax, ay, omega], ...]}
"""

from __future__ import annotations

import logging
from typing import Union

import msgspec
import numpy as np

from motionctl.motion.profile import MotionProfile
from motionctl.motion.trajectory import Trajectory

logger = logging.getLogger(__name__)


def _enc_hook(obj: object) -> object:
    """Custom encoder hook for numpy types."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()
    raise NotImplementedError(f"Cannot encode {type(obj)}")


class ProfileSampleRecord(msgspec.Struct, array_like=True, frozen=True):
    t: float
    x: float
    v: float
    a: float


class TrajectorySampleRecord(msgspec.Struct, array_like=True, frozen=True):
    t: float
    s: float
    x: float
    y: float
    heading: float  # radians
    speed: float
    vx: float
    vy: float
    ax: float
    ay: float
    omega: float  # rad/s


class ProfileReport(msgspec.Struct, tag_field="type", tag="profile", frozen=True):
    duration: float
    dt: float
    samples: list[ProfileSampleRecord]


class TrajectoryReport(msgspec.Struct, tag_field="type", tag="trajectory", frozen=True):
    duration: float
    length: float
    dt: float
    samples: list[TrajectorySampleRecord]


Report = Union[ProfileReport, TrajectoryReport]

_encoder = msgspec.json.Encoder(enc_hook=_enc_hook)
_decoder = msgspec.json.Decoder(Report)


def sample_times(duration: float, dt: float) -> np.ndarray:
    """Times 0, dt, 2dt, ... with duration always included as the last entry."""
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")
    times = np.arange(0.0, duration, dt, dtype=np.float64)
    if times.size == 0 or times[-1] < duration:
        times = np.append(times, duration)
    return times


def sample_profile(profile: MotionProfile, dt: float) -> ProfileReport:
    duration = profile.duration()
    samples = []
    for t in sample_times(duration, dt):
        state = profile.get(float(t))
        samples.append(ProfileSampleRecord(float(t), state.x, state.v, state.a))
    logger.debug("Sampled profile: %d samples over %.3fs", len(samples), duration)
    return ProfileReport(duration=duration, dt=dt, samples=samples)


def sample_trajectory(trajectory: Trajectory, dt: float) -> TrajectoryReport:
    duration = trajectory.duration()
    samples = []
    for t in sample_times(duration, dt):
        st = trajectory.sample(float(t))
        samples.append(
            TrajectorySampleRecord(
                t=st.time,
                s=st.s,
                x=st.pose.x,
                y=st.pose.y,
                heading=st.pose.heading.radians,
                speed=st.speed,
                vx=st.velocity.x,
                vy=st.velocity.y,
                ax=st.acceleration.x,
                ay=st.acceleration.y,
                omega=st.angular_velocity,
            )
        )
    logger.debug("Sampled trajectory: %d samples over %.3fs", len(samples), duration)
    return TrajectoryReport(
        duration=duration, length=trajectory.path.length, dt=dt, samples=samples
    )


def encode_report(report: Report) -> bytes:
    return _encoder.encode(report)


def decode_report(data: bytes | str) -> Report:
    return _decoder.decode(data)
