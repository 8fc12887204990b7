"""
Velocity-profile solve over arc-length samples.

Forward/backward passes give the fastest speed assignment within the
velocity caps and the acceleration limit. Time stamps follow from constant
acceleration between samples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from splinetraj.config import BOUNDARY_VELOCITY_TOL
from splinetraj.types import KinematicConfig
from splinetraj.utils.errors import InfeasibleBoundaryError, ZeroVelocitySegmentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VelocityProfile:
    """Unsigned speed, tangential acceleration and time per sample."""
    velocity: NDArray
    acceleration: NDArray
    time: NDArray

    @property
    def duration(self) -> float:
        return float(self.time[-1])


def velocity_caps(curvature: ArrayLike, config: KinematicConfig) -> NDArray:
    """
    Per-sample speed bound: max_velocity, reduced to sqrt(a_lat / |k|) when a
    centripetal limit is configured.
    """
    k = np.abs(np.asarray(curvature, dtype=float))
    caps = np.full(k.shape, float(config.max_velocity))
    a_lat = config.max_centripetal_acceleration
    if a_lat is not None:
        curved = k > 1e-12
        caps[curved] = np.minimum(caps[curved], np.sqrt(a_lat / k[curved]))
    return caps


def forward_pass(s: NDArray, caps: NDArray, v0: float, a_max: float) -> NDArray:
    """Accelerate from v0 as hard as allowed: v_i = min(cap_i, sqrt(v_{i-1}^2 + 2 a ds))."""
    v = np.empty_like(caps)
    v[0] = v0
    for i in range(1, len(s)):
        ds = s[i] - s[i - 1]
        v[i] = min(caps[i], math.sqrt(v[i - 1] ** 2 + 2.0 * a_max * ds))
    return v


def backward_pass(s: NDArray, v: NDArray, a_max: float) -> NDArray:
    """Limit deceleration into every sample, walking from the end."""
    out = v.copy()
    for i in range(len(s) - 2, -1, -1):
        ds = s[i + 1] - s[i]
        out[i] = min(out[i], math.sqrt(out[i + 1] ** 2 + 2.0 * a_max * ds))
    return out


def reconstruct_time(s: NDArray, v: NDArray) -> NDArray:
    """
    Integrate dt = ds / mean(v_i, v_{i+1}).

    Raises:
        ZeroVelocitySegmentError: both bracketing speeds are zero on a non-empty interval
    """
    ds = np.diff(s)
    v_avg = 0.5 * (v[:-1] + v[1:])
    stalled = (v_avg <= 0.0) & (ds > 0.0)
    if np.any(stalled):
        i = int(np.argmax(stalled))
        raise ZeroVelocitySegmentError(
            f"zero velocity on interval s=[{s[i]:.6f}, {s[i + 1]:.6f}]"
        )
    dt = np.divide(ds, v_avg, out=np.zeros_like(ds), where=v_avg > 0.0)
    return np.concatenate([[0.0], np.cumsum(dt)])


def interval_accelerations(s: NDArray, v: NDArray) -> NDArray:
    """Constant acceleration of each interval, assigned to its first sample; the last repeats."""
    ds = np.diff(s)
    acc = np.divide(
        v[1:] ** 2 - v[:-1] ** 2, 2.0 * ds, out=np.zeros_like(ds), where=ds > 0.0
    )
    if len(acc) == 0:
        return np.zeros(1)
    return np.concatenate([acc, acc[-1:]])


def solve_velocity_profile(
    s: ArrayLike, curvature: ArrayLike, config: KinematicConfig
) -> VelocityProfile:
    """
    Assign the maximum feasible speed to every arc-length sample.

    The first and last samples are pinned to start_velocity and end_velocity.

    Args:
        s: Strictly increasing arc lengths, at least two
        curvature: Curvature per sample
        config: Validated kinematic limits

    Raises:
        InfeasibleBoundaryError: the boundary speeds cannot be joined within max_acceleration
        ZeroVelocitySegmentError: the profile would stall on a non-empty interval
    """
    s_arr = np.asarray(s, dtype=float)
    caps = velocity_caps(curvature, config)
    a_max = float(config.max_acceleration)
    v_start = float(config.start_velocity)
    v_end = float(config.end_velocity)
    tol = BOUNDARY_VELOCITY_TOL * max(1.0, float(config.max_velocity))

    for label, v_pin, cap in (("start", v_start, caps[0]), ("end", v_end, caps[-1])):
        if v_pin > cap + tol:
            logger.warning(
                f"{label} velocity {v_pin} exceeds the curvature limit {cap:.4f} at the {label} point"
            )
    caps[0] = v_start
    caps[-1] = v_end

    v = forward_pass(s_arr, caps, v_start, a_max)
    if v[-1] < v_end - tol:
        raise InfeasibleBoundaryError(
            f"cannot reach end velocity {v_end} over {s_arr[-1]:.4f}; at most {v[-1]:.4f}"
        )
    v = backward_pass(s_arr, v, a_max)
    if v[0] < v_start - tol:
        raise InfeasibleBoundaryError(
            f"cannot slow from start velocity {v_start} in {s_arr[-1]:.4f}; at most {v[0]:.4f}"
        )
    v[0] = v_start
    v[-1] = v_end

    time = reconstruct_time(s_arr, v)
    acc = interval_accelerations(s_arr, v)
    logger.trace(  # type: ignore[attr-defined]
        f"Velocity profile: peak={float(np.max(v)):.4f} duration={time[-1]:.4f}"
    )
    return VelocityProfile(velocity=v, acceleration=acc, time=time)


def trapezoid_timings(
    distance: float, v_max: float, a_max: float
) -> tuple[float, float, float, float, bool]:
    """
    Closed-form rest-to-rest trapezoid or triangle timing along a straight line.

    Returns: (T, t_a, t_c, v_peak, triangular)
      - T: total time
      - t_a: accel time
      - t_c: constant velocity time (0 for triangular)
      - v_peak: peak velocity reached
      - triangular: True if triangular profile (no cruise), else False
    """
    if distance <= 0 or v_max <= 0 or a_max <= 0:
        return 0.0, 0.0, 0.0, 0.0, True

    t_a = v_max / a_max
    s_a = 0.5 * a_max * t_a**2  # distance covered during accel

    if 2 * s_a < distance:
        # Trapezoidal: accel, cruise, decel
        s_c = distance - 2 * s_a
        t_c = s_c / v_max
        return 2 * t_a + t_c, t_a, t_c, v_max, False
    # Triangular: peak velocity determined by distance
    v_peak = math.sqrt(a_max * distance)
    t_a = v_peak / a_max
    return 2 * t_a, t_a, 0.0, v_peak, True
