"""
Trajectory generation: fit -> parameterize -> profile.

One entry point covers every variant: waypoints with or without headings,
forward or reversed travel, any kinematic limits.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from splinetraj.config import DEFAULT_SAMPLE_STEP
from splinetraj.spline import fit_path
from splinetraj.trajectory import Trajectory
from splinetraj.types import (
    KinematicConfig,
    Pose2d,
    TrajectoryState,
    Waypoint,
    WaypointLike,
    as_waypoint,
    normalize_angle,
)
from splinetraj.utils.arc_length import parameterize
from splinetraj.utils.velocity_profile import solve_velocity_profile

logger = logging.getLogger(__name__)


def _flip(waypoints: Sequence[Waypoint]) -> list[Waypoint]:
    return [
        Waypoint(wp.x, wp.y, None if wp.heading is None else normalize_angle(wp.heading + math.pi))
        for wp in waypoints
    ]


def generate_trajectory(
    waypoints: Sequence[WaypointLike],
    config: KinematicConfig,
    spline_type: str = "auto",
) -> Trajectory:
    """
    Generate a time-parameterized trajectory through the waypoints.

    Args:
        waypoints: Ordered Waypoints or (x, y[, heading]) tuples, at least two
        config: Kinematic limits; validated before any work is done
        spline_type: 'auto', 'quintic', or 'cubic' (see splinetraj.spline.fit_path)

    Returns:
        Trajectory starting at time 0 at the first waypoint and ending at the last

    Raises:
        InvalidConfigError: limits are invalid or boundary speeds are infeasible
        InsufficientWaypointsError: fewer than two waypoints
        DegenerateSegmentError: consecutive waypoints coincide
        SingularCurvatureError: the fitted curve has a cusp
        ZeroVelocitySegmentError: the profile would stall
    """
    config.validate()
    wps = [as_waypoint(wp) for wp in waypoints]
    step = DEFAULT_SAMPLE_STEP if config.sample_step is None else float(config.sample_step)

    # Reversed travel: fit the path facing backwards, then turn poses around
    if config.reversed:
        wps = _flip(wps)

    path = fit_path(wps, spline_type)
    samples = parameterize(path, step)
    profile = solve_velocity_profile(samples.s, samples.curvature, config)

    sign = -1.0 if config.reversed else 1.0
    heading = samples.heading + math.pi if config.reversed else samples.heading
    curvature = -samples.curvature if config.reversed else samples.curvature
    velocity = sign * profile.velocity
    acceleration = sign * profile.acceleration

    states = [
        TrajectoryState(
            time=float(profile.time[i]),
            pose=Pose2d(float(samples.x[i]), float(samples.y[i]), normalize_angle(float(heading[i]))),
            velocity=float(velocity[i]),
            acceleration=float(acceleration[i]),
            curvature=float(curvature[i]),
            distance=float(samples.s[i]),
        )
        for i in range(len(samples))
    ]
    trajectory = Trajectory(states)
    logger.debug(
        f"Generated {path.kind} trajectory: waypoints={len(wps)} states={len(trajectory)} "
        f"length={samples.length:.4f} duration={trajectory.total_time:.4f} "
        f"peak_v={float(np.max(profile.velocity)):.4f}"
    )
    return trajectory
