"""
splinetraj Python Package

Smooth, time-parameterized trajectories through 2D waypoints under velocity
and acceleration limits.

Key components:
- generate_trajectory: Fit, parameterize and profile a path in one call
- Trajectory: Immutable result with interpolated sampling
- Waypoint / KinematicConfig: Inputs
- TrajectoryState / Pose2d: Output states
"""

from ._version import __version__
from .generator import generate_trajectory
from .trajectory import Trajectory
from .types import KinematicConfig, Pose2d, TrajectoryState, Waypoint
from .utils.errors import (
    DegenerateSegmentError,
    InfeasibleBoundaryError,
    InsufficientWaypointsError,
    InvalidConfigError,
    OutOfRangeError,
    SingularCurvatureError,
    TrajectoryPlanningError,
    ZeroVelocitySegmentError,
)

__all__ = [
    "__version__",
    "generate_trajectory",
    "Trajectory",
    "Waypoint",
    "KinematicConfig",
    "Pose2d",
    "TrajectoryState",
    "TrajectoryPlanningError",
    "InsufficientWaypointsError",
    "DegenerateSegmentError",
    "SingularCurvatureError",
    "InvalidConfigError",
    "InfeasibleBoundaryError",
    "ZeroVelocitySegmentError",
    "OutOfRangeError",
]
