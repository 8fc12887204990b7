"""
Custom exception types for the splinetraj generation pipeline.
Every generation or sampling failure is a TrajectoryPlanningError; the
subclasses let callers tell bad input apart from infeasible kinematics.
"""


class TrajectoryPlanningError(RuntimeError):
    """Trajectory generation/planning failure."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Trajectory Planning Error: {message}")

    def __str__(self):
        return f"Trajectory Planning Error: {self.original_message}"


class InsufficientWaypointsError(TrajectoryPlanningError):
    """Fewer than two waypoints were supplied."""


class DegenerateSegmentError(TrajectoryPlanningError):
    """Two consecutive waypoints coincide, so the segment has no tangent."""

    def __init__(self, message: str, index: int = -1):
        self.index = index
        super().__init__(message)


class SingularCurvatureError(TrajectoryPlanningError):
    """The curve derivative vanished at a sample (cusp)."""


class InvalidConfigError(TrajectoryPlanningError):
    """Kinematic limits are non-positive, inconsistent or can never finish the path."""


class InfeasibleBoundaryError(InvalidConfigError):
    """Start/end velocities cannot be joined within the acceleration limit."""


class ZeroVelocitySegmentError(TrajectoryPlanningError):
    """A non-empty interval would be traversed at zero speed."""


class OutOfRangeError(TrajectoryPlanningError):
    """Sampling time lies outside [0, total_time]."""

    def __init__(self, t: float, total_time: float):
        self.t = t
        self.total_time = total_time
        super().__init__(f"sample time {t} outside [0, {total_time}]")
