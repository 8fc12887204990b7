"""
Type definitions for splinetraj.

Defines the waypoint, pose, configuration and state value types used across
the public API. All of them are frozen dataclasses: a generated trajectory
never changes after creation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from splinetraj.utils.errors import InvalidConfigError


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians to (-pi, pi]."""
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    if wrapped == -math.pi:
        return math.pi
    return wrapped


@dataclass(frozen=True)
class Waypoint:
    """A position the path must pass through, with an optional heading (radians)."""
    x: float
    y: float
    heading: float | None = None

    @classmethod
    def from_degrees(cls, x: float, y: float, heading_deg: float | None = None) -> Waypoint:
        return cls(float(x), float(y), None if heading_deg is None else math.radians(heading_deg))

    @property
    def has_heading(self) -> bool:
        return self.heading is not None


WaypointLike = Union[Waypoint, Sequence[float]]


def as_waypoint(item: WaypointLike) -> Waypoint:
    """Accept a Waypoint or a plain (x, y) / (x, y, heading) tuple."""
    if isinstance(item, Waypoint):
        return item
    values = list(item)
    if len(values) == 2:
        return Waypoint(float(values[0]), float(values[1]))
    if len(values) == 3:
        heading = values[2]
        return Waypoint(
            float(values[0]), float(values[1]), None if heading is None else float(heading)
        )
    raise ValueError(f"Waypoint needs 2 or 3 values, got {len(values)}: {values!r}")


@dataclass(frozen=True)
class Pose2d:
    """Planar pose; heading in radians."""
    x: float
    y: float
    heading: float

    def distance_to(self, other: Pose2d) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def interpolate(self, other: Pose2d, fraction: float) -> Pose2d:
        """Linear blend of position, shortest-arc blend of heading."""
        dh = normalize_angle(other.heading - self.heading)
        return Pose2d(
            self.x + (other.x - self.x) * fraction,
            self.y + (other.y - self.y) * fraction,
            normalize_angle(self.heading + dh * fraction),
        )


@dataclass(frozen=True)
class KinematicConfig:
    """
    Kinematic limits for one generation call.

    Attributes:
        max_velocity: Speed limit along the path (length units / s), > 0
        max_acceleration: Tangential acceleration limit (length units / s^2), > 0
        start_velocity: Speed at the first waypoint, 0 <= v <= max_velocity
        end_velocity: Speed at the last waypoint, 0 <= v <= max_velocity
        max_centripetal_acceleration: Optional lateral acceleration limit
        reversed: Traverse the path backwards (negative velocities)
        sample_step: Arc-length sampling increment; None uses config.DEFAULT_SAMPLE_STEP
    """
    max_velocity: float
    max_acceleration: float
    start_velocity: float = 0.0
    end_velocity: float = 0.0
    max_centripetal_acceleration: float | None = None
    reversed: bool = False
    sample_step: float | None = None

    def validate(self) -> None:
        """Raise InvalidConfigError unless the limits can produce a finite-time path."""
        for name in ("max_velocity", "max_acceleration", "start_velocity", "end_velocity"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfigError(f"{name} must be finite, got {value}")
        if self.max_velocity <= 0:
            raise InvalidConfigError(f"max_velocity must be > 0, got {self.max_velocity}")
        if self.max_acceleration <= 0:
            raise InvalidConfigError(f"max_acceleration must be > 0, got {self.max_acceleration}")
        for name in ("start_velocity", "end_velocity"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidConfigError(f"{name} must be >= 0, got {value}")
            if value > self.max_velocity:
                raise InvalidConfigError(
                    f"{name}={value} exceeds max_velocity={self.max_velocity}"
                )
        a_lat = self.max_centripetal_acceleration
        if a_lat is not None and not (math.isfinite(a_lat) and a_lat > 0):
            raise InvalidConfigError(f"max_centripetal_acceleration must be > 0, got {a_lat}")
        if self.sample_step is not None and not (
            math.isfinite(self.sample_step) and self.sample_step > 0
        ):
            raise InvalidConfigError(f"sample_step must be > 0, got {self.sample_step}")


@dataclass(frozen=True)
class TrajectoryState:
    """One time-stamped kinematic state along a trajectory."""
    time: float
    pose: Pose2d
    velocity: float
    acceleration: float
    curvature: float
    distance: float = 0.0

    def interpolate(self, end: TrajectoryState, t: float) -> TrajectoryState:
        """
        State at absolute time t, assuming constant acceleration from self to end.

        Pose and curvature are blended by the fraction of the interval's
        distance covered, which matches how the path itself was sampled.
        """
        if t <= self.time:
            return self
        if t >= end.time:
            return end
        dt = t - self.time
        v = self.velocity + self.acceleration * dt
        travelled = self.velocity * dt + 0.5 * self.acceleration * dt * dt
        span = end.distance - self.distance
        if span > 0:
            # Travel is signed when reversed; distance is always forward arc length
            fraction = min(max(abs(travelled) / span, 0.0), 1.0)
        else:
            fraction = (t - self.time) / (end.time - self.time)
        return TrajectoryState(
            time=t,
            pose=self.pose.interpolate(end.pose, fraction),
            velocity=v,
            acceleration=self.acceleration,
            curvature=self.curvature + (end.curvature - self.curvature) * fraction,
            distance=self.distance + span * fraction,
        )
