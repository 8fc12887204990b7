"""
Immutable time-parameterized trajectory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import asdict, replace
from typing import Any

import numpy as np
from numpy.typing import NDArray

from splinetraj.types import Pose2d, TrajectoryState
from splinetraj.utils import frames
from splinetraj.utils.errors import OutOfRangeError

logger = logging.getLogger(__name__)


class Trajectory:
    """
    Ordered, time-indexed sequence of TrajectoryState.

    The first state is at time 0 and times never decrease. Instances are never
    mutated; transforms return new trajectories.
    """

    __slots__ = ("_states", "_times")

    def __init__(self, states: Sequence[TrajectoryState]):
        if not states:
            raise ValueError("Trajectory needs at least one state")
        times = np.array([st.time for st in states], dtype=float)
        if times[0] != 0.0:
            raise ValueError(f"first state must be at time 0, got {times[0]}")
        if np.any(np.diff(times) < 0.0):
            raise ValueError("state times must be non-decreasing")
        self._states: tuple[TrajectoryState, ...] = tuple(states)
        self._times = times
        self._times.setflags(write=False)

    @property
    def states(self) -> tuple[TrajectoryState, ...]:
        return self._states

    @property
    def total_time(self) -> float:
        return self._states[-1].time

    @property
    def initial_pose(self) -> Pose2d:
        return self._states[0].pose

    @property
    def final_pose(self) -> Pose2d:
        return self._states[-1].pose

    @property
    def length(self) -> float:
        """Arc length of the traversed path."""
        return self._states[-1].distance - self._states[0].distance

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[TrajectoryState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> TrajectoryState:
        return self._states[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trajectory):
            return NotImplemented
        return self._states == other._states

    def __hash__(self) -> int:
        return hash(self._states)

    def __repr__(self) -> str:
        return (
            f"Trajectory(states={len(self)}, total_time={self.total_time:.4f}, "
            f"length={self.length:.4f})"
        )

    def __add__(self, other: Trajectory) -> Trajectory:
        return self.concatenate(other)

    def sample(self, t: float, clamp: bool = False) -> TrajectoryState:
        """
        State at elapsed time t, interpolated between the bracketing states.

        Args:
            t: Elapsed time in [0, total_time]
            clamp: Clamp t into range instead of raising

        Raises:
            OutOfRangeError: t outside [0, total_time] and clamp is False
        """
        t = float(t)
        if t < 0.0 or t > self.total_time or t != t:
            if not clamp or t != t:
                raise OutOfRangeError(t, self.total_time)
            t = min(max(t, 0.0), self.total_time)

        idx = int(np.searchsorted(self._times, t, side="right"))
        if idx <= 0:
            return self._states[0]
        if idx >= len(self._states):
            return self._states[-1]
        prev, nxt = self._states[idx - 1], self._states[idx]
        if nxt.time - prev.time <= 0.0:
            return nxt
        return prev.interpolate(nxt, t)

    def poses(self) -> NDArray:
        """Array of shape (N, 3): x, y, heading per state."""
        return np.array([[st.pose.x, st.pose.y, st.pose.heading] for st in self._states])

    def transform_by(self, transform: Pose2d) -> Trajectory:
        """
        Move the trajectory rigidly so that it starts at initial_pose * transform.

        Times, velocities and curvature are unchanged.
        """
        first = frames.pose_to_se2(self.initial_pose)
        delta = frames.pose_to_se2(transform)
        T = first * delta * first.inv()
        poses = frames.transform_poses((st.pose for st in self._states), T)
        return Trajectory([replace(st, pose=p) for st, p in zip(self._states, poses)])

    def relative_to(self, pose: Pose2d) -> Trajectory:
        """Express every state in the frame of `pose`."""
        return Trajectory([replace(st, pose=frames.relative_pose(st.pose, pose)) for st in self._states])

    def concatenate(self, other: Trajectory) -> Trajectory:
        """
        Append `other`, shifting its times and distances to follow this trajectory.

        The first state of `other` is dropped; it is expected to coincide with
        this trajectory's last state.
        """
        last = self._states[-1]
        if other.initial_pose.distance_to(last.pose) > 1e-6:
            logger.warning(
                f"Concatenating trajectories with a gap of "
                f"{other.initial_pose.distance_to(last.pose):.6f} between end and start"
            )
        shifted = [
            replace(st, time=st.time + last.time, distance=st.distance + last.distance)
            for st in other.states[1:]
        ]
        return Trajectory(list(self._states) + shifted)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Plain-data view of every state."""
        return [asdict(st) for st in self._states]
