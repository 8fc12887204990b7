"""
Shared SE(2) transformation utilities for trajectory poses.

Poses are converted to spatialmath SE2 objects for composition and back to
Pose2d (radians, heading wrapped to (-pi, pi]).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from spatialmath import SE2

from splinetraj.types import Pose2d, normalize_angle

logger = logging.getLogger(__name__)


def pose_to_se2(pose: Pose2d) -> SE2:
    """Convert Pose2d to an SE2 transform."""
    return SE2(pose.x, pose.y, pose.heading)


def se2_to_pose(T: SE2) -> Pose2d:
    """Convert SE2 transform to Pose2d."""
    x, y, theta = T.xyt()
    return Pose2d(float(x), float(y), normalize_angle(float(theta)))


def relative_pose(pose: Pose2d, frame: Pose2d) -> Pose2d:
    """Express `pose` in the frame of `frame`: frame^-1 * pose."""
    return se2_to_pose(pose_to_se2(frame).inv() * pose_to_se2(pose))


def transform_poses(poses: Iterable[Pose2d], T: SE2) -> list[Pose2d]:
    """Left-multiply every pose by T."""
    return [se2_to_pose(T * pose_to_se2(p)) for p in poses]
