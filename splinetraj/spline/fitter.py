"""
Path fitting: turn an ordered waypoint list into a C² SplinePath.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from splinetraj.config import COINCIDENT_TOL, QUINTIC_TANGENT_SCALE
from splinetraj.types import Waypoint
from splinetraj.utils.errors import DegenerateSegmentError, InsufficientWaypointsError

from .base import SplinePath
from .cubic import fit_cubic_segments
from .quintic import QuinticHermiteSegment

logger = logging.getLogger(__name__)

SPLINE_TYPES = ("auto", "quintic", "cubic")


def check_waypoints(waypoints: Sequence[Waypoint]) -> NDArray:
    """
    Validate count and spacing; return positions as an (N, 2) array.

    Raises:
        InsufficientWaypointsError: fewer than two waypoints
        DegenerateSegmentError: two consecutive waypoints coincide
    """
    if len(waypoints) < 2:
        raise InsufficientWaypointsError(
            f"at least 2 waypoints are required, got {len(waypoints)}"
        )
    points = np.array([[wp.x, wp.y] for wp in waypoints], dtype=float)
    if not np.all(np.isfinite(points)):
        raise ValueError("waypoint coordinates must be finite")
    chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
    for i, chord in enumerate(chords):
        if chord <= COINCIDENT_TOL:
            raise DegenerateSegmentError(
                f"waypoints {i} and {i + 1} coincide at ({points[i, 0]}, {points[i, 1]})",
                index=i,
            )
    return points


def infer_headings(points: NDArray, headings: Sequence[float | None]) -> list[float]:
    """
    Fill in missing headings by Catmull-Rom style chord averaging.

    Interior points take the direction of the sum of the unit incoming and
    outgoing chords; end points take their adjacent chord. When the two chords
    cancel (the path doubles back) the outgoing chord is used.
    """
    chords = np.diff(points, axis=0)
    units = chords / np.linalg.norm(chords, axis=1, keepdims=True)
    n = len(points)
    result: list[float] = []
    for i, heading in enumerate(headings):
        if heading is not None:
            result.append(float(heading))
            continue
        if i == 0:
            direction = units[0]
        elif i == n - 1:
            direction = units[-1]
        else:
            direction = units[i - 1] + units[i]
            if np.linalg.norm(direction) < 1e-9:
                direction = units[i]
        result.append(math.atan2(direction[1], direction[0]))
    return result


def _fit_quintic(points: NDArray, headings: Sequence[float | None]) -> SplinePath:
    full = infer_headings(points, headings)
    segments = []
    for i in range(len(points) - 1):
        p0, p1 = points[i], points[i + 1]
        scale = QUINTIC_TANGENT_SCALE * float(np.linalg.norm(p1 - p0))
        t0 = scale * np.array([math.cos(full[i]), math.sin(full[i])])
        t1 = scale * np.array([math.cos(full[i + 1]), math.sin(full[i + 1])])
        segments.append(QuinticHermiteSegment(p0, p1, t0, t1))
    return SplinePath(segments, kind="quintic")


def _fit_cubic(points: NDArray, headings: Sequence[float | None]) -> SplinePath:
    interior = [i for i, h in enumerate(headings[1:-1], start=1) if h is not None]
    if interior:
        raise ValueError(
            f"cubic fit cannot honour interior headings at waypoint(s) {interior}; "
            f"use 'quintic' or 'auto'"
        )
    return SplinePath(fit_cubic_segments(points, headings[0], headings[-1]), kind="cubic")


def fit_path(waypoints: Sequence[Waypoint], spline_type: str = "auto") -> SplinePath:
    """
    Fit a twice-differentiable curve through the waypoints, in order.

    Args:
        waypoints: Ordered waypoints, at least two
        spline_type: 'quintic', 'cubic', or 'auto'. 'auto' picks cubic only when
            no interior waypoint carries a heading and at least one heading is
            missing; otherwise quintic, inferring any missing headings

    Returns:
        SplinePath with one segment per consecutive waypoint pair

    Raises:
        ValueError: unknown spline_type, non-finite coordinates, or 'cubic'
            with an interior heading
    """
    if spline_type not in SPLINE_TYPES:
        raise ValueError(f"Unknown spline type: {spline_type}")
    points = check_waypoints(waypoints)
    headings = [wp.heading for wp in waypoints]

    if spline_type == "auto":
        all_given = all(wp.has_heading for wp in waypoints)
        interior_given = any(wp.has_heading for wp in waypoints[1:-1])
        spline_type = "quintic" if all_given or interior_given else "cubic"

    if spline_type == "quintic":
        path = _fit_quintic(points, headings)
    else:
        path = _fit_cubic(points, headings)
    logger.trace(f"Fitted {path.kind} path with {path.n_segments} segment(s)")  # type: ignore[attr-defined]
    return path
