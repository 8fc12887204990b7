"""
Arc-length reparameterization of a SplinePath.

Produces a dense, fixed-step sample of (arc length, position, heading,
curvature) along the whole path. Waypoints are always kept as samples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import cumulative_trapezoid, trapezoid

from splinetraj.config import ARC_LENGTH_OVERSAMPLE, MIN_POINTS_PER_SEGMENT, SINGULAR_SPEED_EPS
from splinetraj.spline.base import SplinePath, SplineSegment, curvature_from_derivatives
from splinetraj.utils.errors import SingularCurvatureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathSamples:
    """Arc-length samples of a path; every array has one entry per sample."""
    s: NDArray
    x: NDArray
    y: NDArray
    heading: NDArray
    curvature: NDArray
    u: NDArray
    waypoint_indices: NDArray

    def __len__(self) -> int:
        return len(self.s)

    @property
    def length(self) -> float:
        return float(self.s[-1])


def _arc_length_table(segment: SplineSegment, step: float) -> tuple[NDArray, NDArray]:
    """Tabulate cumulative arc length over a parameter grid dense enough for `step`."""
    coarse = np.linspace(0.0, 1.0, MIN_POINTS_PER_SEGMENT + 1)
    coarse_speed = np.linalg.norm(segment.derivatives(coarse)[1], axis=1)
    estimate = float(trapezoid(coarse_speed, coarse))
    n = max(MIN_POINTS_PER_SEGMENT, int(math.ceil(estimate / step * ARC_LENGTH_OVERSAMPLE)))
    grid = np.linspace(0.0, 1.0, n + 1)
    speed = np.linalg.norm(segment.derivatives(grid)[1], axis=1)
    if float(np.min(speed)) < SINGULAR_SPEED_EPS:
        at = float(grid[int(np.argmin(speed))])
        raise SingularCurvatureError(f"curve derivative vanishes near u={at:.4f}")
    return grid, cumulative_trapezoid(speed, grid, initial=0.0)


def parameterize(path: SplinePath, step: float) -> PathSamples:
    """
    Sample a path at fixed arc-length increments.

    Samples fall on every multiple of `step` from the start, on every segment
    boundary (waypoint), and on the path end. A segment shorter than `step`
    gets its midpoint instead. Arc length is strictly increasing.

    Args:
        path: Fitted path
        step: Arc-length increment (> 0)

    Raises:
        SingularCurvatureError: the curve derivative vanishes (cusp)
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    s_parts: list[NDArray] = []
    u_parts: list[NDArray] = []
    waypoint_indices = [0]
    offset = 0.0
    count = 0
    # Grid points closer than this to a waypoint are dropped to keep ds well-conditioned
    min_gap = step * 1e-3

    for i, segment in enumerate(path.segments):
        grid, cum = _arc_length_table(segment, step)
        seg_len = float(cum[-1])

        k0 = int(math.floor(offset / step)) + 1
        k1 = int(math.ceil((offset + seg_len) / step))
        ks = np.arange(k0, k1, dtype=float) * step - offset
        ks = ks[(ks > min_gap) & (ks < seg_len - min_gap)]
        if len(ks) == 0:
            # Segment shorter than one step still gets an interior sample
            ks = np.array([0.5 * seg_len])
        local_s = np.concatenate([[0.0], ks])
        local_u = np.interp(local_s, cum, grid)

        s_parts.append(offset + local_s)
        u_parts.append(i + local_u)
        count += len(local_s)
        offset += seg_len
        waypoint_indices.append(count)

    s_parts.append(np.array([offset]))
    u_parts.append(np.array([float(path.n_segments)]))

    s = np.concatenate(s_parts)
    u = np.concatenate(u_parts)
    pos, d1, d2 = path.derivatives(u)

    speed = np.linalg.norm(d1, axis=1)
    if float(np.min(speed)) < SINGULAR_SPEED_EPS:
        at = int(np.argmin(speed))
        raise SingularCurvatureError(f"curve derivative vanishes at s={s[at]:.6f}")

    samples = PathSamples(
        s=s,
        x=pos[:, 0],
        y=pos[:, 1],
        heading=np.arctan2(d1[:, 1], d1[:, 0]),
        curvature=curvature_from_derivatives(d1, d2),
        u=u,
        waypoint_indices=np.asarray(waypoint_indices, dtype=int),
    )
    logger.trace(  # type: ignore[attr-defined]
        f"Parameterized path: length={samples.length:.4f} samples={len(samples)} step={step}"
    )
    return samples
