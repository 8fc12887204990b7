"""
Clamped/natural cubic spline through waypoint positions.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import CubicSpline

from .base import SplineSegment


class CubicSplineSegment(SplineSegment):
    """View of one knot interval of a shared CubicSpline pair, rescaled to u in [0, 1]."""

    def __init__(self, spline_x: CubicSpline, spline_y: CubicSpline, tau0: float, tau1: float):
        self.spline_x = spline_x
        self.spline_y = spline_y
        self.tau0 = float(tau0)
        self.h = float(tau1) - float(tau0)

    def derivatives(self, u: ArrayLike) -> tuple[NDArray, NDArray, NDArray]:
        tau = self.tau0 + self.h * np.atleast_1d(np.asarray(u, dtype=float))
        pos = np.column_stack([self.spline_x(tau), self.spline_y(tau)])
        d1 = np.column_stack([self.spline_x(tau, 1), self.spline_y(tau, 1)]) * self.h
        d2 = np.column_stack([self.spline_x(tau, 2), self.spline_y(tau, 2)]) * self.h**2
        return pos, d1, d2


def fit_cubic_segments(
    points: NDArray,
    start_heading: float | None = None,
    end_heading: float | None = None,
) -> list[CubicSplineSegment]:
    """
    Fit a C² cubic spline through all points, parameterised by cumulative chord length.

    Each end is clamped to a unit tangent along its heading when one is given,
    otherwise it gets a natural (zero second derivative) condition.

    Args:
        points: Array of shape (N, 2), N >= 2, no coincident neighbours
        start_heading: Heading in radians at the first point, or None
        end_heading: Heading in radians at the last point, or None
    """
    points = np.asarray(points, dtype=float)
    chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
    tau = np.concatenate([[0.0], np.cumsum(chords)])

    splines = []
    for axis, trig in ((0, np.cos), (1, np.sin)):
        # Provide boundary conditions per component
        start_bc: Any = (2, 0.0) if start_heading is None else (1, float(trig(start_heading)))
        end_bc: Any = (2, 0.0) if end_heading is None else (1, float(trig(end_heading)))
        splines.append(CubicSpline(tau, points[:, axis], bc_type=(start_bc, end_bc)))

    spline_x, spline_y = splines
    return [
        CubicSplineSegment(spline_x, spline_y, tau[i], tau[i + 1]) for i in range(len(points) - 1)
    ]
