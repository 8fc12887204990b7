"""
Base spline segment and piecewise path.

Segments are parameterised locally on u in [0, 1]; a SplinePath chains them
on a global parameter in [0, n_segments].
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray


class SplineSegment:
    """Planar curve segment C(u), u in [0, 1], with first and second derivatives."""

    def derivatives(self, u: ArrayLike) -> tuple[NDArray, NDArray, NDArray]:
        """
        Evaluate the segment at local parameter values.

        Returns:
            (position, first derivative, second derivative), each of shape (N, 2)
        """
        raise NotImplementedError


class SplinePath:
    """C² piecewise curve through an ordered list of waypoints."""

    def __init__(self, segments: Sequence[SplineSegment], kind: str):
        if not segments:
            raise ValueError("SplinePath needs at least one segment")
        self.segments: tuple[SplineSegment, ...] = tuple(segments)
        self.kind = kind

    @property
    def n_segments(self) -> int:
        return len(self.segments)

    @property
    def domain(self) -> tuple[float, float]:
        return 0.0, float(self.n_segments)

    def _split(self, u: ArrayLike) -> tuple[NDArray, NDArray]:
        """Map global parameters to (segment index, local parameter)."""
        u_arr = np.clip(np.atleast_1d(np.asarray(u, dtype=float)), 0.0, float(self.n_segments))
        idx = np.minimum(np.floor(u_arr).astype(int), self.n_segments - 1)
        return idx, u_arr - idx

    def derivatives(self, u: ArrayLike) -> tuple[NDArray, NDArray, NDArray]:
        """Position and derivatives at global parameters; shapes (N, 2)."""
        idx, local = self._split(u)
        pos = np.empty((len(local), 2))
        d1 = np.empty_like(pos)
        d2 = np.empty_like(pos)
        for i in np.unique(idx):
            mask = idx == i
            p, dp, ddp = self.segments[i].derivatives(local[mask])
            pos[mask], d1[mask], d2[mask] = p, dp, ddp
        return pos, d1, d2

    def position(self, u: ArrayLike) -> NDArray:
        return self.derivatives(u)[0]

    def curvature(self, u: ArrayLike) -> NDArray:
        """Signed curvature (x'y'' - y'x'') / (x'^2 + y'^2)^1.5."""
        _, d1, d2 = self.derivatives(u)
        return curvature_from_derivatives(d1, d2)


def curvature_from_derivatives(d1: NDArray, d2: NDArray) -> NDArray:
    cross = d1[:, 0] * d2[:, 1] - d1[:, 1] * d2[:, 0]
    speed_sq = d1[:, 0] ** 2 + d1[:, 1] ** 2
    return cross / speed_sq**1.5
