"""
Quintic polynomial primitive and planar quintic Hermite segment.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .base import SplineSegment


class QuinticPolynomial:
    """
    Single-axis quintic polynomial on the unit interval.

    Matches position, first and second derivative at both ends, giving a C²
    building block for Hermite segments.
    """

    def __init__(
        self,
        q0: float,
        qf: float,
        v0: float = 0,
        vf: float = 0,
        a0: float = 0,
        af: float = 0,
    ):
        """
        Args:
            q0: Value at u=0
            qf: Value at u=1
            v0: First derivative at u=0 (default 0)
            vf: First derivative at u=1 (default 0)
            a0: Second derivative at u=0 (default 0)
            af: Second derivative at u=1 (default 0)
        """
        self.coeffs = self._solve_coefficients_analytical(q0, qf, v0, vf, a0, af)
        self._prepare_derivative_coeffs()

    @staticmethod
    def _solve_coefficients_analytical(q0, qf, v0, vf, a0, af) -> NDArray:
        """
        Closed-form coefficients of q(u) = c0 + c1*u + ... + c5*u^5.

        Returns:
            numpy array of coefficients [c0, c1, c2, c3, c4, c5]
        """
        c3 = 10 * (qf - q0) - 6 * v0 - 4 * vf - (3 * a0 - af) / 2.0
        c4 = -15 * (qf - q0) + 8 * v0 + 7 * vf + (3 * a0 - 2 * af) / 2.0
        c5 = 6 * (qf - q0) - 3 * (v0 + vf) - (a0 - af) / 2.0
        return np.array([q0, v0, a0 / 2.0, c3, c4, c5], dtype=float)

    def _prepare_derivative_coeffs(self):
        c = self.coeffs
        self.vel_coeffs = np.array([c[1], 2 * c[2], 3 * c[3], 4 * c[4], 5 * c[5]])
        self.acc_coeffs = np.array([2 * c[2], 6 * c[3], 12 * c[4], 20 * c[5]])

    def evaluate(self, u: ArrayLike, derivative: int = 0) -> NDArray:
        """
        Evaluate at parameter values (Horner's method via numpy.polyval).

        Args:
            u: Parameter value(s) in [0, 1]
            derivative: 0=value, 1=first, 2=second derivative
        """
        if derivative == 0:
            coeffs = self.coeffs
        elif derivative == 1:
            coeffs = self.vel_coeffs
        elif derivative == 2:
            coeffs = self.acc_coeffs
        else:
            raise ValueError(f"Derivative order {derivative} not supported (max is 2)")
        # polyval wants highest order first
        return np.polyval(coeffs[::-1], np.asarray(u, dtype=float))


class QuinticHermiteSegment(SplineSegment):
    """
    Planar quintic Hermite segment between two points.

    Endpoint tangents are given as vectors (direction times magnitude);
    second derivatives default to zero so that chained segments stay C².
    """

    def __init__(
        self,
        p0: ArrayLike,
        p1: ArrayLike,
        t0: ArrayLike,
        t1: ArrayLike,
        dd0: ArrayLike = (0.0, 0.0),
        dd1: ArrayLike = (0.0, 0.0),
    ):
        p0, p1, t0, t1, dd0, dd1 = (np.asarray(v, dtype=float) for v in (p0, p1, t0, t1, dd0, dd1))
        self.axes = (
            QuinticPolynomial(p0[0], p1[0], t0[0], t1[0], dd0[0], dd1[0]),
            QuinticPolynomial(p0[1], p1[1], t0[1], t1[1], dd0[1], dd1[1]),
        )

    def derivatives(self, u: ArrayLike) -> tuple[NDArray, NDArray, NDArray]:
        u_arr = np.atleast_1d(np.asarray(u, dtype=float))
        x, y = self.axes
        pos = np.column_stack([x.evaluate(u_arr, 0), y.evaluate(u_arr, 0)])
        d1 = np.column_stack([x.evaluate(u_arr, 1), y.evaluate(u_arr, 1)])
        d2 = np.column_stack([x.evaluate(u_arr, 2), y.evaluate(u_arr, 2)])
        return pos, d1, d2
