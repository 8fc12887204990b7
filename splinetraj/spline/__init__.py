from .base import SplinePath, SplineSegment
from .cubic import CubicSplineSegment
from .fitter import fit_path, infer_headings
from .quintic import QuinticHermiteSegment, QuinticPolynomial

__all__ = [
    "SplinePath",
    "SplineSegment",
    "QuinticPolynomial",
    "QuinticHermiteSegment",
    "CubicSplineSegment",
    "fit_path",
    "infer_headings",
]
