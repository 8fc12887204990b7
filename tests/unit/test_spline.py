import math

import numpy as np
import pytest
from splinetraj.spline import QuinticHermiteSegment, QuinticPolynomial, fit_path, infer_headings
from splinetraj.types import Waypoint
from splinetraj.utils.errors import DegenerateSegmentError, InsufficientWaypointsError


def test_quintic_polynomial_boundary_conditions():
    q = QuinticPolynomial(1.0, 3.0, v0=0.5, vf=-0.25, a0=0.1, af=0.2)
    assert q.evaluate(0.0) == pytest.approx(1.0)
    assert q.evaluate(1.0) == pytest.approx(3.0)
    assert q.evaluate(0.0, 1) == pytest.approx(0.5)
    assert q.evaluate(1.0, 1) == pytest.approx(-0.25)
    assert q.evaluate(0.0, 2) == pytest.approx(0.1)
    assert q.evaluate(1.0, 2) == pytest.approx(0.2)

    with pytest.raises(ValueError):
        q.evaluate(0.5, 3)


def test_quintic_hermite_segment_endpoints_and_tangents():
    seg = QuinticHermiteSegment([0.0, 0.0], [2.0, 1.0], [1.0, 0.0], [0.0, 3.0])
    pos, d1, d2 = seg.derivatives([0.0, 1.0])
    assert np.allclose(pos, [[0.0, 0.0], [2.0, 1.0]])
    assert np.allclose(d1, [[1.0, 0.0], [0.0, 3.0]])
    assert np.allclose(d2, 0.0)


@pytest.mark.parametrize("count", [0, 1])
def test_fit_path_needs_two_waypoints(count):
    with pytest.raises(InsufficientWaypointsError):
        fit_path([Waypoint(0.0, 0.0, 0.0)] * count)


def test_fit_path_rejects_coincident_neighbours():
    wps = [Waypoint(0.0, 0.0), Waypoint(1.0, 1.0), Waypoint(1.0, 1.0), Waypoint(2.0, 0.0)]
    with pytest.raises(DegenerateSegmentError) as excinfo:
        fit_path(wps)
    assert excinfo.value.index == 1
    assert "coincide" in str(excinfo.value)


def test_fit_path_unknown_type():
    with pytest.raises(ValueError):
        fit_path([Waypoint(0, 0), Waypoint(1, 0)], spline_type="bezier")


def test_auto_selects_quintic_when_all_headings_given(slalom_waypoints):
    assert fit_path(slalom_waypoints).kind == "quintic"


def test_auto_selects_cubic_when_interior_headings_missing(s_curve_waypoints):
    assert fit_path(s_curve_waypoints).kind == "cubic"


def test_auto_honours_given_interior_heading():
    wps = [Waypoint(0.0, 0.0, 0.0), Waypoint(1.0, 1.0, math.pi / 2), Waypoint(2.0, 0.0)]
    path = fit_path(wps)
    assert path.kind == "quintic"
    _, d1, _ = path.derivatives([1.0])
    assert math.degrees(math.atan2(d1[0, 1], d1[0, 0])) == pytest.approx(90.0, abs=1e-6)


def test_cubic_rejects_interior_heading():
    wps = [Waypoint(0.0, 0.0, 0.0), Waypoint(1.0, 1.0, math.pi / 2), Waypoint(2.0, 0.0)]
    with pytest.raises(ValueError, match="interior heading"):
        fit_path(wps, spline_type="cubic")


@pytest.mark.parametrize("spline_type", ["quintic", "cubic"])
def test_path_passes_through_waypoints(s_curve_waypoints, spline_type):
    path = fit_path(s_curve_waypoints, spline_type=spline_type)
    assert path.n_segments == len(s_curve_waypoints) - 1
    pos = path.position(np.arange(len(s_curve_waypoints), dtype=float))
    expected = np.array([[wp.x, wp.y] for wp in s_curve_waypoints])
    assert np.allclose(pos, expected, atol=1e-9)


@pytest.mark.parametrize("spline_type", ["quintic", "cubic"])
def test_endpoint_headings_are_honoured(s_curve_waypoints, spline_type):
    wps = [Waypoint(0.0, 0.0, math.radians(30.0))] + s_curve_waypoints[1:-1] + [
        Waypoint(3.0, 0.0, math.radians(-20.0))
    ]
    path = fit_path(wps, spline_type=spline_type)
    _, d1, _ = path.derivatives([0.0, float(path.n_segments)])
    headings = np.degrees(np.arctan2(d1[:, 1], d1[:, 0]))
    assert headings[0] == pytest.approx(30.0, abs=1e-6)
    assert headings[1] == pytest.approx(-20.0, abs=1e-6)


@pytest.mark.parametrize("spline_type", ["quintic", "cubic"])
def test_curvature_continuous_at_interior_waypoints(s_curve_waypoints, spline_type):
    path = fit_path(s_curve_waypoints, spline_type=spline_type)
    eps = 1e-7
    for knot in (1.0, 2.0):
        left, right = path.curvature([knot - eps, knot + eps])
        assert left == pytest.approx(right, abs=1e-4)


def test_infer_headings_chord_averaging():
    points = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]])
    headings = infer_headings(points, [None, None, None])
    assert headings[0] == pytest.approx(0.0)
    assert headings[1] == pytest.approx(math.pi / 4)
    assert headings[2] == pytest.approx(math.pi / 2)


def test_infer_headings_keeps_given_and_handles_doubling_back():
    points = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]])
    headings = infer_headings(points, [0.3, None, None])
    assert headings[0] == pytest.approx(0.3)
    # Incoming and outgoing chords cancel; fall back to the outgoing chord
    assert headings[1] == pytest.approx(math.pi)
