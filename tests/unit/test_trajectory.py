import math

import numpy as np
import pytest
from splinetraj import KinematicConfig, OutOfRangeError, Pose2d, Trajectory, TrajectoryState, Waypoint
from splinetraj import generate_trajectory


@pytest.fixture
def straight(slow_config) -> Trajectory:
    return generate_trajectory([Waypoint(0.0, 0.0, 0.0), Waypoint(1.0, 0.0, 0.0)], slow_config)


def test_sample_at_state_times_returns_states(straight):
    for st in straight.states[::10]:
        assert straight.sample(st.time) == st
    assert straight.sample(0.0) == straight[0]
    assert straight.sample(straight.total_time) == straight[-1]


def test_sample_between_states_is_bracketed(straight):
    i = len(straight) // 3
    a, b = straight[i], straight[i + 1]
    mid = straight.sample(0.5 * (a.time + b.time))
    assert a.time < mid.time < b.time
    assert min(a.velocity, b.velocity) <= mid.velocity <= max(a.velocity, b.velocity)
    assert a.pose.x < mid.pose.x < b.pose.x
    assert a.distance < mid.distance < b.distance


def test_sample_constant_acceleration_from_rest(straight):
    # Starts at rest with a = 1, so x = t^2 / 2 during the first second
    st = straight.sample(0.3)
    assert st.velocity == pytest.approx(0.3, rel=1e-6)
    assert st.pose.x == pytest.approx(0.045, rel=1e-3)


@pytest.mark.parametrize("t", [-1e-3, 1e9, float("nan")])
def test_sample_out_of_range_raises(straight, t):
    with pytest.raises(OutOfRangeError):
        straight.sample(t)


def test_sample_clamped(straight):
    assert straight.sample(-5.0, clamp=True) == straight[0]
    assert straight.sample(straight.total_time + 5.0, clamp=True) == straight[-1]


def test_out_of_range_error_carries_bounds(straight):
    with pytest.raises(OutOfRangeError) as excinfo:
        straight.sample(100.0)
    assert excinfo.value.t == 100.0
    assert excinfo.value.total_time == straight.total_time
    assert str(excinfo.value).startswith("Trajectory Planning Error:")


def test_trajectory_validates_states():
    pose = Pose2d(0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        Trajectory([])
    with pytest.raises(ValueError):
        Trajectory([TrajectoryState(1.0, pose, 0.0, 0.0, 0.0)])
    with pytest.raises(ValueError):
        Trajectory(
            [
                TrajectoryState(0.0, pose, 0.0, 0.0, 0.0),
                TrajectoryState(2.0, pose, 0.0, 0.0, 0.0),
                TrajectoryState(1.0, pose, 0.0, 0.0, 0.0),
            ]
        )


def test_poses_array(straight):
    poses = straight.poses()
    assert poses.shape == (len(straight), 3)
    assert np.allclose(poses[0], [0.0, 0.0, 0.0])
    assert np.allclose(poses[-1], [1.0, 0.0, 0.0], atol=1e-9)


def test_transform_by(straight):
    moved = straight.transform_by(Pose2d(1.0, 2.0, math.pi / 2))
    assert moved.initial_pose.x == pytest.approx(1.0)
    assert moved.initial_pose.y == pytest.approx(2.0)
    assert moved.initial_pose.heading == pytest.approx(math.pi / 2)
    assert moved.final_pose.x == pytest.approx(1.0, abs=1e-9)
    assert moved.final_pose.y == pytest.approx(3.0, abs=1e-9)
    assert [st.time for st in moved] == [st.time for st in straight]
    assert [st.velocity for st in moved] == [st.velocity for st in straight]


def test_relative_to(straight):
    rel = straight.relative_to(Pose2d(1.0, 0.0, math.pi))
    # Seen from (1, 0) facing -x, the start is one unit straight ahead
    assert rel.initial_pose.x == pytest.approx(1.0, abs=1e-9)
    assert rel.initial_pose.y == pytest.approx(0.0, abs=1e-9)
    assert abs(rel.initial_pose.heading) == pytest.approx(math.pi, abs=1e-9)
    assert rel.final_pose.x == pytest.approx(0.0, abs=1e-9)
    assert [st.curvature for st in rel] == [st.curvature for st in straight]


def test_concatenate(slow_config):
    config = KinematicConfig(1.0, 1.0, end_velocity=0.5)
    first = generate_trajectory([Waypoint(0.0, 0.0, 0.0), Waypoint(1.0, 0.0, 0.0)], config)
    second = generate_trajectory(
        [Waypoint(1.0, 0.0, 0.0), Waypoint(2.0, 1.0, math.pi / 2)],
        KinematicConfig(1.0, 1.0, start_velocity=0.5),
    )
    joined = first + second

    assert len(joined) == len(first) + len(second) - 1
    assert joined.total_time == pytest.approx(first.total_time + second.total_time)
    assert joined.length == pytest.approx(first.length + second.length)
    times = [st.time for st in joined]
    assert all(b >= a for a, b in zip(times, times[1:]))
    assert joined.final_pose == second.final_pose


def test_trajectory_is_immutable(straight):
    with pytest.raises(AttributeError):
        straight.extra = 1  # type: ignore[attr-defined]
    with pytest.raises(Exception):
        straight[0].time = 5.0  # type: ignore[misc]


def test_to_dicts(straight):
    rows = straight.to_dicts()
    assert len(rows) == len(straight)
    assert set(rows[0]) == {"time", "pose", "velocity", "acceleration", "curvature", "distance"}
    assert rows[0]["pose"] == {"x": 0.0, "y": 0.0, "heading": 0.0}
