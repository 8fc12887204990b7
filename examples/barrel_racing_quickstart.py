"""
Barrel-racing quickstart for splinetraj.
- Waypoints are in inches with headings in degrees, like a field CSV
- Generates the same path under the two demo limits (1, 1) and (4, 4)
- Prints a short summary and a few sampled states

Run from the repository root:
    python examples/barrel_racing_quickstart.py
"""

from splinetraj import KinematicConfig, Waypoint, generate_trajectory
from splinetraj.config import INCHES_TO_METERS

WAYPOINTS_IN = [
    (30.0, 90.0, 0.0),
    (150.0, 90.0, 0.0),
    (180.0, 60.0, -90.0),
    (150.0, 30.0, 180.0),
    (120.0, 60.0, 90.0),
    (150.0, 90.0, 0.0),
    (240.0, 90.0, 0.0),
]


def main() -> None:
    waypoints = [
        Waypoint.from_degrees(x * INCHES_TO_METERS, y * INCHES_TO_METERS, h) for x, y, h in WAYPOINTS_IN
    ]
    for limits in ((1.0, 1.0), (4.0, 4.0)):
        trajectory = generate_trajectory(waypoints, KinematicConfig(*limits))
        print(f"limits v={limits[0]} a={limits[1]}: {trajectory}")
        for t in (0.0, trajectory.total_time / 2, trajectory.total_time):
            st = trajectory.sample(t)
            print(
                f"  t={st.time:6.3f}  x={st.pose.x:6.3f}  y={st.pose.y:6.3f}  "
                f"v={st.velocity:5.3f}  k={st.curvature:6.3f}"
            )


if __name__ == "__main__":
    main()
