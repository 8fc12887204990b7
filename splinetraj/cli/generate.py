"""
CLI entry point for the splinetraj-generate command.

Reads a waypoint CSV, generates a trajectory and writes it as JSON or CSV.
"""

import argparse
import logging
import sys

from splinetraj.config import INCHES_TO_METERS, LOG_LEVEL_DEFAULT, TRACE, TRACE_ENABLED
from splinetraj.generator import generate_trajectory
from splinetraj.spline.fitter import SPLINE_TYPES
from splinetraj.types import KinematicConfig
from splinetraj.utils.errors import TrajectoryPlanningError
from splinetraj.waypoint_io import (
    WaypointFormatError,
    read_waypoints_csv,
    trajectory_to_csv,
    trajectory_to_json,
    write_trajectory_csv,
    write_trajectory_json,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a trajectory through CSV waypoints")
    parser.add_argument("waypoints", help="CSV file with rows x,y[,heading_deg]")
    parser.add_argument("--max-velocity", type=float, required=True, help="Velocity limit")
    parser.add_argument("--max-acceleration", type=float, required=True, help="Acceleration limit")
    parser.add_argument("--start-velocity", type=float, default=0.0, help="Velocity at the first waypoint")
    parser.add_argument("--end-velocity", type=float, default=0.0, help="Velocity at the last waypoint")
    parser.add_argument("--max-centripetal", type=float, default=None,
                        help="Lateral acceleration limit (off by default)")
    parser.add_argument("--reversed", action="store_true", help="Drive the path backwards")
    parser.add_argument("--spline", choices=SPLINE_TYPES, default="auto", help="Path fitting mode")
    units = parser.add_mutually_exclusive_group()
    units.add_argument("--scale", type=float, default=1.0, help="Multiply waypoint x,y by this")
    units.add_argument("--inches", action="store_true", help="Waypoints are in inches; output meters")
    parser.add_argument("--radians", action="store_true", help="Heading column is in radians")
    parser.add_argument("--step", type=float, default=None, help="Arc-length sampling step")
    parser.add_argument("-o", "--output", help="Output file (stdout if omitted)")
    parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format")

    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE")
    parser.add_argument("-q", "--quiet", action="store_true", help="Enable quiet logging (WARNING level)")
    parser.add_argument("--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set specific log level")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return TRACE if args.log_level == "TRACE" else getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    if TRACE_ENABLED:
        return TRACE
    return getattr(logging, LOG_LEVEL_DEFAULT)


def main(argv=None) -> int:
    """Main entry point; returns a process exit code."""
    args = build_parser().parse_args(argv)

    level = _log_level(args)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("splinetraj").setLevel(level)

    scale = INCHES_TO_METERS if args.inches else args.scale
    config = KinematicConfig(
        max_velocity=args.max_velocity,
        max_acceleration=args.max_acceleration,
        start_velocity=args.start_velocity,
        end_velocity=args.end_velocity,
        max_centripetal_acceleration=args.max_centripetal,
        reversed=args.reversed,
        sample_step=args.step,
    )

    try:
        waypoints = read_waypoints_csv(args.waypoints, scale=scale, heading_degrees=not args.radians)
        trajectory = generate_trajectory(waypoints, config, spline_type=args.spline)
    except (OSError, WaypointFormatError) as e:
        logger.error(f"Failed to read waypoints: {e}")
        return 1
    except TrajectoryPlanningError as e:
        logger.error(f"Failed to generate trajectory: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Failed to fit path: {e}")
        return 1

    logger.info(
        f"Trajectory: {len(trajectory)} states, {trajectory.length:.3f} long, "
        f"{trajectory.total_time:.3f} s"
    )

    if args.output:
        if args.format == "csv":
            write_trajectory_csv(trajectory, args.output)
        else:
            write_trajectory_json(trajectory, args.output)
    else:
        text = trajectory_to_csv(trajectory) if args.format == "csv" else trajectory_to_json(trajectory, indent=2)
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def main_entry():
    """Entry point for the splinetraj-generate command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
