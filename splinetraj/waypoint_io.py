"""
Waypoint input and trajectory export.

These helpers sit at the boundary of the core: they decode waypoint files
into Waypoint lists and write generated trajectories for plotting or
playback. The generator itself never touches files.
"""

from __future__ import annotations

import codecs
import csv
import io
import json
import logging
import math
from collections.abc import Iterable
from pathlib import Path

from splinetraj.trajectory import Trajectory
from splinetraj.types import Pose2d, TrajectoryState, Waypoint

logger = logging.getLogger(__name__)

# Longest marks first: the UTF-32 LE mark starts with the UTF-16 LE one
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)

STATE_CSV_COLUMNS = ("time", "x", "y", "heading", "velocity", "acceleration", "curvature")


class WaypointFormatError(ValueError):
    """A waypoint row could not be decoded."""


def detect_encoding(raw: bytes) -> str:
    """Codec name for raw file bytes, from the byte-order mark; UTF-8 when there is none."""
    for bom, codec in _BOMS:
        if raw.startswith(bom):
            return codec
    return "utf-8"


def decode_text(raw: bytes) -> str:
    return raw.decode(detect_encoding(raw))


def parse_waypoint_rows(
    rows: Iterable[list[str]], scale: float = 1.0, heading_degrees: bool = True
) -> list[Waypoint]:
    """
    Convert CSV rows of x, y[, heading] into Waypoints.

    Args:
        rows: Rows of string fields; blank rows are skipped
        scale: Multiplier applied to x and y (unit conversion)
        heading_degrees: Heading column is in degrees (else radians)

    Raises:
        WaypointFormatError: a row has the wrong field count or a non-numeric or non-finite field
    """
    waypoints: list[Waypoint] = []
    for lineno, row in enumerate(rows, start=1):
        fields = [f.strip() for f in row]
        if not any(fields):
            continue
        if len(fields) not in (2, 3):
            raise WaypointFormatError(f"row {lineno}: expected 2 or 3 fields, got {len(fields)}")
        try:
            x, y = float(fields[0]) * scale, float(fields[1]) * scale
            heading = float(fields[2]) if len(fields) == 3 and fields[2] else None
        except ValueError as e:
            raise WaypointFormatError(f"row {lineno}: {e}") from e
        if not all(math.isfinite(v) for v in (x, y, 0.0 if heading is None else heading)):
            raise WaypointFormatError(f"row {lineno}: non-finite value in {fields}")
        if heading is None:
            waypoints.append(Waypoint(x, y))
        elif heading_degrees:
            waypoints.append(Waypoint.from_degrees(x, y, heading))
        else:
            waypoints.append(Waypoint(x, y, heading))
    return waypoints


def read_waypoints_csv(
    path: str | Path, scale: float = 1.0, heading_degrees: bool = True
) -> list[Waypoint]:
    """
    Read waypoints from a CSV file, honouring any UTF-8/16/32 byte-order mark.

    Args:
        path: File path
        scale: Multiplier applied to x and y, e.g. config.INCHES_TO_METERS
        heading_degrees: Heading column is in degrees (else radians)

    Raises:
        WaypointFormatError: undecodable text or a malformed row
    """
    raw = Path(path).read_bytes()
    encoding = detect_encoding(raw)
    logger.debug(f"Reading waypoints from {path} ({encoding})")
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise WaypointFormatError(f"{path}: not valid {encoding} text: {e}") from e
    waypoints = parse_waypoint_rows(csv.reader(io.StringIO(text)), scale, heading_degrees)
    logger.info(f"Loaded {len(waypoints)} waypoints from {path}")
    return waypoints


def _state_to_json(state: TrajectoryState) -> dict:
    return {
        "time": state.time,
        "velocity": state.velocity,
        "acceleration": state.acceleration,
        "pose": {
            "translation": {"x": state.pose.x, "y": state.pose.y},
            "rotation": {"radians": state.pose.heading},
        },
        "curvature": state.curvature,
        "distance": state.distance,
    }


def _state_from_json(obj: dict) -> TrajectoryState:
    pose = obj["pose"]
    return TrajectoryState(
        time=float(obj["time"]),
        pose=Pose2d(
            float(pose["translation"]["x"]),
            float(pose["translation"]["y"]),
            float(pose["rotation"]["radians"]),
        ),
        velocity=float(obj["velocity"]),
        acceleration=float(obj["acceleration"]),
        curvature=float(obj["curvature"]),
        distance=float(obj.get("distance", 0.0)),
    )


def trajectory_to_json(trajectory: Trajectory, indent: int | None = None) -> str:
    return json.dumps([_state_to_json(st) for st in trajectory], indent=indent)


def trajectory_from_json(text: str) -> Trajectory:
    return Trajectory([_state_from_json(obj) for obj in json.loads(text)])


def write_trajectory_json(trajectory: Trajectory, path: str | Path) -> None:
    Path(path).write_text(trajectory_to_json(trajectory, indent=2))
    logger.info(f"Wrote {len(trajectory)} states to {path}")


def read_trajectory_json(path: str | Path) -> Trajectory:
    return trajectory_from_json(decode_text(Path(path).read_bytes()))


def trajectory_to_csv(trajectory: Trajectory) -> str:
    """CSV text with a header row and one row per state (see STATE_CSV_COLUMNS)."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(STATE_CSV_COLUMNS)
    for st in trajectory:
        writer.writerow(
            [
                repr(st.time),
                repr(st.pose.x),
                repr(st.pose.y),
                repr(st.pose.heading),
                repr(st.velocity),
                repr(st.acceleration),
                repr(st.curvature),
            ]
        )
    return buf.getvalue()


def write_trajectory_csv(trajectory: Trajectory, path: str | Path) -> None:
    Path(path).write_text(trajectory_to_csv(trajectory))
    logger.info(f"Wrote {len(trajectory)} states to {path}")
