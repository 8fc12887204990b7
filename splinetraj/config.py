"""
Central configuration for splinetraj tunables and shared constants.

Kinematic limits are deliberately absent here: they always travel in a
KinematicConfig supplied by the caller.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return str(os.getenv(name, "0")).strip().lower() in ("1", "true", "yes", "on")


# Default the CLI log level to TRACE when no verbosity flag is given
TRACE_ENABLED: bool = _env_flag("SPLINETRAJ_TRACE")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default
    if value < minimum:
        logger.warning(f"Ignoring {name}={raw!r} below {minimum}, using {default}")
        return default
    return value


# Arc-length sampling increment (length units)
DEFAULT_SAMPLE_STEP: float = _env_float("SPLINETRAJ_SAMPLE_STEP", 0.01)

# Parameter-grid points per nominal sampling step used to tabulate arc length
ARC_LENGTH_OVERSAMPLE: int = _env_int("SPLINETRAJ_ARC_OVERSAMPLE", 16)
MIN_POINTS_PER_SEGMENT: int = 32

# |C'(u)| below this is treated as a cusp
SINGULAR_SPEED_EPS: float = 1e-9

# Waypoints closer than this are considered coincident
COINCIDENT_TOL: float = 1e-9

# Relative tolerance when checking pinned boundary velocities
BOUNDARY_VELOCITY_TOL: float = 1e-6

# Tangent magnitude of quintic Hermite segments as a multiple of chord length
QUINTIC_TANGENT_SCALE: float = 1.2

INCHES_TO_METERS: float = 0.0254

LOG_LEVEL_DEFAULT: str = "INFO"
