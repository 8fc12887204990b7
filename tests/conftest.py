"""
Pytest configuration and shared fixtures for splinetraj tests.

Puts the project root on sys.path and provides the waypoint sets and
kinematic configurations reused across the unit tests.
"""

import math
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from splinetraj.types import KinematicConfig, Waypoint


@pytest.fixture
def slow_config() -> KinematicConfig:
    """Limits of the barrel-racing demo: 1 m/s, 1 m/s^2."""
    return KinematicConfig(max_velocity=1.0, max_acceleration=1.0)


@pytest.fixture
def fast_config() -> KinematicConfig:
    return KinematicConfig(max_velocity=4.0, max_acceleration=4.0)


@pytest.fixture
def quarter_turn() -> list[Waypoint]:
    return [Waypoint(0.0, 0.0, 0.0), Waypoint(1.0, 1.0, math.pi / 2)]


@pytest.fixture
def s_curve_waypoints() -> list[Waypoint]:
    """Start and end headings only; interior headings are inferred."""
    return [
        Waypoint(0.0, 0.0, 0.0),
        Waypoint(1.0, 0.5),
        Waypoint(2.0, -0.5),
        Waypoint(3.0, 0.0, 0.0),
    ]


@pytest.fixture
def slalom_waypoints() -> list[Waypoint]:
    """Every waypoint carries a heading."""
    return [
        Waypoint.from_degrees(0.0, 0.0, 0.0),
        Waypoint.from_degrees(1.5, 1.0, 45.0),
        Waypoint.from_degrees(3.0, 1.0, -45.0),
        Waypoint.from_degrees(4.5, 0.0, 0.0),
    ]
