"""
Ground frame <-> inertial frame conversion for a sphere spinning about y.

A ground-frame path is assumed to be traversed at constant pace over
``travel_time`` seconds; sample ``i`` of ``n`` is reached at
``i * travel_time / (n - 1)``. Undoing the spin accumulated by then gives the
track an observer outside the sphere sees.
"""

import logging
import math

from .path import Path, build_great_circle_path
from .point import Point, clone_point

logger = logging.getLogger(__name__)

# --- Constants ---
HOUR = 3600.0  # seconds
DAY = 24 * HOUR
ROTATION_RATE = 360.0 / DAY  # degrees per second, one turn per day
TRAVEL_TIME = 7.5 * HOUR

PATH_COLOR = "rgba(255, 255, 255, 0.5)"


def rotate_point(point: Point, degrees: float) -> Point:
    point.position.rotate_y(math.radians(degrees))
    return point


def convert_to_inertial(path: Path, travel_time: float, *, rotation_rate: float = ROTATION_RATE) -> Path:
    n_points = len(path.points)
    dt = float(travel_time) / (n_points - 1)
    for i, point in enumerate(path.points):
        t = dt * i
        rotate_point(point, -t * rotation_rate)

    # Positions moved; chord lengths must follow them.
    path.recompile()
    logger.debug(
        "Converted path to inertial frame: travel_time=%.1fs points=%d length=%.6f",
        travel_time, n_points, path.total_length,
    )
    return path


def _pre_rotated_path(a: Point, b: Point, travel_time: float, depth: int, rotation_rate: float) -> Path:
    a = clone_point(a)
    b = clone_point(b)
    # The destination keeps spinning while we travel.
    rotate_point(b, rotation_rate * float(travel_time))
    return build_great_circle_path(a, b, depth)


def build_inertial_path(
    a: Point,
    b: Point,
    travel_time: float,
    depth: int,
    *,
    rotation_rate: float = ROTATION_RATE,
) -> Path:
    path = _pre_rotated_path(a, b, travel_time, depth, rotation_rate)
    return convert_to_inertial(path, travel_time, rotation_rate=rotation_rate)


def build_fixed_inertial_path(
    a: Point,
    b: Point,
    travel_time: float,
    depth: int,
    *,
    rotation_rate: float = ROTATION_RATE,
    color: str = PATH_COLOR,
) -> Path:
    """Straight inertial track, drawn without the planet's spin."""
    path = _pre_rotated_path(a, b, travel_time, depth, rotation_rate)
    for point in path.points:
        point.fixed = True
        point.on_path = True
        point.color = color
    return path
