import math
from dataclasses import dataclass, field

from .linalg import Vector3

DEFAULT_COLOR = "#000"


@dataclass
class Point:
    position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    color: str = DEFAULT_COLOR
    fixed: bool = False  # Displayed with the camera transform only (no planet spin)
    on_path: bool = False


def make_point(latitude: float, longitude: float, color: str = DEFAULT_COLOR) -> Point:
    """Unit vector for geographic coordinates in degrees.

    Latitude tilts (0, 0, 1) about the x axis towards +y, then longitude
    swings it about the y (spin) axis towards +x.
    """
    pos = Vector3(0.0, 0.0, 1.0)
    pos.rotate_x(-math.radians(latitude)).rotate_y(math.radians(longitude))
    return Point(position=pos, color=color)


def clone_point(point: Point) -> Point:
    return Point(
        position=point.position.clone(),
        color=point.color,
        fixed=point.fixed,
        on_path=point.on_path,
    )


def midpoint(a: Point, b: Point) -> Point:
    # a + b vanishes for antipodal endpoints; callers must not ask for that.
    pos = a.position.add(b.position, Vector3()).normalize()
    return Point(position=pos, color=a.color)
