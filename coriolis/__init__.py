from .engine import GlobeEngine, format_elapsed
from .frames import (
    DAY,
    HOUR,
    ROTATION_RATE,
    TRAVEL_TIME,
    build_fixed_inertial_path,
    build_inertial_path,
    convert_to_inertial,
    rotate_point,
)
from .linalg import Matrix3, Vector3, mat3, mat_mul, rotation_x, rotation_y, vec3, vec_mat
from .path import Path, Segment, build_great_circle_path, compile_path, point_at_fraction
from .point import Point, clone_point, make_point, midpoint

__all__ = [
    "DAY",
    "HOUR",
    "ROTATION_RATE",
    "TRAVEL_TIME",
    "GlobeEngine",
    "Matrix3",
    "Path",
    "Point",
    "Segment",
    "Vector3",
    "build_fixed_inertial_path",
    "build_great_circle_path",
    "build_inertial_path",
    "clone_point",
    "compile_path",
    "convert_to_inertial",
    "format_elapsed",
    "make_point",
    "mat3",
    "mat_mul",
    "midpoint",
    "point_at_fraction",
    "rotate_point",
    "rotation_x",
    "rotation_y",
    "vec3",
    "vec_mat",
]
