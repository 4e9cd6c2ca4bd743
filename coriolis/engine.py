import logging
import math
from typing import Dict, List, Optional, Tuple

from .frames import (
    PATH_COLOR,
    ROTATION_RATE,
    TRAVEL_TIME,
    build_fixed_inertial_path,
    build_inertial_path,
)
from .linalg import Matrix3, Vector3
from .path import Path, build_great_circle_path, point_at_fraction
from .point import Point, make_point

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    total = int(round(seconds))
    s = total % 60
    total = (total - s) // 60
    m = total % 60
    h = (total - m) // 60
    return f"{h:02d}:{m:02d}:{s:02d}"


class GlobeEngine:
    """Scene of a rotating globe with one journey tracked in both frames.

    Holds the background grid, the two endpoints, the ground, inertial and
    fixed-inertial paths, and one moving target per tracked path.
    """

    def __init__(
        self,
        *,
        travel_time: float = TRAVEL_TIME,
        rotation_rate: float = ROTATION_RATE,
        path_depth: int = 6,
        origin: Tuple[float, float] = (0.0, 0.0),
        destination: Tuple[float, float] = (60.0, 0.0),
        grid_lat_max: float = 80.0,
        grid_lon_max: float = 180.0,
        grid_lon_min: float = -170.0,
        grid_step: float = 10.0,
        grid_color: str = "rgba(0, 0, 0, 0.1)",
        endpoint_color: str = "#fff",
        path_color: str = PATH_COLOR,
        ground_target_color: str = "#f20",
        inertial_target_color: str = "#07f",
        animation_duration: float = 3.0,
    ):
        self.travel_time = float(travel_time)
        self.rotation_rate = float(rotation_rate)  # degrees per second
        self.path_depth = int(path_depth)
        self.origin = (float(origin[0]), float(origin[1]))
        self.destination = (float(destination[0]), float(destination[1]))

        # Background grid
        self.grid_lat_max = float(grid_lat_max)
        self.grid_lon_max = float(grid_lon_max)
        self.grid_lon_min = float(grid_lon_min)
        self.grid_step = float(grid_step)

        self.grid_color = grid_color
        self.endpoint_color = endpoint_color
        self.path_color = path_color
        self.ground_target_color = ground_target_color
        self.inertial_target_color = inertial_target_color

        # Wall-clock length of one eased animation run, seconds.
        self.animation_duration = float(animation_duration)

        if self.travel_time <= 0.0:
            raise ValueError(f"travel_time must be > 0, got {self.travel_time}")
        if self.path_depth < 0:
            raise ValueError(f"path_depth must be >= 0, got {self.path_depth}")
        if self.grid_step <= 0.0:
            raise ValueError(f"grid_step must be > 0, got {self.grid_step}")
        if not 0.0 <= self.grid_lat_max <= 90.0:
            raise ValueError(f"grid_lat_max must be within [0, 90], got {self.grid_lat_max}")
        if self.grid_lon_min > self.grid_lon_max:
            raise ValueError("grid_lon_min must be <= grid_lon_max")
        if self.animation_duration <= 0.0:
            raise ValueError(f"animation_duration must be > 0, got {self.animation_duration}")

        self.points: List[Point] = []
        self._build_scene()

    def _add_point(self, lat: float, lon: float, color: str) -> Point:
        point = make_point(lat, lon, color)
        self.points.append(point)
        return point

    def _add_path_points(self, path: Path) -> None:
        for point in path.points:
            point.on_path = True
            point.color = self.path_color
            self.points.append(point)

    def _grid_coordinates(self) -> List[Tuple[float, float]]:
        coords = []
        lat = self.grid_lat_max
        while lat >= -self.grid_lat_max - 1e-9:
            lon = self.grid_lon_max
            while lon >= self.grid_lon_min - 1e-9:
                coords.append((lat, lon))
                lon -= self.grid_step
            lat -= self.grid_step
        return coords

    def _build_scene(self) -> None:
        for lat, lon in self._grid_coordinates():
            self._add_point(lat, lon, self.grid_color)

        self.point_a = self._add_point(*self.origin, self.endpoint_color)
        self.point_b = self._add_point(*self.destination, self.endpoint_color)

        self.ground_path = build_great_circle_path(self.point_a, self.point_b, self.path_depth)
        self.inertial_path = build_inertial_path(
            self.point_a, self.point_b, self.travel_time, self.path_depth, rotation_rate=self.rotation_rate
        )
        self.fixed_inertial_path = build_fixed_inertial_path(
            self.point_a,
            self.point_b,
            self.travel_time,
            self.path_depth,
            rotation_rate=self.rotation_rate,
            color=self.path_color,
        )
        self._add_path_points(self.ground_path)
        self._add_path_points(self.inertial_path)
        self.points.extend(self.fixed_inertial_path.points)

        self.ground_target = self._add_point(*self.origin, self.ground_target_color)
        self.inertial_target = self._add_point(*self.origin, self.inertial_target_color)

        logger.info(
            "Scene ready: %d points, ground length %.4f, inertial length %.4f",
            len(self.points), self.ground_path.total_length, self.inertial_path.total_length,
        )

    def get_path(self, name: str) -> Path:
        paths = {
            "ground": self.ground_path,
            "inertial": self.inertial_path,
            "fixed_inertial": self.fixed_inertial_path,
        }
        if name not in paths:
            raise ValueError(f"Unknown path: {name}")
        return paths[name]

    def planet_rotation(self, time_s: float) -> float:
        return float(time_s) * self.rotation_rate

    @staticmethod
    def camera_transform(cam_lat: float, cam_lon: float, out: Optional[Matrix3] = None) -> Matrix3:
        out = Matrix3() if out is None else out.clear()
        return out.rotate_y(-math.radians(cam_lon)).rotate_x(math.radians(cam_lat))

    def final_transform(self, time_s: float, cam_lat: float, cam_lon: float, out: Optional[Matrix3] = None) -> Matrix3:
        out = Matrix3() if out is None else out.clear()
        camera = self.camera_transform(cam_lat, cam_lon)
        return out.rotate_y(math.radians(self.planet_rotation(time_s))).apply(camera)

    def fraction_at(self, time_s: float) -> float:
        return float(time_s) / self.travel_time

    def update_targets(self, time_s: float) -> float:
        fraction = self.fraction_at(time_s)
        point_at_fraction(self.ground_path, fraction, self.ground_target.position)
        point_at_fraction(self.inertial_path, fraction, self.inertial_target.position)
        return fraction

    def follow_rotation(self, cam_lon: float, previous_time: float, time_s: float) -> float:
        """Camera longitude that keeps the ground view locked to the spin."""
        change = float(time_s) - float(previous_time)
        return (cam_lon + change * self.rotation_rate + 360.0) % 360.0

    def eased_time(self, progress: float) -> float:
        t = max(0.0, min(1.0, float(progress)))
        t = (1.0 - math.cos(t * math.pi)) / 2.0
        return t * self.travel_time

    @staticmethod
    def project(
        point: Point,
        final: Matrix3,
        camera: Matrix3,
        *,
        show_paths: bool = True,
    ) -> Optional[Tuple[float, float, float]]:
        if point.on_path and not show_paths:
            return None
        mat = camera if point.fixed else final
        x, y, z = point.position.apply(mat, Vector3())
        if z < 0.0:
            return None
        return (x, y, z)

    def visible_points(
        self,
        time_s: float,
        cam_lat: float,
        cam_lon: float,
        *,
        show_paths: bool = True,
    ) -> List[Dict]:
        camera = self.camera_transform(cam_lat, cam_lon)
        final = self.final_transform(time_s, cam_lat, cam_lon)
        visible = []
        for point in self.points:
            projected = self.project(point, final, camera, show_paths=show_paths)
            if projected is None:
                continue
            visible.append({"position": projected, "color": point.color})
        return visible

    def get_frame_info(
        self,
        time_s: float,
        cam_lat: float = 0.0,
        cam_lon: float = 0.0,
        *,
        show_paths: bool = True,
    ) -> Dict:
        time_s = float(time_s)
        fraction = self.update_targets(time_s)
        return {
            "time": time_s,
            "elapsed": format_elapsed(time_s),
            "fraction": fraction,
            "planet_rotation": self.planet_rotation(time_s),
            "ground_target": self.ground_target.position.to_tuple(),
            "inertial_target": self.inertial_target.position.to_tuple(),
            "ground_length": self.ground_path.total_length,
            "inertial_length": self.inertial_path.total_length,
            "points": self.visible_points(time_s, cam_lat, cam_lon, show_paths=show_paths),
        }
