import math

import numpy as np
import pytest

from coriolis.engine import GlobeEngine, format_elapsed
from coriolis.frames import DAY, HOUR
from coriolis.linalg import Vector3
from coriolis.point import make_point


def test_scene_population(engine):
    grid = 17 * 36
    path_points = 3 * (2 ** engine.path_depth + 1)
    assert len(engine.points) == grid + 2 + path_points + 2
    assert sum(1 for p in engine.points if p.fixed) == 2 ** engine.path_depth + 1
    assert sum(1 for p in engine.points if p.on_path) == path_points


def test_endpoints_stay_unaliased(engine):
    np.testing.assert_allclose(engine.point_a.position.v, make_point(0, 0).position.v, atol=1e-12)
    np.testing.assert_allclose(engine.point_b.position.v, make_point(60, 0).position.v, atol=1e-12)
    assert engine.ground_path.points[0] is not engine.point_a


@pytest.mark.parametrize("kwargs", [
    {"travel_time": 0.0},
    {"travel_time": -5.0},
    {"path_depth": -1},
    {"grid_step": 0.0},
    {"grid_step": -10.0},
    {"grid_lat_max": 95.0},
    {"grid_lon_min": 10.0, "grid_lon_max": 0.0},
    {"animation_duration": -1.0},
    {"animation_duration": 0.0},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        GlobeEngine(**kwargs)


def test_custom_grid_and_colors():
    engine = GlobeEngine(
        path_depth=2,
        grid_step=20.0,
        grid_color="#333",
        path_color="#abc",
        ground_target_color="#0f0",
        animation_duration=1.5,
    )
    grid = [p for p in engine.points if p.color == "#333"]
    # lat 80..-80 by 20, lon 180..-160 by 20
    assert len(grid) == 9 * 18
    assert all(p.color == "#abc" for p in engine.ground_path.points)
    assert all(p.color == "#abc" for p in engine.fixed_inertial_path.points)
    assert engine.ground_target.color == "#0f0"
    assert engine.animation_duration == 1.5


def test_get_path(engine):
    assert engine.get_path("ground") is engine.ground_path
    assert engine.get_path("inertial") is engine.inertial_path
    assert engine.get_path("fixed_inertial") is engine.fixed_inertial_path
    with pytest.raises(ValueError):
        engine.get_path("polar")


def test_targets_follow_paths(engine):
    engine.update_targets(0.0)
    np.testing.assert_allclose(engine.ground_target.position.v, engine.point_a.position.v, atol=1e-12)
    np.testing.assert_allclose(engine.inertial_target.position.v, engine.point_a.position.v, atol=1e-12)

    engine.update_targets(engine.travel_time)
    np.testing.assert_allclose(engine.ground_target.position.v, engine.point_b.position.v, atol=1e-12)
    np.testing.assert_allclose(engine.inertial_target.position.v, engine.point_b.position.v, atol=1e-12)


def test_targets_hold_after_arrival(engine):
    engine.update_targets(engine.travel_time * 0.5)
    held = engine.ground_target.position.clone()
    engine.update_targets(engine.travel_time * 2.0)
    assert engine.ground_target.position == held


def test_camera_and_final_transforms(engine):
    assert engine.camera_transform(0.0, 0.0).is_identity()
    np.testing.assert_allclose(
        engine.final_transform(0.0, 15.0, 40.0).m,
        engine.camera_transform(15.0, 40.0).m,
        atol=1e-12,
    )
    # Half a day turns the near side away.
    v = Vector3(0.0, 0.0, 1.0).apply(engine.final_transform(DAY / 2, 0.0, 0.0))
    assert v.z == pytest.approx(-1.0)


def test_camera_longitude_cancels_planet_rotation(engine):
    t = 3 * HOUR
    lon = engine.planet_rotation(t)
    v = make_point(10, 0).position.apply(engine.final_transform(t, 0.0, lon), Vector3())
    np.testing.assert_allclose(v.v, make_point(10, 0).position.v, atol=1e-12)


def test_project_hides_far_side_and_paths():
    identity = GlobeEngine.camera_transform(0.0, 0.0)
    near = make_point(0, 0)
    far = make_point(0, 180)
    assert GlobeEngine.project(near, identity, identity) == pytest.approx((0.0, 0.0, 1.0))
    assert GlobeEngine.project(far, identity, identity) is None

    near.on_path = True
    assert GlobeEngine.project(near, identity, identity, show_paths=False) is None


def test_fixed_points_ignore_planet_rotation(engine):
    camera = engine.camera_transform(0.0, 0.0)
    final = engine.final_transform(DAY / 2, 0.0, 0.0)
    p = make_point(0, 0)
    p.fixed = True
    assert GlobeEngine.project(p, final, camera) == pytest.approx((0.0, 0.0, 1.0))
    p.fixed = False
    assert GlobeEngine.project(p, final, camera) is None


def test_follow_rotation_wraps(engine):
    assert engine.follow_rotation(350.0, 0.0, HOUR) == pytest.approx(5.0)
    assert engine.follow_rotation(5.0, HOUR, 0.0) == pytest.approx(350.0)


def test_eased_time(engine):
    assert engine.eased_time(0.0) == 0.0
    assert engine.eased_time(1.0) == pytest.approx(engine.travel_time)
    assert engine.eased_time(0.5) == pytest.approx(engine.travel_time / 2)
    assert engine.eased_time(3.0) == pytest.approx(engine.travel_time)
    assert engine.eased_time(0.25) < engine.travel_time / 4


@pytest.mark.parametrize("seconds,label", [
    (0, "00:00:00"),
    (59.4, "00:00:59"),
    (3661, "01:01:01"),
    (7.5 * HOUR, "07:30:00"),
    (100 * HOUR, "100:00:00"),
])
def test_format_elapsed(seconds, label):
    assert format_elapsed(seconds) == label


def test_frame_info(engine):
    info = engine.get_frame_info(engine.travel_time / 2, 20.0, 0.0)
    assert info["elapsed"] == "03:45:00"
    assert info["fraction"] == pytest.approx(0.5)
    assert info["planet_rotation"] == pytest.approx(56.25)
    assert info["ground_length"] == pytest.approx(engine.ground_path.total_length)
    assert len(info["ground_target"]) == 3
    assert 0 < len(info["points"]) < len(engine.points)
    for entry in info["points"]:
        assert entry["position"][2] >= 0.0

    hidden = engine.get_frame_info(engine.travel_time / 2, 20.0, 0.0, show_paths=False)
    assert len(hidden["points"]) < len(info["points"])


def test_ground_target_moves_along_great_circle(engine):
    engine.update_targets(engine.travel_time * 0.3)
    pos = engine.ground_target.position
    # Origin and destination share longitude 0, so the ground track stays at x = 0.
    assert pos.x == pytest.approx(0.0, abs=1e-12)
    assert 0.0 < math.degrees(math.atan2(pos.y, pos.z)) < 60.0
