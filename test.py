#!/usr/bin/env python3
"""
Smoke suite for the rotating-globe geometry engine (run: python test.py)
"""

import math
import sys


def test_dependencies():
    print("Testing Dependencies...")
    try:
        import numpy
        print(f"  ✅ NumPy version: {numpy.__version__}")

        import matplotlib
        print(f"  ✅ Matplotlib version: {matplotlib.__version__}")

        print("✅ All dependencies installed!\n")
        return True

    except ImportError as e:
        print(f"❌ Missing dependency: {e}\n")
        print("Please run: pip install -e .\n")
        return False


def test_globe_engine():
    print("Testing Globe Engine...")
    try:
        from coriolis import (
            TRAVEL_TIME,
            GlobeEngine,
            build_great_circle_path,
            build_inertial_path,
            make_point,
            point_at_fraction,
        )

        a = make_point(0, 0)
        b = make_point(60, 0)
        print(f"  ✅ Origin: {a.position.to_tuple()}")
        print(f"  ✅ Destination: {b.position.to_tuple()}")

        for depth in range(0, 8):
            path = build_great_circle_path(a, b, depth)
            if len(path.points) != 2 ** depth + 1:
                raise AssertionError(f"depth={depth}: expected {2 ** depth + 1} points, got {len(path.points)}")
        print(f"  ✅ Ground path length at depth 7: {path.total_length:.6f} (arc {math.radians(60):.6f})")

        inertial = build_inertial_path(a, b, TRAVEL_TIME, 6)
        print(f"  ✅ Inertial path length at depth 6: {inertial.total_length:.6f}")

        def dist3(p, q):
            dx = p[0] - q[0]
            dy = p[1] - q[1]
            dz = p[2] - q[2]
            return math.sqrt(dx * dx + dy * dy + dz * dz)

        # Both tracks must start at the origin and finish at the destination.
        for name, track in [("ground", path), ("inertial", inertial)]:
            start = point_at_fraction(track, 0.0).to_tuple()
            end = point_at_fraction(track, 1.0).to_tuple()
            miss = max(dist3(start, a.position.to_tuple()), dist3(end, b.position.to_tuple()))
            if miss > 1e-9:
                raise AssertionError(f"{name} path misses an endpoint by {miss:.3e}")
        print("  ✅ Both tracks connect origin and destination")

        engine = GlobeEngine()
        for fraction in (0.0, 0.25, 0.5, 0.75, 1.0):
            info = engine.get_frame_info(fraction * engine.travel_time, 20.0, 0.0)
            print(
                f"  ✅ t={info['elapsed']}: ground={tuple(round(c, 3) for c in info['ground_target'])} "
                f"inertial={tuple(round(c, 3) for c in info['inertial_target'])} visible={len(info['points'])}"
            )

        print("✅ Globe Engine tests passed!\n")
        return True

    except Exception as e:
        print(f"❌ Globe Engine test failed: {e}\n")
        import traceback
        traceback.print_exc()
        return False


def test_viewer_import():
    print("Testing Viewer...")
    try:
        import matplotlib
        matplotlib.use("Agg")
        import viewer
        from coriolis import GlobeEngine

        engine = GlobeEngine(path_depth=3)
        fig, _ax, scatter, label = viewer.build_figure()
        viewer.draw_frame(engine, viewer.ViewState(), scatter, label)
        viewer.plt.close(fig)
        print(f"  ✅ Headless frame rendered: {label.get_text()}")

        print("✅ Viewer tests passed!\n")
        return True

    except Exception as e:
        print(f"❌ Viewer test failed: {e}\n")
        import traceback
        traceback.print_exc()
        return False


def main():
    print("=" * 60)
    print("Rotating Globe Geometry - Test Suite")
    print("=" * 60)
    print()

    results = []

    results.append(("Dependencies", test_dependencies()))
    results.append(("Globe Engine", test_globe_engine()))
    results.append(("Viewer", test_viewer_import()))

    print("=" * 60)
    print("Test Summary")
    print("=" * 60)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for test_name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"{test_name:.<40} {status}")

    print()
    print(f"Total: {passed}/{total} tests passed")
    print()

    if passed == total:
        print("🎉 All tests passed!")
        print()
        print("To watch the animation, run:")
        print("  python viewer.py")
        print("  or")
        print("  python viewer.py --inertial")
        print()
        print("Options: --hide-paths to draw only the grid and targets,")
        print("         --save globe.gif to write the animation to a file")
        print("  e.g. python viewer.py --inertial --hide-paths --save globe.gif")
    else:
        print("⚠️  Some tests failed. Please fix the issues above.")

    print("=" * 60)

    return 0 if passed == total else 1


if __name__ == "__main__":
    sys.exit(main())
