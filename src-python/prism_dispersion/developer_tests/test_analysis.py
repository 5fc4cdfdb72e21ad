"""
===============================================================================
ANALYSIS TESTS
===============================================================================

1. PHOTON PATH EXPORT
   - CSV with one row per segment
   - Statistics and TIR filter

2. SCENE GEOMETRY
   - Body boundaries (area, perimeter, index)
   - Overlapping bodies and enclosed sources

Run with:
    python developer_tests/test_analysis.py

Or with pytest:
    pytest developer_tests/test_analysis.py -v
===============================================================================
"""

import sys
import csv
import math
import random
import tempfile
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from prism_dispersion.core.geometry import Vector2
from prism_dispersion.core.dispersion import CauchyDispersion, NoDispersion
from prism_dispersion.core.photon import PhotonPath
from prism_dispersion.core.scene import Scene
from prism_dispersion.core.scene_objs import TrianglePrism, Square, PhotonSource
from prism_dispersion.core.simulator import Simulation
from prism_dispersion.analysis import (
    save_paths_csv,
    get_path_statistics,
    filter_tir_paths,
    exit_angle,
    analyze_scene_geometry,
    find_overlapping_bodies,
)


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def make_paths():
    escaped = PhotonPath(
        points=[Vector2(0, 0), Vector2(1, 0), Vector2(1, 1)],
        wavelength=450.0,
    )
    escaped.termination = 'escaped'
    escaped.hit_count = 1

    tir = PhotonPath(points=[Vector2(0, 0), Vector2(0, 2)], wavelength=650.0)
    tir.termination = 'tir'
    tir.caused_tir = True
    tir.hit_count = 1

    capped = PhotonPath(points=[Vector2(5, 5)], wavelength=500.0)
    capped.termination = 'max_segments'
    return [escaped, tir, capped]


# =============================================================================
# PHOTON PATH EXPORT
# =============================================================================

def test_save_paths_csv():
    print("\n" + "=" * 60)
    print("TEST: save_paths_csv")
    print("=" * 60)

    paths = make_paths()
    with tempfile.TemporaryDirectory() as tmp:
        csv_file = save_paths_csv(paths, Path(tmp) / 'nested')
        assert csv_file.name == 'photon_paths.csv'
        with open(csv_file, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))

    # 2 + 1 + 0 segments
    assert len(rows) == 3
    assert [r['path_index'] for r in rows] == ['0', '0', '1']
    assert rows[1]['p2_y'] == '1.0000'
    assert rows[1]['length'] == '1.0000'
    assert rows[2]['termination'] == 'tir'
    assert rows[2]['caused_tir'] == 'True'
    assert rows[0]['caused_tir'] == 'False'
    print(f"  {len(rows)} segment rows - PASS")


def test_path_statistics():
    print("\n" + "=" * 60)
    print("TEST: get_path_statistics")
    print("=" * 60)

    stats = get_path_statistics(make_paths())
    assert stats['total_paths'] == 3
    assert stats['total_points'] == 6
    assert stats['escaped_paths'] == 1
    assert stats['tir_paths'] == 1
    assert stats['max_segments_paths'] == 1
    assert stats['total_hits'] == 2
    assert_close(stats['avg_hits'], 2 / 3)
    assert stats['min_wavelength'] == 450.0
    assert stats['max_wavelength'] == 650.0
    assert_close(stats['total_length'], 4.0)
    # Only one escaped path with hits
    assert stats['exit_angle_spread'] == 0.0
    print("  Counts, wavelength range, length - PASS")

    empty = get_path_statistics([])
    assert empty['total_paths'] == 0
    assert empty['min_wavelength'] is None


def test_filter_and_exit_angle():
    paths = make_paths()
    assert filter_tir_paths(paths) == [paths[1]]
    assert filter_tir_paths(paths, tir_only=False) == [paths[0], paths[2]]

    assert_close(exit_angle(paths[0]), math.pi / 2)
    assert math.isnan(exit_angle(paths[2]))


def test_statistics_of_dispersed_fan():
    sim = Simulation(photons_per_tick=8, rng=random.Random(3))
    sim.add_object(TrianglePrism(Vector2(0, 0), 3.0, CauchyDispersion(1.52, 20)))
    sim.add_object(PhotonSource(Vector2(-2.5, -0.6), rotation=0.34))
    paths = sim.photon_paths()
    stats = get_path_statistics(paths)
    assert stats['escaped_paths'] == 8
    assert stats['exit_angle_spread'] > 0.0

    sim.update_dispersion(sim.objects[0].dispersion, abbe=8e6)
    flat_stats = get_path_statistics(sim.photon_paths())
    assert flat_stats['exit_angle_spread'] < stats['exit_angle_spread']


# =============================================================================
# SCENE GEOMETRY
# =============================================================================

def test_analyze_scene_geometry():
    print("\n" + "=" * 60)
    print("TEST: analyze_scene_geometry")
    print("=" * 60)

    scene = Scene()
    scene.add_object(TrianglePrism(Vector2(0, 0), 3.0, CauchyDispersion(1.52, 20)))
    scene.add_object(Square(Vector2(1.8, 0.3), 1.0, NoDispersion(1.33)))
    scene.add_object(PhotonSource(Vector2(-2, 0)))

    analysis = analyze_scene_geometry(scene)
    assert len(analysis.boundaries) == 2
    prism_boundary, square_boundary = analysis.boundaries
    assert_close(prism_boundary.area, math.sqrt(3) / 4 * 9)
    assert_close(prism_boundary.perimeter, 9.0)
    assert_close(prism_boundary.n, 1.52, 1e-12)
    assert_close(square_boundary.n, 1.33)
    assert not analysis.has_overlaps
    assert analysis.enclosed_sources == []
    assert_close(analysis.total_area, prism_boundary.area + 1.0)
    print(analysis.summary())
    print("  Boundaries, no overlaps, no enclosed sources - PASS")


def test_overlaps_and_enclosed_sources():
    print("\n" + "=" * 60)
    print("TEST: Overlapping bodies and enclosed sources")
    print("=" * 60)

    a = Square(Vector2(0, 0), 2.0)
    b = Square(Vector2(1, 0), 2.0)
    touching = Square(Vector2(-2, 0), 2.0)

    overlaps = find_overlapping_bodies([a, b, touching])
    assert len(overlaps) == 1
    assert overlaps[0].body1 is a and overlaps[0].body2 is b
    assert_close(overlaps[0].area, 2.0)
    print("  Overlap area 2.0, edge contact ignored - PASS")

    scene = Scene()
    scene.add_object(a)
    scene.add_object(b)
    inside = scene.add_object(PhotonSource(Vector2(0.2, 0.2)))
    scene.add_object(PhotonSource(Vector2(-5, 0)))

    analysis = analyze_scene_geometry(scene)
    assert analysis.has_overlaps
    assert analysis.enclosed_sources == [inside]
    assert_close(analysis.total_area, 6.0)
    assert 'overlap' in analysis.summary()


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("ANALYSIS TESTS")
    print("=" * 78)

    tests = [
        ("save_paths_csv", test_save_paths_csv),
        ("get_path_statistics", test_path_statistics),
        ("filter and exit angle", test_filter_and_exit_angle),
        ("Dispersed fan statistics", test_statistics_of_dispersed_fan),
        ("analyze_scene_geometry", test_analyze_scene_geometry),
        ("Overlaps and enclosed sources", test_overlaps_and_enclosed_sources),
    ]

    passed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
