"""
===============================================================================
SCENE OBJECT TESTS
===============================================================================

1. BODY GEOMETRY
   - Side lengths, interior angles, areas
   - Clockwise winding (negative signed area), outward edge normals
   - Centroid at position

2. TRANSFORMS
   - Edges and path rebuilt on position/rotation/scale changes
   - position getter returns a copy
   - Shared dispersion models

3. SOURCES AND SCENE
   - forward(), move, rotate
   - Scene bookkeeping and point picking

Run with:
    python developer_tests/test_scene_objs.py

Or with pytest:
    pytest developer_tests/test_scene_objs.py -v
===============================================================================
"""

import sys
import math
import warnings
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from prism_dispersion.core.geometry import Vector2
from prism_dispersion.core.dispersion import CauchyDispersion
from prism_dispersion.core.scene import Scene
from prism_dispersion.core.scene_objs import TrianglePrism, Square, PhotonSource


TOLERANCE = 1e-9
ANGLE_TOLERANCE = 1e-6  # degrees


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_outward_normals(body):
    """Every edge normal points out of the body."""
    polygon = body.to_shapely()
    eps = 1e-3 * body.scale
    for i, edge in enumerate(body.edges):
        mid = edge.midpoint()
        n = edge.normal()
        outside = mid.add(n.scale(eps)).to_shapely()
        inside = mid.sub(n.scale(eps)).to_shapely()
        assert not polygon.contains(outside), f"Edge {i} normal points inward"
        assert polygon.contains(inside), f"Edge {i} normal points inward"


# =============================================================================
# BODY GEOMETRY
# =============================================================================

def test_triangle_geometry():
    print("\n" + "=" * 60)
    print("TEST: TrianglePrism geometry")
    print("=" * 60)

    side = 3.0
    prism = TrianglePrism(Vector2(0.5, -1), side)

    area = prism.signed_area()
    assert area < 0, f"Expected negative signed area (CW), got {area}"
    assert_close(-area, math.sqrt(3) / 4 * side ** 2, 1e-9, "area")
    print(f"  Signed area: {area:.4f} (negative = CW) - PASS")

    assert len(prism.edges) == 3
    for i in range(3):
        assert_close(prism.get_edge_length(i), side, 1e-9, f"Edge {i} length")
        assert_close(prism.get_interior_angle(i), 60.0, ANGLE_TOLERANCE, f"Vertex {i} angle")
    print("  Sides equal, angles 60 deg - PASS")

    cx, cy = prism.get_centroid()
    assert_close(cx, 0.5, 1e-9, "centroid x")
    assert_close(cy, -1.0, 1e-9, "centroid y")
    assert prism.apex.y > cy
    print("  Centroid at position, apex on top - PASS")

    assert_outward_normals(prism)
    print("  Edge normals point outward - PASS")

    assert prism.get_edge_length(5) == 0.0
    assert prism.get_interior_angle(-1) == 0.0
    assert prism.edge_label(2) == ("E", "Entrance Face")
    assert "Edge 1: Base (B)" in prism.label_summary()


def test_square_geometry():
    print("\n" + "=" * 60)
    print("TEST: Square geometry")
    print("=" * 60)

    square = Square(Vector2(1.8, 0.3), 1.0, rotation=0.3)
    assert square.signed_area() < 0
    assert_close(square.to_shapely().area, 1.0, 1e-9, "area")
    for i in range(4):
        assert_close(square.get_edge_length(i), 1.0, 1e-9, f"Edge {i} length")
        assert_close(square.get_interior_angle(i), 90.0, ANGLE_TOLERANCE, f"Vertex {i} angle")
    cx, cy = square.get_centroid()
    assert_close(cx, 1.8, 1e-9)
    assert_close(cy, 0.3, 1e-9)
    assert_outward_normals(square)
    print("  Unit square, CW, outward normals - PASS")


def test_path_matches_edges():
    prism = TrianglePrism(Vector2(0, 2.2), 1.3, rotation=0.7)
    path = prism.path
    assert len(path) == len(prism.edges)
    for point, edge in zip(path, prism.edges):
        assert (point['x'], point['y']) == (edge.a.x, edge.a.y)
    # Edges form a closed loop
    for i, edge in enumerate(prism.edges):
        nxt = prism.edges[(i + 1) % 3]
        assert (edge.b.x, edge.b.y) == (nxt.a.x, nxt.a.y)


# =============================================================================
# TRANSFORMS
# =============================================================================

def test_transform_setters_rebuild():
    print("\n" + "=" * 60)
    print("TEST: Transform setters rebuild edges and path")
    print("=" * 60)

    square = Square(Vector2(0, 0), 2.0)
    before = [(v.x, v.y) for v in square.vertices]

    square.position = Vector2(3, -1)
    for (x0, y0), v, p in zip(before, square.vertices, square.path):
        assert_close(v.x, x0 + 3)
        assert_close(v.y, y0 - 1)
        assert (p['x'], p['y']) == (v.x, v.y)
    assert_close(square.edges[0].a.x, square.vertices[0].x)
    print("  position - PASS")

    square.scale = 4.0
    assert_close(square.get_edge_length(0), 4.0)
    print("  scale - PASS")

    square.rotation = math.pi / 4
    ys = [v.y for v in square.vertices]
    assert_close(max(ys), -1 + 2 * math.sqrt(2), 1e-9, "rotated top vertex")
    print("  rotation - PASS")

    square.set_transform(position=Vector2(0, 0), rotation=0.0, scale=1.0)
    assert_close(square.to_shapely().area, 1.0)
    cx, cy = square.get_centroid()
    assert_close(cx, 0.0)
    assert_close(cy, 0.0)
    print("  set_transform - PASS")


def test_move_and_rotate():
    prism = TrianglePrism(Vector2(0, 0), 1.0)
    apex_before = prism.apex
    assert prism.move(1.0, 2.0) is True
    assert_close(prism.apex.x, apex_before.x + 1.0)
    assert_close(prism.apex.y, apex_before.y + 2.0)

    assert prism.rotate(math.pi) is True
    assert_close(prism.rotation, math.pi)
    # Apex now points down
    assert prism.apex.y < prism.position.y
    assert_outward_normals(prism)


def test_position_getter_returns_copy():
    square = Square(Vector2(1, 1), 1.0)
    p = square.position
    p.x = 100
    assert square.position.x == 1
    assert_close(square.get_centroid()[0], 1.0)

    # The constructor argument is copied as well
    start = Vector2(5, 5)
    prism = TrianglePrism(start, 1.0)
    start.x = -5
    assert prism.position.x == 5


def test_geometry_accessors_return_copies():
    square = Square(Vector2(0, 0), 2.0)

    # Writing through an edge endpoint leaves the cached edge intact
    square.edges[0].a.x = 50.0
    square.edges[0].b.y = 50.0
    assert square.edges[0].a.x == -1.0
    assert square.edges[0].b.y == 1.0

    # Writing through a vertex keeps vertices, edges and outline in sync
    square.vertices[0].x = 50.0
    assert square.vertices[0].x == -1.0
    assert square.vertices[0].x == square.edges[0].a.x
    assert square.to_shapely().bounds == (-1.0, -1.0, 1.0, 1.0)

    prism = TrianglePrism(Vector2(0, 0), 3.0)
    prism.apex.y = -10.0
    assert_close(prism.apex.y, math.sqrt(3))


def test_diagram_docstrings_compile_cleanly():
    import prism_dispersion.core.scene_objs.glass.triangle_prism as module
    source = Path(module.__file__).read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, module.__file__, "exec")
    assert "V2--------V1" in module.__doc__

def test_shared_dispersion():
    glass = CauchyDispersion(1.52, 20)
    a = TrianglePrism(Vector2(0, 0), 3.0, glass)
    b = Square(Vector2(5, 0), 1.0, glass)
    assert a.get_ior(400) == b.get_ior(400)
    before = a.get_ior(400)
    glass.abbe = 60
    assert a.get_ior(400) == b.get_ior(400) < before

    # Default material does not refract
    assert Square().get_ior(500) == 1.0


def test_contains_point_and_serialize():
    square = Square(Vector2(0, 0), 2.0, name='Block')
    assert square.contains_point(Vector2(0.5, 0.5))
    assert not square.contains_point(Vector2(1.5, 0))
    assert square.contains_point(Vector2(1.05, 0), threshold=0.1)

    data = square.serialize()
    assert data['type'] == 'Square'
    assert data['name'] == 'Block'
    assert data['position'] == {'x': 0, 'y': 0}
    assert data['scale'] == 2.0
    assert data['dispersion']['type'] == 'NoDispersion'
    assert square.get_display_name() == 'Block'

    unnamed = TrianglePrism()
    assert unnamed.get_display_name() == f"TrianglePrism_{unnamed.uuid[:8]}"
    assert 'name' not in unnamed.serialize()


# =============================================================================
# SOURCES AND SCENE
# =============================================================================

def test_photon_source():
    print("\n" + "=" * 60)
    print("TEST: PhotonSource")
    print("=" * 60)

    source = PhotonSource(Vector2(-2, 0), rotation=0.0)
    f = source.forward()
    assert_close(f.x, 1.0)
    assert_close(f.y, 0.0)

    source.rotate(math.pi / 2)
    f = source.forward()
    assert_close(f.x, 0.0)
    assert_close(f.y, 1.0)
    assert_close(f.length(), 1.0)

    source.move(0.5, 1.0)
    assert (source.position.x, source.position.y) == (-1.5, 1.0)
    assert source.contains_point(Vector2(-1.5, 1.05), threshold=0.1)
    assert not source.contains_point(Vector2(0, 0), threshold=0.1)

    data = source.serialize()
    assert data['type'] == 'PhotonSource'
    assert_close(data['rotation'], math.pi / 2)
    print("  forward, rotate, move, serialize - PASS")


def test_scene_bookkeeping():
    print("\n" + "=" * 60)
    print("TEST: Scene bookkeeping")
    print("=" * 60)

    scene = Scene()
    prism = scene.add_object(TrianglePrism(Vector2(0, 0), 3.0))
    square = scene.add_object(Square(Vector2(0.5, 0), 1.0, name='Block'))
    source = scene.add_object(PhotonSource(Vector2(-2, 0)))

    assert scene.objs == [prism, square, source]
    assert scene.bodies == [prism, square]
    assert scene.sources == [source]
    assert scene.get_object_by_name('Block') is square
    assert scene.get_object_by_name('missing') is None

    scene.remove_object(square)
    assert scene.bodies == [prism]
    assert square not in scene.objs

    scene.warning = "something"
    scene.clear()
    assert scene.objs == [] and scene.bodies == [] and scene.sources == []
    assert scene.warning is None
    print("  add/remove/clear - PASS")

    scene.name = None
    assert scene.get_display_name() == f"Scene_{scene.uuid[:8]}"
    assert 0.0 <= scene.rng() < 1.0


def test_find_object_at():
    print("\n" + "=" * 60)
    print("TEST: Scene.find_object_at")
    print("=" * 60)

    scene = Scene()
    prism = scene.add_object(TrianglePrism(Vector2(0, 0), 3.0))
    square = scene.add_object(Square(Vector2(0.5, 0), 1.0))
    source = scene.add_object(PhotonSource(Vector2(-2, 0)))

    # Inside both bodies: the one added last wins
    assert scene.find_object_at(Vector2(0.5, 0)) is square
    assert scene.find_object_at(Vector2(-0.5, 0)) is prism
    assert scene.find_object_at(Vector2(-2.05, 0.02)) is source
    assert scene.find_object_at(Vector2(10, 10)) is None
    print("  Topmost body, source, empty space - PASS")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE OBJECT TESTS")
    print("=" * 78)

    tests = [
        ("Triangle geometry", test_triangle_geometry),
        ("Square geometry", test_square_geometry),
        ("Path matches edges", test_path_matches_edges),
        ("Transform setters", test_transform_setters_rebuild),
        ("Move and rotate", test_move_and_rotate),
        ("Position getter copy", test_position_getter_returns_copy),
        ("Geometry accessor copies", test_geometry_accessors_return_copies),
        ("Diagram docstrings", test_diagram_docstrings_compile_cleanly),
        ("Shared dispersion", test_shared_dispersion),
        ("contains_point and serialize", test_contains_point_and_serialize),
        ("PhotonSource", test_photon_source),
        ("Scene bookkeeping", test_scene_bookkeeping),
        ("find_object_at", test_find_object_at),
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
