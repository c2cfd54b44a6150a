"""
===============================================================================
Mirror Geometry - Feature Verification
===============================================================================

Tests the Mirror scene object:
1. Endpoints and normal for the rotation convention (0 = vertical)
2. Hit-testing on the rotated rectangle, boundary included
3. Signed distance, point reflection, distance to the segment
4. Serialization of non-default properties, strict property keys
5. Virtual mirror construction

USAGE
-----
    python -m mirror_images.developer_tests.test_mirror

===============================================================================
"""

import sys
import os

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from mirror_images.core.geometry import Point
from mirror_images.core.scene_objs import Mirror, Observer, PhysicalObject


def _close(a, b, tol=1e-9):
    return abs(a - b) < tol


def _expect_value_error(func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except ValueError:
        return
    raise AssertionError(f"{func.__name__} should raise ValueError")


def test_endpoints_vertical():
    """Test 1: Rotation 0 gives a vertical segment, start on top."""
    print("\nTest 1: Endpoints at rotation 0")
    mirror = Mirror(position={'x': 100, 'y': 50}, height=200)
    start, end = mirror.endpoints()
    assert _close(start.x, 100) and _close(start.y, -50), f"start={start}"
    assert _close(end.x, 100) and _close(end.y, 150), f"end={end}"
    normal = mirror.normal()
    assert _close(normal.x, 1) and _close(normal.y, 0), f"normal={normal}"
    print(f"  PASS: {start} -> {end}, normal {normal}")


def test_endpoints_horizontal():
    """Test 2: Rotation 90 gives a horizontal segment."""
    print("\nTest 2: Endpoints at rotation 90")
    mirror = Mirror(position={'x': 100, 'y': 50}, height=200, rotation=90)
    start, end = mirror.endpoints()
    assert _close(start.x, 200) and _close(start.y, 50), f"start={start}"
    assert _close(end.x, 0) and _close(end.y, 50), f"end={end}"
    normal = mirror.normal()
    assert _close(normal.x, 0) and _close(normal.y, 1), f"normal={normal}"
    print(f"  PASS: {start} -> {end}")


def test_contains_point():
    """Test 3: Hit-testing uses the rotated width x height rectangle."""
    print("\nTest 3: contains_point")
    mirror = Mirror(position={'x': 0, 'y': 0}, width=6, height=400)
    assert mirror.contains_point(2, 100)
    assert mirror.contains_point(3, 0), "Boundary should count as inside"
    assert not mirror.contains_point(10, 0)
    assert not mirror.contains_point(0, 201)

    rotated = Mirror(position={'x': 50, 'y': 50}, width=6, height=400, rotation=90)
    assert rotated.contains_point(200, 52)
    assert not rotated.contains_point(52, 200)
    print("  PASS")


def test_signed_distance_and_reflection():
    """Test 4: Signed distance sides and reflection across the plane."""
    print("\nTest 4: signed_distance / reflect_point")
    mirror = Mirror(position={'x': 200, 'y': 0})
    assert _close(mirror.signed_distance(Point(230, 7)), 30)
    assert _close(mirror.signed_distance(Point(170, -7)), -30)

    image = mirror.reflect_point(Point(150, 40))
    assert _close(image.x, 250) and _close(image.y, 40), f"Got {image}"
    print(f"  PASS: reflected to {image}")


def test_distance_to_point():
    """Test 5: Distance to the finite segment, not the infinite plane."""
    print("\nTest 5: distance_to_point")
    mirror = Mirror(position={'x': 0, 'y': 0}, height=400)
    assert _close(mirror.distance_to_point(Point(30, 0)), 30)
    assert _close(mirror.distance_to_point(Point(0, 300)), 100)

    degenerate = Mirror(position={'x': 0, 'y': 0}, height=0)
    assert _close(degenerate.distance_to_point(Point(3, 4)), 5)
    print("  PASS")


def test_intersect_segment():
    """Test 6: A sight line crossing the mirror hits it."""
    print("\nTest 6: intersect_segment")
    mirror = Mirror(position={'x': 200, 'y': 0}, height=400)
    hit = mirror.intersect_segment(Point(0, 100), Point(400, 0))
    assert hit is not None
    assert _close(hit.x, 200) and _close(hit.y, 50), f"Got {hit}"
    assert mirror.intersect_segment(Point(0, 0), Point(100, 0)) is None
    print(f"  PASS: hit at {hit}")


def test_serialize():
    """Test 7: Only non-default properties are serialized."""
    print("\nTest 7: serialize")
    mirror = Mirror(position={'x': 10, 'y': 20}, rotation=45)
    data = mirror.serialize()
    assert data == {'type': 'Mirror', 'position': {'x': 10, 'y': 20}, 'rotation': 45}, data
    assert mirror.are_properties_default(['width', 'height'])

    restored = Mirror(data)
    assert restored.position == Point(10, 20)
    assert restored.rotation == 45
    assert restored is not mirror and restored.uuid != mirror.uuid

    obj = PhysicalObject(position=(5, 6), direction=90)
    assert obj.serialize() == {'type': 'PhysicalObject', 'position': {'x': 5, 'y': 6}, 'direction': 90}
    assert Observer().serialize() == {'type': 'Observer'}
    print(f"  PASS: {data}")


def test_unknown_keys_rejected():
    """Test 8: Unknown property keys raise ValueError."""
    print("\nTest 8: unknown keys")
    _expect_value_error(Mirror, colour='red')
    mirror = Mirror()
    _expect_value_error(mirror.update, length=10)
    mirror.update(position={'x': 1, 'y': 2}, height=50)
    assert mirror.position == Point(1, 2) and mirror.height == 50
    print("  PASS")


def test_virtual_mirror_construction():
    """Test 9: Virtual mirrors carry order and source mirror."""
    print("\nTest 9: Mirror.virtual")
    real = Mirror()
    assert not real.is_virtual and real.order is None and real.source_mirror is None

    virtual = Mirror.virtual(Point(1, 2), 6, 100, 30, source_mirror=real, order=2)
    assert virtual.is_virtual and virtual.order == 2
    assert virtual.source_mirror is real
    assert 'virtual order=2' in repr(virtual)

    _expect_value_error(Mirror.virtual, Point(0, 0), 6, 100, 0, real, 0)
    print(f"  PASS: {virtual!r}")


def test_display_name():
    """Test 10: Display name falls back to type and short uuid."""
    print("\nTest 10: get_display_name")
    mirror = Mirror()
    assert mirror.get_display_name() == f"Mirror_{mirror.uuid[:8]}"
    mirror.name = "Left mirror"
    assert mirror.get_display_name() == "Left mirror"
    print("  PASS")


# =============================================================================
# Runner
# =============================================================================

def main():
    print("=" * 70)
    print("Mirror geometry")
    print("=" * 70)

    tests = [
        ("endpoints rotation 0",        test_endpoints_vertical),
        ("endpoints rotation 90",       test_endpoints_horizontal),
        ("contains_point",              test_contains_point),
        ("signed distance/reflection",  test_signed_distance_and_reflection),
        ("distance_to_point",           test_distance_to_point),
        ("intersect_segment",           test_intersect_segment),
        ("serialize",                   test_serialize),
        ("unknown keys",                test_unknown_keys_rejected),
        ("Mirror.virtual",              test_virtual_mirror_construction),
        ("display name",                test_display_name),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  FAIL: {e}")
            results.append((name, False))

    print("\n" + "=" * 70)
    passed = sum(1 for _, ok in results if ok)
    print(f"Results: {passed}/{len(results)} tests passed")
    for name, ok in results:
        print(f"  [{'PASS' if ok else 'FAIL'}] {name}")
    print("=" * 70)

    if passed != len(results):
        sys.exit(1)


if __name__ == '__main__':
    main()
