"""
===============================================================================
Scene and Simulator - Feature Verification
===============================================================================

Tests the scene container and the full image computation pipeline:
1. Scene settings validation
2. Adding, updating, removing and hit-testing scene entities
3. Default mirror presets
4. Full run on two facing mirrors: images, virtual mirrors, paths, sight lines
5. Result summaries
6. Lineage of the visible images, observers read once per run
7. Package level exports

USAGE
-----
    python -m mirror_images.developer_tests.test_simulator

===============================================================================
"""

import sys
import os

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import mirror_images
from mirror_images import Scene, Simulator
from mirror_images.analysis.simulation_result import describe_simulation_result
from mirror_images.core.constants import DIRECT_SIGHT_COLOR
from mirror_images.core.geometry import Point
from mirror_images.core.reflection import virtual_image_position
from mirror_images.core.scene_objs import Mirror, Observer, PhysicalObject


def _expect_value_error(func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except ValueError:
        return
    raise AssertionError(f"{func.__name__} should raise ValueError")


def build_test_scene():
    """Two facing mirrors 400 apart, object at the center, observer above it."""
    scene = Scene()
    scene.name = 'facing mirrors'
    scene.add_mirror(Mirror(position={'x': -200, 'y': 0}, height=400, rotation=180))
    scene.add_mirror(Mirror(position={'x': 200, 'y': 0}, height=400, rotation=0))
    scene.add_object(PhysicalObject(position={'x': 0, 'y': 0}))
    scene.add_observer(Observer(position={'x': 0, 'y': 100}))
    return scene


# =============================================================================
# Scene
# =============================================================================

def test_settings_validation():
    """Test 1: Depth settings accept positive integers only."""
    print("\nTest 1: Settings validation")
    scene = Scene()
    assert scene.max_reflections == 3
    assert scene.virtual_mirror_depth == 2

    scene.max_reflections = 5
    scene.virtual_mirror_depth = 1
    assert scene.max_reflections == 5 and scene.virtual_mirror_depth == 1

    for bad in (0, -1, 2.5, True, '3', None):
        _expect_value_error(setattr, scene, 'max_reflections', bad)
        _expect_value_error(setattr, scene, 'virtual_mirror_depth', bad)
    assert scene.max_reflections == 5 and scene.virtual_mirror_depth == 1
    print("  PASS")


def test_scene_editing():
    """Test 2: Add, update, remove, with out-of-range indices ignored."""
    print("\nTest 2: Scene editing")
    scene = Scene()
    mirror = scene.add_mirror(Mirror())
    scene.add_object(PhysicalObject())
    scene.add_observer(Observer())

    assert scene.update_mirror(0, rotation=45)
    assert mirror.rotation == 45
    assert scene.update_object(0, position={'x': 10, 'y': 20})
    assert scene.objects[0].position == Point(10, 20)
    assert not scene.update_observer(3, size=10)
    assert not scene.update_mirror(-1, rotation=10)

    assert not scene.remove_mirror(5)
    assert scene.remove_mirror(0) and scene.mirrors == []
    assert scene.remove_object(0) and scene.remove_observer(0)

    ghost = Mirror.virtual(Point(0, 0), 6, 100, 0, source_mirror=mirror)
    _expect_value_error(scene.add_mirror, ghost)
    print(f"  PASS: {scene!r}")


def test_default_mirror_presets():
    """Test 3: Successive default mirrors follow the preset layout."""
    print("\nTest 3: add_default_mirror")
    scene = Scene()
    expected = [
        (380, 400, 180),
        (620, 400, 180),
        (500, 200, 90),
        (380, 400, 180),
    ]
    added = []
    for x, y, rotation in expected:
        mirror = scene.add_default_mirror(1000, 800)
        assert abs(mirror.position.x - x) < 1e-9 and abs(mirror.position.y - y) < 1e-9, mirror.position
        assert mirror.rotation == rotation
        assert mirror.width == 6 and mirror.height == 400
        added.append(mirror)
    # Wrapping around keeps the earlier mirrors in place
    assert len(scene.mirrors) == 4
    assert all(a is b for a, b in zip(scene.mirrors, added))
    assert abs(scene.mirrors[0].position.x - 380) < 1e-9 and scene.mirrors[0].rotation == 180
    print("  PASS")


def test_find_mirror_at():
    """Test 4: The most recently added mirror under the pointer wins."""
    print("\nTest 4: find_mirror_at")
    scene = Scene()
    bottom = scene.add_mirror(Mirror(position={'x': 0, 'y': 0}))
    top = scene.add_mirror(Mirror(position={'x': 2, 'y': 0}))

    assert scene.find_mirror_at(1, 0) is top
    assert scene.find_mirror_at(-2, 0) is bottom
    assert scene.find_mirror_at(50, 0) is None
    print("  PASS")


# =============================================================================
# Simulator
# =============================================================================

def test_full_run():
    """Test 5: Facing mirrors with three reflections."""
    print("\nTest 5: Simulator.run")
    scene = build_test_scene()
    result = Simulator(scene, name='run 1').run()

    assert result.image_count == 6, f"Expected 6 images, got {result.image_count}"
    by_order = result.images_by_order()
    assert {k: len(v) for k, v in by_order.items()} == {1: 2, 2: 2, 3: 2}
    assert result.max_order == 3
    assert result.parallel_group_count == 1

    # 2 mirrors, depth 2: 2 first-order + 2 second-order virtual mirrors
    assert len(result.virtual_mirrors) == 4
    assert {k: len(v) for k, v in result.virtual_mirrors_by_order().items()} == {1: 2, 2: 2}

    # Paths: 3 segments per first-order, 4 per second-order, 5 per third-order image
    assert len(result.path_segments) == 2 * 3 + 2 * 4 + 2 * 5, len(result.path_segments)

    assert len(result.sight_lines) == 1
    sight = result.sight_lines[0]
    assert sight.order == 0 and not sight.dashed and sight.color == DIRECT_SIGHT_COLOR

    assert result.get_display_name() == 'run 1'
    assert result.scene_snapshot.name == 'facing mirrors'
    assert result.scene_snapshot.settings == {'max_reflections': 3, 'virtual_mirror_depth': 2}
    print(f"  PASS: {result!r}")


def test_scene_not_modified():
    """Test 6: Running the simulator leaves the scene untouched."""
    print("\nTest 6: Scene not modified")
    scene = build_test_scene()
    before = [m.serialize() for m in scene.mirrors]
    Simulator(scene).run()
    Simulator(scene).run()
    assert [m.serialize() for m in scene.mirrors] == before
    assert len(scene.mirrors) == 2
    assert all(not m.is_virtual for m in scene.mirrors)
    print("  PASS")


def test_max_reflections_setting():
    """Test 7: The depth setting limits the parallel image chain."""
    print("\nTest 7: max_reflections setting")
    scene = build_test_scene()
    scene.max_reflections = 1
    scene.virtual_mirror_depth = 1
    result = Simulator(scene).run()
    assert result.image_count == 2
    assert len(result.virtual_mirrors) == 2
    print("  PASS")


def test_blocked_sight_line():
    """Test 8: A mirror between object and observer blocks the direct view."""
    print("\nTest 8: Blocked sight line")
    scene = Scene()
    scene.add_mirror(Mirror(position={'x': 0, 'y': 50}, height=100, rotation=90))
    scene.add_object(PhysicalObject(position={'x': 0, 'y': 0}))
    scene.add_observer(Observer(position={'x': 0, 'y': 100}))
    result = Simulator(scene).run()
    assert result.sight_lines == []
    assert result.virtual_mirrors == []
    assert result.parallel_group_count == 0
    print("  PASS")


def test_empty_scene():
    """Test 9: An empty scene runs and produces nothing."""
    print("\nTest 9: Empty scene")
    result = Simulator(Scene()).run()
    assert result.image_count == 0 and result.max_order == 0
    assert result.path_segments == [] and result.sight_lines == []
    print("  PASS")


def test_describe_result():
    """Test 10: Text and XML summaries."""
    print("\nTest 10: describe_simulation_result")
    result = Simulator(build_test_scene()).run()

    text = describe_simulation_result(result, format='text')
    assert 'Visible images: 6' in text
    assert 'order 3: 2' in text

    xml = describe_simulation_result(result)
    assert xml.startswith('<?xml')
    assert '<image_count>6</image_count>' in xml
    assert '<max_reflections>3</max_reflections>' in xml
    print("  PASS")


def test_parents_resolve_in_lineage():
    """Test 11: Every parent_uuid of a visible image resolves in the run lineage."""
    print("\nTest 11: Parents resolve in the lineage")
    result = Simulator(build_test_scene()).run()
    lineage = result.lineage
    assert lineage is not None

    # 2 single reflections + 6 images of the parallel chain
    assert lineage.image_count == 8, lineage.image_count
    visible = {img.uuid for img in result.images}
    for img in result.images:
        parent = lineage.get_parent(img.uuid)
        if img.order == 1:
            assert parent is None
        else:
            assert parent is not None, f"Unresolved parent {img.parent_uuid}"
            assert parent.order == img.order - 1

    # The order-1 images of the chain are parents but not in result.images
    hidden = result.hidden_ancestors()
    assert [img.order for img in hidden] == [1, 1]
    assert all(img.uuid not in visible for img in hidden)
    known = visible | {img.uuid for img in hidden}
    assert all(img.parent_uuid in known for img in result.images if img.parent_uuid)
    assert all(lineage.get_image(img.uuid) is img for img in lineage.get_images())
    print(f"  PASS: {lineage!r}")


def test_trace_uses_given_observers():
    """Test 12: Path tracing only looks at the observers it is handed."""
    print("\nTest 12: Trace uses the given observers")
    scene = build_test_scene()
    simulator = Simulator(scene)
    mirrors = list(scene.mirrors)
    obj = scene.objects[0]
    image = virtual_image_position(obj, mirrors[1])

    assert simulator._trace(image, [image], obj, mirrors, []) == []
    segments = simulator._trace(image, [image], obj, mirrors, list(scene.observers))
    assert len(segments) == 3

    # An observer added to the scene afterwards is not seen by the snapshot
    snapshot = list(scene.observers)
    scene.add_observer(Observer(position={'x': 0, 'y': -100}))
    assert len(simulator._trace(image, [image], obj, mirrors, snapshot)) == 3
    print("  PASS")


def test_package_exports():
    """Test 13: The top-level package exposes its version and main classes."""
    print("\nTest 13: Package exports")
    assert mirror_images.__version__ == "0.1.0"
    for name in ('Scene', 'Simulator', 'VirtualImage'):
        assert name in mirror_images.__all__
        assert hasattr(mirror_images, name)
    assert mirror_images.__doc__ and 'Mirror Images' in mirror_images.__doc__
    assert 'Apache License' in mirror_images.__doc__
    print("  PASS")


# =============================================================================
# Runner
# =============================================================================

def main():
    print("=" * 70)
    print("Scene and simulator")
    print("=" * 70)

    tests = [
        ("settings validation",         test_settings_validation),
        ("scene editing",               test_scene_editing),
        ("default mirror presets",      test_default_mirror_presets),
        ("find_mirror_at",              test_find_mirror_at),
        ("full run",                    test_full_run),
        ("scene not modified",          test_scene_not_modified),
        ("max_reflections setting",     test_max_reflections_setting),
        ("blocked sight line",          test_blocked_sight_line),
        ("empty scene",                 test_empty_scene),
        ("describe result",             test_describe_result),
        ("parents resolve in lineage",  test_parents_resolve_in_lineage),
        ("trace uses given observers",  test_trace_uses_given_observers),
        ("package exports",             test_package_exports),
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
