"""
Copyright 2026 mirror-images authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Reflection Solver

Computes where things appear when seen in flat mirrors:
- the virtual image of an object (position and facing direction),
- the virtual copy of a mirror reflected in another mirror,
- all virtual mirrors of a scene up to a given order,
- the chain of higher-order images produced by a group of parallel mirrors.

All functions are pure: inputs are never modified and every call returns
freshly built objects.
"""

import logging
import math
from typing import List, Optional, Sequence, Set, Tuple

from .constants import DEDUP_GRANULARITY, DEFAULT_MAX_REFLECTIONS, DEFAULT_VIRTUAL_MIRROR_DEPTH
from .geometry import geometry, Point
from .scene_objs.mirror import Mirror
from .virtual_image import VirtualImage

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _dedup_key(position: Point, depth: int) -> Tuple[int, int, int]:
    return (
        _round_half_up(position.x / DEDUP_GRANULARITY),
        _round_half_up(position.y / DEDUP_GRANULARITY),
        depth,
    )


def virtual_image_position(obj, mirror: Mirror) -> VirtualImage:
    """
    Calculate the virtual image of an object in a mirror.

    The position is reflected across the mirror's infinite plane. The facing
    direction becomes ``(2 * mirror_angle - direction + 180) mod 360`` with the
    mirror angle normalized to [0, 360).

    Args:
        obj: Anything with ``position``, ``direction`` and ``size`` attributes
            (a PhysicalObject or a VirtualImage).
        mirror: The reflecting mirror (real or virtual).

    Returns:
        VirtualImage of order 1 with ``source_mirror = mirror``. Callers
        reflecting at higher depths set ``order`` and ``parent_uuid`` themselves.
    """
    position = mirror.reflect_point(obj.position)

    normalized_mirror_angle = mirror.rotation % 360
    reflected_direction = (2 * normalized_mirror_angle - obj.direction + 180) % 360

    return VirtualImage(
        position=position,
        direction=reflected_direction,
        size=obj.size,
        order=1,
        source_mirror=mirror,
    )


def virtual_mirror(source_mirror: Mirror, reflecting_mirror: Mirror) -> Mirror:
    """
    Calculate how a mirror appears when reflected in another mirror.

    Both endpoints of ``source_mirror`` are reflected across the plane of
    ``reflecting_mirror``; the virtual mirror is rebuilt from them.

    Args:
        source_mirror: The mirror being reflected (real or virtual)
        reflecting_mirror: The mirror doing the reflecting

    Returns:
        A virtual Mirror of order 1 whose ``source_mirror`` is ``reflecting_mirror``
    """
    start, end = source_mirror.endpoints()
    virtual_start = reflecting_mirror.reflect_point(start)
    virtual_end = reflecting_mirror.reflect_point(end)

    dx = virtual_end.x - virtual_start.x
    dy = virtual_end.y - virtual_start.y

    return Mirror.virtual(
        position=geometry.midpoint(virtual_start, virtual_end),
        width=source_mirror.width,
        height=geometry.distance(virtual_start, virtual_end),
        rotation=math.degrees(math.atan2(dx, -dy)),
        source_mirror=reflecting_mirror,
        order=1,
    )


def enumerate_virtual_mirrors(
    mirrors: Sequence[Mirror],
    max_order: int = DEFAULT_VIRTUAL_MIRROR_DEPTH
) -> List[Mirror]:
    """
    Calculate all virtual mirrors of a scene up to ``max_order``.

    Order 1 reflects every real mirror in every other real mirror (both
    directions of each pair). Each following order reflects every virtual
    mirror of the previous order in every real mirror except the one that
    created it.

    Args:
        mirrors: The real mirrors of the scene
        max_order: Deepest order to compute (>= 1)

    Returns:
        Virtual mirrors, lower orders first

    Raises:
        ValueError: If max_order < 1
    """
    if max_order < 1:
        raise ValueError(f"max_order must be >= 1, got {max_order}")
    if len(mirrors) <= 1:
        return []

    virtual_mirrors: List[Mirror] = []

    previous_order: List[Mirror] = []
    for i, source in enumerate(mirrors):
        for j, reflecting in enumerate(mirrors):
            if i != j:
                previous_order.append(virtual_mirror(source, reflecting))
    virtual_mirrors.extend(previous_order)

    for order in range(2, max_order + 1):
        current_order: List[Mirror] = []
        for virtual in previous_order:
            for reflecting in mirrors:
                # Never reflect a virtual mirror back into the mirror that created it
                if virtual.source_mirror is reflecting:
                    continue
                reflected = virtual_mirror(virtual, reflecting)
                reflected.order = order
                current_order.append(reflected)
        virtual_mirrors.extend(current_order)
        previous_order = current_order

    logger.debug("Enumerated %d virtual mirrors from %d mirrors (max order %d)",
                 len(virtual_mirrors), len(mirrors), max_order)
    return virtual_mirrors


def parallel_mirror_images(
    obj,
    mirror_group: Sequence[Mirror],
    max_reflections: int = DEFAULT_MAX_REFLECTIONS
) -> List[VirtualImage]:
    """
    Calculate the chain of virtual images produced by a group of mirrors.

    Breadth-first over reflection depth: the real object seeds depth 0; at
    each depth every image of the previous depth is reflected in every mirror
    of the group except the one that produced it. Images of the same depth
    whose positions round to the same DEDUP_GRANULARITY cell are kept once.

    Args:
        obj: The real object (``position``, ``direction``, ``size``)
        mirror_group: Mirrors to bounce between, usually a parallel group
        max_reflections: Deepest reflection order (>= 1)

    Returns:
        Accepted images of orders 1..max_reflections, each with ``order`` set to
        its depth, ``source_mirror`` set to the mirror that produced it and
        ``parent_uuid`` pointing at the image it was reflected from (None at
        depth 1). Empty if the group has fewer than two mirrors.

    Raises:
        ValueError: If max_reflections < 1
    """
    if max_reflections < 1:
        raise ValueError(f"max_reflections must be >= 1, got {max_reflections}")
    if len(mirror_group) < 2:
        return []

    results: List[VirtualImage] = []
    seen: Set[Tuple[int, int, int]] = set()

    # (reflectable thing, mirror that produced it, uuid of that image)
    seeds: List[Tuple[object, Optional[Mirror], Optional[str]]] = [(obj, None, None)]

    for depth in range(1, max_reflections + 1):
        next_seeds: List[Tuple[object, Optional[Mirror], Optional[str]]] = []

        for seed, seed_mirror, seed_uuid in seeds:
            for mirror in mirror_group:
                if mirror is seed_mirror:
                    continue

                image = virtual_image_position(seed, mirror)
                key = _dedup_key(image.position, depth)
                if key in seen:
                    continue
                seen.add(key)

                image.order = depth
                image.size = obj.size
                image.parent_uuid = seed_uuid
                results.append(image)
                next_seeds.append((image, mirror, image.uuid))

        seeds = next_seeds

    logger.debug("Parallel group of %d mirrors produced %d images up to order %d",
                 len(mirror_group), len(results), max_reflections)
    return results


def reflect_ray_direction(ray_start: Point, ray_direction: Point, mirror: Mirror) -> Optional[Point]:
    """
    Reflect a ray direction off a mirror.

    The ray is tested as the segment ``ray_start -> ray_start + ray_direction``;
    scale the direction to the distance of interest.

    Args:
        ray_start: Where the ray starts
        ray_direction: Direction (and reach) of the ray
        mirror: The mirror to test

    Returns:
        Normalized reflected direction ``d - 2 (d . n) n``, or None if the ray
        does not reach the mirror.
    """
    hit = mirror.intersect_segment(ray_start, geometry.add(ray_start, ray_direction))
    if hit is None:
        return None

    normal = mirror.normal()
    dot = geometry.dot(ray_direction, normal)
    reflection = geometry.subtract(ray_direction, geometry.scale(normal, 2 * dot))
    return geometry.normalize_vec(reflection)
