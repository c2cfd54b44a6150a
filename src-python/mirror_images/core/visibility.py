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
"""

from typing import Iterable, Sequence

from .geometry import Point
from .scene_objs.mirror import Mirror
from .scene_objs.observer import Observer


def is_directly_visible(from_point: Point, to_point: Point, mirrors: Iterable[Mirror]) -> bool:
    """
    Check if a point can be seen from another point.

    The line of sight is blocked as soon as it crosses any mirror segment.
    There is no partial or grazing occlusion.

    Args:
        from_point: Viewing point
        to_point: Target point
        mirrors: Occluding mirrors

    Returns:
        True if no mirror crosses the segment from_point -> to_point
    """
    for mirror in mirrors:
        if mirror.intersect_segment(from_point, to_point) is not None:
            return False
    return True


def is_image_visible(
    observers: Sequence[Observer],
    mirrors: Sequence[Mirror],
    virtual_position: Point,
    source_mirror: Mirror
) -> bool:
    """
    Check if a virtual image can be seen by at least one observer.

    An observer sees the image when it stands on the opposite side of the
    source mirror's plane from the image, and its line of sight to the image
    is not blocked by any mirror other than the source mirror.

    Args:
        observers: Candidate observers
        mirrors: All occluding mirrors of the scene
        virtual_position: Position of the virtual image
        source_mirror: The mirror that produced the image

    Returns:
        True if any observer satisfies both conditions
    """
    virtual_side = source_mirror.signed_distance(virtual_position)
    other_mirrors = [m for m in mirrors if m is not source_mirror]

    for observer in observers:
        observer_side = source_mirror.signed_distance(observer.position)
        if observer_side * virtual_side < 0:
            if is_directly_visible(observer.position, virtual_position, other_mirrors):
                return True
    return False
