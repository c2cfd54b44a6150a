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

Ray Path Reconstruction

Given a visible virtual image, rebuild the polyline a light ray actually
travels from the real object to the observer, bouncing off each mirror of
the image's lineage in reverse order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Iterable, List, Optional, Union

from .constants import color_for_order
from .geometry import Point
from .image_lineage import ImageLineage
from .scene_objs.observer import Observer
from .virtual_image import VirtualImage

logger = logging.getLogger(__name__)


@dataclass
class PathSegment:
    """
    One drawable piece of a light path.

    Attributes:
        start: First endpoint
        end: Second endpoint
        order: Reflection order of the image this path belongs to
            (0 for a direct line of sight)
        dashed: True for the apparent continuation behind the mirror
            towards the virtual image, False for real light travel
        color: Color hint for the order
    """
    start: Point
    end: Point
    order: int
    dashed: bool = False
    color: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'order': self.order,
            'dashed': self.dashed,
            'color': self.color,
        }


def reconstruct_ray_path(
    image: VirtualImage,
    images: Union[ImageLineage, Iterable[VirtualImage]],
    obj,
    observer: Observer
) -> List[PathSegment]:
    """
    Reconstruct the light path from a real object to an observer via an image.

    The observer sees ``image`` through the point where the segment
    observer -> image crosses ``image.source_mirror``. From there the path is
    walked backwards along the image's parent chain: the previous bounce is
    where the segment from the current bounce towards the parent image
    crosses the parent's source mirror. The last bounce connects to the
    real object.

    A missing parent or a missing crossing ends the walk early; the segments
    built so far are returned.

    Args:
        image: The visible image to trace
        images: Every image produced alongside ``image`` (or a prebuilt
            ImageLineage), used to resolve parents
        obj: The real object the image belongs to
        observer: The observer looking at the image

    Returns:
        Path segments, observer side first. Empty if the observer's line of
        sight to the image does not cross its source mirror.
    """
    lineage = images if isinstance(images, ImageLineage) else ImageLineage.from_images(images)
    color = color_for_order(image.order)

    bounce: Optional[Point] = image.source_mirror.intersect_segment(observer.position, image.position)
    if bounce is None:
        return []

    segments = [
        PathSegment(bounce, observer.position, image.order, dashed=False, color=color),
        PathSegment(bounce, image.position, image.order, dashed=True, color=color),
    ]

    current = image
    while current.order > 1:
        parent = lineage.get_parent(current.uuid)
        if parent is None:
            logger.debug("No parent image for order %d image %s; path truncated",
                         current.order, current.uuid[:8])
            return segments

        previous_bounce = parent.source_mirror.intersect_segment(bounce, parent.position)
        if previous_bounce is None:
            logger.debug("Path towards order %d image misses %s; path truncated",
                         parent.order, parent.source_mirror.get_display_name())
            return segments

        segments.append(PathSegment(previous_bounce, bounce, image.order, dashed=False, color=color))
        bounce = previous_bounce
        current = parent

    segments.append(PathSegment(obj.position, bounce, image.order, dashed=False, color=color))
    return segments
