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

import math
from typing import Any, Dict, Optional, Tuple

from shapely import affinity
from shapely.geometry import Polygon, box

from .base_scene_obj import BaseSceneObj
from ..geometry import geometry, Line, Point
from ..constants import DEFAULT_MIRROR_WIDTH, DEFAULT_MIRROR_HEIGHT


class Mirror(BaseSceneObj):
    """
    Flat mirror with the shape of a thin rectangle.

    The reflective line runs along the ``height`` axis through ``position``.
    ``width`` is the cosmetic thickness used for drawing and hit-testing.

    Rotation convention (screen coordinates, y pointing down):
    - rotation 0 gives a vertical segment,
    - positive angles rotate clockwise on screen,
    - the plane normal is (cos(rotation), sin(rotation)).

    Virtual mirrors are derived copies produced by reflecting a mirror in
    another one. They carry ``is_virtual = True``, an ``order >= 1`` and a
    non-owning ``source_mirror`` reference to the mirror whose reflection
    produced them. Real mirrors have ``is_virtual = False`` and ``order = None``.

    Attributes:
        position (Point): Center of the mirror
        width (float): Thickness
        height (float): Length of the reflective segment
        rotation (float): Rotation in degrees
        is_virtual (bool): Whether this is a derived virtual mirror
        order (int or None): Reflection order of a virtual mirror
        source_mirror (Mirror or None): The mirror that reflected this one
    """

    type = 'Mirror'

    serializable_defaults = {
        'position': {'x': 0, 'y': 0},
        'width': DEFAULT_MIRROR_WIDTH,
        'height': DEFAULT_MIRROR_HEIGHT,
        'rotation': 0,
    }

    def __init__(self, json_obj: Optional[Dict[str, Any]] = None, **props: Any) -> None:
        super().__init__(json_obj, **props)
        self.is_virtual: bool = False
        self.order: Optional[int] = None
        self.source_mirror: Optional['Mirror'] = None

    @classmethod
    def virtual(
        cls,
        position: Point,
        width: float,
        height: float,
        rotation: float,
        source_mirror: 'Mirror',
        order: int = 1
    ) -> 'Mirror':
        """
        Create a virtual mirror.

        Args:
            position: Center of the virtual mirror
            width: Thickness
            height: Length of the reflective segment
            rotation: Rotation in degrees
            source_mirror: The mirror whose reflection produced this one
            order: Reflection order (>= 1)

        Returns:
            Mirror tagged as virtual
        """
        if order < 1:
            raise ValueError(f"Virtual mirror order must be >= 1, got {order}")
        mirror = cls(position=position, width=width, height=height, rotation=rotation)
        mirror.is_virtual = True
        mirror.order = order
        mirror.source_mirror = source_mirror
        return mirror

    # ==================== Geometry ====================

    def endpoints(self) -> Tuple[Point, Point]:
        """
        Get the two endpoints of the reflective segment.

        Returns:
            (start, end), where start is the end reached by rotating (0, -height/2)
            about the center and end is the opposite one.
        """
        radians = math.radians(self.rotation)
        half_height = self.height / 2
        start = Point(
            self.position.x + math.sin(radians) * half_height,
            self.position.y - math.cos(radians) * half_height
        )
        end = Point(
            self.position.x - math.sin(radians) * half_height,
            self.position.y + math.cos(radians) * half_height
        )
        return start, end

    def normal(self) -> Point:
        """
        Get the unit normal of the reflective plane.

        Returns:
            (cos(rotation), sin(rotation))
        """
        radians = math.radians(self.rotation)
        return Point(math.cos(radians), math.sin(radians))

    def to_line(self) -> Line:
        """Get the reflective segment as a Line."""
        start, end = self.endpoints()
        return geometry.line(start, end)

    def to_polygon(self) -> Polygon:
        """
        Get the outline of the mirror as a Shapely Polygon.

        Returns:
            The rectangle [-width/2, width/2] x [-height/2, height/2] rotated by
            ``rotation`` and translated to ``position``.
        """
        half_width = self.width / 2
        half_height = self.height / 2
        rect = box(-half_width, -half_height, half_width, half_height)
        rect = affinity.rotate(rect, self.rotation, origin=(0, 0))
        return affinity.translate(rect, self.position.x, self.position.y)

    def contains_point(self, x: float, y: float) -> bool:
        """
        Test whether a point lies on the mirror's rectangle (boundary included).

        Used for pointer hit-testing.

        Args:
            x: x-coordinate of the query point
            y: y-coordinate of the query point

        Returns:
            True if the point is inside or on the rotated rectangle
        """
        return self.to_polygon().covers(Point(x, y).to_shapely())

    def signed_distance(self, point: Point) -> float:
        """
        Signed distance from the mirror's infinite plane.

        The sign tells which side of the mirror the point is on.

        Args:
            point: Query point

        Returns:
            dot(point - position, normal)
        """
        return geometry.dot(geometry.subtract(point, self.position), self.normal())

    def reflect_point(self, point: Point) -> Point:
        """
        Reflect a point across the mirror's infinite plane.

        Args:
            point: Point to reflect

        Returns:
            The mirrored point
        """
        return geometry.reflect_point(point, self.position, self.normal())

    def distance_to_point(self, point: Point) -> float:
        """
        Euclidean distance from a point to the finite reflective segment.

        Args:
            point: Query point

        Returns:
            Distance to the closest point of the segment
        """
        start, end = self.endpoints()
        if start == end:
            return geometry.distance(point, start)
        return self.to_line().to_shapely().distance(point.to_shapely())

    def intersect_segment(self, p1: Point, p2: Point) -> Optional[Point]:
        """
        Intersection of the segment p1p2 with the reflective segment.

        Args:
            p1: Start of the query segment
            p2: End of the query segment

        Returns:
            The crossing point, or None
        """
        return geometry.segment_intersects_line(geometry.line(p1, p2), self.to_line())

    def __repr__(self) -> str:
        base = super().__repr__()
        if self.is_virtual:
            return f"{base[:-1]} virtual order={self.order}>"
        return base
