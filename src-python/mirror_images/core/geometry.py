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
from dataclasses import dataclass
from typing import Dict, Optional

from shapely.geometry import Point as ShapelyPoint, LineString

from .constants import INTERSECTION_PARALLEL_TOLERANCE


@dataclass(frozen=True)
class Point:
    """
    A point (or vector) in 2D space.

    Points are plain values: two points with the same coordinates are equal.
    Can be converted to a Shapely Point for polygon and distance queries.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'Point':
        """Create Point from a {'x': ..., 'y': ...} dictionary."""
        return cls(d['x'], d['y'])

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}


class Line:
    """
    A segment in 2D space, defined by its two endpoints.
    """
    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return f"Line(p1={self.p1}, p2={self.p2})"


class Geometry:
    """
    Basic 2D vector operations and segment intersection.

    All operations are pure: they never modify their arguments and always
    return new Point objects.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """
        Create a point.

        Args:
            x: The x-coordinate of the point.
            y: The y-coordinate of the point.

        Returns:
            Point object
        """
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """
        Create a segment from two endpoints.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Line object
        """
        return Line(p1, p2)

    @staticmethod
    def length(v: Point) -> float:
        """
        Calculate the length of a vector.

        Args:
            v: Point (as vector)

        Returns:
            Euclidean length
        """
        return math.sqrt(v.x * v.x + v.y * v.y)

    @staticmethod
    def normalize_vec(v: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        A zero-length vector is returned unchanged as the zero vector
        rather than raising.

        Args:
            v: Point (as vector)

        Returns:
            Unit vector, or (0, 0)
        """
        len_val = Geometry.length(v)
        if len_val == 0:
            return Point(0.0, 0.0)
        return Point(v.x / len_val, v.y / len_val)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        """Vector sum p1 + p2."""
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        """Vector difference p1 - p2."""
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(v: Point, scalar: float) -> Point:
        """Vector v scaled by scalar."""
        return Point(v.x * scalar, v.y * scalar)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance between points
        """
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Squared distance between points
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        """
        Calculate the midpoint between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Midpoint
        """
        return Point((p1.x + p2.x) * 0.5, (p1.y + p2.y) * 0.5)

    @staticmethod
    def reflect_point(p: Point, origin: Point, normal: Point) -> Point:
        """
        Reflect a point across the infinite line through origin with the given unit normal.

        Args:
            p: Point to reflect
            origin: Any point on the reflecting line
            normal: Unit normal of the reflecting line

        Returns:
            Reflected point
        """
        dist = Geometry.dot(Geometry.subtract(p, origin), normal)
        return Point(p.x - 2 * dist * normal.x, p.y - 2 * dist * normal.y)

    @staticmethod
    def segments_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Optional[Point]:
        """
        Calculate the intersection of segment p1p2 with segment p3p4.

        Uses the parametric form p1 + ua * (p2 - p1) = p3 + ub * (p4 - p3).

        Args:
            p1: Start of the first segment
            p2: End of the first segment
            p3: Start of the second segment
            p4: End of the second segment

        Returns:
            The intersection point on p1p2, or None if the segments are
            (nearly) parallel or do not overlap.
        """
        denom = (p4.y - p3.y) * (p2.x - p1.x) - (p4.x - p3.x) * (p2.y - p1.y)

        if abs(denom) < INTERSECTION_PARALLEL_TOLERANCE:
            return None

        ua = ((p4.x - p3.x) * (p1.y - p3.y) - (p4.y - p3.y) * (p1.x - p3.x)) / denom
        ub = ((p2.x - p1.x) * (p1.y - p3.y) - (p2.y - p1.y) * (p1.x - p3.x)) / denom

        # Intersection must lie on both segments
        if ua < 0 or ua > 1 or ub < 0 or ub > 1:
            return None

        return Point(
            p1.x + ua * (p2.x - p1.x),
            p1.y + ua * (p2.y - p1.y)
        )

    @staticmethod
    def segment_intersects_line(seg: Line, other: Line) -> Optional[Point]:
        """Same as segments_intersection, taking two Line objects."""
        return Geometry.segments_intersection(seg.p1, seg.p2, other.p1, other.p2)


# Create a singleton instance for convenience
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    p1 = geometry.point(0, 0)
    p2 = geometry.point(3, 4)

    print(f"Distance between {p1} and {p2}: {geometry.distance(p1, p2)}")
    print(f"Normalized {p2}: {geometry.normalize_vec(p2)}")
    print(f"Normalized zero vector: {geometry.normalize_vec(p1)}")

    crossing = geometry.segments_intersection(
        geometry.point(0, 0), geometry.point(10, 10),
        geometry.point(0, 10), geometry.point(10, 0)
    )
    print(f"Crossing diagonals meet at: {crossing}")

    parallel = geometry.segments_intersection(
        geometry.point(0, 0), geometry.point(10, 0),
        geometry.point(0, 5), geometry.point(10, 5)
    )
    print(f"Parallel segments: {parallel}")
