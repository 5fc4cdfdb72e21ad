"""
Copyright 2026 prism-dispersion authors and contributors

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
from typing import Dict, Optional, Tuple

from shapely.geometry import Point as ShapelyPoint, LineString


class Vector2:
    """
    A point or direction in 2D space.
    Can be converted to/from Shapely Point objects.

    All arithmetic returns new instances; a Vector2 is never modified in place
    by the helpers below.
    """
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Vector2':
        """Create Vector2 from Shapely Point."""
        return cls(sp.x, sp.y)

    @classmethod
    def from_angle(cls, angle: float) -> 'Vector2':
        """Unit vector pointing at `angle` radians from the +X axis."""
        return cls(math.cos(angle), math.sin(angle))

    def add(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> 'Vector2':
        return Vector2(self.x * factor, self.y * factor)

    def negate(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def dot(self, other: 'Vector2') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2') -> float:
        """Z-component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> 'Vector2':
        """
        Return the unit vector in the same direction.

        A zero vector yields NaN components rather than raising.
        """
        len_val = self.length()
        if len_val == 0:
            return Vector2(float('nan'), float('nan'))
        return Vector2(self.x / len_val, self.y / len_val)

    def angle(self) -> float:
        """Angle of the vector in radians, measured from the +X axis."""
        return math.atan2(self.y, self.x)

    def distance_to(self, other: 'Vector2') -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def rotate(self, angle: float) -> 'Vector2':
        """Rotate as a vector (about the origin) by `angle` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    def rotate_around(self, pivot: 'Vector2', angle: float) -> 'Vector2':
        """Rotate as a point about `pivot` by `angle` radians."""
        return self.sub(pivot).rotate(angle).add(pivot)

    def copy(self) -> 'Vector2':
        return Vector2(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2(x={self.x}, y={self.y})"

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}


class Edge:
    """
    A boundary segment of a body, from endpoint `a` to endpoint `b`.

    Edges are derived from a body's transform and are not modified afterwards.
    Bodies list their edges in clockwise order, so the left-hand normal of
    every edge points out of the body.
    """
    __slots__ = ('_a', '_b')

    def __init__(self, a: Vector2, b: Vector2):
        self._a = a.copy()
        self._b = b.copy()

    @property
    def a(self) -> Vector2:
        """Start point. Returns a copy."""
        return self._a.copy()

    @property
    def b(self) -> Vector2:
        """End point. Returns a copy."""
        return self._b.copy()

    def direction(self) -> Vector2:
        return self._b.sub(self._a)

    def length(self) -> float:
        return self._a.distance_to(self._b)

    def midpoint(self) -> Vector2:
        return Vector2((self._a.x + self._b.x) * 0.5, (self._a.y + self._b.y) * 0.5)

    def normal(self) -> Vector2:
        """Left-hand perpendicular of (b - a), normalized."""
        d = self.direction()
        return Vector2(-d.y, d.x).normalize()

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self._a.x, self._a.y), (self._b.x, self._b.y)])

    @classmethod
    def from_shapely(cls, sl: LineString) -> 'Edge':
        """Create Edge from the first two coordinates of a Shapely LineString."""
        coords = list(sl.coords)
        return cls(Vector2(coords[0][0], coords[0][1]), Vector2(coords[1][0], coords[1][1]))

    def __repr__(self) -> str:
        return f"Edge(a={self._a}, b={self._b})"


@dataclass
class EdgeHit:
    """
    Result of a successful ray-edge intersection.

    Attributes:
        point: Intersection point in world coordinates.
        front: True if the ray crosses the edge from its outward side
            (entering the body), False if it is leaving.
        distance: Distance from the ray origin to `point`, along the ray.
    """
    point: Vector2
    front: bool
    distance: float


class Geometry:
    """
    Stateless geometric operations used by the ray tracer.
    """

    @staticmethod
    def point(x: float, y: float) -> Vector2:
        """Create a point."""
        return Vector2(x, y)

    @staticmethod
    def edge(a: Vector2, b: Vector2) -> Edge:
        """Create an edge from a to b."""
        return Edge(a, b)

    @staticmethod
    def dot(p1: Vector2, p2: Vector2) -> float:
        return p1.dot(p2)

    @staticmethod
    def cross(p1: Vector2, p2: Vector2) -> float:
        return p1.cross(p2)

    @staticmethod
    def distance(p1: Vector2, p2: Vector2) -> float:
        return p1.distance_to(p2)

    @staticmethod
    def normalize_vec(p1: Vector2) -> Vector2:
        return p1.normalize()

    @staticmethod
    def rotate_vec(p1: Vector2, angle: float) -> Vector2:
        return p1.rotate(angle)

    @staticmethod
    def ray_edge_intersection(
        origin: Vector2,
        direction: Vector2,
        edge: Edge,
        min_distance: float = 0.0
    ) -> Optional[EdgeHit]:
        """
        Intersect a ray with an edge by rotating the edge into the ray's frame.

        The edge endpoints are translated so the ray starts at the origin,
        then rotated by -angle(direction) so the ray runs along +X. In that
        frame the edge crosses the ray's line only if its endpoints lie on
        strictly opposite sides of the X axis, and the crossing is on the ray
        only if its X coordinate is positive.

        Args:
            origin: Ray start point.
            direction: Ray direction (need not be normalized).
            edge: The edge to test.
            min_distance: Hits at or closer than this distance are rejected.
                Used to skip the edge the ray has just left.

        Returns:
            EdgeHit, or None if the ray misses the edge. An edge touched only at
            an endpoint, or running parallel to the ray, counts as a miss.
        """
        angle = direction.angle()
        a = edge.a.sub(origin).rotate(-angle)
        b = edge.b.sub(origin).rotate(-angle)

        if not (a.y * b.y < 0):
            return None

        front = a.y < b.y

        t = -a.y / (b.y - a.y)
        local_x = a.x + t * (b.x - a.x)
        if local_x <= min_distance:
            return None

        point = Vector2(local_x, 0.0).rotate(angle).add(origin)
        return EdgeHit(point=point, front=front, distance=local_x)

    @staticmethod
    def refract(
        direction: Vector2,
        normal: Vector2,
        eta: float,
        cos_incidence: Optional[float] = None
    ) -> Optional[Vector2]:
        """
        Refract a direction at an interface using the vector form of Snell's law.

        Reference: http://en.wikipedia.org/wiki/Snell%27s_law#Vector_form

        Args:
            direction: Unit incident direction.
            normal: Unit surface normal pointing against `direction`.
            eta: Ratio n1 / n2 (current medium over next medium).
            cos_incidence: Cosine of the incidence angle. Computed from
                `normal` and `direction` if not given.

        Returns:
            The refracted unit direction, or None on total internal reflection.
        """
        if cos_incidence is None:
            cos_incidence = -normal.dot(direction)
        k = 1 - eta * eta * (1 - cos_incidence * cos_incidence)
        if k < 0:
            return None
        return direction.scale(eta).add(normal.scale(eta * cos_incidence - math.sqrt(k)))

    @staticmethod
    def polygon_signed_area(vertices) -> float:
        """
        Signed area of a closed polygon (shoelace formula).

        Positive for counterclockwise, negative for clockwise vertex order.
        """
        area = 0.0
        n = len(vertices)
        for i in range(n):
            j = (i + 1) % n
            area += vertices[i].x * vertices[j].y
            area -= vertices[j].x * vertices[i].y
        return area / 2.0

    @staticmethod
    def as_tuple(p: Vector2) -> Tuple[float, float]:
        return (p.x, p.y)


# Create a singleton instance for convenience
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    origin = geometry.point(0, 0)
    direction = geometry.point(1, 0)
    edge = geometry.edge(geometry.point(2, -1), geometry.point(2, 1))

    hit = geometry.ray_edge_intersection(origin, direction, edge)
    print(f"Hit of ray along +X with {edge}: {hit}")

    normal = edge.normal()
    print(f"Edge normal: {normal}")

    refracted = geometry.refract(direction, normal, 1 / 1.5)
    print(f"Refracted direction (normal incidence): {refracted}")

    slanted = geometry.point(1, 1).normalize()
    print(f"Refracted at 45 degrees into n=1.5: {geometry.refract(slanted, geometry.point(-1, 0), 1 / 1.5)}")
    print(f"Leaving n=1.5 at 45 degrees (TIR): {geometry.refract(slanted, geometry.point(-1, 0), 1.5)}")
