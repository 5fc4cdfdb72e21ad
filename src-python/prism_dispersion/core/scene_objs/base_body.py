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

===============================================================================
BASE BODY CLASS
===============================================================================
Base class for polygonal refractive bodies:
- Transform (position, rotation, scale) with eagerly rebuilt geometry
- Boundary edges in clockwise order (left-hand normals point outward)
- Display path in the same vertex order
- A dispersion model shared by reference
===============================================================================
"""

from __future__ import annotations

import math
from abc import abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from shapely.geometry import Polygon

from .base_scene_obj import BaseSceneObj
from ..geometry import Vector2, Edge, geometry
from ..dispersion import DispersionModel, NoDispersion


class BaseBody(BaseSceneObj):
    """
    Base class for refractive bodies with a polygonal boundary.

    Subclasses must implement _canonical_vertices(), returning the outline of
    a unit-size body centered on the origin, in clockwise order.

    The edge list and the display path are derived from the transform and are
    rebuilt inside every transform setter, so they never disagree with the
    current position, rotation and scale.

    Attributes:
        dispersion: The material of the body. May be shared between bodies.
    """

    type = 'BaseBody'

    def __init__(
        self,
        position: Optional[Vector2] = None,
        scale: float = 1.0,
        dispersion: Optional[DispersionModel] = None,
        rotation: float = 0.0,
        name: Optional[str] = None
    ) -> None:
        """
        Initialize a body.

        Args:
            position: Center of the body (defaults to the origin).
            scale: Characteristic size (meaning depends on subclass).
            dispersion: Material model. Defaults to a non-refracting
                NoDispersion(1.0).
            rotation: Rotation angle in radians (counterclockwise).
            name: Optional human-readable name.
        """
        super().__init__(name=name)
        self._position: Vector2 = position.copy() if position is not None else Vector2()
        self._rotation: float = rotation
        self._scale: float = scale
        self.dispersion: DispersionModel = dispersion if dispersion is not None else NoDispersion()

        self._vertices: Tuple[Vector2, ...] = ()
        self._edges: Tuple[Edge, ...] = ()
        self._path: List[Dict[str, float]] = []
        self._rebuild()

    @abstractmethod
    def _canonical_vertices(self) -> List[Tuple[float, float]]:
        """
        Vertices of the unit-size body centered on the origin.

        Contract:
        - Clockwise order (negative signed area).
        - Edge i connects vertex i to vertex (i+1) % n.
        """
        ...

    # =========================================================================
    # Transform
    # =========================================================================

    @property
    def position(self) -> Vector2:
        """Center of the body. Returns a copy; assign to move the body."""
        return self._position.copy()

    @position.setter
    def position(self, value: Vector2) -> None:
        self._position = value.copy()
        self._rebuild()

    @property
    def rotation(self) -> float:
        """Rotation in radians (counterclockwise)."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = value
        self._rebuild()

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = value
        self._rebuild()

    def set_transform(
        self,
        position: Optional[Vector2] = None,
        rotation: Optional[float] = None,
        scale: Optional[float] = None
    ) -> None:
        """Change several transform components with a single rebuild."""
        if position is not None:
            self._position = position.copy()
        if rotation is not None:
            self._rotation = rotation
        if scale is not None:
            self._scale = scale
        self._rebuild()

    def _rebuild(self) -> None:
        """Recompute vertices, edges and display path from the transform."""
        vertices = tuple(
            Vector2(x, y).scale(self._scale).rotate(self._rotation).add(self._position)
            for x, y in self._canonical_vertices()
        )
        n = len(vertices)
        self._vertices = vertices
        self._edges = tuple(Edge(vertices[i], vertices[(i + 1) % n]) for i in range(n))
        self._path = [{'x': v.x, 'y': v.y} for v in vertices]

    # =========================================================================
    # Derived geometry
    # =========================================================================

    @property
    def edges(self) -> Tuple[Edge, ...]:
        """Boundary edges, clockwise."""
        return self._edges

    @property
    def vertices(self) -> Tuple[Vector2, ...]:
        """Outline vertices, clockwise. Returns copies."""
        return tuple(v.copy() for v in self._vertices)

    @property
    def path(self) -> List[Dict[str, float]]:
        """Display geometry: list of {'x', 'y'} vertex dictionaries."""
        return [dict(p) for p in self._path]

    def get_ior(self, wavelength: float) -> float:
        """Index of refraction of the body's material at `wavelength` (nm)."""
        return self.dispersion.wavelength_to_ior(wavelength)

    def to_shapely(self) -> Polygon:
        """Convert the outline to a Shapely Polygon."""
        return Polygon([(v.x, v.y) for v in self._vertices])

    def signed_area(self) -> float:
        """
        Signed area of the outline.

        Negative, because bodies are wound clockwise.
        """
        return geometry.polygon_signed_area(self._vertices)

    def get_centroid(self) -> Tuple[float, float]:
        c = self.to_shapely().centroid
        return (c.x, c.y)

    def get_edge_length(self, edge_index: int) -> float:
        """
        Get the length of an edge.

        Returns:
            The edge length, or 0.0 if invalid index.
        """
        if edge_index < 0 or edge_index >= len(self._edges):
            return 0.0
        return self._edges[edge_index].length()

    def get_interior_angle(self, vertex_index: int) -> float:
        """
        Get the interior angle at a vertex in degrees.

        Returns:
            The interior angle in degrees, or 0.0 if invalid.
        """
        n = len(self._vertices)
        if vertex_index < 0 or vertex_index >= n:
            return 0.0

        p0 = self._vertices[(vertex_index - 1) % n]
        p1 = self._vertices[vertex_index]
        p2 = self._vertices[(vertex_index + 1) % n]

        v1 = p0.sub(p1)
        v2 = p2.sub(p1)
        mag1 = v1.length()
        mag2 = v2.length()
        if mag1 == 0 or mag2 == 0:
            return 0.0

        # Clamp to avoid numerical issues with acos
        cos_angle = max(-1.0, min(1.0, v1.dot(v2) / (mag1 * mag2)))
        return math.degrees(math.acos(cos_angle))

    # =========================================================================
    # Editing
    # =========================================================================

    def move(self, diff_x: float, diff_y: float) -> bool:
        self.position = self._position.add(Vector2(diff_x, diff_y))
        return True

    def rotate(self, angle: float) -> bool:
        self.rotation = self._rotation + angle
        return True

    def contains_point(self, point: Vector2, threshold: float = 0.0) -> bool:
        return self.to_shapely().distance(point.to_shapely()) <= threshold

    def serialize(self) -> Dict[str, Any]:
        json_obj = super().serialize()
        json_obj.update({
            'position': self._position.to_dict(),
            'rotation': self._rotation,
            'scale': self._scale,
            'dispersion': self.dispersion.serialize(),
        })
        return json_obj
