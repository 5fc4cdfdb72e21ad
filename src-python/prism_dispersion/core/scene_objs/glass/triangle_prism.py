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
TRIANGLE PRISM
===============================================================================
A 60-60-60 equilateral dispersing prism, side length = scale, centroid at
position.

Vertex layout (before rotation):

    Coordinate system: +X = East, +Y = North

                V0 (apex)
               /  \\
   Edge 2 ->  /    \\  <- Edge 0
             /      \\
           V2--------V1
              Edge 1

    Vertex traversal V0->V1->V2->V0 is clockwise (negative signed area),
    so every edge's left-hand normal points out of the prism.

Functional labels (canonical orientation, light entering from the left):
    Edge 0: X (Exit Face) - facing NE
    Edge 1: B (Base) - facing S
    Edge 2: E (Entrance Face) - facing NW
===============================================================================
"""

from __future__ import annotations

import math
from typing import ClassVar, List, Optional, Tuple

from ..base_body import BaseBody
from ...geometry import Vector2
from ...dispersion import DispersionModel


_SQRT3 = math.sqrt(3.0)


class TrianglePrism(BaseBody):
    """
    Equilateral triangular prism.

    Example:
        >>> from prism_dispersion.core.dispersion import CauchyDispersion
        >>> prism = TrianglePrism(Vector2(0, 0), 3.0, CauchyDispersion(1.52, 20))
        >>> print(prism.label_summary())
        Edge 0: Exit Face (X)
        Edge 1: Base (B)
        Edge 2: Entrance Face (E)
    """

    type = 'TrianglePrism'

    _edge_roles: ClassVar[List[Tuple[str, str]]] = [
        ("X", "Exit Face"),
        ("B", "Base"),
        ("E", "Entrance Face"),
    ]

    def __init__(
        self,
        position: Optional[Vector2] = None,
        scale: float = 1.0,
        dispersion: Optional[DispersionModel] = None,
        rotation: float = 0.0,
        name: Optional[str] = None
    ) -> None:
        super().__init__(position, scale, dispersion, rotation, name)

    def _canonical_vertices(self) -> List[Tuple[float, float]]:
        return [
            (0.0, _SQRT3 / 3.0),
            (0.5, -_SQRT3 / 6.0),
            (-0.5, -_SQRT3 / 6.0),
        ]

    @property
    def side_length(self) -> float:
        return self.scale

    @property
    def apex(self) -> Vector2:
        return self.vertices[0]

    def edge_label(self, edge_index: int) -> Tuple[str, str]:
        """(short, long) functional label of an edge."""
        return self._edge_roles[edge_index]

    def label_summary(self) -> str:
        return "\n".join(
            f"Edge {i}: {long_name} ({short})"
            for i, (short, long_name) in enumerate(self._edge_roles)
        )
