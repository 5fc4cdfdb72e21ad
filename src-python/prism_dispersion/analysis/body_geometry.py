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

Geometric analysis of the bodies in a scene:
- Boundary properties (area, centroid, perimeter, bounds)
- Overlapping bodies. The tracer assumes air outside every body, so
  overlapping bodies do not model a shared interface correctly.
- Sources placed inside a body
"""

from dataclasses import dataclass, field
from typing import List, Tuple, TYPE_CHECKING

from shapely.geometry import Polygon, Point
from shapely.ops import unary_union

from ..core.constants import SPECTRAL_SODIUM_D

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.scene_objs.base_body import BaseBody
    from ..core.scene_objs.light_source.photon_source import PhotonSource


# Overlaps with a smaller area are treated as touching
OVERLAP_AREA_TOLERANCE = 1e-9


@dataclass
class BodyBoundary:
    """
    The outline of a body.

    Attributes:
        geometry: The body shape as a Shapely Polygon
        body: The body object
        n: Index of refraction at the sodium D line
    """
    geometry: Polygon
    body: 'BaseBody'
    n: float

    @property
    def centroid(self) -> Point:
        return self.geometry.centroid

    @property
    def area(self) -> float:
        return self.geometry.area

    @property
    def perimeter(self) -> float:
        return self.geometry.length

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounding box (minx, miny, maxx, maxy)."""
        return self.geometry.bounds

    def __repr__(self) -> str:
        cx, cy = self.centroid.x, self.centroid.y
        return (f"BodyBoundary({self.body.get_display_name()}, n={self.n:.3f}, "
                f"area={self.area:.4f}, perimeter={self.perimeter:.4f}, "
                f"centroid=({cx:.2f}, {cy:.2f}))")


@dataclass
class BodyOverlap:
    """
    The region shared by two overlapping bodies.

    Attributes:
        geometry: The intersection of the two outlines
        body1: First body (earlier in scene order)
        body2: Second body
    """
    geometry: Polygon
    body1: 'BaseBody'
    body2: 'BaseBody'

    @property
    def area(self) -> float:
        return self.geometry.area


@dataclass
class SceneGeometryAnalysis:
    """
    Geometric analysis of a scene's bodies.

    Attributes:
        boundaries: One BodyBoundary per body, in scene order
        overlaps: Pairs of bodies whose interiors intersect
        enclosed_sources: Sources whose position lies inside a body
    """
    boundaries: List[BodyBoundary] = field(default_factory=list)
    overlaps: List[BodyOverlap] = field(default_factory=list)
    enclosed_sources: List['PhotonSource'] = field(default_factory=list)

    @property
    def has_overlaps(self) -> bool:
        return len(self.overlaps) > 0

    @property
    def total_area(self) -> float:
        """Area covered by all bodies, overlaps counted once."""
        if not self.boundaries:
            return 0.0
        return unary_union([b.geometry for b in self.boundaries]).area

    def summary(self) -> str:
        lines = [f"{len(self.boundaries)} bodies, covered area {self.total_area:.4f}"]
        for overlap in self.overlaps:
            lines.append(f"  overlap: {overlap.body1.get_display_name()} / "
                         f"{overlap.body2.get_display_name()} (area {overlap.area:.4f})")
        for source in self.enclosed_sources:
            lines.append(f"  source inside a body: {source.get_display_name()}")
        return "\n".join(lines)


def find_overlapping_bodies(bodies: List['BaseBody']) -> List[BodyOverlap]:
    """
    Find all pairs of bodies whose interiors intersect.

    Bodies that only touch along an edge or at a vertex are not reported.
    """
    polygons = [body.to_shapely() for body in bodies]
    overlaps = []
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            if not polygons[i].intersects(polygons[j]):
                continue
            shared = polygons[i].intersection(polygons[j])
            if shared.area > OVERLAP_AREA_TOLERANCE:
                overlaps.append(BodyOverlap(geometry=shared, body1=bodies[i], body2=bodies[j]))
    return overlaps


def analyze_scene_geometry(scene: 'Scene') -> SceneGeometryAnalysis:
    """
    Analyze all bodies in a scene.

    Args:
        scene: The Scene object

    Returns:
        SceneGeometryAnalysis with boundaries, overlaps and enclosed sources.

    Example:
        >>> analysis = analyze_scene_geometry(scene)
        >>> if analysis.has_overlaps:
        ...     print(analysis.summary())
    """
    boundaries = [
        BodyBoundary(
            geometry=body.to_shapely(),
            body=body,
            n=body.get_ior(SPECTRAL_SODIUM_D)
        )
        for body in scene.bodies
    ]

    enclosed = [
        source for source in scene.sources
        if any(b.geometry.contains(source.position.to_shapely()) for b in boundaries)
    ]

    return SceneGeometryAnalysis(
        boundaries=boundaries,
        overlaps=find_overlapping_bodies(scene.bodies),
        enclosed_sources=enclosed,
    )
