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

import uuid as _uuid_mod
from typing import Any, Dict, List, Optional, Tuple

from shapely.geometry import LineString

from .geometry import Vector2


# Reasons a photon path stops
TERMINATION_ESCAPED = 'escaped'
TERMINATION_MAX_SEGMENTS = 'max_segments'
TERMINATION_TIR = 'tir'


class PhotonPath:
    """
    The traced path of a single photon.

    A photon path is a polyline: the source position, every interface hit in
    order, and (if the photon escaped the scene) a final point a fixed
    distance past the last hit. The whole path shares one color, derived
    from the photon's wavelength.

    Attributes:
        points (list of Vector2): Polyline vertices, source position first.
        color (tuple): (r, g, b) floats, not clamped.
        wavelength (float): Wavelength in nm.
        source_index (int): Index of the emitting source in the scene.
        copy_index (int): Index of this photon among the source's photons.
        source_uuid (str or None): UUID of the emitting source.
        termination (str): 'escaped', 'max_segments' or 'tir'.
        hit_count (int): Number of interface hits (refractions and TIR).

    TIR Tracking Attributes:
        caused_tir (bool): True if the last point is a total internal
            reflection event at which the path was stopped.
    """

    def __init__(
        self,
        points: Optional[List[Vector2]] = None,
        color: Tuple[float, float, float] = (1.0, 1.0, 1.0),
        wavelength: float = 0.0,
        source_index: int = 0,
        copy_index: int = 0
    ) -> None:
        self.uuid: str = str(_uuid_mod.uuid4())
        self.points: List[Vector2] = points if points is not None else []
        self.color: Tuple[float, float, float] = color
        self.wavelength: float = wavelength
        self.source_index: int = source_index
        self.copy_index: int = copy_index
        self.source_uuid: Optional[str] = None
        self.termination: str = TERMINATION_MAX_SEGMENTS
        self.caused_tir: bool = False
        self.hit_count: int = 0

    def colors(self) -> List[Tuple[float, float, float]]:
        """One color per point (the path color replicated)."""
        return [self.color] * len(self.points)

    def segments(self) -> List[Tuple[Vector2, Vector2]]:
        """Consecutive point pairs."""
        return [(self.points[i], self.points[i + 1]) for i in range(len(self.points) - 1)]

    def length(self) -> float:
        """Total polyline length."""
        return sum(p1.distance_to(p2) for p1, p2 in self.segments())

    def to_shapely(self) -> LineString:
        """Convert to a Shapely LineString. Requires at least two points."""
        return LineString([(p.x, p.y) for p in self.points])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'uuid': self.uuid,
            'points': [p.to_dict() for p in self.points],
            'color': list(self.color),
            'wavelength': self.wavelength,
            'source_index': self.source_index,
            'copy_index': self.copy_index,
            'source_uuid': self.source_uuid,
            'termination': self.termination,
            'caused_tir': self.caused_tir,
            'hit_count': self.hit_count,
        }

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return (f"PhotonPath(wavelength={self.wavelength:.1f}nm, points={len(self.points)}, "
                f"termination='{self.termination}')")
