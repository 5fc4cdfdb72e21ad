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

from typing import Any, Dict, Optional

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from prism_dispersion.core.scene_objs.base_scene_obj import BaseSceneObj
    from prism_dispersion.core.geometry import Vector2
else:
    from ..base_scene_obj import BaseSceneObj
    from ...geometry import Vector2


class PhotonSource(BaseSceneObj):
    """
    A directional emitter of photons.

    Every photon emitted by the source starts at `position` and travels along
    `forward()`. The wavelength of each photon is assigned by the simulation,
    not by the source.

    Attributes:
        position: Emission point.
        rotation: Emission angle in radians, measured counterclockwise from +X.

    Notes:
        - Sources have no edges and never interact with photons.
        - Moving or rotating a source takes effect on the next trace.
    """

    type = 'PhotonSource'

    def __init__(
        self,
        position: Optional[Vector2] = None,
        rotation: float = 0.0,
        name: Optional[str] = None
    ) -> None:
        super().__init__(name=name)
        self.position: Vector2 = position.copy() if position is not None else Vector2()
        self.rotation: float = rotation

    def forward(self) -> Vector2:
        """Unit emission direction."""
        return Vector2.from_angle(self.rotation)

    def move(self, diff_x: float, diff_y: float) -> bool:
        self.position = self.position.add(Vector2(diff_x, diff_y))
        return True

    def rotate(self, angle: float) -> bool:
        self.rotation += angle
        return True

    def contains_point(self, point: Vector2, threshold: float = 0.0) -> bool:
        return self.position.distance_to(point) <= threshold

    def serialize(self) -> Dict[str, Any]:
        json_obj = super().serialize()
        json_obj['position'] = self.position.to_dict()
        json_obj['rotation'] = self.rotation
        return json_obj


# Example usage and testing
if __name__ == "__main__":
    import math

    source = PhotonSource(Vector2(-2, 0), rotation=0.4)
    print(f"{source.get_display_name()}: forward = {source.forward()}")
    source.rotate(-0.4)
    print(f"After rotate(-0.4): forward = {source.forward()}")
    source.rotation = math.pi / 2
    print(f"Pointing north: forward = {source.forward()}")
