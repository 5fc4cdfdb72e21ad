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

from typing import List, Tuple

from ..base_body import BaseBody


class Square(BaseBody):
    """
    Square body, side length = scale, centered on position.

    Vertices are listed clockwise starting from the top-left corner.
    """

    type = 'Square'

    def _canonical_vertices(self) -> List[Tuple[float, float]]:
        return [
            (-0.5, 0.5),
            (0.5, 0.5),
            (0.5, -0.5),
            (-0.5, -0.5),
        ]

    @property
    def side_length(self) -> float:
        return self.scale
