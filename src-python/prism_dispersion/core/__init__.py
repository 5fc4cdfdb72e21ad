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

from .geometry import geometry, Vector2, Edge, EdgeHit, Geometry
from . import constants
from .dispersion import DispersionModel, CauchyDispersion, NoDispersion
from .color import wavelength_to_color, clamp_color, color_to_css
from .photon import PhotonPath
from .scene import Scene
from .simulator import Simulation
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Vector2', 'Edge', 'EdgeHit', 'Geometry',
    'constants',
    'DispersionModel', 'CauchyDispersion', 'NoDispersion',
    'wavelength_to_color', 'clamp_color', 'color_to_css',
    'PhotonPath',
    'Scene',
    'Simulation',
    'SVGRenderer'
]
