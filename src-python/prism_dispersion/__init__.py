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

Prism Dispersion
================

Visualizes how light of different wavelengths bends through refractive
prisms and blocks whose material follows a Cauchy dispersion model.

Main modules:
- core: Simulation engine (Simulation, Scene, bodies, sources, dispersion)
- analysis: Photon path export, statistics and scene geometry checks
- examples: Example simulations and demonstrations

Quick start:
    from prism_dispersion.core.geometry import Vector2
    from prism_dispersion.core.dispersion import CauchyDispersion
    from prism_dispersion.core.scene_objs import TrianglePrism, PhotonSource
    from prism_dispersion.core.simulator import Simulation
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulation
from .core.photon import PhotonPath
from .core.dispersion import CauchyDispersion, NoDispersion
from .core.scene_objs import TrianglePrism, Square, PhotonSource

__all__ = [
    'Scene',
    'Simulation',
    'PhotonPath',
    'CauchyDispersion',
    'NoDispersion',
    'TrianglePrism',
    'Square',
    'PhotonSource',
    '__version__',
]
