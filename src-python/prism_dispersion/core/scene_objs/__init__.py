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

from .base_scene_obj import BaseSceneObj
from .base_body import BaseBody
from .glass import TrianglePrism, Square
from .light_source import PhotonSource

__all__ = ['BaseSceneObj', 'BaseBody', 'TrianglePrism', 'Square', 'PhotonSource']
