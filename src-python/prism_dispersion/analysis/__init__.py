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

Analysis utilities: photon path export and statistics, and Shapely-based
geometry checks of the scene's bodies.
"""

from .body_geometry import (
    BodyBoundary,
    BodyOverlap,
    SceneGeometryAnalysis,
    analyze_scene_geometry,
    find_overlapping_bodies,
)
from .saving import (
    save_paths_csv,
    filter_tir_paths,
    exit_angle,
    get_path_statistics,
)

__all__ = [
    'BodyBoundary',
    'BodyOverlap',
    'SceneGeometryAnalysis',
    'analyze_scene_geometry',
    'find_overlapping_bodies',
    'save_paths_csv',
    'filter_tir_paths',
    'exit_angle',
    'get_path_statistics',
]
