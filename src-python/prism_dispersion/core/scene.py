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
import random
import uuid as uuid_module
from typing import List, Optional

from .geometry import Vector2
from .scene_objs.base_scene_obj import BaseSceneObj
from .scene_objs.base_body import BaseBody
from .scene_objs.light_source.photon_source import PhotonSource


class Scene:
    """
    Container for the bodies and light sources of a simulation.

    Objects keep their insertion order. The order of `sources` defines the
    source index carried by every photon path, and the order of `bodies` is
    the order in which edges are tested.

    Attributes:
        objs (list): All objects in the scene, in insertion order
        bodies (list): Refractive bodies only
        sources (list): Photon sources only
        error (str or None): Error message if the last trace encountered an error
        warning (str or None): Warning message if the last trace has warnings
        name (str or None): Optional name for the scene (used in exports)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize an empty scene.

        Args:
            rng: Random number generator used for photon jitter. Pass a seeded
                random.Random for reproducible traces. Defaults to a fresh,
                unseeded generator.
        """
        self.objs: List[BaseSceneObj] = []
        self.bodies: List[BaseBody] = []
        self.sources: List[PhotonSource] = []
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self._random: random.Random = rng if rng is not None else random.Random()
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        """
        Get the unique identifier for this scene.

        The UUID is auto-generated when the scene is created and remains
        constant for the lifetime of the scene instance.
        """
        return self._uuid

    def get_display_name(self) -> str:
        """
        Get a display name for the scene.

        Returns:
            The user-defined name if set, otherwise "Scene_" and a short UUID
            suffix (e.g. "Scene_a1b2c3d4").
        """
        if self.name:
            return self.name
        short_uuid = self._uuid[:8]
        return f"Scene_{short_uuid}"

    def rng(self) -> float:
        """
        Generate a random number between 0 and 1.

        Returns:
            A random float in [0, 1).
        """
        return self._random.random()

    def set_rng(self, rng: random.Random) -> None:
        """Replace the random number generator."""
        self._random = rng

    def add_object(self, obj: BaseSceneObj) -> BaseSceneObj:
        """
        Add an object to the scene.

        Bodies and sources are also appended to their own lists.

        Args:
            obj: The scene object to add

        Returns:
            The object, for chaining.
        """
        self.objs.append(obj)
        if isinstance(obj, BaseBody):
            self.bodies.append(obj)
        elif isinstance(obj, PhotonSource):
            self.sources.append(obj)
        return obj

    def remove_object(self, obj: BaseSceneObj) -> None:
        """
        Remove an object from the scene.

        Args:
            obj: The scene object to remove
        """
        if obj in self.objs:
            self.objs.remove(obj)
        if obj in self.bodies:
            self.bodies.remove(obj)
        if obj in self.sources:
            self.sources.remove(obj)

    def clear(self) -> None:
        """Remove all objects from the scene."""
        self.objs.clear()
        self.bodies.clear()
        self.sources.clear()
        self.error = None
        self.warning = None

    def get_object_by_name(self, name: str) -> Optional[BaseSceneObj]:
        for obj in self.objs:
            if obj.name == name:
                return obj
        return None

    def find_object_at(self, point: Vector2, threshold: float = 0.1) -> Optional[BaseSceneObj]:
        """
        Find the object under a point.

        Objects added last are drawn on top, so they are tested first.

        Args:
            point: Query point in world coordinates.
            threshold: Picking tolerance. Bodies match when the point is inside
                or within this distance of their outline; sources match
                within this distance of their position.

        Returns:
            The topmost matching object, or None.
        """
        for obj in reversed(self.objs):
            if obj.contains_point(point, threshold):
                return obj
        return None

    def __repr__(self) -> str:
        return (f"Scene({self.get_display_name()}, bodies={len(self.bodies)}, "
                f"sources={len(self.sources)})")
