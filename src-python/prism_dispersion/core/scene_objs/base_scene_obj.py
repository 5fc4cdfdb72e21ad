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

import uuid as uuid_module
from typing import Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..geometry import Vector2


class BaseSceneObj:
    """
    Base class for objects (bodies and light sources) in the scene.

    This class provides the interface shared by every scene object:
    - Identification (uuid and optional human-readable name)
    - Serialization to a JSON-compatible dictionary
    - Editing (move, rotate) and point picking

    An object's identity is the instance itself. Editing an object mutates it
    in place, so references held elsewhere (e.g. by a renderer) stay valid.
    """

    type: str = ''
    """The type of the object."""

    def __init__(self, name: Optional[str] = None):
        """
        Initialize the base scene object.

        Args:
            name: Optional human-readable name for the object.
        """
        self._uuid: str = str(uuid_module.uuid4())
        """Auto-generated unique identifier for this object instance."""

        self._name: Optional[str] = name
        """Optional human-readable name for the object."""

    # =========================================================================
    # Object Identification
    # =========================================================================

    @property
    def uuid(self) -> str:
        """
        Get the unique identifier for this object.

        The UUID is generated when the object is created and remains constant
        for the lifetime of the instance.
        """
        return self._uuid

    @property
    def name(self) -> Optional[str]:
        """Get the optional human-readable name of this object."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    def get_display_name(self) -> str:
        """
        Get a display name for the object.

        Returns the user-defined name if set, otherwise the type followed by a
        short UUID suffix (e.g. "Square_a1b2c3d4").
        """
        if self._name:
            return self._name
        return f"{self.__class__.type}_{self._uuid[:8]}"

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self) -> Dict[str, Any]:
        """
        Serializes the object to a JSON-compatible dictionary.

        Subclasses extend the returned dictionary with their own properties.
        """
        json_obj: Dict[str, Any] = {'type': self.__class__.type, 'uuid': self._uuid}
        if self._name is not None:
            json_obj['name'] = self._name
        return json_obj

    # =========================================================================
    # Editing
    # =========================================================================

    def move(self, diff_x: float, diff_y: float) -> bool:
        """
        Move the object.

        Args:
            diff_x: X displacement.
            diff_y: Y displacement.

        Returns:
            True if the object supports moving.
        """
        return False

    def rotate(self, angle: float) -> bool:
        """
        Rotate the object about its own position.

        Args:
            angle: Rotation angle in radians (counterclockwise).

        Returns:
            True if the object supports rotation.
        """
        return False

    def contains_point(self, point: 'Vector2', threshold: float = 0.0) -> bool:
        """
        Check whether a point lies on the object, within `threshold`.

        Used for picking objects under a cursor.
        """
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.get_display_name()})"
