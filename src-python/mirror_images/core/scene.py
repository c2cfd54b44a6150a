"""
Copyright 2026 mirror-images authors and contributors

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
from typing import Any, List, Optional

from .constants import (
    DEFAULT_MAX_REFLECTIONS,
    DEFAULT_VIRTUAL_MIRROR_DEPTH,
    DEFAULT_MIRROR_WIDTH,
    DEFAULT_MIRROR_HEIGHT,
)
from .scene_objs.mirror import Mirror
from .scene_objs.observer import Observer
from .scene_objs.physical_object import PhysicalObject


class Scene:
    """
    Container for the mirrors, objects and observers of a scene, plus the
    settings of the image computation.

    The scene is the only mutable state of the library. It is owned by the
    caller; Simulator.run() reads it and never modifies it.

    Attributes:
        mirrors (list): Real mirrors, in insertion order
        objects (list): Physical objects
        observers (list): Observers
        name (str or None): Optional name for the scene (used in exports)

    Properties:
        max_reflections (int): Deepest order of the parallel-mirror image chains
        virtual_mirror_depth (int): Deepest order of the virtual mirror enumeration
    """

    def __init__(self):
        """Initialize an empty scene with default settings."""
        self.mirrors: List[Mirror] = []
        self.objects: List[PhysicalObject] = []
        self.observers: List[Observer] = []
        self.name: Optional[str] = None
        self._max_reflections = DEFAULT_MAX_REFLECTIONS
        self._virtual_mirror_depth = DEFAULT_VIRTUAL_MIRROR_DEPTH
        self._uuid: str = str(uuid_module.uuid4())

    # =========================================================================
    # Settings
    # =========================================================================

    @staticmethod
    def _validate_depth(setting: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(
                f"{setting} must be a positive integer, got {value!r}"
            )
        return value

    @property
    def max_reflections(self) -> int:
        """Get the deepest order of the parallel-mirror image chains."""
        return self._max_reflections

    @max_reflections.setter
    def max_reflections(self, value: int) -> None:
        """
        Set the deepest order of the parallel-mirror image chains.

        Raises:
            ValueError: If value is not a positive integer.
        """
        self._max_reflections = self._validate_depth('max_reflections', value)

    @property
    def virtual_mirror_depth(self) -> int:
        """Get the deepest order of the virtual mirror enumeration."""
        return self._virtual_mirror_depth

    @virtual_mirror_depth.setter
    def virtual_mirror_depth(self, value: int) -> None:
        """
        Set the deepest order of the virtual mirror enumeration.

        Raises:
            ValueError: If value is not a positive integer.
        """
        self._virtual_mirror_depth = self._validate_depth('virtual_mirror_depth', value)

    # =========================================================================
    # Scene Identification
    # =========================================================================

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
            The user-defined name if set, otherwise "Scene_" plus a short UUID.
        """
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    # =========================================================================
    # Adding, updating and removing entities
    # =========================================================================

    def add_mirror(self, mirror: Mirror) -> Mirror:
        """
        Add a real mirror to the scene.

        Raises:
            ValueError: If the mirror is virtual.
        """
        if mirror.is_virtual:
            raise ValueError("Virtual mirrors are derived and cannot be added to a scene")
        self.mirrors.append(mirror)
        return mirror

    def add_object(self, obj: PhysicalObject) -> PhysicalObject:
        """Add a physical object to the scene."""
        self.objects.append(obj)
        return obj

    def add_observer(self, observer: Observer) -> Observer:
        """Add an observer to the scene."""
        self.observers.append(observer)
        return observer

    def add_default_mirror(self, viewport_width: float, viewport_height: float) -> Mirror:
        """
        Add a mirror at the next preset location of a viewport.

        The presets build a demonstration layout: the first mirror stands at
        38% of the width, the second one parallel to it at 62%, the third one
        lies horizontally at the top quarter of the viewport. Further mirrors
        go back to the first preset position. Existing mirrors are always
        kept; the scene is never reset to a single default mirror.

        Args:
            viewport_width: Width of the drawing area
            viewport_height: Height of the drawing area

        Returns:
            The new mirror
        """
        count = len(self.mirrors)
        if count == 1:
            position = {'x': viewport_width * 0.62, 'y': viewport_height / 2}
            rotation = 180
        elif count == 2:
            position = {'x': viewport_width / 2, 'y': viewport_height / 4}
            rotation = 90
        else:
            position = {'x': viewport_width * 0.38, 'y': viewport_height / 2}
            rotation = 180

        return self.add_mirror(Mirror(
            position=position,
            width=DEFAULT_MIRROR_WIDTH,
            height=DEFAULT_MIRROR_HEIGHT,
            rotation=rotation,
        ))

    @staticmethod
    def _update(items: list, index: int, props: dict) -> bool:
        # Out-of-range indices are ignored
        if index < 0 or index >= len(items):
            return False
        items[index].update(**props)
        return True

    def update_mirror(self, index: int, **props: Any) -> bool:
        """
        Update the properties of the mirror at index.

        Returns:
            False if the index is out of range (nothing changed), True otherwise.
        """
        return self._update(self.mirrors, index, props)

    def update_object(self, index: int, **props: Any) -> bool:
        """Update the properties of the object at index (see update_mirror)."""
        return self._update(self.objects, index, props)

    def update_observer(self, index: int, **props: Any) -> bool:
        """Update the properties of the observer at index (see update_mirror)."""
        return self._update(self.observers, index, props)

    @staticmethod
    def _remove(items: list, index: int) -> bool:
        if index < 0 or index >= len(items):
            return False
        del items[index]
        return True

    def remove_mirror(self, index: int) -> bool:
        """Remove the mirror at index. Returns False if out of range."""
        return self._remove(self.mirrors, index)

    def remove_object(self, index: int) -> bool:
        """Remove the object at index. Returns False if out of range."""
        return self._remove(self.objects, index)

    def remove_observer(self, index: int) -> bool:
        """Remove the observer at index. Returns False if out of range."""
        return self._remove(self.observers, index)

    # =========================================================================
    # Queries
    # =========================================================================

    def find_mirror_at(self, x: float, y: float) -> Optional[Mirror]:
        """
        Find the mirror under a point, e.g. to start dragging it.

        Later mirrors are drawn on top, so they win.

        Args:
            x: x-coordinate of the point
            y: y-coordinate of the point

        Returns:
            The topmost mirror containing the point, or None
        """
        for mirror in reversed(self.mirrors):
            if mirror.contains_point(x, y):
                return mirror
        return None

    def __repr__(self) -> str:
        return (f"<Scene '{self.get_display_name()}' mirrors={len(self.mirrors)} "
                f"objects={len(self.objects)} observers={len(self.observers)}>")
