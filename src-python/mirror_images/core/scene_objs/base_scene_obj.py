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

import json
import copy
import uuid as uuid_module
from typing import Optional, Dict, Any, List, Tuple

from ..geometry import Point


class BaseSceneObj:
    """
    Base class for the entities of a scene (mirrors, objects, observers).

    This class provides:
    - Construction from a JSON-like dictionary and/or keyword arguments
    - Serialization back to a dictionary (only non-default values)
    - Object identification (uuid and optional name)

    Scene objects are compared by identity. Two mirrors with exactly the same
    pose are still two different mirrors, so back-references such as
    ``source_mirror`` must always be checked with ``is``.
    """

    type: str = ''
    """The type of the object."""

    serializable_defaults: Dict[str, Any] = {}
    """
    The default values of the properties of the object which are to be serialized.
    If some property is default, it will not be serialized and will be deserialized
    to the default value.

    Points are stored here as dictionaries {'x': ..., 'y': ...} so that the defaults
    stay JSON-compatible; they are converted to Point instances on construction.

    Example:
        serializable_defaults = {
            'position': {'x': 0, 'y': 0},
            'size': 30,
        }
    """

    point_props: Tuple[str, ...] = ('position',)
    """The serializable properties holding a Point."""

    def __init__(self, json_obj: Optional[Dict[str, Any]] = None, **props: Any):
        """
        Initialize the scene object.

        Args:
            json_obj: The JSON object to be deserialized, if any.
            **props: Property overrides, applied after json_obj.

        Raises:
            ValueError: If a key is not a known property of this object type.
        """
        values: Dict[str, Any] = {}
        if json_obj:
            values.update(json_obj)
        values.update(props)

        serializable_defaults = self.__class__.serializable_defaults
        known_keys = ['type'] + list(serializable_defaults.keys())
        for key in values:
            if key not in known_keys:
                raise ValueError(
                    f"Unknown object key '{key}' for type '{self.__class__.type}'"
                )

        for prop_name, default_value in serializable_defaults.items():
            value = values.get(prop_name, default_value)
            if prop_name in self.point_props:
                value = self._to_point(value)
            else:
                # Deep copy to avoid reference issues
                value = copy.deepcopy(value)
            setattr(self, prop_name, value)

        self._uuid: str = str(uuid_module.uuid4())
        self._name: Optional[str] = None

    @staticmethod
    def _to_point(value: Any) -> Point:
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return Point.from_dict(value)
        x, y = value
        return Point(x, y)

    def serialize(self) -> Dict[str, Any]:
        """
        Serializes the object to a JSON-compatible dictionary.

        Returns:
            The serialized dictionary object.
        """
        json_obj: Dict[str, Any] = {'type': self.__class__.type}

        for prop_name, default_value in self.__class__.serializable_defaults.items():
            current_value = getattr(self, prop_name)
            if isinstance(current_value, Point):
                current_value = current_value.to_dict()
            # Only serialize if different from default
            if json.dumps(current_value, sort_keys=True) != json.dumps(default_value, sort_keys=True):
                json_obj[prop_name] = copy.deepcopy(current_value)

        return json_obj

    def are_properties_default(self, property_names: List[str]) -> bool:
        """
        Check whether the given properties of the object are all the default values.

        Args:
            property_names: The property names to be checked.

        Returns:
            Whether the properties are all the default values.
        """
        serialized = self.serialize()
        return all(name not in serialized for name in property_names)

    def update(self, **props: Any) -> None:
        """
        Update serializable properties in place.

        Args:
            **props: New property values.

        Raises:
            ValueError: If a key is not a known property of this object type.
        """
        for key, value in props.items():
            if key not in self.__class__.serializable_defaults:
                raise ValueError(
                    f"Unknown object key '{key}' for type '{self.__class__.type}'"
                )
            if key in self.point_props:
                value = self._to_point(value)
            setattr(self, key, value)

    # ==================== Object Identification ====================

    @property
    def uuid(self) -> str:
        """
        Get the unique identifier for this object.

        The UUID is auto-generated when the object is created and remains
        constant for the lifetime of the object instance.
        """
        return self._uuid

    @property
    def name(self) -> Optional[str]:
        """Get the human-readable name of the object, or None."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    def get_display_name(self) -> str:
        """
        Get a display name for the object.

        Returns the user-defined name if set, otherwise returns a combination
        of the object type and a short UUID suffix for identification.

        Returns:
            A string suitable for display (e.g., "Left mirror" or "Mirror_a1b2c3d4").
        """
        if self._name:
            return self._name
        type_name = self.__class__.type or self.__class__.__name__
        short_uuid = self._uuid[:8]
        return f"{type_name}_{short_uuid}"

    def __repr__(self) -> str:
        display = self.get_display_name()
        type_name = self.__class__.type or self.__class__.__name__
        return f"<{type_name} '{display}'>"
