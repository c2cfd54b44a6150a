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

import uuid as _uuid_mod
from typing import Dict, Optional, Any, TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .scene_objs.mirror import Mirror


class VirtualImage:
    """
    Apparent image of an object as seen after one or more reflections.

    A virtual image exposes the same ``position``, ``direction`` and ``size``
    attributes as a PhysicalObject, so it can itself be reflected again.

    Attributes:
        position (Point): Where the image appears
        direction (float): Apparent facing direction in degrees
        size (float): Size of the original object
        order (int): Number of reflections this image represents (>= 1)
        source_mirror (Mirror): The (real or virtual) mirror whose reflection
            most recently produced this image. Non-owning, compared by identity.

    Lineage Tracking Attributes:
        uuid (str): Unique identifier for this image (auto-generated)
        parent_uuid (str or None): UUID of the image this one was reflected
            from. None for images of a real object (order 1).
    """

    def __init__(
        self,
        position: Point,
        direction: float,
        size: float,
        order: int,
        source_mirror: 'Mirror',
        parent_uuid: Optional[str] = None
    ) -> None:
        if order < 1:
            raise ValueError(f"Virtual image order must be >= 1, got {order}")
        self.position: Point = position
        self.direction: float = direction
        self.size: float = size
        self.order: int = order
        self.source_mirror: 'Mirror' = source_mirror
        self.uuid: str = str(_uuid_mod.uuid4())
        self.parent_uuid: Optional[str] = parent_uuid

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-compatible dictionary.

        The source mirror is referenced by its uuid.
        """
        return {
            'uuid': self.uuid,
            'parent_uuid': self.parent_uuid,
            'position': self.position.to_dict(),
            'direction': self.direction,
            'size': self.size,
            'order': self.order,
            'source_mirror_uuid': self.source_mirror.uuid,
        }

    def __repr__(self) -> str:
        return (f"VirtualImage(position=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"direction={self.direction:.1f}, order={self.order}, "
                f"source_mirror={self.source_mirror.get_display_name()})")
