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

===============================================================================
Virtual Image Lineage Tracker
===============================================================================
Tracks parent-child relationships between virtual images: an image of order
k is the reflection of exactly one image of order k-1 (or of the real object
when k == 1). Walking the chain backwards gives the sequence of mirrors a
light ray bounced off, which is what the ray path reconstruction needs.
===============================================================================
"""

from __future__ import annotations
from typing import Optional, List, Dict, Iterable, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .virtual_image import VirtualImage


class ImageLineage:
    """
    Tracks parent-child relationships for virtual images.

    Internally maintains:
    - _parents: maps uuid -> parent_uuid (or None for first-order images)
    - _children: maps uuid -> list of child uuids
    - _images: maps uuid -> VirtualImage

    Usage:
        lineage = ImageLineage.from_images(images)
        chain = lineage.get_full_path(some_image.uuid)   # order 1 first
        parent = lineage.get_parent(some_image.uuid)
    """

    def __init__(self) -> None:
        self._parents: Dict[str, Optional[str]] = {}
        self._children: Dict[str, List[str]] = {}
        self._images: Dict[str, 'VirtualImage'] = {}

    @classmethod
    def from_images(cls, images: Iterable['VirtualImage']) -> 'ImageLineage':
        """Build a lineage from a flat collection of images."""
        lineage = cls()
        for image in images:
            lineage.register(image)
        return lineage

    def register(self, image: 'VirtualImage') -> None:
        """
        Register an image in the lineage tracker.

        Args:
            image: A VirtualImage with uuid and parent_uuid set.
        """
        self._images[image.uuid] = image
        self._parents[image.uuid] = image.parent_uuid
        if image.uuid not in self._children:
            self._children[image.uuid] = []
        if image.parent_uuid:
            self._children.setdefault(image.parent_uuid, []).append(image.uuid)

    @property
    def image_count(self) -> int:
        """Total number of registered images."""
        return len(self._images)

    def get_image(self, uuid: str) -> Optional['VirtualImage']:
        """Get an image by uuid, or None if not found."""
        return self._images.get(uuid)

    def get_parent(self, uuid: str) -> Optional['VirtualImage']:
        """
        The image this one was reflected from.

        Returns None for first-order images and for parents that were never
        registered.
        """
        parent = self._parents.get(uuid)
        if parent is None:
            return None
        return self._images.get(parent)

    def get_ancestors(self, uuid: str) -> List['VirtualImage']:
        """
        All images in the chain back to the first reflection, ordered root-first.

        Does not include the image itself. Stops at the first unregistered parent.
        """
        result = []
        current = self._parents.get(uuid)
        while current is not None:
            image = self._images.get(current)
            if image is None:
                break
            result.append(image)
            current = self._parents.get(current)
        result.reverse()
        return result

    def get_full_path(self, uuid: str) -> List['VirtualImage']:
        """
        Complete chain from the first-order image to this one (inclusive).
        """
        image = self._images.get(uuid)
        if image is None:
            return []
        return self.get_ancestors(uuid) + [image]

    def get_images(self) -> List['VirtualImage']:
        """All registered images, in registration order."""
        return list(self._images.values())

    def get_children(self, uuid: str) -> List['VirtualImage']:
        """Direct children of this image."""
        return [self._images[c] for c in self._children.get(uuid, [])
                if c in self._images]

    def get_roots(self) -> List['VirtualImage']:
        """All first-order images (no parent)."""
        return [self._images[u] for u, p in self._parents.items()
                if p is None]

    def get_depth(self, uuid: str) -> int:
        """Depth of this image in its chain (0 for first-order images)."""
        depth = 0
        current = self._parents.get(uuid)
        while current is not None:
            depth += 1
            current = self._parents.get(current)
        return depth

    def get_lineage_statistics(self) -> Dict[str, Any]:
        """
        Summary statistics for the lineage.

        Returns:
            Dict with keys:
            - image_count: total registered images
            - root_count: number of first-order images
            - leaf_count: number of images with no children
            - max_depth: deepest image in any chain
        """
        roots = [u for u, p in self._parents.items() if p is None]
        leaves = [u for u, children in self._children.items()
                  if not children and u in self._images]
        max_depth = max((self.get_depth(leaf) for leaf in leaves), default=0)
        return {
            'image_count': len(self._images),
            'root_count': len(roots),
            'leaf_count': len(leaves),
            'max_depth': max_depth,
        }

    def __repr__(self) -> str:
        stats = self.get_lineage_statistics()
        return (f"ImageLineage(images={stats['image_count']}, "
                f"roots={stats['root_count']}, "
                f"max_depth={stats['max_depth']})")
