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
Simulation Result Container
===============================================================================
Captures everything one Simulator.run() produced:
- The visible virtual images
- The virtual mirrors
- The reconstructed light paths and direct lines of sight
- A snapshot of the scene and its settings at run time

A renderer only needs this object to draw ghost objects, ghost mirrors and
light paths.
===============================================================================
"""

import uuid as uuid_module
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.image_lineage import ImageLineage
    from ..core.ray_path import PathSegment
    from ..core.scene import Scene
    from ..core.scene_objs.mirror import Mirror
    from ..core.virtual_image import VirtualImage


@dataclass
class SceneSnapshot:
    """
    Captures identifying information and settings of a scene at run time.

    This is a lightweight record, not a full serialization of the scene.

    Attributes:
        uuid: The scene's UUID at snapshot time
        name: The scene's display name
        mirror_count: Number of real mirrors
        object_count: Number of physical objects
        observer_count: Number of observers
        mirror_uuids: UUIDs of the real mirrors, in scene order
        settings: Dictionary of scene settings
    """
    uuid: str
    name: str
    mirror_count: int
    object_count: int
    observer_count: int
    mirror_uuids: List[str]
    settings: Dict[str, Any]

    @classmethod
    def from_scene(cls, scene: 'Scene') -> 'SceneSnapshot':
        """
        Create a snapshot from a Scene object.

        Args:
            scene: The Scene to snapshot

        Returns:
            A SceneSnapshot capturing the scene's current state
        """
        return cls(
            uuid=scene.uuid,
            name=scene.get_display_name(),
            mirror_count=len(scene.mirrors),
            object_count=len(scene.objects),
            observer_count=len(scene.observers),
            mirror_uuids=[m.uuid for m in scene.mirrors],
            settings={
                'max_reflections': scene.max_reflections,
                'virtual_mirror_depth': scene.virtual_mirror_depth,
            },
        )


@dataclass
class SimulationResult:
    """
    Container for the output of one Simulator.run().

    Attributes:
        uuid: Unique identifier for this run
        name: Optional human-readable name for this run
        timestamp: ISO format timestamp when the run completed
        scene_snapshot: Snapshot of scene state at run time
        images: Visible virtual images, first-order images first
        virtual_mirrors: Virtual mirrors, lower orders first
        path_segments: Reconstructed light paths of the visible images
        sight_lines: Direct object -> observer lines of sight
        parallel_group_count: Number of parallel mirror groups found
        lineage: Every image computed during the run, visible or not. The
            parent_uuid of an image in ``images`` may point at an invisible
            image; it always resolves here.
    """
    # Identification
    uuid: str
    name: Optional[str]
    timestamp: str

    # Scene context
    scene_snapshot: SceneSnapshot

    # Results
    images: List['VirtualImage'] = field(default_factory=list)
    virtual_mirrors: List['Mirror'] = field(default_factory=list)
    path_segments: List['PathSegment'] = field(default_factory=list)
    sight_lines: List['PathSegment'] = field(default_factory=list)
    parallel_group_count: int = 0
    lineage: Optional['ImageLineage'] = None

    @classmethod
    def create(
        cls,
        scene: 'Scene',
        images: List['VirtualImage'],
        virtual_mirrors: List['Mirror'],
        path_segments: List['PathSegment'],
        sight_lines: List['PathSegment'],
        parallel_group_count: int = 0,
        lineage: Optional['ImageLineage'] = None,
        name: Optional[str] = None
    ) -> 'SimulationResult':
        """
        Create a SimulationResult from simulation outputs.

        This is the primary factory method for creating SimulationResult objects.
        """
        return cls(
            uuid=str(uuid_module.uuid4()),
            name=name,
            timestamp=datetime.now().isoformat(),
            scene_snapshot=SceneSnapshot.from_scene(scene),
            images=images,
            virtual_mirrors=virtual_mirrors,
            path_segments=path_segments,
            sight_lines=sight_lines,
            parallel_group_count=parallel_group_count,
            lineage=lineage,
        )

    def get_display_name(self) -> str:
        """
        Get a display name for this result.

        Returns:
            The user-defined name if set, otherwise "Simulation_" plus a short UUID.
        """
        if self.name:
            return self.name
        return f"Simulation_{self.uuid[:8]}"

    @property
    def image_count(self) -> int:
        """Get the number of visible images."""
        return len(self.images)

    @property
    def max_order(self) -> int:
        """Highest order among the visible images (0 if none)."""
        return max((img.order for img in self.images), default=0)

    def images_by_order(self) -> Dict[int, List['VirtualImage']]:
        """
        Group the visible images by reflection order.

        Returns:
            Dictionary mapping order to list of images
        """
        groups: Dict[int, List['VirtualImage']] = defaultdict(list)
        for img in self.images:
            groups[img.order].append(img)
        return dict(groups)

    def virtual_mirrors_by_order(self) -> Dict[int, List['Mirror']]:
        """Group the virtual mirrors by order."""
        groups: Dict[int, List['Mirror']] = defaultdict(list)
        for mirror in self.virtual_mirrors:
            groups[mirror.order].append(mirror)
        return dict(groups)

    def hidden_ancestors(self) -> List['VirtualImage']:
        """
        Images that are not visible themselves but are parents in a chain.

        Returns:
            Ancestors of the visible images missing from ``images``, lower
            orders first
        """
        if self.lineage is None:
            return []
        visible = {img.uuid for img in self.images}
        hidden: Dict[str, 'VirtualImage'] = {}
        for img in self.images:
            for ancestor in self.lineage.get_ancestors(img.uuid):
                if ancestor.uuid not in visible:
                    hidden[ancestor.uuid] = ancestor
        return sorted(hidden.values(), key=lambda img: img.order)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-compatible dictionary.

        Virtual mirrors reference their source mirror by uuid. Invisible
        parents of visible images are listed under 'hidden_ancestors' so
        every parent_uuid can be resolved.
        """
        return {
            'uuid': self.uuid,
            'name': self.name,
            'timestamp': self.timestamp,
            'scene': {
                'uuid': self.scene_snapshot.uuid,
                'name': self.scene_snapshot.name,
                'mirror_uuids': list(self.scene_snapshot.mirror_uuids),
                'settings': dict(self.scene_snapshot.settings),
            },
            'images': [img.to_dict() for img in self.images],
            'hidden_ancestors': [img.to_dict() for img in self.hidden_ancestors()],
            'virtual_mirrors': [
                {
                    'uuid': m.uuid,
                    'position': m.position.to_dict(),
                    'width': m.width,
                    'height': m.height,
                    'rotation': m.rotation,
                    'order': m.order,
                    'source_mirror_uuid': m.source_mirror.uuid if m.source_mirror else None,
                }
                for m in self.virtual_mirrors
            ],
            'path_segments': [seg.to_dict() for seg in self.path_segments],
            'sight_lines': [seg.to_dict() for seg in self.sight_lines],
            'parallel_group_count': self.parallel_group_count,
        }

    def __repr__(self) -> str:
        return (f"SimulationResult('{self.get_display_name()}', images={self.image_count}, "
                f"virtual_mirrors={len(self.virtual_mirrors)}, "
                f"path_segments={len(self.path_segments)})")


def _escape_xml(text: str) -> str:
    return (text.replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;'))


def describe_simulation_result(result: SimulationResult, format: str = 'xml') -> str:
    """
    Generate a formatted description of a simulation result.

    Args:
        result: The SimulationResult to describe
        format: Output format - 'xml' for XML, 'text' for human-readable

    Returns:
        Formatted string describing the simulation result
    """
    if format == 'xml':
        return _describe_result_xml(result)
    return _describe_result_text(result)


def _describe_result_xml(result: SimulationResult) -> str:
    lines = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<simulation_result>')

    lines.append('  <identification>')
    lines.append(f'    <uuid>{_escape_xml(result.uuid)}</uuid>')
    if result.name:
        lines.append(f'    <name>{_escape_xml(result.name)}</name>')
    lines.append(f'    <display_name>{_escape_xml(result.get_display_name())}</display_name>')
    lines.append(f'    <timestamp>{_escape_xml(result.timestamp)}</timestamp>')
    lines.append('  </identification>')

    snap = result.scene_snapshot
    lines.append('  <scene_snapshot>')
    lines.append(f'    <uuid>{_escape_xml(snap.uuid)}</uuid>')
    lines.append(f'    <name>{_escape_xml(snap.name)}</name>')
    lines.append(f'    <mirror_count>{snap.mirror_count}</mirror_count>')
    lines.append(f'    <object_count>{snap.object_count}</object_count>')
    lines.append(f'    <observer_count>{snap.observer_count}</observer_count>')
    lines.append('    <settings>')
    for key, value in snap.settings.items():
        lines.append(f'      <{key}>{_escape_xml(str(value))}</{key}>')
    lines.append('    </settings>')
    lines.append('  </scene_snapshot>')

    lines.append('  <results>')
    lines.append(f'    <image_count>{result.image_count}</image_count>')
    lines.append(f'    <max_order>{result.max_order}</max_order>')
    lines.append(f'    <virtual_mirror_count>{len(result.virtual_mirrors)}</virtual_mirror_count>')
    lines.append(f'    <path_segment_count>{len(result.path_segments)}</path_segment_count>')
    lines.append(f'    <sight_line_count>{len(result.sight_lines)}</sight_line_count>')
    lines.append(f'    <parallel_group_count>{result.parallel_group_count}</parallel_group_count>')
    lines.append('  </results>')

    by_order = result.images_by_order()
    if by_order:
        lines.append('  <images>')
        for order in sorted(by_order):
            lines.append(f'    <order value="{order}" image_count="{len(by_order[order])}"/>')
        lines.append('  </images>')

    lines.append('</simulation_result>')
    return '\n'.join(lines)


def _describe_result_text(result: SimulationResult) -> str:
    snap = result.scene_snapshot
    lines = [
        f"Simulation: {result.get_display_name()} ({result.timestamp})",
        f"Scene: {snap.name} - {snap.mirror_count} mirrors, "
        f"{snap.object_count} objects, {snap.observer_count} observers",
        "Settings: " + ", ".join(f"{k}={v}" for k, v in snap.settings.items()),
        f"Visible images: {result.image_count}",
    ]
    by_order = result.images_by_order()
    for order in sorted(by_order):
        lines.append(f"  order {order}: {len(by_order[order])}")
    lines.append(f"Virtual mirrors: {len(result.virtual_mirrors)}")
    lines.append(f"Path segments: {len(result.path_segments)}")
    lines.append(f"Direct lines of sight: {len(result.sight_lines)}")
    lines.append(f"Parallel mirror groups: {result.parallel_group_count}")
    return '\n'.join(lines)
