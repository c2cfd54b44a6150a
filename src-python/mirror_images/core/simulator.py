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

import logging
from typing import List, Optional, TYPE_CHECKING

from .constants import DIRECT_SIGHT_COLOR
from .image_lineage import ImageLineage
from .parallel import find_parallel_groups
from .ray_path import PathSegment, reconstruct_ray_path
from .reflection import enumerate_virtual_mirrors, parallel_mirror_images, virtual_image_position
from .visibility import is_directly_visible, is_image_visible
from ..analysis.simulation_result import SimulationResult

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.mirror import Mirror
    from .scene_objs.observer import Observer
    from .scene_objs.physical_object import PhysicalObject
    from .virtual_image import VirtualImage

logger = logging.getLogger(__name__)


class Simulator:
    """
    Computes everything a renderer needs to draw the reflections of a scene.

    One run goes through the whole pipeline:
    1. First-order images of every object in every mirror, kept if visible
    2. Parallel mirror groups and their higher-order image chains, kept if visible
    3. The light path from object to observer for every visible image
    4. Virtual mirrors up to the scene's virtual_mirror_depth
    5. Direct (unreflected) lines of sight from objects to observers

    The simulator holds no state between runs: call run() again whenever the
    scene changes. The scene itself is never modified.

    Attributes:
        scene (Scene): The scene to compute
        name (str or None): Name given to the produced results
    """

    def __init__(self, scene: 'Scene', name: Optional[str] = None) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to compute
            name (str or None): Optional name for the produced SimulationResult
        """
        self.scene: 'Scene' = scene
        self.name: Optional[str] = name

    def run(self) -> SimulationResult:
        """
        Run the full image computation.

        Higher-order images point at their parent through parent_uuid. A
        parent of a parallel chain is not necessarily visible itself, so the
        result also carries the lineage of every image computed during the
        run; every parent_uuid in result.images resolves there.

        Returns:
            SimulationResult with visible images, their lineage, virtual
            mirrors, light paths and direct lines of sight
        """
        mirrors = list(self.scene.mirrors)
        objects = list(self.scene.objects)
        observers = list(self.scene.observers)

        images: List['VirtualImage'] = []
        path_segments: List[PathSegment] = []
        lineage = ImageLineage()

        # Step 1: single reflections
        for obj in objects:
            for mirror in mirrors:
                image = virtual_image_position(obj, mirror)
                if not is_image_visible(observers, mirrors, image.position, mirror):
                    continue
                lineage.register(image)
                images.append(image)
                path_segments.extend(self._trace(image, lineage, obj, mirrors, observers))

        # Step 2: back-and-forth reflections between parallel mirrors
        groups = find_parallel_groups(mirrors)
        for obj in objects:
            for group in groups:
                group_images = parallel_mirror_images(obj, group, self.scene.max_reflections)
                for image in group_images:
                    lineage.register(image)

                for image in group_images:
                    # First-order images were handled in step 1
                    if image.order <= 1:
                        continue
                    if not is_image_visible(observers, mirrors, image.position, image.source_mirror):
                        continue
                    images.append(image)
                    path_segments.extend(self._trace(image, lineage, obj, mirrors, observers))

        # Step 3: virtual mirrors
        virtual_mirrors = enumerate_virtual_mirrors(mirrors, self.scene.virtual_mirror_depth)

        # Step 4: direct lines of sight
        sight_lines = [
            PathSegment(obj.position, observer.position, 0, dashed=False, color=DIRECT_SIGHT_COLOR)
            for obj in objects
            for observer in observers
            if is_directly_visible(obj.position, observer.position, mirrors)
        ]

        logger.debug(
            "Run on %s: %d visible images, %d virtual mirrors, %d path segments, %d sight lines",
            self.scene.get_display_name(), len(images), len(virtual_mirrors),
            len(path_segments), len(sight_lines)
        )

        return SimulationResult.create(
            scene=self.scene,
            images=images,
            virtual_mirrors=virtual_mirrors,
            path_segments=path_segments,
            sight_lines=sight_lines,
            parallel_group_count=len(groups),
            lineage=lineage,
            name=self.name,
        )

    def _trace(self, image: 'VirtualImage', images, obj: 'PhysicalObject',
               mirrors: List['Mirror'], observers: List['Observer']) -> List[PathSegment]:
        """Light paths of one image, for each of the given observers that can see it."""
        segments: List[PathSegment] = []
        for observer in observers:
            if is_image_visible([observer], mirrors, image.position, image.source_mirror):
                segments.extend(reconstruct_ray_path(image, images, obj, observer))
        return segments


# Example usage and testing
if __name__ == "__main__":
    from mirror_images.core.scene import Scene
    from mirror_images.core.scene_objs.mirror import Mirror
    from mirror_images.core.scene_objs.observer import Observer
    from mirror_images.core.scene_objs.physical_object import PhysicalObject
    from mirror_images.analysis.simulation_result import describe_simulation_result
    from mirror_images.logging_config import setup_logging

    setup_logging(logging.DEBUG)

    scene = Scene()
    scene.name = "Two parallel mirrors"
    scene.add_mirror(Mirror(position={'x': -200, 'y': 0}, height=400, rotation=180))
    scene.add_mirror(Mirror(position={'x': 200, 'y': 0}, height=400, rotation=0))
    scene.add_object(PhysicalObject(position={'x': 0, 'y': -50}))
    scene.add_observer(Observer(position={'x': 50, 'y': 100}))

    result = Simulator(scene).run()
    print(describe_simulation_result(result, format='text'))
