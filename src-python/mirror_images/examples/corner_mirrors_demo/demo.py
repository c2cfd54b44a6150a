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

"""
Corner Mirrors Demo - Images in a Mirror Corner and a Parallel Pair

Two scenes:
- A corner: two mirrors at 90 degrees, observer and object inside the corner.
  Each mirror shows one first-order image; the virtual mirrors show how the
  corner repeats itself.
- A parallel pair: two facing mirrors with the object between them. The
  images repeat along the axis up to the scene's max_reflections.

Expected behavior:
- Corner: 2 visible images, 2 first-order and 2 second-order virtual mirrors
- Parallel pair: 2 images per order, alternating between the two mirrors

Results are exported next to this script as CSV and JSON.
"""

import logging
import sys
import os

# Add the src-python directory to the path so mirror_images is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from mirror_images.core.scene import Scene
from mirror_images.core.scene_objs import Mirror, Observer, PhysicalObject
from mirror_images.core.simulator import Simulator
from mirror_images.analysis import (
    describe_simulation_result,
    get_image_statistics,
    result_to_json,
    save_images_csv,
    save_segments_csv,
)
from mirror_images.logging_config import setup_logging


def build_corner_scene():
    scene = Scene()
    scene.name = "Mirror corner"
    scene.add_mirror(Mirror(position={'x': 0, 'y': 200}, height=400, rotation=0))
    scene.add_mirror(Mirror(position={'x': 200, 'y': 0}, height=400, rotation=90))
    scene.add_object(PhysicalObject(position={'x': 120, 'y': 80}, direction=30))
    scene.add_observer(Observer(position={'x': 250, 'y': 300}))
    return scene


def build_parallel_scene():
    scene = Scene()
    scene.name = "Parallel pair"
    scene.add_default_mirror(1000, 800)
    scene.add_default_mirror(1000, 800)
    scene.add_object(PhysicalObject(position={'x': 500, 'y': 380}))
    scene.add_observer(Observer(position={'x': 450, 'y': 480}))
    scene.max_reflections = 4
    return scene


def main():
    """Run both scenes and export the results."""
    setup_logging(logging.INFO)

    print("Corner Mirrors Demo")
    print("=" * 60)

    output_dir = os.path.dirname(__file__)

    for scene in (build_corner_scene(), build_parallel_scene()):
        print(f"\n{scene!r}")
        result = Simulator(scene, name=scene.name).run()
        print(describe_simulation_result(result, format='text'))

        stats = get_image_statistics(result.images)
        print(f"Images per order: {stats['images_per_order']}")

        for image in result.images:
            print(f"  {image!r}")

        slug = scene.name.lower().replace(' ', '_')
        images_file = save_images_csv(result.images, output_dir, filename=f'{slug}_images.csv')
        segments_file = save_segments_csv(
            result.path_segments + result.sight_lines, output_dir, filename=f'{slug}_segments.csv'
        )
        json_file = result_to_json(result, output_dir, filename=f'{slug}.json')
        print(f"Saved: {images_file.name}, {segments_file.name}, {json_file.name}")


if __name__ == '__main__':
    main()
