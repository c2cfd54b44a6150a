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

Mirror Images
=============

Computes the virtual images an observer sees in a set of flat 2D mirrors,
the virtual copies of the mirrors themselves, and the light paths that
connect objects, mirrors and observers. Geometry is built on Shapely.

Main modules:
- core: Scene, Simulator, mirror geometry, reflection and visibility
- analysis: Simulation result container and CSV/JSON export

Quick start:
    from mirror_images import Scene, Simulator
    from mirror_images.core.scene_objs import Mirror, PhysicalObject, Observer
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator
from .core.virtual_image import VirtualImage

__all__ = [
    'Scene',
    'Simulator',
    'VirtualImage',
    '__version__',
]
