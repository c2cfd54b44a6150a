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

from .geometry import geometry, Point, Line, Geometry
from . import constants
from .virtual_image import VirtualImage
from .image_lineage import ImageLineage
from .reflection import (
    virtual_image_position,
    virtual_mirror,
    enumerate_virtual_mirrors,
    parallel_mirror_images,
    reflect_ray_direction,
)
from .parallel import are_parallel, find_parallel_groups
from .visibility import is_directly_visible, is_image_visible
from .ray_path import PathSegment, reconstruct_ray_path
from .scene import Scene
from .simulator import Simulator

__all__ = [
    'geometry', 'Point', 'Line', 'Geometry',
    'constants',
    'VirtualImage',
    'ImageLineage',
    'virtual_image_position', 'virtual_mirror', 'enumerate_virtual_mirrors',
    'parallel_mirror_images', 'reflect_ray_direction',
    'are_parallel', 'find_parallel_groups',
    'is_directly_visible', 'is_image_visible',
    'PathSegment', 'reconstruct_ray_path',
    'Scene',
    'Simulator',
]
