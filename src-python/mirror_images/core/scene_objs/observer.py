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

from .base_scene_obj import BaseSceneObj
from ..constants import DEFAULT_OBSERVER_SIZE


class Observer(BaseSceneObj):
    """
    An eye looking at the scene.

    Attributes:
        position (Point): Location of the observer
        size (float): Drawing size
    """

    type = 'Observer'

    serializable_defaults = {
        'position': {'x': 0, 'y': 0},
        'size': DEFAULT_OBSERVER_SIZE,
    }
