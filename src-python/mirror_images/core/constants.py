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
Constants used throughout the mirror image computations.

Extracted here so the geometry helpers, the reflection solver and the
simulator can share them without circular imports.
"""

# Segment intersection: |denominator| below this means parallel / no intersection.
# Engineering tolerance only, callers must not rely on exact-zero detection.
INTERSECTION_PARALLEL_TOLERANCE = 1e-4

# Two mirrors are parallel when |n1 . n2| > 1 - NORMAL_PARALLEL_TOLERANCE
NORMAL_PARALLEL_TOLERANCE = 1e-3

# Grid size used to deduplicate virtual images of the same reflection depth.
# 1.0 collapses images that land on the same screen pixel.
DEDUP_GRANULARITY = 1.0

# Default depth of the parallel-mirror image chains
DEFAULT_MAX_REFLECTIONS = 3

# Default depth of the virtual mirror enumeration
DEFAULT_VIRTUAL_MIRROR_DEPTH = 2

# Color hints for reconstructed light paths, indexed by (order - 1) cyclically
ORDER_COLORS = (
    'rgb(255, 0, 0)',      # Red
    'rgb(220, 50, 220)',   # Magenta
    'rgb(50, 220, 220)',   # Cyan
    'rgb(50, 50, 220)',    # Blue
)

# Color hint for direct (unreflected) lines of sight
DIRECT_SIGHT_COLOR = '#00cc00'

# Default geometry of mirrors added through Scene.add_default_mirror()
DEFAULT_MIRROR_WIDTH = 6
DEFAULT_MIRROR_HEIGHT = 400

# Default sizes for objects and observers
DEFAULT_OBJECT_SIZE = 30
DEFAULT_OBSERVER_SIZE = 40


def color_for_order(order: int) -> str:
    """
    Get the color hint for a reflection order.

    Args:
        order: Reflection order (>= 1). Order 0 is a direct line of sight.

    Returns:
        CSS color string
    """
    if order <= 0:
        return DIRECT_SIGHT_COLOR
    return ORDER_COLORS[(order - 1) % len(ORDER_COLORS)]
