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
Analysis Utilities
===============================================================================
Post-processing of simulation runs:

- SimulationResult: everything one Simulator.run() produced, plus a
  snapshot of the scene settings
- Text/XML summaries of a result
- CSV and JSON export, image statistics
===============================================================================
"""

from .simulation_result import (
    SceneSnapshot,
    SimulationResult,
    describe_simulation_result,
)
from .saving import (
    save_images_csv,
    save_segments_csv,
    result_to_json,
    get_image_statistics,
)

__all__ = [
    # Simulation result container
    'SceneSnapshot',
    'SimulationResult',
    'describe_simulation_result',
    # Export and statistics
    'save_images_csv',
    'save_segments_csv',
    'result_to_json',
    'get_image_statistics',
]
