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
Result Export Utilities
===============================================================================
Exports the output of a simulation run to files:

- CSV: one row per virtual image, or one row per path segment
- JSON: the whole SimulationResult, mirrors referenced by uuid

Plus a small statistics helper for quick summaries of an image list.
===============================================================================
"""

import csv
import json
from collections import Counter
from pathlib import Path
from typing import List, Union

from ..core.ray_path import PathSegment
from ..core.virtual_image import VirtualImage
from .simulation_result import SimulationResult


def save_images_csv(
    images: List[VirtualImage],
    output_path: Union[str, Path],
    filename: str = "images.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export virtual image data to a CSV file.

    Args:
        images: List of VirtualImage objects to export.
        output_path: Directory path where the CSV file will be saved.
            Can be a string or Path object.
        filename: Name of the output CSV file (default: "images.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> from mirror_images.analysis import save_images_csv
        >>> output_file = save_images_csv(result.images, "./output")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename
    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'image_index',
            'uuid',
            'parent_uuid',
            'order',
            'x',
            'y',
            'direction',
            'size',
            'source_mirror_uuid',
            'source_mirror_is_virtual',
        ])

        for i, image in enumerate(images):
            writer.writerow([
                i,
                image.uuid,
                image.parent_uuid or '',
                image.order,
                coord_fmt.format(image.position.x),
                coord_fmt.format(image.position.y),
                coord_fmt.format(image.direction),
                image.size,
                image.source_mirror.uuid,
                image.source_mirror.is_virtual,
            ])

    return csv_file


def save_segments_csv(
    segments: List[PathSegment],
    output_path: Union[str, Path],
    filename: str = "segments.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export light path segments to a CSV file.

    Args:
        segments: PathSegment objects (path segments or direct sight lines).
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file (default: "segments.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename
    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['segment_index', 'start_x', 'start_y', 'end_x', 'end_y',
                         'order', 'dashed', 'color'])

        for i, seg in enumerate(segments):
            writer.writerow([
                i,
                coord_fmt.format(seg.start.x),
                coord_fmt.format(seg.start.y),
                coord_fmt.format(seg.end.x),
                coord_fmt.format(seg.end.y),
                seg.order,
                seg.dashed,
                seg.color,
            ])

    return csv_file


def result_to_json(
    result: SimulationResult,
    output_path: Union[str, Path],
    filename: str = "result.json",
    indent: int = 2,
) -> Path:
    """
    Export a whole SimulationResult to a JSON file.

    Args:
        result: The result to export.
        output_path: Directory where the JSON file will be saved.
        filename: Name of the output file (default: "result.json").
        indent: JSON indentation (default: 2).

    Returns:
        Path: Full path to the created JSON file.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    json_file = output_dir / filename
    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=indent)

    return json_file


def get_image_statistics(images: List[VirtualImage]) -> dict:
    """
    Compute statistics about a collection of virtual images.

    Args:
        images: List of VirtualImage objects to analyze.

    Returns:
        dict: Dictionary containing:
            - total_images: Number of images
            - max_order: Highest reflection order (0 if empty)
            - images_per_order: {order: count}
            - source_mirrors: Number of distinct source mirrors
            - images_from_virtual_mirrors: Images whose source mirror is virtual
            - root_images: Images without a parent (first order)

    Example:
        >>> stats = get_image_statistics(result.images)
        >>> print(f"Images: {stats['total_images']}, deepest order: {stats['max_order']}")
    """
    if not images:
        return {
            'total_images': 0,
            'max_order': 0,
            'images_per_order': {},
            'source_mirrors': 0,
            'images_from_virtual_mirrors': 0,
            'root_images': 0,
        }

    per_order = Counter(img.order for img in images)

    return {
        'total_images': len(images),
        'max_order': max(per_order),
        'images_per_order': dict(sorted(per_order.items())),
        'source_mirrors': len({id(img.source_mirror) for img in images}),
        'images_from_virtual_mirrors': sum(1 for img in images if img.source_mirror.is_virtual),
        'root_images': sum(1 for img in images if img.parent_uuid is None),
    }
