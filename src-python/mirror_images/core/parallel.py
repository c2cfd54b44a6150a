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
from typing import List, Sequence

import numpy as np

from .constants import NORMAL_PARALLEL_TOLERANCE
from .geometry import geometry
from .scene_objs.mirror import Mirror

logger = logging.getLogger(__name__)


def are_parallel(mirror1: Mirror, mirror2: Mirror) -> bool:
    """
    Check if two mirrors are parallel by comparing their normals.

    Normals facing the same or opposite ways both count as parallel.

    Args:
        mirror1: First mirror
        mirror2: Second mirror

    Returns:
        True if |n1 . n2| > 1 - NORMAL_PARALLEL_TOLERANCE
    """
    return abs(geometry.dot(mirror1.normal(), mirror2.normal())) > 1 - NORMAL_PARALLEL_TOLERANCE


def _parallel_matrix(mirrors: Sequence[Mirror]) -> np.ndarray:
    """Boolean matrix M[i, j] = are_parallel(mirrors[i], mirrors[j])."""
    radians = np.radians(np.array([m.rotation for m in mirrors], dtype=float))
    normals = np.column_stack((np.cos(radians), np.sin(radians)))
    return np.abs(normals @ normals.T) > 1 - NORMAL_PARALLEL_TOLERANCE


def _contains(group: List[Mirror], mirror: Mirror) -> bool:
    return any(member is mirror for member in group)


def find_parallel_groups(mirrors: Sequence[Mirror]) -> List[List[Mirror]]:
    """
    Partition mirrors into groups of parallel mirrors.

    Pairs (i, j) with i < j are visited in input order. A parallel pair joins
    the first existing group that already holds either mirror (adding whichever
    is missing), otherwise it starts a new two-mirror group.

    This is a single-pass first-match merge, not a transitive union: a mirror
    parallel to members of two different groups is added to the first group
    only, and the groups are never merged. The outcome therefore depends on
    the order of ``mirrors``, and a mirror may end up in more than one group.

    Args:
        mirrors: Mirrors to group

    Returns:
        List of groups, each with at least two mirrors
    """
    groups: List[List[Mirror]] = []
    if len(mirrors) < 2:
        return groups

    parallel = _parallel_matrix(mirrors)

    for i in range(len(mirrors)):
        for j in range(i + 1, len(mirrors)):
            if not parallel[i, j]:
                continue

            found = False
            for group in groups:
                if _contains(group, mirrors[i]) or _contains(group, mirrors[j]):
                    if not _contains(group, mirrors[i]):
                        group.append(mirrors[i])
                    if not _contains(group, mirrors[j]):
                        group.append(mirrors[j])
                    found = True
                    break

            if not found:
                groups.append([mirrors[i], mirrors[j]])

    logger.debug("Found %d parallel groups among %d mirrors", len(groups), len(mirrors))
    return groups
