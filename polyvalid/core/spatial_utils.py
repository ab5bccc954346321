"""Spatial indexing utilities.

This module provides the envelope index used to find candidate segment
pairs before running the exact intersection tests.
"""

from typing import List, Tuple

import numpy as np
import shapely
from shapely.strtree import STRtree


def find_segment_pairs(segments: np.ndarray) -> List[Tuple[int, int]]:
    """Find pairs of segments whose envelopes intersect.

    Uses STRtree for efficient spatial indexing (O(n log n) instead of O(n²)).
    Returns unique pairs (i, j) where i < j, sorted so callers visit them in
    a reproducible order.

    Args:
        segments: Array of shape (N, 2, 2) holding segment endpoints

    Returns:
        Sorted list of (index_i, index_j) tuples

    Examples:
        >>> segments = np.array([
        ...     [[0, 0], [2, 2]],
        ...     [[0, 2], [2, 0]],
        ...     [[5, 5], [6, 6]],
        ... ])
        >>> find_segment_pairs(segments)
        [(0, 1)]
    """
    segments = np.asarray(segments, dtype=float)
    if len(segments) < 2:
        return []

    # Build spatial index over segment envelopes
    lines = shapely.linestrings(segments)
    tree = STRtree(lines)
    inputs, targets = tree.query(lines)

    pairs = {
        (int(i), int(j))
        for i, j in zip(inputs, targets)
        if i < j
    }
    return sorted(pairs)


__all__ = [
    'find_segment_pairs',
]
