"""Self-noding of boundary edges.

:func:`compute_intersections` runs a :class:`SegmentIntersector` over every
candidate segment pair of a set of edges. Candidates come from an envelope
index, and pairs are visited in a fixed order so the first proper
intersection reported is reproducible.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..algorithms.intersection import LineIntersector
from ..core.spatial_utils import find_segment_pairs
from ..core.types import Coordinate
from .edge import Edge

logger = logging.getLogger(__name__)


class SegmentIntersector:
    """Computes intersections between segments of boundary edges.

    Intersection points are added to the edges involved. Proper
    intersections are tracked separately, since they make an area invalid
    regardless of anything else.

    Attributes:
        has_intersection: A non-trivial intersection was found
        has_proper: A proper intersection was found
        proper_intersection_point: Location of the first proper intersection
        num_tests: Number of segment pairs tested
        is_done: Processing stopped early at a proper intersection
    """

    def __init__(
        self,
        li: LineIntersector,
        include_proper: bool = True,
        stop_at_first_proper: bool = False
    ):
        self.li = li
        self.include_proper = include_proper
        self.stop_at_first_proper = stop_at_first_proper
        self.has_intersection = False
        self.has_proper = False
        self.proper_intersection_point: Optional[Coordinate] = None
        self.num_tests = 0
        self.num_intersections = 0
        self.is_done = False

    def add_intersections(self, e0: Edge, segment0: int, e1: Edge, segment1: int) -> None:
        """Test one segment pair and record any intersection on both edges."""
        if e0 is e1 and segment0 == segment1:
            return

        self.num_tests += 1
        li = self.li
        li.compute_intersection(
            e0.coords[segment0], e0.coords[segment0 + 1],
            e1.coords[segment1], e1.coords[segment1 + 1],
        )
        if not li.has_intersection:
            return

        self.num_intersections += 1
        if self._is_trivial_intersection(e0, segment0, e1, segment1):
            return

        self.has_intersection = True
        if self.include_proper or not li.is_proper:
            e0.add_intersections(li, segment0, 0)
            e1.add_intersections(li, segment1, 1)

        if li.is_proper:
            if not self.has_proper:
                self.proper_intersection_point = li.intersection(0)
                logger.debug("Proper intersection at %s", self.proper_intersection_point)
            self.has_proper = True
            if self.stop_at_first_proper:
                self.is_done = True

    def _is_trivial_intersection(self, e0: Edge, segment0: int, e1: Edge, segment1: int) -> bool:
        """Adjacent segments of one edge always meet at their shared vertex."""
        if e0 is not e1 or self.li.intersection_count != 1:
            return False

        if abs(segment0 - segment1) == 1:
            return True

        if e0.is_closed:
            last = e0.max_segment_index
            if (segment0 == 0 and segment1 == last) or (segment1 == 0 and segment0 == last):
                return True
        return False


def compute_intersections(
    edges: Sequence[Edge],
    intersector: SegmentIntersector,
    test_all_segments: bool = True
) -> SegmentIntersector:
    """Run ``intersector`` over all candidate segment pairs of ``edges``.

    Args:
        edges: Edges to node against each other
        intersector: Receives every candidate pair
        test_all_segments: If False, pairs within a single edge are skipped

    Returns:
        The intersector, for convenience
    """
    owners: List[int] = []
    offsets: List[int] = []
    blocks = []
    for edge_index, edge in enumerate(edges):
        segments = edge.segments()
        blocks.append(segments)
        owners.extend([edge_index] * len(segments))
        offsets.extend(range(len(segments)))

    if not blocks:
        return intersector

    all_segments = np.concatenate(blocks, axis=0)
    for i, j in find_segment_pairs(all_segments):
        e0, e1 = edges[owners[i]], edges[owners[j]]
        if e0 is e1 and not test_all_segments:
            continue
        intersector.add_intersections(e0, offsets[i], e1, offsets[j])
        if intersector.is_done:
            break

    logger.debug(
        "Tested %d segment pairs, %d intersections",
        intersector.num_tests, intersector.num_intersections,
    )
    return intersector


__all__ = [
    'SegmentIntersector',
    'compute_intersections',
]
