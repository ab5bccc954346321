"""Boundary graph edges and the intersection records attached to them."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from ..algorithms.intersection import LineIntersector
from ..core.geometry_utils import equals_2d
from ..core.types import Coordinate
from .label import Label


@dataclass(frozen=True)
class EdgeIntersection:
    """A point where an edge is intersected.

    Attributes:
        coord: Intersection location
        segment_index: Index of the edge segment containing the point
        distance: Monotone distance of the point along that segment
    """
    coord: Coordinate
    segment_index: int
    distance: float

    @property
    def sort_key(self) -> Tuple[int, float]:
        return (self.segment_index, self.distance)


class EdgeIntersectionList:
    """Intersections along one edge, unique per (segment index, distance).

    Iteration yields the records in order along the edge.
    """

    def __init__(self, edge: 'Edge'):
        self.edge = edge
        self._records: Dict[Tuple[int, float], EdgeIntersection] = {}

    def add(self, coord: Coordinate, segment_index: int, distance: float) -> EdgeIntersection:
        key = (segment_index, distance)
        record = self._records.get(key)
        if record is None:
            record = EdgeIntersection(coord, segment_index, distance)
            self._records[key] = record
        return record

    def add_endpoints(self) -> None:
        """Ensure the first and last edge points are recorded."""
        last = len(self.edge.coords) - 1
        self.add(self.edge.coords[0], 0, 0.0)
        self.add(self.edge.coords[last], last, 0.0)

    def is_intersection(self, coord: Coordinate) -> bool:
        return any(equals_2d(record.coord, coord) for record in self._records.values())

    def __iter__(self) -> Iterator[EdgeIntersection]:
        return iter(sorted(self._records.values(), key=lambda r: r.sort_key))

    def __len__(self) -> int:
        return len(self._records)


class Edge:
    """A boundary ring of the area geometry, stored as one graph edge.

    Attributes:
        coords: Ring coordinates without consecutive duplicates
        label: Locations on and beside the edge in its forward direction
        intersections: Intersection records found by self-noding
    """

    def __init__(self, coords: Sequence[Coordinate], label: Label):
        self.coords: List[Coordinate] = list(coords)
        self.label = label
        self.intersections = EdgeIntersectionList(self)

    @property
    def max_segment_index(self) -> int:
        return len(self.coords) - 2

    @property
    def is_closed(self) -> bool:
        return equals_2d(self.coords[0], self.coords[-1])

    def coordinate(self, index: int) -> Coordinate:
        return self.coords[index]

    def segments(self) -> np.ndarray:
        """Return the 2D segments of this edge as an (N, 2, 2) array."""
        xy = np.array([c[:2] for c in self.coords], dtype=float)
        return np.stack([xy[:-1], xy[1:]], axis=1)

    def add_intersections(self, li: LineIntersector, segment_index: int, input_index: int) -> None:
        """Record every intersection point of ``li`` on this edge.

        Args:
            li: Intersector holding the last computed segment pair
            segment_index: Index of this edge's segment in that pair
            input_index: Which input segment (0 or 1) of ``li`` belongs to this edge
        """
        for point_index in range(li.intersection_count):
            self._add_intersection(li, segment_index, input_index, point_index)

    def _add_intersection(
        self, li: LineIntersector, segment_index: int, input_index: int, point_index: int
    ) -> None:
        point = li.intersection(point_index)
        distance = li.edge_distance(input_index, point_index)

        # A point equal to the segment end is stored as the start of the next segment
        next_index = segment_index + 1
        if next_index < len(self.coords) and equals_2d(point, self.coords[next_index]):
            segment_index = next_index
            distance = 0.0

        self.intersections.add(point, segment_index, distance)

    def is_pointwise_equal(self, coords: Sequence[Coordinate]) -> bool:
        if len(coords) != len(self.coords):
            return False
        return all(equals_2d(a, b) for a, b in zip(self.coords, coords))

    def __repr__(self) -> str:
        return f"Edge({len(self.coords)} points, label={self.label})"


__all__ = [
    'EdgeIntersection',
    'EdgeIntersectionList',
    'Edge',
]
