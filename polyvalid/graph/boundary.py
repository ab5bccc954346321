"""Topology graph of the boundary rings of an area geometry.

A :class:`BoundaryGraph` holds one :class:`Edge` per ring of a Polygon or
MultiPolygon, labelled with the area locations on either side, plus the set
of nodes where rings start or intersect. The graph is built once per
validity check; the only mutation afterwards is the self-noding pass which
annotates edges with intersection records.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from shapely.geometry.base import BaseGeometry

from ..algorithms.intersection import LineIntersector
from ..core.errors import ShellHoleIdentityError
from ..core.geometry_utils import (
    coordinate_key,
    iter_area_rings,
    remove_repeated_points,
    ring_is_ccw,
)
from ..core.types import Coordinate, Location
from .edge import Edge
from .label import Label
from .segment_intersector import SegmentIntersector, compute_intersections

logger = logging.getLogger(__name__)

# Minimum number of points (including the closing point) of a valid ring
MIN_RING_POINTS = 4


class BoundaryGraph:
    """Edges and nodes of the boundary of a single area geometry.

    Example:
        ```python
        graph = BoundaryGraph.from_geometry(polygon)
        si = graph.compute_self_nodes(LineIntersector())
        if si.has_proper:
            print(si.proper_intersection_point)
        ```

    Attributes:
        edges: One edge per ring, in ring construction order
        nodes: Node locations in insertion order
        has_too_few_points: A ring was skipped for having too few points
        too_few_points_location: First point of the first skipped ring
    """

    def __init__(self):
        self.edges: List[Edge] = []
        self._nodes: Dict[Tuple[float, float], Coordinate] = {}
        self._ring_edges: Dict[Tuple[int, int], Edge] = {}
        self.has_too_few_points = False
        self.too_few_points_location: Optional[Coordinate] = None

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> 'BoundaryGraph':
        """Build the graph of a Polygon, MultiPolygon or LinearRing.

        Raises:
            UnsupportedGeometryError: If the geometry is not areal
        """
        graph = cls()
        hole_counts: Dict[int, int] = {}
        for polygon_index, is_shell, coords in iter_area_rings(geometry):
            if is_shell:
                graph.add_ring(coords, Location.EXTERIOR, Location.INTERIOR, (polygon_index, 0))
            else:
                ring_index = hole_counts.get(polygon_index, 0) + 1
                hole_counts[polygon_index] = ring_index
                graph.add_ring(
                    coords, Location.INTERIOR, Location.EXTERIOR, (polygon_index, ring_index)
                )
        return graph

    @property
    def nodes(self) -> List[Coordinate]:
        return list(self._nodes.values())

    def add_ring(
        self,
        coords: Sequence[Coordinate],
        cw_left: Location,
        cw_right: Location,
        ring_id: Optional[Tuple[int, int]] = None
    ) -> Optional[Edge]:
        """Add a closed ring as an edge.

        Args:
            coords: Closed ring coordinates
            cw_left: Location left of the ring when it runs clockwise
            cw_right: Location right of the ring when it runs clockwise
            ring_id: Optional (polygon index, ring index) used by :meth:`ring_edge`

        Returns:
            The new edge, or None if the ring was empty or had too few points
        """
        if not coords:
            return None

        cleaned = remove_repeated_points(coords)
        if len(cleaned) < MIN_RING_POINTS:
            if not self.has_too_few_points:
                self.has_too_few_points = True
                self.too_few_points_location = cleaned[0]
            logger.debug("Ring starting at %s has too few points", cleaned[0])
            return None

        left, right = cw_left, cw_right
        if ring_is_ccw(cleaned):
            left, right = cw_right, cw_left

        edge = Edge(cleaned, Label(Location.BOUNDARY, left, right))
        self.edges.append(edge)
        if ring_id is not None:
            self._ring_edges[ring_id] = edge
        self.add_node(cleaned[0])
        return edge

    def add_node(self, coord: Coordinate) -> Coordinate:
        """Insert a node; an existing node at the same location is kept."""
        return self._nodes.setdefault(coordinate_key(coord), coord)

    def ring_edge(self, polygon_index: int, ring_index: int) -> Optional[Edge]:
        """Edge of a ring; ring index 0 is the shell, holes count from 1."""
        return self._ring_edges.get((polygon_index, ring_index))

    def find_edge(self, coords: Sequence[Coordinate]) -> Optional[Edge]:
        """Find the edge whose points equal ``coords`` (after removing repeats)."""
        cleaned = remove_repeated_points(coords)
        for edge in self.edges:
            if edge.is_pointwise_equal(cleaned):
                return edge
        return None

    def compute_self_nodes(
        self,
        li: LineIntersector,
        compute_ring_self_nodes: bool = True,
        stop_at_first_proper: bool = False
    ) -> SegmentIntersector:
        """Compute all intersections between boundary segments.

        Intersection records are added to the edges, and every intersection
        location becomes a node.

        Args:
            li: Intersection classifier
            compute_ring_self_nodes: Also test segment pairs within one ring
            stop_at_first_proper: Stop as soon as a proper intersection is found

        Returns:
            The segment intersector with the summary of what was found
        """
        si = SegmentIntersector(li, include_proper=True, stop_at_first_proper=stop_at_first_proper)
        compute_intersections(self.edges, si, test_all_segments=compute_ring_self_nodes)
        self._add_self_intersection_nodes()
        return si

    def _add_self_intersection_nodes(self) -> None:
        for edge in self.edges:
            for record in edge.intersections:
                self.add_node(record.coord)

    def __repr__(self) -> str:
        return f"BoundaryGraph({len(self.edges)} edges, {len(self._nodes)} nodes)"


def find_point_not_node(test_coords: Sequence[Coordinate], search_edge: Edge) -> Coordinate:
    """Find a point of ``test_coords`` that is not a node of ``search_edge``.

    Self-noding must have run on the graph owning ``search_edge``.

    Args:
        test_coords: Points of the ring being located (typically a hole)
        search_edge: Edge of the ring it is located against (typically the shell)

    Returns:
        The first test point that is not an intersection node of the edge

    Raises:
        ShellHoleIdentityError: If every test point is a node, which means
            the two rings are identical
    """
    intersections = search_edge.intersections
    for coord in test_coords:
        if not intersections.is_intersection(coord):
            return coord
    raise ShellHoleIdentityError()


__all__ = [
    'BoundaryGraph',
    'find_point_not_node',
    'MIN_RING_POINTS',
]
