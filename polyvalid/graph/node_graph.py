"""Node consistency graph.

The node graph splits every boundary edge at its intersection records into
*edge ends* leaving each node. Ends pointing in the same direction are
grouped into an :class:`EdgeEndBundle`, and the bundles around a node are
kept in counter-clockwise order in an :class:`EdgeEndBundleStar`. Walking a
star and comparing the area labels of neighbouring bundles tells whether the
area is well formed at that node.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..algorithms.orientation import orientation_index
from ..core.errors import TopologyError
from ..core.geometry_utils import coordinate_key
from ..core.types import Coordinate, Location, Position, Quadrant
from .boundary import BoundaryGraph
from .edge import Edge, EdgeIntersection
from .label import Label

logger = logging.getLogger(__name__)


class EdgeEnd:
    """The start of a split edge, seen from the node it leaves.

    Attributes:
        edge: Parent boundary edge
        p0: Node location
        p1: Next point along the edge end, giving its direction
        label: Area locations in the edge end's direction
    """

    def __init__(self, edge: Edge, p0: Coordinate, p1: Coordinate, label: Label):
        self.edge = edge
        self.p0 = p0
        self.p1 = p1
        self.label = label
        self.dx = p1[0] - p0[0]
        self.dy = p1[1] - p0[1]
        if self.dx == 0.0 and self.dy == 0.0:
            raise TopologyError("EdgeEnd with identical endpoints found", p0)
        self.quadrant = Quadrant.of(self.dx, self.dy)

    def compare_direction(self, other: EdgeEnd) -> int:
        """Order edge ends counter-clockwise from the positive x axis.

        Returns:
            -1, 0 or 1; 0 means both ends point in exactly the same direction
        """
        if self.dx == other.dx and self.dy == other.dy:
            return 0
        if self.quadrant > other.quadrant:
            return 1
        if self.quadrant < other.quadrant:
            return -1
        # Same quadrant: the sign of the turn decides
        return orientation_index(other.p0, other.p1, self.p1)

    def __repr__(self) -> str:
        return f"EdgeEnd({self.p0} -> {self.p1}, quadrant={self.quadrant.name}, label={self.label})"


def _edge_end_for_prev(
    edge: Edge, current: EdgeIntersection, previous: Optional[EdgeIntersection]
) -> Optional[EdgeEnd]:
    """Edge end pointing backwards along ``edge`` from ``current``."""
    index = current.segment_index
    if current.distance == 0.0:
        # At the start of the edge there is nothing behind
        if index == 0:
            return None
        index -= 1

    p_prev = edge.coords[index]
    if previous is not None and previous.segment_index >= index:
        p_prev = previous.coord

    return EdgeEnd(edge, current.coord, p_prev, edge.label.flipped())


def _edge_end_for_next(
    edge: Edge, current: EdgeIntersection, following: Optional[EdgeIntersection]
) -> Optional[EdgeEnd]:
    """Edge end pointing forwards along ``edge`` from ``current``."""
    index = current.segment_index + 1
    if following is not None and following.segment_index == current.segment_index:
        p_next = following.coord
    elif index < len(edge.coords):
        p_next = edge.coords[index]
    else:
        return None

    return EdgeEnd(edge, current.coord, p_next, edge.label.copy())


def build_edge_ends(edges: Sequence[Edge]) -> List[EdgeEnd]:
    """Split every edge at its intersection records into edge ends.

    Each record yields up to two ends: one towards the previous record and
    one towards the next. Edge endpoints are added as records first.
    """
    edge_ends: List[EdgeEnd] = []
    for edge in edges:
        edge.intersections.add_endpoints()
        records = list(edge.intersections)
        for position, current in enumerate(records):
            previous = records[position - 1] if position > 0 else None
            following = records[position + 1] if position + 1 < len(records) else None

            for edge_end in (
                _edge_end_for_prev(edge, current, previous),
                _edge_end_for_next(edge, current, following),
            ):
                if edge_end is not None:
                    edge_ends.append(edge_end)
    return edge_ends


class EdgeEndBundle:
    """Edge ends leaving a node in exactly the same direction.

    More than one end in a bundle means boundary segments coincide along
    that direction.

    Attributes:
        edge_ends: Members in insertion order
        label: Combined label, available after :meth:`compute_label`
    """

    def __init__(self, edge_end: EdgeEnd):
        self._leader = edge_end
        self.edge_ends: List[EdgeEnd] = [edge_end]
        self.label = edge_end.label.copy()

    @property
    def edge(self) -> Edge:
        """Parent edge of the first edge end."""
        return self._leader.edge

    @property
    def coordinate(self) -> Coordinate:
        return self._leader.p0

    @property
    def direction(self) -> Coordinate:
        return self._leader.p1

    def insert(self, edge_end: EdgeEnd) -> None:
        self.edge_ends.append(edge_end)

    def compare_direction(self, edge_end: EdgeEnd) -> int:
        return self._leader.compare_direction(edge_end)

    def is_area(self) -> bool:
        return any(e.label.is_area() for e in self.edge_ends)

    def compute_label(self) -> None:
        """Merge the member labels into the bundle label.

        The on-location follows the mod-2 boundary rule. A side is INTERIOR
        if any member has INTERIOR there, otherwise EXTERIOR if any member
        has EXTERIOR.
        """
        is_area = self.is_area()
        self.label = Label.area() if is_area else Label(Location.NONE)
        self._compute_label_on()
        if is_area:
            self._compute_label_side(Position.LEFT)
            self._compute_label_side(Position.RIGHT)

    def _compute_label_on(self) -> None:
        boundary_count = 0
        found_interior = False
        for edge_end in self.edge_ends:
            location = edge_end.label.on
            if location == Location.BOUNDARY:
                boundary_count += 1
            elif location == Location.INTERIOR:
                found_interior = True

        location = Location.NONE
        if found_interior:
            location = Location.INTERIOR
        if boundary_count > 0:
            location = Location.BOUNDARY if boundary_count % 2 == 1 else Location.INTERIOR
        self.label.on = location

    def _compute_label_side(self, side: Position) -> None:
        for edge_end in self.edge_ends:
            if not edge_end.label.is_area():
                continue
            location = edge_end.label.get(side)
            if location == Location.INTERIOR:
                self.label.set(side, Location.INTERIOR)
                return
            if location == Location.EXTERIOR:
                self.label.set(side, Location.EXTERIOR)

    def __len__(self) -> int:
        return len(self.edge_ends)

    def __repr__(self) -> str:
        return f"EdgeEndBundle({self.coordinate} -> {self.direction}, {len(self)} ends, label={self.label})"


class EdgeEndBundleStar:
    """Bundles around one node, in counter-clockwise order."""

    def __init__(self):
        self._bundles: List[EdgeEndBundle] = []

    def insert(self, edge_end: EdgeEnd) -> None:
        """Add an edge end to its bundle, creating the bundle if needed."""
        for index, bundle in enumerate(self._bundles):
            cmp = bundle.compare_direction(edge_end)
            if cmp == 0:
                bundle.insert(edge_end)
                return
            if cmp > 0:
                self._bundles.insert(index, EdgeEndBundle(edge_end))
                return
        self._bundles.append(EdgeEndBundle(edge_end))

    @property
    def bundles(self) -> List[EdgeEndBundle]:
        return list(self._bundles)

    def degree(self) -> int:
        return len(self._bundles)

    def is_area_labels_consistent(self) -> bool:
        """Check that area labels alternate consistently around the node."""
        for bundle in self._bundles:
            bundle.compute_label()
        return self._check_area_labels_consistent()

    def _check_area_labels_consistent(self) -> bool:
        if not self._bundles:
            return True

        # Walk counter-clockwise: the right side of each bundle faces the
        # left side of the bundle before it
        start = self._bundles[-1].label.left
        if start is None or start == Location.NONE:
            raise TopologyError("Found unlabelled area edge", self._bundles[-1].coordinate)

        current = start
        for bundle in self._bundles:
            left, right = bundle.label.left, bundle.label.right
            # The two sides of a boundary edge cannot both be interior or both exterior
            if left == right:
                return False
            if right != current:
                return False
            current = left
        return True

    def __iter__(self) -> Iterator[EdgeEndBundle]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)


class Node:
    """A point where boundary edges meet.

    Attributes:
        coord: Node location
        star: Edge end bundles leaving the node
    """

    def __init__(self, coord: Coordinate):
        self.coord = coord
        self.star = EdgeEndBundleStar()

    def add(self, edge_end: EdgeEnd) -> None:
        self.star.insert(edge_end)

    def __repr__(self) -> str:
        return f"Node({self.coord}, degree={self.star.degree()})"


class NodeGraph:
    """Nodes of a boundary graph together with their edge end stars.

    Nodes are stored in an owned list, so indices are stable and iteration
    order is the order in which nodes were created.

    Example:
        ```python
        graph = BoundaryGraph.from_geometry(polygon)
        graph.compute_self_nodes(LineIntersector())
        node_graph = NodeGraph()
        node_graph.build(graph)
        bad = [n for n in node_graph.nodes if not n.star.is_area_labels_consistent()]
        ```
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self._index: Dict[Tuple[float, float], int] = {}

    def add_node(self, coord: Coordinate) -> Node:
        key = coordinate_key(coord)
        index = self._index.get(key)
        if index is not None:
            return self.nodes[index]
        node = Node(coord)
        self._index[key] = len(self.nodes)
        self.nodes.append(node)
        return node

    def find(self, coord: Coordinate) -> Optional[Node]:
        index = self._index.get(coordinate_key(coord))
        return None if index is None else self.nodes[index]

    def build(self, graph: BoundaryGraph) -> None:
        """Build nodes and stars from a self-noded boundary graph.

        Any previous content is discarded.
        """
        self.nodes = []
        self._index = {}

        # Keep the boundary graph's node order; edge ends only add nodes it lacks
        for coord in graph.nodes:
            self.add_node(coord)

        for edge_end in build_edge_ends(graph.edges):
            self.add_node(edge_end.p0).add(edge_end)

        logger.debug("Built node graph with %d nodes", len(self.nodes))

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


__all__ = [
    'EdgeEnd',
    'EdgeEndBundle',
    'EdgeEndBundleStar',
    'Node',
    'NodeGraph',
    'build_edge_ends',
]
