"""Node consistency checks for area geometries.

:class:`ConsistentAreaTester` checks that the boundary graph of a Polygon
or MultiPolygon is consistent with the Simple Features rules for areas:

- no two boundary segments cross properly,
- the area labels around every node alternate consistently (this catches
  rings touching at a vertex in ways that make the interior ambiguous),
- no two rings are identical.

Violations are ordinary outcomes: each check returns a boolean and records
the location of the first problem found in :attr:`invalid_point`.
"""

import logging
from typing import Optional

from ..algorithms.intersection import LineIntersector
from ..core.types import Coordinate, ViolationKind
from ..graph.boundary import BoundaryGraph
from ..graph.node_graph import NodeGraph
from .result import AreaCheckResult, Violation

logger = logging.getLogger(__name__)


class ConsistentAreaTester:
    """Checks that a boundary graph describes a consistent area.

    The tester keeps a reference to ``graph``; the self-noding pass it runs
    annotates the graph's edges, so one graph should not be checked from
    several threads at once.

    Example:
        ```python
        graph = BoundaryGraph.from_geometry(multipolygon)
        tester = ConsistentAreaTester(graph)
        if not tester.is_node_consistent_area():
            print("inconsistent at", tester.invalid_point)
        elif tester.has_duplicate_rings():
            print("duplicate ring at", tester.invalid_point)
        ```

    Note:
        :meth:`has_duplicate_rings` is only meaningful after
        :meth:`is_node_consistent_area` has returned True. Called earlier it
        inspects an empty node graph and returns False. Use :meth:`check`
        to run both in the right order.
    """

    def __init__(self, graph: BoundaryGraph, stop_at_first_proper: bool = False):
        """
        Args:
            graph: Boundary graph of one area geometry, with all rings added
            stop_at_first_proper: Stop self-noding at the first proper intersection
        """
        self._graph = graph
        self._li = LineIntersector()
        self._node_graph = NodeGraph()
        self._stop_at_first_proper = stop_at_first_proper
        self._violation: Optional[Violation] = None

    @property
    def invalid_point(self) -> Optional[Coordinate]:
        """Location of the violation found by the last check, or None."""
        return None if self._violation is None else self._violation.point

    @property
    def violation(self) -> Optional[Violation]:
        return self._violation

    @property
    def node_graph(self) -> NodeGraph:
        return self._node_graph

    def is_node_consistent_area(self) -> bool:
        """Check for proper self-intersections and inconsistent node labels.

        Returns:
            True if the area has no proper intersections and consistent
            labelling at every node
        """
        self._violation = None

        # All intersections are needed, including those within a single ring
        intersector = self._graph.compute_self_nodes(
            self._li,
            compute_ring_self_nodes=True,
            stop_at_first_proper=self._stop_at_first_proper,
        )
        if intersector.has_proper:
            self._record(ViolationKind.SELF_INTERSECTION, intersector.proper_intersection_point)
            return False

        self._node_graph.build(self._graph)
        return self._is_node_edge_area_labels_consistent()

    def _is_node_edge_area_labels_consistent(self) -> bool:
        for node in self._node_graph.nodes:
            if not node.star.is_area_labels_consistent():
                self._record(ViolationKind.NODE_LABELS, node.coord)
                return False
        return True

    def has_duplicate_rings(self) -> bool:
        """Check for two rings that are topologically equal.

        In a node-consistent area two rings can only share a segment if they
        are identical, so a bundle holding more than one edge end marks a
        duplicate ring. The start point of one of the rings is recorded.

        Returns:
            True if a duplicate ring was found
        """
        self._violation = None
        for node in self._node_graph.nodes:
            for bundle in node.star:
                if len(bundle.edge_ends) > 1:
                    self._record(ViolationKind.DUPLICATE_RINGS, bundle.edge.coordinate(0))
                    return True
        return False

    def check(self) -> AreaCheckResult:
        """Run both checks in order and return the outcome as a value."""
        if not self.is_node_consistent_area() or self.has_duplicate_rings():
            return AreaCheckResult(False, self._violation)
        return AreaCheckResult.valid()

    def _record(self, kind: ViolationKind, point: Optional[Coordinate]) -> None:
        logger.debug("%s at %s", kind.message, point)
        self._violation = Violation(kind, point)


__all__ = ['ConsistentAreaTester']
