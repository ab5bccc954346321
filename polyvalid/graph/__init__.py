"""Topology graph of area boundaries.

The boundary graph holds the rings of an area geometry as labelled edges.
Self-noding annotates those edges with intersection records, from which the
node graph derives edge end bundles around every node.
"""

from .label import Label
from .edge import Edge, EdgeIntersection, EdgeIntersectionList
from .segment_intersector import SegmentIntersector, compute_intersections
from .boundary import BoundaryGraph, find_point_not_node, MIN_RING_POINTS
from .node_graph import (
    EdgeEnd,
    EdgeEndBundle,
    EdgeEndBundleStar,
    Node,
    NodeGraph,
    build_edge_ends,
)

__all__ = [
    'Label',
    'Edge',
    'EdgeIntersection',
    'EdgeIntersectionList',
    'SegmentIntersector',
    'compute_intersections',
    'BoundaryGraph',
    'find_point_not_node',
    'MIN_RING_POINTS',
    'EdgeEnd',
    'EdgeEndBundle',
    'EdgeEndBundleStar',
    'Node',
    'NodeGraph',
    'build_edge_ends',
]
