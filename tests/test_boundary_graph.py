"""Tests for boundary graph construction and self-noding."""

import pytest
from shapely.geometry import LinearRing, LineString, MultiPolygon, Point, Polygon

from polyvalid.algorithms import LineIntersector
from polyvalid.core import Location, ShellHoleIdentityError, UnsupportedGeometryError
from polyvalid.graph import BoundaryGraph, Edge, Label, find_point_not_node


SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]


def _noded_graph(geometry):
    graph = BoundaryGraph.from_geometry(geometry)
    graph.compute_self_nodes(LineIntersector())
    return graph


class TestRingLabels:
    """Side labels follow the ring orientation."""

    def test_ccw_shell(self):
        graph = BoundaryGraph.from_geometry(Polygon(SQUARE))
        label = graph.edges[0].label

        assert label.on == Location.BOUNDARY
        assert label.left == Location.INTERIOR
        assert label.right == Location.EXTERIOR

    def test_cw_shell(self):
        graph = BoundaryGraph.from_geometry(Polygon(list(reversed(SQUARE))))
        label = graph.edges[0].label

        assert label.left == Location.EXTERIOR
        assert label.right == Location.INTERIOR

    def test_cw_hole(self):
        """The interior of the polygon lies left of a clockwise hole."""
        poly = Polygon(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(2, 2), (2, 4), (4, 4), (4, 2)]],
        )
        graph = BoundaryGraph.from_geometry(poly)
        hole_label = graph.edges[1].label

        assert hole_label.left == Location.INTERIOR
        assert hole_label.right == Location.EXTERIOR

    def test_ccw_hole(self):
        poly = Polygon(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(2, 2), (4, 2), (4, 4), (2, 4)]],
        )
        graph = BoundaryGraph.from_geometry(poly)
        hole_label = graph.edges[1].label

        assert hole_label.left == Location.EXTERIOR
        assert hole_label.right == Location.INTERIOR


class TestFromGeometry:
    """Tests for BoundaryGraph.from_geometry."""

    def test_one_edge_per_ring(self):
        poly = Polygon(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(2, 2), (4, 2), (4, 4), (2, 4)], [(6, 6), (8, 6), (8, 8), (6, 8)]],
        )
        graph = BoundaryGraph.from_geometry(poly)

        assert len(graph.edges) == 3
        assert graph.ring_edge(0, 0) is graph.edges[0]
        assert graph.ring_edge(0, 2) is graph.edges[2]
        assert graph.ring_edge(0, 3) is None

    def test_multipolygon_ring_ids(self):
        a = Polygon(SQUARE)
        b = Polygon([(5, 5), (6, 5), (6, 6), (5, 6)])
        graph = BoundaryGraph.from_geometry(MultiPolygon([a, b]))

        assert graph.ring_edge(1, 0).coords[0] == (5.0, 5.0)

    def test_ring_starts_are_nodes(self):
        a = Polygon(SQUARE)
        b = Polygon([(5, 5), (6, 5), (6, 6), (5, 6)])
        graph = BoundaryGraph.from_geometry(MultiPolygon([a, b]))

        assert graph.nodes == [(0.0, 0.0), (5.0, 5.0)]

    def test_repeated_points_removed(self):
        poly = Polygon([(0, 0), (1, 0), (1, 0), (1, 1), (0, 1)])
        graph = BoundaryGraph.from_geometry(poly)

        assert len(graph.edges[0].coords) == 5
        assert not graph.has_too_few_points

    def test_too_few_points(self):
        """A ring collapsing to fewer than four points is not added."""
        poly = Polygon([(0, 0), (1, 0), (1, 0), (0, 0)])
        graph = BoundaryGraph.from_geometry(poly)

        assert graph.edges == []
        assert graph.has_too_few_points
        assert graph.too_few_points_location == (0.0, 0.0)

    def test_linear_ring(self):
        graph = BoundaryGraph.from_geometry(LinearRing(SQUARE))
        assert len(graph.edges) == 1
        assert graph.edges[0].label.left == Location.INTERIOR

    def test_empty_geometries(self):
        assert BoundaryGraph.from_geometry(Polygon()).edges == []
        assert BoundaryGraph.from_geometry(MultiPolygon()).edges == []

    @pytest.mark.parametrize("geometry", [
        Point(0, 0),
        LineString([(0, 0), (1, 1)]),
    ])
    def test_unsupported_geometry(self, geometry):
        with pytest.raises(UnsupportedGeometryError):
            BoundaryGraph.from_geometry(geometry)

    def test_find_edge(self):
        graph = BoundaryGraph.from_geometry(Polygon(SQUARE))
        coords = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]

        assert graph.find_edge(coords) is graph.edges[0]
        assert graph.find_edge(list(reversed(coords))) is None


class TestSelfNoding:
    """Tests for BoundaryGraph.compute_self_nodes."""

    def test_simple_ring_has_no_intersections(self):
        graph = BoundaryGraph.from_geometry(Polygon(SQUARE))
        si = graph.compute_self_nodes(LineIntersector())

        assert not si.has_intersection
        assert not si.has_proper
        assert len(graph.edges[0].intersections) == 0

    def test_proper_crossing(self):
        graph = BoundaryGraph.from_geometry(Polygon([(0, 0), (2, 2), (2, 0), (0, 2)]))
        si = graph.compute_self_nodes(LineIntersector())

        assert si.has_proper
        assert si.proper_intersection_point == (1.0, 1.0)
        assert (1.0, 1.0) in graph.nodes

    def test_stop_at_first_proper(self):
        graph = BoundaryGraph.from_geometry(Polygon([(0, 0), (2, 2), (2, 0), (0, 2)]))
        si = graph.compute_self_nodes(LineIntersector(), stop_at_first_proper=True)

        assert si.has_proper
        assert si.is_done

    def test_touching_vertex_becomes_node(self):
        a = Polygon(SQUARE)
        b = Polygon([(1, 1), (2, 1), (2, 2), (1, 2)])
        graph = _noded_graph(MultiPolygon([a, b]))

        assert graph.nodes == [(0.0, 0.0), (1.0, 1.0)]
        assert graph.edges[0].intersections.is_intersection((1.0, 1.0))

    def test_touch_inside_segment_is_recorded(self):
        """A vertex touching the middle of a segment splits that segment."""
        a = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
        b = Polygon([(2, 1), (4, 0), (4, 2)])
        graph = _noded_graph(MultiPolygon([a, b]))

        records = list(graph.edges[0].intersections)
        assert [(r.segment_index, r.distance) for r in records] == [(1, 1.0)]
        assert (2.0, 1.0) in graph.nodes

    def test_noding_is_repeatable(self):
        a = Polygon(SQUARE)
        b = Polygon([(1, 1), (2, 1), (2, 2), (1, 2)])
        graph = _noded_graph(MultiPolygon([a, b]))
        before = [list(e.intersections) for e in graph.edges]

        graph.compute_self_nodes(LineIntersector())

        assert [list(e.intersections) for e in graph.edges] == before

    def test_ring_self_nodes_can_be_skipped(self):
        graph = BoundaryGraph.from_geometry(Polygon([(0, 0), (2, 2), (2, 0), (0, 2)]))
        si = graph.compute_self_nodes(LineIntersector(), compute_ring_self_nodes=False)

        assert not si.has_proper


class TestFindPointNotNode:
    """Tests for find_point_not_node."""

    def test_returns_first_non_node(self):
        poly = Polygon(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(5, 0), (7, 2), (3, 2)]],
        )
        graph = _noded_graph(poly)
        shell, hole = graph.edges

        assert find_point_not_node(hole.coords, shell) == (7.0, 2.0)

    def test_identical_rings_raise(self):
        graph = BoundaryGraph()
        shell = graph.add_ring(SQUARE + [SQUARE[0]], Location.EXTERIOR, Location.INTERIOR)
        hole = graph.add_ring(SQUARE + [SQUARE[0]], Location.INTERIOR, Location.EXTERIOR)
        graph.compute_self_nodes(LineIntersector())

        with pytest.raises(ShellHoleIdentityError, match="identical"):
            find_point_not_node(hole.coords, shell)


class TestEdge:
    """Tests for Edge helpers."""

    def test_segments_array(self):
        edge = Edge([(0, 0), (1, 0), (1, 1), (0, 0)], Label(Location.BOUNDARY))
        segments = edge.segments()

        assert segments.shape == (3, 2, 2)
        assert segments[1].tolist() == [[1.0, 0.0], [1.0, 1.0]]

    def test_endpoints_added_once(self):
        edge = Edge([(0, 0), (1, 0), (1, 1), (0, 0)], Label(Location.BOUNDARY))
        edge.intersections.add_endpoints()
        edge.intersections.add_endpoints()

        assert [(r.segment_index, r.distance) for r in edge.intersections] == [(0, 0.0), (3, 0.0)]

    def test_closed(self):
        assert Edge([(0, 0), (1, 0), (1, 1), (0, 0)], Label()).is_closed
        assert not Edge([(0, 0), (1, 0), (1, 1)], Label()).is_closed
