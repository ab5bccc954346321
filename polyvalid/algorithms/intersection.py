"""Segment intersection classification.

:class:`LineIntersector` decides whether two segments intersect and, if so,
whether the intersection is *proper* (a single point lying in the interior
of both segments) or *improper* (an endpoint touch or a collinear overlap).
Proper intersection points are computed exactly with rational arithmetic
and rounded to float once.
"""

from fractions import Fraction
from typing import List, Optional, Sequence

from ..core.geometry_utils import equals_2d
from ..core.types import Coordinate, IntersectionKind
from .orientation import orientation_index


def _envelope_contains(p1: Coordinate, p2: Coordinate, q: Coordinate) -> bool:
    """True if q lies in the envelope of segment p1-p2."""
    return (
        min(p1[0], p2[0]) <= q[0] <= max(p1[0], p2[0])
        and min(p1[1], p2[1]) <= q[1] <= max(p1[1], p2[1])
    )


def _envelopes_intersect(
    p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate
) -> bool:
    return not (
        min(q1[0], q2[0]) > max(p1[0], p2[0])
        or max(q1[0], q2[0]) < min(p1[0], p2[0])
        or min(q1[1], q2[1]) > max(p1[1], p2[1])
        or max(q1[1], q2[1]) < min(p1[1], p2[1])
    )


def _nearest_endpoint(
    p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate, pt: Coordinate
) -> Coordinate:
    best = p1
    best_dist = float('inf')
    for candidate in (p1, p2, q1, q2):
        dist = (candidate[0] - pt[0]) ** 2 + (candidate[1] - pt[1]) ** 2
        if dist < best_dist:
            best, best_dist = candidate, dist
    return best


def compute_edge_distance(p: Coordinate, p0: Coordinate, p1: Coordinate) -> float:
    """Return a robust "distance" of ``p`` along the segment p0-p1.

    The value is not a Euclidean length but is monotone along the segment,
    which is all that is needed to order intersections on an edge.

    Examples:
        >>> compute_edge_distance((2, 1), (0, 0), (4, 2))
        2.0
    """
    dx = abs(p1[0] - p0[0])
    dy = abs(p1[1] - p0[1])

    if equals_2d(p, p0):
        return 0.0
    if equals_2d(p, p1):
        return float(dx if dx > dy else dy)

    pdx = abs(p[0] - p0[0])
    pdy = abs(p[1] - p0[1])
    dist = pdx if dx > dy else pdy
    # Hack to ensure that non-endpoints always have a non-zero distance
    if dist == 0.0:
        dist = max(pdx, pdy)
    return float(dist)


class LineIntersector:
    """Computes the intersection of two line segments.

    Example:
        ```python
        li = LineIntersector()
        li.compute_intersection((0, 0), (2, 2), (0, 2), (2, 0))
        li.has_intersection      # True
        li.is_proper             # True
        li.intersection(0)       # (1.0, 1.0)
        ```

    Attributes:
        kind: Classification of the last computed pair
        is_proper: True if the last intersection was proper
        points: Intersection points of the last computed pair (0 to 2)
    """

    def __init__(self):
        self.kind = IntersectionKind.NONE
        self.is_proper = False
        self.points: List[Coordinate] = []
        self._input: Sequence[Sequence[Coordinate]] = ()

    @property
    def has_intersection(self) -> bool:
        return self.kind != IntersectionKind.NONE

    @property
    def intersection_count(self) -> int:
        # A collinear touch keeps both (equal) candidate points but counts once
        return int(self.kind)

    def intersection(self, index: int) -> Coordinate:
        return self.points[index]

    def compute_intersection(
        self,
        p1: Coordinate,
        p2: Coordinate,
        q1: Coordinate,
        q2: Coordinate
    ) -> IntersectionKind:
        """Classify the intersection of segments p1-p2 and q1-q2.

        Args:
            p1, p2: Endpoints of the first segment
            q1, q2: Endpoints of the second segment

        Returns:
            The intersection kind; details are kept on the instance
        """
        self._input = ((p1, p2), (q1, q2))
        self.is_proper = False
        self.points = []
        self.kind = self._compute(p1, p2, q1, q2)
        return self.kind

    def _compute(
        self, p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate
    ) -> IntersectionKind:
        if not _envelopes_intersect(p1, p2, q1, q2):
            return IntersectionKind.NONE

        # Both q endpoints strictly on the same side of p
        pq1 = orientation_index(p1, p2, q1)
        pq2 = orientation_index(p1, p2, q2)
        if (pq1 > 0 and pq2 > 0) or (pq1 < 0 and pq2 < 0):
            return IntersectionKind.NONE

        qp1 = orientation_index(q1, q2, p1)
        qp2 = orientation_index(q1, q2, p2)
        if (qp1 > 0 and qp2 > 0) or (qp1 < 0 and qp2 < 0):
            return IntersectionKind.NONE

        if pq1 == 0 and pq2 == 0 and qp1 == 0 and qp2 == 0:
            return self._compute_collinear(p1, p2, q1, q2)

        if pq1 == 0 or pq2 == 0 or qp1 == 0 or qp2 == 0:
            # Endpoint touch; reuse the input vertex so no rounding occurs
            if equals_2d(p1, q1) or equals_2d(p1, q2):
                point = p1
            elif equals_2d(p2, q1) or equals_2d(p2, q2):
                point = p2
            elif pq1 == 0:
                point = q1
            elif pq2 == 0:
                point = q2
            elif qp1 == 0:
                point = p1
            else:
                point = p2
        else:
            self.is_proper = True
            point = self._intersection_point(p1, p2, q1, q2)

        self.points = [point]
        return IntersectionKind.POINT

    def _compute_collinear(
        self, p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate
    ) -> IntersectionKind:
        p1q1p2 = _envelope_contains(p1, p2, q1)
        p1q2p2 = _envelope_contains(p1, p2, q2)
        q1p1q2 = _envelope_contains(q1, q2, p1)
        q1p2q2 = _envelope_contains(q1, q2, p2)

        if p1q1p2 and p1q2p2:
            self.points = [q1, q2]
            return IntersectionKind.COLLINEAR
        if q1p1q2 and q1p2q2:
            self.points = [p1, p2]
            return IntersectionKind.COLLINEAR
        if p1q1p2 and q1p1q2:
            self.points = [q1, p1]
            single = equals_2d(q1, p1) and not p1q2p2 and not q1p2q2
            return IntersectionKind.POINT if single else IntersectionKind.COLLINEAR
        if p1q1p2 and q1p2q2:
            self.points = [q1, p2]
            single = equals_2d(q1, p2) and not p1q2p2 and not q1p1q2
            return IntersectionKind.POINT if single else IntersectionKind.COLLINEAR
        if p1q2p2 and q1p1q2:
            self.points = [q2, p1]
            single = equals_2d(q2, p1) and not p1q1p2 and not q1p2q2
            return IntersectionKind.POINT if single else IntersectionKind.COLLINEAR
        if p1q2p2 and q1p2q2:
            self.points = [q2, p2]
            single = equals_2d(q2, p2) and not p1q1p2 and not q1p1q2
            return IntersectionKind.POINT if single else IntersectionKind.COLLINEAR
        return IntersectionKind.NONE

    def _intersection_point(
        self, p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate
    ) -> Coordinate:
        px1, py1 = Fraction(p1[0]), Fraction(p1[1])
        px2, py2 = Fraction(p2[0]), Fraction(p2[1])
        qx1, qy1 = Fraction(q1[0]), Fraction(q1[1])
        qx2, qy2 = Fraction(q2[0]), Fraction(q2[1])

        rx, ry = px2 - px1, py2 - py1
        sx, sy = qx2 - qx1, qy2 - qy1
        denom = rx * sy - ry * sx
        # denom is non-zero: the segments are known to cross properly
        t = ((qx1 - px1) * sy - (qy1 - py1) * sx) / denom
        point = (float(px1 + t * rx), float(py1 + t * ry))

        # Rounding can push the point outside both segments in extreme cases
        if not (_envelope_contains(p1, p2, point) and _envelope_contains(q1, q2, point)):
            return _nearest_endpoint(p1, p2, q1, q2, point)
        return point

    def is_interior_intersection(self, segment_index: Optional[int] = None) -> bool:
        """True if any intersection point is not an endpoint of the given input segment.

        With no argument, checks both input segments.
        """
        if segment_index is None:
            return self.is_interior_intersection(0) or self.is_interior_intersection(1)

        start, end = self._input[segment_index]
        return any(
            not equals_2d(pt, start) and not equals_2d(pt, end)
            for pt in self.points
        )

    def edge_distance(self, segment_index: int, point_index: int) -> float:
        """Distance of an intersection point along input segment 0 or 1."""
        start, end = self._input[segment_index]
        return compute_edge_distance(self.points[point_index], start, end)

    def __repr__(self) -> str:
        if not self.has_intersection:
            return "LineIntersector(no intersection)"
        label = "proper" if self.is_proper else self.kind.name.lower()
        return f"LineIntersector({label}, points={self.points})"


__all__ = [
    'LineIntersector',
    'compute_edge_distance',
]
