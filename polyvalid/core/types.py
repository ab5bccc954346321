"""Type definitions for polyvalid topology operations.

This module defines the coordinate alias and the enums used to label
boundary graph components and to classify validity violations.
"""

from enum import Enum, IntEnum
from typing import Tuple

# Coordinates are immutable tuples (x, y) or (x, y, z). Storing a tuple is
# already an independent copy, so no clone step is needed.
Coordinate = Tuple[float, ...]


class Location(Enum):
    """Topological location of a point relative to an area.

    Attributes:
        INTERIOR: Inside the area
        BOUNDARY: On a boundary ring
        EXTERIOR: Outside the area
        NONE: Not yet determined

    Examples:
        >>> from polyvalid.core.types import Location
        >>> Location.INTERIOR.symbol
        'i'
    """
    INTERIOR = 'interior'
    BOUNDARY = 'boundary'
    EXTERIOR = 'exterior'
    NONE = 'none'

    @property
    def symbol(self) -> str:
        return {
            Location.INTERIOR: 'i',
            Location.BOUNDARY: 'b',
            Location.EXTERIOR: 'e',
            Location.NONE: '-',
        }[self]


class Position(IntEnum):
    """Position of a label slot relative to a directed edge.

    Attributes:
        ON: On the edge itself
        LEFT: Left hand side when travelling along the edge
        RIGHT: Right hand side when travelling along the edge
    """
    ON = 0
    LEFT = 1
    RIGHT = 2


class Orientation(IntEnum):
    """Turn direction of an ordered point triple."""
    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTERCLOCKWISE = 1


class Quadrant(IntEnum):
    """Quadrant of a direction vector, numbered counter-clockwise from NE."""
    NE = 0
    NW = 1
    SW = 2
    SE = 3

    @classmethod
    def of(cls, dx: float, dy: float) -> 'Quadrant':
        if dx == 0.0 and dy == 0.0:
            raise ValueError(f"Cannot compute the quadrant for point ({dx}, {dy})")
        if dx >= 0:
            return cls.NE if dy >= 0 else cls.SE
        return cls.NW if dy >= 0 else cls.SW


class IntersectionKind(IntEnum):
    """Classification of a segment pair intersection.

    Attributes:
        NONE: Segments do not intersect
        POINT: Segments meet in a single point
        COLLINEAR: Segments overlap along a shared stretch
    """
    NONE = 0
    POINT = 1
    COLLINEAR = 2


class ViolationKind(Enum):
    """Kind of area validity violation.

    Attributes:
        SELF_INTERSECTION: Two boundary segments cross properly
        NODE_LABELS: Area labels around a node are inconsistent
        DUPLICATE_RINGS: Two rings occupy the same location
        TOO_FEW_POINTS: A ring has fewer than four distinct points
        RING_SELF_INTERSECTION: A ring passes twice through the same point
        HOLE_OUTSIDE_SHELL: A hole lies outside its shell
        DISCONNECTED_INTERIOR: A hole touches its shell at every vertex

    Examples:
        >>> from polyvalid import validate_area
        >>> result = validate_area(bowtie)
        >>> result.violation.kind is ViolationKind.SELF_INTERSECTION
        True
    """
    SELF_INTERSECTION = 'self_intersection'
    NODE_LABELS = 'node_labels'
    DUPLICATE_RINGS = 'duplicate_rings'
    TOO_FEW_POINTS = 'too_few_points'
    RING_SELF_INTERSECTION = 'ring_self_intersection'
    HOLE_OUTSIDE_SHELL = 'hole_outside_shell'
    DISCONNECTED_INTERIOR = 'disconnected_interior'

    @property
    def message(self) -> str:
        return {
            ViolationKind.SELF_INTERSECTION: 'Self-intersection',
            ViolationKind.NODE_LABELS: 'Self-intersection',
            ViolationKind.DUPLICATE_RINGS: 'Duplicate Rings',
            ViolationKind.TOO_FEW_POINTS: 'Too few points in geometry component',
            ViolationKind.RING_SELF_INTERSECTION: 'Ring Self-intersection',
            ViolationKind.HOLE_OUTSIDE_SHELL: 'Hole lies outside shell',
            ViolationKind.DISCONNECTED_INTERIOR: 'Interior is disconnected',
        }[self]


__all__ = [
    'Coordinate',
    'Location',
    'Position',
    'Orientation',
    'Quadrant',
    'IntersectionKind',
    'ViolationKind',
]
