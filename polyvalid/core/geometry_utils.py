"""Common coordinate and ring utilities.

This module provides the small coordinate helpers shared by the boundary
graph and the validity checks.
"""

from typing import Iterator, List, Sequence, Tuple

from shapely.geometry import LinearRing, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from .errors import UnsupportedGeometryError
from .types import Coordinate


def to_coordinate(values: Sequence[float]) -> Coordinate:
    """Convert a coordinate-like sequence to an immutable tuple of floats.

    Examples:
        >>> to_coordinate([1, 2])
        (1.0, 2.0)
    """
    return tuple(float(v) for v in values)


def equals_2d(a: Coordinate, b: Coordinate) -> bool:
    """Exact equality of the X and Y ordinates."""
    return a[0] == b[0] and a[1] == b[1]


def coordinate_key(coord: Coordinate) -> Tuple[float, float]:
    """Hashable 2D key used to index nodes by location."""
    return (coord[0], coord[1])


def remove_repeated_points(coords: Sequence[Coordinate]) -> List[Coordinate]:
    """Drop consecutive points that share the same X and Y.

    Args:
        coords: Coordinate sequence

    Returns:
        New list without consecutive duplicates

    Examples:
        >>> remove_repeated_points([(0, 0), (0, 0), (1, 0), (1, 1), (1, 1)])
        [(0, 0), (1, 0), (1, 1)]
    """
    result: List[Coordinate] = []
    for coord in coords:
        if result and equals_2d(result[-1], coord):
            continue
        result.append(coord)
    return result


def iter_area_rings(geometry: BaseGeometry) -> Iterator[Tuple[int, bool, List[Coordinate]]]:
    """Yield the rings of an areal geometry in construction order.

    Args:
        geometry: Polygon, MultiPolygon or LinearRing

    Yields:
        Tuples of (polygon_index, is_shell, coordinates). A bare LinearRing
        is reported as the shell of polygon 0.

    Raises:
        UnsupportedGeometryError: If the geometry has no area semantics
    """
    if isinstance(geometry, LinearRing):
        if not geometry.is_empty:
            yield 0, True, [to_coordinate(c) for c in geometry.coords]
        return

    if isinstance(geometry, Polygon):
        polygons = [geometry]
    elif isinstance(geometry, MultiPolygon):
        polygons = list(geometry.geoms)
    else:
        raise UnsupportedGeometryError(
            f"Expected Polygon, MultiPolygon or LinearRing, got {geometry.geom_type}"
        )

    for index, polygon in enumerate(polygons):
        if polygon.is_empty:
            continue
        yield index, True, [to_coordinate(c) for c in polygon.exterior.coords]
        for interior in polygon.interiors:
            yield index, False, [to_coordinate(c) for c in interior.coords]


def ring_is_ccw(coords: Sequence[Coordinate]) -> bool:
    """Return True if the closed ring runs counter-clockwise."""
    return LinearRing([c[:2] for c in coords]).is_ccw


__all__ = [
    'to_coordinate',
    'equals_2d',
    'coordinate_key',
    'remove_repeated_points',
    'iter_area_rings',
    'ring_is_ccw',
]
