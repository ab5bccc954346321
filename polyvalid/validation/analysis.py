"""Area validity diagnostics."""

from typing import Optional

from shapely.geometry import LinearRing, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from ..config import ValidityConfig
from .checks import validate_area


def explain_area(geometry: BaseGeometry, config: Optional[ValidityConfig] = None) -> str:
    """Return a human readable validity diagnostic.

    "Valid Geometry" means every check of :func:`validate_area` passed. Nested
    shells and interior connectivity are not checked, so it is weaker than
    Shapely's ``explain_validity``.

    Examples:
        >>> explain_area(Polygon([(0, 0), (2, 2), (2, 0), (0, 2)]))
        'Self-intersection at (1, 1)'
        >>> explain_area(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]))
        'Valid Geometry'
    """
    return validate_area(geometry, config).message


def _ring_count(geometry: BaseGeometry) -> int:
    if isinstance(geometry, LinearRing):
        return 0 if geometry.is_empty else 1
    if isinstance(geometry, Polygon):
        polygons = [geometry]
    elif isinstance(geometry, MultiPolygon):
        polygons = list(geometry.geoms)
    else:
        return 0
    return sum(1 + len(p.interiors) for p in polygons if not p.is_empty)


def analyze_area(geometry: BaseGeometry, config: Optional[ValidityConfig] = None) -> dict:
    """Analyze area validity.

    Returns a dictionary with diagnostic information about the geometry.

    Args:
        geometry: Polygon, MultiPolygon or LinearRing to analyze
        config: Which optional checks to run (default: all)

    Returns:
        Dictionary with keys:
            - 'is_valid': bool
            - 'kind': ViolationKind value string, or None
            - 'message': str
            - 'location': (x, y) tuple, or None
            - 'geometry_type': str
            - 'ring_count': int

    Examples:
        >>> poly = Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])
        >>> report = analyze_area(poly)
        >>> report['kind']
        'self_intersection'
        >>> report['location']
        (1.0, 1.0)
    """
    result = validate_area(geometry, config)
    location = result.invalid_point

    return {
        'is_valid': result.is_valid,
        'kind': result.kind.value if result.kind is not None else None,
        'message': result.message,
        'location': tuple(location[:2]) if location is not None else None,
        'geometry_type': geometry.geom_type,
        'ring_count': _ring_count(geometry),
    }


__all__ = ['explain_area', 'analyze_area']
