"""Polyvalid - Area validity checking for polygonal geometries.

This library decides whether the boundary rings of a Polygon or
MultiPolygon form a well-defined area: no crossing segments, consistent
interior/exterior labelling at every node, and no duplicate rings. Input
geometries are Shapely objects.
"""


# Validation functions
from .validation import (
    validate_area,
    is_valid_area,
    explain_area,
    analyze_area,
    ConsistentAreaTester,
    AreaCheckResult,
    Violation,
)

# Graph construction
from .graph import BoundaryGraph, NodeGraph
from .algorithms import LineIntersector

# Configuration
from .config import ValidityConfig

# Core types (enums)
from .core import (
    Location,
    Position,
    IntersectionKind,
    ViolationKind,
)

# Core exceptions
from .core import (
    PolyvalidError,
    ShellHoleIdentityError,
    TopologyError,
    UnsupportedGeometryError,
    ConfigurationError,
)

__all__ = [

    # Validation
    'validate_area',
    'is_valid_area',
    'explain_area',
    'analyze_area',
    'ConsistentAreaTester',
    'AreaCheckResult',
    'Violation',

    # Graph construction
    'BoundaryGraph',
    'NodeGraph',
    'LineIntersector',

    # Configuration
    'ValidityConfig',

    # Core types (enums)
    'Location',
    'Position',
    'IntersectionKind',
    'ViolationKind',

    # Core exceptions
    'PolyvalidError',
    'ShellHoleIdentityError',
    'TopologyError',
    'UnsupportedGeometryError',
    'ConfigurationError',
]
