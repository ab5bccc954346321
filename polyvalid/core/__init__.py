"""Core types and utilities for polyvalid.

This module provides type definitions, enums, exceptions, and core utilities
used throughout the library.
"""

from .types import (
    Coordinate,
    Location,
    Position,
    Orientation,
    Quadrant,
    IntersectionKind,
    ViolationKind,
)

from .errors import (
    PolyvalidError,
    ShellHoleIdentityError,
    TopologyError,
    UnsupportedGeometryError,
    ConfigurationError,
)

__all__ = [
    # Types and enums
    'Coordinate',
    'Location',
    'Position',
    'Orientation',
    'Quadrant',
    'IntersectionKind',
    'ViolationKind',

    # Exceptions
    'PolyvalidError',
    'ShellHoleIdentityError',
    'TopologyError',
    'UnsupportedGeometryError',
    'ConfigurationError',
]
