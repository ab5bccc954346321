"""Exception hierarchy for polyvalid.

Validity checks report invalid geometries through their return values.
The exceptions below are reserved for misuse and for broken graph
invariants that a check cannot recover from.
"""

from typing import Optional

from .types import Coordinate


class PolyvalidError(Exception):
    """Base class for all polyvalid exceptions."""
    pass


class ShellHoleIdentityError(PolyvalidError):
    """Raised when a hole ring is identical to its shell ring."""

    def __init__(self, message: str = "Shell and hole are identical"):
        super().__init__(message)


class TopologyError(PolyvalidError):
    """Raised when the boundary graph breaks a structural invariant.

    Attributes:
        point: Location of the problem, if known
    """

    def __init__(self, message: str, point: Optional[Coordinate] = None):
        self.point = point
        if point is not None:
            message = f"{message} [ ({point[0]}, {point[1]}) ]"
        super().__init__(message)


class UnsupportedGeometryError(PolyvalidError):
    """Raised when a geometry without area semantics is passed in."""
    pass


class ConfigurationError(PolyvalidError):
    """Raised when a validity configuration is inconsistent."""
    pass


__all__ = [
    'PolyvalidError',
    'ShellHoleIdentityError',
    'TopologyError',
    'UnsupportedGeometryError',
    'ConfigurationError',
]
