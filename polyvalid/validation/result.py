"""Result values returned by area validity checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.types import Coordinate, ViolationKind


def format_coordinate(coord: Coordinate) -> str:
    """Format a coordinate as ``(x, y)`` without trailing zeros.

    Examples:
        >>> format_coordinate((1.0, 2.5))
        '(1, 2.5)'
    """
    return "(" + ", ".join(f"{v:.15g}" for v in coord) + ")"


@dataclass(frozen=True)
class Violation:
    """A located validity violation.

    Attributes:
        kind: What is wrong
        point: Where the first instance was found
    """
    kind: ViolationKind
    point: Optional[Coordinate]

    @property
    def message(self) -> str:
        if self.point is None:
            return self.kind.message
        return f"{self.kind.message} at {format_coordinate(self.point)}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class AreaCheckResult:
    """Outcome of an area validity check.

    Attributes:
        is_valid: True if no violation was found
        violation: The first violation found, or None when valid

    Examples:
        >>> result = AreaCheckResult.invalid(ViolationKind.SELF_INTERSECTION, (1.0, 1.0))
        >>> result.message
        'Self-intersection at (1, 1)'
    """
    is_valid: bool
    violation: Optional[Violation] = None

    @classmethod
    def valid(cls) -> AreaCheckResult:
        return cls(True, None)

    @classmethod
    def invalid(cls, kind: ViolationKind, point: Optional[Coordinate]) -> AreaCheckResult:
        return cls(False, Violation(kind, point))

    @property
    def kind(self) -> Optional[ViolationKind]:
        return None if self.violation is None else self.violation.kind

    @property
    def invalid_point(self) -> Optional[Coordinate]:
        return None if self.violation is None else self.violation.point

    @property
    def message(self) -> str:
        if self.violation is None:
            return "Valid Geometry"
        return self.violation.message


__all__ = [
    'Violation',
    'AreaCheckResult',
    'format_coordinate',
]
