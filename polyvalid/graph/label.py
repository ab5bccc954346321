"""Topological labels for boundary graph components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.types import Location, Position


@dataclass
class Label:
    """Locations of an edge (or edge end) relative to the area.

    ``on`` is the location of the edge itself; ``left`` and ``right`` are the
    locations of the two sides when travelling along the edge. A label with
    ``left``/``right`` set to ``None`` describes a non-areal component.

    Examples:
        >>> label = Label(Location.BOUNDARY, Location.EXTERIOR, Location.INTERIOR)
        >>> label.flip()
        >>> label.left
        <Location.INTERIOR: 'interior'>
    """

    on: Location = Location.NONE
    left: Optional[Location] = None
    right: Optional[Location] = None

    @classmethod
    def area(cls) -> Label:
        """An empty area label with all three positions undetermined."""
        return cls(Location.NONE, Location.NONE, Location.NONE)

    def copy(self) -> Label:
        return Label(self.on, self.left, self.right)

    def flip(self) -> None:
        """Swap the left and right locations in place."""
        self.left, self.right = self.right, self.left

    def flipped(self) -> Label:
        label = self.copy()
        label.flip()
        return label

    def is_area(self) -> bool:
        return self.left is not None and self.right is not None

    def get(self, position: Position) -> Optional[Location]:
        if position == Position.LEFT:
            return self.left
        if position == Position.RIGHT:
            return self.right
        return self.on

    def set(self, position: Position, location: Location) -> None:
        if position == Position.LEFT:
            self.left = location
        elif position == Position.RIGHT:
            self.right = location
        else:
            self.on = location

    def __str__(self) -> str:
        if not self.is_area():
            return self.on.symbol
        return f"{self.left.symbol}{self.on.symbol}{self.right.symbol}"


__all__ = ['Label']
