"""Computational geometry primitives used by the boundary graph."""

from .orientation import orientation_index
from .intersection import LineIntersector, compute_edge_distance

__all__ = [
    'orientation_index',
    'LineIntersector',
    'compute_edge_distance',
]
