"""Area validation built from ordered check steps.

Each step inspects the shared :class:`CheckContext` and either passes or
reports a :class:`Violation`. Steps run in order and validation stops at the
first violation, so later steps may rely on what earlier ones established
(for example, the hole check assumes the boundary is node-consistent).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import shapely
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry

from ..config import ValidityConfig
from ..core.errors import ShellHoleIdentityError
from ..core.geometry_utils import coordinate_key
from ..core.types import ViolationKind
from ..graph.boundary import BoundaryGraph, find_point_not_node
from .consistent_area import ConsistentAreaTester
from .result import AreaCheckResult, Violation

logger = logging.getLogger(__name__)

CheckStep = Callable[["CheckContext"], Optional[Violation]]


@dataclass
class CheckContext:
    """Runtime context shared across check steps."""

    geometry: BaseGeometry
    graph: BoundaryGraph
    tester: ConsistentAreaTester
    config: ValidityConfig


def _too_few_points_step(ctx: CheckContext) -> Optional[Violation]:
    if ctx.graph.has_too_few_points:
        return Violation(ViolationKind.TOO_FEW_POINTS, ctx.graph.too_few_points_location)
    return None


def _consistent_area_step(ctx: CheckContext) -> Optional[Violation]:
    if not ctx.tester.is_node_consistent_area():
        return ctx.tester.violation
    return None


def _duplicate_rings_step(ctx: CheckContext) -> Optional[Violation]:
    if ctx.tester.has_duplicate_rings():
        return ctx.tester.violation
    return None


def _ring_self_intersection_step(ctx: CheckContext) -> Optional[Violation]:
    """A ring may not pass through the same node twice (except at its ends)."""
    for edge in ctx.graph.edges:
        seen = set()
        # The first record is the ring start, which the last record repeats
        for record in list(edge.intersections)[1:]:
            key = coordinate_key(record.coord)
            if key in seen:
                return Violation(ViolationKind.RING_SELF_INTERSECTION, record.coord)
            seen.add(key)
    return None


def _polygons(geometry: BaseGeometry) -> List[Polygon]:
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, MultiPolygon):
        return list(geometry.geoms)
    return []


def _holes_in_shell_step(ctx: CheckContext) -> Optional[Violation]:
    """Every hole must lie inside the shell of its polygon."""
    for polygon_index, polygon in enumerate(_polygons(ctx.geometry)):
        if polygon.is_empty or not polygon.interiors:
            continue

        shell_edge = ctx.graph.ring_edge(polygon_index, 0)
        if shell_edge is None:
            continue
        shell = Polygon([c[:2] for c in shell_edge.coords])
        shapely.prepare(shell)

        for ring_index in range(1, len(polygon.interiors) + 1):
            hole_edge = ctx.graph.ring_edge(polygon_index, ring_index)
            if hole_edge is None:
                continue
            # A hole point that is not a shell node is either inside or outside
            try:
                point = find_point_not_node(hole_edge.coords, shell_edge)
            except ShellHoleIdentityError:
                # Identical rings were already rejected; a hole made only of
                # shell nodes splits the interior
                return Violation(ViolationKind.DISCONNECTED_INTERIOR, hole_edge.coords[0])
            if not shell.contains(Point(point[:2])):
                return Violation(ViolationKind.HOLE_OUTSIDE_SHELL, point)
    return None


def build_check_steps(config: ValidityConfig) -> List[CheckStep]:
    """Assemble the ordered check steps enabled by ``config``."""
    steps: List[CheckStep] = [
        _too_few_points_step,
        _consistent_area_step,
    ]

    if config.check_duplicate_rings:
        steps.append(_duplicate_rings_step)

    if config.check_ring_self_intersection:
        steps.append(_ring_self_intersection_step)

    if config.check_holes_in_shell:
        steps.append(_holes_in_shell_step)

    return steps


def run_checks(
    steps: List[CheckStep],
    context: CheckContext,
    verbose: bool = False
) -> AreaCheckResult:
    """Execute the supplied steps until one reports a violation."""
    for step in steps:
        name = step.__name__.strip('_').replace('_step', '')
        violation = step(context)
        if violation is not None:
            if verbose:
                print(f"{name}: {violation.message}")
            logger.debug("Check %s failed: %s", name, violation.message)
            return AreaCheckResult(False, violation)
        if verbose:
            print(f"{name}: ok")

    return AreaCheckResult.valid()


def validate_area(
    geometry: BaseGeometry,
    config: Optional[ValidityConfig] = None,
    verbose: bool = False
) -> AreaCheckResult:
    """Validate a Polygon, MultiPolygon or LinearRing as an area.

    Args:
        geometry: Areal geometry to validate
        config: Which optional checks to run (default: all)
        verbose: Print the outcome of every step (default: False)

    Returns:
        AreaCheckResult with the first violation found, if any

    Note:
        Nested shells, holes inside other holes and interiors split apart by
        holes touching the shell at fewer than all of their vertices are not
        detected. Use Shapely's ``is_valid`` when the full OGC rules matter.

    Raises:
        UnsupportedGeometryError: If the geometry is not areal
        ConfigurationError: If ``config`` holds invalid settings

    Examples:
        >>> bowtie = Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])
        >>> result = validate_area(bowtie)
        >>> result.is_valid
        False
        >>> result.message
        'Self-intersection at (1, 1)'
    """
    if config is None:
        config = ValidityConfig()
    config.validate()

    graph = BoundaryGraph.from_geometry(geometry)
    context = CheckContext(
        geometry=geometry,
        graph=graph,
        tester=ConsistentAreaTester(graph, stop_at_first_proper=config.stop_at_first_proper),
        config=config,
    )
    return run_checks(build_check_steps(config), context, verbose=verbose)


def is_valid_area(geometry: BaseGeometry, config: Optional[ValidityConfig] = None) -> bool:
    """Return True if ``geometry`` passes :func:`validate_area`.

    This is not full OGC validity: nested shells and interior connectivity
    are not checked, so a shell lying inside another shell still passes.
    """
    return validate_area(geometry, config).is_valid


__all__ = [
    'CheckContext',
    'CheckStep',
    'build_check_steps',
    'run_checks',
    'validate_area',
    'is_valid_area',
]
