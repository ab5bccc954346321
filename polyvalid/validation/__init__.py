"""Area validity checks.

The core is :class:`ConsistentAreaTester`, which decides whether the
boundary of a Polygon or MultiPolygon is node-consistent and free of
duplicate rings. :func:`validate_area` wraps it together with the remaining
ring checks into a single call.
"""

from .result import AreaCheckResult, Violation, format_coordinate
from .consistent_area import ConsistentAreaTester
from .checks import (
    CheckContext,
    build_check_steps,
    run_checks,
    validate_area,
    is_valid_area,
)
from .analysis import explain_area, analyze_area

__all__ = [
    'AreaCheckResult',
    'Violation',
    'format_coordinate',
    'ConsistentAreaTester',
    'CheckContext',
    'build_check_steps',
    'run_checks',
    'validate_area',
    'is_valid_area',
    'explain_area',
    'analyze_area',
]
