"""Robust orientation predicate.

The determinant is evaluated in floating point first. When its magnitude is
below the rounding error bound the sign is recomputed exactly with rational
arithmetic, so collinearity is never misreported.
"""

from fractions import Fraction

from ..core.types import Coordinate, Orientation

# Error bound coefficient for the 2x2 determinant filter (Shewchuk, ccwerrboundA)
_ERROR_BOUND = 3.3306690738754716e-16


def _exact_sign(p: Coordinate, q: Coordinate, r: Coordinate) -> int:
    px, py = Fraction(p[0]), Fraction(p[1])
    det = (
        (Fraction(q[0]) - px) * (Fraction(r[1]) - py)
        - (Fraction(q[1]) - py) * (Fraction(r[0]) - px)
    )
    if det > 0:
        return 1
    if det < 0:
        return -1
    return 0


def orientation_index(p: Coordinate, q: Coordinate, r: Coordinate) -> int:
    """Return the orientation of point ``r`` relative to the directed line p→q.

    Args:
        p: Start of the directed line
        q: End of the directed line
        r: Point to classify

    Returns:
        1 if r lies to the left (counter-clockwise turn), -1 if it lies to
        the right (clockwise turn), 0 if the three points are collinear

    Examples:
        >>> orientation_index((0, 0), (1, 0), (0, 1))
        1
        >>> orientation_index((0, 0), (1, 0), (2, 0))
        0
    """
    detleft = (q[0] - p[0]) * (r[1] - p[1])
    detright = (q[1] - p[1]) * (r[0] - p[0])
    det = detleft - detright

    bound = _ERROR_BOUND * (abs(detleft) + abs(detright))
    if det > bound:
        return Orientation.COUNTERCLOCKWISE.value
    if det < -bound:
        return Orientation.CLOCKWISE.value
    if detleft == 0.0 and detright == 0.0:
        return Orientation.COLLINEAR.value

    return _exact_sign(p, q, r)


__all__ = ['orientation_index']
