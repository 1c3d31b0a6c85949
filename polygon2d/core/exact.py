"""Exact number domain and robust orientation tests.

Predicates run on float coordinates but must never report a wrong sign, so
:func:`orientation` evaluates the determinant in floating point first and
only falls back to rational arithmetic when the result is within the
rounding error bound. Arrangement construction works on :class:`ExactPoint`
values throughout; conversion back to floats happens only through
:func:`to_float_point`.
"""

from fractions import Fraction
import sys
from typing import Sequence, Tuple

ExactPoint = Tuple[Fraction, Fraction]
FloatPoint = Tuple[float, float]

# Relative error bound of the float determinant (Shewchuk, orient2d stage A)
_EPSILON = sys.float_info.epsilon / 2.0
_CCW_ERRBOUND = (3.0 + 16.0 * _EPSILON) * _EPSILON


def to_exact_point(point: Sequence[float]) -> ExactPoint:
    """Convert an (x, y) pair to exact rationals without rounding.

    Every finite float is a dyadic rational, so the conversion is lossless.
    """
    return (Fraction(point[0]), Fraction(point[1]))


def to_float_point(point: ExactPoint) -> FloatPoint:
    """Round an exact point to the nearest float coordinates."""
    return (float(point[0]), float(point[1]))


def _sign(value) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def exact_orientation(p, q, r) -> int:
    """Sign of the cross product (q - p) x (r - p) in rational arithmetic.

    Returns:
        1 if r lies left of the directed line p->q, -1 if right, 0 if the
        three points are collinear.
    """
    px, py = Fraction(p[0]), Fraction(p[1])
    det = (Fraction(q[0]) - px) * (Fraction(r[1]) - py) \
        - (Fraction(q[1]) - py) * (Fraction(r[0]) - px)
    return _sign(det)


def orientation(p: Sequence[float], q: Sequence[float], r: Sequence[float]) -> int:
    """Orientation of the triple (p, q, r) with a filtered float evaluation.

    Args:
        p, q, r: Points as (x, y) float pairs

    Returns:
        1 for a counter-clockwise turn, -1 for clockwise, 0 for collinear.
        The sign is always exact.

    Examples:
        >>> orientation((0, 0), (1, 0), (0, 1))
        1
        >>> orientation((0, 0), (1, 1), (2, 2))
        0
    """
    detleft = (p[0] - r[0]) * (q[1] - r[1])
    detright = (p[1] - r[1]) * (q[0] - r[0])
    det = detleft - detright

    if detleft > 0:
        if detright <= 0:
            return _sign(det)
        detsum = detleft + detright
    elif detleft < 0:
        if detright >= 0:
            return _sign(det)
        detsum = -detleft - detright
    elif detleft == 0 and abs(detright) >= sys.float_info.min:
        return _sign(det)
    else:
        # Zero or subnormal products may have underflowed, and an overflowed
        # difference can produce NaN; let the exact test decide.
        return exact_orientation(p, q, r)

    errbound = _CCW_ERRBOUND * detsum
    if det >= errbound or -det >= errbound:
        return _sign(det)

    return exact_orientation(p, q, r)


def in_box(p, a, b) -> bool:
    """Check if p lies in the axis-aligned box spanned by a and b.

    For a point already known to be collinear with a and b this is the test
    for lying on the closed segment ab.
    """
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def less_xy(a, b) -> bool:
    """Lexicographic comparison, x first then y."""
    return (a[0], a[1]) < (b[0], b[1])


__all__ = [
    'ExactPoint',
    'FloatPoint',
    'to_exact_point',
    'to_float_point',
    'exact_orientation',
    'orientation',
    'in_box',
    'less_xy',
]
