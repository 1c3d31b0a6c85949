"""Geometric predicates over a single polygon.

All functions here are read-only queries on a :class:`Polygon2D`. Orientation
tests run on the float coordinates with an exact fallback, so a reported
sign is never wrong, but no tolerance is applied: a query point counts as on
the boundary only if it lies exactly on an edge.
"""

from typing import List, Sequence

import numpy as np

from .core.errors import InputShapeError
from .core.exact import FloatPoint, in_box, less_xy, orientation
from .core.polygon import REAL_KINDS, Polygon2D
from .core.types import OrientedSide


def signed_area(polygon: Polygon2D) -> float:
    """Signed area by the shoelace formula.

    Args:
        polygon: Input polygon

    Returns:
        Half the sum of ``x_i * y_{i+1} - x_{i+1} * y_i`` over all edges.
        Positive for counter-clockwise winding, negative for clockwise,
        zero for degenerate (collinear or self-cancelling) polygons.

    Examples:
        >>> square = Polygon2D([0, 1, 1, 0], [0, 0, 1, 1])
        >>> signed_area(square)
        1.0
        >>> signed_area(square.reversed())
        -1.0
    """
    xs, ys = polygon.xs, polygon.ys
    cross = xs * np.roll(ys, -1) - np.roll(xs, -1) * ys
    return float(np.sum(cross)) / 2.0


def is_counterclockwise_oriented(polygon: Polygon2D) -> bool:
    """Check if the signed area is positive."""
    return signed_area(polygon) > 0


def is_clockwise_oriented(polygon: Polygon2D) -> bool:
    """Check if the signed area is negative."""
    return signed_area(polygon) < 0


def _segments_intersect(a, b, c, d) -> bool:
    """Check if closed segments ab and cd share at least one point."""
    o1 = orientation(a, b, c)
    o2 = orientation(a, b, d)
    o3 = orientation(c, d, a)
    o4 = orientation(c, d, b)

    if o1 * o2 < 0 and o3 * o4 < 0:
        return True

    # Touching or collinear configurations
    if o1 == 0 and in_box(c, a, b):
        return True
    if o2 == 0 and in_box(d, a, b):
        return True
    if o3 == 0 and in_box(a, c, d):
        return True
    if o4 == 0 and in_box(b, c, d):
        return True

    return False


def _adjacent_edges_overlap(a, shared, b) -> bool:
    """Check if edges a->shared and shared->b overlap beyond their common vertex."""
    if orientation(a, shared, b) != 0:
        return False
    # Collinear: overlap iff the path folds back on itself
    return in_box(b, a, shared) or in_box(a, shared, b)


def is_simple(polygon: Polygon2D) -> bool:
    """Check if no two edges cross, touch or overlap.

    Adjacent edges may only meet at their shared vertex. Repeated vertices
    and zero-length edges make a polygon non-simple. The test compares all
    edge pairs, which is quadratic in the number of vertices.

    Args:
        polygon: Input polygon

    Returns:
        True if the polygon is simple

    Examples:
        >>> is_simple(Polygon2D([0, 1, 1, 0], [0, 0, 1, 1]))
        True
        >>> bowtie = Polygon2D([0, 1, 1, 0], [0, 1, 0, 1])
        >>> is_simple(bowtie)
        False
    """
    points = polygon.points()
    n = len(points)

    for i in range(n):
        if points[i] == points[(i + 1) % n]:
            return False

    for i in range(n):
        a, b = points[i], points[(i + 1) % n]
        for j in range(i + 1, n):
            c, d = points[j], points[(j + 1) % n]

            if j == i + 1:
                if _adjacent_edges_overlap(a, b, d):
                    return False
            elif i == 0 and j == n - 1:
                if _adjacent_edges_overlap(c, a, b):
                    return False
            elif _segments_intersect(a, b, c, d):
                return False

    return True


def _drop_repeated_neighbours(points: List[FloatPoint]) -> List[FloatPoint]:
    result = []
    for point in points:
        if not result or point != result[-1]:
            result.append(point)
    while len(result) > 1 and result[0] == result[-1]:
        result.pop()
    return result


def is_convex(polygon: Polygon2D) -> bool:
    """Check if the polygon turns in one direction only.

    Zero-length edges are ignored and collinear vertices are compatible with
    either turning direction. Besides consistent turns, the lexicographic
    direction of travel may reverse at most twice, which rejects loops that
    wind around more than once. Simplicity is not re-verified.

    Args:
        polygon: Input polygon, meaningful only when simple

    Returns:
        True if the polygon is convex

    Examples:
        >>> is_convex(Polygon2D([0, 1, 1, 0], [0, 0, 1, 1]))
        True
        >>> is_convex(Polygon2D([0, 2, 1, 2, 0], [0, 0, 1, 2, 2]))
        False
    """
    points = _drop_repeated_neighbours(polygon.points())
    n = len(points)
    if n < 3:
        return True

    has_left_turn = False
    has_right_turn = False
    for i in range(n):
        turn = orientation(points[i - 1], points[i], points[(i + 1) % n])
        if turn > 0:
            has_left_turn = True
        elif turn < 0:
            has_right_turn = True
        if has_left_turn and has_right_turn:
            return False

    increasing = [less_xy(points[i], points[(i + 1) % n]) for i in range(n)]
    direction_changes = sum(
        1 for i in range(n) if increasing[i] != increasing[i - 1]
    )
    return direction_changes <= 2


def _as_query_point(point: Sequence[float]) -> FloatPoint:
    try:
        array = np.asarray(point)
    except (TypeError, ValueError) as e:
        raise InputShapeError(f"Query point must be an (x, y) pair: {e}") from e
    if array.shape != (2,) or array.dtype.kind not in REAL_KINDS:
        raise InputShapeError(
            f"Query point must be an (x, y) pair of real numbers, got {point!r}"
        )

    x, y = float(array[0]), float(array[1])
    if not (np.isfinite(x) and np.isfinite(y)):
        raise InputShapeError(f"Query point must be finite, got ({x}, {y})")
    return (x, y)


def oriented_side(polygon: Polygon2D, point: Sequence[float]) -> OrientedSide:
    """Classify a point as inside, outside or on the polygon boundary.

    The result does not depend on the polygon's winding. The interior is
    defined by the even-odd rule, which agrees with the usual notion for
    simple polygons.

    Args:
        polygon: Input polygon
        point: Query point as an (x, y) pair

    Returns:
        OrientedSide.INSIDE, OrientedSide.BOUNDARY or OrientedSide.OUTSIDE

    Raises:
        InputShapeError: If ``point`` is not a finite (x, y) pair

    Examples:
        >>> square = Polygon2D([0, 1, 1, 0], [0, 0, 1, 1])
        >>> oriented_side(square, (0.5, 0.5))
        <OrientedSide.INSIDE: 1>
        >>> oriented_side(square, (0.5, 0))
        <OrientedSide.BOUNDARY: 0>
    """
    p = _as_query_point(point)
    inside = False

    for a, b in polygon.segments():
        turn = orientation(a, b, p)
        if turn == 0 and in_box(p, a, b):
            return OrientedSide.BOUNDARY

        # Count crossings of the horizontal ray from p towards +x
        if (a[1] > p[1]) != (b[1] > p[1]):
            if (b[1] > a[1] and turn > 0) or (b[1] < a[1] and turn < 0):
                inside = not inside

    return OrientedSide.INSIDE if inside else OrientedSide.OUTSIDE


def contains_point(polygon: Polygon2D, point: Sequence[float]) -> bool:
    """Check if a point lies strictly inside the polygon.

    The boundary does not belong to the interior.
    """
    return oriented_side(polygon, point) is OrientedSide.INSIDE


__all__ = [
    'signed_area',
    'is_counterclockwise_oriented',
    'is_clockwise_oriented',
    'is_simple',
    'is_convex',
    'oriented_side',
    'contains_point',
]
