"""Flat call boundary over parallel coordinate arrays.

Each function builds a transient :class:`Polygon2D` from ``xs`` and ``ys``,
evaluates one operation and returns a plain value: ``bool``, ``int`` in
{-1, 0, 1}, ``float``, or a packed ``numpy`` array ``[x..., y...]``.
Invalid input raises :class:`InputShapeError`.

Examples:
    >>> from polygon2d import api
    >>> api.signed_area([0, 1, 1, 0], [0, 0, 1, 1])
    1.0
    >>> api.orientation([0, 1, 1, 0], [0, 0, 1, 1], [2, 2])
    -1
"""

from typing import Sequence

import numpy as np

from . import predicates
from .core.errors import OrientationError
from .core.polygon import Polygon2D
from .core.types import OrientedSide
from .repair import RepairConfig, make_simple_flat

_SIDE_CODES = {
    OrientedSide.OUTSIDE: -1,
    OrientedSide.BOUNDARY: 0,
    OrientedSide.INSIDE: 1,
}


def is_simple(xs: Sequence[float], ys: Sequence[float]) -> bool:
    """Check if the polygon's edges meet only at shared vertices of adjacent edges.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        True if the polygon is simple
    """
    return predicates.is_simple(Polygon2D(xs, ys))


def is_convex(xs: Sequence[float], ys: Sequence[float]) -> bool:
    """Check if the polygon turns in one direction only, collinear vertices allowed.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        True if the polygon is convex
    """
    return predicates.is_convex(Polygon2D(xs, ys))


def orientation(xs: Sequence[float], ys: Sequence[float], point: Sequence[float]) -> int:
    """Side of the polygon boundary ``point`` lies on.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices
        point: Query point as an (x, y) pair

    Returns:
        -1 outside, 0 on the boundary, 1 inside

    Raises:
        InputShapeError: If the polygon or the point is malformed
        OrientationError: If the point could not be classified
    """
    side = predicates.oriented_side(Polygon2D(xs, ys), point)
    try:
        return _SIDE_CODES[side]
    except KeyError:
        raise OrientationError(f"Unknown orientation: {side!r}") from None


def is_counterclockwise_oriented(xs: Sequence[float], ys: Sequence[float]) -> bool:
    """Check if the signed area is positive.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        True for counter-clockwise winding, False for clockwise or zero area
    """
    return predicates.is_counterclockwise_oriented(Polygon2D(xs, ys))


def is_clockwise_oriented(xs: Sequence[float], ys: Sequence[float]) -> bool:
    """Check if the signed area is negative.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        True for clockwise winding, False for counter-clockwise or zero area
    """
    return predicates.is_clockwise_oriented(Polygon2D(xs, ys))


def signed_area(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Shoelace area of the polygon, sign preserved.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        Positive for counter-clockwise, negative for clockwise, zero for
        degenerate polygons
    """
    return predicates.signed_area(Polygon2D(xs, ys))


def make_poly_simple(xs: Sequence[float], ys: Sequence[float]) -> np.ndarray:
    """Outer simple boundary as packed coordinates.

    Uses the default :class:`RepairConfig`.

    Args:
        xs: x-coordinates of the vertices
        ys: y-coordinates of the vertices

    Returns:
        Array ``[x0, ..., xM-1, y0, ..., yM-1]`` of length 2M

    Raises:
        InputShapeError: If the coordinate sequences are malformed
        DegenerateGeometryError: If the polygon does not enclose a region
    """
    return make_simple_flat(xs, ys, RepairConfig())


__all__ = [
    'is_simple',
    'is_convex',
    'orientation',
    'is_counterclockwise_oriented',
    'is_clockwise_oriented',
    'signed_area',
    'make_poly_simple',
]
