"""Type definitions for polygon2d operations.

This module defines the enums used for predicate results and repair options.
"""

from enum import Enum, IntEnum


class OrientedSide(IntEnum):
    """Side of a polygon boundary a query point lies on.

    The integer values are the tri-state encoding returned across the flat
    call boundary.

    Attributes:
        OUTSIDE: Point lies in the unbounded region
        BOUNDARY: Point lies exactly on an edge or vertex
        INSIDE: Point lies in the bounded region

    Examples:
        >>> from polygon2d import Polygon2D, oriented_side, OrientedSide
        >>> square = Polygon2D([0, 1, 1, 0], [0, 0, 1, 1])
        >>> oriented_side(square, (0.5, 0.5)) is OrientedSide.INSIDE
        True
        >>> int(oriented_side(square, (2, 2)))
        -1
    """
    OUTSIDE = -1
    BOUNDARY = 0
    INSIDE = 1


class WindingOrder(Enum):
    """Vertex order of the polygon returned by :func:`make_simple`.

    Attributes:
        PRESERVE: Keep the input's winding (clockwise only if the input's
            signed area is negative, default)
        COUNTERCLOCKWISE: Always counter-clockwise
        CLOCKWISE: Always clockwise, the order of the boundary walk

    Examples:
        >>> from polygon2d import Polygon2D, make_simple, RepairConfig, WindingOrder
        >>> bowtie = Polygon2D([0, 1, 1, 0], [0, 1, 0, 1])
        >>> config = RepairConfig(winding=WindingOrder.COUNTERCLOCKWISE)
        >>> result = make_simple(bowtie, config)
    """
    PRESERVE = 'preserve'
    COUNTERCLOCKWISE = 'counterclockwise'
    CLOCKWISE = 'clockwise'


__all__ = [
    'OrientedSide',
    'WindingOrder',
]
