"""Core types and utilities for polygon2d.

This module provides the polygon value type, enums, exceptions and the exact
number domain used throughout the library.
"""

from .types import (
    OrientedSide,
    WindingOrder,
)

from .errors import (
    Polygon2DError,
    InputShapeError,
    DegenerateGeometryError,
    OrientationError,
    MultipleHolesWarning,
)

from .polygon import Polygon2D

__all__ = [
    # Enums
    'OrientedSide',
    'WindingOrder',

    # Exceptions
    'Polygon2DError',
    'InputShapeError',
    'DegenerateGeometryError',
    'OrientationError',
    'MultipleHolesWarning',

    # Polygon value
    'Polygon2D',
]
