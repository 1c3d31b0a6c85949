"""polygon2d - Robust predicates and repair for 2-D polygons.

This library answers geometric questions about simple and self-intersecting
polygons (simplicity, convexity, point location, winding, signed area) and
repairs self-intersecting polygons through an exact planar arrangement.
"""


# Polygon value
from .core import Polygon2D

# Predicates
from .predicates import (
    is_simple,
    is_convex,
    oriented_side,
    contains_point,
    is_counterclockwise_oriented,
    is_clockwise_oriented,
    signed_area,
)

# Arrangement
from .arrangement import Arrangement, format_ccb

# Repair
from .repair import (
    RepairConfig,
    outer_boundary,
    make_simple,
    make_simple_flat,
)

# Diagnostics
from .analysis import analyze_polygon

# Core types (enums)
from .core import (
    OrientedSide,
    WindingOrder,
)

# Core exceptions
from .core import (
    Polygon2DError,
    InputShapeError,
    DegenerateGeometryError,
    OrientationError,
    MultipleHolesWarning,
)

__all__ = [
    # Polygon value
    'Polygon2D',

    # Predicates
    'is_simple',
    'is_convex',
    'oriented_side',
    'contains_point',
    'is_counterclockwise_oriented',
    'is_clockwise_oriented',
    'signed_area',

    # Arrangement
    'Arrangement',
    'format_ccb',

    # Repair
    'RepairConfig',
    'outer_boundary',
    'make_simple',
    'make_simple_flat',

    # Diagnostics
    'analyze_polygon',

    # Core types (enums)
    'OrientedSide',
    'WindingOrder',

    # Core exceptions
    'Polygon2DError',
    'InputShapeError',
    'DegenerateGeometryError',
    'OrientationError',
    'MultipleHolesWarning',
]
