"""Exceptions and warnings raised by polygon2d."""


class Polygon2DError(Exception):
    """Base class for all polygon2d errors."""
    pass


class InputShapeError(Polygon2DError, ValueError):
    """Raised when coordinate input cannot form a polygon.

    Covers mismatched coordinate sequence lengths, fewer than three points,
    non-finite coordinates and malformed query points.
    """
    pass


class DegenerateGeometryError(Polygon2DError):
    """Raised when the arrangement of a polygon has no usable outer boundary."""
    pass


class OrientationError(Polygon2DError):
    """Raised when a point cannot be classified as inside, outside or boundary.

    This signals an internal defect, never a property of the input.
    """
    pass


class MultipleHolesWarning(UserWarning):
    """Emitted when the unbounded face has more than one hole.

    Only the first hole is used to build the repaired polygon.
    """
    pass


__all__ = [
    'Polygon2DError',
    'InputShapeError',
    'DegenerateGeometryError',
    'OrientationError',
    'MultipleHolesWarning',
]
