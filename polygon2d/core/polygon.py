"""Polygon value built from two parallel coordinate sequences.

A :class:`Polygon2D` is closed implicitly: the last vertex connects back to
the first. Coordinates are stored as given, duplicates included.
Instances are immutable and only live for the duration of a predicate
evaluation or a repair.
"""

from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from .errors import InputShapeError
from .exact import FloatPoint

MIN_VERTICES = 3

# numpy dtype kinds accepted as coordinates (integer or float)
REAL_KINDS = 'iuf'

Segment = Tuple[FloatPoint, FloatPoint]


def _as_coordinate_array(values, name: str) -> np.ndarray:
    try:
        array = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InputShapeError(f"{name} must be a sequence of real numbers: {e}") from e

    # Checked before the cast, which would accept numeric strings
    if array.dtype.kind not in REAL_KINDS:
        raise InputShapeError(f"{name} must hold real numbers, got dtype {array.dtype}")
    array = array.astype(np.float64)

    if array.ndim != 1:
        raise InputShapeError(f"{name} must be one-dimensional, got shape {array.shape}")
    if not np.all(np.isfinite(array)):
        raise InputShapeError(f"{name} contains non-finite values")

    array.setflags(write=False)
    return array


class Polygon2D:
    """Ordered, implicitly closed sequence of 2-D points.

    Args:
        xs: x-coordinates of the vertices, in order
        ys: y-coordinates of the vertices, same length as ``xs``

    Raises:
        InputShapeError: If the sequences differ in length, hold fewer than
            three points, or contain non-finite values

    Examples:
        >>> square = Polygon2D([0, 1, 1, 0], [0, 0, 1, 1])
        >>> len(square)
        4
        >>> square.segments()[-1]
        ((0.0, 1.0), (0.0, 0.0))
    """

    __slots__ = ('_xs', '_ys')

    def __init__(self, xs: Sequence[float], ys: Sequence[float]):
        xs = _as_coordinate_array(xs, 'xs')
        ys = _as_coordinate_array(ys, 'ys')

        if len(xs) != len(ys):
            raise InputShapeError(
                f"Coordinate sequences differ in length: {len(xs)} x-values, {len(ys)} y-values"
            )
        if len(xs) < MIN_VERTICES:
            raise InputShapeError(
                f"A polygon needs at least {MIN_VERTICES} points, got {len(xs)}"
            )

        self._xs = xs
        self._ys = ys

    @classmethod
    def from_coords(cls, xs: Sequence[float], ys: Sequence[float]) -> 'Polygon2D':
        """Build a polygon from parallel x and y sequences."""
        return cls(xs, ys)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> 'Polygon2D':
        """Build a polygon from an iterable of (x, y) pairs."""
        points = list(points)
        if any(len(p) != 2 for p in points):
            raise InputShapeError("Every point must be an (x, y) pair")
        return cls([p[0] for p in points], [p[1] for p in points])

    @classmethod
    def from_flat(cls, values: Sequence[float]) -> 'Polygon2D':
        """Decode the packed layout ``[x0, ..., xM-1, y0, ..., yM-1]``.

        Raises:
            InputShapeError: If ``values`` has odd length
        """
        flat = _as_coordinate_array(values, 'values')
        if len(flat) % 2:
            raise InputShapeError(f"Packed coordinates must have even length, got {len(flat)}")
        half = len(flat) // 2
        return cls(flat[:half], flat[half:])

    @classmethod
    def from_shapely(cls, polygon: Polygon) -> 'Polygon2D':
        """Build a polygon from the exterior ring of a shapely Polygon.

        The ring's closing coordinate is dropped and any Z values ignored.
        Interior rings are not represented.
        """
        if not isinstance(polygon, Polygon):
            raise TypeError(f"Expected Polygon, got {type(polygon).__name__}")
        if polygon.is_empty:
            raise InputShapeError("Cannot build a polygon from an empty geometry")
        coords = np.asarray(polygon.exterior.coords)[:-1]
        return cls(coords[:, 0], coords[:, 1])

    @property
    def xs(self) -> np.ndarray:
        """Read-only array of x-coordinates."""
        return self._xs

    @property
    def ys(self) -> np.ndarray:
        """Read-only array of y-coordinates."""
        return self._ys

    def __len__(self) -> int:
        return len(self._xs)

    def __iter__(self) -> Iterator[FloatPoint]:
        return iter(self.points())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon2D):
            return NotImplemented
        return np.array_equal(self._xs, other._xs) and np.array_equal(self._ys, other._ys)

    def __hash__(self) -> int:
        return hash((self._xs.tobytes(), self._ys.tobytes()))

    def __repr__(self) -> str:
        return f"Polygon2D({self.points()!r})"

    def points(self) -> List[FloatPoint]:
        """Vertices as (x, y) float pairs in input order."""
        return list(zip(self._xs.tolist(), self._ys.tolist()))

    def segments(self) -> List[Segment]:
        """The N boundary segments (p0, p1), ..., (pN-1, p0)."""
        points = self.points()
        return [(points[i], points[(i + 1) % len(points)]) for i in range(len(points))]

    def to_flat(self) -> np.ndarray:
        """Packed coordinates: all x-values followed by all y-values."""
        return np.concatenate([self._xs, self._ys])

    def to_shapely(self) -> Polygon:
        """Convert to a shapely Polygon (may be invalid for self-intersecting input)."""
        return Polygon(self.points())

    def reversed(self) -> 'Polygon2D':
        """Same vertices in reverse order, flipping the winding."""
        return Polygon2D(self._xs[::-1], self._ys[::-1])

    def perimeter(self) -> float:
        """Sum of all edge lengths, including the closing edge."""
        dx = np.roll(self._xs, -1) - self._xs
        dy = np.roll(self._ys, -1) - self._ys
        return float(np.sum(np.hypot(dx, dy)))

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Axis-aligned bounds as ``(xmin, ymin, xmax, ymax)``."""
        return (
            float(self._xs.min()),
            float(self._ys.min()),
            float(self._xs.max()),
            float(self._ys.max()),
        )


__all__ = [
    'MIN_VERTICES',
    'Polygon2D',
    'Segment',
]
