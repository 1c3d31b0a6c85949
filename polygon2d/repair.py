"""Repair of self-intersecting polygons through an exact arrangement.

The polygon's edges are inserted into an :class:`Arrangement` as arbitrary,
possibly crossing segments. The first hole of the arrangement's unbounded
face is the outer boundary of all material the polygon covers, and walking
it once gives the vertices of the repaired polygon. Dangling edges are then
dropped from the walk and points it visits more than once are pulled apart,
which makes the result simple.

Limitation: when the unbounded face has more than one hole only the first is
used and a :class:`MultipleHolesWarning` is emitted.
"""

from dataclasses import dataclass
import logging
from typing import List, Optional, Sequence
import warnings

import numpy as np

from .arrangement import Arrangement, format_ccb
from .core.errors import DegenerateGeometryError, MultipleHolesWarning
from .core.exact import ExactPoint, FloatPoint, exact_orientation, to_exact_point, to_float_point
from .core.polygon import MIN_VERTICES, Polygon2D
from .core.types import WindingOrder
from .predicates import is_simple, signed_area

logger = logging.getLogger(__name__)


@dataclass
class RepairConfig:
    """Post-processing options for :func:`make_simple`.

    Attributes:
        winding: Vertex order of the result (default: keep the input's)
        anchor_start: Start the result at the input's first vertex when it
            is on the outer boundary, otherwise at the lexicographically
            smallest vertex. Without it the result starts wherever the
            boundary walk starts.
        resolve_repeated_points: Drop dangling edges from the boundary walk
            and separate points it visits more than once (pinch vertices),
            so that the result is simple. When false the raw walk is
            returned, repeated points included.
        warn_on_multiple_holes: Warn when the unbounded face has more than
            one hole
    """

    winding: WindingOrder = WindingOrder.PRESERVE
    anchor_start: bool = True
    resolve_repeated_points: bool = True
    warn_on_multiple_holes: bool = True


# Pinch offsets are tried as shortest_edge / 2**k for k in this range
_FIRST_OFFSET_EXPONENT = 10
_LAST_OFFSET_EXPONENT = 60


def _remove_spikes(points: List[ExactPoint]) -> List[ExactPoint]:
    """Drop dangling edges, which the boundary walk traverses as ``a, b, a``."""
    points = list(points)
    while len(points) > 2:
        n = len(points)
        for i in range(n):
            if points[i - 1] == points[(i + 1) % n]:
                drop = (i, (i + 1) % n)
                points = [p for k, p in enumerate(points) if k not in drop]
                break
        else:
            break
    return points


def _unit_l1(vx, vy):
    norm = abs(vx) + abs(vy)
    return vx / norm, vy / norm


def _exterior_direction(prev: ExactPoint, point: ExactPoint, nxt: ExactPoint):
    """Direction from ``point`` strictly into the wedge left of prev -> point -> nxt.

    The boundary walk keeps the unbounded face on its left, so this wedge
    holds no material near ``point``.
    """
    ax, ay = _unit_l1(prev[0] - point[0], prev[1] - point[1])
    cx, cy = _unit_l1(nxt[0] - point[0], nxt[1] - point[1])
    turn = exact_orientation(prev, point, nxt)
    if turn > 0:
        return ax + cx, ay + cy
    if turn < 0:
        return -(ax + cx), -(ay + cy)
    # Straight on: the left normal of the outgoing edge
    return -cy, cx


def _separate_repeated_points(points: List[ExactPoint]) -> List[FloatPoint]:
    """Push every visit of a repeated point but the last into its exterior wedge.

    The pushed copies move a small distance into the unbounded face, so the
    result still covers all material. The offset is halved until the float
    result is simple and every pushed copy lies strictly left of both
    edges at that visit.

    Raises:
        DegenerateGeometryError: If no offset separates the points in
            float precision
    """
    n = len(points)
    last = {p: i for i, p in enumerate(points)}
    moved = [i for i, p in enumerate(points) if last[p] != i]
    result = [to_float_point(p) for p in points]
    if not moved:
        return result

    directions = {
        i: _exterior_direction(points[i - 1], points[i], points[(i + 1) % n])
        for i in moved
    }
    shortest = min(
        max(abs(q[0] - p[0]), abs(q[1] - p[1]))
        for p, q in zip(points, points[1:] + points[:1])
    )

    for k in range(_FIRST_OFFSET_EXPONENT, _LAST_OFFSET_EXPONENT):
        offset = shortest / 2 ** k
        candidate = list(result)
        for i, (dx, dy) in directions.items():
            x, y = points[i]
            candidate[i] = to_float_point((x + offset * dx, y + offset * dy))

        outward = all(
            exact_orientation(points[i - 1], points[i], to_exact_point(candidate[i])) > 0
            and exact_orientation(points[i], points[(i + 1) % n], to_exact_point(candidate[i])) > 0
            for i in moved
        )
        if outward and is_simple(Polygon2D.from_points(candidate)):
            logger.debug("Separated %d repeated points with offset %g", len(moved), float(offset))
            return candidate

    raise DegenerateGeometryError(
        f"Could not separate {len(moved)} repeated boundary points in float precision"
    )


def _apply_winding(
    points: List[FloatPoint],
    input_area: float,
    winding: WindingOrder
) -> List[FloatPoint]:
    # The boundary walk keeps the unbounded face on its left, i.e. it runs clockwise
    if winding == WindingOrder.CLOCKWISE:
        return points
    if winding == WindingOrder.COUNTERCLOCKWISE:
        return points[::-1]
    if winding == WindingOrder.PRESERVE:
        return points if input_area < 0 else points[::-1]
    raise ValueError(f"Unknown winding: {winding}")


def _anchor(points: List[FloatPoint], start: FloatPoint) -> List[FloatPoint]:
    if start in points:
        index = points.index(start)
    else:
        index = min(range(len(points)), key=lambda i: points[i])
    return points[index:] + points[:index]


def _boundary_walk(
    polygon: Polygon2D,
    warn_on_multiple_holes: bool,
    stacklevel: int
) -> List[ExactPoint]:
    arrangement = Arrangement.from_polygon(polygon)
    face = arrangement.unbounded_face()

    if not face.holes:
        raise DegenerateGeometryError(
            "Arrangement has no hole in its unbounded face, the polygon does not enclose a region"
        )
    if len(face.holes) > 1 and warn_on_multiple_holes:
        warnings.warn(
            f"Unbounded face has {len(face.holes)} holes, using only the first",
            MultipleHolesWarning,
            stacklevel=stacklevel,
        )

    hole = face.holes[0]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Outer boundary:\n%s", format_ccb(hole))

    limit = len(arrangement.halfedges)
    return [h.target.point for h in hole.ccb(limit=limit)]


def outer_boundary(polygon: Polygon2D, warn_on_multiple_holes: bool = True) -> List[FloatPoint]:
    """Raw walk of the first hole of the unbounded face.

    Collects the target vertex of every halfedge once around the cycle, in
    clockwise order, converted to floats.

    Raises:
        DegenerateGeometryError: If the unbounded face has no hole or the
            walk does not close
    """
    points = _boundary_walk(polygon, warn_on_multiple_holes, stacklevel=3)
    return [to_float_point(p) for p in points]


def _make_simple(polygon: Polygon2D, config: Optional[RepairConfig], stacklevel: int) -> Polygon2D:
    if config is None:
        config = RepairConfig()

    points = _boundary_walk(polygon, config.warn_on_multiple_holes, stacklevel + 1)
    if config.resolve_repeated_points:
        points = _remove_spikes(points)

    if len(points) < MIN_VERTICES:
        raise DegenerateGeometryError(
            f"Outer boundary has only {len(points)} points, the polygon is degenerate"
        )

    if config.resolve_repeated_points:
        result = _separate_repeated_points(points)
    else:
        result = [to_float_point(p) for p in points]

    result = _apply_winding(result, signed_area(polygon), config.winding)
    if config.anchor_start:
        result = _anchor(result, polygon.points()[0])

    logger.debug("Repaired polygon of %d points into %d points", len(polygon), len(result))
    return Polygon2D.from_points(result)


def make_simple(polygon: Polygon2D, config: Optional[RepairConfig] = None) -> Polygon2D:
    """Replace a possibly self-intersecting polygon by its outer simple boundary.

    Self-intersection loops and inner detail are discarded. Dangling edges
    are dropped, and where the outer boundary touches itself at a point
    (two lobes meeting at a vertex) all but the last visit of that point
    are pushed a small distance outwards. The result is simple and covers
    all material of the input. A simple polygon comes back unchanged apart
    from an explicit closing duplicate, which the arrangement absorbs;
    applying the repair twice gives the same result as applying it once.

    Args:
        polygon: Input polygon
        config: Post-processing options (default: RepairConfig())

    Returns:
        New polygon tracing the outer boundary of the input

    Raises:
        DegenerateGeometryError: If the input does not enclose a region or
            its outer boundary has fewer than three distinct points

    Examples:
        >>> bowtie = Polygon2D([0, 1, 1, 0], [0, 1, 0, 1])
        >>> make_simple(bowtie).points()
        [(0.0, 0.0), (0.5, 0.5), (1.0, 0.0), (1.0, 1.0), (0.5, 0.50048828125), (0.0, 1.0)]
    """
    return _make_simple(polygon, config, stacklevel=3)


def make_simple_flat(
    xs: Sequence[float],
    ys: Sequence[float],
    config: Optional[RepairConfig] = None
) -> np.ndarray:
    """Repair a polygon given as coordinate sequences.

    Returns:
        Packed coordinates ``[x0, ..., xM-1, y0, ..., yM-1]`` of the result
    """
    return _make_simple(Polygon2D(xs, ys), config, stacklevel=3).to_flat()


__all__ = [
    'RepairConfig',
    'outer_boundary',
    'make_simple',
    'make_simple_flat',
]
