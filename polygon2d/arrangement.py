"""Planar arrangement of line segments with exact arithmetic.

The arrangement subdivides the plane into vertices, edges and faces induced
by a set of possibly crossing segments. It is stored as a doubly connected
edge list: every edge is a pair of twin halfedges, each face lies to the left
of the halfedges bounding it, and each connected component of a face
boundary (CCB) is a cycle of ``next`` pointers.

Algorithm:
1. Compute all pairwise intersections exactly (proper crossings, touching
   endpoints and collinear overlaps) and split every segment at them.
2. Merge overlapping pieces into single edges.
3. Sort the outgoing halfedges of each vertex counter-clockwise by exact
   angle and link ``next`` to the clockwise neighbour of the twin.
4. Trace the cycles. Positive cycles are outer boundaries of bounded faces;
   the single non-positive cycle of each connected component is a hole of
   the smallest face enclosing it, or of the unbounded face.
"""

from fractions import Fraction
from functools import cmp_to_key
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .core.errors import DegenerateGeometryError
from .core.exact import ExactPoint, exact_orientation, in_box, to_exact_point
from .core.polygon import Polygon2D

logger = logging.getLogger(__name__)


class Vertex:
    """Arrangement vertex at an exact point."""

    __slots__ = ('point', 'outgoing')

    def __init__(self, point: ExactPoint):
        self.point = point
        self.outgoing: List['Halfedge'] = []

    def __repr__(self) -> str:
        return f"Vertex({float(self.point[0])}, {float(self.point[1])})"


class Halfedge:
    """Directed edge from ``origin`` to ``twin.origin``."""

    __slots__ = ('origin', 'twin', 'next', 'prev', 'face', 'index')

    def __init__(self, origin: Vertex, index: int):
        self.origin = origin
        self.index = index
        self.twin: Optional['Halfedge'] = None
        self.next: Optional['Halfedge'] = None
        self.prev: Optional['Halfedge'] = None
        self.face: Optional['Face'] = None

    @property
    def source(self) -> Vertex:
        return self.origin

    @property
    def target(self) -> Vertex:
        return self.twin.origin

    def direction(self) -> Tuple[Fraction, Fraction]:
        s, t = self.origin.point, self.target.point
        return (t[0] - s[0], t[1] - s[1])

    def ccb(self, limit: Optional[int] = None) -> Iterator['Halfedge']:
        """Circulate the boundary cycle starting at this halfedge.

        Yields this halfedge first and stops when the walk is back at it.

        Raises:
            DegenerateGeometryError: If the walk does not return within
                ``limit`` steps
        """
        current = self
        steps = 0
        while True:
            yield current
            steps += 1
            current = current.next
            if current is self:
                return
            if current is None or (limit is not None and steps >= limit):
                raise DegenerateGeometryError("Boundary walk did not close")

    def __repr__(self) -> str:
        return f"Halfedge({self.origin!r} -> {self.target!r})"


class Face:
    """Arrangement face with its outer boundary and hole boundaries."""

    __slots__ = ('outer_ccb', 'holes', 'is_unbounded', 'area')

    def __init__(self, outer_ccb: Optional[Halfedge] = None, area: Optional[Fraction] = None):
        self.outer_ccb = outer_ccb
        self.holes: List[Halfedge] = []
        self.is_unbounded = outer_ccb is None
        self.area = area

    def __repr__(self) -> str:
        if self.is_unbounded:
            return f"Face(unbounded, holes={len(self.holes)})"
        return f"Face(area={float(self.area)}, holes={len(self.holes)})"


def _split_points(a: ExactPoint, b: ExactPoint, c: ExactPoint, d: ExactPoint) -> List[ExactPoint]:
    """Exact points shared by closed segments ab and cd."""
    o1 = exact_orientation(a, b, c)
    o2 = exact_orientation(a, b, d)

    if o1 == 0 and o2 == 0:
        # Collinear: the shared part is bounded by endpoints of either segment
        shared = [p for p in (c, d) if in_box(p, a, b)]
        shared += [p for p in (a, b) if in_box(p, c, d)]
        return shared

    o3 = exact_orientation(c, d, a)
    o4 = exact_orientation(c, d, b)
    if o1 * o2 > 0 or o3 * o4 > 0:
        return []

    if o1 == 0:
        return [c]
    if o2 == 0:
        return [d]
    if o3 == 0:
        return [a]
    if o4 == 0:
        return [b]

    # Proper crossing
    rx, ry = b[0] - a[0], b[1] - a[1]
    sx, sy = d[0] - c[0], d[1] - c[1]
    t = ((c[0] - a[0]) * sy - (c[1] - a[1]) * sx) / (rx * sy - ry * sx)
    return [(a[0] + t * rx, a[1] + t * ry)]


def _half_plane(direction) -> int:
    dx, dy = direction
    return 0 if dy > 0 or (dy == 0 and dx > 0) else 1


def _compare_angle(h1: Halfedge, h2: Halfedge) -> int:
    """Counter-clockwise order of directions starting from the +x axis."""
    u, w = h1.direction(), h2.direction()
    hu, hw = _half_plane(u), _half_plane(w)
    if hu != hw:
        return hu - hw
    cross = u[0] * w[1] - u[1] * w[0]
    if cross > 0:
        return -1
    if cross < 0:
        return 1
    return 0


def _cycle_area2(start: Halfedge) -> Fraction:
    """Twice the exact signed area enclosed by a boundary cycle."""
    total = Fraction(0)
    for h in start.ccb():
        (x0, y0), (x1, y1) = h.origin.point, h.target.point
        total += x0 * y1 - x1 * y0
    return total


def _strictly_inside(point: ExactPoint, start: Halfedge) -> bool:
    """Even-odd test of a point not lying on the cycle."""
    inside = False
    px, py = point
    for h in start.ccb():
        a, b = h.origin.point, h.target.point
        if (a[1] > py) != (b[1] > py):
            turn = exact_orientation(a, b, point)
            if (b[1] > a[1] and turn > 0) or (b[1] < a[1] and turn < 0):
                inside = not inside
    return inside


class Arrangement:
    """Planar subdivision induced by a set of segments.

    Built once from all segments and not modified afterwards.

    Args:
        segments: Iterable of ``(p, q)`` point pairs, float or exact.
            Zero-length segments are ignored.

    Examples:
        >>> bowtie = [((0, 0), (1, 1)), ((1, 1), (1, 0)), ((1, 0), (0, 1)), ((0, 1), (0, 0))]
        >>> arr = Arrangement(bowtie)
        >>> arr.number_of_vertices(), arr.number_of_edges(), arr.number_of_faces()
        (5, 6, 3)
    """

    def __init__(self, segments: Iterable[Tuple[Sequence, Sequence]]):
        exact_segments = []
        for p, q in segments:
            p, q = to_exact_point(p), to_exact_point(q)
            if p != q:
                exact_segments.append((p, q))

        self.vertices: List[Vertex] = []
        self.halfedges: List[Halfedge] = []
        self.faces: List[Face] = []
        self._vertex_index: Dict[ExactPoint, Vertex] = {}
        self._unbounded = Face()

        self._build_edges(exact_segments)
        self._link_halfedges()
        self._build_faces()

        logger.debug(
            "Arrangement of %d segments: %d vertices, %d edges, %d faces",
            len(exact_segments), self.number_of_vertices(),
            self.number_of_edges(), self.number_of_faces(),
        )

    @classmethod
    def from_polygon(cls, polygon: Polygon2D) -> 'Arrangement':
        """Arrangement of the N boundary segments of a polygon."""
        return cls(polygon.segments())

    def unbounded_face(self) -> Face:
        return self._unbounded

    def number_of_vertices(self) -> int:
        return len(self.vertices)

    def number_of_edges(self) -> int:
        return len(self.halfedges) // 2

    def number_of_faces(self) -> int:
        return len(self.faces)

    def _vertex(self, point: ExactPoint) -> Vertex:
        vertex = self._vertex_index.get(point)
        if vertex is None:
            vertex = Vertex(point)
            self._vertex_index[point] = vertex
            self.vertices.append(vertex)
        return vertex

    def _build_edges(self, segments: List[Tuple[ExactPoint, ExactPoint]]) -> None:
        cuts: List[List[ExactPoint]] = [[p, q] for p, q in segments]
        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                shared = _split_points(*segments[i], *segments[j])
                cuts[i].extend(shared)
                cuts[j].extend(shared)

        seen = set()
        for (p, q), points in zip(segments, cuts):
            # Points on a segment sort along it lexicographically
            ordered = sorted(set(points), reverse=q < p)
            for s, t in zip(ordered, ordered[1:]):
                key = (s, t) if s < t else (t, s)
                if key in seen:
                    continue
                seen.add(key)
                self._add_edge(self._vertex(s), self._vertex(t))

    def _add_edge(self, u: Vertex, v: Vertex) -> None:
        h = Halfedge(u, len(self.halfedges))
        twin = Halfedge(v, len(self.halfedges) + 1)
        h.twin, twin.twin = twin, h
        u.outgoing.append(h)
        v.outgoing.append(twin)
        self.halfedges.extend((h, twin))

    def _link_halfedges(self) -> None:
        for vertex in self.vertices:
            vertex.outgoing.sort(key=cmp_to_key(_compare_angle))

        for vertex in self.vertices:
            around = vertex.outgoing
            for i, out in enumerate(around):
                # The halfedge entering along `out` turns to the clockwise
                # neighbour of `out`, keeping its face on the left.
                incoming = out.twin
                incoming.next = around[i - 1]
                around[i - 1].prev = incoming

    def _build_faces(self) -> None:
        component = self._label_components()

        cycles: List[Tuple[Halfedge, Fraction]] = []
        visited = set()
        for h in self.halfedges:
            if h.index in visited:
                continue
            visited.update(e.index for e in h.ccb(limit=len(self.halfedges)))
            cycles.append((h, _cycle_area2(h)))

        self.faces.append(self._unbounded)
        outer_boundaries: List[Halfedge] = []
        for start, area2 in cycles:
            if area2 > 0:
                face = Face(start, area2 / 2)
                self._assign(start, face)
                self.faces.append(face)
            else:
                outer_boundaries.append(start)

        # Components in insertion order of their first edge
        first_edge: Dict[int, int] = {}
        for h in self.halfedges:
            first_edge.setdefault(component[id(h.origin)], h.index)
        outer_boundaries.sort(key=lambda h: first_edge[component[id(h.origin)]])
        for start in outer_boundaries:
            face = self._enclosing_face(start, component)
            self._assign(start, face)
            face.holes.append(start)

    def _label_components(self) -> Dict[int, int]:
        labels: Dict[int, int] = {}
        label = -1
        for seed in self.vertices:
            if id(seed) in labels:
                continue
            label += 1
            labels[id(seed)] = label
            stack = [seed]
            while stack:
                vertex = stack.pop()
                for h in vertex.outgoing:
                    neighbour = h.target
                    if id(neighbour) not in labels:
                        labels[id(neighbour)] = label
                        stack.append(neighbour)
        return labels

    def _enclosing_face(self, boundary: Halfedge, component: Dict[int, int]) -> Face:
        """Smallest bounded face of another component containing ``boundary``."""
        own = component[id(boundary.origin)]
        point = boundary.origin.point
        best = self._unbounded
        for face in self.faces:
            if face.is_unbounded or component[id(face.outer_ccb.origin)] == own:
                continue
            if best is not self._unbounded and face.area >= best.area:
                continue
            if _strictly_inside(point, face.outer_ccb):
                best = face
        return best

    @staticmethod
    def _assign(start: Halfedge, face: Face) -> None:
        for h in start.ccb():
            h.face = face


def format_ccb(start: Halfedge) -> str:
    """Render a boundary cycle as its source point followed by each target."""
    lines = [f"[{float(start.source.point[0])} {float(start.source.point[1])}]"]
    for h in start.ccb():
        lines.append(f"\t--> [{float(h.target.point[0])} {float(h.target.point[1])}]")
    return "\n".join(lines)


__all__ = [
    'Arrangement',
    'Face',
    'Halfedge',
    'Vertex',
    'format_ccb',
]
