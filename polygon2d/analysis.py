"""Polygon analysis and diagnostic functions."""

from shapely.validation import explain_validity

from .core.polygon import MIN_VERTICES, Polygon2D
from .predicates import is_convex, is_simple, signed_area


def analyze_polygon(polygon: Polygon2D) -> dict:
    """Summarize the geometric properties of a polygon.

    Returns a dictionary with diagnostic information about the polygon.

    Args:
        polygon: Polygon to analyze

    Returns:
        Dictionary with keys:
            - 'is_simple', 'is_convex': bool
            - 'signed_area': float
            - 'winding': 'counterclockwise', 'clockwise' or 'degenerate'
            - 'num_vertices', 'perimeter', 'bounding_box'
            - 'is_valid', 'validity_message': from Shapely
            - 'issues': list of detected issues
            - 'suggestions': list of suggested repairs

    Examples:
        >>> bowtie = Polygon2D([0, 2, 2, 0], [0, 2, 0, 2])
        >>> analysis = analyze_polygon(bowtie)
        >>> analysis['is_simple']
        False
        >>> 'Self-intersection' in analysis['issues']
        True
    """
    issues = []
    suggestions = []

    simple = is_simple(polygon)
    area = signed_area(polygon)
    points = polygon.points()

    if area > 0:
        winding = 'counterclockwise'
    elif area < 0:
        winding = 'clockwise'
    else:
        winding = 'degenerate'

    # Check for duplicate consecutive vertices
    for i in range(len(points)):
        if points[i] == points[(i + 1) % len(points)]:
            issues.append('Consecutive duplicate vertices')
            suggestions.append('Remove repeated points')
            break

    # Duplicates alone already make the polygon non-simple, so test the
    # crossing structure on the distinct vertices
    if not simple:
        distinct = [p for i, p in enumerate(points) if p != points[i - 1]]
        if len(distinct) >= MIN_VERTICES and not is_simple(Polygon2D.from_points(distinct)):
            issues.append('Self-intersection')
            suggestions.append('Use make_simple to recover the outer boundary')

    if area == 0:
        issues.append('Zero area')
        suggestions.append('Polygon is degenerate, orientation is undefined')

    shape = polygon.to_shapely()

    return {
        'is_simple': simple,
        'is_convex': is_convex(polygon),
        'signed_area': area,
        'winding': winding,
        'num_vertices': len(polygon),
        'perimeter': polygon.perimeter(),
        'bounding_box': polygon.bounding_box(),
        'is_valid': shape.is_valid,
        'validity_message': explain_validity(shape),
        'issues': issues,
        'suggestions': suggestions,
    }


__all__ = ['analyze_polygon']
