"""Tests for arrangement-based polygon repair."""

import logging
from unittest.mock import patch
import warnings

import numpy as np
import pytest
from shapely.geometry import LineString, Polygon
from shapely.ops import polygonize, unary_union

from polygon2d import (
    Arrangement,
    Polygon2D,
    RepairConfig,
    WindingOrder,
    DegenerateGeometryError,
    InputShapeError,
    MultipleHolesWarning,
    make_simple,
    make_simple_flat,
    outer_boundary,
    is_simple,
    is_convex,
    is_counterclockwise_oriented,
    is_clockwise_oriented,
    signed_area,
)


def _bowtie() -> Polygon2D:
    """Self-intersecting bowtie polygon."""
    return Polygon2D.from_points([(0, 0), (1, 1), (1, 0), (0, 1)])


def _hexagon() -> Polygon2D:
    return Polygon2D.from_points([(1, 0), (3, 0), (4, 2), (3, 4), (1, 4), (0, 2)])


def _loop_polygon() -> Polygon2D:
    """Polygon whose top edges cross, forming a small loop."""
    return Polygon2D.from_points([(0, 0), (4, 0), (4, 3), (1, 5), (3, 5), (0, 3)])


def _notched() -> Polygon2D:
    """Octagon with two interleaved notches that cross each other."""
    return Polygon2D.from_points([
        (2, 1), (3, 1), (4, 1), (5, 2), (2, 3), (5, 4),
        (4, 5), (3, 5), (2, 5), (1, 4), (4, 3), (1, 2),
    ])


def _spike_polygon() -> Polygon2D:
    """Triangle with a dangling edge hanging off its first vertex."""
    return Polygon2D.from_points([(2, 0), (6, 4), (1, 2), (2, 0), (1, 1)])


def _touching_lobes() -> Polygon2D:
    """Square and triangle meeting only at the vertex (2, 2)."""
    return Polygon2D.from_points([(0, 0), (2, 0), (2, 2), (4, 2), (4, 4), (2, 2), (0, 2)])


def _material(polygon: Polygon2D):
    """Union of all regions enclosed by the polygon's edges."""
    ring = LineString(polygon.points() + polygon.points()[:1])
    return unary_union(list(polygonize(unary_union(ring))))


def _two_squares(polygon):
    first = Polygon2D([0, 1, 1, 0], [0, 0, 1, 1]).segments()
    second = Polygon2D([5, 6, 6, 5], [5, 5, 6, 6]).segments()
    return Arrangement(first + second)


class TestMakeSimple:
    """Tests for make_simple()."""

    def test_bowtie_becomes_simple(self):
        result = make_simple(_bowtie())
        assert is_simple(result)

    def test_bowtie_result(self):
        result = make_simple(_bowtie())
        # The first visit of the crossing point is pushed up into the gap
        # between the lobes, the last visit stays in place
        assert result.points() == [
            (0.0, 0.0), (0.5, 0.5), (1.0, 0.0), (1.0, 1.0), (0.5, 0.5 + 2 ** -11), (0.0, 1.0),
        ]
        assert signed_area(result) == pytest.approx(0.5 + 2 ** -12)

    def test_bowtie_result_encloses_both_lobes(self):
        lobes = unary_union([
            Polygon([(0, 0), (0.5, 0.5), (0, 1)]),
            Polygon([(1, 0), (1, 1), (0.5, 0.5)]),
        ])
        result = make_simple(_bowtie()).to_shapely()
        assert result.is_valid
        assert result.buffer(1e-9).covers(lobes)

    def test_simple_polygon_is_unchanged(self):
        poly = _hexagon()
        assert make_simple(poly) == poly

    def test_clockwise_polygon_is_unchanged(self):
        poly = _hexagon().reversed()
        assert make_simple(poly) == poly

    def test_rotated_start_is_kept(self):
        poly = Polygon2D.from_points([(3, 4), (1, 4), (0, 2), (1, 0), (3, 0), (4, 2)])
        assert make_simple(poly) == poly

    def test_convex_polygon_keeps_vertices_and_area(self):
        poly = _hexagon()
        result = make_simple(poly, RepairConfig(anchor_start=False))
        assert set(result.points()) == set(poly.points())
        assert signed_area(result) == pytest.approx(signed_area(poly))

    def test_collinear_vertices_are_kept(self):
        poly = Polygon2D.from_points([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)])
        assert make_simple(poly) == poly

    def test_explicit_closing_point_is_removed(self):
        poly = Polygon2D([0, 1, 1, 0, 0], [0, 0, 1, 1, 0])
        assert make_simple(poly) == Polygon2D([0, 1, 1, 0], [0, 0, 1, 1])

    def test_idempotent_on_bowtie(self):
        once = make_simple(_bowtie())
        assert make_simple(once) == once

    def test_idempotent_on_loop_polygon(self):
        once = make_simple(_loop_polygon())
        assert make_simple(once) == once

    def test_loop_polygon(self):
        result = make_simple(_loop_polygon())
        assert is_simple(result)
        assert len(result) == 8
        assert result.points()[0] == (0.0, 0.0)
        assert (2.0, 13 / 3) in result.points()
        assert is_counterclockwise_oriented(result)

    def test_notched_polygon(self):
        result = make_simple(_notched())
        assert is_simple(result)
        assert not is_convex(result)
        assert is_counterclockwise_oriented(result)
        assert len(result) == 16
        assert result.points()[0] == (2.0, 1.0)

    def test_result_covers_input(self):
        poly = _loop_polygon()
        material = poly.to_shapely().buffer(0)
        result = make_simple(poly).to_shapely()
        assert result.buffer(1e-9).covers(material)

    def test_spike_is_dropped(self):
        result = make_simple(_spike_polygon())
        assert result.points() == [(2.0, 0.0), (6.0, 4.0), (1.0, 2.0)]
        assert is_simple(result)
        assert result.to_shapely().covers(_material(_spike_polygon()))

    def test_spike_polygon_is_idempotent(self):
        once = make_simple(_spike_polygon())
        assert make_simple(once) == once

    def test_touching_lobes_are_separated(self):
        poly = _touching_lobes()
        result = make_simple(poly)
        assert is_simple(result)
        assert len(result) == 8
        assert result.points()[0] == (0.0, 0.0)
        assert (2.0, 2.0) in result.points()
        assert is_counterclockwise_oriented(result)
        assert signed_area(result) == pytest.approx(6.0, abs=1e-2)
        assert result.to_shapely().buffer(1e-9).covers(_material(poly))

    def test_touching_lobes_are_idempotent(self):
        once = make_simple(_touching_lobes())
        assert make_simple(once) == once

    def test_collinear_points_raise(self):
        with pytest.raises(DegenerateGeometryError):
            make_simple(Polygon2D([0, 1, 2], [0, 0, 0]))

    def test_random_polygons(self):
        rng = np.random.default_rng(20240611)
        repaired = 0
        for _ in range(80):
            count = int(rng.integers(4, 9))
            poly = Polygon2D.from_points(rng.integers(0, 7, size=(count, 2)).tolist())
            material = _material(poly)

            if material.area == 0:
                with pytest.raises(DegenerateGeometryError):
                    make_simple(poly)
                continue

            result = make_simple(poly)
            assert is_simple(result), poly
            assert result.to_shapely().buffer(1e-9).covers(material), poly
            assert make_simple(result) == result, poly
            repaired += 1
        assert repaired > 40

    def test_input_is_not_modified(self):
        poly = _bowtie()
        before = poly.points()
        make_simple(poly)
        assert poly.points() == before


class TestRepairConfig:
    """Tests for repair post-processing options."""

    def test_counterclockwise(self):
        result = make_simple(_hexagon().reversed(), RepairConfig(winding=WindingOrder.COUNTERCLOCKWISE))
        assert is_counterclockwise_oriented(result)

    def test_clockwise(self):
        result = make_simple(_hexagon(), RepairConfig(winding=WindingOrder.CLOCKWISE))
        assert is_clockwise_oriented(result)
        assert result.points()[0] == (1.0, 0.0)

    def test_preserve_zero_area_gives_counterclockwise(self):
        result = make_simple(_bowtie(), RepairConfig(winding=WindingOrder.PRESERVE))
        assert is_counterclockwise_oriented(result)

    def test_without_anchor_result_is_rotation(self):
        poly = _hexagon()
        result = make_simple(poly, RepairConfig(anchor_start=False)).points()
        start = result.index(poly.points()[0])
        assert result[start:] + result[:start] == poly.points()

    def test_keep_repeated_points(self):
        result = make_simple(_bowtie(), RepairConfig(resolve_repeated_points=False))
        assert len(result) == 6
        assert result.points().count((0.5, 0.5)) == 2
        assert not is_simple(result)

    def test_anchor_falls_back_to_smallest_vertex(self):
        # The first vertex lies on the inner loop and not on the outer boundary
        poly = Polygon2D.from_points([(2, 2), (0, 0), (4, 0), (4, 4), (0, 4), (0, 0)])
        result = make_simple(poly)
        assert result.points()[0] == (0.0, 0.0)

    def test_unknown_winding_raises(self):
        with pytest.raises(ValueError, match="Unknown winding"):
            make_simple(_bowtie(), RepairConfig(winding='sideways'))


class TestRepairErrors:
    """Tests for degenerate input and warnings."""

    def test_all_points_equal_raises(self):
        poly = Polygon2D([1, 1, 1], [2, 2, 2])
        with pytest.raises(DegenerateGeometryError, match="no hole"):
            make_simple(poly)

    def test_single_edge_raises(self):
        poly = Polygon2D([0, 1, 0], [0, 0, 0])
        with pytest.raises(DegenerateGeometryError, match="only 2 points"):
            make_simple(poly)

    def test_mismatched_input_raises(self):
        with pytest.raises(InputShapeError):
            make_simple_flat([0, 1, 1, 0], [0, 0, 1])

    def test_multiple_holes_warn(self):
        with patch('polygon2d.repair.Arrangement.from_polygon', side_effect=_two_squares):
            with pytest.warns(MultipleHolesWarning, match="2 holes"):
                result = make_simple(_bowtie())
        assert len(result) == 4

    def test_warning_points_at_caller(self):
        with patch('polygon2d.repair.Arrangement.from_polygon', side_effect=_two_squares):
            with pytest.warns(MultipleHolesWarning) as record:
                make_simple(_bowtie())
            with pytest.warns(MultipleHolesWarning) as direct:
                outer_boundary(_bowtie())
            with pytest.warns(MultipleHolesWarning) as flat:
                make_simple_flat([0, 1, 1, 0], [0, 1, 0, 1])
        assert record[0].filename == __file__
        assert direct[0].filename == __file__
        assert flat[0].filename == __file__

    def test_multiple_holes_warning_can_be_disabled(self):
        with patch('polygon2d.repair.Arrangement.from_polygon', side_effect=_two_squares):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                make_simple(_bowtie(), RepairConfig(warn_on_multiple_holes=False))

    def test_debug_log_shows_outer_boundary(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="polygon2d"):
            make_simple(_bowtie())
        assert "Outer boundary" in caplog.text
        assert "--> [0.5 0.5]" in caplog.text


class TestMakeSimpleFlat:
    """Tests for the packed output layout."""

    def test_layout_is_xs_then_ys(self):
        result = make_simple_flat([0, 1, 1, 0], [0, 0, 1, 1])
        np.testing.assert_array_equal(result, [0, 1, 1, 0, 0, 0, 1, 1])

    def test_length_is_twice_vertex_count(self):
        result = make_simple_flat([0, 1, 1, 0], [0, 1, 0, 1])
        assert result.shape == (12,)
        np.testing.assert_array_equal(result[:6], [0, 0.5, 1, 1, 0.5, 0])
        np.testing.assert_array_equal(result[6:], [0, 0.5, 0, 1, 0.5 + 2 ** -11, 1])

    def test_decodes_back_to_polygon(self):
        result = make_simple_flat([0, 1, 1, 0], [0, 1, 0, 1])
        assert Polygon2D.from_flat(result) == make_simple(_bowtie())
