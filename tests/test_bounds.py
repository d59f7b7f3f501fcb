"""Tests for bounds.py - bounding box calculation."""

import math

import pytest

from dxf_svg.bounds import POINT_EXTRACTORS, BoundingBox, compute_bounds, entity_points
from dxf_svg.entities import Arc, Circle, Ellipse, EntityKind, Line, Other, Point, Polyline, Text


def _box(entities):
    return compute_bounds(entities).as_tuple()


class TestComputeBounds:
    def test_empty_is_none(self):
        assert compute_bounds([]) is None

    def test_only_unsupported_is_none(self):
        assert compute_bounds([Other("HATCH"), Other("INSERT")]) is None

    def test_line(self):
        assert _box([Line((3, -2), (-1, 4))]) == (-1, -2, 3, 4)

    def test_circle_uses_radius_not_center(self):
        assert _box([Circle((5, 5), 5)]) == (0, 0, 10, 10)

    def test_polyline_every_vertex(self):
        poly = Polyline(((0, 0), (2, 7), (-3, 1), (4, -5)))
        assert _box([poly]) == (-3, -5, 4, 7)

    def test_point_and_text(self):
        assert _box([Point((1, 2)), Text((-4, 8), "A")]) == (-4, 2, 1, 8)

    def test_unsupported_ignored_in_mix(self):
        assert _box([Line((0, 0), (1, 1)), Other("DIMENSION")]) == (0, 0, 1, 1)

    def test_order_independent(self):
        entities = [
            Line((0, 0), (10, 0)),
            Circle((20, 20), 3),
            Polyline(((-5, 1), (2, 30))),
            Arc((0, 0), 4, 10, 80),
        ]
        assert compute_bounds(entities) == compute_bounds(list(reversed(entities)))
        assert compute_bounds(entities) == compute_bounds(entities[2:] + entities[:2])

    def test_min_not_greater_than_max(self):
        box = compute_bounds([Line((5, 5), (5, 5)), Circle((-2, 3), 0)])
        assert box.min_x <= box.max_x
        assert box.min_y <= box.max_y

    def test_non_finite_points_dropped(self):
        entities = [Line((0, 0), (1, 1)), Point((math.inf, 0)), Point((0, math.nan))]
        assert _box(entities) == (0, 0, 1, 1)

    def test_accepts_generator(self):
        assert _box(Line((i, 0), (i, 1)) for i in range(3)) == (0, 0, 2, 1)


class TestArcBounds:
    def test_quarter_arc_first_quadrant(self):
        min_x, min_y, max_x, max_y = _box([Arc((0, 0), 10, 0, 90)])
        assert min_x == pytest.approx(0, abs=1e-9)
        assert min_y == pytest.approx(0, abs=1e-9)
        assert max_x == pytest.approx(10)
        assert max_y == pytest.approx(10)

    def test_arc_crossing_top_includes_extreme(self):
        # 45 -> 135 passes through 90, endpoints alone would miss y = 10
        _, min_y, _, max_y = _box([Arc((0, 0), 10, 45, 135)])
        assert max_y == pytest.approx(10)
        assert min_y == pytest.approx(10 * math.sin(math.radians(45)))

    def test_arc_wrapping_through_zero(self):
        min_x, min_y, max_x, max_y = _box([Arc((0, 0), 2, 315, 45)])
        assert max_x == pytest.approx(2)
        assert min_x == pytest.approx(2 * math.cos(math.radians(45)))
        assert min_y == pytest.approx(-max_y)

    def test_full_arc_matches_circle(self):
        arc_box = _box([Arc((1, 1), 3, 30, 30)])
        assert arc_box == pytest.approx(_box([Circle((1, 1), 3)]))

    def test_arc_never_exceeds_circle(self):
        arc_box = compute_bounds([Arc((0, 0), 5, 200, 340)])
        circle_box = compute_bounds([Circle((0, 0), 5)])
        assert arc_box.min_x >= circle_box.min_x - 1e-9
        assert arc_box.max_y <= circle_box.max_y + 1e-9


class TestEllipseBounds:
    def test_axis_aligned(self):
        box = _box([Ellipse((0, 0), (4, 0), 0.5)])
        assert box == pytest.approx((-4, -2, 4, 2))

    def test_rotated_90(self):
        box = _box([Ellipse((1, 1), (0, 3), 0.5)])
        assert box == pytest.approx((-0.5, -2, 2.5, 4))


class TestBoundingBox:
    def test_extents(self):
        box = BoundingBox(1, 2, 4, 8)
        assert box.width == 3
        assert box.height == 6

    def test_union(self):
        assert BoundingBox(0, 0, 1, 1).union(BoundingBox(-1, 0.5, 0.5, 3)) == BoundingBox(-1, 0, 1, 3)


class TestEntityPoints:
    def test_every_kind_has_extractor(self):
        assert set(POINT_EXTRACTORS) == set(EntityKind)

    def test_other_contributes_nothing(self):
        assert entity_points(Other("HATCH")) == []

    def test_unknown_object_contributes_nothing(self):
        assert entity_points(object()) == []
