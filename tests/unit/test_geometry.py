"""Unit tests for geometry operations."""

import pytest

from symbolizer.config import Insets
from symbolizer.core.geometry import (
    ResolvedInsets,
    bounds_of,
    fit_transform,
    flatten_path,
    point_in_polygon,
    resolve_bounds,
    signed_area,
    winding_number,
)
from symbolizer.domain import Close, Cubic, Line, Move, Path, Point, Rect, SymbolPath
from symbolizer.exceptions import GeometryError, InvalidInsetsError


def _rect_path(x: float, y: float, w: float, h: float) -> SymbolPath:
    return SymbolPath(Path((
        Move(Point(x, y)),
        Line(Point(x + w, y)),
        Line(Point(x + w, y + h)),
        Line(Point(x, y + h)),
        Close(),
    )))


class TestBoundsOf:
    """Tests for bounds_of function."""

    def test_single_path(self) -> None:
        """Test bounds of one path."""
        assert bounds_of([_rect_path(1, 2, 3, 4)]) == Rect(1, 2, 3, 4)

    def test_union_of_paths(self) -> None:
        """Test bounds enclose every path tightly."""
        bounds = bounds_of([_rect_path(0, 0, 10, 10), _rect_path(-5, 20, 2, 2)])
        assert bounds == Rect(-5, 0, 15, 22)

    def test_empty_raises(self) -> None:
        """Test that empty input is rejected."""
        with pytest.raises(GeometryError):
            bounds_of([])


class TestResolveBounds:
    """Tests for resolve_bounds function."""

    def test_empty_insets_return_auto_bounds(self) -> None:
        """Test auto bounds pass through unchanged."""
        auto = Rect(2, 3, 10, 12)
        bounds, resolved = resolve_bounds(20, 20, auto, Insets())
        assert bounds == auto
        assert resolved == ResolvedInsets(top=3, left=2, bottom=5, right=8)

    def test_full_insets(self) -> None:
        """Test explicit insets on every edge."""
        bounds, _ = resolve_bounds(100, 50, Rect(0, 0, 1, 1), Insets(top=5, left=10, bottom=15, right=20))
        assert bounds == Rect(10, 5, 70, 30)

    def test_partial_insets_derive_missing_edges(self) -> None:
        """Test absent edges come from the auto bounds."""
        auto = Rect(20, 8, 40, 30)
        bounds, resolved = resolve_bounds(100, 50, auto, Insets(left=5, right=5))
        assert resolved == ResolvedInsets(top=8, left=5, bottom=12, right=5)
        assert bounds == Rect(5, 8, 90, 30)

    def test_invalid_insets(self) -> None:
        """Test insets leaving no room are rejected."""
        with pytest.raises(InvalidInsetsError, match="Invalid insets"):
            resolve_bounds(100, 100, Rect(0, 0, 10, 10), Insets(left=60, right=40))

    def test_format(self) -> None:
        """Test inset formatting trims to four fraction digits."""
        assert ResolvedInsets(10.0, 2.5, 0.123456, 3.0).format() == "10,2.5,0.1235,3"
        assert ResolvedInsets(-0.00001, 0, 0, 0).format() == "0,0,0,0"


class TestFitTransform:
    """Tests for fit_transform function."""

    def test_limited_by_height(self) -> None:
        """Test uniform scale from the limiting axis."""
        m = fit_transform(Rect(0, 0, 10, 10), Rect(0, 0, 100, 50))
        assert (m.a, m.d) == (5.0, 5.0)
        assert (m.tx, m.ty) == (25.0, 0.0)

    def test_containment_and_centring(self) -> None:
        """Test the fitted source is centred inside the destination."""
        source = Rect(-3, 7, 12, 5)
        destination = Rect(100, 200, 40, 40)
        m = fit_transform(source, destination)
        lower = m.apply(Point(source.min_x, source.min_y))
        upper = m.apply(Point(source.max_x, source.max_y))
        assert lower.x >= destination.min_x - 1e-9
        assert upper.x <= destination.max_x + 1e-9
        assert (lower.x + upper.x) / 2 == pytest.approx(destination.mid_x)
        assert (lower.y + upper.y) / 2 == pytest.approx(destination.mid_y)

    def test_idempotent_on_destination(self) -> None:
        """Test fitting a rectangle into itself is the identity."""
        r = Rect(12, 34, 56, 78)
        m = fit_transform(r, r)
        for value, expected in zip(m.to_tuple(), (1, 0, 0, 1, 0, 0)):
            assert value == pytest.approx(expected, abs=1e-9)

    def test_zero_width_source(self) -> None:
        """Test a flat source is fitted by its other axis."""
        m = fit_transform(Rect(5, 0, 0, 10), Rect(0, 0, 100, 20))
        assert m.a == 2.0

    def test_empty_source_raises(self) -> None:
        """Test a point-like source is rejected."""
        with pytest.raises(GeometryError):
            fit_transform(Rect(1, 1, 0, 0), Rect(0, 0, 10, 10))

    def test_invalid_destination_raises(self) -> None:
        """Test a destination without area is rejected."""
        with pytest.raises(GeometryError):
            fit_transform(Rect(0, 0, 10, 10), Rect(0, 0, 0, 10))


class TestPolygons:
    """Tests for polygon utilities."""

    SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]

    def test_signed_area(self) -> None:
        """Test orientation sign of the shoelace area."""
        assert signed_area(self.SQUARE) == 100.0
        assert signed_area(list(reversed(self.SQUARE))) == -100.0
        assert signed_area(self.SQUARE[:2]) == 0.0

    def test_point_in_polygon(self) -> None:
        """Test ray casting containment."""
        assert point_in_polygon(Point(5, 5), self.SQUARE)
        assert not point_in_polygon(Point(15, 5), self.SQUARE)

    def test_winding_number(self) -> None:
        """Test winding direction follows signed area."""
        assert winding_number(Point(5, 5), self.SQUARE) == 1
        assert winding_number(Point(5, 5), list(reversed(self.SQUARE))) == -1
        assert winding_number(Point(50, 5), self.SQUARE) == 0


class TestFlattenPath:
    """Tests for flatten_path function."""

    def test_closed_polygon_drops_duplicate_end(self) -> None:
        """Test closing point equal to start is not repeated."""
        path = Path((
            Move(Point(0, 0)),
            Line(Point(10, 0)),
            Line(Point(0, 10)),
            Line(Point(0, 0)),
            Close(),
        ))
        [(points, closed)] = flatten_path(path)
        assert closed
        assert points == [Point(0, 0), Point(10, 0), Point(0, 10)]

    def test_curve_is_subdivided(self) -> None:
        """Test curves produce intermediate points near the curve."""
        path = Path((
            Move(Point(0, 0)),
            Cubic(to=Point(100, 0), control1=Point(0, 100), control2=Point(100, 100)),
        ))
        [(points, closed)] = flatten_path(path, tolerance=0.5)
        assert not closed
        assert len(points) > 2
        assert points[0] == Point(0, 0)
        assert points[-1] == Point(100, 0)
        assert max(p.y for p in points) == pytest.approx(75, abs=1.0)
