"""Unit tests for the SVG I/O layer.

Tests for SvgReader, LayerBuilder, and converter functions.
"""

from pathlib import Path as FilePath
from unittest.mock import patch

import pytest

from symbolizer.domain import (
    Close,
    Cubic,
    FillRule,
    LayerContent,
    LayerNode,
    Line,
    Matrix,
    Move,
    Path,
    Point,
    Rect,
    Selector,
    SelectorKind,
    ShapeContent,
    TextContent,
)
from symbolizer.exceptions import DocumentLoadError, DocumentParseError
from symbolizer.io.builder import LayerBuilder, make_ellipse, make_rect, parse_opacity, parse_transform
from symbolizer.io.converter import CoordinateFormatter, parse_path_data, path_to_svg_data
from symbolizer.io.reader import SvgReader, parse_length, parse_stylesheet, parse_svg

SVG_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24">'


def _build(body: str, head: str = SVG_OPEN) -> LayerNode:
    return LayerBuilder(parse_svg(f"{head}{body}</svg>")).make_layer()


def _children(layer: LayerNode) -> list[LayerNode]:
    return [c.layer for c in layer.contents if isinstance(c, LayerContent)]


def _shape(layer: LayerNode) -> ShapeContent:
    [content] = layer.contents
    assert isinstance(content, ShapeContent)
    return content


class TestParseSvg:
    """Tests for parse_svg and its helpers."""

    def test_size_from_attributes(self) -> None:
        """Test width and height with units."""
        document = parse_svg('<svg xmlns="http://www.w3.org/2000/svg" width="18pt" height="24px"/>')
        assert document.width == pytest.approx(24.0)
        assert document.height == 24.0
        assert document.view_box is None

    def test_size_from_view_box(self) -> None:
        """Test missing size falls back to the viewBox."""
        document = parse_svg('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 16"/>')
        assert (document.width, document.height) == (32, 16)
        assert document.view_box == Rect(0, 0, 32, 16)

    def test_relative_size_falls_back(self) -> None:
        """Test percentage sizes use the viewBox."""
        document = parse_svg('<svg xmlns="http://www.w3.org/2000/svg" width="100%" viewBox="0,0,8,8"/>')
        assert document.width == 8

    def test_missing_size(self) -> None:
        """Test documents without any size are rejected."""
        with pytest.raises(DocumentParseError, match="missing width/height"):
            parse_svg('<svg xmlns="http://www.w3.org/2000/svg"/>')

    def test_malformed_markup(self) -> None:
        """Test XML syntax errors are reported."""
        with pytest.raises(DocumentParseError, match="icon.svg"):
            parse_svg("<svg", source="icon.svg")

    def test_wrong_root(self) -> None:
        """Test non-SVG documents are rejected."""
        with pytest.raises(DocumentParseError, match="expected <svg>"):
            parse_svg("<html/>")

    def test_invalid_view_box(self) -> None:
        """Test malformed viewBox values are rejected."""
        with pytest.raises(DocumentParseError, match="viewBox"):
            parse_svg('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10"/>')

    def test_stylesheets(self) -> None:
        """Test style elements are parsed in order."""
        document = parse_svg(
            f"{SVG_OPEN}<style>.monochrome-0 {{ fill: red }}</style>"
            "<defs><style>#a { opacity: 0.5 }</style></defs></svg>"
        )
        assert len(document.stylesheets) == 2
        assert document.stylesheets[0].declarations_for(Selector(SelectorKind.CLASS, "monochrome-0")) == {
            "fill": "red"
        }

    def test_parse_length(self) -> None:
        """Test absolute units and rejected relative ones."""
        assert parse_length("1in") == 96.0
        assert parse_length("10") == 10.0
        assert parse_length("2em") is None
        assert parse_length(None) is None

    def test_parse_stylesheet(self) -> None:
        """Test selector lists, comments and compound selectors."""
        sheet = parse_stylesheet("/* c */ .a, #b { fill: red; } g path { fill: blue } @media print { }")
        assert list(sheet.rules) == [Selector(SelectorKind.CLASS, "a"), Selector(SelectorKind.ID, "b")]


class TestSvgReader:
    """Tests for SvgReader class."""

    def test_read(self, tmp_path: FilePath) -> None:
        """Test reading a document from disk."""
        svg_path = tmp_path / "icon.svg"
        svg_path.write_text(f"{SVG_OPEN}</svg>", encoding="utf-8")
        document = SvgReader(svg_path).read()
        assert document.source == str(svg_path)
        assert document.width == 24

    def test_read_nonexistent_file(self) -> None:
        """Test reading a nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SvgReader(FilePath("nonexistent.svg")).read()

    def test_read_failure(self, tmp_path: FilePath) -> None:
        """Test OS errors are wrapped."""
        svg_path = tmp_path / "icon.svg"
        svg_path.write_text("", encoding="utf-8")
        with patch.object(FilePath, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(DocumentLoadError, match="denied"):
                SvgReader(svg_path).read()


class TestParseAttributes:
    """Tests for transform and opacity parsing."""

    def test_transform_list_order(self) -> None:
        """Test the rightmost transform applies first."""
        m = parse_transform("translate(10 20) scale(2)")
        assert m.apply(Point(1, 1)) == Point(12, 22)

    def test_rotate_about_point(self) -> None:
        """Test rotation around a centre."""
        p = parse_transform("rotate(180 5 5)").apply(Point(0, 0))
        assert p.x == pytest.approx(10)
        assert p.y == pytest.approx(10)

    def test_matrix(self) -> None:
        """Test explicit matrices."""
        assert parse_transform("matrix(1,0,0,1,3,4)") == Matrix.translation(3, 4)

    def test_invalid_transform(self) -> None:
        """Test wrong argument counts are rejected."""
        with pytest.raises(DocumentParseError, match="invalid transform"):
            parse_transform("matrix(1 2)")

    def test_opacity(self) -> None:
        """Test numbers, percentages and clamping."""
        assert parse_opacity("0.5") == 0.5
        assert parse_opacity("50%") == 0.5
        assert parse_opacity("2") == 1.0
        assert parse_opacity("bogus") == 1.0
        assert parse_opacity(None) == 1.0


class TestLayerBuilder:
    """Tests for LayerBuilder class."""

    def test_one_layer_per_element(self) -> None:
        """Test the tree mirrors rendered elements."""
        root = _build('<g id="g1" class="monochrome-0"><rect width="5" height="5"/></g><title>x</title>')
        [group] = _children(root)
        assert group.element_id == "g1"
        assert group.class_name == "monochrome-0"
        [rect] = _children(group)
        assert _shape(rect).path.bounds == Rect(0, 0, 5, 5)

    def test_skipped_elements(self) -> None:
        """Test definitions and hidden elements are not rendered."""
        root = _build(
            '<defs><rect width="5" height="5"/></defs>'
            '<rect width="5" height="5" display="none"/>'
            '<g style="display:none"><rect width="5" height="5"/></g>'
        )
        assert _children(root) == []

    def test_style_cascade(self) -> None:
        """Test inline style beats stylesheet rules, which beat attributes."""
        root = _build(
            '<style>.a { fill: red; fill-opacity: 0.5 } #r { fill: green }</style>'
            '<g fill="blue" fill-rule="evenodd">'
            '<rect id="r" class="a" width="1" height="1" fill="yellow" style="fill-opacity: 0.25"/>'
            '<rect width="1" height="1"/>'
            "</g>"
        )
        [group] = _children(root)
        first, second = _children(group)
        assert _shape(first).fill.color == "green"
        assert _shape(first).fill.opacity == 0.25
        assert _shape(first).fill.rule is FillRule.EVENODD
        assert _shape(second).fill.color == "blue"

    def test_opacity_not_inherited(self) -> None:
        """Test group opacity stays on the group."""
        root = _build('<g opacity="0"><rect width="1" height="1"/></g>')
        [group] = _children(root)
        assert group.opacity == 0.0
        assert _children(group)[0].opacity == 1.0

    def test_clip_and_mask(self) -> None:
        """Test clip and mask references."""
        root = _build('<g clip-path="url(#c)"/><g style="mask: url(\'#m\')"/><g clip-path="none"/>')
        clipped, masked, plain = _children(root)
        assert clipped.clip == "c"
        assert masked.mask == "m"
        assert plain.clip is None

    def test_stroke_attributes(self) -> None:
        """Test stroke style resolution."""
        root = _build(
            '<line x1="0" y1="0" x2="10" y2="0" stroke="black" stroke-width="3" '
            'stroke-linecap="round" stroke-miterlimit="8"/>'
        )
        stroke = _shape(_children(root)[0]).stroke
        assert (stroke.color, stroke.width, stroke.line_cap, stroke.miter_limit) == ("black", 3.0, "round", 8.0)

    def test_shapes(self) -> None:
        """Test basic shape geometry."""
        root = _build(
            '<circle cx="5" cy="5" r="5"/>'
            '<ellipse cx="0" cy="0" rx="4" ry="2"/>'
            '<polygon points="0,0 10,0 5,5"/>'
            '<polyline points="0 0 1 1 2 0"/>'
            '<path d="M0 0 Q5 10 10 0"/>'
        )
        circle, ellipse, polygon, polyline, path = (_shape(c).path for c in _children(root))
        assert circle.bounds == Rect(0, 0, 10, 10)
        assert ellipse.bounds == Rect(-4, -2, 8, 4)
        assert polygon.is_closed()
        assert not polyline.is_closed()
        assert isinstance(path.segments[1], Cubic)

    def test_degenerate_shapes_have_no_content(self) -> None:
        """Test zero-sized shapes draw nothing."""
        root = _build('<rect width="0" height="5"/><circle r="0"/>')
        assert all(layer.contents == [] for layer in _children(root))

    def test_invalid_path_data(self) -> None:
        """Test malformed path data is reported."""
        with pytest.raises(DocumentParseError, match="invalid path data"):
            _build('<path d="M0 0 L10"/>')

    def test_use_reference(self) -> None:
        """Test use elements instantiate their target with an offset."""
        root = _build(
            '<defs><rect id="box" width="2" height="2"/></defs>'
            '<use href="#box" x="10" y="0"/>'
            '<use href="#missing"/>'
        )
        use, missing = _children(root)
        assert use.transform == Matrix.translation(10, 0)
        [target] = _children(use)
        assert _shape(target).path.bounds == Rect(0, 0, 2, 2)
        assert missing.contents == []

    def test_text(self) -> None:
        """Test text runs with their position and font."""
        root = _build('<text x="3" y="4" font-size="12" text-anchor="middle">Hi <tspan>there</tspan></text>')
        [content] = _children(root)[0].contents
        assert isinstance(content, TextContent)
        assert content.text == "Hi there"
        assert content.point == Point(3, 4)
        assert content.attributes.font_size == 12
        assert content.attributes.anchor == "middle"

    def test_hidden_visibility(self) -> None:
        """Test hidden elements keep their layer but draw nothing."""
        root = _build('<rect width="1" height="1" visibility="hidden"/>')
        assert _children(root)[0].contents == []


class TestShapeBuilders:
    """Tests for shape path helpers."""

    def test_rounded_rect(self) -> None:
        """Test rounded corners stay inside the rectangle."""
        path = make_rect(0, 0, 10, 6, rx=2)
        assert path is not None
        assert path.bounds == Rect(0, 0, 10, 6)
        assert sum(isinstance(s, Cubic) for s in path.segments) == 4

    def test_ellipse_rejects_zero_radius(self) -> None:
        """Test empty ellipses."""
        assert make_ellipse(0, 0, 0, 5) is None


class TestConverter:
    """Tests for path data conversion."""

    def test_parse_path_data(self) -> None:
        """Test absolute and relative commands."""
        path = parse_path_data("M1 1 h9 v9 H1 z")
        assert path.segments == (
            Move(Point(1, 1)),
            Line(Point(10, 1)),
            Line(Point(10, 10)),
            Line(Point(1, 10)),
            Line(Point(1, 1)),
            Close(),
        )

    def test_parse_empty(self) -> None:
        """Test empty data yields an empty path."""
        assert parse_path_data("  ").is_empty()

    def test_path_to_svg_data(self) -> None:
        """Test serialization uses the formatter."""
        path = Path((Move(Point(0.12345, 0)), Line(Point(10, 0)), Line(Point(5, 5)), Close()))
        assert path_to_svg_data(path, CoordinateFormatter(2)) == "M0.12 0H10L5 5Z"

    def test_formatter(self) -> None:
        """Test trailing zeros and negative zero."""
        formatter = CoordinateFormatter(3)
        assert formatter(1.5) == "1.5"
        assert formatter(2.0) == "2"
        assert formatter(-0.0001) == "0"
        assert CoordinateFormatter(0)(2.6) == "3"

    def test_round_trip_cubic(self) -> None:
        """Test curves survive serialization."""
        path = Path((Move(Point(0, 0)), Cubic(to=Point(9, 0), control1=Point(3, 3), control2=Point(6, 3))))
        assert parse_path_data(path_to_svg_data(path)) == path
