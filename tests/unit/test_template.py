"""Unit tests for the symbol template, composer and writer."""

import xml.etree.ElementTree as ET
from pathlib import Path as FilePath

import pytest

from symbolizer.core.composer import GUIDE_PADDING, TemplateComposer, widen_guides
from symbolizer.domain import (
    Close,
    Guide,
    GuidePair,
    Line,
    Matrix,
    Move,
    Path,
    Point,
    Rect,
    Selector,
    SelectorKind,
    StyleSheet,
    SymbolPath,
    Variant,
)
from symbolizer.exceptions import TemplateError
from symbolizer.io.converter import parse_path_data
from symbolizer.io.reader import SVG_NAMESPACE
from symbolizer.io.template import SymbolTemplate
from symbolizer.io.writer import TemplateWriter

REGULAR_GUIDES = GuidePair(left=Guide(1403.33, 600.784), right=Guide(1496.36, 600.784))


def _square(x: float = 0.0, y: float = 0.0, size: float = 10.0) -> Path:
    return Path((
        Move(Point(x, y)),
        Line(Point(x + size, y)),
        Line(Point(x + size, y + size)),
        Line(Point(x, y + size)),
        Close(),
    ))


class TestSymbolTemplate:
    """Tests for SymbolTemplate class."""

    def test_make(self) -> None:
        """Test the packaged skeleton has every region."""
        template = SymbolTemplate.make()
        assert (template.width, template.height) == (3300, 2200)
        assert template.region(Variant.REGULAR).guides == REGULAR_GUIDES
        assert template.region(Variant.ULTRALIGHT).guides.left == Guide(515.394, 600.784)
        assert template.region(Variant.BLACK).guides.right == Guide(2982.48, 600.784)
        assert all(template.region(v).content_elements == [] for v in Variant)

    def test_make_returns_fresh_documents(self) -> None:
        """Test templates do not share state."""
        first = SymbolTemplate.make()
        first.region(Variant.REGULAR).set_paths([(_square(), None)])
        assert SymbolTemplate.make().region(Variant.REGULAR).content_elements == []

    def test_missing_element(self) -> None:
        """Test incomplete skeletons are rejected."""
        with pytest.raises(TemplateError, match="Guides"):
            SymbolTemplate.parse(f'<svg xmlns="{SVG_NAMESPACE}"><g id="Symbols"/></svg>')

    def test_missing_region_guide(self) -> None:
        """Test a missing guide names the element."""
        markup = f'<svg xmlns="{SVG_NAMESPACE}"><g id="Guides"/><g id="Symbols"/></svg>'
        with pytest.raises(TemplateError, match="left-margin-Regular-S"):
            SymbolTemplate.parse(markup)

    def test_invalid_markup(self) -> None:
        """Test malformed skeletons are rejected."""
        with pytest.raises(TemplateError):
            SymbolTemplate.parse("<svg")

    def test_set_guides(self) -> None:
        """Test moving guides rewrites their start point."""
        template = SymbolTemplate.make()
        region = template.region(Variant.REGULAR)
        moved = GuidePair(left=Guide(1390, 590), right=Guide(1510.5, 590))
        region.guides = moved
        assert region.guides == moved

    def test_set_paths_replaces_content(self) -> None:
        """Test content is fully replaced and tagged."""
        region = SymbolTemplate.make(precision=2).region(Variant.BLACK)
        region.set_paths([(_square(), None), (_square(1.005, 0), "monochrome-0")])
        region.set_paths([(_square(0.5, 0.25), "hierarchical-0:primary")])

        [element] = region.content_elements
        assert element.tag == f"{{{SVG_NAMESPACE}}}path"
        assert element.get("class") == "hierarchical-0:primary"
        assert element.get("d") == "M0.5 0.25H10.5V10.25H0.5Z"


class TestWidenGuides:
    """Tests for widen_guides function."""

    def test_small_artwork_keeps_guides(self) -> None:
        """Test guides wide enough for the artwork are unchanged."""
        assert widen_guides(REGULAR_GUIDES, Rect(0, 0, 10, 10), Matrix.scaling(7, 7)) == REGULAR_GUIDES

    def test_wide_artwork_moves_guides_out(self) -> None:
        """Test guides move out to the artwork plus padding."""
        guides = GuidePair(left=Guide(100, 0), right=Guide(200, 0))
        widened = widen_guides(guides, Rect(0, 0, 100, 10), Matrix.scaling(1.5, 1.5))
        # Region centre is (150, 61); half width 75 plus padding
        assert widened.left.x == 150 - 75 - GUIDE_PADDING
        assert widened.right.x == 150 + 75 + GUIDE_PADDING
        assert widened.left.y == 0
        assert widened.right.y == widened.left.y

    def test_tall_artwork_raises_guides(self) -> None:
        """Test the shared top edge moves up for tall artwork."""
        guides = GuidePair(left=Guide(0, 100), right=Guide(100, 100))
        widened = widen_guides(guides, Rect(0, 0, 10, 200), Matrix.scaling(1, 1))
        # Region centre is (50, 161); half height 100 plus padding
        assert widened.left.y == 161 - 100 - GUIDE_PADDING
        assert widened.right.y == widened.left.y
        assert (widened.left.x, widened.right.x) == (0, 100)


class TestTemplateComposer:
    """Tests for TemplateComposer class."""

    def test_append_paths_fits_into_region(self) -> None:
        """Test artwork is centred in the region at the limiting scale."""
        template = SymbolTemplate.make()
        guides = TemplateComposer(template).append_paths(
            Variant.REGULAR,
            [SymbolPath(_square(), "monochrome-0")],
            Rect(0, 0, 10, 10),
        )
        assert guides == REGULAR_GUIDES

        [element] = template.region(Variant.REGULAR).content_elements
        bounds = parse_path_data(element.get("d", "")).bounds
        region = REGULAR_GUIDES.region_bounds
        assert bounds.width == pytest.approx(70, abs=1e-3)
        assert bounds.mid_x == pytest.approx(region.mid_x, abs=1e-3)
        assert bounds.mid_y == pytest.approx(region.mid_y, abs=1e-3)
        assert element.get("class") == "monochrome-0"

    def test_guides_are_monotonic(self) -> None:
        """Test repeated placements never move guides inwards."""
        composer = TemplateComposer(SymbolTemplate.make())
        history = []
        for width in (100, 10, 400, 20):
            history.append(
                composer.append_paths(
                    Variant.ULTRALIGHT,
                    [SymbolPath(_square(size=width))],
                    Rect(0, 0, width, width / 10),
                )
            )
        for before, after in zip(history, history[1:]):
            assert after.left.x <= before.left.x
            assert after.right.x >= before.right.x


class TestTemplateWriter:
    """Tests for TemplateWriter class."""

    def test_write(self) -> None:
        """Test declaration, namespace and re-parsable output."""
        template = SymbolTemplate.make()
        template.region(Variant.REGULAR).set_paths([(_square(), "monochrome-0")])

        markup = TemplateWriter().write(template)

        assert markup.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg ')
        assert "ns0:" not in markup
        assert "\n    <g id=\"Notes\">" in markup
        reparsed = SymbolTemplate.parse(markup)
        [element] = reparsed.region(Variant.REGULAR).content_elements
        assert element.get("d") == "M0 0H10V10H0Z"

    def test_style_element_first(self) -> None:
        """Test stylesheets become the first child."""
        template = SymbolTemplate.make()
        sheet = StyleSheet()
        sheet.merge(Selector(SelectorKind.CLASS, "monochrome-0"), {"fill": "red"})
        template.stylesheets = [sheet, StyleSheet()]

        root = ET.fromstring(TemplateWriter().write(template))
        assert root[0].tag == f"{{{SVG_NAMESPACE}}}style"
        assert root[0].text.strip() == ".monochrome-0 { fill: red; }"

    def test_no_style_without_rules(self) -> None:
        """Test empty stylesheets emit no style element."""
        markup = TemplateWriter().write(SymbolTemplate.make())
        assert "<style" not in markup

    def test_write_does_not_modify_template(self) -> None:
        """Test serialization leaves the template untouched."""
        template = SymbolTemplate.make()
        sheet = StyleSheet()
        sheet.merge(Selector(SelectorKind.CLASS, "monochrome-0"), {"fill": "red"})
        template.stylesheets = [sheet]
        TemplateWriter().write(template)
        assert template.root[0].get("id") == "Notes"

    def test_save(self, tmp_path: FilePath) -> None:
        """Test writing to a file."""
        output = tmp_path / "out.svg"
        TemplateWriter().save(SymbolTemplate.make(), output)
        assert output.read_text(encoding="utf-8").startswith("<?xml")

    def test_get_symbol_path(self) -> None:
        """Test default output naming."""
        assert TemplateWriter.get_symbol_path(FilePath("/a/pencil.circle.svg")) == FilePath(
            "/a/pencil.circle-symbol.svg"
        )
