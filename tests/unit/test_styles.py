"""Unit tests for style class filtering."""

import pytest

from symbolizer.core.styles import filter_stylesheet, is_accepted
from symbolizer.domain import Selector, SelectorKind, StyleSheet


class TestIsAccepted:
    """Tests for is_accepted function."""

    @pytest.mark.parametrize(
        "name",
        ["hierarchical-0:primary", "monochrome-1", "multicolor-0:tintColor", "SFSymbolsPreview000000"],
    )
    def test_accepted(self, name: str) -> None:
        """Test every accepted marker."""
        assert is_accepted(name)

    def test_marker_inside_class_list(self) -> None:
        """Test markers are found anywhere in the attribute."""
        assert is_accepted("outline monochrome-0")

    @pytest.mark.parametrize("name", [None, "", "outline", "monochrome", "sfsymbolspreview"])
    def test_rejected(self, name: str | None) -> None:
        """Test names without a marker."""
        assert not is_accepted(name)


class TestFilterStylesheet:
    """Tests for filter_stylesheet function."""

    def test_keeps_accepted_class_rules(self) -> None:
        """Test only accepted class rules survive, in order."""
        sheet = StyleSheet()
        sheet.merge(Selector(SelectorKind.CLASS, "multicolor-0"), {"fill": "red"})
        sheet.merge(Selector(SelectorKind.CLASS, "outline"), {"fill": "blue"})
        sheet.merge(Selector(SelectorKind.ID, "monochrome-0"), {"fill": "green"})
        sheet.merge(Selector(SelectorKind.ELEMENT, "path"), {"fill": "black"})
        sheet.merge(Selector(SelectorKind.CLASS, "monochrome-0"), {"fill": "black"})

        filtered = filter_stylesheet(sheet)

        assert [s.name for s in filtered.rules] == ["multicolor-0", "monochrome-0"]
        assert filtered.declarations_for(Selector(SelectorKind.CLASS, "multicolor-0")) == {"fill": "red"}

    def test_does_not_modify_input(self) -> None:
        """Test the source stylesheet is left untouched."""
        sheet = StyleSheet()
        sheet.merge(Selector(SelectorKind.ELEMENT, "path"), {"fill": "black"})
        filter_stylesheet(sheet)
        assert len(sheet.rules) == 1
