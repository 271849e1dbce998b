"""SVG reader for loading source documents.

This module provides parse_svg for turning SVG markup into an SvgDocument
and the SvgReader class for loading documents from disk.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from symbolizer.domain import Rect, Selector, StyleSheet
from symbolizer.exceptions import DocumentLoadError, DocumentParseError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Conversion of absolute CSS units to user units (px)
_UNIT_SCALE = {
    "": 1.0,
    "px": 1.0,
    "pt": 4.0 / 3.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
}

_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-z%]*)\s*$")
_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")


def local_name(tag: str) -> str:
    """Strip the XML namespace from an element tag."""
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def parse_length(value: str | None) -> float | None:
    """Parse an SVG length in absolute units.

    Args:
        value: Attribute value such as ``"24"``, ``"24px"`` or ``"18pt"``

    Returns:
        Length in user units, or None for missing, relative or invalid values
    """
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        return None
    number, unit = match.groups()
    scale = _UNIT_SCALE.get(unit)
    if scale is None:
        return None
    return float(number) * scale


def parse_declarations(text: str) -> dict[str, str]:
    """Parse CSS declarations (``name: value; ...``) into a dict."""
    declarations: dict[str, str] = {}
    for item in text.split(";"):
        if ":" not in item:
            continue
        name, value = item.split(":", 1)
        name = name.strip().lower()
        value = value.strip()
        if name and value:
            declarations[name] = value
    return declarations


def parse_stylesheet(css: str) -> StyleSheet:
    """Parse the text of a ``<style>`` element.

    Only simple selectors (``.class``, ``#id``, ``element``) are kept;
    compound selectors and at-rules are ignored.

    Args:
        css: CSS source

    Returns:
        StyleSheet with rules in source order
    """
    sheet = StyleSheet()
    css = _CSS_COMMENT_RE.sub("", css)

    for selectors, body in _CSS_RULE_RE.findall(css):
        if selectors.strip().startswith("@"):
            continue
        declarations = parse_declarations(body)
        if not declarations:
            continue
        for text in selectors.split(","):
            selector = Selector.parse(text)
            if selector is not None:
                sheet.merge(selector, declarations)

    return sheet


@dataclass
class SvgDocument:
    """A parsed SVG document.

    Attributes:
        width: Document width in user units
        height: Document height in user units
        root: Root ``<svg>`` element
        view_box: The ``viewBox`` rectangle, if declared
        stylesheets: Parsed ``<style>`` elements in document order
        source: Name of the document's origin (file path or label)
    """

    width: float
    height: float
    root: ET.Element
    view_box: Rect | None = None
    stylesheets: list[StyleSheet] = field(default_factory=list)
    source: str = "<memory>"


def _parse_view_box(value: str | None, source: str) -> Rect | None:
    if value is None:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        raise DocumentParseError(f"invalid viewBox '{value}'", source)
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        raise DocumentParseError(f"invalid viewBox '{value}'", source) from None
    if width <= 0 or height <= 0:
        raise DocumentParseError(f"invalid viewBox '{value}'", source)
    return Rect(x, y, width, height)


def parse_svg(data: bytes | str, source: str = "<memory>") -> SvgDocument:
    """Parse SVG markup into an SvgDocument.

    Width and height come from the root's attributes, falling back to the
    ``viewBox`` size when they are missing or relative.

    Args:
        data: SVG markup
        source: Label used in error messages

    Returns:
        Parsed document

    Raises:
        DocumentParseError: If the markup is malformed or not an SVG document
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DocumentParseError(str(e), source) from e

    if local_name(root.tag) != "svg":
        raise DocumentParseError(f"root element is <{local_name(root.tag)}>, expected <svg>", source)

    view_box = _parse_view_box(root.get("viewBox"), source)
    width = parse_length(root.get("width"))
    height = parse_length(root.get("height"))

    if width is None:
        width = view_box.width if view_box else None
    if height is None:
        height = view_box.height if view_box else None
    if width is None or height is None:
        raise DocumentParseError("missing width/height and viewBox", source)
    if width <= 0 or height <= 0:
        raise DocumentParseError(f"invalid size {width}x{height}", source)

    stylesheets = [
        parse_stylesheet("".join(element.itertext()))
        for element in root.iter()
        if local_name(element.tag) == "style"
    ]

    return SvgDocument(
        width=width,
        height=height,
        root=root,
        view_box=view_box,
        stylesheets=stylesheets,
        source=source,
    )


class SvgReader:
    """Loads SVG documents from disk.

    Example:
        reader = SvgReader(Path("icon.svg"))
        document = reader.read()
    """

    def __init__(self, svg_path: Path) -> None:
        """Initialize the reader.

        Args:
            svg_path: Path to the SVG file
        """
        self._svg_path = svg_path

    @property
    def path(self) -> Path:
        return self._svg_path

    def read(self) -> SvgDocument:
        """Read and parse the document.

        Returns:
            Parsed document

        Raises:
            FileNotFoundError: If the file does not exist
            DocumentLoadError: If the file cannot be read
            DocumentParseError: If the markup is invalid
        """
        if not self._svg_path.exists():
            raise FileNotFoundError(f"SVG file not found: {self._svg_path}")

        try:
            data = self._svg_path.read_bytes()
        except OSError as e:
            raise DocumentLoadError(str(self._svg_path), str(e)) from e

        return parse_svg(data, source=str(self._svg_path))
