"""Layer tree construction from parsed SVG documents.

The LayerBuilder walks the element tree of an SvgDocument and produces one
LayerNode per rendered element. Each node carries the element's class,
opacity, local transform, clip and mask references, and its drawable
contents with fully resolved (cascaded) fill, stroke and font styles.
"""

import math
import re
import xml.etree.ElementTree as ET

from symbolizer.domain import (
    Close,
    Cubic,
    FillAttributes,
    FillRule,
    LayerContent,
    LayerNode,
    Line,
    Matrix,
    Move,
    Path,
    Point,
    Segment,
    Selector,
    SelectorKind,
    ShapeContent,
    StrokeAttributes,
    TextAttributes,
    TextContent,
)
from symbolizer.exceptions import DocumentParseError
from symbolizer.io.converter import parse_path_data
from symbolizer.io.reader import SvgDocument, local_name, parse_declarations, parse_length

# Properties children inherit from their parent
INHERITED_PROPERTIES = frozenset({
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "font-family",
    "font-size",
    "text-anchor",
    "visibility",
})

PRESENTATION_ATTRIBUTES = INHERITED_PROPERTIES | {"opacity", "display", "clip-path", "mask"}

CONTAINER_ELEMENTS = frozenset({"svg", "g", "a", "switch"})
SHAPE_ELEMENTS = frozenset({"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"})

XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

# Cubic control point distance approximating a quarter circle
KAPPA = 0.5522847498307936

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
_URL_RE = re.compile(r"url\(\s*['\"]?#?([^'\")]+)['\"]?\s*\)")


def parse_numbers(value: str | None) -> list[float]:
    """Extract every number from an attribute value."""
    if not value:
        return []
    return [float(n) for n in _NUMBER_RE.findall(value)]


def parse_transform(value: str | None) -> Matrix:
    """Parse an SVG ``transform`` attribute.

    Transforms in the list apply right to left, as in SVG.

    Args:
        value: Attribute value such as ``"translate(10 20) scale(2)"``

    Returns:
        Combined transform (identity when value is empty)

    Raises:
        DocumentParseError: If a transform has the wrong number of arguments
    """
    matrix = Matrix.identity()
    if not value:
        return matrix

    for name, args in _TRANSFORM_RE.findall(value):
        numbers = parse_numbers(args)
        matrix = _make_transform(name, numbers).concatenated(matrix)

    return matrix


def _make_transform(name: str, n: list[float]) -> Matrix:
    if name == "matrix" and len(n) == 6:
        return Matrix(*n)
    if name == "translate" and len(n) in (1, 2):
        return Matrix.translation(n[0], n[1] if len(n) == 2 else 0.0)
    if name == "scale" and len(n) in (1, 2):
        return Matrix.scaling(n[0], n[1] if len(n) == 2 else n[0])
    if name == "rotate" and len(n) in (1, 3):
        rotation = Matrix.rotation(math.radians(n[0]))
        if len(n) == 1:
            return rotation
        cx, cy = n[1], n[2]
        return (
            Matrix.translation(-cx, -cy)
            .concatenated(rotation)
            .concatenated(Matrix.translation(cx, cy))
        )
    if name == "skewX" and len(n) == 1:
        return Matrix.skewing(math.radians(n[0]), 0.0)
    if name == "skewY" and len(n) == 1:
        return Matrix.skewing(0.0, math.radians(n[0]))
    raise DocumentParseError(f"invalid transform {name}({', '.join(str(x) for x in n)})")


def parse_opacity(value: str | None, default: float = 1.0) -> float:
    """Parse an opacity value (number or percentage), clamped to [0, 1]."""
    if value is None:
        return default
    value = value.strip()
    try:
        opacity = float(value[:-1]) / 100 if value.endswith("%") else float(value)
    except ValueError:
        return default
    return min(max(opacity, 0.0), 1.0)


def parse_reference(value: str | None) -> str | None:
    """Extract the id from a ``url(#id)`` reference; ``none`` yields None."""
    if value is None or value.strip() == "none":
        return None
    match = _URL_RE.search(value)
    return match.group(1) if match else None


def view_box_transform(document: SvgDocument, preserve_aspect_ratio: str | None) -> Matrix:
    """Transform mapping the document's viewBox onto its width and height.

    Supports ``preserveAspectRatio="none"`` and the default ``xMidYMid meet``
    alignment.
    """
    view_box = document.view_box
    if view_box is None:
        return Matrix.identity()

    sx = document.width / view_box.width
    sy = document.height / view_box.height
    origin = Matrix.translation(-view_box.x, -view_box.y)

    if preserve_aspect_ratio and preserve_aspect_ratio.strip().startswith("none"):
        return origin.concatenated(Matrix.scaling(sx, sy))

    scale = min(sx, sy)
    tx = (document.width - view_box.width * scale) / 2
    ty = (document.height - view_box.height * scale) / 2
    return origin.concatenated(Matrix.scaling(scale, scale)).concatenated(Matrix.translation(tx, ty))


class LayerBuilder:
    """Builds the layer tree of an SVG document.

    Example:
        document = parse_svg(data)
        layer = LayerBuilder(document).make_layer()
    """

    def __init__(self, document: SvgDocument) -> None:
        """Initialize the builder.

        Args:
            document: Parsed SVG document
        """
        self._document = document
        self._elements_by_id = {
            element.get("id"): element
            for element in document.root.iter()
            if element.get("id") is not None
        }
        self._active_references: set[str] = set()

    def make_layer(self) -> LayerNode:
        """Build the root layer of the document.

        Returns:
            Root LayerNode; its transform maps the viewBox onto the canvas
        """
        root = self._document.root
        style = self._resolve_style(root, {})
        layer = LayerNode(
            class_name=root.get("class"),
            opacity=parse_opacity(style.get("opacity")),
            transform=view_box_transform(self._document, root.get("preserveAspectRatio")),
            clip=parse_reference(style.get("clip-path")),
            mask=parse_reference(style.get("mask")),
            element_id=root.get("id"),
        )
        self._append_children(layer, root, style)
        return layer

    def _append_children(self, layer: LayerNode, element: ET.Element, style: dict[str, str]) -> None:
        for child in element:
            child_layer = self._make_layer(child, style)
            if child_layer is not None:
                layer.append(LayerContent(child_layer))

    def _make_layer(self, element: ET.Element, inherited: dict[str, str]) -> LayerNode | None:
        tag = local_name(element.tag) if isinstance(element.tag, str) else ""
        if tag not in CONTAINER_ELEMENTS and tag not in SHAPE_ELEMENTS and tag not in ("text", "use"):
            return None

        style = self._resolve_style(element, inherited)
        if style.get("display") == "none":
            return None

        transform = parse_transform(element.get("transform"))
        if tag in ("svg", "use"):
            offset = Matrix.translation(
                parse_length(element.get("x")) or 0.0,
                parse_length(element.get("y")) or 0.0,
            )
            transform = offset.concatenated(transform)

        layer = LayerNode(
            class_name=element.get("class"),
            opacity=parse_opacity(style.get("opacity")),
            transform=transform,
            clip=parse_reference(style.get("clip-path")),
            mask=parse_reference(style.get("mask")),
            element_id=element.get("id"),
        )
        visible = style.get("visibility", "visible") not in ("hidden", "collapse")

        if tag in CONTAINER_ELEMENTS:
            self._append_children(layer, element, style)
        elif tag == "use":
            self._append_reference(layer, element, style)
        elif tag == "text":
            text = self._make_text(element, style)
            if text is not None and visible:
                layer.append(text)
        else:
            path = self._make_shape_path(tag, element)
            if path is not None and not path.is_empty() and visible:
                layer.append(
                    ShapeContent(
                        path=path,
                        stroke=self._make_stroke(style),
                        fill=self._make_fill(style),
                    )
                )

        return layer

    def _append_reference(self, layer: LayerNode, element: ET.Element, style: dict[str, str]) -> None:
        href = element.get("href") or element.get(XLINK_HREF)
        if not href or not href.startswith("#"):
            return
        ref_id = href[1:]
        target = self._elements_by_id.get(ref_id)
        if target is None or ref_id in self._active_references:
            return

        self._active_references.add(ref_id)
        try:
            if local_name(target.tag) == "symbol":
                symbol_layer = LayerNode(class_name=target.get("class"), element_id=ref_id)
                self._append_children(symbol_layer, target, self._resolve_style(target, style))
                layer.append(LayerContent(symbol_layer))
            else:
                child = self._make_layer(target, style)
                if child is not None:
                    layer.append(LayerContent(child))
        finally:
            self._active_references.discard(ref_id)

    def _resolve_style(self, element: ET.Element, inherited: dict[str, str]) -> dict[str, str]:
        """Compute the element's style.

        Precedence (lowest to highest): inherited values, presentation
        attributes, stylesheet rules (element, class, id), inline style.
        """
        own: dict[str, str] = {}
        for name in PRESENTATION_ATTRIBUTES:
            value = element.get(name)
            if value is not None:
                own[name] = value.strip()

        for selector in self._selectors_for(element):
            for sheet in self._document.stylesheets:
                own.update(sheet.declarations_for(selector))

        own.update(parse_declarations(element.get("style", "")))

        computed = {k: v for k, v in inherited.items() if k in INHERITED_PROPERTIES}
        for name, value in own.items():
            if value == "inherit":
                if name in inherited:
                    computed[name] = inherited[name]
                continue
            computed[name] = value
        return computed

    def _selectors_for(self, element: ET.Element) -> list[Selector]:
        tag = local_name(element.tag) if isinstance(element.tag, str) else ""
        selectors = [Selector(SelectorKind.ELEMENT, tag)]
        selectors.extend(
            Selector(SelectorKind.CLASS, name) for name in (element.get("class") or "").split()
        )
        if element.get("id"):
            selectors.append(Selector(SelectorKind.ID, element.get("id", "")))
        return selectors

    def _make_fill(self, style: dict[str, str]) -> FillAttributes:
        color = style.get("fill", "black")
        return FillAttributes(
            color=None if color == "none" else color,
            opacity=parse_opacity(style.get("fill-opacity")),
            rule=FillRule.EVENODD if style.get("fill-rule") == "evenodd" else FillRule.NONZERO,
        )

    def _make_stroke(self, style: dict[str, str]) -> StrokeAttributes:
        color = style.get("stroke", "none")
        width = parse_length(style.get("stroke-width"))
        miter = parse_numbers(style.get("stroke-miterlimit"))
        return StrokeAttributes(
            color=None if color == "none" else color,
            width=1.0 if width is None else width,
            opacity=parse_opacity(style.get("stroke-opacity")),
            line_cap=style.get("stroke-linecap", "butt"),
            line_join=style.get("stroke-linejoin", "miter"),
            miter_limit=miter[0] if miter else 4.0,
        )

    def _make_text(self, element: ET.Element, style: dict[str, str]) -> TextContent | None:
        text = " ".join("".join(element.itertext()).split())
        if not text:
            return None
        xs = parse_numbers(element.get("x"))
        ys = parse_numbers(element.get("y"))
        font_size = parse_length(style.get("font-size"))
        return TextContent(
            text=text,
            point=Point(xs[0] if xs else 0.0, ys[0] if ys else 0.0),
            attributes=TextAttributes(
                font_family=style.get("font-family", "sans-serif"),
                font_size=16.0 if font_size is None else font_size,
                anchor=style.get("text-anchor", "start"),
            ),
        )

    def _make_shape_path(self, tag: str, element: ET.Element) -> Path | None:
        if tag == "path":
            try:
                return parse_path_data(element.get("d", ""))
            except (ValueError, IndexError) as e:
                raise DocumentParseError(
                    f"invalid path data: {e}", self._document.source
                ) from e
        if tag == "rect":
            return self._make_rect(element)
        if tag == "circle":
            r = parse_length(element.get("r")) or 0.0
            return make_ellipse(self._length(element, "cx"), self._length(element, "cy"), r, r)
        if tag == "ellipse":
            rx = parse_length(element.get("rx"))
            ry = parse_length(element.get("ry"))
            rx = ry if rx is None else rx
            ry = rx if ry is None else ry
            return make_ellipse(self._length(element, "cx"), self._length(element, "cy"), rx or 0.0, ry or 0.0)
        if tag == "line":
            start = Point(self._length(element, "x1"), self._length(element, "y1"))
            end = Point(self._length(element, "x2"), self._length(element, "y2"))
            return Path((Move(start), Line(end)))
        if tag in ("polyline", "polygon"):
            return make_polyline(parse_numbers(element.get("points")), closed=tag == "polygon")
        return None

    def _make_rect(self, element: ET.Element) -> Path | None:
        width = parse_length(element.get("width")) or 0.0
        height = parse_length(element.get("height")) or 0.0
        rx = parse_length(element.get("rx"))
        ry = parse_length(element.get("ry"))
        rx = ry if rx is None else rx
        ry = rx if ry is None else ry
        return make_rect(
            self._length(element, "x"),
            self._length(element, "y"),
            width,
            height,
            rx or 0.0,
            ry or 0.0,
        )

    @staticmethod
    def _length(element: ET.Element, name: str) -> float:
        return parse_length(element.get(name)) or 0.0


def make_rect(x: float, y: float, width: float, height: float, rx: float = 0.0, ry: float = 0.0) -> Path | None:
    """Build a (possibly rounded) rectangle path drawn clockwise on screen."""
    if width <= 0 or height <= 0:
        return None

    rx = min(max(rx, 0.0), width / 2)
    ry = min(max(ry, 0.0), height / 2)
    if rx == 0 or ry == 0:
        return Path((
            Move(Point(x, y)),
            Line(Point(x + width, y)),
            Line(Point(x + width, y + height)),
            Line(Point(x, y + height)),
            Close(),
        ))

    kx = rx * KAPPA
    ky = ry * KAPPA
    right = x + width
    bottom = y + height
    return Path((
        Move(Point(x + rx, y)),
        Line(Point(right - rx, y)),
        Cubic(Point(right, y + ry), Point(right - rx + kx, y), Point(right, y + ry - ky)),
        Line(Point(right, bottom - ry)),
        Cubic(Point(right - rx, bottom), Point(right, bottom - ry + ky), Point(right - rx + kx, bottom)),
        Line(Point(x + rx, bottom)),
        Cubic(Point(x, bottom - ry), Point(x + rx - kx, bottom), Point(x, bottom - ry + ky)),
        Line(Point(x, y + ry)),
        Cubic(Point(x + rx, y), Point(x, y + ry - ky), Point(x + rx - kx, y)),
        Close(),
    ))


def make_ellipse(cx: float, cy: float, rx: float, ry: float) -> Path | None:
    """Build an ellipse path from four cubic quadrants."""
    if rx <= 0 or ry <= 0:
        return None

    kx = rx * KAPPA
    ky = ry * KAPPA
    return Path((
        Move(Point(cx + rx, cy)),
        Cubic(Point(cx, cy + ry), Point(cx + rx, cy + ky), Point(cx + kx, cy + ry)),
        Cubic(Point(cx - rx, cy), Point(cx - kx, cy + ry), Point(cx - rx, cy + ky)),
        Cubic(Point(cx, cy - ry), Point(cx - rx, cy - ky), Point(cx - kx, cy - ry)),
        Cubic(Point(cx + rx, cy), Point(cx + kx, cy - ry), Point(cx + rx, cy - ky)),
        Close(),
    ))


def make_polyline(numbers: list[float], closed: bool) -> Path | None:
    """Build a polyline (or polygon when closed) from a flat coordinate list."""
    points = [Point(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2)]
    if len(points) < 2:
        return None

    segments: list[Segment] = [Move(points[0])]
    segments.extend(Line(p) for p in points[1:])
    if closed:
        segments.append(Close())
    return Path(tuple(segments))
