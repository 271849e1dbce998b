"""Converters between fonttools pens and domain paths.

This module handles the conversion between SVG path data, fonttools pen
protocol calls and our domain model (Path and its segments).
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.svgLib.path import parse_path

from symbolizer.domain.geometry import Point
from symbolizer.domain.path import Close, Cubic, Line, Move, Path, Segment


class SegmentPen(BasePen):
    """Pen that records drawing calls as domain path segments.

    Quadratic curves are converted to cubics by BasePen, and arcs are
    converted to cubics by the SVG path parser, so only moves, lines,
    cubics and closes are recorded.

    Example:
        pen = SegmentPen()
        parse_path("M0 0L10 0L10 10Z", pen)
        path = pen.path()
    """

    def __init__(self) -> None:
        super().__init__(glyphSet=None)
        self._segments: list[Segment] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._segments.append(Move(Point(*pt)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self._segments.append(Line(Point(*pt)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self._segments.append(Cubic(to=Point(*pt3), control1=Point(*pt1), control2=Point(*pt2)))

    def _closePath(self) -> None:
        self._segments.append(Close())

    def _endPath(self) -> None:
        pass

    def path(self) -> Path:
        """Return the recorded segments as a Path."""
        return Path(tuple(self._segments))


def parse_path_data(data: str) -> Path:
    """Parse SVG path data (the ``d`` attribute) into a Path.

    Args:
        data: SVG path data string

    Returns:
        Path with absolute coordinates

    Raises:
        ValueError: If the path data is malformed
    """
    pen = SegmentPen()
    if data.strip():
        parse_path(data, pen)
    return pen.path()


def draw_path(path: Path, pen: Any) -> None:
    """Replay a Path into a fonttools-style pen.

    Open subpaths are terminated with ``endPath``, closed ones with
    ``closePath``.

    Args:
        path: Path to draw
        pen: Any object implementing the fonttools pen protocol
    """
    is_open = False
    for segment in path.segments:
        if isinstance(segment, Move):
            if is_open:
                pen.endPath()
            pen.moveTo(segment.to.to_tuple())
            is_open = True
        elif isinstance(segment, Line):
            pen.lineTo(segment.to.to_tuple())
        elif isinstance(segment, Cubic):
            pen.curveTo(
                segment.control1.to_tuple(),
                segment.control2.to_tuple(),
                segment.to.to_tuple(),
            )
        elif isinstance(segment, Close):
            if is_open:
                pen.closePath()
            is_open = False

    if is_open:
        pen.endPath()


class CoordinateFormatter:
    """Formats numbers with a capped number of fraction digits.

    Trailing zeros are removed, so ``1.500`` becomes ``1.5`` and ``2.0``
    becomes ``2``.

    Example:
        >>> CoordinateFormatter(precision=2)(3.14159)
        '3.14'
    """

    def __init__(self, precision: int = 3) -> None:
        self.precision = precision

    def __call__(self, value: float) -> str:
        text = f"{value:.{self.precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text in ("-0", ""):
            return "0"
        return text


def path_to_svg_data(path: Path, formatter: CoordinateFormatter | None = None) -> str:
    """Serialize a Path to SVG path data with absolute commands.

    Args:
        path: Path to serialize
        formatter: Number formatter (defaults to 3 fraction digits)

    Returns:
        SVG path data string
    """
    pen = SVGPathPen(None, ntos=formatter or CoordinateFormatter())
    draw_path(path, pen)
    return pen.getCommands()
