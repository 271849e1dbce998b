"""Path geometry.

A path is an ordered sequence of drawing segments (move, line, cubic curve,
close). Quadratic curves and arcs are converted to cubics when a path is
built, so every path in the pipeline uses just these four segment types.
"""

import math
from dataclasses import dataclass, field

from symbolizer.domain.geometry import Matrix, Point, Rect


@dataclass(frozen=True, slots=True)
class Move:
    """Start a new subpath at ``to``."""

    to: Point


@dataclass(frozen=True, slots=True)
class Line:
    """Straight line to ``to``."""

    to: Point


@dataclass(frozen=True, slots=True)
class Cubic:
    """Cubic Bezier curve to ``to`` with two control points."""

    to: Point
    control1: Point
    control2: Point


@dataclass(frozen=True, slots=True)
class Close:
    """Close the current subpath."""


Segment = Move | Line | Cubic | Close


def _segment_points(segment: Segment) -> tuple[Point, ...]:
    if isinstance(segment, Cubic):
        return (segment.control1, segment.control2, segment.to)
    if isinstance(segment, Close):
        return ()
    return (segment.to,)


def _transform_segment(segment: Segment, matrix: Matrix) -> Segment:
    if isinstance(segment, Move):
        return Move(matrix.apply(segment.to))
    if isinstance(segment, Line):
        return Line(matrix.apply(segment.to))
    if isinstance(segment, Cubic):
        return Cubic(
            to=matrix.apply(segment.to),
            control1=matrix.apply(segment.control1),
            control2=matrix.apply(segment.control2),
        )
    return segment


@dataclass(frozen=True)
class Path:
    """An immutable sequence of drawing segments.

    Attributes:
        segments: Segments in drawing order
    """

    segments: tuple[Segment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    def is_empty(self) -> bool:
        """True when the path has no segments."""
        return len(self.segments) == 0

    def points(self) -> list[Point]:
        """All end and control points in drawing order."""
        result: list[Point] = []
        for segment in self.segments:
            result.extend(_segment_points(segment))
        return result

    @property
    def bounds(self) -> Rect:
        """Bounding rectangle of every end and control point.

        An empty path has a zero rectangle at the origin.
        """
        points = self.points()
        if not points:
            return Rect(0.0, 0.0, 0.0, 0.0)

        lower = Point(math.inf, math.inf)
        upper = Point(-math.inf, -math.inf)
        for point in points:
            lower = lower.minimum(point)
            upper = upper.maximum(point)
        return Rect.from_edges(lower.x, lower.y, upper.x, upper.y)

    def applying(self, matrix: Matrix) -> "Path":
        """Return a copy with every coordinate transformed by ``matrix``."""
        return Path(tuple(_transform_segment(s, matrix) for s in self.segments))

    def subpaths(self) -> list["Path"]:
        """Split the path at each move segment.

        Drawing segments that appear before any move start at the origin,
        matching how SVG renderers treat them.
        """
        result: list[list[Segment]] = []
        current: list[Segment] = []

        for segment in self.segments:
            if isinstance(segment, Move):
                if current:
                    result.append(current)
                current = [segment]
            else:
                if not current:
                    current = [Move(Point(0.0, 0.0))]
                current.append(segment)

        if current:
            result.append(current)

        return [Path(tuple(segments)) for segments in result]

    def is_closed(self) -> bool:
        """True if the last segment closes the (final) subpath."""
        return bool(self.segments) and isinstance(self.segments[-1], Close)

    def reversed(self) -> "Path":
        """Reverse the drawing direction of every subpath.

        Each subpath keeps its start point; curve control points are swapped
        so the reversed path traces the same outline.
        """
        reversed_segments: list[Segment] = []
        for subpath in self.subpaths():
            reversed_segments.extend(_reverse_subpath(subpath.segments))
        return Path(tuple(reversed_segments))

    @classmethod
    def concatenate(cls, paths: "list[Path]") -> "Path":
        """Join several paths into one multi-subpath path."""
        segments: list[Segment] = []
        for path in paths:
            segments.extend(path.segments)
        return cls(tuple(segments))


def _reverse_subpath(segments: tuple[Segment, ...]) -> list[Segment]:
    """Reverse one subpath (first segment must be a move)."""
    closed = isinstance(segments[-1], Close)
    drawing = [s for s in segments[1:] if not isinstance(s, Close)]
    start = segments[0].to  # type: ignore[union-attr]

    if not drawing:
        return list(segments)

    # Vertex i is the start of drawing[i]; the last vertex is the final end point.
    vertices = [start] + [s.to for s in drawing]  # type: ignore[union-attr]

    if closed:
        # Implicit closing line back to start, kept explicit so the start
        # point of the reversed subpath is unchanged.
        if vertices[-1] != start:
            drawing.append(Line(start))
            vertices.append(start)
        result: list[Segment] = [Move(start)]
    else:
        result = [Move(vertices[-1])]

    for index in range(len(drawing) - 1, -1, -1):
        segment = drawing[index]
        target = vertices[index]
        if isinstance(segment, Cubic):
            result.append(Cubic(to=target, control1=segment.control2, control2=segment.control1))
        else:
            result.append(Line(target))

    if closed:
        # Drop the redundant final line onto the start point, then close.
        if isinstance(result[-1], Line) and result[-1].to == start:
            result.pop()
        result.append(Close())

    return result


@dataclass(frozen=True)
class SymbolPath:
    """A path tagged with the style class of its enclosing symbol layer.

    Attributes:
        path: Path geometry in document coordinates
        class_name: Style class (e.g. ``monochrome-0``) or None
    """

    path: Path
    class_name: str | None = None
