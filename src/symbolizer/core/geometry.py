"""Geometric operations for fitting artwork into the template.

This module provides the pure geometric primitives of the pipeline:
- Bounding box of a set of paths
- Resolution of artwork bounds against inset overrides
- Uniform-scale fit transform between two rectangles
- Polygon utilities (signed area, point containment, winding number)
- Path flattening into polygons
- Conversion of shapely polygons back into paths

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

from symbolizer.config import Insets
from symbolizer.core._bezier import flatten_cubic
from symbolizer.domain import Close, Cubic, Line, Matrix, Move, Path, Point, Rect, Segment, SymbolPath
from symbolizer.exceptions import GeometryError, InvalidInsetsError


def bounds_of(paths: list[SymbolPath]) -> Rect:
    """Calculate the rectangle enclosing every path's bounds.

    Args:
        paths: Non-empty list of symbol paths

    Returns:
        Tight rectangle around all path bounds

    Raises:
        GeometryError: If paths is empty
    """
    if not paths:
        raise GeometryError("Cannot compute bounds of an empty path list")

    lower = Point(math.inf, math.inf)
    upper = Point(-math.inf, -math.inf)
    for symbol_path in paths:
        bounds = symbol_path.path.bounds
        lower = lower.minimum(Point(bounds.min_x, bounds.min_y))
        upper = upper.maximum(Point(bounds.max_x, bounds.max_y))

    return Rect.from_edges(lower.x, lower.y, upper.x, upper.y)


@dataclass(frozen=True)
class ResolvedInsets:
    """Per-edge insets after applying overrides, in document units."""

    top: float
    left: float
    bottom: float
    right: float

    def format(self) -> str:
        """Render as ``top,left,bottom,right`` with at most 4 fraction digits.

        Examples:
            >>> ResolvedInsets(10.0, 2.5, 0.123456, 3.0).format()
            '10,2.5,0.1235,3'
        """
        return ",".join(
            _format_inset(value) for value in (self.top, self.left, self.bottom, self.right)
        )


def _format_inset(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def resolve_bounds(
    width: float,
    height: float,
    auto_bounds: Rect,
    insets: Insets,
) -> tuple[Rect, ResolvedInsets]:
    """Resolve the artwork bounds used for fitting.

    Each edge uses the caller's inset when present and otherwise the margin
    left by ``auto_bounds`` inside the document. When no inset is given at
    all, ``auto_bounds`` is returned unchanged and the resolved values are
    informational only.

    Args:
        width: Document width
        height: Document height
        auto_bounds: Bounds computed from the artwork
        insets: Inset overrides for the variant

    Returns:
        Tuple of (bounds, resolved_insets)

    Raises:
        InvalidInsetsError: If the insets leave a non-positive width or height
    """
    resolved = ResolvedInsets(
        top=insets.top if insets.top is not None else auto_bounds.min_y,
        left=insets.left if insets.left is not None else auto_bounds.min_x,
        bottom=insets.bottom if insets.bottom is not None else height - auto_bounds.max_y,
        right=insets.right if insets.right is not None else width - auto_bounds.max_x,
    )

    if insets.is_empty:
        return auto_bounds, resolved

    bounds = Rect(
        x=resolved.left,
        y=resolved.top,
        width=width - (resolved.left + resolved.right),
        height=height - (resolved.top + resolved.bottom),
    )
    if not bounds.is_valid:
        raise InvalidInsetsError()

    return bounds, resolved


def fit_transform(source: Rect, destination: Rect) -> Matrix:
    """Calculate the transform that fits ``source`` centred in ``destination``.

    Uses the largest uniform scale that keeps the source inside the
    destination on both axes, then translates the scaled source centre onto
    the destination centre. Scale is applied first.

    Args:
        source: Rectangle to fit
        destination: Rectangle to fit into

    Returns:
        Scale-then-translate transform

    Raises:
        GeometryError: If destination has no area or source has no extent

    Examples:
        >>> m = fit_transform(Rect(0, 0, 10, 10), Rect(0, 0, 100, 50))
        >>> (m.a, m.tx, m.ty)
        (5.0, 25.0, 0.0)
    """
    if not destination.is_valid:
        raise GeometryError(f"Invalid fit destination: {destination}")

    ratios = []
    if source.width > 0:
        ratios.append(destination.width / source.width)
    if source.height > 0:
        ratios.append(destination.height / source.height)
    if not ratios:
        raise GeometryError(f"Cannot fit an empty source rectangle: {source}")

    scale = min(ratios)
    tx = destination.mid_x - source.mid_x * scale
    ty = destination.mid_y - source.mid_y * scale

    return Matrix.scaling(scale, scale).concatenated(Matrix.translation(tx, ty))


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    With the y axis pointing down (SVG convention) a positive area means the
    polygon is drawn clockwise on screen.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> signed_area([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def winding_number(point: Point, polygon: list[Point]) -> int:
    """Calculate the winding number of a polygon around a point.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        Signed number of times the polygon winds around the point
    """
    n = len(polygon)
    if n < 3:
        return 0

    winding = 0
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        cross = (b.x - a.x) * (point.y - a.y) - (point.x - a.x) * (b.y - a.y)
        if a.y <= point.y:
            if b.y > point.y and cross > 0:
                winding += 1
        elif b.y <= point.y and cross < 0:
            winding -= 1

    return winding


def flatten_path(path: Path, tolerance: float = 0.1) -> list[tuple[list[Point], bool]]:
    """Approximate every subpath of a path with a polyline.

    Args:
        path: Path to flatten
        tolerance: Maximum distance between curve and polyline

    Returns:
        List of (points, closed) tuples, one per subpath
    """
    polylines: list[tuple[list[Point], bool]] = []

    for subpath in path.subpaths():
        points: list[Point] = []
        closed = False
        for segment in subpath.segments:
            if isinstance(segment, Move):
                points = [segment.to]
            elif isinstance(segment, Line):
                points.append(segment.to)
            elif isinstance(segment, Cubic):
                curve = flatten_cubic(
                    [points[-1], segment.control1, segment.control2, segment.to],
                    tolerance,
                )
                points.extend(curve[1:])
            elif isinstance(segment, Close):
                closed = True

        if closed and len(points) > 1 and points[-1] == points[0]:
            points.pop()
        polylines.append((points, closed))

    return polylines


def polygons_to_path(geometry: BaseGeometry) -> Path:
    """Convert shapely polygons to a closed path, one subpath per ring.

    Exterior rings and holes are oriented in opposite directions, so the
    path fills the polygons under the nonzero rule.

    Args:
        geometry: Polygon, MultiPolygon or collection containing polygons

    Returns:
        Path with line segments only
    """
    if isinstance(geometry, Polygon):
        polygons = [geometry]
    elif isinstance(geometry, MultiPolygon):
        polygons = list(geometry.geoms)
    else:
        polygons = [g for g in getattr(geometry, "geoms", []) if isinstance(g, Polygon)]

    segments: list[Segment] = []
    for polygon in polygons:
        if polygon.is_empty:
            continue
        polygon = orient(polygon, sign=1.0)
        for ring in [polygon.exterior, *polygon.interiors]:
            coords = list(ring.coords)[:-1]
            if len(coords) < 3:
                continue
            segments.append(Move(Point(*coords[0])))
            segments.extend(Line(Point(*c)) for c in coords[1:])
            segments.append(Close())

    return Path(tuple(segments))
