"""Fill rule normalization.

The template format only supports the nonzero fill rule. A path drawn with
the even-odd rule is rewritten so that it fills the same region under
nonzero: every subpath is oriented by how deeply it is nested inside the
other subpaths. Subpaths at even depth wind one way and subpaths at odd
depth the other, so winding numbers alternate between 1 and 0 exactly where
the even-odd parity alternates between filled and empty.

Nesting only describes subpaths that do not cross. When subpaths cross
themselves or each other, the even-odd region is rebuilt with shapely and
returned as a line-only outline.
"""

from dataclasses import dataclass

import structlog
from shapely import make_valid
from shapely.geometry import LinearRing, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from symbolizer.core.geometry import flatten_path, point_in_polygon, polygons_to_path, signed_area
from symbolizer.domain import Path, Point

logger = structlog.get_logger(__name__)


@dataclass
class SubpathNode:
    """Nesting information for one subpath.

    Attributes:
        index: Index of the subpath within the path
        area: Signed area of the flattened subpath
        depth: Number of other subpaths that contain it
    """

    index: int
    area: float
    depth: int

    @property
    def needs_reversal(self) -> bool:
        """True when the orientation does not match the nesting depth."""
        if self.area == 0:
            return False
        wants_positive = self.depth % 2 == 0
        return (self.area > 0) != wants_positive


def analyze_nesting(path: Path, tolerance: float = 0.1) -> list[SubpathNode]:
    """Calculate the signed area and nesting depth of each subpath.

    Args:
        path: Path to analyze
        tolerance: Curve flattening tolerance

    Returns:
        One SubpathNode per subpath, in path order
    """
    polygons = [points for points, _closed in flatten_path(path, tolerance)]
    nodes: list[SubpathNode] = []

    for index, polygon in enumerate(polygons):
        area = signed_area(polygon)
        depth = 0
        if polygon:
            # Use first point as representative test point
            test_point: Point = polygon[0]
            for other_index, other in enumerate(polygons):
                if other_index == index:
                    continue
                if point_in_polygon(test_point, other):
                    depth += 1
        nodes.append(SubpathNode(index=index, area=area, depth=depth))

    return nodes


def make_nonzero(path: Path, tolerance: float = 0.1) -> Path:
    """Rewrite an even-odd path so it renders identically with nonzero fill.

    Args:
        path: Path filled with the even-odd rule
        tolerance: Curve flattening tolerance used for nesting tests

    Returns:
        Path with subpath orientations alternating by nesting depth, or a
        line-only outline of the even-odd region when subpaths cross
    """
    polygons = [points for points, _closed in flatten_path(path, tolerance)]
    if has_crossings(polygons):
        logger.debug("Crossing subpaths rebuilt", subpaths=len(polygons))
        return polygons_to_path(even_odd_region(polygons))

    subpaths = path.subpaths()
    if len(subpaths) < 2:
        return path

    nodes = analyze_nesting(path, tolerance)
    oriented = [
        subpath.reversed() if node.needs_reversal else subpath
        for subpath, node in zip(subpaths, nodes)
    ]
    return Path.concatenate(oriented)


def has_crossings(polygons: list[list[Point]]) -> bool:
    """Check whether any subpath crosses itself or touches another subpath."""
    rings = [LinearRing([p.to_tuple() for p in points]) for points in polygons if len(set(points)) >= 3]
    if any(not ring.is_simple for ring in rings):
        return True
    return any(
        rings[i].intersects(rings[j])
        for i in range(len(rings))
        for j in range(i + 1, len(rings))
    )


def even_odd_region(polygons: list[list[Point]]) -> BaseGeometry:
    """Area covered by an odd number of subpaths.

    Args:
        polygons: Flattened subpaths

    Returns:
        Polygonal geometry of the even-odd filled region
    """
    region: BaseGeometry = Polygon()
    for points in polygons:
        if len(set(points)) < 3:
            continue
        area = make_valid(Polygon([p.to_tuple() for p in points]))
        region = region.symmetric_difference(_polygonal(area))
    return region


def _polygonal(geometry: BaseGeometry) -> BaseGeometry:
    if isinstance(geometry, (Polygon, MultiPolygon)):
        return geometry
    parts = [g for g in getattr(geometry, "geoms", []) if isinstance(g, (Polygon, MultiPolygon))]
    return unary_union(parts) if parts else Polygon()
