"""Core geometric value types.

This module defines the primitive types shared by every stage of the pipeline:
- Point: An immutable 2D coordinate
- Rect: An axis-aligned rectangle
- Matrix: A 2D affine transform
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Attributes:
        x: X coordinate in document units
        y: Y coordinate in document units
    """

    x: float
    y: float

    def minimum(self, other: "Point") -> "Point":
        """Component-wise minimum of two points."""
        return Point(min(self.x, other.x), min(self.y, other.y))

    def maximum(self, other: "Point") -> "Point":
        """Component-wise maximum of two points."""
        return Point(max(self.x, other.x), max(self.y, other.y))

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle.

    A rectangle with non-positive width or height is not a valid fitting
    destination; see ``is_valid``.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def is_valid(self) -> bool:
        """True if the rectangle has positive area."""
        return self.width > 0 and self.height > 0

    @classmethod
    def from_edges(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "Rect":
        """Build a rectangle from its edge coordinates."""
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


@dataclass(frozen=True, slots=True)
class Matrix:
    """A 2D affine transform.

    Maps ``(x, y)`` to ``(a*x + c*y + tx, b*x + d*y + ty)``, the same
    coefficient layout as the SVG ``matrix(a b c d e f)`` transform.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> "Matrix":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Matrix":
        return cls(tx=tx, ty=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "Matrix":
        return cls(a=sx, d=sy)

    @classmethod
    def rotation(cls, radians: float) -> "Matrix":
        cos = math.cos(radians)
        sin = math.sin(radians)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    @classmethod
    def skewing(cls, x_radians: float, y_radians: float) -> "Matrix":
        return cls(b=math.tan(y_radians), c=math.tan(x_radians))

    @property
    def is_identity(self) -> bool:
        return self == Matrix()

    def concatenated(self, other: "Matrix") -> "Matrix":
        """Combine two transforms.

        The result applies ``self`` first and ``other`` second, so a child's
        CTM is ``child.concatenated(parent_ctm)``.

        Args:
            other: Transform applied after this one

        Returns:
            Combined transform
        """
        return Matrix(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.tx * other.a + self.ty * other.c + other.tx,
            ty=self.tx * other.b + self.ty * other.d + other.ty,
        )

    def apply(self, point: Point) -> Point:
        """Transform a point."""
        return Point(
            self.a * point.x + self.c * point.y + self.tx,
            self.b * point.x + self.d * point.y + self.ty,
        )

    def to_tuple(self) -> tuple[float, float, float, float, float, float]:
        """Coefficients in fontTools transform order."""
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)
