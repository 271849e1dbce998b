"""Layer tree representation of an SVG document.

The layer builder turns each rendered SVG element into a LayerNode carrying
the element's class, opacity, transform, clip and mask, and an ordered list of
drawable contents.
"""

from dataclasses import dataclass, field
from enum import Enum

from symbolizer.domain.geometry import Matrix, Point
from symbolizer.domain.path import Path


class FillRule(str, Enum):
    """SVG fill rule."""

    NONZERO = "nonzero"
    EVENODD = "evenodd"


@dataclass(frozen=True)
class FillAttributes:
    """Resolved fill style of a shape.

    Attributes:
        color: Fill paint, or None for ``fill="none"``
        opacity: Fill opacity in [0, 1]
        rule: Fill rule
    """

    color: str | None = "black"
    opacity: float = 1.0
    rule: FillRule = FillRule.NONZERO

    @property
    def is_visible(self) -> bool:
        return self.color is not None and self.opacity > 0


@dataclass(frozen=True)
class StrokeAttributes:
    """Resolved stroke style of a shape."""

    color: str | None = None
    width: float = 1.0
    opacity: float = 1.0
    line_cap: str = "butt"
    line_join: str = "miter"
    miter_limit: float = 4.0

    @property
    def is_visible(self) -> bool:
        return self.color is not None and self.width > 0


@dataclass(frozen=True)
class TextAttributes:
    """Resolved font style of a text run."""

    font_family: str = "sans-serif"
    font_size: float = 16.0
    anchor: str = "start"


@dataclass(frozen=True)
class ShapeContent:
    """A shape outline with its stroke and fill styles."""

    path: Path
    stroke: StrokeAttributes = field(default_factory=StrokeAttributes)
    fill: FillAttributes = field(default_factory=FillAttributes)


@dataclass(frozen=True)
class TextContent:
    """A run of text anchored at ``point``."""

    text: str
    point: Point
    attributes: TextAttributes = field(default_factory=TextAttributes)


@dataclass(frozen=True)
class LayerContent:
    """A nested layer."""

    layer: "LayerNode"


Content = ShapeContent | TextContent | LayerContent


@dataclass
class LayerNode:
    """A node of the layer tree.

    Attributes:
        class_name: Value of the element's ``class`` attribute
        opacity: Group opacity in [0, 1]
        transform: Local transform relative to the parent layer
        clip: Reference to the clip path applied to this layer, if any
        mask: Reference to the mask applied to this layer, if any
        contents: Drawable contents in document order
        element_id: Value of the element's ``id`` attribute
    """

    class_name: str | None = None
    opacity: float = 1.0
    transform: Matrix = field(default_factory=Matrix)
    clip: str | None = None
    mask: str | None = None
    contents: list[Content] = field(default_factory=list)
    element_id: str | None = None

    def append(self, content: Content) -> None:
        self.contents.append(content)
