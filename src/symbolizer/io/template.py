"""Symbol template skeleton.

The template is a fixed SVG document with three weight regions
(Ultralight, Regular, Black). Each region is made of a left and right margin
guide in the ``Guides`` group and a content group in the ``Symbols`` group:

    Guides/left-margin-Regular-S    <path d="M1403.33 600.784 L1403.33 720.121"/>
    Guides/right-margin-Regular-S   <path d="M1496.36 600.784 L1496.36 720.121"/>
    Symbols/Regular-S               <g> ...artwork paths... </g>

A guide's position is the point of the first move in its path data.
"""

import xml.etree.ElementTree as ET
from importlib import resources

from symbolizer.domain import Guide, GuidePair, Move, Path, Point, StyleSheet, Variant
from symbolizer.exceptions import TemplateError
from symbolizer.io.converter import CoordinateFormatter, parse_path_data, path_to_svg_data
from symbolizer.io.reader import SVG_NAMESPACE, local_name

TEMPLATE_RESOURCE = "data/template.svg"


def load_skeleton() -> bytes:
    """Read the packaged template skeleton."""
    return resources.files(__package__).joinpath(TEMPLATE_RESOURCE).read_bytes()


def _child(parent: ET.Element, element_id: str, tag: str) -> ET.Element:
    for element in parent:
        if element.get("id") == element_id and local_name(element.tag) == tag:
            return element
    raise TemplateError(element_id)


class GuideElement:
    """A margin guide path inside the template."""

    def __init__(self, element: ET.Element, formatter: CoordinateFormatter) -> None:
        self._element = element
        self._formatter = formatter
        self._path = parse_path_data(element.get("d", ""))
        if not self._path.segments or not isinstance(self._path.segments[0], Move):
            raise TemplateError(f"{element.get('id')} (guide path must start with a move)")

    @property
    def guide(self) -> Guide:
        start = self._path.segments[0].to  # type: ignore[union-attr]
        return Guide(x=start.x, y=start.y)

    @guide.setter
    def guide(self, value: Guide) -> None:
        segments = (Move(Point(value.x, value.y)),) + self._path.segments[1:]
        self._path = Path(segments)
        self._element.set("d", path_to_svg_data(self._path, self._formatter))


class TemplateRegion:
    """One weight region of the template: two guides and a content group."""

    def __init__(
        self,
        variant: Variant,
        left: GuideElement,
        right: GuideElement,
        contents: ET.Element,
        formatter: CoordinateFormatter,
    ) -> None:
        self.variant = variant
        self._left = left
        self._right = right
        self._contents = contents
        self._formatter = formatter

    @property
    def guides(self) -> GuidePair:
        """Current guide positions."""
        return GuidePair(left=self._left.guide, right=self._right.guide)

    @guides.setter
    def guides(self, value: GuidePair) -> None:
        self._left.guide = value.left
        self._right.guide = value.right

    @property
    def content_elements(self) -> list[ET.Element]:
        """Path elements currently in the content group."""
        return list(self._contents)

    def set_paths(self, paths: list[tuple[Path, str | None]]) -> None:
        """Replace the region's content with the given paths.

        Args:
            paths: (path, class_name) pairs in template coordinates
        """
        for element in list(self._contents):
            self._contents.remove(element)
        self._contents.text = None

        for path, class_name in paths:
            element = ET.SubElement(self._contents, f"{{{SVG_NAMESPACE}}}path")
            if class_name is not None:
                element.set("class", class_name)
            element.set("d", path_to_svg_data(path, self._formatter))


class SymbolTemplate:
    """In-memory symbol template document.

    A new template is parsed from the skeleton for every render, so regions
    can be mutated freely.

    Example:
        template = SymbolTemplate.make(precision=3)
        region = template.region(Variant.REGULAR)
    """

    def __init__(self, root: ET.Element, precision: int = 3) -> None:
        """Initialize the template.

        Args:
            root: Root element of the template document
            precision: Maximum fraction digits for written coordinates

        Raises:
            TemplateError: If a region's guides or content group are missing
        """
        self.root = root
        self.formatter = CoordinateFormatter(precision)
        self.stylesheets: list[StyleSheet] = []

        guides = _child(root, "Guides", "g")
        symbols = _child(root, "Symbols", "g")
        self._regions = {
            variant: TemplateRegion(
                variant=variant,
                left=GuideElement(_child(guides, f"left-margin-{variant.template_name}-S", "path"), self.formatter),
                right=GuideElement(_child(guides, f"right-margin-{variant.template_name}-S", "path"), self.formatter),
                contents=_child(symbols, f"{variant.template_name}-S", "g"),
                formatter=self.formatter,
            )
            for variant in Variant
        }

    @classmethod
    def parse(cls, data: bytes | str, precision: int = 3) -> "SymbolTemplate":
        """Parse a template document.

        Raises:
            TemplateError: If the markup is invalid or incomplete
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise TemplateError(f"template markup ({e})") from e
        return cls(root, precision)

    @classmethod
    def make(cls, precision: int = 3) -> "SymbolTemplate":
        """Create a fresh template from the packaged skeleton."""
        return cls.parse(load_skeleton(), precision)

    def region(self, variant: Variant) -> TemplateRegion:
        """Get the region of a weight variant."""
        return self._regions[variant]

    @property
    def width(self) -> float:
        return float(self.root.get("width", "0"))

    @property
    def height(self) -> float:
        return float(self.root.get("height", "0"))
