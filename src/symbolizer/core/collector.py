"""Layer traversal and symbol path collection.

Walks a layer tree depth-first in document order and gathers the filled
outlines the template can hold. Layers carrying an accepted symbol class
("tagged" layers) are preserved as-is, even when hidden by opacity or paint;
untagged content is kept only when it is actually visible.

Unsupported features (clip paths, masks) and content whose outline cannot be
expanded are dropped with a diagnostic rather than failing the render.
"""

from dataclasses import dataclass, field

import structlog

from symbolizer.core.fill_rule import make_nonzero
from symbolizer.core.outline import OutlineService
from symbolizer.core.styles import is_accepted
from symbolizer.domain import (
    Diagnostic,
    DiagnosticKind,
    FillRule,
    LayerContent,
    LayerNode,
    Matrix,
    Path,
    ShapeContent,
    SymbolPath,
    TextContent,
)
from symbolizer.io.builder import LayerBuilder
from symbolizer.io.reader import SvgDocument

logger = structlog.get_logger(__name__)

CLIP_MESSAGE = "clip-path unsupported in SF Symbols."
MASK_MESSAGE = "mask unsupported in SF Symbols."
STROKE_MESSAGE = "stroke outline unavailable; stroked path dropped."
TEXT_MESSAGE = "text outline unavailable; text dropped."


@dataclass
class CollectResult:
    """Paths and diagnostics gathered from a layer tree.

    Attributes:
        paths: Symbol paths in document order, in root coordinates
        diagnostics: Non-fatal messages about dropped content
    """

    paths: list[SymbolPath] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.paths

    def extend(self, other: "CollectResult") -> None:
        self.paths.extend(other.paths)
        self.diagnostics.extend(other.diagnostics)


def collect_symbol_paths(
    layer: LayerNode,
    outlines: OutlineService,
    ctm: Matrix | None = None,
    inherited_class: str | None = None,
) -> CollectResult:
    """Collect the symbol paths of a layer and its descendants.

    Args:
        layer: Layer to traverse
        outlines: Stroke and text outline capabilities
        ctm: Transform from the parent layer to root coordinates
        inherited_class: Accepted class of the nearest tagged ancestor, used
            as the class of untagged descendants

    Returns:
        Collected paths and diagnostics
    """
    result = CollectResult()
    # Only a layer's own accepted class forces its content to be kept
    preserve = is_accepted(layer.class_name)
    tag = layer.class_name if preserve else inherited_class

    if not preserve and layer.opacity <= 0:
        return result

    if layer.clip is not None:
        result.diagnostics.append(Diagnostic(DiagnosticKind.CLIP_UNSUPPORTED, CLIP_MESSAGE))
        logger.debug("Layer dropped", reason="clip", clip=layer.clip, layer=layer.element_id)
        return result
    if layer.mask is not None:
        result.diagnostics.append(Diagnostic(DiagnosticKind.MASK_UNSUPPORTED, MASK_MESSAGE))
        logger.debug("Layer dropped", reason="mask", mask=layer.mask, layer=layer.element_id)
        return result

    ctm = layer.transform.concatenated(ctm) if ctm is not None else layer.transform

    for content in layer.contents:
        if isinstance(content, LayerContent):
            result.extend(collect_symbol_paths(content.layer, outlines, ctm, tag))
            continue

        if isinstance(content, ShapeContent):
            path = _shape_outline(content, outlines, preserve, ctm, result)
        else:
            path = _text_outline(content, outlines, ctm, result)

        if path is not None and not path.is_empty():
            result.paths.append(SymbolPath(path, tag))

    return result


def _shape_outline(
    shape: ShapeContent,
    outlines: OutlineService,
    preserve: bool,
    ctm: Matrix,
    result: CollectResult,
) -> Path | None:
    if preserve or shape.fill.is_visible:
        path = shape.path.applying(ctm)
        if shape.fill.rule is FillRule.EVENODD:
            path = make_nonzero(path)
        return path

    if not (preserve or shape.stroke.is_visible):
        return None

    # Stroke width is in local units, so expand before transforming
    outline = outlines.strokes.expand_stroke(shape.path, shape.stroke) if outlines.strokes else None
    if outline is None:
        result.diagnostics.append(Diagnostic(DiagnosticKind.STROKE_UNAVAILABLE, STROKE_MESSAGE))
        logger.debug("Stroke dropped", width=shape.stroke.width)
        return None
    return outline.applying(ctm)


def _text_outline(
    text: TextContent,
    outlines: OutlineService,
    ctm: Matrix,
    result: CollectResult,
) -> Path | None:
    outline = outlines.text.text_to_path(text.text, text.point, text.attributes) if outlines.text else None
    if outline is None:
        result.diagnostics.append(Diagnostic(DiagnosticKind.TEXT_UNAVAILABLE, TEXT_MESSAGE))
        logger.debug("Text dropped", text=text.text)
        return None
    return outline.applying(ctm)


def collect_document(document: SvgDocument, outlines: OutlineService) -> CollectResult:
    """Build the layer tree of a document and collect its symbol paths.

    Raises:
        DocumentParseError: If the document contains malformed geometry
    """
    layer = LayerBuilder(document).make_layer()
    result = collect_symbol_paths(layer, outlines)
    logger.debug(
        "Document collected",
        source=document.source,
        paths=len(result.paths),
        diagnostics=len(result.diagnostics),
    )
    return result
