"""Domain models for symbolizer.

This module contains the value types shared by the rendering pipeline:
geometry primitives, paths, the layer tree built from an SVG document,
stylesheets, weight variants and diagnostics. Models are:

- Immutable where possible (using frozen dataclasses)
- Independent of the XML and fonttools representations

Key classes:
- Point, Rect, Matrix: Geometry primitives
- Path, SymbolPath: Drawing segments and tagged paths
- LayerNode: A node of the layer tree
- StyleSheet: Parsed ``<style>`` rules
- Variant: Template weight variant
- Diagnostic: Non-fatal operator message
"""

from symbolizer.domain.diagnostic import Diagnostic, DiagnosticKind
from symbolizer.domain.geometry import Matrix, Point, Rect
from symbolizer.domain.guides import REGION_HEIGHT, REGION_OFFSET_Y, Guide, GuidePair
from symbolizer.domain.layer import (
    Content,
    FillAttributes,
    FillRule,
    LayerContent,
    LayerNode,
    ShapeContent,
    StrokeAttributes,
    TextAttributes,
    TextContent,
)
from symbolizer.domain.path import Close, Cubic, Line, Move, Path, Segment, SymbolPath
from symbolizer.domain.stylesheet import Selector, SelectorKind, StyleSheet
from symbolizer.domain.variant import Variant

__all__: list[str] = [
    # Enums
    "DiagnosticKind",
    "FillRule",
    "SelectorKind",
    "Variant",
    # Geometry
    "Matrix",
    "Point",
    "Rect",
    # Paths
    "Close",
    "Cubic",
    "Line",
    "Move",
    "Path",
    "Segment",
    "SymbolPath",
    # Template guides
    "REGION_HEIGHT",
    "REGION_OFFSET_Y",
    "Guide",
    "GuidePair",
    # Layer tree
    "Content",
    "FillAttributes",
    "LayerContent",
    "LayerNode",
    "ShapeContent",
    "StrokeAttributes",
    "TextAttributes",
    "TextContent",
    # Styles and diagnostics
    "Diagnostic",
    "Selector",
    "StyleSheet",
]
