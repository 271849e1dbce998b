"""SVG I/O layer for symbolizer.

This module handles reading source SVG documents, building their layer
trees and writing populated symbol templates. It provides a clean
abstraction layer between XML markup, fonttools pens and the domain models.

Key responsibilities:
- Parse SVG markup, sizes, viewBoxes and stylesheets
- Build layer trees with cascaded styles and transforms
- Convert path data to and from domain paths
- Load the template skeleton and serialize populated templates

Key classes:
- SvgReader: Load SVG documents from disk
- LayerBuilder: Build layer trees
- SymbolTemplate: Template skeleton with three weight regions
- TemplateWriter: Serialize templates
"""

from symbolizer.io.builder import LayerBuilder
from symbolizer.io.reader import SvgDocument, SvgReader, parse_svg
from symbolizer.io.template import SymbolTemplate, TemplateRegion
from symbolizer.io.writer import TemplateWriter

__all__ = [
    "LayerBuilder",
    "SvgDocument",
    "SvgReader",
    "SymbolTemplate",
    "TemplateRegion",
    "TemplateWriter",
    "parse_svg",
]
