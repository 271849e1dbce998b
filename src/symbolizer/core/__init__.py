"""Core rendering algorithms for symbolizer.

This module contains the core algorithms for:

- Geometry operations (bounds, inset resolution, fit transform, polygons)
- Fill rule normalization (even-odd to nonzero winding)
- Stylesheet filtering
- Stroke and text outline expansion
- Layer traversal and path collection
- Template composition and render orchestration

Key functions:
- bounds_of: Bounding rectangle of a set of paths
- resolve_bounds: Apply inset overrides to artwork bounds
- fit_transform: Uniform scale-and-centre transform between rectangles
- make_nonzero: Rewind an even-odd path for nonzero filling
- even_odd_region: Even-odd region of crossing subpaths
- collect_symbol_paths: Gather filled outlines from a layer tree
- widen_guides: Move region guides outwards around placed artwork

Key classes:
- OutlineService: Stroke and text outline capabilities
- TemplateComposer: Places artwork into template regions
- SymbolRenderer: Renders documents into a symbol template
"""

from symbolizer.core.collector import CollectResult, collect_document, collect_symbol_paths
from symbolizer.core.composer import GUIDE_PADDING, TemplateComposer, widen_guides
from symbolizer.core.fill_rule import analyze_nesting, even_odd_region, has_crossings, make_nonzero
from symbolizer.core.geometry import (
    ResolvedInsets,
    bounds_of,
    fit_transform,
    flatten_path,
    point_in_polygon,
    polygons_to_path,
    resolve_bounds,
    signed_area,
    winding_number,
)
from symbolizer.core.outline import (
    FontTextOutliner,
    OutlineService,
    ShapelyStrokeExpander,
    build_outline_service,
)
from symbolizer.core.renderer import RenderOutput, SymbolRenderer
from symbolizer.core.styles import filter_stylesheet, is_accepted

__all__ = [
    # Collector
    "CollectResult",
    "collect_document",
    "collect_symbol_paths",
    # Composer
    "GUIDE_PADDING",
    "TemplateComposer",
    "widen_guides",
    # Fill rule
    "analyze_nesting",
    "even_odd_region",
    "has_crossings",
    "make_nonzero",
    # Geometry functions
    "ResolvedInsets",
    "bounds_of",
    "fit_transform",
    "flatten_path",
    "point_in_polygon",
    "polygons_to_path",
    "resolve_bounds",
    "signed_area",
    "winding_number",
    # Outline expansion
    "FontTextOutliner",
    "OutlineService",
    "ShapelyStrokeExpander",
    "build_outline_service",
    # Renderer
    "RenderOutput",
    "SymbolRenderer",
    # Styles
    "filter_stylesheet",
    "is_accepted",
]
