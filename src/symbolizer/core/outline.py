"""Outline expansion of strokes and text.

The template only accepts filled outlines, so stroked shapes and text runs
have to be converted into filled paths. Both conversions are optional
capabilities resolved from configuration: when a provider is missing the
collector drops the content and reports a diagnostic instead of failing.

- ShapelyStrokeExpander: buffers flattened stroke geometry with shapely
- FontTextOutliner: draws glyph outlines from a font file with fontTools
"""

from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import Protocol

import structlog
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont
from shapely.geometry import LineString
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from symbolizer.config import OutlineConfig
from symbolizer.core.geometry import flatten_path, polygons_to_path
from symbolizer.domain import Path, Point, StrokeAttributes, TextAttributes
from symbolizer.io.converter import SegmentPen

logger = structlog.get_logger(__name__)

# SVG stroke-linecap / stroke-linejoin values mapped to shapely buffer styles
_CAP_STYLES = {"butt": "flat", "round": "round", "square": "square"}
_JOIN_STYLES = {"miter": "mitre", "miter-clip": "mitre", "arcs": "mitre", "round": "round", "bevel": "bevel"}


class StrokeExpander(Protocol):
    """Converts a stroked path into the filled outline of the stroke."""

    def expand_stroke(self, path: Path, stroke: StrokeAttributes) -> Path | None: ...


class TextOutliner(Protocol):
    """Converts a text run into filled glyph outlines."""

    def text_to_path(self, text: str, point: Point, attributes: TextAttributes) -> Path | None: ...


@dataclass(frozen=True)
class OutlineService:
    """Available outline expansion capabilities.

    A provider set to None is unavailable; content needing it is dropped.

    Attributes:
        strokes: Stroke expansion provider
        text: Text outline provider
    """

    strokes: StrokeExpander | None = None
    text: TextOutliner | None = None

    @classmethod
    def unavailable(cls) -> "OutlineService":
        """Service without any expansion capability."""
        return cls()


class ShapelyStrokeExpander:
    """Expands strokes by buffering flattened geometry with shapely.

    Curves are flattened first, so the resulting outline is made of lines.
    The buffered polygons are oriented with exterior rings and holes winding
    in opposite directions, which fills correctly under the nonzero rule.
    """

    def __init__(self, tolerance: float = 0.1) -> None:
        """Initialize the expander.

        Args:
            tolerance: Curve flattening tolerance in document units
        """
        self._tolerance = tolerance

    def expand_stroke(self, path: Path, stroke: StrokeAttributes) -> Path | None:
        """Build the filled outline of a stroke.

        Args:
            path: Stroked path in local coordinates
            stroke: Stroke style (width, caps and joins)

        Returns:
            Outline path, or None if the stroke covers no area
        """
        if stroke.width <= 0:
            return None

        half_width = stroke.width / 2
        cap_style = _CAP_STYLES.get(stroke.line_cap, "flat")
        join_style = _JOIN_STYLES.get(stroke.line_join, "mitre")

        pieces: list[BaseGeometry] = []
        for points, closed in flatten_path(path, self._tolerance):
            coords = _dedupe([p.to_tuple() for p in points])
            if closed and len(coords) > 2:
                coords.append(coords[0])
            if len(coords) < 2:
                continue
            pieces.append(
                LineString(coords).buffer(
                    half_width,
                    cap_style=cap_style,
                    join_style=join_style,
                    mitre_limit=max(stroke.miter_limit, 1.0),
                )
            )

        if not pieces:
            return None

        merged = unary_union(pieces)
        outline = polygons_to_path(merged)
        return None if outline.is_empty() else outline


class FontTextOutliner:
    """Outlines text with glyphs from a TrueType/OpenType font.

    The font file configured here is used for every text run regardless of
    the run's ``font-family``; glyphs missing from the font are skipped.
    """

    def __init__(self, font_path: FilePath) -> None:
        """Initialize the outliner.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def _load(self) -> TTFont:
        if self._font is None:
            if not self._font_path.exists():
                raise FileNotFoundError(f"Font file not found: {self._font_path}")
            self._font = TTFont(str(self._font_path))
        return self._font

    def text_to_path(self, text: str, point: Point, attributes: TextAttributes) -> Path | None:
        """Draw the glyph outlines of a text run.

        Args:
            text: Characters to draw
            point: Anchor point (baseline) in local coordinates
            attributes: Font size and text anchor

        Returns:
            Outline path, or None if no glyph produced an outline
        """
        font = self._load()
        glyph_set = font.getGlyphSet()
        cmap = font.getBestCmap() or {}
        hmtx = font["hmtx"]
        scale = attributes.font_size / font["head"].unitsPerEm  # type: ignore[attr-defined]

        glyph_names = [cmap[ord(ch)] for ch in text if ord(ch) in cmap]
        advance_total = sum(hmtx[name][0] for name in glyph_names) * scale

        x = point.x
        if attributes.anchor == "middle":
            x -= advance_total / 2
        elif attributes.anchor == "end":
            x -= advance_total

        pen = SegmentPen()
        for name in glyph_names:
            # Font units are y-up; flip onto the SVG baseline.
            transform = (scale, 0, 0, -scale, x, point.y)
            glyph_set[name].draw(TransformPen(pen, transform))
            x += hmtx[name][0] * scale

        path = pen.path()
        if path.is_empty():
            logger.debug("Text produced no outlines", text=text)
            return None
        return path


def build_outline_service(config: OutlineConfig) -> OutlineService:
    """Resolve the outline capabilities from configuration.

    Args:
        config: Outline settings

    Returns:
        OutlineService with the configured providers
    """
    strokes = ShapelyStrokeExpander(config.flatten_tolerance) if config.expand_strokes else None
    text = FontTextOutliner(config.font_path) if config.font_path is not None else None
    return OutlineService(strokes=strokes, text=text)


def _dedupe(coords: list[tuple[float, float]]) -> list[tuple[float, float]]:
    result: list[tuple[float, float]] = []
    for coord in coords:
        if not result or result[-1] != coord:
            result.append(coord)
    return result

