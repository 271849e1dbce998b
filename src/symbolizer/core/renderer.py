"""Template rendering orchestration.

The renderer drives one render from parsed documents to serialized template:

1. Collect the symbol paths of each weight variant's document
2. Resolve the artwork bounds against the variant's insets
3. Fit the artwork into the variant's template region
4. Attach the filtered stylesheets and serialize the template

The regular document is mandatory. An ultralight or black document that is
missing, or has no usable content, falls back to the regular artwork with the
regular document's bounds resolved against that variant's own insets.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path as FilePath

import structlog

from symbolizer.config import SymbolizerSettings, get_default_settings
from symbolizer.core.collector import collect_document
from symbolizer.core.composer import TemplateComposer
from symbolizer.core.geometry import bounds_of, resolve_bounds
from symbolizer.core.outline import OutlineService, build_outline_service
from symbolizer.core.styles import filter_stylesheet
from symbolizer.domain import Diagnostic, DiagnosticKind, Rect, SymbolPath, Variant
from symbolizer.exceptions import InvalidInsetsError, NoContentError, SymbolizerError
from symbolizer.io.reader import SvgDocument, SvgReader, parse_svg
from symbolizer.io.template import SymbolTemplate
from symbolizer.io.writer import TemplateWriter
from symbolizer.utils.logging import RenderLogger, RenderStats


@dataclass(frozen=True)
class RenderOutput:
    """Result of a successful render.

    Attributes:
        svg: Serialized template markup
        diagnostics: Non-fatal messages in the order they were produced
        stats: Statistics of this render
    """

    svg: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stats: RenderStats = field(default_factory=RenderStats)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind.is_warning]


class SymbolRenderer:
    """Renders SVG artwork into a three-weight symbol template.

    A renderer holds configuration only; every render builds its own
    template, so one renderer can be reused for many documents.

    Example:
        renderer = SymbolRenderer()
        output = renderer.render_files(Path("icon.svg"))
        Path("icon-symbol.svg").write_text(output.svg)
    """

    def __init__(
        self,
        settings: SymbolizerSettings | None = None,
        outlines: OutlineService | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            settings: Application settings (defaults if None)
            outlines: Outline capabilities (built from settings if None)
        """
        self.settings = settings or get_default_settings()
        self.outlines = outlines if outlines is not None else build_outline_service(self.settings.outline)
        self._log = structlog.get_logger(__name__)

    def render(
        self,
        regular: SvgDocument,
        ultralight: SvgDocument | None = None,
        black: SvgDocument | None = None,
    ) -> str:
        """Render documents and return the template markup.

        Raises:
            NoContentError: If the regular document has no usable content
            InvalidInsetsError: If a variant's insets leave no room for artwork
        """
        return self.render_output(regular, ultralight, black).svg

    def render_output(
        self,
        regular: SvgDocument,
        ultralight: SvgDocument | None = None,
        black: SvgDocument | None = None,
    ) -> RenderOutput:
        """Render documents and return the markup with its diagnostics.

        Args:
            regular: Regular weight artwork
            ultralight: Ultralight weight artwork, if any
            black: Black weight artwork, if any

        Returns:
            RenderOutput with markup, diagnostics and statistics

        Diagnostics are logged as they are produced. Errors raised here carry
        the diagnostics produced before the failure in ``diagnostics``.

        Raises:
            NoContentError: If the regular document has no usable content
            InvalidInsetsError: If a variant's insets leave no room for artwork
            GeometryError: If artwork cannot be fitted into the template
        """
        logger = RenderLogger(self._log)
        stats = logger.stats
        stats.start_time = time.perf_counter()
        diagnostics: list[Diagnostic] = []

        try:
            collected = collect_document(regular, self.outlines)
            self._report(logger, diagnostics, [d.for_variant(Variant.REGULAR) for d in collected.diagnostics])
            if collected.is_empty:
                raise NoContentError()

            regular_paths = collected.paths
            regular_bounds = bounds_of(regular_paths)

            template = SymbolTemplate.make(self.settings.render.precision)
            composer = TemplateComposer(template)
            self._compose(
                composer, logger, diagnostics, Variant.REGULAR, regular, regular_paths, regular_bounds
            )

            for variant, document in ((Variant.ULTRALIGHT, ultralight), (Variant.BLACK, black)):
                paths, bounds, source = regular_paths, regular_bounds, regular
                if document is None:
                    logger.log_fallback(variant, "not provided")
                else:
                    result = collect_document(document, self.outlines)
                    self._report(logger, diagnostics, [d.for_variant(variant) for d in result.diagnostics])
                    if result.is_empty:
                        logger.log_fallback(variant, "no content")
                    else:
                        paths, bounds, source = result.paths, bounds_of(result.paths), document
                self._compose(composer, logger, diagnostics, variant, source, paths, bounds)

            template.stylesheets = [filter_stylesheet(sheet) for sheet in regular.stylesheets]
            svg = TemplateWriter().write(template)
        except SymbolizerError as e:
            e.diagnostics = list(diagnostics)
            raise
        finally:
            stats.end_time = time.perf_counter()

        return RenderOutput(svg=svg, diagnostics=diagnostics, stats=stats)

    def render_files(
        self,
        regular: FilePath,
        ultralight: FilePath | None = None,
        black: FilePath | None = None,
    ) -> RenderOutput:
        """Read documents from disk and render them.

        Raises:
            FileNotFoundError: If a document does not exist
            DocumentLoadError: If a document cannot be read
            DocumentParseError: If a document is not valid SVG
        """
        return self.render_output(
            SvgReader(regular).read(),
            SvgReader(ultralight).read() if ultralight is not None else None,
            SvgReader(black).read() if black is not None else None,
        )

    def render_bytes(
        self,
        regular: bytes,
        ultralight: bytes | None = None,
        black: bytes | None = None,
    ) -> RenderOutput:
        """Parse in-memory documents and render them.

        Raises:
            DocumentParseError: If a document is not valid SVG
        """
        return self.render_output(
            parse_svg(regular, "regular"),
            parse_svg(ultralight, "ultralight") if ultralight is not None else None,
            parse_svg(black, "black") if black is not None else None,
        )

    def _compose(
        self,
        composer: TemplateComposer,
        logger: RenderLogger,
        diagnostics: list[Diagnostic],
        variant: Variant,
        document: SvgDocument,
        paths: list[SymbolPath],
        auto_bounds: Rect,
    ) -> None:
        insets = self.settings.render.insets_for(variant)
        try:
            bounds, resolved = resolve_bounds(document.width, document.height, auto_bounds, insets)
        except InvalidInsetsError as e:
            raise InvalidInsetsError(variant.value) from e

        alignment = Diagnostic(
            kind=DiagnosticKind.ALIGNMENT,
            message=f"Alignment: {variant.option_name} {resolved.format()}",
            variant=variant,
        )
        self._report(logger, diagnostics, [alignment])
        guides = composer.append_paths(variant, paths, bounds)
        logger.log_variant_complete(variant, len(paths), guides.region_bounds.width)

    @staticmethod
    def _report(logger: RenderLogger, diagnostics: list[Diagnostic], new: list[Diagnostic]) -> None:
        """Log diagnostics as they are produced and keep them for the output."""
        for diagnostic in new:
            logger.log_diagnostic(diagnostic)
            diagnostics.append(diagnostic)
