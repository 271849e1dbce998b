"""CLI application entry point for symbolizer.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from symbolizer import __version__
from symbolizer.cli.output import (
    console,
    print_diagnostic,
    print_error,
    print_header,
    print_source,
    print_step,
    print_success,
)
from symbolizer.config import (
    Insets,
    LoggingConfig,
    OutlineConfig,
    RenderConfig,
    SymbolizerSettings,
)
from symbolizer.core import SymbolRenderer
from symbolizer.domain import Diagnostic, Variant
from symbolizer.exceptions import DocumentError, SymbolizerError
from symbolizer.io import TemplateWriter
from symbolizer.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="symbolizer",
    help="Convert SVG artwork into a three-weight symbol template.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Symbolizer[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def symbolize(
    regular: Annotated[
        Path,
        typer.Argument(
            help="Path to the regular weight SVG",
            show_default=False,
        ),
    ],
    ultralight: Annotated[
        Path | None,
        typer.Option(
            "--ultralight",
            help="Path to the ultralight weight SVG (default: regular artwork)",
        ),
    ] = None,
    black: Annotated[
        Path | None,
        typer.Option(
            "--black",
            help="Path to the black weight SVG (default: regular artwork)",
        ),
    ] = None,
    insets: Annotated[
        str | None,
        typer.Option(
            "--insets",
            help="Regular insets as top,left,bottom,right (numbers or 'auto')",
        ),
    ] = None,
    ultralight_insets: Annotated[
        str | None,
        typer.Option(
            "--ultralight-insets",
            help="Ultralight insets as top,left,bottom,right",
        ),
    ] = None,
    black_insets: Annotated[
        str | None,
        typer.Option(
            "--black-insets",
            help="Black insets as top,left,bottom,right",
        ),
    ] = None,
    precision: Annotated[
        int,
        typer.Option(
            "--precision",
            help="Maximum fraction digits of output coordinates",
            min=0,
            max=10,
        ),
    ] = 3,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            help="TTF/OTF font used to outline text (text is dropped without one)",
        ),
    ] = None,
    no_strokes: Annotated[
        bool,
        typer.Option(
            "--no-strokes",
            help="Drop stroked shapes instead of converting them to outlines",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-symbol.svg)",
        ),
    ] = None,
    stdout: Annotated[
        bool,
        typer.Option(
            "--stdout",
            help="Write the template to standard output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Console logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "ERROR",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert SVG artwork into a symbol template.

    The regular artwork is required. Ultralight and black artwork are
    optional and default to the regular artwork with their own insets.

    Example:
        symbolizer pencil.svg --black pencil-black.svg

    This will create pencil-symbol.svg with all three weight regions filled.
    """
    if stdout and output is not None:
        print_error("Cannot use --output and --stdout together")
        raise typer.Exit(code=1)

    # Validate input files exist
    for path in (regular, ultralight, black, font):
        if path is not None and not path.is_file():
            print_error(
                f"Input file not found: {path}",
                details=f"The file '{path}' does not exist or is not a file.",
            )
            raise typer.Exit(code=1)

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        print_error(f"Invalid log level: {log_level}", details="Valid values: DEBUG, INFO, WARNING, ERROR")
        raise typer.Exit(code=1)

    try:
        render_config = RenderConfig(
            insets=_parse_insets(insets),
            ultralight_insets=_parse_insets(ultralight_insets),
            black_insets=_parse_insets(black_insets),
            precision=precision,
        )
    except ValueError as e:
        print_error(f"Invalid insets: {e}", details="Expected four values: top,left,bottom,right")
        raise typer.Exit(code=1) from None

    settings = SymbolizerSettings(
        render=render_config,
        outline=OutlineConfig(expand_strokes=not no_strokes, font_path=font),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    # Status output would corrupt the template on stdout
    show = not (quiet or stdout)
    if show:
        print_header(__version__)
        print_step("Rendering template")
        print_source(Variant.ULTRALIGHT, str(ultralight) if ultralight else None)
        print_source(Variant.REGULAR, str(regular))
        print_source(Variant.BLACK, str(black) if black else None)

    try:
        result = SymbolRenderer(settings).render_files(regular, ultralight, black)

        if not quiet:
            _print_diagnostics(result.diagnostics, stderr=stdout)

        if stdout:
            typer.echo(result.svg, nl=False)
            return

        output_path = output if output is not None else TemplateWriter.get_symbol_path(regular)
        output_path.write_text(result.svg, encoding="utf-8")

        if show:
            stats = result.stats
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                total_time_s=stats.duration_seconds,
                paths=stats.paths_emitted,
                fallbacks=len(stats.fallbacks),
                warnings=stats.warning_count,
            )

    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    except DocumentError as e:
        print_error(f"Could not read document: {e}")
        raise typer.Exit(code=1) from None
    except SymbolizerError as e:
        if not quiet:
            _print_diagnostics(e.diagnostics, stderr=stdout)
        print_error(str(e))
        raise typer.Exit(code=1) from None
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1) from None


def _print_diagnostics(diagnostics: list[Diagnostic], stderr: bool) -> None:
    """Print diagnostics, under a step header unless they go to stderr."""
    if not diagnostics:
        return
    if not stderr:
        print_step("Diagnostics")
    for diagnostic in diagnostics:
        print_diagnostic(diagnostic, stderr=stderr)


def _parse_insets(value: str | None) -> Insets:
    """Parse an insets option, treating a missing option as automatic."""
    if value is None:
        return Insets()
    return Insets.parse(value)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
