"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, diagnostic and summary messages.
"""

from rich.console import Console
from rich.text import Text

from symbolizer.domain import Diagnostic, Variant

console = Console()
error_console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Symbolizer[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_source(variant: Variant, path: str | None) -> None:
    """Print the source document of a weight variant.

    Args:
        variant: Weight variant
        path: Source path, or None when the variant falls back to regular
    """
    line = Text(f"  {variant.template_name:<11}")
    if path is None:
        line.append("(from regular)", style="dim")
    else:
        line.append(path)
    console.print(line)


def print_diagnostic(diagnostic: Diagnostic, stderr: bool = False) -> None:
    """Print a diagnostic.

    Alignment messages are printed as-is so they can be pasted back as
    command line options; other diagnostics are printed as warnings.

    Args:
        diagnostic: Diagnostic to print
        stderr: Print to stderr instead of stdout
    """
    target = error_console if stderr else console
    if not diagnostic.kind.is_warning:
        target.print(Text(f"  {diagnostic.message}"))
        return

    line = Text(f"  {SYM_WARN} ", style="bold yellow")
    if diagnostic.variant is not None:
        line.append(f"{diagnostic.variant.template_name}: ", style="yellow")
    line.append(diagnostic.message)
    target.print(line)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    paths: int,
    fallbacks: int,
    warnings: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total render time in seconds
        paths: Number of paths placed across all regions
        fallbacks: Number of regions rendered from the regular artwork
        warnings: Number of warnings reported
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    warning_style = "yellow" if warnings > 0 else "green"
    console.print(
        f"  {paths} paths {SYM_DOT} {fallbacks} fallbacks {SYM_DOT} "
        f"[{warning_style}]{warnings} warnings[/{warning_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] ", end="")
    console.print(Text(message))
    if details:
        console.print(Text(f"  {details}"))
