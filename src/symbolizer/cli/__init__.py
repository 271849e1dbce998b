"""Command-line interface for symbolizer.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Per-variant artwork and inset options
- Alignment output that can be pasted back as options
- Quiet and stdout modes
- Detailed error reporting
"""

from symbolizer.cli.app import app, cli

__all__ = ["app", "cli"]
