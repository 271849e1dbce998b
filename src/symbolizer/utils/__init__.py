"""Utility modules for symbolizer."""

from symbolizer.utils.logging import RenderLogger, RenderStats, configure_logging

__all__ = ["RenderLogger", "RenderStats", "configure_logging"]
