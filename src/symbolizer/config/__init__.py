"""Configuration management for symbolizer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- Insets: Per-edge margin overrides for one weight variant
- RenderConfig: Template rendering settings
- OutlineConfig: Stroke and text outline expansion settings
- LoggingConfig: Logging settings
- SymbolizerSettings: Main application settings
"""

from symbolizer.config.settings import (
    Insets,
    LoggingConfig,
    OutlineConfig,
    RenderConfig,
    SymbolizerSettings,
    get_default_settings,
)

__all__ = [
    "Insets",
    "LoggingConfig",
    "OutlineConfig",
    "RenderConfig",
    "SymbolizerSettings",
    "get_default_settings",
]
