"""Configuration settings for Symbolizer."""

from pathlib import Path

from pydantic import BaseModel, Field

from symbolizer.domain.variant import Variant


class Insets(BaseModel):
    """Per-edge margin overrides for one weight variant.

    Edges left as None are derived from the artwork's bounds.
    """

    top: float | None = Field(default=None, description="Top inset in document units")
    left: float | None = Field(default=None, description="Left inset in document units")
    bottom: float | None = Field(default=None, description="Bottom inset in document units")
    right: float | None = Field(default=None, description="Right inset in document units")

    @property
    def is_empty(self) -> bool:
        """True when no edge is overridden."""
        return (
            self.top is None
            and self.left is None
            and self.bottom is None
            and self.right is None
        )

    @classmethod
    def parse(cls, text: str) -> "Insets":
        """Parse insets from ``top,left,bottom,right`` notation.

        Each component is a number or ``auto``.

        Args:
            text: Comma separated insets, e.g. ``"30,auto,30,auto"``

        Returns:
            Insets instance

        Raises:
            ValueError: If the text does not have four valid components
        """
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected 4 comma separated values, got {len(parts)}: '{text}'")

        values: list[float | None] = []
        for part in parts:
            if part.lower() == "auto":
                values.append(None)
                continue
            try:
                values.append(float(part))
            except ValueError:
                raise ValueError(f"Invalid inset value '{part}' (expected number or 'auto')") from None

        top, left, bottom, right = values
        return cls(top=top, left=left, bottom=bottom, right=right)


class RenderConfig(BaseModel):
    """Configuration for template rendering."""

    insets: Insets = Field(default_factory=Insets, description="Regular weight insets")
    ultralight_insets: Insets = Field(default_factory=Insets, description="Ultralight weight insets")
    black_insets: Insets = Field(default_factory=Insets, description="Black weight insets")
    precision: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum fraction digits for emitted coordinates",
    )

    def insets_for(self, variant: Variant) -> Insets:
        """Get the inset configuration of a weight variant."""
        if variant is Variant.ULTRALIGHT:
            return self.ultralight_insets
        if variant is Variant.BLACK:
            return self.black_insets
        return self.insets


class OutlineConfig(BaseModel):
    """Configuration for stroke and text outline expansion."""

    expand_strokes: bool = Field(
        default=True,
        description="Convert stroked shapes into filled outlines",
    )
    flatten_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Curve flattening tolerance before stroke buffering (document units)",
    )
    font_path: Path | None = Field(
        default=None,
        description="Font used to outline text (text is dropped when unset)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SymbolizerSettings(BaseModel):
    """Main application settings."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SymbolizerSettings:
    """Get default application settings."""
    return SymbolizerSettings()
