"""Exception hierarchy for Symbolizer."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symbolizer.domain import Diagnostic


class SymbolizerError(Exception):
    """Base exception for all Symbolizer errors.

    Attributes:
        diagnostics: Diagnostics produced before the error was raised
    """

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self.diagnostics: list["Diagnostic"] = []


class DocumentError(SymbolizerError):
    """Errors related to loading or parsing source documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error reading a document from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentParseError(DocumentError):
    """Malformed or unsupported SVG markup."""

    def __init__(self, reason: str, source: str | None = None) -> None:
        self.reason = reason
        self.source = source
        if source:
            super().__init__(f"Invalid SVG '{source}': {reason}")
        else:
            super().__init__(f"Invalid SVG: {reason}")


class RenderError(SymbolizerError):
    """Errors that abort a template render."""

    pass


class NoContentError(RenderError):
    """The regular document has no drawable content."""

    def __init__(self) -> None:
        super().__init__("No valid content found.")


class InvalidInsetsError(RenderError):
    """Resolved insets leave no room for the artwork."""

    def __init__(self, variant: str | None = None) -> None:
        self.variant = variant
        super().__init__("Invalid insets")


class TemplateError(SymbolizerError):
    """The template skeleton is missing a required element."""

    def __init__(self, element: str) -> None:
        self.element = element
        super().__init__(f"Template element not found: '{element}'")


class GeometryError(SymbolizerError):
    """Errors in geometric calculations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
