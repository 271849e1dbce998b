"""Weight variants of the symbol template."""

from enum import Enum


class Variant(str, Enum):
    """Weight variant populated in the template.

    Each variant has its own source document, inset configuration and
    target region inside the template.
    """

    REGULAR = "regular"
    ULTRALIGHT = "ultralight"
    BLACK = "black"

    @property
    def template_name(self) -> str:
        """Name used by the template's element ids (e.g. ``Regular-S``)."""
        return self.value.capitalize()

    @property
    def option_name(self) -> str:
        """Command-line option that overrides this variant's insets."""
        if self is Variant.REGULAR:
            return "--insets"
        return f"--{self.value}-insets"
