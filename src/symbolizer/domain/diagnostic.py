"""Non-fatal diagnostics reported alongside render results."""

from dataclasses import dataclass
from enum import Enum, auto

from symbolizer.domain.variant import Variant


class DiagnosticKind(Enum):
    """Category of a diagnostic."""

    CLIP_UNSUPPORTED = auto()
    MASK_UNSUPPORTED = auto()
    STROKE_UNAVAILABLE = auto()
    TEXT_UNAVAILABLE = auto()
    ALIGNMENT = auto()

    @property
    def is_warning(self) -> bool:
        return self is not DiagnosticKind.ALIGNMENT


@dataclass(frozen=True)
class Diagnostic:
    """A message for the operator that does not affect the output.

    Attributes:
        kind: Diagnostic category
        message: Human readable message
        variant: Weight variant the message relates to, if known
    """

    kind: DiagnosticKind
    message: str
    variant: Variant | None = None

    def for_variant(self, variant: Variant) -> "Diagnostic":
        """Copy of this diagnostic attributed to ``variant``."""
        return Diagnostic(kind=self.kind, message=self.message, variant=variant)
