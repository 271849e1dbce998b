"""CSS stylesheet model for ``<style>`` elements."""

from dataclasses import dataclass, field
from enum import Enum


class SelectorKind(str, Enum):
    """Kind of simple CSS selector."""

    CLASS = "class"
    ID = "id"
    ELEMENT = "element"


@dataclass(frozen=True)
class Selector:
    """A simple selector: ``.name``, ``#name`` or ``name``."""

    kind: SelectorKind
    name: str

    @classmethod
    def parse(cls, text: str) -> "Selector | None":
        """Parse a simple selector, returning None for anything compound."""
        text = text.strip()
        if not text or any(ch in text for ch in " >+~:[*,"):
            return None
        if text.startswith("."):
            kind, name = SelectorKind.CLASS, text[1:]
        elif text.startswith("#"):
            kind, name = SelectorKind.ID, text[1:]
        else:
            kind, name = SelectorKind.ELEMENT, text
        if not name or "." in name or "#" in name:
            return None
        return cls(kind=kind, name=name)

    def to_css(self) -> str:
        if self.kind is SelectorKind.CLASS:
            return f".{self.name}"
        if self.kind is SelectorKind.ID:
            return f"#{self.name}"
        return self.name


@dataclass
class StyleSheet:
    """Ordered mapping of selectors to their declarations."""

    rules: dict[Selector, dict[str, str]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.rules

    def declarations_for(self, selector: Selector) -> dict[str, str]:
        return self.rules.get(selector, {})

    def merge(self, selector: Selector, declarations: dict[str, str]) -> None:
        """Add declarations for a selector, later values winning."""
        self.rules.setdefault(selector, {}).update(declarations)

    def to_css(self) -> str:
        """Render the stylesheet as CSS text."""
        lines = []
        for selector, declarations in self.rules.items():
            body = " ".join(f"{name}: {value};" for name, value in declarations.items())
            lines.append(f"{selector.to_css()} {{ {body} }}")
        return "\n".join(lines)
