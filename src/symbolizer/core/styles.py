"""Style class filtering for symbol layers.

Symbol templates only understand a few families of style classes, used to
assign rendering modes (hierarchical, monochrome, multicolor) and to mark
preview-only artwork. Layers carrying one of these classes are always
exported, and only the stylesheet rules for these classes are kept.
"""

from symbolizer.domain import SelectorKind, StyleSheet

ACCEPTED_CLASS_MARKERS: tuple[str, ...] = (
    "hierarchical-",
    "monochrome-",
    "multicolor-",
    "SFSymbolsPreview",
)


def is_accepted(name: str | None) -> bool:
    """Check whether a class name marks a symbol layer.

    Args:
        name: Value of a ``class`` attribute, or None

    Returns:
        True if the name contains one of the accepted markers

    Examples:
        >>> is_accepted("monochrome-0 hierarchical-1:primary")
        True
        >>> is_accepted("outline")
        False
    """
    if name is None:
        return False
    return any(marker in name for marker in ACCEPTED_CLASS_MARKERS)


def filter_stylesheet(sheet: StyleSheet) -> StyleSheet:
    """Keep only the class rules the template understands.

    Id and element selectors are always dropped.

    Args:
        sheet: Stylesheet of the source document

    Returns:
        New stylesheet with accepted class rules, in original order
    """
    filtered = StyleSheet()
    for selector, declarations in sheet.rules.items():
        if selector.kind is SelectorKind.CLASS and is_accepted(selector.name):
            filtered.rules[selector] = dict(declarations)
    return filtered
