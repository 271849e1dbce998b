"""Template writer for serializing populated templates.

This module provides the TemplateWriter class, which turns a SymbolTemplate
into SVG markup and optionally saves it next to the source document.
"""

import copy
import xml.etree.ElementTree as ET
from pathlib import Path

from symbolizer.io.reader import SVG_NAMESPACE
from symbolizer.io.template import SymbolTemplate

XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", XLINK_NAMESPACE)


class TemplateWriter:
    """Serializes symbol templates to SVG markup.

    Example:
        writer = TemplateWriter()
        markup = writer.write(template)
    """

    def __init__(self, indent: int = 4) -> None:
        """Initialize the writer.

        Args:
            indent: Spaces per indentation level
        """
        self._indent = indent

    def write(self, template: SymbolTemplate) -> str:
        """Serialize a template.

        The template's stylesheets are emitted as a ``<style>`` element at
        the top of the document. The template itself is not modified.

        Args:
            template: Populated template

        Returns:
            SVG markup with XML declaration
        """
        root = copy.deepcopy(template.root)

        css = "\n".join(sheet.to_css() for sheet in template.stylesheets if not sheet.is_empty())
        if css:
            style = ET.Element(f"{{{SVG_NAMESPACE}}}style")
            style.text = css
            root.insert(0, style)

        ET.indent(root, space=" " * self._indent)
        return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}\n"

    def save(self, template: SymbolTemplate, output_path: Path) -> None:
        """Write a template to a file.

        Raises:
            OSError: If file cannot be written
        """
        output_path.write_text(self.write(template), encoding="utf-8")

    @staticmethod
    def get_symbol_path(input_path: Path) -> Path:
        """Generate the output path for a source document.

        Converts: icon.svg -> icon-symbol.svg
                  /path/to/pencil.circle.svg -> /path/to/pencil.circle-symbol.svg

        Args:
            input_path: Source SVG path

        Returns:
            Path with -symbol suffix before the extension
        """
        return input_path.parent / f"{input_path.stem}-symbol.svg"
