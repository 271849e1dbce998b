"""Symbolizer - Convert SVG artwork into symbol templates.

Symbolizer takes a regular-weight SVG (plus optional ultralight and black
weights), extracts its drawable geometry and fits it into the three weight
regions of an icon-design template, widening the template's margin guides
to fit the artwork.

Example:
    $ symbolizer pencil.svg --ultralight pencil-ultralight.svg

This will create pencil-symbol.svg with the Ultralight, Regular and Black
regions populated.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
