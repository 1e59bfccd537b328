"""SVG parsing for svg-textdraw.

This subpackage provides:
- Safe SVG parsing with XXE protection (defusedxml)
- Text element detection
- Conversion of text elements into the text document tree
"""

from svg_textdraw.svg.parser import (
    build_tree,
    find_text_elements,
    load_tree,
    parse_style,
    parse_svg,
    parse_svg_string,
)

__all__ = [
    "parse_svg",
    "parse_svg_string",
    "find_text_elements",
    "parse_style",
    "build_tree",
    "load_tree",
]
