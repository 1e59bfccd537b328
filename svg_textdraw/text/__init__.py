"""Text rendering pipeline for svg-textdraw.

This subpackage provides:
- Text node and text block data model
- Block splitter (lazy, order dependent)
- Block renderer with underline, overline and line-through
- draw_text, the per-node entry point
"""

from svg_textdraw.text.decoration import draw_line, render_block
from svg_textdraw.text.draw import draw_text
from svg_textdraw.text.model import (
    TextAnchor,
    TextBlock,
    TextChunk,
    TextDecoration,
    TextDecorationStyle,
    TextNode,
    TextSpan,
)
from svg_textdraw.text.splitter import iter_blocks

__all__ = [
    "draw_text",
    "render_block",
    "draw_line",
    "iter_blocks",
    "TextAnchor",
    "TextBlock",
    "TextChunk",
    "TextDecoration",
    "TextDecorationStyle",
    "TextNode",
    "TextSpan",
]
