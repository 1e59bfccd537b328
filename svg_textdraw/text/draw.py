"""Draw a whole text node: split it into blocks and render each one."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svg_textdraw.fonts.metrics import PainterFontMetrics
from svg_textdraw.geometry import Rect
from svg_textdraw.text.decoration import render_block
from svg_textdraw.text.model import TextNode
from svg_textdraw.text.splitter import iter_blocks

if TYPE_CHECKING:
    from svg_textdraw.config import Options
    from svg_textdraw.painter import Painter
    from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)


def draw_text(tree: Tree, text_node: TextNode, opt: Options, p: Painter) -> Rect:
    """Render ``text_node`` on ``p`` and return the union of its block boxes.

    A node without blocks yields an empty rectangle at the origin.
    """
    fm = PainterFontMetrics(p)
    bbox: Rect | None = None
    count = 0
    for block in iter_blocks(text_node, fm):
        render_block(tree, block, opt, p)
        bbox = block.bbox if bbox is None else bbox.union(block.bbox)
        count += 1
    logger.debug("Rendered %d blocks for text node %s", count, text_node.id)
    return bbox if bbox is not None else Rect(0.0, 0.0, 0.0, 0.0)
