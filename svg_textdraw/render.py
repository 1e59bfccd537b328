"""Render every text node of a tree onto a painter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svg_textdraw.geometry import Rect
from svg_textdraw.text.draw import draw_text

if TYPE_CHECKING:
    from svg_textdraw.config import Options
    from svg_textdraw.painter import Painter
    from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)


def render_tree(tree: Tree, opt: Options, p: Painter) -> list[tuple[str, Rect]]:
    """Draw all text nodes in document order.

    Each node's transform is composed on top of the painter's transform
    and removed again afterwards. Returns (node id, bbox) pairs with the
    bbox in the node's own coordinate system.
    """
    results = []
    for node in tree.text_nodes:
        old_ts = p.get_transform()
        try:
            p.apply_transform(node.transform)
            bbox = draw_text(tree, node, opt, p)
        finally:
            p.set_transform(old_ts)
        logger.debug("Text node %s bbox=%s", node.id, bbox)
        results.append((node.id, bbox))
    return results
