"""Draw one text block together with its decoration lines.

Draw order matters: underline and overline go under the glyphs,
line-through goes over them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from svg_textdraw.exceptions import PaintFailure, TextDrawError
from svg_textdraw.geometry import Rect, Transform, is_fuzzy_zero
from svg_textdraw.paint import fill, stroke
from svg_textdraw.paint.model import Fill, Stroke
from svg_textdraw.text.model import TextBlock

if TYPE_CHECKING:
    from svg_textdraw.config import Options
    from svg_textdraw.painter import Painter
    from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)

# Lines are drawn one unit past the block so adjacent blocks do not show
# an anti-aliased seam.
LINE_PAD = 1.0


def render_block(tree: Tree, block: TextBlock, opt: Options, p: Painter) -> None:
    """Draw ``block`` and its decorations on ``p``.

    The painter's transform is restored before returning, including when
    a painter call fails.

    Raises:
        PaintFailure: if the painter rejects any call.
    """
    old_ts = p.get_transform()
    try:
        _draw_block(tree, block, opt, p)
    except TextDrawError:
        raise
    except Exception as e:
        raise PaintFailure(f"Failed to draw text block {block.text!r}: {e}", block.text) from e
    finally:
        p.set_transform(old_ts)


def _draw_block(tree: Tree, block: TextBlock, opt: Options, p: Painter) -> None:
    p.set_font(block.font)
    font_metrics = p.font_metrics()

    bbox = block.bbox

    if not is_fuzzy_zero(block.rotate):
        ts = Transform.rotation_at(block.rotate, bbox.x, bbox.y + font_metrics.ascent())
        p.apply_transform(ts)

    line_rect = Rect(bbox.x, 0.0, bbox.width, font_metrics.line_width())

    if block.decoration.underline is not None:
        style = block.decoration.underline
        line_rect = replace(line_rect, y=bbox.y + font_metrics.height() - font_metrics.underline_pos())
        draw_line(tree, line_rect, style.fill, style.stroke, opt, p)

    if block.decoration.overline is not None:
        style = block.decoration.overline
        line_rect = replace(line_rect, y=bbox.y + font_metrics.height() - font_metrics.overline_pos())
        draw_line(tree, line_rect, style.fill, style.stroke, opt, p)

    fill.apply(tree, block.fill, opt, bbox, p)
    stroke.apply(tree, block.stroke, opt, bbox, p)

    p.draw_text(bbox.x, bbox.y, block.text)

    if block.decoration.line_through is not None:
        style = block.decoration.line_through
        line_rect = replace(line_rect, y=bbox.y + font_metrics.ascent() - font_metrics.strikeout_pos())
        draw_line(tree, line_rect, style.fill, style.stroke, opt, p)

    logger.debug("Drew block %r at (%.2f, %.2f)", block.text, bbox.x, bbox.y)


def draw_line(
    tree: Tree,
    r: Rect,
    fill_style: Fill | None,
    stroke_style: Stroke | None,
    opt: Options,
    p: Painter,
) -> None:
    fill.apply(tree, fill_style, opt, r, p)
    stroke.apply(tree, stroke_style, opt, r, p)
    p.draw_rect(r.x, r.y, r.width + LINE_PAD, r.height)
