"""Split a text node into positioned text blocks.

Blocks are produced lazily. Each span's font is activated on the
metrics session before it is measured, so a block depends on the font
state left behind by the blocks before it: consume the generator in
order and exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from svg_textdraw.fonts.metrics import FontMetrics
from svg_textdraw.geometry import Rect
from svg_textdraw.text.model import TextAnchor, TextBlock, TextChunk, TextNode, TextSpan

logger = logging.getLogger(__name__)


def _span_pieces(span: TextSpan) -> list[tuple[str, float]]:
    """Split a span into (text, rotation) pieces.

    Rotated spans become one piece per character.
    """
    if not span.rotate:
        return [(span.text, 0.0)]
    last = len(span.rotate) - 1
    return [(char, span.rotate[min(i, last)]) for i, char in enumerate(span.text)]


def _chunk_width(chunk: TextChunk, fm: FontMetrics) -> float:
    width = 0.0
    for span in chunk.spans:
        if not span.text:
            continue
        fm.set_font(span.font)
        width += fm.width(span.text)
    return width


def iter_blocks(node: TextNode, fm: FontMetrics) -> Iterator[TextBlock]:
    """Yield the blocks of ``node`` in drawing order."""
    x = 0.0
    y = 0.0
    for chunk in node.chunks:
        if chunk.x is not None:
            x = chunk.x
        if chunk.y is not None:
            y = chunk.y

        if chunk.anchor is not TextAnchor.START:
            width = _chunk_width(chunk, fm)
            x -= width / 2.0 if chunk.anchor is TextAnchor.MIDDLE else width

        for span in chunk.spans:
            if not span.text:
                continue
            fm.set_font(span.font)
            font = fm.font()
            ascent = fm.ascent()
            height = fm.height()
            for text, angle in _span_pieces(span):
                width = fm.width(text)
                yield TextBlock(
                    bbox=Rect(x, y - ascent, width, height),
                    font=font,
                    text=text,
                    rotate=angle,
                    fill=span.fill,
                    stroke=span.stroke,
                    decoration=span.decoration,
                )
                x += width
    logger.debug("Split text node %s", node.id)
