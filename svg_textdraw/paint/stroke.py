"""Stroke resolver: turns an optional Stroke into the painter's pen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from svg_textdraw.geometry import Rect
from svg_textdraw.paint.model import Color, PaintServerRef, Pen, Stroke
from svg_textdraw.paint.servers import resolve_gradient

if TYPE_CHECKING:
    from svg_textdraw.config import Options
    from svg_textdraw.painter import Painter
    from svg_textdraw.tree import Tree


def apply(tree: Tree, stroke: Stroke | None, opt: Options, bbox: Rect, p: Painter) -> None:
    if stroke is None or stroke.width <= 0:
        p.set_pen(None)
        return

    if isinstance(stroke.paint, Color):
        p.set_pen(Pen(color=stroke.paint, width=stroke.width, opacity=stroke.opacity))
    elif isinstance(stroke.paint, PaintServerRef):
        gradient = resolve_gradient(tree, stroke.paint, bbox)
        if gradient is None:
            p.set_pen(None)
        else:
            p.set_pen(Pen(width=stroke.width, opacity=stroke.opacity, gradient=gradient))
    else:
        raise TypeError(f"Unsupported stroke paint: {stroke.paint!r}")
