"""Fill resolver: turns an optional Fill into the painter's brush."""

from __future__ import annotations

from typing import TYPE_CHECKING

from svg_textdraw.geometry import Rect
from svg_textdraw.paint.model import Brush, Color, Fill, PaintServerRef
from svg_textdraw.paint.servers import resolve_gradient

if TYPE_CHECKING:
    from svg_textdraw.config import Options
    from svg_textdraw.painter import Painter
    from svg_textdraw.tree import Tree


def apply(tree: Tree, fill: Fill | None, opt: Options, bbox: Rect, p: Painter) -> None:
    """Set the brush for the next draw call.

    A missing fill, or one whose paint server cannot be resolved, clears
    the brush so the shape is not filled.
    """
    if fill is None:
        p.set_brush(None)
        return

    if isinstance(fill.paint, Color):
        p.set_brush(Brush(color=fill.paint, opacity=fill.opacity))
    elif isinstance(fill.paint, PaintServerRef):
        gradient = resolve_gradient(tree, fill.paint, bbox)
        if gradient is None:
            p.set_brush(None)
        else:
            p.set_brush(Brush(opacity=fill.opacity, gradient=gradient))
    else:
        raise TypeError(f"Unsupported fill paint: {fill.paint!r}")
