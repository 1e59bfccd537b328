"""Paint model and fill/stroke resolution for svg-textdraw.

This subpackage provides:
- Color, Fill, Stroke and gradient paint servers
- Brush and Pen, the painter-ready form of a paint
- fill.apply / stroke.apply resolvers used before each draw call
"""

from svg_textdraw.paint.model import (
    Brush,
    Color,
    Fill,
    LinearGradient,
    Paint,
    PaintServer,
    PaintServerRef,
    Pen,
    RadialGradient,
    ResolvedGradient,
    Stop,
    Stroke,
)

__all__ = [
    "Brush",
    "Color",
    "Fill",
    "LinearGradient",
    "Paint",
    "PaintServer",
    "PaintServerRef",
    "Pen",
    "RadialGradient",
    "ResolvedGradient",
    "Stop",
    "Stroke",
]
