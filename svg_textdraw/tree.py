"""Document tree: the slice of an SVG document the text renderer needs."""

from __future__ import annotations

from dataclasses import dataclass, field

from svg_textdraw.geometry import Rect
from svg_textdraw.paint.model import PaintServer
from svg_textdraw.text.model import TextNode


@dataclass
class Tree:
    width: float
    height: float
    view_box: Rect | None = None
    defs: dict[str, PaintServer] = field(default_factory=dict)
    text_nodes: list[TextNode] = field(default_factory=list)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)
