"""Painter capability consumed by the rendering core.

Backends implement this protocol; the core never imports a concrete
backend. A painter is stateful (active font, transform, brush, pen) and
not reentrant: one rendering call owns it at a time.
"""

from __future__ import annotations

from typing import Protocol

from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.fonts.metrics import LineMetrics
from svg_textdraw.geometry import Transform
from svg_textdraw.paint.model import Brush, Pen


class Painter(Protocol):
    def set_font(self, font: NativeFont) -> None: ...

    def font(self) -> NativeFont: ...

    def font_metrics(self) -> LineMetrics:
        """Metrics of the currently active font."""
        ...

    def get_transform(self) -> Transform: ...

    def set_transform(self, ts: Transform) -> None: ...

    def apply_transform(self, ts: Transform) -> None:
        """Compose ``ts`` on top of the current transform."""
        ...

    def set_brush(self, brush: Brush | None) -> None: ...

    def set_pen(self, pen: Pen | None) -> None: ...

    def draw_text(self, x: float, y: float, text: str) -> None:
        """Draw ``text`` with its top-left corner at ``(x, y)``."""
        ...

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None: ...
