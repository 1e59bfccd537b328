"""Recording painter: keeps a log of every call instead of drawing.

Useful for layout previews and for asserting draw order. Metrics come
from RatioMetrics, so no font files are needed.
"""

from __future__ import annotations

from typing import Any

from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.fonts.metrics import RatioMetrics
from svg_textdraw.geometry import Transform
from svg_textdraw.paint.model import Brush, Pen


class RecordingPainter:
    def __init__(self, font: NativeFont | None = None) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._font = font or NativeFont("sans-serif")
        self._transform = Transform.identity()
        self.brush: Brush | None = None
        self.pen: Pen | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    def set_font(self, font: NativeFont) -> None:
        self._record("set_font", font)
        self._font = font

    def font(self) -> NativeFont:
        return self._font

    def font_metrics(self) -> RatioMetrics:
        self._record("font_metrics", self._font)
        return RatioMetrics(self._font.size)

    def get_transform(self) -> Transform:
        return self._transform

    def set_transform(self, ts: Transform) -> None:
        self._record("set_transform", ts)
        self._transform = ts

    def apply_transform(self, ts: Transform) -> None:
        self._record("apply_transform", ts)
        self._transform = self._transform.multiply(ts)

    def set_brush(self, brush: Brush | None) -> None:
        self._record("set_brush", brush)
        self.brush = brush

    def set_pen(self, pen: Pen | None) -> None:
        self._record("set_pen", pen)
        self.pen = pen

    def draw_text(self, x: float, y: float, text: str) -> None:
        self._record("draw_text", x, y, text)

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("draw_rect", x, y, width, height)
