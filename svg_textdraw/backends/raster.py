"""Raster painter backed by Pillow.

Each primitive is drawn upright on a scratch RGBA layer, then mapped
onto the target image through the current transform with an affine
resample. Layers are supersampled by the transform's scale so text stays
sharp when the document is scaled up. Gradients are approximated by the
color of their first stop.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.fonts.metrics import FontFileMetrics, LineMetrics
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.geometry import Transform
from svg_textdraw.paint.model import Brush, Color, Pen
from svg_textdraw.paint.servers import fallback_color

logger = logging.getLogger(__name__)


def _rgba(paint: Brush | Pen | None) -> tuple[int, int, int, int] | None:
    if paint is None:
        return None
    if paint.gradient is not None:
        color, stop_opacity = fallback_color(paint.gradient)
        return color.rgba(paint.opacity * stop_opacity)
    return paint.color.rgba(paint.opacity)


class RasterPainter:
    def __init__(
        self,
        width: int,
        height: int,
        resolver: FontResolver | None = None,
        background: Color | None = None,
        transform: Transform | None = None,
    ) -> None:
        self.resolver = resolver or FontResolver()
        fill = background.rgba() if background is not None else (0, 0, 0, 0)
        self.image = Image.new("RGBA", (max(1, width), max(1, height)), fill)
        self._transform = transform or Transform.identity()
        self._font = NativeFont("sans-serif")
        self._metrics: LineMetrics | None = None
        self._pil_fonts: dict[tuple[Path, int, int], ImageFont.FreeTypeFont] = {}
        self._brush: Brush | None = Brush()
        self._pen: Pen | None = None

    def set_font(self, font: NativeFont) -> None:
        self._font = font
        self._metrics = None

    def font(self) -> NativeFont:
        return self._font

    def font_metrics(self) -> LineMetrics:
        if self._metrics is None:
            self._metrics = FontFileMetrics(self.resolver.load(self._font), self._font.size)
        return self._metrics

    def get_transform(self) -> Transform:
        return self._transform

    def set_transform(self, ts: Transform) -> None:
        self._transform = ts

    def apply_transform(self, ts: Transform) -> None:
        self._transform = self._transform.multiply(ts)

    def set_brush(self, brush: Brush | None) -> None:
        self._brush = brush

    def set_pen(self, pen: Pen | None) -> None:
        self._pen = pen

    def _supersample(self) -> float:
        return max(1.0, self._transform.max_scale())

    def _pil_font(self, pixel_size: int) -> ImageFont.FreeTypeFont:
        face = self.resolver.find(self._font)
        key = (face.path, face.font_index, pixel_size)
        if key not in self._pil_fonts:
            self._pil_fonts[key] = ImageFont.truetype(str(face.path), size=pixel_size, index=face.font_index)
        return self._pil_fonts[key]

    def _composite(self, layer: Image.Image, x: float, y: float, scale: float) -> None:
        """Map ``layer`` (origin at user point (x, y), ``scale`` px per unit)."""
        local = self._transform.multiply(Transform.translation(x, y)).multiply(
            Transform.scaling(1.0 / scale)
        )
        inv = local.invert()
        warped = layer.transform(
            self.image.size,
            Image.Transform.AFFINE,
            (inv.a, inv.c, inv.e, inv.b, inv.d, inv.f),
            resample=Image.Resampling.BILINEAR,
        )
        self.image.alpha_composite(warped)

    def draw_text(self, x: float, y: float, text: str) -> None:
        fill = _rgba(self._brush)
        outline = _rgba(self._pen)
        if not text or (fill is None and outline is None):
            return
        s = self._supersample()
        font = self._pil_font(max(1, round(self._font.size * s)))
        stroke_px = round(self._pen.width * s / 2.0) if self._pen is not None else 0
        pad = stroke_px + 1
        ascent, descent = font.getmetrics()
        width = math.ceil(font.getlength(text))
        layer = Image.new("RGBA", (width + 2 * pad, ascent + descent + 2 * pad), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer, "RGBA")
        draw.text(
            (pad, pad),
            text,
            font=font,
            anchor="la",
            fill=fill or (0, 0, 0, 0),
            stroke_width=stroke_px,
            stroke_fill=outline,
        )
        self._composite(layer, x - pad / s, y - pad / s, s)

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        fill = _rgba(self._brush)
        outline = _rgba(self._pen)
        if fill is None and outline is None:
            return
        s = self._supersample()
        line_px = max(1, round(self._pen.width * s)) if self._pen is not None else 0
        pad = line_px + 1
        w_px = width * s
        h_px = height * s
        layer = Image.new(
            "RGBA",
            (math.ceil(w_px) + 2 * pad, math.ceil(h_px) + 2 * pad),
            (0, 0, 0, 0),
        )
        draw = ImageDraw.Draw(layer, "RGBA")
        draw.rectangle(
            [pad, pad, pad + w_px, pad + h_px],
            fill=fill,
            outline=outline,
            width=line_px,
        )
        self._composite(layer, x - pad / s, y - pad / s, s)

    def save(self, path: Path) -> None:
        image = self.image
        if path.suffix.lower() in (".jpg", ".jpeg"):
            image = image.convert("RGB")
        image.save(path)
        logger.debug("Wrote %s (%dx%d)", path, *image.size)
