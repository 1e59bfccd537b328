"""SVG painter: replays draw calls as SVG elements.

Every draw call becomes a ``<text>`` or ``<rect>`` element carrying the
painter state (font, brush, pen, transform) as presentation attributes.
Gradient brushes are written to ``<defs>`` in user space.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path

from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.fonts.metrics import FontFileMetrics, LineMetrics
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.geometry import Transform
from svg_textdraw.paint.model import Brush, Color, Pen, ResolvedGradient

SVG_NS = "http://www.w3.org/2000/svg"

ET.register_namespace("", SVG_NS)


def _tag(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


def _num(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".") or "0"


class SvgPainter:
    def __init__(
        self,
        width: float,
        height: float,
        resolver: FontResolver | None = None,
        metrics_factory: Callable[[NativeFont], LineMetrics] | None = None,
        background: Color | None = None,
    ) -> None:
        self.resolver = resolver or FontResolver()
        self._metrics_factory = metrics_factory or self._file_metrics
        self.root = ET.Element(
            _tag("svg"),
            {"width": _num(width), "height": _num(height), "viewBox": f"0 0 {_num(width)} {_num(height)}"},
        )
        self._defs = ET.SubElement(self.root, _tag("defs"))
        self._gradients: dict[ResolvedGradient, str] = {}
        if background is not None:
            ET.SubElement(
                self.root,
                _tag("rect"),
                {"width": "100%", "height": "100%", "fill": background.to_hex()},
            )
        self._font = NativeFont("sans-serif")
        self._metrics: LineMetrics | None = None
        self._transform = Transform.identity()
        self._brush: Brush | None = Brush()
        self._pen: Pen | None = None

    def _file_metrics(self, font: NativeFont) -> LineMetrics:
        return FontFileMetrics(self.resolver.load(font), font.size)

    def set_font(self, font: NativeFont) -> None:
        self._font = font
        self._metrics = None

    def font(self) -> NativeFont:
        return self._font

    def font_metrics(self) -> LineMetrics:
        if self._metrics is None:
            self._metrics = self._metrics_factory(self._font)
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

    def _gradient_ref(self, gradient: ResolvedGradient) -> str:
        if gradient not in self._gradients:
            gid = f"grad{len(self._gradients) + 1}"
            if gradient.kind == "linear":
                x1, y1, x2, y2 = gradient.coords
                attrs = {"x1": x1, "y1": y1, "x2": x2, "y2": y2}
                elem = ET.SubElement(self._defs, _tag("linearGradient"))
            else:
                cx, cy, r, fx, fy = gradient.coords
                attrs = {"cx": cx, "cy": cy, "r": r, "fx": fx, "fy": fy}
                elem = ET.SubElement(self._defs, _tag("radialGradient"))
            elem.set("id", gid)
            elem.set("gradientUnits", "userSpaceOnUse")
            for key, value in attrs.items():
                elem.set(key, _num(value))
            for stop in gradient.stops:
                ET.SubElement(
                    elem,
                    _tag("stop"),
                    {
                        "offset": _num(stop.offset),
                        "stop-color": stop.color.to_hex(),
                        "stop-opacity": _num(stop.opacity),
                    },
                )
            self._gradients[gradient] = gid
        return f"url(#{self._gradients[gradient]})"

    def _paint_attrs(self) -> dict[str, str]:
        attrs: dict[str, str] = {}
        if self._brush is None:
            attrs["fill"] = "none"
        else:
            if self._brush.gradient is not None:
                attrs["fill"] = self._gradient_ref(self._brush.gradient)
            else:
                attrs["fill"] = self._brush.color.to_hex()
            if self._brush.opacity != 1.0:
                attrs["fill-opacity"] = _num(self._brush.opacity)
        if self._pen is not None:
            if self._pen.gradient is not None:
                attrs["stroke"] = self._gradient_ref(self._pen.gradient)
            else:
                attrs["stroke"] = self._pen.color.to_hex()
            attrs["stroke-width"] = _num(self._pen.width)
            if self._pen.opacity != 1.0:
                attrs["stroke-opacity"] = _num(self._pen.opacity)
        if not self._transform.is_identity():
            attrs["transform"] = self._transform.to_svg()
        return attrs

    def draw_text(self, x: float, y: float, text: str) -> None:
        font = self._font
        attrs = {
            "x": _num(x),
            "y": _num(y + self.font_metrics().ascent()),
            "font-family": font.family,
            "font-size": _num(font.size),
        }
        if font.css_weight != 400:
            attrs["font-weight"] = str(font.css_weight)
        if font.italic:
            attrs["font-style"] = font.style.value
        if font.css_stretch != "normal":
            attrs["font-stretch"] = font.css_stretch
        if font.small_caps:
            attrs["font-variant"] = "small-caps"
        attrs.update(self._paint_attrs())
        elem = ET.SubElement(self.root, _tag("text"), attrs)
        elem.set("{http://www.w3.org/XML/1998/namespace}space", "preserve")
        elem.text = text

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        attrs = {"x": _num(x), "y": _num(y), "width": _num(width), "height": _num(height)}
        attrs.update(self._paint_attrs())
        ET.SubElement(self.root, _tag("rect"), attrs)

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def write(self, path: Path) -> None:
        tree = ET.ElementTree(self.root)
        ET.indent(tree)
        tree.write(path, encoding="utf-8", xml_declaration=True)
