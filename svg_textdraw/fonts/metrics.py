"""Font metric capabilities.

Two views of the same numbers are used by the pipeline:

* ``LineMetrics`` is what a painter hands out for its active font. It
  carries the decoration positions used when drawing a block.
* ``FontMetrics`` is the measuring session the block splitter drives. It
  activates fonts on a painter and measures text with them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from svg_textdraw.fonts.mapper import NativeFont, map_font
from svg_textdraw.fonts.spec import FontSpec

if TYPE_CHECKING:
    from fontTools.ttLib import TTFont

    from svg_textdraw.painter import Painter

logger = logging.getLogger(__name__)


class LineMetrics(Protocol):
    def width(self, text: str) -> float: ...

    def ascent(self) -> float: ...

    def height(self) -> float: ...

    def underline_pos(self) -> float: ...

    def overline_pos(self) -> float: ...

    def strikeout_pos(self) -> float: ...

    def line_width(self) -> float: ...


class FontMetrics(Protocol):
    def set_font(self, font: FontSpec) -> None: ...

    def font(self) -> NativeFont: ...

    def width(self, text: str) -> float: ...

    def ascent(self) -> float: ...

    def height(self) -> float: ...


class PainterFontMetrics:
    """Measuring session bound to a painter.

    Setting a font maps the FontSpec and activates it on the painter, so
    every later measurement uses the metrics of that font.
    """

    def __init__(self, painter: Painter) -> None:
        self._painter = painter

    def set_font(self, font: FontSpec) -> None:
        self._painter.set_font(map_font(font))

    def font(self) -> NativeFont:
        return self._painter.font()

    def width(self, text: str) -> float:
        return self._painter.font_metrics().width(text)

    def ascent(self) -> float:
        return self._painter.font_metrics().ascent()

    def height(self) -> float:
        return self._painter.font_metrics().height()


class FontFileMetrics:
    """LineMetrics read from the tables of a TrueType/OpenType font."""

    def __init__(self, ttfont: TTFont, size: float) -> None:
        self._ttfont = ttfont
        self._size = size
        self._scale = size / ttfont["head"].unitsPerEm
        self._cmap = ttfont.getBestCmap() or {}
        self._hmtx = ttfont["hmtx"]
        hhea = ttfont["hhea"]
        self._ascent = hhea.ascent * self._scale
        self._descent = hhea.descent * self._scale
        post = ttfont["post"] if "post" in ttfont else None
        self._underline_pos = -post.underlinePosition * self._scale if post else size / 10.0
        thickness = post.underlineThickness * self._scale if post else size / 18.0
        self._line_width = max(1.0, thickness)
        os2 = ttfont["OS/2"] if "OS/2" in ttfont else None
        strikeout = getattr(os2, "yStrikeoutPosition", 0) if os2 is not None else 0
        self._strikeout_pos = strikeout * self._scale if strikeout else self._ascent / 3.0

    def width(self, text: str) -> float:
        total = 0
        for char in text:
            glyph = self._cmap.get(ord(char))
            if glyph is None:
                logger.warning("No glyph for %r, measuring .notdef", char)
                glyph = ".notdef"
            total += self._hmtx[glyph][0]
        return total * self._scale

    def ascent(self) -> float:
        return self._ascent

    def height(self) -> float:
        return self._ascent - self._descent

    def underline_pos(self) -> float:
        return self._underline_pos

    def overline_pos(self) -> float:
        return self._ascent

    def strikeout_pos(self) -> float:
        return self._strikeout_pos

    def line_width(self) -> float:
        return self._line_width


class RatioMetrics:
    """LineMetrics derived from the font size alone.

    Used where no font files are involved: the recording backend and
    layout previews. Glyphs are treated as half an em wide.
    """

    ASCENT = 0.8
    DESCENT = 0.2
    ADVANCE = 0.5
    UNDERLINE = 0.1
    STRIKEOUT = 0.3

    def __init__(self, size: float) -> None:
        self._size = size

    def width(self, text: str) -> float:
        return len(text) * self._size * self.ADVANCE

    def ascent(self) -> float:
        return self._size * self.ASCENT

    def height(self) -> float:
        return self._size * (self.ASCENT + self.DESCENT)

    def underline_pos(self) -> float:
        return self._size * self.UNDERLINE

    def overline_pos(self) -> float:
        return self.ascent()

    def strikeout_pos(self) -> float:
        return self._size * self.STRIKEOUT

    def line_width(self) -> float:
        return max(1.0, self._size / 16.0)
