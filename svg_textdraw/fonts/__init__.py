"""Font handling for svg-textdraw.

This subpackage provides:
- FontSpec and its CSS-derived enums
- map_font, the FontSpec -> NativeFont mapper
- Metric capabilities (LineMetrics, FontMetrics) and implementations
- FontResolver, locating installed font files with fontTools
"""

from svg_textdraw.fonts.mapper import (
    NativeFont,
    NativeStretch,
    NativeStyle,
    NativeWeight,
    map_font,
)
from svg_textdraw.fonts.metrics import (
    FontFileMetrics,
    FontMetrics,
    LineMetrics,
    PainterFontMetrics,
    RatioMetrics,
)
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.fonts.spec import (
    FontSpec,
    FontStretch,
    FontStyle,
    FontVariant,
    FontWeight,
)

__all__ = [
    "FontSpec",
    "FontStretch",
    "FontStyle",
    "FontVariant",
    "FontWeight",
    "NativeFont",
    "NativeStretch",
    "NativeStyle",
    "NativeWeight",
    "map_font",
    "FontMetrics",
    "LineMetrics",
    "FontFileMetrics",
    "PainterFontMetrics",
    "RatioMetrics",
    "FontResolver",
]
