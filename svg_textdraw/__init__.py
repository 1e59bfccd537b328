"""svg-textdraw: Render SVG text nodes onto pluggable painters.

This library provides:
- Font descriptor mapping from CSS font properties to native fonts
- Metric-driven underline, overline and line-through placement
- Per-block rotation with guaranteed transform restore
- Raster (Pillow), SVG and recording painter backends

Example:
    >>> from svg_textdraw import TextRenderer
    >>> renderer = TextRenderer()
    >>> renderer.render_file(Path("input.svg"), Path("output.png"))
"""

from svg_textdraw.api import RenderResult, TextRenderer
from svg_textdraw.config import Config, Options
from svg_textdraw.exceptions import (
    ConfigError,
    FontNotFoundError,
    InvalidFontSpecError,
    PaintFailure,
    SVGParseError,
    TextDrawError,
)
from svg_textdraw.fonts import FontSpec, NativeFont, map_font
from svg_textdraw.geometry import Rect, Transform
from svg_textdraw.text import TextBlock, draw_text, render_block

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TextRenderer",
    "RenderResult",
    "Config",
    "Options",
    # Core pipeline
    "draw_text",
    "render_block",
    "map_font",
    "FontSpec",
    "NativeFont",
    "TextBlock",
    "Rect",
    "Transform",
    # Exceptions
    "TextDrawError",
    "InvalidFontSpecError",
    "FontNotFoundError",
    "PaintFailure",
    "SVGParseError",
    "ConfigError",
    # Metadata
    "__version__",
]
