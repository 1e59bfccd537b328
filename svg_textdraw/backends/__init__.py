"""Painter backends for svg-textdraw.

This subpackage provides:
- RasterPainter: Pillow image output
- SvgPainter: SVG element output
- RecordingPainter: call log, for previews and tests
"""

from svg_textdraw.backends.raster import RasterPainter
from svg_textdraw.backends.recording import RecordingPainter
from svg_textdraw.backends.svg import SvgPainter

__all__ = ["RasterPainter", "RecordingPainter", "SvgPainter"]
