"""Pytest configuration and shared fixtures for svg-textdraw tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from svg_textdraw.backends.recording import RecordingPainter
from svg_textdraw.config import Options
from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.geometry import Rect
from svg_textdraw.text.model import TextBlock, TextDecoration
from svg_textdraw.tree import Tree

TEST_FAMILY = "Test Sans"


def build_test_font(
    path: Path,
    family: str = TEST_FAMILY,
    weight: int = 400,
    italic: bool = False,
) -> Path:
    """Write a tiny TrueType font with known metrics (1000 units/em).

    ascent 800, descent -200, underline at -100 (50 thick), strikeout at
    300. "A" and "B" advance 600, space advances 250.
    """
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", "A", "B"])
    fb.setupCharacterMap({32: "space", 65: "A", 66: "B"})

    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    glyph = pen.glyph()
    fb.setupGlyf({".notdef": glyph, "space": glyph, "A": glyph, "B": glyph})

    advances = {".notdef": 600, "space": 250, "A": 600, "B": 600}
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics({name: (adv, glyf[name].xMin) for name, adv in advances.items()})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    style_name = "Italic" if italic else "Regular"
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": style_name,
            "uniqueFontIdentifier": f"{family}-{style_name}",
            "fullName": f"{family} {style_name}",
            "psName": f"{family.replace(' ', '')}-{style_name}",
            "version": "Version 1.0",
        }
    )
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=weight,
        fsSelection=0x01 if italic else 0x40,
        yStrikeoutPosition=300,
        yStrikeoutSize=50,
    )
    fb.setupPost(underlinePosition=-100, underlineThickness=50)
    fb.save(str(path))
    return path


@pytest.fixture
def test_font(tmp_path: Path) -> Path:
    """Path to a generated regular-weight test font."""
    font_dir = tmp_path / "fonts"
    font_dir.mkdir()
    return build_test_font(font_dir / "TestSans-Regular.ttf")


@pytest.fixture
def recording_painter() -> RecordingPainter:
    """Return a fresh painter that records every call."""
    return RecordingPainter()


@pytest.fixture
def options() -> Options:
    """Return default render options."""
    return Options()


@pytest.fixture
def empty_tree() -> Tree:
    """Return a 200x100 tree with no nodes or gradients."""
    return Tree(width=200.0, height=100.0)


def make_block(
    bbox: Rect = Rect(10.0, 20.0, 50.0, 10.0),
    size: float = 10.0,
    rotate: float = 0.0,
    text: str = "Hello",
    decoration: TextDecoration | None = None,
    **kwargs,
) -> TextBlock:
    """Build a TextBlock with a RatioMetrics-friendly font."""
    return TextBlock(
        bbox=bbox,
        font=NativeFont("Test Sans", size=size),
        text=text,
        rotate=rotate,
        decoration=decoration or TextDecoration(),
        **kwargs,
    )


@pytest.fixture
def temp_svg(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary SVG file for testing."""
    svg_content = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">
  <text x="10" y="50" font-family="Test Sans" font-size="24">AB BA</text>
</svg>"""
    svg_path = tmp_path / "test.svg"
    svg_path.write_text(svg_content, encoding="utf-8")
    yield svg_path


@pytest.fixture
def decorated_svg_content() -> str:
    """Return SVG with all three decorations, a rotation and a gradient."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"
     width="300" height="100" viewBox="0 0 300 100">
  <defs>
    <linearGradient id="lg1">
      <stop offset="0" stop-color="red"/>
      <stop offset="1" stop-color="blue"/>
    </linearGradient>
    <linearGradient id="lg2" xlink:href="#lg1" x2="0" y2="1"/>
  </defs>
  <text id="deco" x="10" y="50" font-family="Test Sans" font-size="20"
        text-decoration="underline overline" fill="green">
    AB
    <tspan fill="url(#lg2)" text-decoration="line-through" stroke="black">BA</tspan>
  </text>
  <text id="rotated" x="10" y="90" font-family="Test Sans" rotate="10 20">AB</text>
</svg>"""


@pytest.fixture
def no_text_svg_content() -> str:
    """Return SVG without any text elements."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="blue"/>
  <circle cx="50" cy="50" r="30" fill="red"/>
</svg>"""


@pytest.fixture
def malformed_svg_content() -> str:
    """Return malformed SVG for error testing."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg">
  <text x="10" y="50">Unclosed text
</svg>"""
