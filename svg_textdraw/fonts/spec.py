"""Abstract font descriptors as found in the document model.

FontSpec mirrors the CSS font properties an SVG text element can carry.
The parse_* helpers turn raw attribute strings into the closed enums and
raise InvalidFontSpecError for anything they cannot place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum

from svg_textdraw.exceptions import InvalidFontSpecError


class FontStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class FontVariant(Enum):
    NORMAL = "normal"
    SMALL_CAPS = "small-caps"


class FontWeight(IntEnum):
    W100 = 100
    W200 = 200
    W300 = 300
    W400 = 400
    W500 = 500
    W600 = 600
    W700 = 700
    W800 = 800
    W900 = 900


class FontStretch(Enum):
    NARROWER = "narrower"
    WIDER = "wider"
    ULTRA_CONDENSED = "ultra-condensed"
    EXTRA_CONDENSED = "extra-condensed"
    CONDENSED = "condensed"
    SEMI_CONDENSED = "semi-condensed"
    NORMAL = "normal"
    SEMI_EXPANDED = "semi-expanded"
    EXPANDED = "expanded"
    EXTRA_EXPANDED = "extra-expanded"
    ULTRA_EXPANDED = "ultra-expanded"


@dataclass(frozen=True)
class FontSpec:
    family: str
    style: FontStyle = FontStyle.NORMAL
    variant: FontVariant = FontVariant.NORMAL
    weight: FontWeight = FontWeight.W400
    stretch: FontStretch = FontStretch.NORMAL
    size: float = 12.0


_WEIGHT_KEYWORDS = {"normal": 400, "bold": 700}


def parse_font_style(value: str) -> FontStyle:
    try:
        return FontStyle(value.strip().lower())
    except ValueError as e:
        raise InvalidFontSpecError("style", value) from e


def parse_font_variant(value: str) -> FontVariant:
    try:
        return FontVariant(value.strip().lower())
    except ValueError as e:
        raise InvalidFontSpecError("variant", value) from e


def parse_font_stretch(value: str) -> FontStretch:
    try:
        return FontStretch(value.strip().lower())
    except ValueError as e:
        raise InvalidFontSpecError("stretch", value) from e


def parse_font_weight(value: str, parent: FontWeight = FontWeight.W400) -> FontWeight:
    """Parse a CSS font-weight.

    Relative keywords resolve against ``parent``. Numeric values between 1
    and 1000 snap to the nearest hundred inside 100..900.
    """
    token = value.strip().lower()
    if token in _WEIGHT_KEYWORDS:
        return FontWeight(_WEIGHT_KEYWORDS[token])
    if token == "bolder":
        if parent < 350:
            return FontWeight.W400
        if parent < 550:
            return FontWeight.W700
        return FontWeight.W900
    if token == "lighter":
        if parent < 550:
            return FontWeight.W100
        if parent < 750:
            return FontWeight.W400
        return FontWeight.W700
    try:
        number = float(token)
    except ValueError as e:
        raise InvalidFontSpecError("weight", value) from e
    if not 1 <= number <= 1000:
        raise InvalidFontSpecError("weight", value)
    snapped = min(900, max(100, math.floor(number / 100.0 + 0.5) * 100))
    return FontWeight(snapped)


def parse_font_family(value: str) -> str:
    """Return the first family of a CSS family list, unquoted."""
    for part in value.split(","):
        name = part.strip().strip("'\"").strip()
        if name:
            return name
    raise InvalidFontSpecError("family", value)
