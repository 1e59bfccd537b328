"""Map abstract FontSpec values onto backend-native font handles.

The native classes follow the weight and stretch classes common to
desktop toolkits. Every table below is exhaustive over its input enum;
a value missing from a table is a programming error surfaced as
InvalidFontSpecError rather than a silent default.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum

from svg_textdraw.exceptions import InvalidFontSpecError
from svg_textdraw.fonts.spec import (
    FontSpec,
    FontStretch,
    FontStyle,
    FontVariant,
    FontWeight,
)


class NativeStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class NativeWeight(IntEnum):
    THIN = 0
    EXTRA_LIGHT = 12
    LIGHT = 25
    NORMAL = 50
    MEDIUM = 57
    DEMI_BOLD = 63
    BOLD = 75
    EXTRA_BOLD = 81
    BLACK = 87


class NativeStretch(IntEnum):
    ULTRA_CONDENSED = 50
    EXTRA_CONDENSED = 62
    CONDENSED = 75
    SEMI_CONDENSED = 87
    UNSTRETCHED = 100
    SEMI_EXPANDED = 112
    EXPANDED = 125
    EXTRA_EXPANDED = 150
    ULTRA_EXPANDED = 200


_STYLES = {
    FontStyle.NORMAL: NativeStyle.NORMAL,
    FontStyle.ITALIC: NativeStyle.ITALIC,
    FontStyle.OBLIQUE: NativeStyle.OBLIQUE,
}

_WEIGHTS = {
    FontWeight.W100: NativeWeight.THIN,
    FontWeight.W200: NativeWeight.EXTRA_LIGHT,
    FontWeight.W300: NativeWeight.LIGHT,
    FontWeight.W400: NativeWeight.NORMAL,
    FontWeight.W500: NativeWeight.MEDIUM,
    FontWeight.W600: NativeWeight.DEMI_BOLD,
    FontWeight.W700: NativeWeight.BOLD,
    FontWeight.W800: NativeWeight.EXTRA_BOLD,
    FontWeight.W900: NativeWeight.BLACK,
}

_STRETCHES = {
    FontStretch.NORMAL: NativeStretch.UNSTRETCHED,
    FontStretch.NARROWER: NativeStretch.CONDENSED,
    FontStretch.CONDENSED: NativeStretch.CONDENSED,
    FontStretch.ULTRA_CONDENSED: NativeStretch.ULTRA_CONDENSED,
    FontStretch.EXTRA_CONDENSED: NativeStretch.EXTRA_CONDENSED,
    FontStretch.SEMI_CONDENSED: NativeStretch.SEMI_CONDENSED,
    FontStretch.SEMI_EXPANDED: NativeStretch.SEMI_EXPANDED,
    FontStretch.WIDER: NativeStretch.EXPANDED,
    FontStretch.EXPANDED: NativeStretch.EXPANDED,
    FontStretch.EXTRA_EXPANDED: NativeStretch.EXTRA_EXPANDED,
    FontStretch.ULTRA_EXPANDED: NativeStretch.ULTRA_EXPANDED,
}

# Reverse tables for backends that speak CSS (SVG output, font lookup).
_CSS_WEIGHTS = {native: int(css) for css, native in _WEIGHTS.items()}
_CSS_STRETCHES = {
    NativeStretch.ULTRA_CONDENSED: "ultra-condensed",
    NativeStretch.EXTRA_CONDENSED: "extra-condensed",
    NativeStretch.CONDENSED: "condensed",
    NativeStretch.SEMI_CONDENSED: "semi-condensed",
    NativeStretch.UNSTRETCHED: "normal",
    NativeStretch.SEMI_EXPANDED: "semi-expanded",
    NativeStretch.EXPANDED: "expanded",
    NativeStretch.EXTRA_EXPANDED: "extra-expanded",
    NativeStretch.ULTRA_EXPANDED: "ultra-expanded",
}


@dataclass(frozen=True)
class NativeFont:
    family: str
    style: NativeStyle = NativeStyle.NORMAL
    weight: NativeWeight = NativeWeight.NORMAL
    stretch: NativeStretch = NativeStretch.UNSTRETCHED
    size: float = 12.0
    small_caps: bool | None = None

    @property
    def css_weight(self) -> int:
        return _CSS_WEIGHTS[self.weight]

    @property
    def css_stretch(self) -> str:
        return _CSS_STRETCHES[self.stretch]

    @property
    def italic(self) -> bool:
        return self.style is not NativeStyle.NORMAL


def _lookup(table: dict, field: str, value: object):
    try:
        return table[value]
    except (KeyError, TypeError) as e:
        raise InvalidFontSpecError(field, value) from e


def map_font(spec: FontSpec) -> NativeFont:
    """Convert a FontSpec into a NativeFont.

    Raises:
        InvalidFontSpecError: if any field is outside its table or the
            size is not a positive finite number.
    """
    if not spec.family:
        raise InvalidFontSpecError("family", spec.family)
    try:
        size = float(spec.size)
    except (TypeError, ValueError) as e:
        raise InvalidFontSpecError("size", spec.size) from e
    if not (math.isfinite(size) and size > 0):
        raise InvalidFontSpecError("size", spec.size)

    if spec.variant is FontVariant.SMALL_CAPS:
        small_caps: bool | None = True
    elif spec.variant is FontVariant.NORMAL:
        small_caps = None
    else:
        raise InvalidFontSpecError("variant", spec.variant)

    return NativeFont(
        family=spec.family,
        style=_lookup(_STYLES, "style", spec.style),
        weight=_lookup(_WEIGHTS, "weight", spec.weight),
        stretch=_lookup(_STRETCHES, "stretch", spec.stretch),
        size=size,
        small_caps=small_caps,
    )
