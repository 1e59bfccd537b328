"""Unit tests for svg_textdraw.fonts.mapper.

Every weight and stretch value is listed literally so a change to either
table shows up as a failing case.
"""

from dataclasses import replace

import pytest

from svg_textdraw.exceptions import InvalidFontSpecError
from svg_textdraw.fonts.mapper import (
    NativeFont,
    NativeStretch,
    NativeStyle,
    NativeWeight,
    map_font,
)
from svg_textdraw.fonts.spec import (
    FontSpec,
    FontStretch,
    FontStyle,
    FontVariant,
    FontWeight,
)

BASE = FontSpec(family="Test Sans", size=12.0)


class TestWeightMapping:
    """Tests for the CSS weight to native weight table."""

    @pytest.mark.parametrize(
        ("weight", "expected"),
        [
            (FontWeight.W100, NativeWeight.THIN),
            (FontWeight.W200, NativeWeight.EXTRA_LIGHT),
            (FontWeight.W300, NativeWeight.LIGHT),
            (FontWeight.W400, NativeWeight.NORMAL),
            (FontWeight.W500, NativeWeight.MEDIUM),
            (FontWeight.W600, NativeWeight.DEMI_BOLD),
            (FontWeight.W700, NativeWeight.BOLD),
            (FontWeight.W800, NativeWeight.EXTRA_BOLD),
            (FontWeight.W900, NativeWeight.BLACK),
        ],
    )
    def test_weight_maps_to_class(self, weight: FontWeight, expected: NativeWeight) -> None:
        """Each of the nine weights maps to its own native class."""
        assert map_font(replace(BASE, weight=weight)).weight is expected


class TestStretchMapping:
    """Tests for the font-stretch to native stretch table."""

    @pytest.mark.parametrize(
        ("stretch", "expected"),
        [
            (FontStretch.ULTRA_CONDENSED, NativeStretch.ULTRA_CONDENSED),
            (FontStretch.EXTRA_CONDENSED, NativeStretch.EXTRA_CONDENSED),
            (FontStretch.CONDENSED, NativeStretch.CONDENSED),
            (FontStretch.SEMI_CONDENSED, NativeStretch.SEMI_CONDENSED),
            (FontStretch.NORMAL, NativeStretch.UNSTRETCHED),
            (FontStretch.SEMI_EXPANDED, NativeStretch.SEMI_EXPANDED),
            (FontStretch.EXPANDED, NativeStretch.EXPANDED),
            (FontStretch.EXTRA_EXPANDED, NativeStretch.EXTRA_EXPANDED),
            (FontStretch.ULTRA_EXPANDED, NativeStretch.ULTRA_EXPANDED),
        ],
    )
    def test_stretch_maps_to_class(self, stretch: FontStretch, expected: NativeStretch) -> None:
        """Absolute stretch keywords map one to one."""
        assert map_font(replace(BASE, stretch=stretch)).stretch is expected

    def test_narrower_shares_condensed_class(self) -> None:
        """narrower maps to the condensed class."""
        assert map_font(replace(BASE, stretch=FontStretch.NARROWER)).stretch is NativeStretch.CONDENSED

    def test_wider_shares_expanded_class(self) -> None:
        """wider maps to the expanded class."""
        assert map_font(replace(BASE, stretch=FontStretch.WIDER)).stretch is NativeStretch.EXPANDED


class TestStyleAndVariant:
    """Tests for style, small-caps and the carried-over fields."""

    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            (FontStyle.NORMAL, NativeStyle.NORMAL),
            (FontStyle.ITALIC, NativeStyle.ITALIC),
            (FontStyle.OBLIQUE, NativeStyle.OBLIQUE),
        ],
    )
    def test_style_maps_one_to_one(self, style: FontStyle, expected: NativeStyle) -> None:
        """Normal, italic and oblique each keep their own native style."""
        assert map_font(replace(BASE, style=style)).style is expected

    def test_small_caps_sets_flag(self) -> None:
        """small-caps turns the capitalization flag on."""
        assert map_font(replace(BASE, variant=FontVariant.SMALL_CAPS)).small_caps is True

    def test_normal_variant_leaves_flag_unset(self) -> None:
        """A normal variant leaves capitalization untouched."""
        assert map_font(BASE).small_caps is None

    def test_family_and_size_carried_over(self) -> None:
        """Family and size pass through unchanged."""
        font = map_font(FontSpec(family="Serif Pro", size=16.5))
        assert font == NativeFont("Serif Pro", size=16.5)


class TestInvalidSpecs:
    """Tests for rejected font specs."""

    def test_out_of_range_weight_raises(self) -> None:
        """A weight outside the table names the weight field."""
        spec = replace(BASE, weight=950)
        with pytest.raises(InvalidFontSpecError) as exc_info:
            map_font(spec)
        assert exc_info.value.field == "weight"

    def test_unknown_stretch_raises(self) -> None:
        """An unknown stretch names the stretch field."""
        with pytest.raises(InvalidFontSpecError) as exc_info:
            map_font(replace(BASE, stretch="squashed"))
        assert exc_info.value.field == "stretch"

    @pytest.mark.parametrize("size", [0.0, -4.0, "big"])
    def test_non_positive_size_raises(self, size: object) -> None:
        """Zero, negative and non-numeric sizes are rejected."""
        with pytest.raises(InvalidFontSpecError):
            map_font(replace(BASE, size=size))

    @pytest.mark.parametrize("size", [float("inf"), float("-inf"), float("nan"), "1e999"])
    def test_non_finite_size_raises(self, size: object) -> None:
        """Infinite and NaN sizes are rejected on the size field."""
        with pytest.raises(InvalidFontSpecError) as exc_info:
            map_font(replace(BASE, size=size))
        assert exc_info.value.field == "size"

    def test_empty_family_raises(self) -> None:
        """An empty family name is rejected."""
        with pytest.raises(InvalidFontSpecError):
            map_font(replace(BASE, family=""))


class TestCssViews:
    """Tests for the CSS views on NativeFont."""

    def test_css_weight_round_trips_table(self) -> None:
        """css_weight recovers the numeric CSS weight."""
        for weight in FontWeight:
            assert map_font(replace(BASE, weight=weight)).css_weight == int(weight)

    def test_css_stretch_for_condensed(self) -> None:
        """css_stretch names the keyword of the native class."""
        assert map_font(replace(BASE, stretch=FontStretch.NARROWER)).css_stretch == "condensed"

    def test_italic_property(self) -> None:
        """Oblique counts as italic for backends with a single slant flag."""
        assert map_font(replace(BASE, style=FontStyle.OBLIQUE)).italic is True
        assert map_font(BASE).italic is False
