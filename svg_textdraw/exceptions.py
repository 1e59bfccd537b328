"""Exception hierarchy for svg-textdraw.

Every error raised by the library derives from TextDrawError so callers
can catch the whole family with a single except clause.
"""

from __future__ import annotations


class TextDrawError(Exception):
    """Base class for all svg-textdraw errors."""


class InvalidFontSpecError(TextDrawError):
    """A font descriptor holds a value outside the supported tables."""

    def __init__(self, field: str, value: object, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid font {field}: {value!r}")


class FontNotFoundError(TextDrawError):
    """No installed font face matches the requested family and style."""

    def __init__(self, family: str, weight: int = 400, style: str = "normal") -> None:
        self.family = family
        self.weight = weight
        self.style = style
        super().__init__(f"Font not found: {family} (weight={weight}, style={style})")


class PaintFailure(TextDrawError):
    """The painter rejected a draw, font or transform call."""

    def __init__(self, message: str, block_text: str | None = None) -> None:
        self.block_text = block_text
        super().__init__(message)


class SVGParseError(TextDrawError):
    """The input document could not be parsed as SVG."""


class ConfigError(TextDrawError):
    """The configuration file is malformed or holds invalid values."""
