"""Text nodes as the document model holds them, and the laid-out blocks
the splitter turns them into."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from svg_textdraw.fonts.mapper import NativeFont
from svg_textdraw.fonts.spec import FontSpec
from svg_textdraw.geometry import Rect, Transform
from svg_textdraw.paint.model import Fill, Stroke


class TextAnchor(Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class TextDecorationStyle:
    """Paint of one decoration line, taken from the element declaring it."""

    fill: Fill | None = None
    stroke: Stroke | None = None


@dataclass(frozen=True)
class TextDecoration:
    underline: TextDecorationStyle | None = None
    overline: TextDecorationStyle | None = None
    line_through: TextDecorationStyle | None = None


@dataclass(frozen=True)
class TextSpan:
    text: str
    font: FontSpec
    fill: Fill | None = None
    stroke: Stroke | None = None
    decoration: TextDecoration = field(default_factory=TextDecoration)
    # Per-character rotation in degrees; the last value repeats.
    rotate: tuple[float, ...] = ()


@dataclass(frozen=True)
class TextChunk:
    """A run of spans sharing one starting position.

    ``y`` is the baseline. ``None`` coordinates continue from where the
    previous chunk ended.
    """

    x: float | None
    y: float | None
    anchor: TextAnchor = TextAnchor.START
    spans: tuple[TextSpan, ...] = ()


@dataclass(frozen=True)
class TextNode:
    id: str
    chunks: tuple[TextChunk, ...] = ()
    transform: Transform = field(default_factory=Transform.identity)


@dataclass(frozen=True)
class TextBlock:
    """One rendering unit, already positioned and sized."""

    bbox: Rect
    font: NativeFont
    text: str
    rotate: float = 0.0
    fill: Fill | None = None
    stroke: Stroke | None = None
    decoration: TextDecoration = field(default_factory=TextDecoration)
