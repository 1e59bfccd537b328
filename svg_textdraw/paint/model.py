"""Paint styles as they appear in the document model, and the
painter-ready brush and pen they resolve to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from PIL import ImageColor


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    @classmethod
    def black(cls) -> Color:
        return cls(0, 0, 0)

    @classmethod
    def parse(cls, value: str) -> Color:
        """Parse a CSS color: hex, ``rgb()``, ``hsl()``/``hsv()`` or a CSS3 name.

        Any alpha component is dropped. Raises ValueError for anything else.
        """
        text = value.strip()
        try:
            channels = ImageColor.getrgb(text)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unsupported color: {value!r}") from e
        return cls(*(min(255, max(0, int(c))) for c in channels[:3]))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def rgba(self, opacity: float = 1.0) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, round(255 * min(1.0, max(0.0, opacity))))


@dataclass(frozen=True)
class PaintServerRef:
    """Reference to a gradient in the document's defs (``url(#id)``)."""

    id: str


Paint = Union[Color, PaintServerRef]


@dataclass(frozen=True)
class Fill:
    paint: Paint
    opacity: float = 1.0


@dataclass(frozen=True)
class Stroke:
    paint: Paint
    width: float = 1.0
    opacity: float = 1.0


@dataclass(frozen=True)
class Stop:
    offset: float
    color: Color
    opacity: float = 1.0


@dataclass(frozen=True)
class LinearGradient:
    id: str
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 1.0
    y2: float = 0.0
    object_bbox_units: bool = True
    stops: tuple[Stop, ...] = ()


@dataclass(frozen=True)
class RadialGradient:
    id: str
    cx: float = 0.5
    cy: float = 0.5
    r: float = 0.5
    fx: float = 0.5
    fy: float = 0.5
    object_bbox_units: bool = True
    stops: tuple[Stop, ...] = ()


PaintServer = Union[LinearGradient, RadialGradient]


@dataclass(frozen=True)
class ResolvedGradient:
    """Gradient with its geometry mapped into user space.

    ``coords`` holds (x1, y1, x2, y2) for linear gradients and
    (cx, cy, r, fx, fy) for radial ones.
    """

    kind: str
    coords: tuple[float, ...]
    stops: tuple[Stop, ...]


@dataclass(frozen=True)
class Brush:
    color: Color = field(default_factory=Color.black)
    opacity: float = 1.0
    gradient: ResolvedGradient | None = None


@dataclass(frozen=True)
class Pen:
    color: Color = field(default_factory=Color.black)
    width: float = 1.0
    opacity: float = 1.0
    gradient: ResolvedGradient | None = None
