"""Rectangles and affine transforms in document units."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

FUZZY_EPSILON = 1e-9

_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def is_fuzzy_zero(value: float) -> bool:
    """Return True when value cannot be told apart from zero."""
    return abs(value) <= FUZZY_EPSILON


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def union(self, other: Rect) -> Rect:
        """Smallest rectangle covering both rectangles."""
        return Rect.from_ltrb(
            min(self.x, other.x),
            min(self.y, other.y),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def translate(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class Transform:
    """SVG affine matrix ``[a c e; b d f; 0 0 1]``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float = 0.0) -> Transform:
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> Transform:
        return cls(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, angle: float) -> Transform:
        rad = math.radians(angle)
        cos, sin = math.cos(rad), math.sin(rad)
        return cls(cos, sin, -sin, cos, 0.0, 0.0)

    @classmethod
    def rotation_at(cls, angle: float, cx: float, cy: float) -> Transform:
        """Rotation by ``angle`` degrees around the pivot ``(cx, cy)``."""
        return (
            cls.translation(cx, cy)
            .multiply(cls.rotation(angle))
            .multiply(cls.translation(-cx, -cy))
        )

    def multiply(self, other: Transform) -> Transform:
        """Return ``self * other``: ``other`` is applied first."""
        return Transform(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def invert(self) -> Transform:
        det = self.a * self.d - self.b * self.c
        if is_fuzzy_zero(det):
            raise ValueError(f"Transform is not invertible: {self}")
        return Transform(
            self.d / det,
            -self.b / det,
            -self.c / det,
            self.a / det,
            (self.c * self.f - self.d * self.e) / det,
            (self.b * self.e - self.a * self.f) / det,
        )

    def is_identity(self) -> bool:
        return all(
            is_fuzzy_zero(got - want)
            for got, want in zip(
                (self.a, self.b, self.c, self.d, self.e, self.f),
                (1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
            )
        )

    def max_scale(self) -> float:
        """Largest axis scale factor, used for supersampling."""
        sx = math.hypot(self.a, self.b)
        sy = math.hypot(self.c, self.d)
        return max(sx, sy)

    def to_svg(self) -> str:
        values = ",".join(f"{v:g}" for v in (self.a, self.b, self.c, self.d, self.e, self.f))
        return f"matrix({values})"

    @classmethod
    def from_svg(cls, transform_str: str | None) -> Transform:
        """Parse an SVG transform list into a single matrix.

        Raises ValueError on malformed entries.
        """
        m = cls.identity()
        if not transform_str:
            return m
        for part in _TRANSFORM_RE.finditer(transform_str):
            kind = part.group(1)
            nums = [float(x) for x in _NUMBER_RE.findall(part.group(2))]
            if kind == "matrix" and len(nums) == 6:
                step = cls(*nums)
            elif kind == "translate" and len(nums) in (1, 2):
                step = cls.translation(nums[0], nums[1] if len(nums) > 1 else 0.0)
            elif kind == "scale" and len(nums) in (1, 2):
                step = cls.scaling(nums[0], nums[1] if len(nums) > 1 else None)
            elif kind == "rotate" and len(nums) == 1:
                step = cls.rotation(nums[0])
            elif kind == "rotate" and len(nums) == 3:
                step = cls.rotation_at(*nums)
            elif kind == "skewX" and len(nums) == 1:
                step = cls(1.0, 0.0, math.tan(math.radians(nums[0])), 1.0, 0.0, 0.0)
            elif kind == "skewY" and len(nums) == 1:
                step = cls(1.0, math.tan(math.radians(nums[0])), 0.0, 1.0, 0.0, 0.0)
            else:
                raise ValueError(f"Malformed transform: {part.group(0)!r}")
            m = m.multiply(step)
        return m
