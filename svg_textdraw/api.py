"""High-level API: render the text of an SVG document to a file."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

from svg_textdraw.backends.raster import RasterPainter
from svg_textdraw.backends.svg import SvgPainter
from svg_textdraw.config import Config
from svg_textdraw.exceptions import TextDrawError
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.geometry import Rect, Transform
from svg_textdraw.paint.model import Color
from svg_textdraw.render import render_tree
from svg_textdraw.svg.parser import load_tree
from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)

BACKENDS = ("raster", "svg")


@dataclass
class RenderResult:
    input_path: Path
    output_path: Path
    success: bool = False
    nodes: list[tuple[str, Rect]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class TextRenderer:
    """Render SVG text nodes through one of the painter backends.

    Example:
        >>> renderer = TextRenderer(backend="svg")
        >>> result = renderer.render_file(Path("in.svg"), Path("out.svg"))
        >>> result.success
        True
    """

    def __init__(
        self,
        config: Config | None = None,
        backend: str = "raster",
        scale: float = 1.0,
    ) -> None:
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.config = config or Config()
        self.backend = backend
        self.options = self.config.options(scale=scale)
        self.resolver = FontResolver(
            font_dirs=self.config.font_dirs,
            overrides=self.config.font_overrides,
            default_family=self.config.default_family,
        )

    def _background(self) -> Color | None:
        if self.options.background is None:
            return None
        try:
            return Color.parse(self.options.background)
        except ValueError:
            logger.warning("Ignoring invalid background %r", self.options.background)
            return None

    def make_painter(self, tree: Tree) -> RasterPainter | SvgPainter:
        scale = self.options.scale
        width, height = tree.width * scale, tree.height * scale
        base = Transform.scaling(scale)
        if self.backend == "svg":
            painter = SvgPainter(width, height, resolver=self.resolver, background=self._background())
            painter.set_transform(base)
            return painter
        return RasterPainter(
            math.ceil(width),
            math.ceil(height),
            resolver=self.resolver,
            background=self._background(),
            transform=base,
        )

    def render_file(self, input_path: Path, output_path: Path) -> RenderResult:
        """Render all text of ``input_path`` into ``output_path``.

        Library errors are reported in the result instead of raised.
        """
        result = RenderResult(input_path=input_path, output_path=output_path)
        try:
            tree = load_tree(input_path, self.options.default_family)
            painter = self.make_painter(tree)
            result.nodes = render_tree(tree, self.options, painter)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(painter, SvgPainter):
                painter.write(output_path)
            else:
                painter.save(output_path)
        except TextDrawError as e:
            logger.error("Rendering %s failed: %s", input_path, e)
            result.errors.append(str(e))
            return result
        result.success = True
        logger.info("Rendered %d text nodes from %s", len(result.nodes), input_path)
        return result
