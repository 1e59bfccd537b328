"""Resolution of gradient paint servers against a target rectangle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svg_textdraw.geometry import Rect
from svg_textdraw.paint.model import (
    Color,
    LinearGradient,
    PaintServerRef,
    RadialGradient,
    ResolvedGradient,
)

if TYPE_CHECKING:
    from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)


def resolve_gradient(tree: Tree, ref: PaintServerRef, bbox: Rect) -> ResolvedGradient | None:
    """Map the gradient ``ref`` points to into user space.

    Returns None (after logging a warning) when the reference is dangling,
    has no stops, or uses bounding box units on a degenerate box.
    """
    server = tree.defs.get(ref.id)
    if server is None:
        logger.warning("Paint server #%s not found", ref.id)
        return None
    if not server.stops:
        logger.warning("Paint server #%s has no stops", ref.id)
        return None

    if server.object_bbox_units and (bbox.width <= 0 or bbox.height <= 0):
        logger.warning("Paint server #%s applied to an empty bounding box", ref.id)
        return None

    def px(v: float) -> float:
        return bbox.x + v * bbox.width if server.object_bbox_units else v

    def py(v: float) -> float:
        return bbox.y + v * bbox.height if server.object_bbox_units else v

    if isinstance(server, LinearGradient):
        coords = (px(server.x1), py(server.y1), px(server.x2), py(server.y2))
        return ResolvedGradient("linear", coords, server.stops)
    if isinstance(server, RadialGradient):
        r = server.r * (bbox.width + bbox.height) / 2.0 if server.object_bbox_units else server.r
        coords = (px(server.cx), py(server.cy), r, px(server.fx), py(server.fy))
        return ResolvedGradient("radial", coords, server.stops)
    raise TypeError(f"Unknown paint server: {server!r}")


def fallback_color(gradient: ResolvedGradient) -> tuple[Color, float]:
    """Color and opacity of the first stop, for backends without gradients."""
    stop = gradient.stops[0]
    return stop.color, stop.opacity
