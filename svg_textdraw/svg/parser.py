"""SVG input: safe parsing and conversion to the text document tree.

Parsing goes through defusedxml to block entity expansion and external
entity attacks. ``build_tree`` walks the document once, resolving
inherited presentation attributes and ``style=""`` declarations into
TextNode objects and collecting gradients into the tree's defs.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from xml.etree.ElementTree import Element, ElementTree, ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from svg_textdraw.exceptions import InvalidFontSpecError, SVGParseError
from svg_textdraw.fonts.spec import (
    FontSpec,
    parse_font_family,
    parse_font_stretch,
    parse_font_style,
    parse_font_variant,
    parse_font_weight,
)
from svg_textdraw.geometry import Rect, Transform
from svg_textdraw.paint.model import (
    Color,
    Fill,
    LinearGradient,
    Paint,
    PaintServer,
    PaintServerRef,
    RadialGradient,
    Stop,
    Stroke,
)
from svg_textdraw.text.model import (
    TextAnchor,
    TextChunk,
    TextDecoration,
    TextDecorationStyle,
    TextNode,
    TextSpan,
)
from svg_textdraw.tree import Tree

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

DEFAULT_FONT_SIZE = 12.0

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-z%]*)\s*$", re.IGNORECASE)
_URL_RE = re.compile(r"^url\(\s*['\"]?#([^)'\"]+)['\"]?\s*\)")
_WS_RE = re.compile(r"\s+")

_UNIT_SCALE = {"": 1.0, "px": 1.0, "pt": 4.0 / 3.0, "pc": 16.0, "mm": 96.0 / 25.4, "cm": 96.0 / 2.54, "in": 96.0}

_FONT_SIZE_KEYWORDS = {
    "xx-small": 9.0,
    "x-small": 10.0,
    "small": 13.0,
    "medium": 16.0,
    "large": 18.0,
    "x-large": 24.0,
    "xx-large": 32.0,
}

_STYLE_PROPS = (
    "font-family",
    "font-size",
    "font-style",
    "font-weight",
    "font-stretch",
    "font-variant",
    "fill",
    "fill-opacity",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "text-anchor",
    "text-decoration",
    "color",
    "display",
)


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------


def parse_svg(path: Path) -> ElementTree:
    """Parse an SVG file.

    Raises:
        SVGParseError: if the file cannot be read or is not well-formed.
    """
    try:
        return ET.parse(str(path))
    except (ParseError, DefusedXmlException, OSError) as e:
        raise SVGParseError(f"Failed to parse {path}: {e}") from e


def parse_svg_string(content: str) -> ElementTree:
    try:
        root = ET.fromstring(content)
    except (ParseError, DefusedXmlException) as e:
        raise SVGParseError(f"Failed to parse SVG content: {e}") from e
    return ElementTree(root)


def _local(tag: object) -> str:
    return tag.split("}")[-1] if isinstance(tag, str) else ""


def find_text_elements(root: Element) -> list[Element]:
    """Return every ``<text>`` element in document order."""
    return [elem for elem in root.iter() if _local(elem.tag) == "text"]


def parse_style(style_str: str | None) -> dict[str, str]:
    """Parse an inline CSS ``style`` attribute into a dict."""
    if not style_str:
        return {}
    out = {}
    for part in style_str.split(";"):
        if ":" in part:
            key, value = part.split(":", 1)
            out[key.strip()] = value.strip()
    return out


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


def parse_length(value: str, reference: float = 0.0) -> float:
    m = _LENGTH_RE.match(value)
    if not m:
        raise ValueError(f"Invalid length: {value!r}")
    number, unit = float(m.group(1)), m.group(2).lower()
    if unit == "%":
        return number * reference / 100.0
    if unit == "em":
        return number * reference
    if unit not in _UNIT_SCALE:
        raise ValueError(f"Unsupported unit in {value!r}")
    return number * _UNIT_SCALE[unit]


def parse_font_size(value: str, parent: float) -> float:
    token = value.strip().lower()
    if token in _FONT_SIZE_KEYWORDS:
        size = _FONT_SIZE_KEYWORDS[token]
    elif token == "larger":
        size = parent * 1.2
    elif token == "smaller":
        size = parent / 1.2
    else:
        try:
            size = parse_length(token, parent)
        except ValueError as e:
            raise InvalidFontSpecError("size", value) from e
    if not (math.isfinite(size) and size > 0):
        raise InvalidFontSpecError("size", value)
    return size


def _number_list(value: str | None) -> list[float]:
    if not value:
        return []
    return [float(n) for n in _NUMBER_RE.findall(value)]


def _first_length(value: str | None) -> float | None:
    if not value:
        return None
    first = value.replace(",", " ").split()
    if not first:
        return None
    try:
        return parse_length(first[0])
    except ValueError:
        logger.warning("Ignoring invalid coordinate %r", value)
        return None


def _opacity(value: str) -> float:
    try:
        number = float(value.strip().rstrip("%")) / (100.0 if value.strip().endswith("%") else 1.0)
    except ValueError:
        logger.warning("Ignoring invalid opacity %r", value)
        return 1.0
    return min(1.0, max(0.0, number))


# ---------------------------------------------------------------------------
# Style context
# ---------------------------------------------------------------------------


@dataclass
class _RotateState:
    values: list[float]
    index: int = 0

    def take(self, count: int) -> list[float]:
        last = len(self.values) - 1
        angles = [self.values[min(self.index + i, last)] for i in range(count)]
        self.index += count
        return angles


@dataclass(frozen=True)
class _Context:
    font: FontSpec
    fill: Paint | None = field(default_factory=Color.black)
    fill_opacity: float = 1.0
    stroke: Paint | None = None
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0
    color: Color = field(default_factory=Color.black)
    anchor: TextAnchor = TextAnchor.START
    decoration: TextDecoration = field(default_factory=TextDecoration)
    rotate: _RotateState | None = None

    def fill_style(self) -> Fill | None:
        return Fill(self.fill, self.fill_opacity) if self.fill is not None else None

    def stroke_style(self) -> Stroke | None:
        if self.stroke is None:
            return None
        return Stroke(self.stroke, self.stroke_width, self.stroke_opacity)


def _parse_paint(value: str, ctx: _Context) -> Paint | None:
    token = value.strip()
    if token in ("none", "transparent"):
        return None
    m = _URL_RE.match(token)
    if m:
        return PaintServerRef(m.group(1))
    if token == "currentColor":
        return ctx.color
    return Color.parse(token)


def _element_props(elem: Element) -> dict[str, str]:
    props = {key: elem.get(key) for key in _STYLE_PROPS if elem.get(key) is not None}
    props.update({k: v for k, v in parse_style(elem.get("style")).items() if k in _STYLE_PROPS})
    return props


def _resolve_context(elem: Element, parent: _Context) -> _Context:
    props = _element_props(elem)
    ctx = parent
    font = parent.font

    if "font-family" in props:
        font = replace(font, family=parse_font_family(props["font-family"]))
    if "font-size" in props:
        font = replace(font, size=parse_font_size(props["font-size"], parent.font.size))
    if "font-style" in props:
        font = replace(font, style=parse_font_style(props["font-style"]))
    if "font-weight" in props:
        font = replace(font, weight=parse_font_weight(props["font-weight"], parent.font.weight))
    if "font-stretch" in props:
        font = replace(font, stretch=parse_font_stretch(props["font-stretch"]))
    if "font-variant" in props:
        font = replace(font, variant=parse_font_variant(props["font-variant"]))
    ctx = replace(ctx, font=font)

    if "color" in props:
        try:
            ctx = replace(ctx, color=Color.parse(props["color"]))
        except ValueError:
            logger.warning("Ignoring invalid color %r", props["color"])
    for key, attr in (("fill", "fill"), ("stroke", "stroke")):
        if key in props:
            try:
                ctx = replace(ctx, **{attr: _parse_paint(props[key], ctx)})
            except ValueError:
                logger.warning("Ignoring invalid %s %r", key, props[key])
    if "fill-opacity" in props:
        ctx = replace(ctx, fill_opacity=_opacity(props["fill-opacity"]))
    if "stroke-opacity" in props:
        ctx = replace(ctx, stroke_opacity=_opacity(props["stroke-opacity"]))
    if "stroke-width" in props:
        try:
            ctx = replace(ctx, stroke_width=parse_length(props["stroke-width"], font.size))
        except ValueError:
            logger.warning("Ignoring invalid stroke-width %r", props["stroke-width"])
    if "text-anchor" in props:
        try:
            ctx = replace(ctx, anchor=TextAnchor(props["text-anchor"].strip()))
        except ValueError:
            logger.warning("Ignoring invalid text-anchor %r", props["text-anchor"])

    if "text-decoration" in props:
        ctx = replace(ctx, decoration=_decoration(props["text-decoration"], ctx))

    return ctx


def _decoration(value: str, ctx: _Context) -> TextDecoration:
    """Add the lines declared by ``value`` to the inherited decoration.

    Lines take the paint of the element declaring them.
    """
    style = TextDecorationStyle(fill=ctx.fill_style(), stroke=ctx.stroke_style())
    decoration = ctx.decoration
    for token in value.split():
        if token == "underline":
            decoration = replace(decoration, underline=style)
        elif token == "overline":
            decoration = replace(decoration, overline=style)
        elif token == "line-through":
            decoration = replace(decoration, line_through=style)
    return decoration


# ---------------------------------------------------------------------------
# Gradients
# ---------------------------------------------------------------------------


def _coord(elem: Element, name: str, default: float) -> float:
    value = elem.get(name)
    if value is None:
        return default
    value = value.strip()
    if value.endswith("%"):
        return float(value[:-1]) / 100.0
    return parse_length(value)


def _href(elem: Element) -> str | None:
    ref = elem.get("href") or elem.get(XLINK_HREF)
    if ref and ref.startswith("#"):
        return ref[1:]
    return None


def _stops(elem: Element) -> tuple[Stop, ...]:
    stops = []
    last_offset = 0.0
    for child in elem:
        if _local(child.tag) != "stop":
            continue
        props = dict(child.attrib)
        props.update(parse_style(child.get("style")))
        offset = _coord(child, "offset", 0.0) if "offset" in child.attrib else 0.0
        offset = max(last_offset, min(1.0, max(0.0, offset)))
        last_offset = offset
        stop_color = props.get("stop-color", "black").strip()
        opacity = _opacity(props.get("stop-opacity", "1"))
        if stop_color == "transparent":
            color, opacity = Color.black(), 0.0
        else:
            try:
                color = Color.parse(stop_color)
            except ValueError:
                logger.warning("Ignoring invalid stop-color %r", stop_color)
                color = Color.black()
        stops.append(Stop(offset, color, opacity))
    return tuple(stops)


def _parse_gradient(elem: Element) -> PaintServer | None:
    gid = elem.get("id")
    if not gid:
        return None
    bbox_units = elem.get("gradientUnits", "objectBoundingBox") != "userSpaceOnUse"
    try:
        if _local(elem.tag) == "linearGradient":
            return LinearGradient(
                id=gid,
                x1=_coord(elem, "x1", 0.0),
                y1=_coord(elem, "y1", 0.0),
                x2=_coord(elem, "x2", 1.0),
                y2=_coord(elem, "y2", 0.0),
                object_bbox_units=bbox_units,
                stops=_stops(elem),
            )
        cx = _coord(elem, "cx", 0.5)
        cy = _coord(elem, "cy", 0.5)
        return RadialGradient(
            id=gid,
            cx=cx,
            cy=cy,
            r=_coord(elem, "r", 0.5),
            fx=_coord(elem, "fx", cx),
            fy=_coord(elem, "fy", cy),
            object_bbox_units=bbox_units,
            stops=_stops(elem),
        )
    except ValueError as e:
        logger.warning("Skipping gradient #%s: %s", gid, e)
        return None


def _collect_gradients(root: Element) -> dict[str, PaintServer]:
    defs: dict[str, PaintServer] = {}
    hrefs: dict[str, str] = {}
    for elem in root.iter():
        if _local(elem.tag) not in ("linearGradient", "radialGradient"):
            continue
        server = _parse_gradient(elem)
        if server is None:
            continue
        defs[server.id] = server
        ref = _href(elem)
        if ref:
            hrefs[server.id] = ref

    # Gradients without stops inherit them through href chains.
    for gid, ref in hrefs.items():
        seen = {gid}
        target = ref
        while not defs[gid].stops and target in defs and target not in seen:
            seen.add(target)
            if defs[target].stops:
                defs[gid] = replace(defs[gid], stops=defs[target].stops)
            target = hrefs.get(target, "")
    return defs


# ---------------------------------------------------------------------------
# Text nodes
# ---------------------------------------------------------------------------


@dataclass
class _Piece:
    text: str
    ctx: _Context
    rotate: list[float]


@dataclass
class _Chunk:
    x: float | None
    y: float | None
    anchor: TextAnchor
    pieces: list[_Piece] = field(default_factory=list)


class _TextBuilder:
    """Flattens a ``<text>`` subtree into chunks of styled pieces."""

    def __init__(self) -> None:
        self.chunks: list[_Chunk] = []
        self._current_y = 0.0
        self._pending_space = False
        self._started = False

    def start_chunk(self, x: float | None, y: float | None, anchor: TextAnchor) -> None:
        if y is not None:
            self._current_y = y
        self.chunks.append(_Chunk(x, y, anchor))

    def add_text(self, raw: str | None, ctx: _Context) -> None:
        if not raw:
            return
        text = _WS_RE.sub(" ", raw)
        if text.startswith(" ") and (self._pending_space or not self._started):
            text = text[1:]
        if not text:
            return
        self._pending_space = text.endswith(" ")
        self._started = True
        rotate = ctx.rotate.take(len(text)) if ctx.rotate is not None else []
        self.chunks[-1].pieces.append(_Piece(text, ctx, rotate))

    def walk(self, elem: Element, ctx: _Context) -> None:
        self.add_text(elem.text, ctx)
        for child in elem:
            tag = _local(child.tag)
            if tag not in ("tspan", "a"):
                if tag == "textPath":
                    logger.warning("textPath is not supported, skipping its content")
                self.add_text(child.tail, ctx)
                continue
            child_ctx = _resolve_context(child, ctx)
            child_ctx = _with_rotate(child, child_ctx)
            if _element_props(child).get("display", "").strip() == "none":
                self.add_text(child.tail, ctx)
                continue
            x = _first_length(child.get("x"))
            y = _first_length(child.get("y"))
            dy = _first_length(child.get("dy"))
            if y is None and dy is not None:
                y = self._current_y + dy
            if x is not None or y is not None:
                self.start_chunk(x, y, child_ctx.anchor)
            self.walk(child, child_ctx)
            self.add_text(child.tail, ctx)

    def finish(self) -> tuple[TextChunk, ...]:
        for chunk in reversed(self.chunks):
            if chunk.pieces:
                last = chunk.pieces[-1]
                stripped = last.text.rstrip(" ")
                last.rotate = last.rotate[: len(stripped)]
                last.text = stripped
                break
        return tuple(
            TextChunk(
                x=chunk.x,
                y=chunk.y,
                anchor=chunk.anchor,
                spans=tuple(
                    TextSpan(
                        text=piece.text,
                        font=piece.ctx.font,
                        fill=piece.ctx.fill_style(),
                        stroke=piece.ctx.stroke_style(),
                        decoration=piece.ctx.decoration,
                        rotate=tuple(piece.rotate),
                    )
                    for piece in chunk.pieces
                    if piece.text
                ),
            )
            for chunk in self.chunks
        )


def _with_rotate(elem: Element, ctx: _Context) -> _Context:
    values = _number_list(elem.get("rotate"))
    if values:
        return replace(ctx, rotate=_RotateState(values))
    return ctx


def build_text_node(elem: Element, ctx: _Context, transform: Transform, node_id: str) -> TextNode:
    builder = _TextBuilder()
    ctx = _with_rotate(elem, ctx)
    builder.start_chunk(
        _first_length(elem.get("x")) or 0.0,
        _first_length(elem.get("y")) or 0.0,
        ctx.anchor,
    )
    builder.walk(elem, ctx)
    return TextNode(id=node_id, chunks=builder.finish(), transform=transform)


def _document_size(root: Element) -> tuple[float, float, Rect | None]:
    view_box = None
    numbers = _number_list(root.get("viewBox"))
    if len(numbers) == 4 and numbers[2] > 0 and numbers[3] > 0:
        view_box = Rect(*numbers)

    def size(attr: str, fallback: float) -> float:
        value = root.get(attr)
        if value and not value.strip().endswith("%"):
            try:
                return parse_length(value)
            except ValueError:
                logger.warning("Ignoring invalid %s %r", attr, value)
        return fallback

    width = size("width", view_box.width if view_box else 100.0)
    height = size("height", view_box.height if view_box else 100.0)
    return width, height, view_box


def build_tree(root: Element, default_family: str = "sans-serif") -> Tree:
    """Convert a parsed SVG document into a Tree of text nodes.

    Raises:
        SVGParseError: if the root element is not ``<svg>``.
        InvalidFontSpecError: if a text element carries an invalid font
            property.
    """
    if _local(root.tag) != "svg":
        raise SVGParseError(f"Root element is <{_local(root.tag)}>, expected <svg>")

    width, height, view_box = _document_size(root)
    tree = Tree(width=width, height=height, view_box=view_box, defs=_collect_gradients(root))

    base = Transform.identity()
    if view_box is not None:
        base = Transform.scaling(width / view_box.width, height / view_box.height).multiply(
            Transform.translation(-view_box.x, -view_box.y)
        )

    counter = 0

    def walk(elem: Element, ctx: _Context, ts: Transform) -> None:
        nonlocal counter
        for child in elem:
            tag = _local(child.tag)
            if tag in ("defs", "linearGradient", "radialGradient", "style", "title", "desc"):
                continue
            child_ctx = _resolve_context(child, ctx)
            if _element_props(child).get("display", "").strip() == "none":
                continue
            try:
                child_ts = ts.multiply(Transform.from_svg(child.get("transform")))
            except ValueError as e:
                logger.warning("Ignoring invalid transform on <%s>: %s", tag, e)
                child_ts = ts
            if tag == "text":
                counter += 1
                node_id = child.get("id") or f"text{counter}"
                tree.text_nodes.append(build_text_node(child, child_ctx, child_ts, node_id))
            else:
                walk(child, child_ctx, child_ts)

    root_ctx = _resolve_context(root, _Context(font=FontSpec(family=default_family, size=DEFAULT_FONT_SIZE)))
    walk(root, root_ctx, base)
    logger.debug("Built tree with %d text nodes and %d paint servers", len(tree.text_nodes), len(tree.defs))
    return tree


def load_tree(path: Path, default_family: str = "sans-serif") -> Tree:
    return build_tree(parse_svg(path).getroot(), default_family)
