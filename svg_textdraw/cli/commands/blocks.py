"""Blocks command - show how text nodes split into blocks."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg_textdraw.backends.recording import RecordingPainter
from svg_textdraw.backends.svg import SvgPainter
from svg_textdraw.config import Config
from svg_textdraw.exceptions import TextDrawError
from svg_textdraw.fonts.metrics import PainterFontMetrics
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.svg.parser import load_tree
from svg_textdraw.text.model import TextDecoration
from svg_textdraw.text.splitter import iter_blocks

console = Console()


def describe_decoration(decoration: TextDecoration) -> str:
    names = []
    if decoration.underline is not None:
        names.append("underline")
    if decoration.overline is not None:
        names.append("overline")
    if decoration.line_through is not None:
        names.append("line-through")
    return " ".join(names) or "-"


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--fonts", "use_fonts", is_flag=True, help="Measure with installed fonts instead of size ratios")
@click.pass_context
def blocks(ctx: click.Context, input_path: Path, use_fonts: bool) -> None:
    """List the text blocks each text node of INPUT splits into."""
    config = ctx.obj.get("config") or Config.load()

    try:
        tree = load_tree(input_path, config.default_family)
        if use_fonts:
            resolver = FontResolver(config.font_dirs, config.font_overrides, config.default_family)
            painter = SvgPainter(tree.width, tree.height, resolver=resolver)
        else:
            painter = RecordingPainter()

        table = Table(title=f"Text blocks in {input_path.name}")
        table.add_column("Node", style="cyan")
        table.add_column("Text", style="green")
        table.add_column("Font")
        table.add_column("BBox", style="yellow")
        table.add_column("Rotate", justify="right")
        table.add_column("Decoration", style="dim")

        count = 0
        for node in tree.text_nodes:
            for block in iter_blocks(node, PainterFontMetrics(painter)):
                bbox = block.bbox
                table.add_row(
                    node.id,
                    block.text,
                    f"{block.font.family} {block.font.size:g} w{block.font.css_weight}",
                    f"{bbox.x:.1f},{bbox.y:.1f} {bbox.width:.1f}x{bbox.height:.1f}",
                    f"{block.rotate:g}",
                    describe_decoration(block.decoration),
                )
                count += 1
    except TextDrawError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} blocks in {len(tree.text_nodes)} text nodes")
