"""Render command - draw the text of an SVG file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg_textdraw.api import BACKENDS, TextRenderer
from svg_textdraw.config import Config

console = Console()


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True, help="Output file")
@click.option(
    "--backend",
    "-b",
    type=click.Choice(BACKENDS),
    default=None,
    help="Painter backend (default: from output suffix)",
)
@click.option("--scale", "-s", type=float, default=1.0, show_default=True, help="Output scale factor")
@click.pass_context
def render(
    ctx: click.Context,
    input_path: Path,
    output: Path,
    backend: str | None,
    scale: float,
) -> None:
    """Render the text nodes of INPUT to an image or SVG file."""
    config = ctx.obj.get("config") or Config.load()

    if backend is None:
        backend = "svg" if output.suffix.lower() == ".svg" else "raster"
    if scale <= 0:
        raise click.BadParameter("must be positive", param_hint="--scale")

    renderer = TextRenderer(config=config, backend=backend, scale=scale)

    with console.status(f"[bold green]Rendering {input_path.name}..."):
        result = renderer.render_file(input_path, output)

    if not result.success:
        for error in result.errors:
            console.print(f"[red]Error:[/red] {error}")
        raise SystemExit(1)

    table = Table(title=f"Text nodes in {input_path.name}")
    table.add_column("Node", style="cyan")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("Width", justify="right", style="yellow")
    table.add_column("Height", justify="right", style="yellow")
    for node_id, bbox in result.nodes:
        table.add_row(
            node_id,
            f"{bbox.x:.2f}",
            f"{bbox.y:.2f}",
            f"{bbox.width:.2f}",
            f"{bbox.height:.2f}",
        )
    console.print(table)
    console.print(f"[green]Wrote[/green] {output} ({backend})")
