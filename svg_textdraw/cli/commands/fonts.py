"""Fonts command - font lookup utilities."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from svg_textdraw.config import Config
from svg_textdraw.exceptions import FontNotFoundError, InvalidFontSpecError
from svg_textdraw.fonts.mapper import map_font
from svg_textdraw.fonts.resolver import FontResolver
from svg_textdraw.fonts.spec import FontSpec, parse_font_stretch, parse_font_style, parse_font_weight

console = Console()


def _resolver(ctx: click.Context) -> FontResolver:
    config = ctx.obj.get("config") or Config.load()
    return FontResolver(config.font_dirs, config.font_overrides, config.default_family)


@click.group()
def fonts() -> None:
    """Font lookup commands."""
    pass


@fonts.command("find")
@click.argument("family")
@click.option("--weight", default="400", show_default=True, help="CSS font-weight (100-900, bold)")
@click.option("--style", default="normal", show_default=True, help="normal, italic or oblique")
@click.option("--stretch", default="normal", show_default=True, help="CSS font-stretch keyword")
@click.pass_context
def find_font(ctx: click.Context, family: str, weight: str, style: str, stretch: str) -> None:
    """Find the font file used for FAMILY."""
    resolver = _resolver(ctx)
    try:
        spec = FontSpec(
            family=family,
            style=parse_font_style(style),
            weight=parse_font_weight(weight),
            stretch=parse_font_stretch(stretch),
        )
        with console.status(f"[bold green]Searching for '{family}'..."):
            face = resolver.find(map_font(spec))
    except (FontNotFoundError, InvalidFontSpecError) as e:
        console.print(f"[red]Not found:[/red] {e}")
        raise SystemExit(1) from e

    console.print(f"[green]Found:[/green] {face.path}")
    console.print(f"[dim]Face index:[/dim] {face.font_index}")
    console.print(f"[dim]Family:[/dim] {face.family} (weight {face.weight}, width {face.width}%)")


@fonts.command("list")
@click.option("--family", help="Filter by font family name")
@click.pass_context
def list_fonts(ctx: click.Context, family: str | None) -> None:
    """List indexed font faces."""
    resolver = _resolver(ctx)

    with console.status("[bold green]Indexing fonts..."):
        faces = resolver.faces()

    table = Table(title="Available Fonts")
    table.add_column("Family", style="cyan")
    table.add_column("Weight", style="yellow")
    table.add_column("Italic", style="green")
    table.add_column("Path", style="dim")

    count = 0
    for face in faces:
        if family and family.lower() not in face.family.lower():
            continue
        font_path = str(face.path)
        table.add_row(
            face.family,
            str(face.weight),
            "yes" if face.italic else "no",
            font_path[:50] + "..." if len(font_path) > 50 else font_path,
        )
        count += 1

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} fonts")
