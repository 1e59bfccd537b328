"""CLI commands for svg-textdraw."""

from svg_textdraw.cli.commands.blocks import blocks
from svg_textdraw.cli.commands.fonts import fonts
from svg_textdraw.cli.commands.render import render

__all__ = ["render", "blocks", "fonts"]
