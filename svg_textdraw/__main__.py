from svg_textdraw.cli.main import cli

cli()
