"""Command-line interface for svg-textdraw."""
