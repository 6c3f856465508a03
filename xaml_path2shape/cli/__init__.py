"""Command line interface for xaml-path2shape."""

from xaml_path2shape.cli.main import cli

__all__ = ["cli"]
