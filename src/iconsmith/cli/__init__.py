"""Command-line interface for iconsmith.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Build a font from a manifest, skipping unchanged builds
- Optional JSON codepoint map export
- Inspect the cmap of a generated font
- Verbose/quiet output modes
"""

from iconsmith.cli.app import cli, main

__all__ = ["cli", "main"]
