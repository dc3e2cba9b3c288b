"""Command-line interface for mapmaker.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for territory processing
- Verbose/quiet output modes
- Dry-run and invalid-boundary listing modes
- Detailed error reporting
"""

from mapmaker.cli.app import cli, main

__all__ = ["cli", "main"]
