"""Command-line interface for deckdraw.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Close, validate and decompose outlines stored as JSON
- Replay recorded clicks through a drawing session
- Quiet output mode and optional log files
"""

from deckdraw.cli.app import cli, main

__all__ = ["cli", "main"]
