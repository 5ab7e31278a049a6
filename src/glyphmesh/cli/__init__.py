"""Command-line interface for glyphmesh.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- serve: run the HTTP API
- render: reconstruct one character and print a summary
- batch: reconstruct many characters in parallel
"""

from glyphmesh.cli.app import cli, main

__all__ = ["cli", "main"]
