"""Command-line interface for harbinger."""

from .main import cli, main

__all__ = ["cli", "main"]
