"""Command-line interface for Restgate."""

from .main import build_parser, main

__all__ = ["build_parser", "main"]
