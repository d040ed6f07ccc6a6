"""Command line interface for the note corpus indexer."""

from .commands import create_parser, main, run

__all__ = ["create_parser", "main", "run"]
