"""Command-line interface for envied."""

from envied.cli.main import app

__all__ = ["app"]
