"""Command-line interface."""

from m365cli.cli.main import main, run_command

__all__ = ["main", "run_command"]
