"""Command-line interface for piper (Click-based)."""

from __future__ import annotations

import click

# Import to trigger registry decorators
from piper import sinks  # noqa: F401

from ._group import OrderedGroup
from .eventbridge import eventbridge
from .eventgrid import eventgrid
from .list import list_cmd
from .splunk import splunk


@click.group(cls=OrderedGroup, help="Pipe newline-delimited JSON from stdin to event ingestion endpoints")
def cli() -> None:
    """Top-level CLI group."""


cli.add_command(eventgrid, "eventgrid")
cli.add_command(splunk, "splunk")
cli.add_command(eventbridge, "eventbridge")
cli.add_command(list_cmd, "list")


def main() -> None:
    """CLI entry point for console scripts."""
    cli(auto_envvar_prefix="PIPER")


__all__ = ["cli", "main"]
