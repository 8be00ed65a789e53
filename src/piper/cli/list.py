"""List registered sinks."""

from __future__ import annotations

import click

from piper.core.registry import SinkRegistry

from ._console import error, info


@click.command(help="List available sinks")
def list_cmd() -> None:
    """List all registered event sinks."""
    items = SinkRegistry.items()

    if not items:
        error("No sinks registered")
        return

    info("Sinks:")
    for sink_id, sink_cls in items:
        info(f"  {sink_id:15} {getattr(sink_cls, 'sink_name', '')}")


__all__ = ["list_cmd"]
