"""Options and run loop shared by the sink commands."""

from __future__ import annotations

import signal
import threading
from typing import Any, BinaryIO, Callable, Dict, Optional, TypeVar

import click

from piper.core.errors import PiperError
from piper.core.registry import SinkRegistry
from piper.core.sink import EventSink
from piper.core.types import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_FLUSH_INTERVAL_MS,
    PublisherConfig,
    PublisherStats,
)
from piper.execution import BatchPublisher
from piper.sinks.base import parse_headers

from ._console import success, warning
from ._logging import LOG_LEVELS, setup_logging

F = TypeVar("F", bound=Callable[..., Any])

JMESPATH_EPILOG = "Learn about JMESPath syntax at https://jmespath.org"


def publisher_options(func: F) -> F:
    """Batching, dry-run and logging options common to every sink command."""
    options = [
        click.option(
            "--batch-size",
            type=int,
            default=DEFAULT_BATCH_SIZE,
            show_default=True,
            help="Number of events to send in a batch.",
        ),
        click.option(
            "--flush-interval",
            type=int,
            default=DEFAULT_FLUSH_INTERVAL_MS,
            show_default=True,
            help="Time in milliseconds to wait before sending a partial batch. "
            "Set to 0 to never send a partial batch.",
        ),
        click.option(
            "--dry-run",
            is_flag=True,
            help="Write the built events to stdout as JSON lines instead of sending them.",
        ),
        click.option(
            "--log-level",
            type=click.Choice(LOG_LEVELS, case_sensitive=False),
            default="WARNING",
            show_default=True,
            help="Minimum level of log messages written to stderr.",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Shortcut for --log-level DEBUG."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def header_option(example: str) -> Callable[[F], F]:
    return click.option(
        "-H",
        "--header",
        "headers",
        multiple=True,
        callback=_collect_headers,
        help=f"Header to send with the request in the same format as curl. e.g. '-H \"{example}\"'",
    )


def _collect_headers(ctx, param, values) -> Dict[str, str]:
    try:
        return parse_headers(values)
    except PiperError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


def configure(log_level: str, verbose: bool, batch_size: int, flush_interval: int) -> PublisherConfig:
    setup_logging("DEBUG" if verbose else log_level)
    try:
        return PublisherConfig(batch_size=batch_size, flush_interval_ms=flush_interval)
    except PiperError as exc:
        raise click.UsageError(str(exc)) from exc


def build_sink(sink_id: str, config: Any, builder: Any, dry_run: bool) -> EventSink:
    """Look up ``sink_id`` in the registry, or the JSONL sink when ``dry_run``."""
    try:
        if dry_run:
            return SinkRegistry.create("jsonl", builder)
        return SinkRegistry.create(sink_id, config)
    except PiperError as exc:
        raise click.ClickException(str(exc)) from exc


def run_pipe(
    sink: EventSink,
    config: PublisherConfig,
    stream: Optional[BinaryIO] = None,
) -> PublisherStats:
    """Publish stdin through ``sink``; SIGTERM still triggers the final flush."""
    publisher = BatchPublisher(config, sink)
    cancel = threading.Event()
    source = stream if stream is not None else click.get_binary_stream("stdin")

    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGTERM, lambda signum, frame: cancel.set())
    try:
        with sink:
            stats = publisher.run(source, cancel)
    except PiperError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)

    if cancel.is_set():
        warning("Terminated before end of input; buffered events were flushed")
    success(
        f"Sent {stats.events_sent} events in {stats.batches_sent} batches to {sink.sink_name}"
    )
    return stats


__all__ = [
    "JMESPATH_EPILOG",
    "build_sink",
    "configure",
    "header_option",
    "publisher_options",
    "run_pipe",
]
