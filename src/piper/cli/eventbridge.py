"""Put newline-delimited JSON from stdin onto an AWS EventBridge bus."""

from __future__ import annotations

from typing import Tuple

import click

from piper.core.errors import PiperError
from piper.core.types import EventBridgeConfig
from piper.sinks.eventbridge import EventBridgeEventBuilder, check_batch_size

from ._common import JMESPATH_EPILOG, build_sink, configure, publisher_options, run_pipe

HELP = """Post events to AWS EventBridge.

Credentials are read from the standard AWS environment and config files.

\b
example:
  $ export AWS_ACCESS_KEY_ID='AKIA****************'
  $ export AWS_SECRET_ACCESS_KEY='shhh_this_is_a_secret'
  $ echo '{"action": "obj.add", "@timestamp": 1604953432032, "el_name": "foo"}' | \\
    eventbridge-pipe -s 'test-source' -t 'jp:action' -b 'my-bus' \\
    -T 'jp:"@timestamp"' -r 'jp:"el_name"'
"""


@click.command(help=HELP, epilog=JMESPATH_EPILOG)
@click.option(
    "--region",
    default="us-east-1",
    show_default=True,
    help="The aws region to publish events to.",
)
@click.option(
    "-t",
    "--type",
    "detail_type",
    required=True,
    help='Value for the DetailType field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option("-b", "--event-bus", default="", help='Value for the "EventBusName" field.')
@click.option(
    "-r",
    "--resource",
    "resources",
    multiple=True,
    help='An element for the list in the "Resources" array. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-s",
    "--source",
    required=True,
    help='Value for the "Source" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-T",
    "--timestamp",
    "event_time",
    default="",
    help='Value for the "Time" field converted from epoch milliseconds. '
    'JMESPath expressions allowed with "jp:" prefix.',
)
@publisher_options
def eventbridge(
    region: str,
    detail_type: str,
    event_bus: str,
    resources: Tuple[str, ...],
    source: str,
    event_time: str,
    batch_size: int,
    flush_interval: int,
    dry_run: bool,
    log_level: str,
    verbose: bool,
) -> None:
    publisher_config = configure(log_level, verbose, batch_size, flush_interval)
    try:
        check_batch_size(publisher_config.batch_size)
    except PiperError as exc:
        raise click.UsageError(str(exc)) from exc

    config = EventBridgeConfig(
        source=source,
        detail_type=detail_type,
        region=region,
        event_bus=event_bus,
        time=event_time,
        resources=resources,
    )
    sink = build_sink("eventbridge", config, EventBridgeEventBuilder(config), dry_run)
    run_pipe(sink, publisher_config)


def main() -> None:
    """Console script entry point for ``eventbridge-pipe``."""
    eventbridge(prog_name="eventbridge-pipe", auto_envvar_prefix="PIPER_EVENTBRIDGE")


__all__ = ["eventbridge", "main"]
