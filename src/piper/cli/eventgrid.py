"""Post newline-delimited JSON from stdin to an Azure Event Grid topic."""

from __future__ import annotations

from typing import Dict

import click

from piper.core.types import EventGridConfig
from piper.sinks.eventgrid import EventGridEventBuilder

from ._common import JMESPATH_EPILOG, build_sink, configure, header_option, publisher_options, run_pipe

HELP = """Post events to Azure Event Grid.

\b
example:
  $ topic_endpoint='https://mytopicendpoint.westus2-1.eventgrid.azure.net'
  $ topic_key='shhh_secret_topic_key'
  $ echo '{"action": "obj.add", "@timestamp": 1604953432032, "doc_id": "asdf"}' | \\
    egpipe "$topic_endpoint" \\
    -H "aeg-sas-key: $topic_key" \\
    -T 'jp:"@timestamp"' -t 'audit-log' -s 'jp:action' -i 'jp:doc_id'
"""


@click.command(help=HELP, epilog=JMESPATH_EPILOG)
@click.argument("topic_endpoint")
@click.option(
    "-i",
    "--id",
    "event_id",
    default="",
    help='Value for the "id" field. If unset, a uuid is generated for each event. '
    'JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-s",
    "--subject",
    required=True,
    help='Value for the "subject" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-t",
    "--type",
    "event_type",
    required=True,
    help='Value for the "eventType" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-T",
    "--timestamp",
    "event_time",
    default="now",
    show_default=True,
    help='Value for the "eventTime" field converted from epoch milliseconds. '
    '"now" uses the current system time. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "--data-version",
    default="1.0",
    show_default=True,
    help='Value for the "dataVersion" field. JMESPath expressions allowed with "jp:" prefix.',
)
@header_option("aeg-sas-key: $EVKEY")
@publisher_options
def eventgrid(
    topic_endpoint: str,
    event_id: str,
    subject: str,
    event_type: str,
    event_time: str,
    data_version: str,
    headers: Dict[str, str],
    batch_size: int,
    flush_interval: int,
    dry_run: bool,
    log_level: str,
    verbose: bool,
) -> None:
    publisher_config = configure(log_level, verbose, batch_size, flush_interval)
    config = EventGridConfig(
        endpoint=topic_endpoint,
        subject=subject,
        event_type=event_type,
        event_id=event_id,
        event_time=event_time,
        data_version=data_version,
        headers=headers,
    )
    sink = build_sink("eventgrid", config, EventGridEventBuilder(config.field_specs()), dry_run)
    run_pipe(sink, publisher_config)


def main() -> None:
    """Console script entry point for ``egpipe``."""
    eventgrid(prog_name="egpipe", auto_envvar_prefix="PIPER_EVENTGRID")


__all__ = ["eventgrid", "main"]
