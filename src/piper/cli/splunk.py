"""Post newline-delimited JSON from stdin to a Splunk HTTP Event Collector."""

from __future__ import annotations

from typing import Dict

import click

from piper.core.types import SplunkConfig
from piper.sinks.splunk import SplunkEventBuilder

from ._common import JMESPATH_EPILOG, build_sink, configure, header_option, publisher_options, run_pipe

HELP = """Post events to Splunk.

\b
example:
  $ splunk_endpoint="http://localhost:8088"
  $ splunk_hec_token="shhh_secret_token"
  $ echo '{"action": "obj.add", "@timestamp": 1604953432032, "doc_id": "asdf"}' | \\
    splunk-pipe "$splunk_endpoint" \\
    -H "Authorization: Splunk $splunk_hec_token" \\
    -T 'jp:"@timestamp"'
"""


@click.command(help=HELP, epilog=JMESPATH_EPILOG)
@click.argument("endpoint")
@click.option(
    "-t",
    "--sourcetype",
    default="",
    help='Value for the "sourcetype" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-s",
    "--source",
    default="",
    help='Value for the "source" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-T",
    "--timestamp",
    "event_time",
    default="",
    help='Value for the "time" field converted from epoch milliseconds. '
    'JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "-h",
    "--host",
    default="",
    help='Value for the "host" field. JMESPath expressions allowed with "jp:" prefix.',
)
@click.option(
    "--index",
    default="",
    help='Value for the "index" field. JMESPath expressions allowed with "jp:" prefix.',
)
@header_option("Authorization: Splunk $HEC_KEY")
@publisher_options
def splunk(
    endpoint: str,
    sourcetype: str,
    source: str,
    event_time: str,
    host: str,
    index: str,
    headers: Dict[str, str],
    batch_size: int,
    flush_interval: int,
    dry_run: bool,
    log_level: str,
    verbose: bool,
) -> None:
    publisher_config = configure(log_level, verbose, batch_size, flush_interval)
    config = SplunkConfig(
        endpoint=endpoint,
        source=source,
        sourcetype=sourcetype,
        host=host,
        index=index,
        time=event_time,
        headers=headers,
    )
    sink = build_sink("splunk", config, SplunkEventBuilder(config.field_specs()), dry_run)
    run_pipe(sink, publisher_config)


def main() -> None:
    """Console script entry point for ``splunk-pipe``."""
    splunk(prog_name="splunk-pipe", auto_envvar_prefix="PIPER_SPLUNK")


__all__ = ["splunk", "main"]
