# logcache_cli/cli/meta.py
"""Meta command for listing cached sources."""

import asyncio
from pathlib import Path
from typing import List, Optional

import rich_click as click
from click import get_text_stream

from ..client import CloudControllerClient, LogCacheClient
from ..config import EndpointConfig, MetaSettings
from ..core.constants import Scopes
from ..meta import MetaAggregator, MetaRow, validate_scope
from ..ui import MetaDisplay
from .error_handler import handle_cli_error
from .helpers import is_terminal, load_config, resolve_headers


async def collect_rows(
    endpoint: EndpointConfig,
    settings: MetaSettings,
    scope: str,
    noise: bool = False,
) -> List[MetaRow]:
    """Fetch metadata and resolve source names.

    Names are only looked up when an API address is configured; otherwise
    every source is listed by its id.
    """
    async with LogCacheClient(endpoint, timeout=settings.timeout) as client:
        resolver: Optional[CloudControllerClient] = None
        if endpoint.api_addr:
            resolver = CloudControllerClient(
                endpoint, timeout=settings.timeout, batch_size=settings.batch_size
            )
        try:
            aggregator = MetaAggregator(client, resolver, scope=scope, noise=noise)
            return await aggregator.collect()
        finally:
            if resolver is not None:
                await resolver.close()


@click.command()
@click.option(
    "--scope",
    type=click.Choice(Scopes.CHOICES, case_sensitive=False),
    help="Which sources to list: platform, applications or all",
)
@click.option(
    "--noise",
    is_flag=True,
    help="Add a column with envelopes received in the last minute",
)
@click.option("--guid", is_flag=True, help="Add a column with the raw source id")
@click.option(
    "--headers/--no-headers",
    default=None,
    help="Print the header and column titles (default: only on a terminal)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file to load",
)
@click.option("--debug", is_flag=True, help="Enable debug logging and tracebacks")
@handle_cli_error
def meta(scope, noise, guid, headers, timeout, config_path, debug):
    """Show the sources held in Log Cache.

    Lists every cached source with its envelope count, expired count and the
    time span its cache covers.

    [bold]EXAMPLES:[/bold]

        log-cache meta

        log-cache meta --scope applications --noise
    """
    config = load_config(
        config_path,
        debug,
        overrides={"meta.timeout": timeout, "meta.scope": scope and scope.lower()},
    )
    endpoint = config.endpoint()
    settings = config.meta_settings()
    resolved_scope = validate_scope(settings.scope)

    rows = asyncio.run(collect_rows(endpoint, settings, resolved_scope, noise=noise))

    stdout = get_text_stream("stdout")
    display = MetaDisplay(
        stdout,
        show_headers=resolve_headers(headers, stdout),
        show_guid=guid,
        show_rate=noise,
        color=is_terminal(stdout),
    )
    display.render(rows)
