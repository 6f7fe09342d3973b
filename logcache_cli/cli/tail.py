# logcache_cli/cli/tail.py
"""Tail command for reading envelopes of a source."""

import asyncio
from pathlib import Path

import rich_click as click
from click import get_text_stream

from ..client import LogCacheClient
from ..config import EndpointConfig, TailSettings
from ..core.exceptions import InvalidArgumentsError
from ..core.tail_engine import TailEngine
from ..ui.tail import TailDisplay
from .error_handler import handle_cli_error
from .helpers import (
    install_stop_handler,
    is_terminal,
    load_config,
    remove_stop_handler,
    resolve_headers,
)


async def run_tail(
    source_id: str,
    endpoint: EndpointConfig,
    settings: TailSettings,
    display: TailDisplay,
    follow: bool = False,
) -> int:
    """Run one tail session against log-cache.

    Args:
        source_id: Source to read
        endpoint: Resolved endpoint configuration
        settings: Timeouts, poll interval and limits
        display: Output sink
        follow: Keep polling until interrupted

    Returns:
        Number of lines written
    """
    async with LogCacheClient(endpoint, timeout=settings.timeout) as client:
        engine = TailEngine(
            client,
            display,
            follow=follow,
            poll_interval=settings.poll_interval,
            lines=settings.lines,
            retention=settings.retention,
        )
        installed = install_stop_handler(engine.stop)
        try:
            return await engine.run(source_id)
        finally:
            if installed:
                remove_stop_handler()


@click.command()
@click.argument("source_id")
@click.option(
    "--follow",
    "-f",
    is_flag=True,
    help="Keep polling and print new envelopes as they arrive",
)
@click.option(
    "--headers/--no-headers",
    default=None,
    help="Print the header line (default: only on a terminal)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds",
)
@click.option(
    "--lines",
    "-n",
    type=click.IntRange(1, 1000),
    help="Number of recent envelopes to fetch first",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    help="Seconds between polls in follow mode",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file to load",
)
@click.option("--debug", is_flag=True, help="Enable debug logging and tracebacks")
@handle_cli_error
def tail(source_id, follow, headers, timeout, lines, poll_interval, config_path, debug):
    """Output envelopes for a source from Log Cache.

    SOURCE_ID is an application GUID or platform component name.

    [bold]EXAMPLES:[/bold]

        log-cache tail my-app-guid

        log-cache tail -f --no-headers doppler | grep ERR

    Press Ctrl+C to stop following.
    """
    if not source_id.strip():
        raise InvalidArgumentsError("Expected exactly one non-empty source id")

    config = load_config(
        config_path,
        debug,
        overrides={
            "tail.timeout": timeout,
            "tail.lines": lines,
            "tail.poll_interval": poll_interval,
        },
    )
    endpoint = config.endpoint()
    settings = config.tail_settings()

    stdout = get_text_stream("stdout")
    display = TailDisplay(
        stdout,
        show_headers=resolve_headers(headers, stdout),
        color=is_terminal(stdout),
    )

    asyncio.run(run_tail(source_id, endpoint, settings, display, follow=follow))
