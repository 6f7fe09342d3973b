# logcache_cli/cli/__init__.py
"""Main CLI entry point."""

# Configure rich-click BEFORE importing it as click, otherwise the
# settings below do not take effect.
import rich_click.rich_click as rc

rc.USE_RICH_MARKUP = True
rc.SHOW_ARGUMENTS = True
rc.GROUP_ARGUMENTS_OPTIONS = True
rc.SHOW_METAVARS_COLUMN = False
rc.APPEND_METAVARS_HELP = True
rc.MAX_WIDTH = 100

# Nord color scheme
rc.STYLE_OPTION = "bold #8fbcbb"  # Nord7 teal
rc.STYLE_ARGUMENT = "bold #88c0d0"  # Nord8 light blue
rc.STYLE_COMMAND = "bold #5e81ac"  # Nord10 blue
rc.STYLE_SWITCH = "#a3be8c"  # Nord14 green
rc.STYLE_METAVAR = "#d8dee9"  # Nord4 light gray
rc.STYLE_USAGE = "bold #8fbcbb"
rc.STYLE_OPTION_DEFAULT = "#4c566a"  # Nord3 dim gray
rc.STYLE_REQUIRED_SHORT = "bold #bf616a"  # Nord11 red
rc.STYLE_REQUIRED_LONG = "bold #bf616a"
rc.STYLE_HELPTEXT_FIRST_LINE = "bold"
rc.STYLE_HELPTEXT = "#d8dee9"

import rich_click as click

from .. import __version__
from .meta import meta
from .tail import tail


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="log-cache")
def cli() -> None:
    """Query Log Cache for recent envelopes and cache metadata.

    [bold]EXAMPLES:[/bold]

        log-cache tail my-app-guid

        log-cache tail --follow doppler

        log-cache meta --scope platform

    [bold]CONFIGURATION:[/bold]

    • Configuration file: ~/.config/logcache/config.yaml

    • Environment variables: LOG_CACHE_ADDR, LOG_CACHE_API_ADDR,
      LOG_CACHE_TOKEN, LOG_CACHE_SKIP_AUTH
    """


# Register commands
cli.add_command(tail)
cli.add_command(meta)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
