"""Table display for source metadata."""

from typing import List, TextIO

from rich.console import Console
from rich.table import Table

from ..core.exceptions import SinkWriteError
from ..meta.aggregator import MetaRow
from .tail.constants import NORD_CYAN, NORD_GRAY
from .tail.formatters import format_duration

HEADER_TEMPLATE = "Retrieving log cache metadata..."


class MetaDisplay:
    """Render metadata rows as an aligned table."""

    def __init__(
        self,
        stream: TextIO,
        show_headers: bool = True,
        show_guid: bool = False,
        show_rate: bool = False,
        color: bool = False,
    ):
        self.stream = stream
        self.show_headers = show_headers
        self.show_guid = show_guid
        self.show_rate = show_rate
        self.console = Console(
            file=stream,
            force_terminal=color,
            no_color=not color,
            highlight=False,
            markup=False,
            width=200,
        )

    def build_table(self, rows: List[MetaRow]) -> Table:
        """Build the Rich table for the given rows."""
        table = Table(
            box=None,
            show_header=self.show_headers,
            header_style=f"bold {NORD_CYAN}",
            pad_edge=False,
        )

        if self.show_guid:
            table.add_column("Source ID", no_wrap=True, style=NORD_GRAY)
        table.add_column("Source", no_wrap=True)
        table.add_column("Count", justify="right", no_wrap=True)
        table.add_column("Expired", justify="right", no_wrap=True)
        table.add_column("Cache Duration", no_wrap=True)
        if self.show_rate:
            table.add_column("Rate", justify="right", no_wrap=True)

        for row in rows:
            cells = [
                row.name,
                str(row.count),
                str(row.expired),
                format_duration(row.cache_duration),
            ]
            if self.show_guid:
                cells.insert(0, row.source_id)
            if self.show_rate:
                cells.append("" if row.rate is None else str(row.rate))
            table.add_row(*cells)

        return table

    def render(self, rows: List[MetaRow]) -> None:
        """Print the header and table; prints nothing when there are no rows."""
        if not rows:
            return
        try:
            if self.show_headers:
                self.console.print(HEADER_TEMPLATE + "\n")
            self.console.print(self.build_table(rows))
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(e) from e
