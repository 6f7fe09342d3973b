"""Main tail display module."""

from typing import Iterable, List, Optional, TextIO

from rich.console import Console

from ...core.envelopes import Envelope
from ...core.exceptions import SinkWriteError
from .constants import HEADER_TEMPLATE
from .formatters import TailFormatter


class TailDisplay:
    """Write rendered envelopes to an output stream.

    The stream is the only observable output of a tail session, so any
    failure to write or flush it is raised as SinkWriteError.
    """

    def __init__(
        self,
        stream: TextIO,
        formatter: Optional[TailFormatter] = None,
        show_headers: bool = True,
        color: bool = False,
    ):
        """Initialize with an output stream.

        Args:
            stream: Text stream receiving one line per envelope
            formatter: Envelope renderer; a local-time formatter by default
            show_headers: Whether to print the decorative header
            color: Style lines with Rich markup (only for terminals)
        """
        self.stream = stream
        self.formatter = formatter or TailFormatter()
        self.show_headers = show_headers
        self.console = (
            Console(file=stream, force_terminal=True, highlight=False, soft_wrap=True)
            if color
            else None
        )
        self.lines_written = 0

    def write_header(self, source_id: str) -> None:
        """Print the header announcing which source is being read."""
        if not self.show_headers:
            return
        self._write(HEADER_TEMPLATE.format(source_id=source_id) + "\n\n")

    def write_envelopes(self, envelopes: Iterable[Envelope]) -> int:
        """Render and write envelopes in the given order.

        Returns:
            Number of lines written
        """
        envelopes = list(envelopes)
        if not envelopes:
            return 0

        if self.console is not None:
            try:
                for envelope in envelopes:
                    self.console.print(self.formatter.render_text(envelope))
                self.stream.flush()
            except (OSError, ValueError) as e:
                raise SinkWriteError(e) from e
        else:
            lines: List[str] = [self.formatter.render(e) for e in envelopes]
            self._write("".join(line + "\n" for line in lines))

        self.lines_written += len(envelopes)
        return len(envelopes)

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(e) from e
