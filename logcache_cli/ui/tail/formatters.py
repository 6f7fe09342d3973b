"""Formatting utilities for tail display."""

from datetime import datetime, timezone, tzinfo
from typing import Optional

from rich.text import Text

from ...core.constants import NANOSECONDS_PER_SECOND
from ...core.envelopes import (
    Counter,
    Envelope,
    Event,
    Gauge,
    Log,
    Payload,
    Timer,
    Unknown,
)
from .constants import (
    CENTISECONDS_DIVISOR,
    LEVEL_COLORS,
    NORD_GRAY,
    NORD_LIGHT,
    TIMESTAMP_FORMAT,
    VARIANT_COLORS,
)


def _split_fraction(value: int, precision: int):
    """Split value into a whole part and a trimmed decimal fraction string."""
    whole, fraction = divmod(value, 10**precision)
    if fraction == 0:
        return whole, ""
    return whole, "." + f"{fraction:0{precision}d}".rstrip("0")


def format_duration(nanoseconds: int) -> str:
    """Format a nanosecond duration like ``1s``, ``1.5ms`` or ``2h3m4.5s``."""
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    remaining = abs(nanoseconds)

    if remaining < NANOSECONDS_PER_SECOND:
        if remaining < 1_000:
            return f"{sign}{remaining}ns"
        if remaining < 1_000_000:
            whole, fraction = _split_fraction(remaining, 3)
            return f"{sign}{whole}{fraction}µs"
        whole, fraction = _split_fraction(remaining, 6)
        return f"{sign}{whole}{fraction}ms"

    seconds, fraction = _split_fraction(remaining, 9)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}{fraction}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}{fraction}s"
    return f"{sign}{seconds}{fraction}s"


class TailFormatter:
    """Renders envelopes into single text lines.

    Every envelope maps to exactly one line::

        <timestamp> [<source>/<instance>] <TAG> <fields>
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        """Initialize the formatter.

        Args:
            tz: Timezone for timestamps; the local zone when None
        """
        self.tz = tz

    def format_timestamp(self, timestamp: int) -> str:
        """Format nanoseconds since epoch with centiseconds and UTC offset.

        Falls back to the raw integer when the value cannot be represented.
        """
        seconds, remainder = divmod(timestamp, NANOSECONDS_PER_SECOND)
        try:
            moment = datetime.fromtimestamp(seconds, timezone.utc).astimezone(self.tz)
        except (OverflowError, OSError, ValueError):
            return str(timestamp)

        centiseconds = remainder // CENTISECONDS_DIVISOR
        return (
            f"{moment.strftime(TIMESTAMP_FORMAT)}.{centiseconds:02d}"
            f"{moment.strftime('%z')}"
        )

    @staticmethod
    def format_origin(envelope: Envelope) -> str:
        return f"[{envelope.source_id}/{envelope.instance_id}]"

    @staticmethod
    def format_payload(payload: Payload) -> str:
        """Render the variant tag and its fields."""
        if isinstance(payload, Log):
            return f"{payload.TAG}/{payload.level.value} {payload.text}"
        elif isinstance(payload, Counter):
            return f"{payload.TAG} {payload.name}:{payload.total}"
        elif isinstance(payload, Gauge):
            fields = " ".join(
                f"{name}:{reading.value:f} {reading.unit}"
                for name, reading in payload.metrics
            )
            return f"{payload.TAG} {fields}".rstrip()
        elif isinstance(payload, Timer):
            return f"{payload.TAG} {format_duration(payload.duration)}"
        elif isinstance(payload, Event):
            return f"{payload.TAG} {payload.title}:{payload.body}"
        elif isinstance(payload, Unknown):
            fields = " ".join(f'{key}:"{value}"' for key, value in payload.tags)
            return f"{payload.TAG} {fields}".rstrip()
        else:
            return str(payload)

    def render(self, envelope: Envelope) -> str:
        """Render one envelope as a single line of text."""
        return " ".join(
            (
                self.format_timestamp(envelope.timestamp),
                self.format_origin(envelope),
                self.format_payload(envelope.payload),
            )
        )

    def render_text(self, envelope: Envelope) -> Text:
        """Render one envelope as styled Rich text with the same content."""
        payload = envelope.payload
        color = VARIANT_COLORS.get(type(payload), NORD_LIGHT)
        if isinstance(payload, Log):
            color = LEVEL_COLORS.get(payload.level, color)

        line = Text()
        line.append(self.format_timestamp(envelope.timestamp), style=f"dim {NORD_GRAY}")
        line.append(" ")
        line.append(self.format_origin(envelope), style=NORD_GRAY)
        line.append(" ")
        line.append(self.format_payload(payload), style=color)
        return line
