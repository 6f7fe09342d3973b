"""Envelope types returned by log-cache.

An envelope is one timestamped telemetry record. Its payload is exactly one
of six variants; the variant classes below form a closed union that the
renderer and the dedup tracker match on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Mapping, Tuple, Union


class LogLevel(str, Enum):
    """Stream a log line was written to."""

    OUT = "OUT"
    ERR = "ERR"


@dataclass(frozen=True)
class Log:
    """Log line payload."""

    body: bytes
    level: LogLevel = LogLevel.OUT

    TAG = "LOG"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 with the trailing newline stripped."""
        return self.body.decode("utf-8", errors="replace").rstrip("\r\n")

    def key(self) -> Tuple[Hashable, ...]:
        return (self.level.value, self.body)


@dataclass(frozen=True)
class Counter:
    """Monotonic counter payload."""

    name: str
    total: int

    TAG = "COUNTER"

    def key(self) -> Tuple[Hashable, ...]:
        return (self.name, self.total)


@dataclass(frozen=True)
class GaugeValue:
    """A single gauge reading."""

    value: float
    unit: str = ""


@dataclass(frozen=True)
class Gauge:
    """Gauge payload holding one or more named readings.

    Metrics are kept as a tuple sorted by name so the payload stays hashable
    and renders in a stable order.
    """

    metrics: Tuple[Tuple[str, GaugeValue], ...] = ()

    TAG = "GAUGE"

    @classmethod
    def from_mapping(cls, metrics: Mapping[str, GaugeValue]) -> "Gauge":
        return cls(metrics=tuple(sorted(metrics.items(), key=lambda item: item[0])))

    def as_dict(self) -> Dict[str, GaugeValue]:
        return dict(self.metrics)

    def key(self) -> Tuple[Hashable, ...]:
        return self.metrics


@dataclass(frozen=True)
class Timer:
    """Timer payload; start and stop are nanoseconds since epoch."""

    name: str
    start: int
    stop: int

    TAG = "TIMER"

    @property
    def duration(self) -> int:
        """Elapsed nanoseconds."""
        return self.stop - self.start

    def key(self) -> Tuple[Hashable, ...]:
        return (self.name, self.start, self.stop)


@dataclass(frozen=True)
class Event:
    """Platform event payload."""

    title: str
    body: str

    TAG = "EVENT"

    def key(self) -> Tuple[Hashable, ...]:
        return (self.title, self.body)


@dataclass(frozen=True)
class Unknown:
    """Envelope whose payload type was not recognised; only its tags survive."""

    tags: Tuple[Tuple[str, str], ...] = ()

    TAG = "UNKNOWN"

    @classmethod
    def from_mapping(cls, tags: Mapping[str, str]) -> "Unknown":
        return cls(tags=tuple(sorted(tags.items(), key=lambda item: item[0])))

    def as_dict(self) -> Dict[str, str]:
        return dict(self.tags)

    def key(self) -> Tuple[Hashable, ...]:
        return self.tags


Payload = Union[Log, Counter, Gauge, Timer, Event, Unknown]

PAYLOAD_TYPES = (Log, Counter, Gauge, Timer, Event, Unknown)


@dataclass(frozen=True)
class Envelope:
    """One timestamped record for a source."""

    source_id: str
    timestamp: int
    payload: Payload
    instance_id: str = ""

    def __post_init__(self):
        if not isinstance(self.payload, PAYLOAD_TYPES):
            raise TypeError(
                f"Unsupported envelope payload: {type(self.payload).__name__}"
            )

    @property
    def variant(self) -> str:
        """Tag of the populated payload variant (LOG, COUNTER, ...)."""
        return self.payload.TAG

    @property
    def identity(self) -> Tuple[Hashable, ...]:
        """Key used to recognise an envelope seen in an earlier poll."""
        return (
            self.timestamp,
            self.variant,
            self.source_id,
            self.instance_id,
            self.payload.key(),
        )
