"""Core types for source metadata."""

from dataclasses import dataclass

from .constants import NANOSECONDS_PER_SECOND


@dataclass(frozen=True)
class MetaInfo:
    """Cache statistics for one source id."""

    source_id: str
    count: int = 0
    expired: int = 0
    oldest_timestamp: int = 0
    newest_timestamp: int = 0

    @property
    def cache_duration(self) -> int:
        """Span of cached data in nanoseconds, truncated to whole seconds."""
        span = self.newest_timestamp - self.oldest_timestamp
        # Truncate toward zero in integer arithmetic
        if span >= 0:
            seconds = span // NANOSECONDS_PER_SECOND
        else:
            seconds = -(-span // NANOSECONDS_PER_SECOND)
        return seconds * NANOSECONDS_PER_SECOND


@dataclass(frozen=True)
class Source:
    """A source id and the human-readable name resolved for it."""

    guid: str
    name: str
