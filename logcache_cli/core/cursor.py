"""Time cursor and duplicate suppression for tail sessions."""

from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from ..io.logger import get_logger
from .constants import NANOSECONDS_PER_SECOND, TailDefaults
from .envelopes import Envelope

logger = get_logger("cursor")


class Cursor:
    """Advancing lower time bound plus the identities already emitted.

    ``next_start`` is ``None`` until the first non-empty batch has been
    processed; callers treat that as "most recent window".
    """

    def __init__(
        self,
        next_start: Optional[int] = None,
        retention: float = TailDefaults.RETENTION,
    ):
        """Initialize the cursor.

        Args:
            next_start: Inclusive lower bound for the next poll, in ns
            retention: Seconds of dedup history kept behind ``next_start``
        """
        self.next_start = next_start
        self.retention_ns = int(retention * NANOSECONDS_PER_SECOND)
        self.seen: Dict[Tuple[Hashable, ...], int] = {}

    def advance(self, batch: Iterable[Envelope]) -> List[Envelope]:
        """Turn a raw poll batch into the net-new envelopes to emit.

        The batch is sorted by timestamp (stable, so ties keep server order),
        envelopes already seen are dropped, and the cursor moves past the
        newest timestamp in the batch.

        Args:
            batch: Envelopes in server order

        Returns:
            Net-new envelopes in ascending timestamp order
        """
        ordered = sorted(batch, key=lambda envelope: envelope.timestamp)
        if not ordered:
            return []

        fresh = []
        for envelope in ordered:
            identity = envelope.identity
            if identity in self.seen:
                continue
            self.seen[identity] = envelope.timestamp
            fresh.append(envelope)

        self.next_start = ordered[-1].timestamp + 1
        self._prune()

        dropped = len(ordered) - len(fresh)
        if dropped:
            logger.debug(f"Suppressed {dropped} duplicate envelope(s)")
        return fresh

    def _prune(self) -> None:
        """Forget identities that fell out of the retention window."""
        horizon = self.next_start - self.retention_ns
        stale = [key for key, timestamp in self.seen.items() if timestamp < horizon]
        for key in stale:
            del self.seen[key]
