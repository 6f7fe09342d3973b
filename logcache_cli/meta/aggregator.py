"""Aggregate log-cache metadata with resolved source names."""

import re
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..core.constants import NANOSECONDS_PER_SECOND, MetaDefaults, Scopes
from ..core.exceptions import InvalidArgumentsError
from ..core.types import MetaInfo
from ..io.logger import get_logger

logger = get_logger("meta_aggregator")

GUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
)

# log-cache never returns more than this many envelopes per read
NOISE_READ_LIMIT = 1000


@dataclass
class MetaRow:
    """One line of the metadata table."""

    source_id: str
    name: str
    count: int
    expired: int
    cache_duration: int
    rate: Optional[int] = None


def validate_scope(scope: str) -> str:
    """Normalize a scope name, rejecting unknown values."""
    normalized = (scope or Scopes.ALL).strip().lower()
    if normalized not in Scopes.CHOICES:
        raise InvalidArgumentsError(
            "Scope must be 'platform', 'applications' or 'all'."
        )
    return normalized


class MetaAggregator:
    """Builds metadata rows for every cached source.

    Rows come in three groups, each sorted by display name: sources with a
    resolved name and GUID-shaped ids without one (``applications``), then
    every other id (``platform``).
    """

    def __init__(
        self,
        client,
        resolver=None,
        scope: str = Scopes.ALL,
        noise: bool = False,
        noise_window: float = MetaDefaults.NOISE_WINDOW,
        clock: Callable[[], int] = time.time_ns,
    ):
        """Initialize the aggregator.

        Args:
            client: log-cache client exposing ``meta()`` and ``read()``
            resolver: Optional name resolver exposing ``resolve(ids)``
            scope: One of platform, applications or all
            noise: Count envelopes received within ``noise_window``
            noise_window: Seconds of history counted for the rate column
            clock: Returns the current time in ns
        """
        self.client = client
        self.resolver = resolver
        self.scope = validate_scope(scope)
        self.noise = noise
        self.noise_window = noise_window
        self.clock = clock

    @property
    def include_applications(self) -> bool:
        return self.scope in (Scopes.APPLICATIONS, Scopes.ALL)

    @property
    def include_platform(self) -> bool:
        return self.scope in (Scopes.PLATFORM, Scopes.ALL)

    async def collect(self) -> List[MetaRow]:
        """Fetch metadata and names and build the table rows."""
        meta = await self.client.meta()
        if not meta:
            return []

        names = await self._resolve_names(meta)
        remaining = dict(meta)
        rows: List[MetaRow] = []

        named = sorted(
            ((name, guid) for guid, name in names.items() if guid in remaining),
        )
        for name, guid in named:
            info = remaining.pop(guid)
            if self.include_applications:
                rows.append(self._row(info, name))

        if self.include_applications:
            for source_id in sorted(remaining):
                if GUID_PATTERN.search(source_id):
                    rows.append(self._row(remaining[source_id], source_id))

        if self.include_platform:
            for source_id in sorted(remaining):
                if not GUID_PATTERN.search(source_id):
                    rows.append(self._row(remaining[source_id], source_id))

        if self.noise:
            await self._add_rates(rows)

        return rows

    async def _resolve_names(self, meta: Dict[str, MetaInfo]) -> Dict[str, str]:
        if self.resolver is None:
            return {}
        sources = await self.resolver.resolve(sorted(meta))
        return {source.guid: source.name for source in sources}

    async def _add_rates(self, rows: List[MetaRow]) -> None:
        end = self.clock()
        start = end - int(self.noise_window * NANOSECONDS_PER_SECOND)
        for row in rows:
            envelopes = await self.client.read(
                row.source_id, start_time=start, end_time=end, limit=NOISE_READ_LIMIT
            )
            row.rate = len(envelopes)
            logger.debug(f"{row.source_id}: {row.rate} envelope(s) in window")

    @staticmethod
    def _row(info: MetaInfo, name: str) -> MetaRow:
        return MetaRow(
            source_id=info.source_id,
            name=name,
            count=info.count,
            expired=info.expired,
            cache_duration=info.cache_duration,
        )
