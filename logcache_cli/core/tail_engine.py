"""Poll-based tail engine.

Drives one-shot or continuous retrieval for a single source:

    INIT -> POLLING -> RENDERING -> (WAITING -> POLLING)* -> DONE | FAILED

Only one poll is ever in flight. Both the request and the inter-poll wait
race against a stop event, so ``stop()`` (or the optional deadline) ends
the session promptly without losing lines already written.
"""

import asyncio
from enum import Enum
from typing import List, Optional

from ..io.logger import get_logger
from .constants import TailDefaults
from .cursor import Cursor
from .envelopes import Envelope
from .exceptions import (
    InvalidArgumentsError,
    MalformedResponseError,
    RequestTimeoutError,
    UnreachableError,
)

logger = get_logger("tail_engine")


class TailState(Enum):
    """Lifecycle states of a tail session."""

    INIT = "init"
    POLLING = "polling"
    RENDERING = "rendering"
    WAITING = "waiting"
    DONE = "done"
    FAILED = "failed"


class TailEngine:
    """Fetch, order, dedup and render envelopes for one source."""

    def __init__(
        self,
        client,
        display,
        follow: bool = False,
        poll_interval: float = TailDefaults.POLL_INTERVAL,
        lines: int = TailDefaults.LINES,
        retention: float = TailDefaults.RETENTION,
    ):
        """Initialize the engine.

        Args:
            client: Poll client exposing ``async read(source_id, ...)``
            display: Output sink exposing ``write_header`` and
                ``write_envelopes``
            follow: Keep polling until stopped
            poll_interval: Seconds to wait between follow-mode polls
            lines: Envelopes requested by a poll without a start time
            retention: Seconds of dedup history kept behind the cursor
        """
        self.client = client
        self.display = display
        self.follow = follow
        self.poll_interval = poll_interval
        self.lines = lines
        self.retention = retention

        self.state = TailState.INIT
        self.cursor: Optional[Cursor] = None
        self.polls = 0
        self._stop_event = asyncio.Event()

    def stop(self) -> None:
        """Request the session to end after the current step."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def run(
        self,
        source_id: str,
        start_time: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> int:
        """Run a tail session.

        Args:
            source_id: Source to read
            start_time: Explicit lower bound in ns for the first poll; None
                asks for the most recent window
            deadline: Optional seconds after which the session stops

        Returns:
            Number of lines written

        Raises:
            InvalidArgumentsError: The source id is missing or empty
            UnreachableError: One-shot poll could not reach the server
            RequestTimeoutError: One-shot poll exceeded its deadline
            MalformedResponseError: One-shot poll returned an undecodable body
            SinkWriteError: Output could not be written (any mode)
        """
        self.state = TailState.INIT
        if not isinstance(source_id, str) or not source_id.strip():
            self.state = TailState.FAILED
            raise InvalidArgumentsError("Expected exactly one source id")

        self.cursor = Cursor(next_start=start_time, retention=self.retention)

        timer = None
        if deadline is not None:
            timer = asyncio.get_running_loop().call_later(deadline, self.stop)

        try:
            self.display.write_header(source_id)

            while not self.stopped:
                self.state = TailState.POLLING
                batch = await self._poll(source_id)

                if batch is not None:
                    self.state = TailState.RENDERING
                    fresh = self.cursor.advance(batch)
                    self.display.write_envelopes(fresh)

                if not self.follow:
                    break

                self.state = TailState.WAITING
                await self._wait()

            self.state = TailState.DONE
        finally:
            if timer is not None:
                timer.cancel()
            # Errors and cancellation both end the session
            if self.state != TailState.DONE:
                self.state = TailState.FAILED

        return self.display.lines_written

    async def _poll(self, source_id: str) -> Optional[List[Envelope]]:
        """Fetch one batch.

        Returns None when the session was stopped mid-request or when a
        transient failure was absorbed in follow mode.
        """
        if self.cursor.next_start is None:
            request = self.client.read(source_id, limit=self.lines, descending=True)
        else:
            request = self.client.read(source_id, start_time=self.cursor.next_start)

        self.polls += 1
        fetch = asyncio.ensure_future(request)
        stopper = asyncio.ensure_future(self._stop_event.wait())
        try:
            await asyncio.wait({fetch, stopper}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            fetch.cancel()
            raise
        finally:
            stopper.cancel()

        if not fetch.done():
            fetch.cancel()
            try:
                await fetch
            except asyncio.CancelledError:
                logger.debug("Cancelled in-flight poll")
            return None

        try:
            return fetch.result()
        except (UnreachableError, RequestTimeoutError) as e:
            if not self.follow:
                raise
            logger.warning(f"Poll failed, retrying: {e}")
        except MalformedResponseError as e:
            if not self.follow:
                raise
            logger.warning(f"Skipping batch: {e}")
        return None

    async def _wait(self) -> None:
        """Sleep for the poll interval unless stopped first."""
        stopper = asyncio.ensure_future(self._stop_event.wait())
        try:
            await asyncio.wait({stopper}, timeout=self.poll_interval)
        finally:
            stopper.cancel()
